# backend/rentflow/organizations/tests/test_organizations_api.py
import pytest
from rest_framework.test import APIClient

from rentflow.activity.models import ActivityEntity, ActivityLog
from rentflow.conftest import client_for
from rentflow.organizations.models import Plan

pytestmark = pytest.mark.django_db


def test_admin_updates_settings_by_merging(api_client, organization):
    res = api_client.patch(
        f"/api/v1/organizations/{organization.id}/",
        {"name": "Acme Homes", "settings": {"currency": "COP"}},
        format="json",
    )

    assert res.status_code == 200, res.content
    organization.refresh_from_db()
    assert organization.name == "Acme Homes"
    assert organization.settings["currency"] == "COP"
    assert organization.settings["dateFormat"] == "DD/MM/YYYY"


def test_admin_cannot_raise_own_plan_limits(api_client, organization):
    api_client.patch(
        f"/api/v1/organizations/{organization.id}/",
        {"settings": {"limits": {"maxProperties": 9999}}},
        format="json",
    )

    organization.refresh_from_db()
    assert organization.settings["limits"]["maxProperties"] == 10


def test_unknown_currency_is_rejected(api_client, organization):
    res = api_client.patch(f"/api/v1/organizations/{organization.id}/", {"settings": {"currency": "XYZ"}}, format="json")

    assert res.status_code == 400
    assert res.json()["code"] == "VALIDATION_ERROR"


def test_cannot_read_another_organization(api_client, other_organization):
    res = api_client.get(f"/api/v1/organizations/{other_organization.id}/")

    assert res.status_code == 403
    assert res.json()["code"] == "ORGANIZATION_ACCESS_DENIED"


def test_listing_is_super_admin_only(api_client, super_admin, organization, other_organization):
    assert api_client.get("/api/v1/organizations/").status_code == 403

    res = client_for(super_admin).get("/api/v1/organizations/")
    assert res.status_code == 200
    assert res.json()["count"] == 3


def test_super_admin_deactivates_organization(super_admin, organization):
    res = client_for(super_admin).post(f"/api/v1/organizations/{organization.id}/deactivate/")

    assert res.status_code == 200
    organization.refresh_from_db()
    assert organization.is_active is False


def test_public_plans_need_no_auth(plans):
    res = APIClient().get("/api/v1/plans/public/")

    assert res.status_code == 200
    assert [p["id"] for p in res.json()] == ["plan-basic", "plan-professional", "plan-enterprise"]


def test_plan_id_conflict(super_admin, plans):
    res = client_for(super_admin).post(
        "/api/v1/super-admin/plans/",
        {"id": "plan-basic", "name": "Again", "price": "1.00"},
        format="json",
    )

    assert res.status_code == 409
    assert res.json()["code"] == "PLAN_ID_CONFLICT"


def test_bulk_plan_update_logs_activity(super_admin, plans):
    res = client_for(super_admin).patch(
        "/api/v1/super-admin/plans/bulk/",
        {"plans": [{"id": "plan-basic", "price": "35.00"}, {"id": "plan-enterprise", "name": "Enterprise+"}]},
        format="json",
    )

    assert res.status_code == 200, res.content
    assert str(Plan.objects.get(id="plan-basic").price) == "35.00"
    assert ActivityLog.objects.filter(entity_type=ActivityEntity.PLAN).count() == 2


def test_bulk_plan_update_is_atomic(super_admin, plans):
    res = client_for(super_admin).patch(
        "/api/v1/super-admin/plans/bulk/",
        {"plans": [{"id": "plan-basic", "price": "35.00"}, {"id": "plan-missing", "price": "1.00"}]},
        format="json",
    )

    assert res.status_code == 404
    assert str(Plan.objects.get(id="plan-basic").price) == "29.00"
