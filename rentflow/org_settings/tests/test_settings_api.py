# backend/rentflow/org_settings/tests/test_settings_api.py
from datetime import timedelta

import pytest
from django.utils import timezone

from rentflow.organizations.models import Subscription, SubscriptionStatus

pytestmark = pytest.mark.django_db


def test_members_read_organization_settings(member_client, headers, organization):
    res = member_client.get("/api/v1/settings/organization/", **headers)

    assert res.status_code == 200
    assert res.json()["id"] == str(organization.id)


def test_only_admin_writes_organization_settings(member_client, api_client, headers, organization):
    denied = member_client.put("/api/v1/settings/organization/", {"name": "Nope"}, format="json", **headers)
    assert denied.status_code == 403

    ok = api_client.put("/api/v1/settings/organization/", {"settings": {"language": "en"}}, format="json", **headers)
    assert ok.status_code == 200, ok.content
    assert ok.json()["organization"]["settings"]["language"] == "en"


def test_preferences_merge_over_defaults(member_client, headers, member):
    initial = member_client.get("/api/v1/settings/preferences/", **headers).json()
    assert initial["theme"] == "light"
    assert initial["notifications"]["email"] is True

    res = member_client.put(
        "/api/v1/settings/preferences/",
        {"theme": "dark", "notifications": {"email": False}},
        format="json",
        **headers,
    )

    assert res.status_code == 200
    prefs = res.json()["preferences"]
    assert prefs["theme"] == "dark"
    assert prefs["notifications"]["email"] is False
    assert prefs["notifications"]["push"] is True
    member.refresh_from_db()
    assert member.preferences["theme"] == "dark"


def test_subscription_not_found(api_client, headers):
    res = api_client.get("/api/v1/settings/subscription/", **headers)

    assert res.status_code == 404
    assert res.json()["code"] == "SUBSCRIPTION_NOT_FOUND"


def test_subscription_is_latest(api_client, headers, organization, plans):
    now = timezone.now()
    Subscription.objects.create(
        organization=organization,
        plan=plans[0],
        status=SubscriptionStatus.ACTIVE,
        current_period_start=now,
        current_period_end=now + timedelta(days=30),
    )

    res = api_client.get("/api/v1/settings/subscription/", **headers)

    assert res.status_code == 200
    assert res.json()["status"] == "ACTIVE"


def test_export_is_a_full_dump(api_client, headers, active_contract):
    res = api_client.get("/api/v1/settings/export/", **headers)

    assert res.status_code == 200
    assert res["Content-Disposition"].startswith('attachment; filename="rentflow-export-')
    body = res.json()
    assert body["organization"]["id"] == str(active_contract.organization_id)
    assert len(body["contracts"]) == 1
    assert len(body["tenants"]) == 1
    assert body["version"]
    assert "password" not in body["users"][0]


def test_export_is_admin_only(manager_client, headers):
    assert manager_client.get("/api/v1/settings/export/", **headers).status_code == 403
