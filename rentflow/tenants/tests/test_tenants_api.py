# backend/rentflow/tenants/tests/test_tenants_api.py
import pytest

from rentflow.tenants.models import Tenant

pytestmark = pytest.mark.django_db


def _tenant(**overrides):
    body = {
        "first_name": "Carlos",
        "last_name": "Ruiz",
        "email": "carlos@example.com",
        "phone": "3100000000",
        "employment": {"employer": "ACME", "position": "Engineer", "income": 5000000},
        "credit_score": 700,
    }
    body.update(overrides)
    return body


def test_create_tenant(api_client, headers):
    res = api_client.post("/api/v1/tenants/", _tenant(), format="json", **headers)

    assert res.status_code == 201, res.content
    assert res.json()["status"] == "PENDING"
    assert Tenant.objects.get(email="carlos@example.com").employment["income"] == 5000000


def test_duplicate_email_in_same_org_conflicts(api_client, headers, tenant):
    res = api_client.post("/api/v1/tenants/", _tenant(email=tenant.email), format="json", **headers)

    assert res.status_code == 409
    assert res.json()["code"] == "TENANT_EMAIL_EXISTS"


def test_same_email_allowed_in_another_org(api_client, headers, other_organization):
    Tenant.objects.create(organization=other_organization, first_name="X", last_name="Y", email="carlos@example.com", phone="1")

    res = api_client.post("/api/v1/tenants/", _tenant(), format="json", **headers)

    assert res.status_code == 201


def test_credit_score_bounds(api_client, headers):
    res = api_client.post("/api/v1/tenants/", _tenant(credit_score=900), format="json", **headers)

    assert res.status_code == 400
    assert "credit_score" in res.json()["details"]


def test_delete_blocked_by_active_contract(api_client, headers, active_contract, tenant):
    res = api_client.delete(f"/api/v1/tenants/{tenant.id}/", **headers)

    assert res.status_code == 400
    assert res.json()["code"] == "TENANT_HAS_ACTIVE_CONTRACTS"


def test_list_reports_active_contracts(api_client, headers, active_contract):
    res = api_client.get("/api/v1/tenants/", **headers)

    row = res.json()["results"][0]
    assert row["active_contracts"] == 1
