# backend/rentflow/contracts/tests/test_contracts_api.py
from datetime import date

import pytest

from rentflow.contracts.models import Contract
from rentflow.payments.generator import generate_pending_payments
from rentflow.properties.models import PropertyStatus

pytestmark = pytest.mark.django_db


def _payload(prop, tenant, **overrides):
    body = {
        "property_id": str(prop.id),
        "tenant_id": str(tenant.id),
        "start_date": "2024-01-01",
        "end_date": "2024-12-31",
        "monthly_rent": "1200.00",
        "status": "ACTIVE",
    }
    body.update(overrides)
    return body


def test_active_contract_marks_property_rented(api_client, headers, rental_property, tenant):
    res = api_client.post("/api/v1/contracts/", _payload(rental_property, tenant), format="json", **headers)

    assert res.status_code == 201, res.content
    rental_property.refresh_from_db()
    assert rental_property.status == PropertyStatus.RENTED


def test_end_before_start_is_a_validation_error(api_client, headers, rental_property, tenant):
    res = api_client.post(
        "/api/v1/contracts/",
        _payload(rental_property, tenant, start_date="2024-06-01", end_date="2024-01-01"),
        format="json",
        **headers,
    )
    assert res.status_code == 400
    assert res.json()["code"] == "VALIDATION_ERROR"


def test_property_of_another_org_is_rejected(api_client, other_organization, rental_property, tenant):
    from rentflow.properties.models import Property

    foreign = Property.objects.create(organization=other_organization, name="Elsewhere", address="x")
    res = api_client.post(
        "/api/v1/contracts/",
        _payload(foreign, tenant),
        format="json",
        HTTP_X_ORGANIZATION_ID=str(tenant.organization_id),
    )
    assert res.status_code == 400
    assert res.json()["code"] == "INVALID_PROPERTY"


def test_delete_with_payments_is_blocked(api_client, headers, active_contract):
    generate_pending_payments(today=date(2024, 2, 1))

    res = api_client.delete(f"/api/v1/contracts/{active_contract.id}/", **headers)

    assert res.status_code == 400
    assert res.json()["code"] == "CONTRACT_HAS_PAYMENTS"
    assert Contract.objects.filter(id=active_contract.id).exists()


def test_delete_frees_the_property(api_client, headers, active_contract, rental_property):
    rental_property.status = PropertyStatus.RENTED
    rental_property.save(update_fields=["status"])

    res = api_client.delete(f"/api/v1/contracts/{active_contract.id}/", **headers)

    assert res.status_code == 204
    rental_property.refresh_from_db()
    assert rental_property.status == PropertyStatus.AVAILABLE


def test_detail_includes_payments(api_client, headers, active_contract):
    generate_pending_payments(today=date(2024, 2, 20))

    res = api_client.get(f"/api/v1/contracts/{active_contract.id}/", **headers)

    assert res.status_code == 200
    assert len(res.json()["payments"]) == 2
