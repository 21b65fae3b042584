# backend/rentflow/accounting/tests/test_accounting_api.py
from decimal import Decimal

import pytest

from rentflow.accounting.models import AccountingEntry
from rentflow.properties.models import Property

pytestmark = pytest.mark.django_db


def _entry(client, headers, **overrides):
    body = {"type": "INCOME", "concept": "Rent January", "amount": "900000.00", "date": "2024-01-15"}
    body.update(overrides)
    return client.post("/api/v1/accounting/", body, format="json", **headers)


def test_create_entry_links_property(api_client, headers, rental_property, admin):
    res = _entry(api_client, headers, property_id=str(rental_property.id))

    assert res.status_code == 201, res.content
    entry = AccountingEntry.objects.get(id=res.json()["id"])
    assert entry.property_id == rental_property.id
    assert entry.created_by_id == admin.id


def test_create_entry_rejects_foreign_property(api_client, headers, other_organization):
    foreign = Property.objects.create(organization=other_organization, name="Foreign", address="x", rent=Decimal("1"))

    res = _entry(api_client, headers, property_id=str(foreign.id))

    assert res.status_code == 400
    assert res.json()["code"] == "INVALID_PROPERTY"


def test_member_cannot_create_entry(member_client, headers):
    res = _entry(member_client, headers)

    assert res.status_code == 403
    assert res.json()["code"] == "INSUFFICIENT_PERMISSIONS"


def test_ledger_report_grouped_by_month(api_client, headers):
    _entry(api_client, headers, amount="900000.00", date="2024-01-15")
    _entry(api_client, headers, amount="900000.00", date="2024-02-15")
    _entry(api_client, headers, type="EXPENSE", concept="Plumber", amount="150000.00", date="2024-02-20")

    res = api_client.get("/api/v1/accounting/report/?group_by=month", **headers)

    assert res.status_code == 200, res.content
    body = res.json()
    assert Decimal(body["total_income"]) == Decimal("1800000.00")
    assert Decimal(body["total_expense"]) == Decimal("150000.00")
    assert Decimal(body["balance"]) == Decimal("1650000.00")
    assert set(body["grouped"]) == {"2024-01", "2024-02"}
    assert Decimal(body["grouped"]["2024-02"]["expense"]) == Decimal("150000.00")


def test_ledger_report_date_window(api_client, headers):
    _entry(api_client, headers, amount="100.00", date="2024-01-15")
    _entry(api_client, headers, amount="200.00", date="2024-03-15")

    res = api_client.get("/api/v1/accounting/report/?from=2024-02-01&to=2024-12-31", **headers)

    body = res.json()
    assert Decimal(body["total_income"]) == Decimal("200.00")
    assert body["grouped"] is None


def test_delete_entry(manager_client, headers):
    entry_id = _entry(manager_client, headers).json()["id"]

    res = manager_client.delete(f"/api/v1/accounting/{entry_id}/", **headers)

    assert res.status_code == 204
    assert not AccountingEntry.objects.filter(id=entry_id).exists()
