# backend/rentflow/reports/tests/test_reports.py
from datetime import date
from decimal import Decimal

import pytest

from rentflow.maintenance.models import MaintenanceRequest
from rentflow.payments.models import Payment, PaymentStatus, PaymentType
from rentflow.reports.services import dashboard_report, financial_report, record_count, to_csv

pytestmark = pytest.mark.django_db


@pytest.fixture
def ledger(active_contract):
    def pay(day, status, amount="900000.00", type_=PaymentType.RENT):
        return Payment.objects.create(
            organization_id=active_contract.organization_id,
            contract=active_contract,
            tenant_id=active_contract.tenant_id,
            amount=Decimal(amount),
            type=type_,
            status=status,
            due_date=day,
            period_start=day if type_ == PaymentType.RENT else None,
        )

    return [
        pay(date(2024, 1, 15), PaymentStatus.PAID),
        pay(date(2024, 2, 15), PaymentStatus.PENDING),
        pay(date(2024, 3, 15), PaymentStatus.PENDING),
        pay(date(2024, 1, 15), PaymentStatus.PAID, amount="1800000.00", type_=PaymentType.DEPOSIT),
    ]


def test_dashboard_revenue_buckets(organization, ledger):
    report = dashboard_report(organization_id=organization.id, today=date(2024, 3, 1))

    revenue = report["revenue"]
    assert revenue["total_collected"] == Decimal("2700000.00")
    assert revenue["total_pending"] == Decimal("1800000.00")
    # only the February rent is past due on 2024-03-01
    assert revenue["total_overdue"] == Decimal("900000.00")
    assert revenue["total_revenue"] == Decimal("4500000.00")
    assert report["overview"]["total_payments"] == 4
    assert report["overview"]["active_contracts"] == 1


def test_dashboard_counts_by_lowercase_status(organization, rental_property):
    report = dashboard_report(organization_id=organization.id)

    assert report["properties"]["by_status"] == {rental_property.status.lower(): 1}


def test_financial_report_range_and_maintenance(organization, ledger, rental_property):
    MaintenanceRequest.objects.create(
        organization=organization,
        property=rental_property,
        title="Roof",
        description="Leak",
        actual_cost=Decimal("200000.00"),
    )

    report = financial_report(
        organization_id=organization.id,
        start_date=date(2024, 2, 1),
        end_date=date(2024, 3, 31),
    )

    summary = report["summary"]
    assert summary["total_revenue"] == Decimal("1800000.00")
    assert summary["total_payments"] == 2
    assert summary["maintenance_costs"] == Decimal("200000.00")
    assert summary["net_revenue"] == Decimal("1600000.00")
    assert [row["status"] for row in report["payments_by_status"]] == ["pending"]
    assert report["maintenance_stats"]["request_count"] == 1


def test_csv_writes_one_block_per_section():
    text = to_csv({"properties": [{"id": "1", "name": "A", "features": {"pool": True}}], "tenants": []})

    lines = text.splitlines()
    assert lines[0] == "# properties"
    assert lines[1] == "id,name,features"
    assert '"{""pool"": true}"' in lines[2]
    assert "# tenants" in lines
    assert record_count({"a": [1, 2], "b": [3]}) == 3


def test_dashboard_endpoint(member_client, headers, ledger):
    res = member_client.get("/api/v1/reports/dashboard/", **headers)

    assert res.status_code == 200, res.content
    body = res.json()
    assert set(body) >= {"overview", "properties", "tenants", "revenue", "maintenance"}


def test_financial_endpoint_rejects_bad_group(api_client, headers):
    res = api_client.get("/api/v1/reports/financial/?group_by=week", **headers)

    assert res.status_code == 400
    assert res.json()["code"] == "VALIDATION_ERROR"


@pytest.mark.parametrize("path", ["properties", "tenants", "maintenance", "units"])
def test_listing_reports_respond(api_client, headers, active_contract, path):
    res = api_client.get(f"/api/v1/reports/{path}/", **headers)

    assert res.status_code == 200, res.content
    assert "summary" in res.json()


def test_export_csv_is_attachment(api_client, headers, ledger):
    res = api_client.get("/api/v1/reports/export/?type=all&format=csv", **headers)

    assert res.status_code == 200, res.content
    assert res["Content-Type"].startswith("text/csv")
    assert res["Content-Disposition"].startswith('attachment; filename="rentflow-all-export-')
    body = res.content.decode()
    assert "# payments" in body
    assert "# maintenance" in body


def test_export_json_payload(api_client, headers, tenant):
    res = api_client.get("/api/v1/reports/export/?type=tenants", **headers)

    assert res.status_code == 200
    body = res.json()
    assert body["export_type"] == "tenants"
    assert body["format"] == "json"
    assert [t["email"] for t in body["data"]["tenants"]] == [tenant.email]


def test_export_is_staff_only(member_client, headers):
    res = member_client.get("/api/v1/reports/export/?type=properties", **headers)

    assert res.status_code == 403
    assert res.json()["code"] == "INSUFFICIENT_PERMISSIONS"
