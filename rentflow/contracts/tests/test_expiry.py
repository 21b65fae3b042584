# backend/rentflow/contracts/tests/test_expiry.py
from datetime import date
from decimal import Decimal
from io import StringIO

import pytest
from django.core.management import call_command

from rentflow.contracts.models import Contract, ContractStatus
from rentflow.contracts.services import expire_overdue_contracts
from rentflow.properties.models import PropertyStatus

pytestmark = pytest.mark.django_db


def _contract(org, prop, tenant, *, end, status=ContractStatus.ACTIVE):
    return Contract.objects.create(
        organization=org,
        property=prop,
        tenant=tenant,
        start_date=date(2023, 1, 1),
        end_date=end,
        monthly_rent=Decimal("100.00"),
        status=status,
    )


def test_only_active_contracts_past_end_date_expire(organization, rental_property, tenant):
    past = _contract(organization, rental_property, tenant, end=date(2024, 5, 31))
    ends_today = _contract(organization, rental_property, tenant, end=date(2024, 6, 1))
    draft = _contract(organization, rental_property, tenant, end=date(2024, 1, 31), status=ContractStatus.DRAFT)

    assert expire_overdue_contracts(today=date(2024, 6, 1)) == 1

    past.refresh_from_db()
    ends_today.refresh_from_db()
    draft.refresh_from_db()
    assert past.status == ContractStatus.EXPIRED
    assert ends_today.status == ContractStatus.ACTIVE
    assert draft.status == ContractStatus.DRAFT


def test_expiry_leaves_property_status_alone(organization, rental_property, tenant):
    rental_property.status = PropertyStatus.RENTED
    rental_property.save(update_fields=["status"])
    _contract(organization, rental_property, tenant, end=date(2024, 1, 31))

    expire_overdue_contracts(today=date(2024, 6, 1))

    rental_property.refresh_from_db()
    assert rental_property.status == PropertyStatus.RENTED


def test_second_sweep_is_a_no_op(organization, rental_property, tenant):
    _contract(organization, rental_property, tenant, end=date(2024, 1, 31))

    assert expire_overdue_contracts(today=date(2024, 6, 1)) == 1
    assert expire_overdue_contracts(today=date(2024, 6, 1)) == 0


def test_command_dry_run_reports_without_writing(organization, rental_property, tenant):
    c = _contract(organization, rental_property, tenant, end=date(2024, 1, 31))
    out = StringIO()

    call_command("expire_contracts", "--today", "2024-06-01", "--dry-run", stdout=out)

    assert "1" in out.getvalue()
    c.refresh_from_db()
    assert c.status == ContractStatus.ACTIVE
