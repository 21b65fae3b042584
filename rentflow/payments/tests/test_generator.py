# backend/rentflow/payments/tests/test_generator.py
from datetime import date
from decimal import Decimal

import pytest

from rentflow.contracts.models import Contract, ContractStatus
from rentflow.payments.generator import generate_pending_payments
from rentflow.payments.models import Payment, PaymentStatus, PaymentType

pytestmark = pytest.mark.django_db


def _rent(contract):
    return Payment.objects.filter(contract=contract, type=PaymentType.RENT).order_by("period_start", "created_at")


def test_backfills_every_month_up_to_today(active_contract):
    result = generate_pending_payments(today=date(2024, 3, 20))

    assert result.created == 3
    rows = list(_rent(active_contract))
    assert [p.period_start for p in rows] == [date(2024, 1, 15), date(2024, 2, 15), date(2024, 3, 15)]
    assert [p.period_end for p in rows] == [date(2024, 2, 14), date(2024, 3, 14), date(2024, 4, 14)]
    for p in rows:
        assert p.amount == Decimal("900000.00")
        assert p.status == PaymentStatus.PENDING
        assert p.due_date == p.period_start
        assert p.tenant_id == active_contract.tenant_id
        assert p.organization_id == active_contract.organization_id


def test_immediate_rerun_creates_nothing(active_contract):
    generate_pending_payments(today=date(2024, 3, 20))
    again = generate_pending_payments(today=date(2024, 3, 20))

    assert again.created == 0
    assert _rent(active_contract).count() == 3


def test_never_two_live_payments_in_one_month(active_contract):
    generate_pending_payments(today=date(2024, 6, 1))
    generate_pending_payments(today=date(2024, 6, 30))

    live = _rent(active_contract).exclude(status__in=[PaymentStatus.CANCELLED, PaymentStatus.REFUNDED])
    months = [(p.period_start.year, p.period_start.month) for p in live]
    assert len(months) == len(set(months))


def test_back_fill_three_months(organization, rental_property, tenant):
    contract = Contract.objects.create(
        organization=organization,
        property=rental_property,
        tenant=tenant,
        start_date=date(2024, 2, 10),
        end_date=date(2025, 2, 9),
        monthly_rent=Decimal("500.00"),
        status=ContractStatus.ACTIVE,
    )
    result = generate_pending_payments(today=date(2024, 5, 10))

    assert result.created == 4
    assert all(p.amount == Decimal("500.00") for p in _rent(contract))


def test_stops_at_end_date(organization, rental_property, tenant):
    contract = Contract.objects.create(
        organization=organization,
        property=rental_property,
        tenant=tenant,
        start_date=date(2024, 1, 1),
        end_date=date(2024, 3, 31),
        monthly_rent=Decimal("100.00"),
        status=ContractStatus.ACTIVE,
    )
    generate_pending_payments(today=date(2024, 12, 1))

    starts = [p.period_start for p in _rent(contract)]
    assert starts == [date(2024, 1, 1), date(2024, 2, 1), date(2024, 3, 1)]
    assert all(s <= contract.end_date for s in starts)


def test_cancelled_month_is_regenerated(active_contract):
    generate_pending_payments(today=date(2024, 1, 20))
    first = _rent(active_contract).get()
    first.status = PaymentStatus.CANCELLED
    first.save(update_fields=["status"])

    result = generate_pending_payments(today=date(2024, 1, 20))

    assert result.created == 1
    fresh = _rent(active_contract).exclude(id=first.id).get()
    assert fresh.period_start == date(2024, 1, 15)
    assert fresh.status == PaymentStatus.PENDING


def test_non_active_contracts_are_ignored(active_contract):
    active_contract.status = ContractStatus.DRAFT
    active_contract.save(update_fields=["status"])

    result = generate_pending_payments(today=date(2024, 3, 20))

    assert result.contracts_scanned == 0
    assert result.created == 0


def _existing(contract, type_, status, day):
    return Payment.objects.create(
        organization=contract.organization,
        contract=contract,
        tenant=contract.tenant,
        amount=Decimal("150000.00"),
        type=type_,
        status=status,
        due_date=day,
        period_start=day,
        period_end=day,
    )


def test_existing_payment_of_any_type_covers_its_month(active_contract):
    _existing(active_contract, PaymentType.UTILITY, PaymentStatus.PAID, date(2024, 2, 1))

    result = generate_pending_payments(today=date(2024, 3, 20))

    assert result.created == 2
    assert sorted(p.period_start for p in result.payments) == [date(2024, 1, 15), date(2024, 3, 15)]


def test_paid_deposit_in_start_month_covers_it(active_contract):
    _existing(active_contract, PaymentType.DEPOSIT, PaymentStatus.PAID, date(2024, 1, 15))

    result = generate_pending_payments(today=date(2024, 1, 20))

    assert result.created == 0
    assert _rent(active_contract).count() == 0


def test_cancelled_deposit_does_not_cover(active_contract):
    _existing(active_contract, PaymentType.DEPOSIT, PaymentStatus.CANCELLED, date(2024, 1, 15))

    result = generate_pending_payments(today=date(2024, 1, 20))

    assert result.created == 1


def test_dry_run_writes_nothing(active_contract):
    result = generate_pending_payments(today=date(2024, 3, 20), dry_run=True)

    assert result.created == 3
    assert _rent(active_contract).count() == 0


def test_end_of_month_anchor_does_not_drift(organization, rental_property, tenant):
    contract = Contract.objects.create(
        organization=organization,
        property=rental_property,
        tenant=tenant,
        start_date=date(2024, 1, 31),
        end_date=date(2024, 12, 31),
        monthly_rent=Decimal("100.00"),
        status=ContractStatus.ACTIVE,
    )
    generate_pending_payments(today=date(2024, 4, 1))

    rows = list(_rent(contract))
    assert [p.period_start for p in rows] == [date(2024, 1, 31), date(2024, 2, 29), date(2024, 3, 31)]
    assert rows[0].period_end == date(2024, 2, 28)
