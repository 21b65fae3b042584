# backend/rentflow/payments/tests/test_payment_services.py
from datetime import date
from decimal import Decimal

import pytest
from rest_framework.exceptions import ValidationError

from rentflow.activity.models import ActivityAction, ActivityLog
from rentflow.common.api.exceptions import BusinessRuleError, ConflictError
from rentflow.contracts.models import ContractStatus
from rentflow.payments.generator import generate_pending_payments
from rentflow.payments.models import Payment, PaymentStatus, PaymentType
from rentflow.payments.services import PaymentService

pytestmark = pytest.mark.django_db


def _create(contract, admin, **overrides):
    data = {
        "contract_id": contract.id,
        "amount": Decimal("900000.00"),
        "type": PaymentType.RENT,
        "due_date": date(2024, 1, 15),
    }
    data.update(overrides)
    return PaymentService.create(organization_id=contract.organization_id, actor_id=admin.id, data=data)


def test_first_rent_payment_spans_one_month(active_contract, admin):
    p = _create(active_contract, admin)

    assert p.period_start == date(2024, 1, 15)
    assert p.period_end == date(2024, 2, 14)
    assert p.tenant_id == active_contract.tenant_id
    assert p.status == PaymentStatus.PENDING


def test_next_rent_payment_continues_after_last_period(active_contract, admin):
    _create(active_contract, admin)
    second = _create(active_contract, admin, due_date=date(2024, 2, 15))

    assert second.period_start == date(2024, 2, 15)
    assert second.period_end == date(2024, 3, 14)


def test_non_rent_payment_period_is_the_due_date(active_contract, admin):
    p = _create(active_contract, admin, type=PaymentType.LATE_FEE, amount=Decimal("50000.00"), due_date=date(2024, 3, 2))

    assert p.period_start == p.period_end == date(2024, 3, 2)


def test_rent_for_a_covered_month_conflicts(active_contract, admin):
    generate_pending_payments(today=date(2024, 1, 20))

    with pytest.raises(ConflictError) as exc:
        _create(active_contract, admin, due_date=date(2024, 1, 20))
    assert exc.value.detail.code == "PAYMENT_PERIOD_EXISTS"
    # not silently booked as the next period either
    assert list(Payment.objects.filter(contract=active_contract).values_list("period_start", flat=True)) == [
        date(2024, 1, 15)
    ]


def test_contract_of_another_organization_is_rejected(active_contract, admin, other_organization):
    with pytest.raises(BusinessRuleError) as exc:
        PaymentService.create(
            organization_id=other_organization.id,
            actor_id=admin.id,
            data={"contract_id": active_contract.id, "amount": Decimal("1"), "type": PaymentType.RENT, "due_date": date(2024, 1, 1)},
        )
    assert exc.value.detail.code == "INVALID_CONTRACT"


def test_refund_of_rent_regenerates_pending_copy(active_contract, admin):
    p = _create(active_contract, admin, status=PaymentStatus.PAID, paid_date=date(2024, 1, 16))

    result = PaymentService.set_final_status(
        organization_id=active_contract.organization_id,
        payment_id=p.id,
        status=PaymentStatus.REFUNDED,
        actor_id=admin.id,
    )

    assert result.payment.status == PaymentStatus.REFUNDED
    assert result.regenerated is not None
    assert result.regenerated.status == PaymentStatus.PENDING
    assert result.regenerated.period_start == p.period_start
    assert result.regenerated.period_end == p.period_end
    assert result.regenerated.amount == p.amount
    assert ActivityLog.objects.filter(entity_id=str(p.id), action=ActivityAction.REFUND).exists()


def test_refund_on_inactive_contract_does_not_regenerate(active_contract, admin):
    p = _create(active_contract, admin, status=PaymentStatus.PAID)
    active_contract.status = ContractStatus.TERMINATED
    active_contract.save(update_fields=["status"])

    result = PaymentService.set_final_status(
        organization_id=active_contract.organization_id,
        payment_id=p.id,
        status=PaymentStatus.REFUNDED,
        actor_id=admin.id,
    )
    assert result.regenerated is None


def test_cancel_does_not_regenerate_and_is_final(active_contract, admin):
    p = _create(active_contract, admin)

    result = PaymentService.set_final_status(
        organization_id=active_contract.organization_id,
        payment_id=p.id,
        status=PaymentStatus.CANCELLED,
        actor_id=admin.id,
    )
    assert result.regenerated is None

    with pytest.raises(BusinessRuleError) as exc:
        PaymentService.set_final_status(
            organization_id=active_contract.organization_id,
            payment_id=p.id,
            status=PaymentStatus.REFUNDED,
            actor_id=admin.id,
        )
    assert exc.value.detail.code == "PAYMENT_ALREADY_FINAL"


def test_update_cannot_move_to_terminal_status(active_contract, admin):
    p = _create(active_contract, admin)

    with pytest.raises(ValidationError):
        PaymentService.update(
            organization_id=active_contract.organization_id,
            payment_id=p.id,
            actor_id=admin.id,
            data={"status": PaymentStatus.CANCELLED},
        )


def test_update_marks_paid(active_contract, admin):
    p = _create(active_contract, admin)

    updated = PaymentService.update(
        organization_id=active_contract.organization_id,
        payment_id=p.id,
        actor_id=admin.id,
        data={"status": PaymentStatus.PAID, "paid_date": date(2024, 1, 20), "method": "CASH"},
    )
    assert updated.status == PaymentStatus.PAID
    assert Payment.objects.get(id=p.id).paid_date == date(2024, 1, 20)
