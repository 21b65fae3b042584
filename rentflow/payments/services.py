# backend/rentflow/payments/services.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Optional
from uuid import UUID

from django.db import transaction
from rest_framework.exceptions import ValidationError

from rentflow.activity.models import ActivityAction, ActivityEntity
from rentflow.activity.services import ActivityService
from rentflow.common.api.exceptions import BusinessRuleError, ConflictError
from rentflow.common.dates import month_period
from rentflow.contracts.models import Contract, ContractStatus
from rentflow.payments.models import (
    REGENERABLE_TYPES,
    TERMINAL_STATUSES,
    Payment,
    PaymentStatus,
    PaymentType,
)
from rentflow.tenants.models import Tenant

logger = logging.getLogger(__name__)

PAYMENT_FIELDS = (
    "amount",
    "type",
    "status",
    "method",
    "due_date",
    "paid_date",
    "notes",
)


@dataclass(frozen=True)
class FinalStatusResult:
    payment: Payment
    regenerated: Optional[Payment]


def _lock_contract(*, organization_id: UUID, contract_id: UUID) -> Contract:
    contract = Contract.objects.select_for_update().filter(id=contract_id, organization_id=organization_id).first()
    if contract is None:
        raise BusinessRuleError(
            "Contract not found or does not belong to organization.",
            code="INVALID_CONTRACT",
        )
    return contract


def _derive_period(*, contract: Contract, payment_type: str, due_date):
    """
    RENT: the period starts the day after the last RENT period ended, or on
    the due date for the first one, and spans one month.
    Other types: a one-day period on the due date.
    """
    if payment_type != PaymentType.RENT:
        return due_date, due_date

    last_rent = (
        Payment.objects.filter(contract=contract, type=PaymentType.RENT)
        .exclude(period_end__isnull=True)
        .order_by("-due_date", "-created_at")
        .first()
    )
    anchor = last_rent.period_end + timedelta(days=1) if last_rent else due_date
    return month_period(anchor)


def _ensure_month_free(contract: Contract, day) -> None:
    clash = Payment.objects.filter(
        contract=contract,
        type=PaymentType.RENT,
        period_start__year=day.year,
        period_start__month=day.month,
    ).exclude(status__in=TERMINAL_STATUSES)
    if clash.exists():
        raise ConflictError(
            f"A rent payment for {day:%Y-%m} already exists.",
            code="PAYMENT_PERIOD_EXISTS",
        )


class PaymentService:
    @staticmethod
    @transaction.atomic
    def create(*, organization_id: UUID, actor_id: UUID | None, data: dict[str, Any]) -> Payment:
        # Same row lock as the generator, so the two never interleave.
        contract = _lock_contract(organization_id=organization_id, contract_id=data["contract_id"])

        tenant_id = data.get("tenant_id") or contract.tenant_id
        if not Tenant.objects.filter(id=tenant_id, organization_id=organization_id).exists():
            raise BusinessRuleError(
                "Tenant not found or does not belong to organization.",
                code="INVALID_TENANT",
            )

        payment_type = data.get("type", PaymentType.RENT)
        status = data.get("status", PaymentStatus.PENDING)
        live_rent = payment_type == PaymentType.RENT and status not in TERMINAL_STATUSES

        # The due month itself must be free before the period is carried forward
        if live_rent:
            _ensure_month_free(contract, data["due_date"])

        period_start, period_end = _derive_period(contract=contract, payment_type=payment_type, due_date=data["due_date"])
        if live_rent and period_start != data["due_date"]:
            _ensure_month_free(contract, period_start)

        payment = Payment(
            organization_id=organization_id,
            contract=contract,
            tenant_id=tenant_id,
            period_start=period_start,
            period_end=period_end,
        )
        for field in PAYMENT_FIELDS:
            if field in data:
                setattr(payment, field, data[field])
        payment.save()

        ActivityService.log(
            organization_id=organization_id,
            entity_type=ActivityEntity.PAYMENT,
            entity_id=payment.id,
            action=ActivityAction.CREATE,
            description=f"{payment.type} payment of {payment.amount} registered for contract {contract.id}.",
            user_id=actor_id,
        )
        logger.info("payment created id=%s contract=%s org=%s", payment.id, contract.id, organization_id)
        return payment

    @staticmethod
    @transaction.atomic
    def update(*, organization_id: UUID, payment_id: UUID, actor_id: UUID | None, data: dict[str, Any]) -> Payment:
        payment = Payment.objects.select_for_update().get(id=payment_id, organization_id=organization_id)

        if payment.is_final:
            raise BusinessRuleError(
                f"Payment is already in a final state ({payment.status}).",
                code="PAYMENT_ALREADY_FINAL",
            )
        if data.get("status") in TERMINAL_STATUSES:
            raise ValidationError({"status": "Use PATCH to cancel or refund a payment."})

        changed = [f for f in PAYMENT_FIELDS if f in data]
        for field in changed:
            setattr(payment, field, data[field])
        if changed:
            payment.save(update_fields=changed + ["updated_at"])

        ActivityService.log(
            organization_id=organization_id,
            entity_type=ActivityEntity.PAYMENT,
            entity_id=payment.id,
            action=ActivityAction.UPDATE,
            description=f"Payment {payment.id} updated ({payment.status}).",
            user_id=actor_id,
        )
        return payment

    @staticmethod
    @transaction.atomic
    def delete(*, organization_id: UUID, payment_id: UUID, actor_id: UUID | None) -> None:
        payment = Payment.objects.select_for_update().get(id=payment_id, organization_id=organization_id)
        payment.delete()

        ActivityService.log(
            organization_id=organization_id,
            entity_type=ActivityEntity.PAYMENT,
            entity_id=payment_id,
            action=ActivityAction.DELETE,
            description=f"Payment {payment_id} deleted.",
            user_id=actor_id,
        )
        logger.info("payment deleted id=%s org=%s", payment_id, organization_id)

    @staticmethod
    @transaction.atomic
    def set_final_status(
        *,
        organization_id: UUID,
        payment_id: UUID,
        status: str,
        actor_id: UUID | None,
    ) -> FinalStatusResult:
        """
        Move a payment to CANCELLED or REFUNDED.

        Refunding a RENT/DEPOSIT payment of a still-ACTIVE contract re-opens
        the obligation: a PENDING copy with the same period is created in the
        same transaction.
        """
        if status not in TERMINAL_STATUSES:
            raise ValidationError({"status": "Status must be CANCELLED or REFUNDED."})

        payment = (
            Payment.objects.select_for_update()
            .select_related("contract")
            .get(id=payment_id, organization_id=organization_id)
        )
        if payment.is_final:
            raise BusinessRuleError(
                f"Payment is already in a final state ({payment.status}).",
                code="PAYMENT_ALREADY_FINAL",
            )

        payment.status = status
        payment.save(update_fields=["status", "updated_at"])

        regenerated = None
        if status == PaymentStatus.REFUNDED and payment.type in REGENERABLE_TYPES:
            if payment.contract.status == ContractStatus.ACTIVE:
                regenerated = Payment.objects.create(
                    organization_id=payment.organization_id,
                    contract_id=payment.contract_id,
                    tenant_id=payment.tenant_id,
                    amount=payment.amount,
                    due_date=payment.due_date,
                    type=payment.type,
                    status=PaymentStatus.PENDING,
                    period_start=payment.period_start,
                    period_end=payment.period_end,
                    notes=f"Regenerated automatically after refund of payment #{str(payment.id)[-6:]}.",
                )

        ActivityService.log(
            organization_id=organization_id,
            entity_type=ActivityEntity.PAYMENT,
            entity_id=payment.id,
            action=ActivityAction.REFUND if status == PaymentStatus.REFUNDED else ActivityAction.CANCEL,
            description=f"Payment {payment.id} marked {status}.",
            user_id=actor_id,
            metadata={"regenerated_payment_id": str(regenerated.id)} if regenerated else None,
        )
        logger.info("payment %s -> %s regenerated=%s", payment.id, status, bool(regenerated))
        return FinalStatusResult(payment=payment, regenerated=regenerated)
