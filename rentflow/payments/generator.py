# backend/rentflow/payments/generator.py
"""
Recurring rent generator.

For every ACTIVE contract, make sure a PENDING RENT payment exists for each
monthly period from start_date up to today (bounded by end_date). Missed
periods are back-filled, so a run after downtime catches up.

A period counts as covered when any live (not CANCELLED/REFUNDED) payment of
the contract already starts in the same calendar month, whatever its type.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, List

from django.db import transaction
from django.db.models import Prefetch
from django.utils import timezone

from rentflow.common.dates import month_period, same_month
from rentflow.contracts.models import Contract, ContractStatus
from rentflow.payments.models import TERMINAL_STATUSES, Payment, PaymentStatus, PaymentType

logger = logging.getLogger(__name__)

AUTO_NOTE = "Generated automatically by the system."


@dataclass
class GenerationResult:
    today: date
    contracts_scanned: int = 0
    payments: List[Payment] = field(default_factory=list)
    dry_run: bool = False

    @property
    def created(self) -> int:
        return len(self.payments)


def _live_period_starts(contract: Contract) -> list[date]:
    return [p.period_start for p in contract.payments.all() if p.status not in TERMINAL_STATUSES and p.period_start]


def plan_contract_payments(contract: Contract, today: date) -> list[Payment]:
    """
    Unsaved payments missing for one contract. Pure: no queries beyond the
    contract's (prefetched) payments.
    """
    covered = _live_period_starts(contract)
    planned: list[Payment] = []

    offset = 0
    while True:
        period_start, period_end = month_period(contract.start_date, offset)
        if period_start > today or period_start > contract.end_date:
            break

        if not any(same_month(period_start, c) for c in covered):
            planned.append(
                Payment(
                    organization_id=contract.organization_id,
                    contract_id=contract.id,
                    tenant_id=contract.tenant_id,
                    amount=contract.monthly_rent,
                    type=PaymentType.RENT,
                    status=PaymentStatus.PENDING,
                    due_date=period_start,
                    period_start=period_start,
                    period_end=period_end,
                    notes=AUTO_NOTE,
                )
            )
            covered.append(period_start)

        offset += 1

    return planned


def _active_contracts() -> Iterable[Contract]:
    return (
        Contract.objects.select_for_update(of=("self",))
        .filter(status=ContractStatus.ACTIVE)
        .prefetch_related(
            Prefetch(
                "payments",
                queryset=Payment.objects.only("id", "contract_id", "status", "period_start"),
            )
        )
        .order_by("id")
    )


def generate_pending_payments(today: date | None = None, *, dry_run: bool = False) -> GenerationResult:
    """
    One generator run. The read and the bulk insert share a transaction and
    the ACTIVE contract rows stay locked until commit, so a concurrent run or
    a manual payment on the same contract waits instead of racing the check.

    Any error rolls back the whole batch and propagates to the caller.
    """
    # todayUTC
    today = today or timezone.now().date()
    result = GenerationResult(today=today, dry_run=dry_run)

    with transaction.atomic():
        for contract in _active_contracts():
            result.contracts_scanned += 1
            result.payments.extend(plan_contract_payments(contract, today))

        if result.payments and not dry_run:
            Payment.objects.bulk_create(result.payments)

    logger.info(
        "payment generator today=%s contracts=%d created=%d dry_run=%s",
        today,
        result.contracts_scanned,
        result.created,
        dry_run,
    )
    return result
