# backend/rentflow/accounting/services.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, Dict, Optional
from uuid import UUID

from django.db import transaction
from django.db.models import DecimalField, Q, Sum, Value
from django.db.models.functions import Coalesce, TruncDay, TruncMonth

from rentflow.accounting.models import AccountingEntry, EntryType
from rentflow.common.api.exceptions import BusinessRuleError
from rentflow.contracts.models import Contract
from rentflow.properties.models import Property, Unit

ENTRY_FIELDS = ("type", "concept", "amount", "date", "notes")

_RELATIONS = (
    ("property_id", "property", Property, "INVALID_PROPERTY"),
    ("unit_id", "unit", Unit, "INVALID_UNIT"),
    ("contract_id", "contract", Contract, "INVALID_CONTRACT"),
)

_ZERO = Value(Decimal("0.00"), output_field=DecimalField(max_digits=14, decimal_places=2))


def _apply_relations(entry: AccountingEntry, *, organization_id: UUID, data: dict[str, Any]) -> list[str]:
    changed = []
    for key, attr, model, code in _RELATIONS:
        if key not in data:
            continue
        obj = None
        if data[key] is not None:
            obj = model.objects.filter(id=data[key], organization_id=organization_id).first()
            if obj is None:
                raise BusinessRuleError(f"{model.__name__} not found or does not belong to organization.", code=code)
        setattr(entry, attr, obj)
        changed.append(attr)
    return changed


class AccountingService:
    @staticmethod
    @transaction.atomic
    def create(*, organization_id: UUID, actor_id: UUID | None, data: dict[str, Any]) -> AccountingEntry:
        entry = AccountingEntry(organization_id=organization_id, created_by_id=actor_id)
        _apply_relations(entry, organization_id=organization_id, data=data)
        for f in ENTRY_FIELDS:
            if f in data:
                setattr(entry, f, data[f])
        entry.save()
        return entry

    @staticmethod
    @transaction.atomic
    def update(*, organization_id: UUID, entry_id: UUID, data: dict[str, Any]) -> AccountingEntry:
        entry = AccountingEntry.objects.select_for_update().get(id=entry_id, organization_id=organization_id)
        changed = _apply_relations(entry, organization_id=organization_id, data=data)
        for f in ENTRY_FIELDS:
            if f in data:
                setattr(entry, f, data[f])
                changed.append(f)
        if changed:
            entry.save(update_fields=changed + ["updated_at"])
        return entry

    @staticmethod
    def delete(*, organization_id: UUID, entry_id: UUID) -> None:
        AccountingEntry.objects.get(id=entry_id, organization_id=organization_id).delete()


@dataclass
class LedgerReport:
    total_income: Decimal
    total_expense: Decimal
    balance: Decimal
    grouped: Optional[Dict[str, Dict[str, Decimal]]] = field(default=None)


def ledger_report(
    *,
    organization_id: UUID,
    date_from: date | None = None,
    date_to: date | None = None,
    group_by: str | None = None,
) -> LedgerReport:
    """
    Income/expense totals for the organization, optionally bucketed by
    month ("YYYY-MM") or day ("YYYY-MM-DD").
    """
    qs = AccountingEntry.objects.filter(organization_id=organization_id)
    if date_from:
        qs = qs.filter(date__gte=date_from)
    if date_to:
        qs = qs.filter(date__lte=date_to)

    sums = {
        "income": Coalesce(Sum("amount", filter=Q(type=EntryType.INCOME)), _ZERO),
        "expense": Coalesce(Sum("amount", filter=Q(type=EntryType.EXPENSE)), _ZERO),
    }
    totals = qs.aggregate(**sums)
    report = LedgerReport(
        total_income=totals["income"],
        total_expense=totals["expense"],
        balance=totals["income"] - totals["expense"],
    )

    if group_by in ("month", "day"):
        trunc = TruncMonth("date") if group_by == "month" else TruncDay("date")
        fmt = "%Y-%m" if group_by == "month" else "%Y-%m-%d"
        rows = qs.annotate(bucket=trunc).values("bucket").annotate(**sums).order_by("bucket")
        report.grouped = {
            row["bucket"].strftime(fmt): {"income": row["income"], "expense": row["expense"]}
            for row in rows
        }

    return report
