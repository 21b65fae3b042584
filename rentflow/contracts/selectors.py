# backend/rentflow/contracts/selectors.py
from __future__ import annotations

from uuid import UUID

from django.db.models import Prefetch, QuerySet

from rentflow.contracts.models import Contract
from rentflow.payments.models import Payment


def contract_qs(*, organization_id: UUID, with_payments: bool = False) -> QuerySet[Contract]:
    qs = (
        Contract.objects.filter(organization_id=organization_id)
        .select_related("property", "property__unit", "tenant")
        .order_by("-created_at")
    )
    if with_payments:
        qs = qs.prefetch_related(Prefetch("payments", queryset=Payment.objects.order_by("due_date")))
    return qs
