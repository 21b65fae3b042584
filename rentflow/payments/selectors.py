# backend/rentflow/payments/selectors.py
from __future__ import annotations

from uuid import UUID

from django.db.models import QuerySet

from rentflow.payments.models import Payment


def payment_qs(*, organization_id: UUID) -> QuerySet[Payment]:
    return (
        Payment.objects.filter(organization_id=organization_id)
        .select_related("contract", "contract__property", "tenant")
        .order_by("-due_date", "-created_at")
    )
