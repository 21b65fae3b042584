# backend/rentflow/tenants/selectors.py
from __future__ import annotations

from uuid import UUID

from django.db.models import Count, Q, QuerySet

from rentflow.contracts.models import ContractStatus
from rentflow.tenants.models import Tenant


def tenant_qs(*, organization_id: UUID) -> QuerySet[Tenant]:
    return (
        Tenant.objects.filter(organization_id=organization_id)
        .annotate(active_contracts=Count("contracts", filter=Q(contracts__status=ContractStatus.ACTIVE)))
        .order_by("-created_at")
    )
