# backend/rentflow/organizations/selectors.py
from __future__ import annotations

from uuid import UUID

from django.db.models import Count, QuerySet

from rentflow.organizations.models import Organization, Plan, Subscription


def organizations_with_counts(*, is_active: bool | None = None, search: str | None = None) -> QuerySet[Organization]:
    qs = Organization.objects.select_related("plan").annotate(
        users_count=Count("users", distinct=True),
        properties_count=Count("property_set", distinct=True),
        tenants_count=Count("tenant_set", distinct=True),
    )
    if is_active is not None:
        qs = qs.filter(is_active=is_active)
    if search:
        qs = qs.filter(name__icontains=search)
    return qs.order_by("-created_at")


def latest_subscription(*, organization_id: UUID) -> Subscription | None:
    return (
        Subscription.objects.select_related("plan")
        .filter(organization_id=organization_id)
        .order_by("-created_at")
        .first()
    )


def public_plans() -> QuerySet[Plan]:
    return Plan.objects.filter(is_active=True).order_by("price", "id")
