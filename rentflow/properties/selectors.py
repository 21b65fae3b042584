# backend/rentflow/properties/selectors.py
from __future__ import annotations

from uuid import UUID

from django.db.models import Count, QuerySet

from rentflow.properties.models import Property, Unit


def property_qs(*, organization_id: UUID) -> QuerySet[Property]:
    return Property.objects.filter(organization_id=organization_id).select_related("unit").order_by("-created_at")


def unit_qs(*, organization_id: UUID) -> QuerySet[Unit]:
    return (
        Unit.objects.filter(organization_id=organization_id)
        .annotate(properties_count=Count("properties"))
        .order_by("-created_at")
    )
