# backend/rentflow/activity/selectors.py
from __future__ import annotations

from uuid import UUID

from django.db.models import QuerySet

from rentflow.activity.models import ActivityLog


def list_activity(
    *,
    organization_id: UUID,
    entity_type: str | None = None,
    entity_id: str | None = None,
    is_system_action: bool | None = None,
) -> QuerySet[ActivityLog]:
    qs = ActivityLog.objects.filter(organization_id=organization_id).select_related("user")

    if entity_type:
        qs = qs.filter(entity_type=entity_type)
    if entity_id:
        qs = qs.filter(entity_id=str(entity_id))
    if is_system_action is not None:
        qs = qs.filter(is_system_action=is_system_action)

    return qs.order_by("-created_at")
