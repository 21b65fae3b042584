# backend/rentflow/activity/services.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional
from uuid import UUID

from django.db import transaction

from rentflow.activity.models import ActivityLog

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ActivityRecord:
    entity_type: str
    entity_id: str
    action: str
    organization_id: UUID
    user_id: UUID | None
    description: str
    is_system_action: bool
    metadata: Dict[str, Any]


class ActivityService:
    """
    Central activity writer. Rows are never updated once written.
    """

    @staticmethod
    @transaction.atomic
    def log(
        *,
        organization_id: UUID,
        entity_type: str,
        entity_id,
        action: str,
        description: str = "",
        user_id: UUID | None = None,
        is_system_action: bool = False,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> ActivityRecord:
        metadata = metadata or {}

        ActivityLog.objects.create(
            organization_id=organization_id,
            user_id=user_id,
            entity_type=entity_type,
            entity_id=str(entity_id),
            action=action,
            description=description,
            is_system_action=is_system_action,
            metadata=metadata,
        )
        logger.debug("activity %s:%s %s org=%s", entity_type, action, entity_id, organization_id)

        return ActivityRecord(
            entity_type=entity_type,
            entity_id=str(entity_id),
            action=action,
            organization_id=organization_id,
            user_id=user_id,
            description=description,
            is_system_action=is_system_action,
            metadata=metadata,
        )
