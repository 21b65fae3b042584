# backend/rentflow/maintenance/services.py
from __future__ import annotations

from typing import Any
from uuid import UUID

from django.db import transaction
from django.utils import timezone

from rentflow.activity.models import ActivityAction, ActivityEntity
from rentflow.activity.services import ActivityService
from rentflow.common.api.exceptions import BusinessRuleError
from rentflow.maintenance.models import MaintenanceRequest, MaintenanceStatus
from rentflow.properties.models import Property
from rentflow.tenants.models import Tenant

REQUEST_FIELDS = (
    "title",
    "description",
    "priority",
    "category",
    "status",
    "assigned_to",
    "estimated_cost",
    "actual_cost",
    "notes",
    "photos",
)


def _apply_relations(req: MaintenanceRequest, *, organization_id: UUID, data: dict[str, Any]) -> list[str]:
    changed = []
    if "property_id" in data:
        prop = Property.objects.filter(id=data["property_id"], organization_id=organization_id).first()
        if prop is None:
            raise BusinessRuleError("Property not found or does not belong to organization.", code="INVALID_PROPERTY")
        req.property = prop
        changed.append("property")

    if "tenant_id" in data:
        tenant = None
        if data["tenant_id"] is not None:
            tenant = Tenant.objects.filter(id=data["tenant_id"], organization_id=organization_id).first()
            if tenant is None:
                raise BusinessRuleError("Tenant not found or does not belong to organization.", code="INVALID_TENANT")
        req.tenant = tenant
        changed.append("tenant")
    return changed


class MaintenanceService:
    @staticmethod
    @transaction.atomic
    def create(*, organization_id: UUID, actor_id: UUID | None, data: dict[str, Any]) -> MaintenanceRequest:
        req = MaintenanceRequest(organization_id=organization_id)
        _apply_relations(req, organization_id=organization_id, data=data)

        for field in REQUEST_FIELDS:
            if field in data:
                setattr(req, field, data[field])
        if req.status == MaintenanceStatus.COMPLETED:
            req.completed_date = timezone.now()
        req.save()

        ActivityService.log(
            organization_id=organization_id,
            entity_type=ActivityEntity.MAINTENANCE,
            entity_id=req.id,
            action=ActivityAction.CREATE,
            description=f'Maintenance request "{req.title}" reported.',
            user_id=actor_id,
        )
        return req

    @staticmethod
    @transaction.atomic
    def update(*, organization_id: UUID, request_id: UUID, actor_id: UUID | None, data: dict[str, Any]) -> MaintenanceRequest:
        req = MaintenanceRequest.objects.select_for_update().get(id=request_id, organization_id=organization_id)
        was_completed = req.status == MaintenanceStatus.COMPLETED

        changed = _apply_relations(req, organization_id=organization_id, data=data)
        for field in REQUEST_FIELDS:
            if field in data:
                setattr(req, field, data[field])
                changed.append(field)

        if req.status == MaintenanceStatus.COMPLETED and not was_completed:
            req.completed_date = timezone.now()
            changed.append("completed_date")
        elif req.status != MaintenanceStatus.COMPLETED and req.completed_date is not None:
            req.completed_date = None
            changed.append("completed_date")

        if changed:
            req.save(update_fields=changed + ["updated_at"])

        ActivityService.log(
            organization_id=organization_id,
            entity_type=ActivityEntity.MAINTENANCE,
            entity_id=req.id,
            action=ActivityAction.UPDATE,
            description=f'Maintenance request "{req.title}" updated ({req.status}).',
            user_id=actor_id,
        )
        return req

    @staticmethod
    @transaction.atomic
    def delete(*, organization_id: UUID, request_id: UUID, actor_id: UUID | None) -> None:
        req = MaintenanceRequest.objects.get(id=request_id, organization_id=organization_id)
        title = req.title
        req.delete()

        ActivityService.log(
            organization_id=organization_id,
            entity_type=ActivityEntity.MAINTENANCE,
            entity_id=request_id,
            action=ActivityAction.DELETE,
            description=f'Maintenance request "{title}" deleted.',
            user_id=actor_id,
        )
