# backend/rentflow/organizations/services.py
from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

from django.db import transaction
from django.utils import timezone

from rentflow.activity.models import ActivityAction, ActivityEntity
from rentflow.activity.services import ActivityService
from rentflow.common.api.exceptions import ConflictError, ResourceNotFound
from rentflow.organizations.defaults import features_for_plan, limits_for_plan, merge_settings
from rentflow.organizations.models import Organization, Plan, Subscription, SubscriptionStatus

logger = logging.getLogger(__name__)

ORGANIZATION_EDITABLE_FIELDS = ("name", "domain", "logo", "address", "phone", "email")
PLAN_EDITABLE_FIELDS = ("name", "price", "features", "limits", "is_active")


class OrganizationService:
    @staticmethod
    @transaction.atomic
    def update(*, organization_id: UUID, data: dict[str, Any], actor_id: UUID | None = None) -> Organization:
        org = Organization.objects.select_for_update().get(id=organization_id)

        changed = []
        for field in ORGANIZATION_EDITABLE_FIELDS:
            if field in data:
                setattr(org, field, data[field])
                changed.append(field)

        if "settings" in data and data["settings"] is not None:
            org.settings = merge_settings(org.settings, data["settings"])
            changed.append("settings")

        if changed:
            org.save(update_fields=changed + ["updated_at"])
            ActivityService.log(
                organization_id=org.id,
                user_id=actor_id,
                entity_type=ActivityEntity.ORGANIZATION,
                entity_id=org.id,
                action=ActivityAction.UPDATE,
                description=f"Organization updated: {', '.join(changed)}",
            )
        return org

    @staticmethod
    @transaction.atomic
    def set_active(*, organization_id: UUID, active: bool, actor_id: UUID | None = None) -> Organization:
        org = Organization.objects.select_for_update().get(id=organization_id)

        # idempotent
        if org.is_active == active:
            return org

        org.is_active = active
        org.save(update_fields=["is_active", "updated_at"])

        ActivityService.log(
            organization_id=org.id,
            user_id=actor_id,
            entity_type=ActivityEntity.ORGANIZATION,
            entity_id=org.id,
            action=ActivityAction.ACTIVATE if active else ActivityAction.DEACTIVATE,
            description=f"Organization {'activated' if active else 'deactivated'}",
        )
        logger.info("organization %s active=%s", org.id, active)
        return org

    @staticmethod
    @transaction.atomic
    def update_subscription(
        *,
        organization_id: UUID,
        plan_id: str | None = None,
        status: str | None = None,
        current_period_end=None,
        actor_id: UUID | None = None,
    ) -> Subscription:
        """
        Change plan and/or status on the latest subscription (created if missing).
        A plan change also refreshes the organization's features and limits.
        """
        org = Organization.objects.select_for_update().get(id=organization_id)

        plan = None
        if plan_id:
            plan = Plan.objects.filter(id=plan_id).first()
            if plan is None:
                raise ResourceNotFound("Plan not found.", code="PLAN_NOT_FOUND")

        sub = org.subscriptions.order_by("-created_at").first()
        now = timezone.now()
        if sub is None:
            sub = Subscription(
                organization=org,
                plan=plan or org.plan,
                status=status or SubscriptionStatus.ACTIVE,
                current_period_start=now,
                current_period_end=current_period_end or now,
            )
        if plan is not None:
            sub.plan = plan
        if status:
            sub.status = status
        if current_period_end is not None:
            sub.current_period_end = current_period_end
        sub.save()

        if plan is not None and org.plan_id != plan.id:
            org.plan = plan
            org.settings = merge_settings(
                org.settings,
                {"features": features_for_plan(plan.id), "limits": limits_for_plan(plan.id, plan.limits)},
            )
            org.save(update_fields=["plan", "settings", "updated_at"])

        ActivityService.log(
            organization_id=org.id,
            user_id=actor_id,
            entity_type=ActivityEntity.ORGANIZATION,
            entity_id=org.id,
            action=ActivityAction.UPDATE,
            description=f"Subscription set to {sub.plan_id} ({sub.status})",
        )
        return sub


class PlanService:
    @staticmethod
    @transaction.atomic
    def create(
        *,
        plan_id: str,
        name: str,
        price,
        features: list | None = None,
        limits: dict | None = None,
        is_active: bool = True,
        actor_id: UUID | None = None,
        actor_organization_id: UUID | None = None,
    ) -> Plan:
        if Plan.objects.filter(id=plan_id).exists():
            raise ConflictError(f"Plan '{plan_id}' already exists.", code="PLAN_ID_CONFLICT")

        plan = Plan.objects.create(
            id=plan_id,
            name=name,
            price=price,
            features=features or [],
            limits=limits or {},
            is_active=is_active,
        )

        if actor_organization_id:
            ActivityService.log(
                organization_id=actor_organization_id,
                user_id=actor_id,
                entity_type=ActivityEntity.PLAN,
                entity_id=plan.id,
                action=ActivityAction.CREATE,
                description=f"Plan {plan.name} created",
            )
        return plan

    @staticmethod
    @transaction.atomic
    def bulk_update(
        *,
        changes: list[dict[str, Any]],
        actor_id: UUID | None = None,
        actor_organization_id: UUID | None = None,
    ) -> list[Plan]:
        """
        All plans are updated or none: an unknown id rolls back the whole batch.
        """
        updated: list[Plan] = []
        for change in changes:
            plan = Plan.objects.select_for_update().filter(id=change["id"]).first()
            if plan is None:
                raise ResourceNotFound(f"Plan '{change['id']}' not found.", code="PLAN_NOT_FOUND")

            fields = [f for f in PLAN_EDITABLE_FIELDS if f in change]
            for f in fields:
                setattr(plan, f, change[f])
            if fields:
                plan.save(update_fields=fields + ["updated_at"])

            if actor_organization_id:
                ActivityService.log(
                    organization_id=actor_organization_id,
                    user_id=actor_id,
                    entity_type=ActivityEntity.PLAN,
                    entity_id=plan.id,
                    action=ActivityAction.UPDATE,
                    description=f"Plan {plan.name} updated: {', '.join(fields) or 'no changes'}",
                )
            updated.append(plan)
        return updated
