# backend/rentflow/contracts/services.py
from __future__ import annotations

import logging
from datetime import date
from typing import Any, Optional
from uuid import UUID

from django.db import transaction
from django.utils import timezone
from rest_framework.exceptions import ValidationError

from rentflow.activity.models import ActivityAction, ActivityEntity
from rentflow.activity.services import ActivityService
from rentflow.common.api.exceptions import BusinessRuleError
from rentflow.contracts.models import Contract, ContractStatus
from rentflow.properties.models import Property, PropertyStatus
from rentflow.tenants.models import Tenant

logger = logging.getLogger(__name__)

CONTRACT_FIELDS = (
    "start_date",
    "end_date",
    "monthly_rent",
    "security_deposit",
    "status",
    "terms",
    "signed_date",
    "termination_date",
    "termination_reason",
    "renewal_notification_sent",
)

ACTION_CONTEXTS = ("ACTIVATED", "EXPIRED", "TERMINATED")

_CONTEXT_DESCRIPTIONS = {
    "ACTIVATED": "Contract {id} activated for property {label}.",
    "EXPIRED": "Contract {id} expired for property {label}.",
    "TERMINATED": "Contract {id} terminated for property {label}.",
}


def _property_label(prop: Property) -> str:
    if prop.unit_id:
        return f'"{prop.unit.name} - {prop.name}"'
    return f'"{prop.name}"'


def _resolve_property(*, organization_id: UUID, property_id: UUID) -> Property:
    prop = Property.objects.select_related("unit").filter(id=property_id, organization_id=organization_id).first()
    if prop is None:
        raise BusinessRuleError(
            "Property not found or does not belong to organization.",
            code="INVALID_PROPERTY",
        )
    return prop


def _resolve_tenant(*, organization_id: UUID, tenant_id: UUID) -> Tenant:
    tenant = Tenant.objects.filter(id=tenant_id, organization_id=organization_id).first()
    if tenant is None:
        raise BusinessRuleError(
            "Tenant not found or does not belong to organization.",
            code="INVALID_TENANT",
        )
    return tenant


def _ensure_dates(start: date, end: date) -> None:
    if end < start:
        raise ValidationError({"end_date": "end_date must be on or after start_date."})


class ContractService:
    """
    Contract write-model. Every mutation leaves an activity entry behind.
    """

    @staticmethod
    @transaction.atomic
    def create(*, organization_id: UUID, actor_id: UUID | None, data: dict[str, Any]) -> Contract:
        prop = _resolve_property(organization_id=organization_id, property_id=data["property_id"])
        tenant = _resolve_tenant(organization_id=organization_id, tenant_id=data["tenant_id"])
        _ensure_dates(data["start_date"], data["end_date"])

        contract = Contract(organization_id=organization_id, property=prop, tenant=tenant)
        for field in CONTRACT_FIELDS:
            if field in data:
                setattr(contract, field, data[field])
        contract.save()

        if contract.status == ContractStatus.ACTIVE:
            Property.objects.filter(id=prop.id).update(status=PropertyStatus.RENTED, updated_at=timezone.now())
            prop.status = PropertyStatus.RENTED

        ActivityService.log(
            organization_id=organization_id,
            entity_type=ActivityEntity.CONTRACT,
            entity_id=contract.id,
            action=ActivityAction.CREATE,
            description=f"Contract {contract.id} created for property {_property_label(prop)}.",
            user_id=actor_id,
        )
        logger.info("contract created id=%s org=%s status=%s", contract.id, organization_id, contract.status)
        return contract

    @staticmethod
    @transaction.atomic
    def update(
        *,
        organization_id: UUID,
        contract_id: UUID,
        actor_id: UUID | None,
        data: dict[str, Any],
        action_context: Optional[str] = None,
    ) -> Contract:
        contract = (
            Contract.objects.select_for_update()
            .select_related("property__unit", "tenant")
            .get(id=contract_id, organization_id=organization_id)
        )

        changed = []
        if data.get("property_id"):
            contract.property = _resolve_property(organization_id=organization_id, property_id=data["property_id"])
            changed.append("property")
        if data.get("tenant_id"):
            contract.tenant = _resolve_tenant(organization_id=organization_id, tenant_id=data["tenant_id"])
            changed.append("tenant")

        for field in CONTRACT_FIELDS:
            if field in data:
                setattr(contract, field, data[field])
                changed.append(field)

        _ensure_dates(contract.start_date, contract.end_date)

        if changed:
            contract.save(update_fields=changed + ["updated_at"])

        template = _CONTEXT_DESCRIPTIONS.get(action_context or "", "Contract {id} updated for property {label}.")
        ActivityService.log(
            organization_id=organization_id,
            entity_type=ActivityEntity.CONTRACT,
            entity_id=contract.id,
            action=ActivityAction.UPDATE,
            description=template.format(id=contract.id, label=_property_label(contract.property)),
            user_id=actor_id,
            metadata={"action_context": action_context} if action_context else None,
        )
        return contract

    @staticmethod
    @transaction.atomic
    def delete(*, organization_id: UUID, contract_id: UUID, actor_id: UUID | None) -> None:
        contract = Contract.objects.select_for_update().get(id=contract_id, organization_id=organization_id)

        if contract.payments.exists():
            raise BusinessRuleError(
                "Cannot delete contract with existing payments.",
                code="CONTRACT_HAS_PAYMENTS",
            )

        property_id = contract.property_id
        contract.delete()
        Property.objects.filter(id=property_id).update(status=PropertyStatus.AVAILABLE, updated_at=timezone.now())

        ActivityService.log(
            organization_id=organization_id,
            entity_type=ActivityEntity.CONTRACT,
            entity_id=contract_id,
            action=ActivityAction.DELETE,
            description=f"Contract {contract_id} deleted.",
            user_id=actor_id,
        )
        logger.info("contract deleted id=%s org=%s", contract_id, organization_id)


def expire_overdue_contracts(today: date | None = None) -> int:
    """
    Flip every ACTIVE contract whose end_date is before `today` to EXPIRED.

    One bulk UPDATE; related properties are left as they are.
    `today` defaults to the local date in settings.TIME_ZONE.
    """
    today = today or timezone.localdate()

    count = Contract.objects.filter(status=ContractStatus.ACTIVE, end_date__lt=today).update(
        status=ContractStatus.EXPIRED,
        updated_at=timezone.now(),
    )

    if count:
        logger.info("expired %d contract(s) with end_date before %s", count, today)
    else:
        logger.info("no contracts to expire (today=%s)", today)
    return count


def overdue_contracts_count(today: date | None = None) -> int:
    today = today or timezone.localdate()
    return Contract.objects.filter(status=ContractStatus.ACTIVE, end_date__lt=today).count()
