# backend/rentflow/properties/services.py
from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

from django.db import transaction

from rentflow.common.api.exceptions import BusinessRuleError
from rentflow.contracts.models import Contract, ContractStatus
from rentflow.organizations.models import Organization
from rentflow.properties.models import Property, Unit

logger = logging.getLogger(__name__)

PROPERTY_FIELDS = (
    "name",
    "type",
    "address",
    "size",
    "rooms",
    "bathrooms",
    "rent",
    "status",
    "unit_number",
    "floor",
    "amenities",
    "photos",
)

UNIT_FIELDS = (
    "name",
    "type",
    "address",
    "description",
    "total_floors",
    "floors",
    "size",
    "amenities",
    "photos",
    "manager",
)


def _resolve_unit(*, organization_id: UUID, unit_id: UUID | None) -> Unit | None:
    if unit_id is None:
        return None
    unit = Unit.objects.filter(id=unit_id, organization_id=organization_id).first()
    if unit is None:
        raise BusinessRuleError("Unit not found in this organization.", code="INVALID_UNIT")
    return unit


class PropertyService:
    """
    All Property mutations live here (write-model boundary).
    """

    @staticmethod
    @transaction.atomic
    def create(*, organization_id: UUID, data: dict[str, Any]) -> Property:
        org = Organization.objects.select_for_update().get(id=organization_id)
        max_properties = org.limit("maxProperties")
        if max_properties is not None:
            if Property.objects.filter(organization_id=organization_id).count() >= max_properties:
                raise BusinessRuleError(
                    f"Property limit reached for this plan ({max_properties}).",
                    code="PROPERTY_LIMIT_REACHED",
                )

        unit = _resolve_unit(organization_id=organization_id, unit_id=data.get("unit_id"))

        prop = Property(organization_id=organization_id, unit=unit)
        for field in PROPERTY_FIELDS:
            if field in data:
                setattr(prop, field, data[field])
        prop.save()
        return prop

    @staticmethod
    @transaction.atomic
    def update(*, organization_id: UUID, property_id: UUID, data: dict[str, Any]) -> Property:
        prop = Property.objects.select_for_update().get(id=property_id, organization_id=organization_id)

        changed = []
        if "unit_id" in data:
            prop.unit = _resolve_unit(organization_id=organization_id, unit_id=data["unit_id"])
            changed.append("unit")

        for field in PROPERTY_FIELDS:
            if field in data:
                setattr(prop, field, data[field])
                changed.append(field)

        if changed:
            prop.save(update_fields=changed + ["updated_at"])
        return prop

    @staticmethod
    @transaction.atomic
    def delete(*, organization_id: UUID, property_id: UUID) -> None:
        prop = Property.objects.select_for_update().get(id=property_id, organization_id=organization_id)

        if Contract.objects.filter(property=prop, status=ContractStatus.ACTIVE).exists():
            raise BusinessRuleError(
                "Cannot delete a property with active contracts.",
                code="PROPERTY_HAS_ACTIVE_CONTRACTS",
            )

        prop.delete()
        logger.info("property deleted id=%s org=%s", property_id, organization_id)


class UnitService:
    @staticmethod
    @transaction.atomic
    def create(*, organization_id: UUID, data: dict[str, Any]) -> Unit:
        unit = Unit(organization_id=organization_id)
        for field in UNIT_FIELDS:
            if field in data:
                setattr(unit, field, data[field])
        unit.save()
        return unit

    @staticmethod
    @transaction.atomic
    def update(*, organization_id: UUID, unit_id: UUID, data: dict[str, Any]) -> Unit:
        unit = Unit.objects.select_for_update().get(id=unit_id, organization_id=organization_id)

        changed = [f for f in UNIT_FIELDS if f in data]
        for field in changed:
            setattr(unit, field, data[field])
        if changed:
            unit.save(update_fields=changed + ["updated_at"])
        return unit

    @staticmethod
    @transaction.atomic
    def delete(*, organization_id: UUID, unit_id: UUID) -> int:
        """
        Deletes the unit and its properties. Returns the number of properties removed.
        """
        unit = Unit.objects.select_for_update().get(id=unit_id, organization_id=organization_id)

        if Contract.objects.filter(property__unit=unit, status=ContractStatus.ACTIVE).exists():
            raise BusinessRuleError(
                "Cannot delete a unit whose properties have active contracts.",
                code="UNIT_HAS_ACTIVE_CONTRACTS",
            )

        removed, _ = Property.objects.filter(unit=unit).delete()
        unit.delete()
        logger.info("unit deleted id=%s org=%s properties=%s", unit_id, organization_id, removed)
        return removed
