# backend/rentflow/org_settings/services.py
from __future__ import annotations

import logging
from typing import Any, Dict
from uuid import UUID

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from rentflow.contracts.api.serializers import ContractSerializer
from rentflow.contracts.models import Contract
from rentflow.iam.api.serializers import UserSerializer
from rentflow.iam.models import User
from rentflow.maintenance.api.serializers import MaintenanceRequestSerializer
from rentflow.maintenance.models import MaintenanceRequest
from rentflow.organizations.api.serializers import OrganizationSerializer, SubscriptionSerializer
from rentflow.organizations.defaults import DEFAULT_PREFERENCES, merge_settings
from rentflow.organizations.models import Organization
from rentflow.payments.api.serializers import PaymentSerializer
from rentflow.payments.models import Payment
from rentflow.properties.api.serializers import PropertySerializer, UnitSerializer
from rentflow.properties.models import Property, Unit
from rentflow.tenants.api.serializers import TenantSerializer
from rentflow.tenants.models import Tenant

logger = logging.getLogger(__name__)


def preferences_for(user) -> Dict[str, Any]:
    """Stored preferences merged over the defaults."""
    return merge_settings(DEFAULT_PREFERENCES, user.preferences or {})


@transaction.atomic
def update_preferences(*, user_id: UUID, data: Dict[str, Any]) -> Dict[str, Any]:
    user = User.objects.select_for_update().get(id=user_id)
    user.preferences = merge_settings(user.preferences or {}, data)
    user.save(update_fields=["preferences", "updated_at"])
    logger.info("preferences updated user=%s keys=%s", user_id, sorted(data))
    return preferences_for(user)


def export_organization(*, organization_id: UUID) -> Dict[str, Any]:
    """
    Full dump of one organization's data, used for the settings "download my data" action.
    """
    org = Organization.objects.get(id=organization_id)

    def rows(qs, serializer):
        return serializer(qs.filter(organization_id=organization_id).order_by("created_at"), many=True).data

    data = {
        "organization": {
            **OrganizationSerializer(org).data,
            "subscriptions": SubscriptionSerializer(
                org.subscriptions.select_related("plan").order_by("created_at"), many=True
            ).data,
        },
        "users": UserSerializer(User.objects.filter(organization_id=organization_id).order_by("date_joined"), many=True).data,
        "properties": rows(Property.objects.select_related("unit"), PropertySerializer),
        "units": rows(Unit.objects.all(), UnitSerializer),
        "tenants": rows(Tenant.objects.all(), TenantSerializer),
        "contracts": rows(Contract.objects.select_related("property__unit", "tenant"), ContractSerializer),
        "payments": rows(Payment.objects.all(), PaymentSerializer),
        "maintenance": rows(MaintenanceRequest.objects.select_related("property", "tenant"), MaintenanceRequestSerializer),
        "export_date": timezone.now().isoformat(),
        "version": settings.RENTFLOW_VERSION,
    }
    logger.info("organization export org=%s", organization_id)
    return data
