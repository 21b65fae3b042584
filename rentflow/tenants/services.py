# backend/rentflow/tenants/services.py
from __future__ import annotations

from typing import Any
from uuid import UUID

from django.db import transaction

from rentflow.common.api.exceptions import BusinessRuleError, ConflictError
from rentflow.contracts.models import Contract, ContractStatus
from rentflow.organizations.models import Organization
from rentflow.tenants.models import Tenant

TENANT_FIELDS = (
    "first_name",
    "last_name",
    "email",
    "phone",
    "emergency_contact",
    "employment",
    "references",
    "application_date",
    "status",
    "credit_score",
)


class TenantService:
    """
    All Tenant mutations live here (write-model boundary).
    """

    @staticmethod
    def _ensure_email_free(*, organization_id: UUID, email: str, exclude_id: UUID | None = None) -> None:
        qs = Tenant.objects.filter(organization_id=organization_id, email__iexact=email)
        if exclude_id is not None:
            qs = qs.exclude(id=exclude_id)
        if qs.exists():
            raise ConflictError("A tenant with this email already exists.", code="TENANT_EMAIL_EXISTS")

    @staticmethod
    @transaction.atomic
    def create(*, organization_id: UUID, data: dict[str, Any]) -> Tenant:
        org = Organization.objects.select_for_update().get(id=organization_id)
        max_tenants = org.limit("maxTenants")
        if max_tenants is not None:
            if Tenant.objects.filter(organization_id=organization_id).count() >= max_tenants:
                raise BusinessRuleError(
                    f"Tenant limit reached for this plan ({max_tenants}).",
                    code="TENANT_LIMIT_REACHED",
                )

        TenantService._ensure_email_free(organization_id=organization_id, email=data["email"])

        tenant = Tenant(organization_id=organization_id)
        for field in TENANT_FIELDS:
            if field in data:
                setattr(tenant, field, data[field])
        tenant.save()
        return tenant

    @staticmethod
    @transaction.atomic
    def update(*, organization_id: UUID, tenant_id: UUID, data: dict[str, Any]) -> Tenant:
        tenant = Tenant.objects.select_for_update().get(id=tenant_id, organization_id=organization_id)

        if "email" in data:
            TenantService._ensure_email_free(organization_id=organization_id, email=data["email"], exclude_id=tenant.id)

        changed = [f for f in TENANT_FIELDS if f in data]
        for field in changed:
            setattr(tenant, field, data[field])
        if changed:
            tenant.save(update_fields=changed + ["updated_at"])
        return tenant

    @staticmethod
    @transaction.atomic
    def delete(*, organization_id: UUID, tenant_id: UUID) -> None:
        tenant = Tenant.objects.select_for_update().get(id=tenant_id, organization_id=organization_id)

        if Contract.objects.filter(tenant=tenant, status=ContractStatus.ACTIVE).exists():
            raise BusinessRuleError(
                "Cannot delete a tenant with active contracts.",
                code="TENANT_HAS_ACTIVE_CONTRACTS",
            )

        tenant.delete()
