# backend/rentflow/common/scope.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from rest_framework.exceptions import NotAuthenticated

from rentflow.common.api.exceptions import (
    BusinessRuleError,
    OrganizationAccessDenied,
    OrganizationInactive,
    ResourceNotFound,
)
from rentflow.common.permissions import ROLE_SUPER_ADMIN, is_super_admin

HDR_ORGANIZATION = "X-Organization-ID"

MISSING_ORGANIZATION_MSG = "Missing organization header. Provide X-Organization-ID."
INVALID_ORGANIZATION_MSG = "Invalid organization header. X-Organization-ID must be a UUID."


@dataclass(frozen=True)
class AuthContext:
    """
    Typed view of the authenticated caller, resolved once per request.

    organization_id is the effective scope (the header); home_organization_id is
    where the user belongs. They differ only for SUPER_ADMIN.
    """
    user_id: UUID
    organization_id: UUID
    home_organization_id: Optional[UUID]
    role: str
    full_name: str

    @property
    def is_super_admin(self) -> bool:
        return self.role == ROLE_SUPER_ADMIN

    def as_actor(self) -> dict:
        return {"id": str(self.user_id), "name": self.full_name, "role": self.role}


def _parse_uuid(value: str) -> Optional[UUID]:
    try:
        return UUID(str(value))
    except (TypeError, ValueError):
        return None


def _get_header(request, name: str) -> Optional[str]:
    """
    request.headers is case-insensitive; fallback to META for pytest/client.
    """
    headers = getattr(request, "headers", None)
    if headers is not None:
        v = headers.get(name)
        if v:
            return v

    meta_key = "HTTP_" + name.upper().replace("-", "_")
    return request.META.get(meta_key)


def organization_id_from_header(request) -> Optional[UUID]:
    """
    Pure reader: None when the header is absent, 400 when it is malformed.
    """
    raw = _get_header(request, HDR_ORGANIZATION)
    if not raw:
        return None
    org_id = _parse_uuid(raw)
    if org_id is None:
        raise BusinessRuleError(INVALID_ORGANIZATION_MSG, code="INVALID_ORGANIZATION_ID")
    return org_id


def build_auth_context(user, organization_id: UUID) -> AuthContext:
    """
    Validate that `user` may act inside `organization_id` and return the context.
    Shared by HTTP views (require_scope) and the realtime join handler.
    """
    from rentflow.organizations.models import Organization

    role = ROLE_SUPER_ADMIN if is_super_admin(user) else str(user.role)
    home_org_id = getattr(user, "organization_id", None)

    if role != ROLE_SUPER_ADMIN and home_org_id != organization_id:
        raise OrganizationAccessDenied()

    org = Organization.objects.filter(id=organization_id).only("id", "is_active").first()
    if org is None:
        raise ResourceNotFound("Organization not found.", code="ORGANIZATION_NOT_FOUND")

    if role != ROLE_SUPER_ADMIN and not org.is_active:
        raise OrganizationInactive()

    return AuthContext(
        user_id=user.id,
        organization_id=org.id,
        home_organization_id=home_org_id,
        role=role,
        full_name=user.get_full_name() or user.email,
    )


def require_scope(request) -> AuthContext:
    """
    Resolve the AuthContext for an organization-scoped endpoint.

    - unauthenticated -> 401 TOKEN_REQUIRED
    - missing header -> 400 ORGANIZATION_ID_REQUIRED
    - malformed header -> 400 INVALID_ORGANIZATION_ID
    - other organization (non SUPER_ADMIN) -> 403 ORGANIZATION_ACCESS_DENIED
    - inactive organization (non SUPER_ADMIN) -> 403 ORGANIZATION_INACTIVE
    """
    cached = getattr(request, "auth_context", None)
    if isinstance(cached, AuthContext):
        return cached

    user = getattr(request, "user", None)
    if not user or not getattr(user, "is_authenticated", False):
        raise NotAuthenticated()

    org_id = organization_id_from_header(request)
    if org_id is None:
        raise BusinessRuleError(MISSING_ORGANIZATION_MSG, code="ORGANIZATION_ID_REQUIRED")

    ctx = build_auth_context(user, org_id)
    setattr(request, "auth_context", ctx)
    return ctx


def optional_scope(request) -> Optional[AuthContext]:
    """
    Like require_scope, but a missing header resolves to the user's own organization.
    Used by endpoints that make sense without an explicit scope (auth/me, settings/preferences).
    """
    user = getattr(request, "user", None)
    if not user or not getattr(user, "is_authenticated", False):
        return None

    org_id = organization_id_from_header(request) or getattr(user, "organization_id", None)
    if org_id is None:
        return None
    return build_auth_context(user, org_id)
