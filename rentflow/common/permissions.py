# backend/rentflow/common/permissions.py

from __future__ import annotations

from typing import Set

from rest_framework.permissions import BasePermission, SAFE_METHODS

# Mirrors rentflow.iam.models.UserRole (kept as plain strings to avoid an app import cycle)
ROLE_SUPER_ADMIN = "SUPER_ADMIN"
ROLE_ADMIN = "ADMIN"
ROLE_MANAGER = "MANAGER"
ROLE_USER = "USER"

ALL_ROLES = {ROLE_ADMIN, ROLE_MANAGER, ROLE_USER}
STAFF_ROLES = {ROLE_ADMIN, ROLE_MANAGER}


def _user_roles(user) -> Set[str]:
    """
    Resolve roles from user.role.

    - Django superusers are treated as SUPER_ADMIN.
    - An authenticated user without a role is treated as USER.
    """
    roles: Set[str] = set()

    if not user or not getattr(user, "is_authenticated", False):
        return roles

    if getattr(user, "is_superuser", False):
        roles.add(ROLE_SUPER_ADMIN)

    if getattr(user, "role", None):
        roles.add(str(user.role))

    if not roles:
        roles.add(ROLE_USER)

    return roles


def is_super_admin(user) -> bool:
    return ROLE_SUPER_ADMIN in _user_roles(user)


def has_any_role(user, roles: Set[str]) -> bool:
    user_roles = _user_roles(user)
    return ROLE_SUPER_ADMIN in user_roles or bool(user_roles & roles)


class BaseRolePermission(BasePermission):
    """
    Base permission class for role-based access control.

    Key behavior:
    - Requires authentication (global IsAuthenticated already does this).
    - SUPER_ADMIN bypass.
    - Uses allowed_roles_per_action for strict RBAC.
    - If action is unknown and request is SAFE, fall back to list/retrieve.
    - Denials surface as 403 INSUFFICIENT_PERMISSIONS.
    """
    message = "Insufficient permissions."
    code = "INSUFFICIENT_PERMISSIONS"

    # Override in subclasses: dict of action -> set of allowed roles
    allowed_roles_per_action = {
        "list": ALL_ROLES,
        "retrieve": ALL_ROLES,
        "create": STAFF_ROLES,
        "update": STAFF_ROLES,
        "partial_update": STAFF_ROLES,
        "destroy": {ROLE_ADMIN},
    }

    def _infer_action(self, request, view) -> str | None:
        action = getattr(view, "action", None)
        if action:
            return action

        # fallback inference for APIView (no router action)
        kwargs = getattr(view, "kwargs", {}) or {}
        is_detail = "pk" in kwargs or "id" in kwargs

        method = request.method.upper()
        if method in ("GET", "HEAD", "OPTIONS"):
            return "retrieve" if is_detail else "list"
        if method == "POST":
            return "create"
        if method == "PUT":
            return "update"
        if method == "PATCH":
            return "partial_update"
        if method == "DELETE":
            return "destroy"
        return None

    def has_permission(self, request, view) -> bool:
        user = request.user
        if not user or not getattr(user, "is_authenticated", False):
            return False

        roles = _user_roles(user)

        if ROLE_SUPER_ADMIN in roles:
            return True

        action = self._infer_action(request, view)
        allowed = self.allowed_roles_per_action.get(action)

        if allowed is None and request.method in SAFE_METHODS:
            kwargs = getattr(view, "kwargs", {}) or {}
            is_detail = "pk" in kwargs or "id" in kwargs
            read_action = "retrieve" if is_detail else "list"
            allowed = self.allowed_roles_per_action.get(read_action)

        if allowed is not None:
            return bool(roles & allowed)

        # Unknown action => deny by default
        return False

    def has_object_permission(self, request, view, obj) -> bool:
        return self.has_permission(request, view)


# Specific permission classes for each module

class OrganizationPermission(BaseRolePermission):
    """Own organization read; org edits by ADMIN; lifecycle by SUPER_ADMIN only."""
    allowed_roles_per_action = {
        "list": set(),
        "retrieve": ALL_ROLES,
        "update": {ROLE_ADMIN},
        "partial_update": {ROLE_ADMIN},
        "activate": set(),
        "deactivate": set(),
        "subscription": set(),
    }


class UserPermission(BaseRolePermission):
    """Self-service checks (retrieve/update/password of self) happen in the view."""
    allowed_roles_per_action = {
        "list": STAFF_ROLES,
        "retrieve": ALL_ROLES,
        "create": {ROLE_ADMIN},
        "update": ALL_ROLES,
        "partial_update": ALL_ROLES,
        "destroy": {ROLE_ADMIN},
        "password": ALL_ROLES,
        "activate": {ROLE_ADMIN},
        "deactivate": {ROLE_ADMIN},
    }


class PropertyPermission(BaseRolePermission):
    """Permissions for properties and units"""
    allowed_roles_per_action = {
        "list": ALL_ROLES,
        "retrieve": ALL_ROLES,
        "create": STAFF_ROLES,
        "update": STAFF_ROLES,
        "partial_update": STAFF_ROLES,
        "destroy": {ROLE_ADMIN},
    }


class TenantPermission(BaseRolePermission):
    """Permissions for tenant (renter) management"""
    allowed_roles_per_action = {
        "list": ALL_ROLES,
        "retrieve": ALL_ROLES,
        "create": STAFF_ROLES,
        "update": STAFF_ROLES,
        "partial_update": STAFF_ROLES,
        "destroy": {ROLE_ADMIN},
    }


class ContractPermission(BaseRolePermission):
    """Permissions for contract management"""
    allowed_roles_per_action = {
        "list": ALL_ROLES,
        "retrieve": ALL_ROLES,
        "create": STAFF_ROLES,
        "update": STAFF_ROLES,
        "partial_update": STAFF_ROLES,
        "destroy": {ROLE_ADMIN},
    }


class PaymentPermission(BaseRolePermission):
    """PATCH is the cancel/refund transition (ADMIN only)."""
    allowed_roles_per_action = {
        "list": ALL_ROLES,
        "retrieve": ALL_ROLES,
        "create": STAFF_ROLES,
        "update": STAFF_ROLES,
        "partial_update": {ROLE_ADMIN},
        "destroy": {ROLE_ADMIN},
    }


class MaintenancePermission(BaseRolePermission):
    """Any member may report a maintenance request."""
    allowed_roles_per_action = {
        "list": ALL_ROLES,
        "retrieve": ALL_ROLES,
        "create": ALL_ROLES,
        "update": STAFF_ROLES,
        "partial_update": STAFF_ROLES,
        "destroy": {ROLE_ADMIN},
    }


class AccountingPermission(BaseRolePermission):
    """Permissions for the accounting ledger"""
    allowed_roles_per_action = {
        "list": ALL_ROLES,
        "retrieve": ALL_ROLES,
        "report": ALL_ROLES,
        "create": STAFF_ROLES,
        "update": STAFF_ROLES,
        "partial_update": STAFF_ROLES,
        "destroy": STAFF_ROLES,
    }


class ActivityLogPermission(BaseRolePermission):
    """Activity log is read-only"""
    allowed_roles_per_action = {
        "list": ALL_ROLES,
        "retrieve": ALL_ROLES,
        "create": set(),
        "update": set(),
        "partial_update": set(),
        "destroy": set(),
    }


class ReportPermission(BaseRolePermission):
    """Permissions for reports"""
    allowed_roles_per_action = {
        "dashboard": ALL_ROLES,
        "financial": ALL_ROLES,
        "properties": ALL_ROLES,
        "tenants": ALL_ROLES,
        "maintenance": ALL_ROLES,
        "units": ALL_ROLES,
        "export": STAFF_ROLES,
    }


class SettingsPermission(BaseRolePermission):
    """Organization settings are readable by members and editable by ADMIN; preferences are per user."""
    allowed_roles_per_action = {
        "organization_read": ALL_ROLES,
        "organization": {ROLE_ADMIN},
        "preferences": ALL_ROLES,
        "subscription": ALL_ROLES,
        "export": {ROLE_ADMIN},
    }

    def _infer_action(self, request, view) -> str | None:
        action = super()._infer_action(request, view)
        if action == "organization" and request.method in SAFE_METHODS:
            return "organization_read"
        return action


class SuperAdminPermission(BaseRolePermission):
    """Platform administration: SUPER_ADMIN only (bypass in has_permission)."""
    allowed_roles_per_action = {}
