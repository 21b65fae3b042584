# backend/rentflow/iam/services/users.py
from __future__ import annotations

from typing import Any
from uuid import UUID

from django.contrib.auth import get_user_model
from django.db import transaction
from rest_framework.exceptions import ValidationError

from rentflow.activity.models import ActivityAction, ActivityEntity
from rentflow.activity.services import ActivityService
from rentflow.common.api.exceptions import BusinessRuleError, ConflictError
from rentflow.iam.models import UserRole
from rentflow.organizations.models import Organization

# Fields any user may change on their own record
SELF_EDITABLE_FIELDS = ("first_name", "last_name", "email")
# Additionally editable by an ADMIN
ADMIN_EDITABLE_FIELDS = SELF_EDITABLE_FIELDS + ("role", "is_active")


class UserService:
    @staticmethod
    @transaction.atomic
    def create(
        *,
        organization_id: UUID,
        email: str,
        password: str,
        first_name: str,
        last_name: str,
        role: str = UserRole.USER,
        actor_id: UUID | None = None,
    ):
        User = get_user_model()
        email = email.strip().lower()

        if role == UserRole.SUPER_ADMIN:
            raise ValidationError({"role": "SUPER_ADMIN cannot be assigned here."})

        if User.objects.filter(email=email).exists():
            raise ConflictError("Email already registered.", code="EMAIL_EXISTS")

        org = Organization.objects.select_for_update().get(id=organization_id)
        max_users = org.limit("maxUsers")
        if max_users is not None:
            current = User.objects.filter(organization_id=organization_id).count()
            if current >= max_users:
                raise BusinessRuleError(
                    f"User limit reached for this plan ({max_users}).",
                    code="USER_LIMIT_REACHED",
                )

        user = User.objects.create_user(
            email=email,
            password=password,
            first_name=first_name,
            last_name=last_name,
            role=role,
            organization_id=organization_id,
        )

        ActivityService.log(
            organization_id=organization_id,
            user_id=actor_id,
            entity_type=ActivityEntity.USER,
            entity_id=user.id,
            action=ActivityAction.CREATE,
            description=f"User {user.email} created with role {role}",
        )
        return user

    @staticmethod
    @transaction.atomic
    def update(*, user, data: dict[str, Any], actor_is_admin: bool):
        User = get_user_model()
        allowed = ADMIN_EDITABLE_FIELDS if actor_is_admin else SELF_EDITABLE_FIELDS

        forbidden = [k for k in ("role", "is_active") if k in data and k not in allowed]
        if forbidden:
            raise BusinessRuleError(
                "Only administrators can change role or active status.",
                code="INSUFFICIENT_PERMISSIONS",
            )

        if data.get("role") == UserRole.SUPER_ADMIN and user.role != UserRole.SUPER_ADMIN:
            raise ValidationError({"role": "SUPER_ADMIN cannot be assigned here."})

        if "email" in data:
            email = data["email"].strip().lower()
            if User.objects.filter(email=email).exclude(id=user.id).exists():
                raise ConflictError("Email already registered.", code="EMAIL_EXISTS")
            data = {**data, "email": email}

        changed = []
        for field in allowed:
            if field in data:
                setattr(user, field, data[field])
                changed.append(field)

        if changed:
            user.save(update_fields=changed + ["updated_at"])
        return user

    @staticmethod
    def change_password(*, user, new_password: str, current_password: str | None, require_current: bool):
        if require_current and not user.check_password(current_password or ""):
            raise BusinessRuleError("Current password is incorrect.", code="INVALID_CURRENT_PASSWORD")
        if len(new_password or "") < 8:
            raise ValidationError({"new_password": "Password must be at least 8 characters."})

        user.set_password(new_password)
        user.save(update_fields=["password", "updated_at"])
        return user

    @staticmethod
    @transaction.atomic
    def set_active(*, user, active: bool, actor_id: UUID):
        if not active and user.id == actor_id:
            raise BusinessRuleError("You cannot deactivate your own account.", code="CANNOT_DEACTIVATE_SELF")

        if user.is_active == active:
            return user

        user.is_active = active
        user.save(update_fields=["is_active", "updated_at"])

        ActivityService.log(
            organization_id=user.organization_id,
            user_id=actor_id,
            entity_type=ActivityEntity.USER,
            entity_id=user.id,
            action=ActivityAction.ACTIVATE if active else ActivityAction.DEACTIVATE,
            description=f"User {user.email} {'activated' if active else 'deactivated'}",
        )
        return user

    @staticmethod
    @transaction.atomic
    def delete(*, user, actor_id: UUID) -> None:
        if user.id == actor_id:
            raise BusinessRuleError("You cannot delete your own account.", code="CANNOT_DELETE_SELF")

        ActivityService.log(
            organization_id=user.organization_id,
            user_id=actor_id,
            entity_type=ActivityEntity.USER,
            entity_id=user.id,
            action=ActivityAction.DELETE,
            description=f"User {user.email} deleted",
        )
        user.delete()
