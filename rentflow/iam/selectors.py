# backend/rentflow/iam/selectors.py
from __future__ import annotations

from uuid import UUID

from django.contrib.auth import get_user_model
from django.db.models import Q, QuerySet


def users_in_organization(
    *,
    organization_id: UUID,
    role: str | None = None,
    is_active: bool | None = None,
    search: str | None = None,
) -> QuerySet:
    User = get_user_model()
    qs = User.objects.filter(organization_id=organization_id)

    if role:
        qs = qs.filter(role=role)
    if is_active is not None:
        qs = qs.filter(is_active=is_active)
    if search:
        qs = qs.filter(
            Q(email__icontains=search) | Q(first_name__icontains=search) | Q(last_name__icontains=search)
        )

    return qs.order_by("-date_joined")
