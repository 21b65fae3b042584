# backend/rentflow/iam/api/users.py
from __future__ import annotations

from uuid import UUID

from django.contrib.auth import get_user_model
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema, extend_schema_view
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from rentflow.common.api.exceptions import InsufficientPermissions
from rentflow.common.api.pagination import paginate
from rentflow.common.permissions import ROLE_ADMIN, STAFF_ROLES, UserPermission
from rentflow.common.scope import AuthContext, require_scope
from rentflow.iam.api.serializers import (
    PasswordChangeSerializer,
    UserCreateSerializer,
    UserSerializer,
    UserUpdateSerializer,
)
from rentflow.iam.selectors import users_in_organization
from rentflow.iam.services.users import UserService

User = get_user_model()


def _is_admin(ctx: AuthContext) -> bool:
    return ctx.is_super_admin or ctx.role == ROLE_ADMIN


def _is_staff(ctx: AuthContext) -> bool:
    return ctx.is_super_admin or ctx.role in STAFF_ROLES


def _get_user(ctx: AuthContext, pk) -> "User":
    return User.objects.get(id=UUID(str(pk)), organization_id=ctx.organization_id)


@extend_schema_view(
    list=extend_schema(
        tags=["Users"],
        responses={200: UserSerializer(many=True)},
        parameters=[
            OpenApiParameter(name="role", type=OpenApiTypes.STR, location=OpenApiParameter.QUERY, required=False),
            OpenApiParameter(name="is_active", type=OpenApiTypes.BOOL, location=OpenApiParameter.QUERY, required=False),
            OpenApiParameter(name="search", type=OpenApiTypes.STR, location=OpenApiParameter.QUERY, required=False),
        ],
    ),
    retrieve=extend_schema(tags=["Users"], responses={200: UserSerializer}),
    create=extend_schema(tags=["Users"], request=UserCreateSerializer, responses={201: UserSerializer}),
    partial_update=extend_schema(tags=["Users"], request=UserUpdateSerializer, responses={200: UserSerializer}),
    update=extend_schema(tags=["Users"], request=UserUpdateSerializer, responses={200: UserSerializer}),
    destroy=extend_schema(tags=["Users"], responses={204: None}),
    password=extend_schema(tags=["Users"], request=PasswordChangeSerializer, responses={200: UserSerializer}),
    activate=extend_schema(tags=["Users"], request=None, responses={200: UserSerializer}),
    deactivate=extend_schema(tags=["Users"], request=None, responses={200: UserSerializer}),
)
class UserViewSet(viewsets.ViewSet):
    """
    Organization members.
    - list: ADMIN/MANAGER
    - retrieve: self or ADMIN/MANAGER
    - update/password: self or ADMIN (only ADMIN changes role/is_active)
    - create/activate/deactivate/delete: ADMIN
    """

    permission_classes = [UserPermission]
    lookup_value_regex = r"[0-9a-fA-F-]{36}"

    serializer_class = UserSerializer
    queryset = User.objects.none()

    def list(self, request):
        ctx = require_scope(request)

        raw_active = request.query_params.get("is_active")
        qs = users_in_organization(
            organization_id=ctx.organization_id,
            role=request.query_params.get("role") or None,
            is_active=None if raw_active in (None, "") else raw_active.lower() in ("1", "true", "yes"),
            search=request.query_params.get("search") or None,
        )
        return paginate(request, qs, UserSerializer)

    def retrieve(self, request, pk=None):
        ctx = require_scope(request)
        user = _get_user(ctx, pk)
        if user.id != ctx.user_id and not _is_staff(ctx):
            raise InsufficientPermissions()
        return Response(UserSerializer(user).data, status=status.HTTP_200_OK)

    def create(self, request):
        ctx = require_scope(request)
        ser = UserCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        user = UserService.create(organization_id=ctx.organization_id, actor_id=ctx.user_id, **ser.validated_data)
        return Response(UserSerializer(user).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request, pk=None):
        ctx = require_scope(request)
        user = _get_user(ctx, pk)
        if user.id != ctx.user_id and not _is_admin(ctx):
            raise InsufficientPermissions()

        ser = UserUpdateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        user = UserService.update(user=user, data=dict(ser.validated_data), actor_is_admin=_is_admin(ctx))
        return Response(UserSerializer(user).data, status=status.HTTP_200_OK)

    def update(self, request, pk=None):
        return self.partial_update(request, pk=pk)

    def destroy(self, request, pk=None):
        ctx = require_scope(request)
        user = _get_user(ctx, pk)
        UserService.delete(user=user, actor_id=ctx.user_id)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=["put", "post"], url_path="password")
    def password(self, request, pk=None):
        ctx = require_scope(request)
        user = _get_user(ctx, pk)
        is_self = user.id == ctx.user_id
        if not is_self and not _is_admin(ctx):
            raise InsufficientPermissions()

        ser = PasswordChangeSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        UserService.change_password(
            user=user,
            new_password=ser.validated_data["new_password"],
            current_password=ser.validated_data.get("current_password"),
            require_current=is_self,
        )
        return Response(UserSerializer(user).data, status=status.HTTP_200_OK)

    @action(detail=True, methods=["post"], url_path="activate")
    def activate(self, request, pk=None):
        ctx = require_scope(request)
        user = UserService.set_active(user=_get_user(ctx, pk), active=True, actor_id=ctx.user_id)
        return Response(UserSerializer(user).data, status=status.HTTP_200_OK)

    @action(detail=True, methods=["post"], url_path="deactivate")
    def deactivate(self, request, pk=None):
        ctx = require_scope(request)
        user = UserService.set_active(user=_get_user(ctx, pk), active=False, actor_id=ctx.user_id)
        return Response(UserSerializer(user).data, status=status.HTTP_200_OK)
