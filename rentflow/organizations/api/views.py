# backend/rentflow/organizations/api/views.py
from __future__ import annotations

from uuid import UUID

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema, extend_schema_view
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from rentflow.common.api.exceptions import OrganizationAccessDenied
from rentflow.common.api.pagination import paginate
from rentflow.common.permissions import OrganizationPermission, SuperAdminPermission, is_super_admin
from rentflow.organizations.api.serializers import (
    OrganizationListSerializer,
    OrganizationSerializer,
    OrganizationUpdateSerializer,
    PlanBulkUpdateSerializer,
    PlanCreateSerializer,
    PlanSerializer,
    SubscriptionSerializer,
    SubscriptionUpdateSerializer,
)
from rentflow.organizations.models import Organization, Plan
from rentflow.organizations.selectors import organizations_with_counts, public_plans
from rentflow.organizations.services import OrganizationService, PlanService

UUID_LOOKUP = r"[0-9a-fA-F-]{36}"


def _assert_own_organization(request, organization_id: UUID) -> None:
    user = request.user
    if is_super_admin(user):
        return
    if getattr(user, "organization_id", None) != organization_id:
        raise OrganizationAccessDenied()


@extend_schema_view(
    list=extend_schema(
        tags=["Organizations"],
        responses={200: OrganizationListSerializer(many=True)},
        parameters=[
            OpenApiParameter(name="is_active", type=OpenApiTypes.BOOL, location=OpenApiParameter.QUERY, required=False),
            OpenApiParameter(name="search", type=OpenApiTypes.STR, location=OpenApiParameter.QUERY, required=False),
        ],
    ),
    retrieve=extend_schema(tags=["Organizations"], responses={200: OrganizationSerializer}),
    partial_update=extend_schema(tags=["Organizations"], request=OrganizationUpdateSerializer, responses={200: OrganizationSerializer}),
    activate=extend_schema(tags=["Organizations"], request=None, responses={200: OrganizationSerializer}),
    deactivate=extend_schema(tags=["Organizations"], request=None, responses={200: OrganizationSerializer}),
    subscription=extend_schema(tags=["Organizations"], request=SubscriptionUpdateSerializer, responses={200: SubscriptionSerializer}),
)
class OrganizationViewSet(viewsets.ViewSet):
    """
    Organizations:
    - list: SUPER_ADMIN only (with usage counts + latest subscription)
    - retrieve/update: own organization (ADMIN for update) or SUPER_ADMIN
    - activate/deactivate/subscription: SUPER_ADMIN only
    Routing is centralized in rentflow/api/urls.py.
    """

    permission_classes = [OrganizationPermission]
    lookup_value_regex = UUID_LOOKUP

    serializer_class = OrganizationSerializer
    queryset = Organization.objects.none()

    def list(self, request):
        raw_active = request.query_params.get("is_active")
        is_active = None if raw_active in (None, "") else raw_active.lower() in ("1", "true", "yes")
        qs = organizations_with_counts(is_active=is_active, search=request.query_params.get("search") or None)
        return paginate(request, qs, OrganizationListSerializer)

    def retrieve(self, request, pk=None):
        org_id = UUID(str(pk))
        _assert_own_organization(request, org_id)
        org = Organization.objects.get(id=org_id)
        return Response(OrganizationSerializer(org).data, status=status.HTTP_200_OK)

    def partial_update(self, request, pk=None):
        org_id = UUID(str(pk))
        _assert_own_organization(request, org_id)

        ser = OrganizationUpdateSerializer(data=request.data, context={"is_super_admin": is_super_admin(request.user)})
        ser.is_valid(raise_exception=True)

        org = OrganizationService.update(organization_id=org_id, data=ser.validated_data, actor_id=request.user.id)
        return Response(OrganizationSerializer(org).data, status=status.HTTP_200_OK)

    def update(self, request, pk=None):
        return self.partial_update(request, pk=pk)

    @action(detail=True, methods=["post"], url_path="activate")
    def activate(self, request, pk=None):
        org = OrganizationService.set_active(organization_id=UUID(str(pk)), active=True, actor_id=request.user.id)
        return Response(OrganizationSerializer(org).data, status=status.HTTP_200_OK)

    @action(detail=True, methods=["post"], url_path="deactivate")
    def deactivate(self, request, pk=None):
        org = OrganizationService.set_active(organization_id=UUID(str(pk)), active=False, actor_id=request.user.id)
        return Response(OrganizationSerializer(org).data, status=status.HTTP_200_OK)

    @action(detail=True, methods=["patch"], url_path="subscription")
    def subscription(self, request, pk=None):
        ser = SubscriptionUpdateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        sub = OrganizationService.update_subscription(
            organization_id=UUID(str(pk)),
            plan_id=ser.validated_data.get("plan_id"),
            status=ser.validated_data.get("status"),
            current_period_end=ser.validated_data.get("current_period_end"),
            actor_id=request.user.id,
        )
        return Response(SubscriptionSerializer(sub).data, status=status.HTTP_200_OK)


@extend_schema_view(
    public=extend_schema(tags=["Plans"], responses={200: PlanSerializer(many=True)}),
)
class PublicPlanViewSet(viewsets.ViewSet):
    """
    Plans shown on the pricing/registration page. No auth.
    """
    permission_classes = [AllowAny]
    authentication_classes: list = []

    serializer_class = PlanSerializer
    queryset = Plan.objects.none()

    @action(detail=False, methods=["get"], url_path="public")
    def public(self, request):
        return Response(PlanSerializer(public_plans(), many=True).data, status=status.HTTP_200_OK)


@extend_schema_view(
    list=extend_schema(tags=["Super admin"], responses={200: PlanSerializer(many=True)}),
    create=extend_schema(tags=["Super admin"], request=PlanCreateSerializer, responses={201: PlanSerializer}),
    bulk_update=extend_schema(tags=["Super admin"], request=PlanBulkUpdateSerializer, responses={200: PlanSerializer(many=True)}),
)
class PlanAdminViewSet(viewsets.ViewSet):
    """
    Plan catalogue management (SUPER_ADMIN).
    """
    permission_classes = [SuperAdminPermission]

    serializer_class = PlanSerializer
    queryset = Plan.objects.none()

    def list(self, request):
        qs = Plan.objects.all().order_by("price", "id")
        return Response(PlanSerializer(qs, many=True).data, status=status.HTTP_200_OK)

    def create(self, request):
        ser = PlanCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        data = ser.validated_data

        plan = PlanService.create(
            plan_id=data["id"],
            name=data["name"],
            price=data["price"],
            features=data.get("features"),
            limits=data.get("limits"),
            is_active=data.get("is_active", True),
            actor_id=request.user.id,
            actor_organization_id=getattr(request.user, "organization_id", None),
        )
        return Response(PlanSerializer(plan).data, status=status.HTTP_201_CREATED)

    @action(detail=False, methods=["patch"], url_path="bulk")
    def bulk_update(self, request):
        ser = PlanBulkUpdateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        plans = PlanService.bulk_update(
            changes=ser.validated_data["plans"],
            actor_id=request.user.id,
            actor_organization_id=getattr(request.user, "organization_id", None),
        )
        return Response(PlanSerializer(plans, many=True).data, status=status.HTTP_200_OK)
