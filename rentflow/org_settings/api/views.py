# backend/rentflow/org_settings/api/views.py
from __future__ import annotations

from django.utils import timezone
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from rentflow.common.api.exceptions import ResourceNotFound
from rentflow.common.permissions import SettingsPermission
from rentflow.common.scope import require_scope
from rentflow.org_settings.api.serializers import PreferencesResponseSerializer, PreferencesSerializer
from rentflow.org_settings.services import export_organization, preferences_for, update_preferences
from rentflow.organizations.api.serializers import (
    OrganizationSerializer,
    OrganizationUpdateSerializer,
    SubscriptionSerializer,
)
from rentflow.organizations.models import Organization
from rentflow.organizations.selectors import latest_subscription
from rentflow.organizations.services import OrganizationService


class SettingsViewSet(viewsets.ViewSet):
    """
    /settings/organization   GET/PUT  (PUT: ADMIN)
    /settings/preferences    GET/PUT  (per user)
    /settings/subscription   GET
    /settings/export         GET      (ADMIN)
    """
    permission_classes = [SettingsPermission]

    @extend_schema(
        tags=["Settings"],
        methods=["GET"],
        responses={200: OrganizationSerializer},
    )
    @extend_schema(
        tags=["Settings"],
        methods=["PUT"],
        request=OrganizationUpdateSerializer,
        responses={200: OpenApiTypes.OBJECT},
    )
    @action(detail=False, methods=["get", "put"], url_path="organization")
    def organization(self, request):
        ctx = require_scope(request)

        if request.method == "GET":
            org = Organization.objects.get(id=ctx.organization_id)
            return Response(OrganizationSerializer(org).data, status=status.HTTP_200_OK)

        ser = OrganizationUpdateSerializer(data=request.data, context={"is_super_admin": ctx.is_super_admin})
        ser.is_valid(raise_exception=True)
        org = OrganizationService.update(organization_id=ctx.organization_id, data=ser.validated_data, actor_id=ctx.user_id)
        return Response(
            {"message": "Organization settings updated successfully", "organization": OrganizationSerializer(org).data},
            status=status.HTTP_200_OK,
        )

    @extend_schema(tags=["Settings"], methods=["GET"], responses={200: OpenApiTypes.OBJECT})
    @extend_schema(tags=["Settings"], methods=["PUT"], request=PreferencesSerializer, responses={200: PreferencesResponseSerializer})
    @action(detail=False, methods=["get", "put"], url_path="preferences")
    def preferences(self, request):
        if request.method == "GET":
            return Response(preferences_for(request.user), status=status.HTTP_200_OK)

        ser = PreferencesSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        prefs = update_preferences(user_id=request.user.id, data=ser.validated_data)
        return Response({"message": "Preferences updated successfully", "preferences": prefs}, status=status.HTTP_200_OK)

    @extend_schema(tags=["Settings"], responses={200: SubscriptionSerializer})
    @action(detail=False, methods=["get"], url_path="subscription")
    def subscription(self, request):
        ctx = require_scope(request)
        sub = latest_subscription(organization_id=ctx.organization_id)
        if sub is None:
            raise ResourceNotFound("Subscription not found.", code="SUBSCRIPTION_NOT_FOUND")
        return Response(SubscriptionSerializer(sub).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Settings"], responses={200: OpenApiTypes.OBJECT})
    @action(detail=False, methods=["get"], url_path="export")
    def export(self, request):
        ctx = require_scope(request)
        data = export_organization(organization_id=ctx.organization_id)
        response = Response(data, status=status.HTTP_200_OK)
        response["Content-Disposition"] = f'attachment; filename="rentflow-export-{timezone.now().date().isoformat()}.json"'
        return response
