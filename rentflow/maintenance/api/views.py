# backend/rentflow/maintenance/api/views.py
from __future__ import annotations

from uuid import UUID

from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework import status, viewsets
from rest_framework.response import Response

from rentflow.common.api.pagination import paginate
from rentflow.common.permissions import MaintenancePermission
from rentflow.common.scope import require_scope
from rentflow.maintenance.api.serializers import MaintenanceRequestSerializer, MaintenanceWriteSerializer
from rentflow.maintenance.filters import MaintenanceFilter
from rentflow.maintenance.models import MaintenanceRequest
from rentflow.maintenance.services import MaintenanceService
from rentflow.realtime.broadcast import emit_to_organization


def _qs(organization_id):
    return (
        MaintenanceRequest.objects.filter(organization_id=organization_id)
        .select_related("property", "tenant")
        .order_by("-reported_date")
    )


@extend_schema_view(
    list=extend_schema(tags=["Maintenance"], responses={200: MaintenanceRequestSerializer(many=True)}),
    retrieve=extend_schema(tags=["Maintenance"], responses={200: MaintenanceRequestSerializer}),
    create=extend_schema(tags=["Maintenance"], request=MaintenanceWriteSerializer, responses={201: MaintenanceRequestSerializer}),
    update=extend_schema(tags=["Maintenance"], request=MaintenanceWriteSerializer, responses={200: MaintenanceRequestSerializer}),
    partial_update=extend_schema(tags=["Maintenance"], request=MaintenanceWriteSerializer, responses={200: MaintenanceRequestSerializer}),
    destroy=extend_schema(tags=["Maintenance"], responses={204: None}),
)
class MaintenanceViewSet(viewsets.GenericViewSet):
    permission_classes = [MaintenancePermission]
    lookup_value_regex = r"[0-9a-fA-F-]{36}"

    serializer_class = MaintenanceRequestSerializer
    queryset = MaintenanceRequest.objects.none()
    filterset_class = MaintenanceFilter
    search_fields = ["title", "description", "assigned_to"]
    ordering_fields = ["reported_date", "priority", "status", "created_at"]

    def list(self, request):
        ctx = require_scope(request)
        qs = self.filter_queryset(_qs(ctx.organization_id))
        return paginate(request, qs, MaintenanceRequestSerializer)

    def retrieve(self, request, pk=None):
        ctx = require_scope(request)
        obj = _qs(ctx.organization_id).get(id=UUID(str(pk)))
        return Response(MaintenanceRequestSerializer(obj).data, status=status.HTTP_200_OK)

    def create(self, request):
        ctx = require_scope(request)
        ser = MaintenanceWriteSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        req = MaintenanceService.create(organization_id=ctx.organization_id, actor_id=ctx.user_id, data=ser.validated_data)
        data = MaintenanceRequestSerializer(req).data
        emit_to_organization(ctx.organization_id, "maintenance:created", data, ctx.as_actor())
        return Response(data, status=status.HTTP_201_CREATED)

    def partial_update(self, request, pk=None):
        ctx = require_scope(request)
        ser = MaintenanceWriteSerializer(data=request.data, partial=True)
        ser.is_valid(raise_exception=True)

        req = MaintenanceService.update(
            organization_id=ctx.organization_id,
            request_id=UUID(str(pk)),
            actor_id=ctx.user_id,
            data=ser.validated_data,
        )
        data = MaintenanceRequestSerializer(req).data
        emit_to_organization(ctx.organization_id, "maintenance:updated", data, ctx.as_actor())
        return Response(data, status=status.HTTP_200_OK)

    def update(self, request, pk=None):
        return self.partial_update(request, pk=pk)

    def destroy(self, request, pk=None):
        ctx = require_scope(request)
        MaintenanceService.delete(organization_id=ctx.organization_id, request_id=UUID(str(pk)), actor_id=ctx.user_id)
        emit_to_organization(ctx.organization_id, "maintenance:deleted", {"id": str(pk)}, ctx.as_actor())
        return Response(status=status.HTTP_204_NO_CONTENT)
