# backend/rentflow/tenants/api/views.py
from __future__ import annotations

from uuid import UUID

from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework import status, viewsets
from rest_framework.response import Response

from rentflow.common.api.pagination import paginate
from rentflow.common.permissions import TenantPermission
from rentflow.common.scope import require_scope
from rentflow.realtime.broadcast import emit_to_organization
from rentflow.tenants.api.serializers import TenantSerializer, TenantWriteSerializer
from rentflow.tenants.filters import TenantFilter
from rentflow.tenants.models import Tenant
from rentflow.tenants.selectors import tenant_qs
from rentflow.tenants.services import TenantService


@extend_schema_view(
    list=extend_schema(tags=["Tenants"], responses={200: TenantSerializer(many=True)}),
    retrieve=extend_schema(tags=["Tenants"], responses={200: TenantSerializer}),
    create=extend_schema(tags=["Tenants"], request=TenantWriteSerializer, responses={201: TenantSerializer}),
    update=extend_schema(tags=["Tenants"], request=TenantWriteSerializer, responses={200: TenantSerializer}),
    partial_update=extend_schema(tags=["Tenants"], request=TenantWriteSerializer, responses={200: TenantSerializer}),
    destroy=extend_schema(tags=["Tenants"], responses={204: None}),
)
class TenantViewSet(viewsets.GenericViewSet):
    """
    Renters of the organization.
    Filters: status, min_credit_score; search: name/email/phone.
    """
    permission_classes = [TenantPermission]
    lookup_value_regex = r"[0-9a-fA-F-]{36}"

    serializer_class = TenantSerializer
    queryset = Tenant.objects.none()
    filterset_class = TenantFilter
    search_fields = ["first_name", "last_name", "email", "phone"]
    ordering_fields = ["last_name", "created_at", "credit_score", "status"]

    def list(self, request):
        ctx = require_scope(request)
        qs = self.filter_queryset(tenant_qs(organization_id=ctx.organization_id))
        return paginate(request, qs, TenantSerializer)

    def retrieve(self, request, pk=None):
        ctx = require_scope(request)
        obj = tenant_qs(organization_id=ctx.organization_id).get(id=UUID(str(pk)))
        return Response(TenantSerializer(obj).data, status=status.HTTP_200_OK)

    def create(self, request):
        ctx = require_scope(request)
        ser = TenantWriteSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        tenant = TenantService.create(organization_id=ctx.organization_id, data=ser.validated_data)
        data = TenantSerializer(tenant).data
        emit_to_organization(ctx.organization_id, "tenant:created", data, ctx.as_actor())
        return Response(data, status=status.HTTP_201_CREATED)

    def partial_update(self, request, pk=None):
        ctx = require_scope(request)
        ser = TenantWriteSerializer(data=request.data, partial=True)
        ser.is_valid(raise_exception=True)

        tenant = TenantService.update(
            organization_id=ctx.organization_id,
            tenant_id=UUID(str(pk)),
            data=ser.validated_data,
        )
        data = TenantSerializer(tenant).data
        emit_to_organization(ctx.organization_id, "tenant:updated", data, ctx.as_actor())
        return Response(data, status=status.HTTP_200_OK)

    def update(self, request, pk=None):
        return self.partial_update(request, pk=pk)

    def destroy(self, request, pk=None):
        ctx = require_scope(request)
        TenantService.delete(organization_id=ctx.organization_id, tenant_id=UUID(str(pk)))
        emit_to_organization(ctx.organization_id, "tenant:deleted", {"id": str(pk)}, ctx.as_actor())
        return Response(status=status.HTTP_204_NO_CONTENT)
