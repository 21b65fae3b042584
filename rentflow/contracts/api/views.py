# backend/rentflow/contracts/api/views.py
from __future__ import annotations

from uuid import UUID

from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework import status, viewsets
from rest_framework.response import Response

from rentflow.common.api.pagination import paginate
from rentflow.common.permissions import ContractPermission
from rentflow.common.scope import require_scope
from rentflow.contracts.api.serializers import (
    ContractDetailSerializer,
    ContractSerializer,
    ContractWriteSerializer,
)
from rentflow.contracts.filters import ContractFilter
from rentflow.contracts.models import Contract
from rentflow.contracts.selectors import contract_qs
from rentflow.contracts.services import ContractService
from rentflow.realtime.broadcast import emit_to_organization


@extend_schema_view(
    list=extend_schema(tags=["Contracts"], responses={200: ContractSerializer(many=True)}),
    retrieve=extend_schema(tags=["Contracts"], responses={200: ContractDetailSerializer}),
    create=extend_schema(tags=["Contracts"], request=ContractWriteSerializer, responses={201: ContractSerializer}),
    update=extend_schema(tags=["Contracts"], request=ContractWriteSerializer, responses={200: ContractSerializer}),
    partial_update=extend_schema(tags=["Contracts"], request=ContractWriteSerializer, responses={200: ContractSerializer}),
    destroy=extend_schema(tags=["Contracts"], responses={204: None}),
)
class ContractViewSet(viewsets.GenericViewSet):
    """
    Leases. Filters: status, property, tenant, ends_before.
    """
    permission_classes = [ContractPermission]
    lookup_value_regex = r"[0-9a-fA-F-]{36}"

    serializer_class = ContractSerializer
    queryset = Contract.objects.none()
    filterset_class = ContractFilter
    search_fields = ["property__name", "tenant__first_name", "tenant__last_name"]
    ordering_fields = ["start_date", "end_date", "monthly_rent", "created_at"]

    def list(self, request):
        ctx = require_scope(request)
        qs = self.filter_queryset(contract_qs(organization_id=ctx.organization_id))
        return paginate(request, qs, ContractSerializer)

    def retrieve(self, request, pk=None):
        ctx = require_scope(request)
        obj = contract_qs(organization_id=ctx.organization_id, with_payments=True).get(id=UUID(str(pk)))
        return Response(ContractDetailSerializer(obj).data, status=status.HTTP_200_OK)

    def create(self, request):
        ctx = require_scope(request)
        ser = ContractWriteSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        data = dict(ser.validated_data)
        data.pop("action_context", None)
        contract = ContractService.create(organization_id=ctx.organization_id, actor_id=ctx.user_id, data=data)

        out = ContractSerializer(contract).data
        emit_to_organization(ctx.organization_id, "contract:created", out, ctx.as_actor())
        return Response(out, status=status.HTTP_201_CREATED)

    def partial_update(self, request, pk=None):
        ctx = require_scope(request)
        ser = ContractWriteSerializer(data=request.data, partial=True)
        ser.is_valid(raise_exception=True)

        data = dict(ser.validated_data)
        action_context = data.pop("action_context", None)
        contract = ContractService.update(
            organization_id=ctx.organization_id,
            contract_id=UUID(str(pk)),
            actor_id=ctx.user_id,
            data=data,
            action_context=action_context,
        )

        out = ContractSerializer(contract).data
        emit_to_organization(ctx.organization_id, "contract:updated", out, ctx.as_actor())
        return Response(out, status=status.HTTP_200_OK)

    def update(self, request, pk=None):
        return self.partial_update(request, pk=pk)

    def destroy(self, request, pk=None):
        ctx = require_scope(request)
        ContractService.delete(organization_id=ctx.organization_id, contract_id=UUID(str(pk)), actor_id=ctx.user_id)
        emit_to_organization(ctx.organization_id, "contract:deleted", {"id": str(pk)}, ctx.as_actor())
        return Response(status=status.HTTP_204_NO_CONTENT)
