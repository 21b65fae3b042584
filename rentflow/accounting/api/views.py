# backend/rentflow/accounting/api/views.py
from __future__ import annotations

from uuid import UUID

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema, extend_schema_view
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from rentflow.accounting.api.serializers import (
    AccountingEntrySerializer,
    AccountingEntryWriteSerializer,
    LedgerReportQuerySerializer,
    LedgerReportSerializer,
)
from rentflow.accounting.filters import AccountingEntryFilter
from rentflow.accounting.models import AccountingEntry
from rentflow.accounting.services import AccountingService, ledger_report
from rentflow.common.api.pagination import paginate
from rentflow.common.permissions import AccountingPermission
from rentflow.common.scope import require_scope
from rentflow.realtime.broadcast import emit_to_organization


def _qs(organization_id):
    return (
        AccountingEntry.objects.filter(organization_id=organization_id)
        .select_related("created_by")
        .order_by("-date", "-created_at")
    )


@extend_schema_view(
    list=extend_schema(
        tags=["Accounting"],
        parameters=[
            OpenApiParameter("from", OpenApiTypes.DATE, OpenApiParameter.QUERY),
            OpenApiParameter("to", OpenApiTypes.DATE, OpenApiParameter.QUERY),
        ],
        responses={200: AccountingEntrySerializer(many=True)},
    ),
    retrieve=extend_schema(tags=["Accounting"], responses={200: AccountingEntrySerializer}),
    create=extend_schema(tags=["Accounting"], request=AccountingEntryWriteSerializer, responses={201: AccountingEntrySerializer}),
    update=extend_schema(tags=["Accounting"], request=AccountingEntryWriteSerializer, responses={200: AccountingEntrySerializer}),
    partial_update=extend_schema(tags=["Accounting"], request=AccountingEntryWriteSerializer, responses={200: AccountingEntrySerializer}),
    destroy=extend_schema(tags=["Accounting"], responses={204: None}),
)
class AccountingEntryViewSet(viewsets.GenericViewSet):
    """
    Ledger of manual income/expense entries.
    Filters: type, from, to, concept (contains), property, unit, contract.
    """
    permission_classes = [AccountingPermission]
    lookup_value_regex = r"[0-9a-fA-F-]{36}"

    serializer_class = AccountingEntrySerializer
    queryset = AccountingEntry.objects.none()
    filterset_class = AccountingEntryFilter
    ordering_fields = ["date", "amount", "created_at"]

    def list(self, request):
        ctx = require_scope(request)
        qs = self.filter_queryset(_qs(ctx.organization_id))
        return paginate(request, qs, AccountingEntrySerializer)

    def retrieve(self, request, pk=None):
        ctx = require_scope(request)
        obj = _qs(ctx.organization_id).get(id=UUID(str(pk)))
        return Response(AccountingEntrySerializer(obj).data, status=status.HTTP_200_OK)

    def create(self, request):
        ctx = require_scope(request)
        ser = AccountingEntryWriteSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        entry = AccountingService.create(organization_id=ctx.organization_id, actor_id=ctx.user_id, data=ser.validated_data)
        data = AccountingEntrySerializer(entry).data
        emit_to_organization(ctx.organization_id, "accounting:created", data, ctx.as_actor())
        return Response(data, status=status.HTTP_201_CREATED)

    def partial_update(self, request, pk=None):
        ctx = require_scope(request)
        ser = AccountingEntryWriteSerializer(data=request.data, partial=True)
        ser.is_valid(raise_exception=True)

        entry = AccountingService.update(organization_id=ctx.organization_id, entry_id=UUID(str(pk)), data=ser.validated_data)
        data = AccountingEntrySerializer(entry).data
        emit_to_organization(ctx.organization_id, "accounting:updated", data, ctx.as_actor())
        return Response(data, status=status.HTTP_200_OK)

    def update(self, request, pk=None):
        return self.partial_update(request, pk=pk)

    def destroy(self, request, pk=None):
        ctx = require_scope(request)
        AccountingService.delete(organization_id=ctx.organization_id, entry_id=UUID(str(pk)))
        emit_to_organization(ctx.organization_id, "accounting:deleted", {"id": str(pk)}, ctx.as_actor())
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        tags=["Accounting"],
        parameters=[
            OpenApiParameter("from", OpenApiTypes.DATE, OpenApiParameter.QUERY),
            OpenApiParameter("to", OpenApiTypes.DATE, OpenApiParameter.QUERY),
            OpenApiParameter("group_by", OpenApiTypes.STR, OpenApiParameter.QUERY, enum=["month", "day"]),
        ],
        responses={200: LedgerReportSerializer},
    )
    @action(detail=False, methods=["get"], url_path="report")
    def report(self, request):
        ctx = require_scope(request)
        q = LedgerReportQuerySerializer(
            data={
                k: v
                for k, v in {
                    "date_from": request.query_params.get("from"),
                    "date_to": request.query_params.get("to"),
                    "group_by": request.query_params.get("group_by") or request.query_params.get("groupBy"),
                }.items()
                if v
            }
        )
        q.is_valid(raise_exception=True)

        report = ledger_report(organization_id=ctx.organization_id, **q.validated_data)
        return Response(LedgerReportSerializer(report).data, status=status.HTTP_200_OK)
