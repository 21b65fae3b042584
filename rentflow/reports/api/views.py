# backend/rentflow/reports/api/views.py
from __future__ import annotations

import logging

from django.http import HttpResponse
from django.utils import timezone
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from rentflow.common.permissions import ReportPermission
from rentflow.common.scope import require_scope
from rentflow.reports import services
from rentflow.reports.api.serializers import (
    ExportQuerySerializer,
    FinancialQuerySerializer,
    MaintenanceReportQuerySerializer,
    PropertyReportQuerySerializer,
    TenantReportQuerySerializer,
    UnitReportQuerySerializer,
)

logger = logging.getLogger(__name__)


def _query(serializer_class, request) -> dict:
    ser = serializer_class(data=request.query_params)
    ser.is_valid(raise_exception=True)
    return dict(ser.validated_data)


class ReportViewSet(viewsets.ViewSet):
    """
    Organization reports. All read-only; export is ADMIN/MANAGER.
    """
    permission_classes = [ReportPermission]

    @extend_schema(tags=["Reports"], responses={200: OpenApiTypes.OBJECT})
    @action(detail=False, methods=["get"], url_path="dashboard")
    def dashboard(self, request):
        ctx = require_scope(request)
        return Response(services.dashboard_report(organization_id=ctx.organization_id), status=status.HTTP_200_OK)

    @extend_schema(tags=["Reports"], parameters=[FinancialQuerySerializer], responses={200: OpenApiTypes.OBJECT})
    @action(detail=False, methods=["get"], url_path="financial")
    def financial(self, request):
        ctx = require_scope(request)
        params = _query(FinancialQuerySerializer, request)
        return Response(
            services.financial_report(organization_id=ctx.organization_id, **params),
            status=status.HTTP_200_OK,
        )

    @extend_schema(tags=["Reports"], parameters=[PropertyReportQuerySerializer], responses={200: OpenApiTypes.OBJECT})
    @action(detail=False, methods=["get"], url_path="properties")
    def properties(self, request):
        ctx = require_scope(request)
        params = _query(PropertyReportQuerySerializer, request)
        return Response(
            services.property_report(organization_id=ctx.organization_id, **params),
            status=status.HTTP_200_OK,
        )

    @extend_schema(tags=["Reports"], parameters=[TenantReportQuerySerializer], responses={200: OpenApiTypes.OBJECT})
    @action(detail=False, methods=["get"], url_path="tenants")
    def tenants(self, request):
        ctx = require_scope(request)
        params = _query(TenantReportQuerySerializer, request)
        return Response(
            services.tenant_report(organization_id=ctx.organization_id, **params),
            status=status.HTTP_200_OK,
        )

    @extend_schema(tags=["Reports"], parameters=[MaintenanceReportQuerySerializer], responses={200: OpenApiTypes.OBJECT})
    @action(detail=False, methods=["get"], url_path="maintenance")
    def maintenance(self, request):
        ctx = require_scope(request)
        params = _query(MaintenanceReportQuerySerializer, request)
        return Response(
            services.maintenance_report(organization_id=ctx.organization_id, **params),
            status=status.HTTP_200_OK,
        )

    @extend_schema(tags=["Reports"], parameters=[UnitReportQuerySerializer], responses={200: OpenApiTypes.OBJECT})
    @action(detail=False, methods=["get"], url_path="units")
    def units(self, request):
        ctx = require_scope(request)
        params = _query(UnitReportQuerySerializer, request)
        return Response(
            services.unit_report(organization_id=ctx.organization_id, **params),
            status=status.HTTP_200_OK,
        )

    @extend_schema(tags=["Reports"], parameters=[ExportQuerySerializer], responses={200: OpenApiTypes.BINARY})
    @action(detail=False, methods=["get"], url_path="export")
    def export(self, request):
        ctx = require_scope(request)
        params = _query(ExportQuerySerializer, request)
        export_type, fmt = params["type"], params["format"]

        data = services.export_data(organization_id=ctx.organization_id, export_type=export_type)
        now = timezone.now()
        filename = f"rentflow-{export_type}-export-{now.date().isoformat()}.{fmt}"
        logger.info(
            "report export type=%s format=%s org=%s records=%d",
            export_type,
            fmt,
            ctx.organization_id,
            services.record_count(data),
        )

        if fmt == "csv":
            response = HttpResponse(services.to_csv(data), content_type="text/csv; charset=utf-8")
        else:
            response = Response(
                {"export_type": export_type, "format": fmt, "timestamp": now.isoformat(), "data": data},
                status=status.HTTP_200_OK,
            )
        response["Content-Disposition"] = f'attachment; filename="{filename}"'
        return response
