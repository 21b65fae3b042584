# backend/rentflow/superadmin/api/views.py
from __future__ import annotations

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from rentflow.common.permissions import SuperAdminPermission
from rentflow.superadmin.services import platform_dashboard


class SuperAdminDashboardView(APIView):
    permission_classes = [SuperAdminPermission]

    @extend_schema(tags=["Super admin"], responses={200: OpenApiTypes.OBJECT})
    def get(self, request):
        return Response(platform_dashboard(), status=status.HTTP_200_OK)
