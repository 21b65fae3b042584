# backend/rentflow/activity/api/views.py
from __future__ import annotations

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status, viewsets
from rest_framework.response import Response

from rentflow.activity.api.serializers import ActivityLogSerializer
from rentflow.activity.models import ActivityLog
from rentflow.activity.selectors import list_activity
from rentflow.common.permissions import ActivityLogPermission
from rentflow.common.scope import require_scope

DEFAULT_LIMIT = 10
MAX_LIMIT = 100


def _parse_bool(value: str | None) -> bool | None:
    if value is None or value == "":
        return None
    return value.lower() in ("1", "true", "yes")


class ActivityLogViewSet(viewsets.GenericViewSet):
    """
    Recent activity of the organization (newest first).
    """
    permission_classes = [ActivityLogPermission]

    serializer_class = ActivityLogSerializer
    queryset = ActivityLog.objects.none()

    @extend_schema(
        tags=["Activity"],
        responses={200: ActivityLogSerializer(many=True)},
        parameters=[
            OpenApiParameter(
                name="limit",
                type=OpenApiTypes.INT,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Max records to return (default 10, max 100).",
            ),
            OpenApiParameter(
                name="is_system_action",
                type=OpenApiTypes.BOOL,
                location=OpenApiParameter.QUERY,
                required=False,
            ),
            OpenApiParameter(name="entity_type", type=OpenApiTypes.STR, location=OpenApiParameter.QUERY, required=False),
            OpenApiParameter(name="entity_id", type=OpenApiTypes.STR, location=OpenApiParameter.QUERY, required=False),
        ],
    )
    def list(self, request):
        ctx = require_scope(request)

        qs = list_activity(
            organization_id=ctx.organization_id,
            entity_type=request.query_params.get("entity_type") or None,
            entity_id=request.query_params.get("entity_id") or None,
            is_system_action=_parse_bool(request.query_params.get("is_system_action")),
        )

        limit = request.query_params.get("limit")
        try:
            limit_n = int(limit) if limit else DEFAULT_LIMIT
        except ValueError:
            limit_n = DEFAULT_LIMIT
        limit_n = max(1, min(limit_n, MAX_LIMIT))

        return Response(ActivityLogSerializer(qs[:limit_n], many=True).data, status=status.HTTP_200_OK)
