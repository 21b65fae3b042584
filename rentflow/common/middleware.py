from __future__ import annotations

import logging
import time
from uuid import UUID

from django.http import JsonResponse
from django.utils.deprecation import MiddlewareMixin

from rentflow.common.api.exceptions import build_error_envelope, ensure_request_id
from rentflow.common.scope import INVALID_ORGANIZATION_MSG

logger = logging.getLogger(__name__)


class OrganizationScopeMiddleware(MiddlewareMixin):
    """
    Request bookkeeping for the API.

    Behavior:
      - Every request gets request.request_id (inbound X-Request-ID is honoured)
        and the response echoes it back.
      - For /api/* (except docs/schema): a present but malformed X-Organization-ID
        is rejected with 400 before any view runs. Membership is checked later by
        require_scope(), once JWT authentication has happened.
      - One access log line per API request.
    """

    ORGANIZATION_META_KEY = "HTTP_X_ORGANIZATION_ID"
    REQUEST_ID_META_KEY = "HTTP_X_REQUEST_ID"

    ENFORCED_PREFIXES = ("/api/",)

    PUBLIC_PATH_PREFIXES = (
        "/admin/",
        "/api/docs/",
        "/api/schema/",
    )

    def _is_api_path(self, path: str) -> bool:
        return any(path.startswith(p) for p in self.ENFORCED_PREFIXES)

    def _starts_with_any(self, path: str, prefixes: tuple[str, ...]) -> bool:
        return any(path.startswith(p) for p in prefixes)

    def _json_error(self, request, *, status_code: int, code: str, message: str, details=None) -> JsonResponse:
        return JsonResponse(
            build_error_envelope(
                request=request,
                code=code,
                message=message,
                details=details,
            ),
            status=status_code,
        )

    def process_request(self, request):
        inbound = request.META.get(self.REQUEST_ID_META_KEY)
        if inbound:
            request.request_id = inbound[:64]
        ensure_request_id(request)
        request._started_at = time.monotonic()

        path = getattr(request, "path", "") or ""

        if self._starts_with_any(path, self.PUBLIC_PATH_PREFIXES):
            return None

        if not self._is_api_path(path):
            return None

        raw = request.META.get(self.ORGANIZATION_META_KEY)
        if raw:
            try:
                UUID(str(raw))
            except ValueError:
                return self._json_error(
                    request,
                    status_code=400,
                    code="INVALID_ORGANIZATION_ID",
                    message=INVALID_ORGANIZATION_MSG,
                )
        return None

    def process_response(self, request, response):
        rid = getattr(request, "request_id", None)
        if rid:
            response["X-Request-ID"] = rid

        path = getattr(request, "path", "") or ""
        if self._is_api_path(path):
            started = getattr(request, "_started_at", None)
            elapsed_ms = (time.monotonic() - started) * 1000 if started is not None else 0.0
            logger.info(
                "%s %s %s %.1fms rid=%s",
                request.method,
                path,
                response.status_code,
                elapsed_ms,
                rid,
            )
        return response
