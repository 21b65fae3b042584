# backend/rentflow/common/api/exceptions.py

from __future__ import annotations

import logging
import traceback
import uuid
from typing import Any

from django.conf import settings
from django.core.exceptions import ObjectDoesNotExist, RequestDataTooBig
from django.db import DatabaseError, IntegrityError
from django.http import Http404, JsonResponse
from rest_framework import status
from rest_framework.exceptions import (
    APIException,
    AuthenticationFailed,
    ErrorDetail,
    NotAuthenticated,
    PermissionDenied,
    Throttled,
    ValidationError,
)
from rest_framework.response import Response

logger = logging.getLogger(__name__)

GENERIC_500_MESSAGE = "Internal Server Error"


def ensure_request_id(request) -> str:
    """
    Ensures request has a stable request_id attribute and returns it.
    Safe to call from middleware and DRF exception handler.
    """
    rid = getattr(request, "request_id", None) if request is not None else None
    if not rid:
        rid = uuid.uuid4().hex
        if request is not None:
            setattr(request, "request_id", rid)
    return rid


def build_error_envelope(*, request=None, code: str, message: str, details: Any = None) -> dict[str, Any]:
    """
    Canonical error envelope:
      {"error": "<message>", "code": "<CODE>", "details": ..., "request_id": "<hex>"}

    `details` is omitted when there is nothing to add.
    Reusable from Django middleware (JsonResponse) and DRF (Response).
    """
    body: dict[str, Any] = {
        "error": message,
        "code": code,
    }
    if details is not None:
        body["details"] = details
    body["request_id"] = ensure_request_id(request)
    return body


class RentflowAPIException(APIException):
    """
    APIException whose `code` is the public error code.

    Pass `code=` per raise to refine it:
        raise BusinessRuleError("Cannot delete...", code="PROPERTY_HAS_ACTIVE_CONTRACTS")
    """

    def __init__(self, detail=None, code=None):
        super().__init__(detail=detail or self.default_detail, code=code or self.default_code)


class BusinessRuleError(RentflowAPIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "The request violates a business rule."
    default_code = "BUSINESS_RULE_VIOLATION"


class ConflictError(RentflowAPIException):
    """
    409 Conflict that still flows through the global exception handler.
    Use when a uniqueness rule blocks an action (e.g. email already registered).
    """
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Conflict."
    default_code = "CONFLICT"


class TokenRequired(RentflowAPIException):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Access token required."
    default_code = "TOKEN_REQUIRED"


class InvalidToken(RentflowAPIException):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Invalid token."
    default_code = "INVALID_TOKEN"


class TokenExpired(RentflowAPIException):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Token expired."
    default_code = "TOKEN_EXPIRED"


class UserNotFound(RentflowAPIException):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "User not found or inactive."
    default_code = "USER_NOT_FOUND"


class OrganizationInactive(RentflowAPIException):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Organization is inactive."
    default_code = "ORGANIZATION_INACTIVE"


class OrganizationAccessDenied(RentflowAPIException):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Access denied to this organization."
    default_code = "ORGANIZATION_ACCESS_DENIED"


class InsufficientPermissions(RentflowAPIException):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Insufficient permissions."
    default_code = "INSUFFICIENT_PERMISSIONS"


class ResourceNotFound(RentflowAPIException):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Resource not found."
    default_code = "RESOURCE_NOT_FOUND"


def _detail_code(exc: APIException) -> str | None:
    detail = getattr(exc, "detail", None)
    if isinstance(detail, ErrorDetail) and detail.code and detail.code.isupper():
        return str(detail.code)
    return None


def _code_for(exc: Exception, http_status: int) -> str:
    if isinstance(exc, ValidationError):
        return "VALIDATION_ERROR"
    if isinstance(exc, RentflowAPIException):
        return _detail_code(exc) or exc.default_code
    if isinstance(exc, NotAuthenticated):
        return "TOKEN_REQUIRED"
    if isinstance(exc, AuthenticationFailed):
        return _detail_code(exc) or "INVALID_TOKEN"
    if isinstance(exc, PermissionDenied):
        return _detail_code(exc) or "INSUFFICIENT_PERMISSIONS"
    if isinstance(exc, Throttled):
        return "RATE_LIMIT_EXCEEDED"
    if isinstance(exc, Http404):
        return "NOT_FOUND"
    if isinstance(exc, APIException):
        return _detail_code(exc) or str(getattr(exc, "default_code", "API_ERROR")).upper()
    if http_status >= 500:
        return "INTERNAL_ERROR"
    return "ERROR"


def _database_error_response(exc: Exception) -> tuple[int, str, str] | None:
    """
    Map ORM/driver errors to (status, code, message).
    Returns None for anything that is not a database error.
    """
    if isinstance(exc, ObjectDoesNotExist):
        return status.HTTP_404_NOT_FOUND, "RESOURCE_NOT_FOUND", "Resource not found."

    if isinstance(exc, IntegrityError):
        text = str(exc).lower()
        if "unique" in text or "duplicate" in text:
            return status.HTTP_409_CONFLICT, "DUPLICATE_RESOURCE", "Resource already exists."
        if "foreign key" in text:
            return status.HTTP_400_BAD_REQUEST, "FOREIGN_KEY_VIOLATION", "Invalid reference to a related resource."
        return status.HTTP_400_BAD_REQUEST, "DATABASE_ERROR", "Database constraint violated."

    if isinstance(exc, DatabaseError):
        return status.HTTP_500_INTERNAL_SERVER_ERROR, "DATABASE_ERROR", "Database operation failed."

    return None


def _server_error_body(request, *, code: str, message: str, exc: Exception) -> dict[str, Any]:
    if not settings.DEBUG:
        message = GENERIC_500_MESSAGE
    body = build_error_envelope(request=request, code=code, message=message)
    if settings.DEBUG:
        body["stack"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return body


def api_exception_handler(exc: Exception, context: dict[str, Any]):
    # rest_framework.views loads the authentication classes, which import this module
    from rest_framework.views import exception_handler as drf_exception_handler

    request = context.get("request")

    if isinstance(exc, RequestDataTooBig):
        return Response(
            build_error_envelope(request=request, code="FILE_TOO_LARGE", message="Request body too large."),
            status=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
        )

    db_mapped = _database_error_response(exc)
    if db_mapped is not None:
        http_status, code, message = db_mapped
        if http_status >= 500:
            logger.exception("database error: %s", exc)
            body = _server_error_body(request, code=code, message=message, exc=exc)
        else:
            logger.info("database constraint error code=%s: %s", code, exc)
            body = build_error_envelope(request=request, code=code, message=message)
        return Response(body, status=http_status)

    response = drf_exception_handler(exc, context)

    # Truly unhandled error
    if response is None:
        logger.exception("unhandled error: %s", exc)
        return Response(
            _server_error_body(request, code="INTERNAL_ERROR", message=str(exc) or "Unexpected server error.", exc=exc),
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    http_status = response.status_code
    code = _code_for(exc, http_status)

    # DRF standardizes errors into response.data
    data = response.data

    # Message + details rules:
    # 1) {"detail": "..."} only -> message=detail, no details
    # 2) {"detail": "...", ...} -> message=detail, details={...without detail}
    # 3) field errors -> message="Validation failed", details=data
    message = "Validation failed" if isinstance(exc, ValidationError) else "Request failed."
    details = data

    if isinstance(data, dict) and "detail" in data:
        message = str(data.get("detail"))
        rest = {k: v for k, v in data.items() if k != "detail"}
        details = rest or None
    elif isinstance(data, list) and len(data) == 1:
        message = str(data[0])
        details = None

    if http_status >= 500:
        body = _server_error_body(request, code=code, message=message, exc=exc)
    else:
        body = build_error_envelope(request=request, code=code, message=message, details=details)

    return Response(body, status=http_status, headers=response.headers)


def json_not_found(request, exception=None):
    """
    handler404: unknown routes answer with the same envelope as the API.
    """
    return JsonResponse(
        build_error_envelope(request=request, code="NOT_FOUND", message=f"Route {request.path} not found."),
        status=status.HTTP_404_NOT_FOUND,
    )
