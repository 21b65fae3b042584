# backend/rentflow/common/tests/test_exceptions.py
import pytest
from django.db import IntegrityError
from django.test import RequestFactory
from rest_framework.exceptions import ValidationError

from rentflow.common.api.exceptions import (
    BusinessRuleError,
    ResourceNotFound,
    api_exception_handler,
    build_error_envelope,
)


def _handle(exc):
    request = RequestFactory().get("/api/v1/anything/")
    return api_exception_handler(exc, {"request": request})


def test_envelope_omits_empty_details():
    body = build_error_envelope(code="X", message="m")

    assert body["error"] == "m"
    assert body["code"] == "X"
    assert "details" not in body
    assert len(body["request_id"]) == 32


def test_business_rule_code_is_preserved():
    res = _handle(BusinessRuleError("Cannot delete property with active contracts.", code="PROPERTY_HAS_ACTIVE_CONTRACTS"))

    assert res.status_code == 400
    assert res.data["code"] == "PROPERTY_HAS_ACTIVE_CONTRACTS"
    assert res.data["error"] == "Cannot delete property with active contracts."


def test_default_code_when_none_given():
    res = _handle(ResourceNotFound())

    assert res.status_code == 404
    assert res.data["code"] == "RESOURCE_NOT_FOUND"


def test_validation_errors_carry_field_details():
    res = _handle(ValidationError({"email": ["Enter a valid email address."]}))

    assert res.status_code == 400
    assert res.data["code"] == "VALIDATION_ERROR"
    assert res.data["details"] == {"email": ["Enter a valid email address."]}


@pytest.mark.parametrize(
    "message,status,code",
    [
        ("UNIQUE constraint failed: tenants_tenant.email", 409, "DUPLICATE_RESOURCE"),
        ("FOREIGN KEY constraint failed", 400, "FOREIGN_KEY_VIOLATION"),
        ("NOT NULL constraint failed", 400, "DATABASE_ERROR"),
    ],
)
def test_integrity_errors_are_mapped(message, status, code):
    res = _handle(IntegrityError(message))

    assert res.status_code == status
    assert res.data["code"] == code


def test_unhandled_error_hides_message_in_production(settings):
    settings.DEBUG = False
    res = _handle(RuntimeError("secret internals"))

    assert res.status_code == 500
    assert res.data["code"] == "INTERNAL_ERROR"
    assert res.data["error"] == "Internal Server Error"
    assert "stack" not in res.data


def test_unhandled_error_shows_stack_in_debug(settings):
    settings.DEBUG = True
    res = _handle(RuntimeError("boom"))

    assert res.data["error"] == "boom"
    assert "RuntimeError" in res.data["stack"]
