import pytest
from rest_framework.test import APIClient

pytestmark = pytest.mark.django_db


def test_unknown_api_route_uses_envelope():
    res = APIClient().get("/api/v1/does-not-exist/")

    assert res.status_code == 404
    body = res.json()
    assert body["code"] == "NOT_FOUND"
    assert "/api/v1/does-not-exist/" in body["error"]
    assert body["request_id"]


def test_missing_token_is_token_required():
    res = APIClient().get("/api/v1/properties/")

    assert res.status_code == 401
    assert res.json()["code"] == "TOKEN_REQUIRED"


def test_garbage_bearer_is_invalid_token():
    c = APIClient()
    c.credentials(HTTP_AUTHORIZATION="Bearer not-a-jwt")
    res = c.get("/api/v1/properties/")

    assert res.status_code == 401
    assert res.json()["code"] == "INVALID_TOKEN"


def test_expired_token_is_token_expired(staff_user):
    from datetime import timedelta

    from rest_framework_simplejwt.tokens import AccessToken

    token = AccessToken.for_user(staff_user)
    token.set_exp(lifetime=-timedelta(minutes=1))

    c = APIClient()
    c.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")
    res = c.get("/api/v1/properties/")

    assert res.status_code == 401
    assert res.json()["code"] == "TOKEN_EXPIRED"


def test_validation_error_shape(client, scope_headers):
    res = client.post("/api/v1/tenants/", {"first_name": ""}, format="json", **scope_headers)

    assert res.status_code == 400
    body = res.json()
    assert body["code"] == "VALIDATION_ERROR"
    assert body["error"] == "Validation failed"
    assert "last_name" in body["details"]
