import pytest
from rest_framework.test import APIClient

pytestmark = pytest.mark.django_db


def test_request_id_is_echoed():
    res = APIClient().get("/health/", HTTP_X_REQUEST_ID="abc123")

    assert res.status_code == 200
    assert res["X-Request-ID"] == "abc123"


def test_request_id_is_generated_when_absent():
    res = APIClient().get("/health/")

    assert len(res["X-Request-ID"]) == 32


def test_malformed_organization_header_rejected_before_auth():
    res = APIClient().get("/api/v1/properties/", HTTP_X_ORGANIZATION_ID="not-a-uuid")

    assert res.status_code == 400
    assert res.json()["code"] == "INVALID_ORGANIZATION_ID"


def test_health_is_public():
    body = APIClient().get("/health/").json()

    assert body["status"] == "OK"
    assert "version" in body
