# backend/rentflow/iam/tests/test_auth.py
import pytest
from rest_framework.test import APIClient

pytestmark = pytest.mark.django_db


def test_login_sets_cookies_and_returns_session(admin, settings):
    res = APIClient().post("/api/v1/auth/login/", {"email": admin.email, "password": "Pass@12345"}, format="json")

    assert res.status_code == 200
    body = res.json()
    assert body["user"]["email"] == admin.email
    assert body["organization"]["id"] == str(admin.organization_id)
    assert settings.SIMPLE_JWT["AUTH_COOKIE"] in res.cookies
    assert settings.SIMPLE_JWT["AUTH_COOKIE_REFRESH"] in res.cookies


def test_wrong_password_is_rejected(admin):
    res = APIClient().post("/api/v1/auth/login/", {"email": admin.email, "password": "nope"}, format="json")

    assert res.status_code == 401
    assert res.json()["code"] == "INVALID_CREDENTIALS"


def test_login_into_inactive_organization(admin, organization):
    organization.is_active = False
    organization.save(update_fields=["is_active"])

    res = APIClient().post("/api/v1/auth/login/", {"email": admin.email, "password": "Pass@12345"}, format="json")

    assert res.status_code == 403
    assert res.json()["code"] == "ORGANIZATION_INACTIVE"


def test_bearer_token_reaches_me(admin):
    token = APIClient().post(
        "/api/v1/auth/login/", {"email": admin.email, "password": "Pass@12345"}, format="json"
    ).json()["token"]

    c = APIClient()
    c.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")
    res = c.get("/api/v1/auth/me/")

    assert res.status_code == 200
    assert res.json()["user"]["id"] == str(admin.id)


def test_token_of_deleted_user_is_user_not_found(admin):
    from rest_framework_simplejwt.tokens import AccessToken

    token = str(AccessToken.for_user(admin))
    admin.delete()

    c = APIClient()
    c.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")
    res = c.get("/api/v1/auth/me/")

    assert res.status_code == 401
    assert res.json()["code"] == "USER_NOT_FOUND"
