# backend/rentflow/iam/tests/test_users_api.py
import pytest

pytestmark = pytest.mark.django_db


def _new_user(email):
    return {"email": email, "password": "Pass@12345", "first_name": "New", "last_name": "Member", "role": "USER"}


def test_admin_creates_user_until_plan_limit(api_client, headers):
    first = api_client.post("/api/v1/users/", _new_user("one@acme.test"), format="json", **headers)
    assert first.status_code == 201, first.content

    second = api_client.post("/api/v1/users/", _new_user("two@acme.test"), format="json", **headers)
    assert second.status_code == 400
    assert second.json()["code"] == "USER_LIMIT_REACHED"


def test_super_admin_role_cannot_be_granted(api_client, headers):
    body = _new_user("boss@acme.test")
    body["role"] = "SUPER_ADMIN"

    res = api_client.post("/api/v1/users/", body, format="json", **headers)

    assert res.status_code == 400


def test_plain_user_cannot_create_users(member_client, headers):
    res = member_client.post("/api/v1/users/", _new_user("x@acme.test"), format="json", **headers)

    assert res.status_code == 403
    assert res.json()["code"] == "INSUFFICIENT_PERMISSIONS"


def test_user_list_is_staff_only(manager_client, member_client, headers):
    assert manager_client.get("/api/v1/users/", **headers).status_code == 200
    assert member_client.get("/api/v1/users/", **headers).status_code == 403
