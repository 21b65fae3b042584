# backend/rentflow/iam/tests/test_registration.py
import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from rentflow.organizations.models import Organization, Subscription, SubscriptionStatus

pytestmark = pytest.mark.django_db


def _payload(**overrides):
    body = {
        "first_name": "Maria",
        "last_name": "Lopez",
        "email": "maria@newco.test",
        "password": "Sup3rSecret!",
        "organization_name": "NewCo Rentals",
        "plan_id": "plan-professional",
    }
    body.update(overrides)
    return body


def test_register_creates_org_trial_and_admin(plans):
    res = APIClient().post("/api/v1/auth/register/", _payload(), format="json")

    assert res.status_code == 201, res.content
    body = res.json()
    assert body["token"]
    assert body["user"]["role"] == "ADMIN"
    assert body["organization"]["slug"] == "newco-rentals"
    assert body["subscription"]["status"] == SubscriptionStatus.TRIALING

    org = Organization.objects.get(slug="newco-rentals")
    assert org.settings["limits"]["maxProperties"] == 100
    assert org.settings["features"]["multipleProperties"] is True
    assert "rf_access" in res.cookies


def test_duplicate_email_conflicts(plans, admin):
    res = APIClient().post("/api/v1/auth/register/", _payload(email=admin.email), format="json")

    assert res.status_code == 409
    assert res.json()["code"] == "EMAIL_EXISTS"


def test_unknown_plan_is_a_validation_error(plans):
    res = APIClient().post("/api/v1/auth/register/", _payload(plan_id="plan-gold"), format="json")

    assert res.status_code == 400
    assert "plan_id" in res.json()["details"]


def test_registration_is_all_or_nothing(plans, monkeypatch):
    User = get_user_model()

    def fail(*args, **kwargs):
        raise RuntimeError("user insert failed")

    monkeypatch.setattr(User.objects, "create_user", fail)

    res = APIClient().post("/api/v1/auth/register/", _payload(), format="json")

    assert res.status_code == 500
    assert not Organization.objects.filter(slug="newco-rentals").exists()
    assert Subscription.objects.count() == 0
