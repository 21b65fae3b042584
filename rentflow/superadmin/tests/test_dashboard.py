# backend/rentflow/superadmin/tests/test_dashboard.py
from datetime import timedelta

import pytest
from django.utils import timezone

from rentflow.conftest import client_for
from rentflow.organizations.models import Subscription, SubscriptionStatus

pytestmark = pytest.mark.django_db


def test_dashboard_totals(super_admin, organization, other_organization, plans, active_contract):
    now = timezone.now()
    for org, status in ((organization, SubscriptionStatus.ACTIVE), (other_organization, SubscriptionStatus.TRIALING)):
        Subscription.objects.create(
            organization=org,
            plan=plans[0],
            status=status,
            current_period_start=now,
            current_period_end=now + timedelta(days=30),
        )
    other_organization.is_active = False
    other_organization.save(update_fields=["is_active"])

    res = client_for(super_admin).get("/api/v1/super-admin/dashboard/")

    assert res.status_code == 200
    body = res.json()
    assert body["organizations"] == {"total": 3, "active": 2}
    assert body["contracts"] == 1
    assert body["properties"] == 1
    assert body["subscriptions"]["ACTIVE"] == 1
    assert body["subscriptions"]["TRIALING"] == 1
    assert body["monthly_revenue"] == 29.0
    basic = next(p for p in body["plan_distribution"] if p["plan_id"] == "plan-basic")
    assert basic["organizations"] == 2


def test_dashboard_is_super_admin_only(api_client):
    res = api_client.get("/api/v1/super-admin/dashboard/")

    assert res.status_code == 403
