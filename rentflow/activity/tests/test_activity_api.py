# backend/rentflow/activity/tests/test_activity_api.py
from datetime import timedelta

import pytest
from django.utils import timezone

from rentflow.activity.models import ActivityAction, ActivityEntity, ActivityLog
from rentflow.activity.services import ActivityService

pytestmark = pytest.mark.django_db


def _log(org, user=None, **overrides):
    kwargs = {
        "organization_id": org.id,
        "entity_type": ActivityEntity.PROPERTY,
        "entity_id": "p-1",
        "action": ActivityAction.CREATE,
        "description": "Property created.",
        "user_id": user.id if user else None,
    }
    kwargs.update(overrides)
    return ActivityService.log(**kwargs)


def test_list_is_scoped_and_newest_first(member_client, headers, organization, other_organization, admin):
    _log(organization, admin, description="first")
    _log(organization, admin, description="second")
    ActivityLog.objects.filter(description="first").update(created_at=timezone.now() - timedelta(hours=1))
    _log(other_organization, description="foreign")

    res = member_client.get("/api/v1/activity-log/", **headers)

    assert res.status_code == 200, res.content
    rows = res.json()
    assert [r["description"] for r in rows] == ["second", "first"]
    assert rows[0]["user"]["email"] == admin.email


def test_filters_and_limit(api_client, headers, organization):
    for i in range(5):
        _log(organization, entity_id=f"p-{i}")
    _log(organization, is_system_action=True, entity_type=ActivityEntity.CONTRACT, action=ActivityAction.UPDATE)

    system = api_client.get("/api/v1/activity-log/?is_system_action=true", **headers).json()
    assert len(system) == 1
    assert system[0]["user"] is None

    limited = api_client.get("/api/v1/activity-log/?limit=2&entity_type=PROPERTY", **headers).json()
    assert len(limited) == 2


def test_activity_log_is_read_only(api_client, headers):
    res = api_client.post("/api/v1/activity-log/", {"description": "x"}, format="json", **headers)

    assert res.status_code in (403, 405)
    assert ActivityLog.objects.count() == 0
