# backend/rentflow/maintenance/tests/test_maintenance_api.py
from decimal import Decimal

import pytest

from rentflow.activity.models import ActivityLog
from rentflow.maintenance.models import MaintenanceRequest, MaintenanceStatus
from rentflow.properties.models import Property

pytestmark = pytest.mark.django_db


@pytest.fixture(autouse=True)
def emitted(monkeypatch):
    calls = []
    monkeypatch.setattr(
        "rentflow.realtime.broadcast.sio.emit",
        lambda event, payload, to=None: calls.append(event),
    )
    return calls


def _report(client, headers, prop, **overrides):
    body = {"property_id": str(prop.id), "title": "Leaking tap", "description": "Kitchen tap drips."}
    body.update(overrides)
    return client.post("/api/v1/maintenance/", body, format="json", **headers)


def test_member_can_report_request(member_client, headers, rental_property, emitted):
    res = _report(member_client, headers, rental_property)

    assert res.status_code == 201, res.content
    body = res.json()
    assert body["status"] == "OPEN"
    assert body["property_name"] == rental_property.name
    assert emitted == ["maintenance:created"]
    assert ActivityLog.objects.filter(entity_type="MAINTENANCE", entity_id=body["id"], action="CREATE").exists()


def test_completion_stamps_and_reopen_clears_date(api_client, headers, rental_property):
    req_id = _report(api_client, headers, rental_property).json()["id"]

    done = api_client.patch(f"/api/v1/maintenance/{req_id}/", {"status": "COMPLETED"}, format="json", **headers)
    assert done.status_code == 200, done.content
    assert done.json()["completed_date"] is not None

    reopened = api_client.patch(f"/api/v1/maintenance/{req_id}/", {"status": "IN_PROGRESS"}, format="json", **headers)
    assert reopened.json()["completed_date"] is None
    assert MaintenanceRequest.objects.get(id=req_id).status == MaintenanceStatus.IN_PROGRESS


def test_unknown_property_rejected(api_client, headers, other_organization):
    foreign = Property.objects.create(organization=other_organization, name="Foreign", address="x", rent=Decimal("1"))

    res = _report(api_client, headers, foreign)

    assert res.status_code == 400
    assert res.json()["code"] == "INVALID_PROPERTY"


def test_member_cannot_update(member_client, api_client, headers, rental_property):
    req_id = _report(api_client, headers, rental_property).json()["id"]

    res = member_client.patch(f"/api/v1/maintenance/{req_id}/", {"status": "COMPLETED"}, format="json", **headers)

    assert res.status_code == 403


def test_missing_description_is_validation_error(api_client, headers, rental_property):
    res = api_client.post(
        "/api/v1/maintenance/",
        {"property_id": str(rental_property.id), "title": "No details"},
        format="json",
        **headers,
    )

    assert res.status_code == 400
    assert res.json()["code"] == "VALIDATION_ERROR"
    assert "description" in res.json()["details"]
