# backend/rentflow/properties/tests/test_properties_api.py
import pytest

from rentflow.properties.models import Property, Unit

pytestmark = pytest.mark.django_db


@pytest.fixture
def emitted(monkeypatch):
    calls = []
    monkeypatch.setattr(
        "rentflow.realtime.broadcast.sio.emit",
        lambda event, payload, to=None: calls.append(event),
    )
    return calls


def _property(**overrides):
    body = {"name": "Loft 4B", "type": "APARTMENT", "address": "Calle 10 # 5-20", "rent": "1500000.00"}
    body.update(overrides)
    return body


def test_manager_creates_property_and_event_is_broadcast(manager_client, headers, emitted):
    res = manager_client.post("/api/v1/properties/", _property(), format="json", **headers)

    assert res.status_code == 201, res.content
    assert res.json()["status"] == "AVAILABLE"
    assert emitted == ["property:created"]


def test_plain_user_cannot_create(member_client, headers):
    res = member_client.post("/api/v1/properties/", _property(), format="json", **headers)

    assert res.status_code == 403
    assert res.json()["code"] == "INSUFFICIENT_PERMISSIONS"


def test_property_limit_from_plan(api_client, headers, organization):
    organization.settings["limits"]["maxProperties"] = 1
    organization.save(update_fields=["settings"])

    assert api_client.post("/api/v1/properties/", _property(), format="json", **headers).status_code == 201
    res = api_client.post("/api/v1/properties/", _property(name="Second"), format="json", **headers)

    assert res.status_code == 400
    assert res.json()["code"] == "PROPERTY_LIMIT_REACHED"


def test_unit_of_another_org_is_rejected(api_client, headers, other_organization):
    foreign = Unit.objects.create(organization=other_organization, name="Tower", address="x")

    res = api_client.post("/api/v1/properties/", _property(unit_id=str(foreign.id)), format="json", **headers)

    assert res.status_code == 400
    assert res.json()["code"] == "INVALID_UNIT"


def test_delete_blocked_by_active_contract(api_client, headers, active_contract, rental_property):
    res = api_client.delete(f"/api/v1/properties/{rental_property.id}/", **headers)

    assert res.status_code == 400
    assert res.json()["code"] == "PROPERTY_HAS_ACTIVE_CONTRACTS"
    assert Property.objects.filter(id=rental_property.id).exists()


def test_delete_is_admin_only(manager_client, headers, rental_property):
    assert manager_client.delete(f"/api/v1/properties/{rental_property.id}/", **headers).status_code == 403


def test_unit_delete_cascades_to_properties(api_client, headers, organization):
    unit = Unit.objects.create(organization=organization, name="Tower", address="x")
    Property.objects.create(organization=organization, unit=unit, name="A1", address="x")
    Property.objects.create(organization=organization, unit=unit, name="A2", address="x")

    res = api_client.delete(f"/api/v1/units/{unit.id}/", **headers)

    assert res.status_code in (200, 204)
    assert not Property.objects.filter(unit_id=unit.id).exists()
    assert not Unit.objects.filter(id=unit.id).exists()


def test_unit_delete_blocked_by_active_contract(api_client, headers, active_contract, rental_property, organization):
    unit = Unit.objects.create(organization=organization, name="Tower", address="x")
    rental_property.unit = unit
    rental_property.save(update_fields=["unit"])

    res = api_client.delete(f"/api/v1/units/{unit.id}/", **headers)

    assert res.status_code == 400
    assert res.json()["code"] == "UNIT_HAS_ACTIVE_CONTRACTS"


def test_list_filters_by_status(api_client, headers, organization):
    Property.objects.create(organization=organization, name="Free", address="x")
    Property.objects.create(organization=organization, name="Taken", address="x", status="RENTED")

    res = api_client.get("/api/v1/properties/", {"status": "RENTED"}, **headers)

    assert [r["name"] for r in res.json()["results"]] == ["Taken"]
