# backend/rentflow/realtime/tests/test_realtime.py
import uuid
from decimal import Decimal

import pytest

from rentflow.realtime import server
from rentflow.realtime.broadcast import emit_to_organization

pytestmark = pytest.mark.django_db


@pytest.fixture
def socket_session(monkeypatch):
    sessions = {}
    rooms = []
    monkeypatch.setattr(server.sio, "get_session", lambda sid: sessions.get(sid, {}))
    monkeypatch.setattr(server.sio, "enter_room", lambda sid, room: rooms.append((sid, room)))
    return sessions, rooms


def test_emit_targets_org_room_with_json_payload(monkeypatch, organization):
    calls = []
    monkeypatch.setattr(
        "rentflow.realtime.broadcast.sio.emit",
        lambda event, payload, to=None: calls.append((event, payload, to)),
    )

    ok = emit_to_organization(organization.id, "property:updated", {"id": uuid.uuid4(), "rent": Decimal("10.50")}, {"id": "u1"})

    assert ok is True
    event, payload, room = calls[0]
    assert event == "property:updated"
    assert room == f"org-{organization.id}"
    assert payload["data"]["rent"] == "10.50"
    assert payload["actor"] == {"id": "u1"}
    assert "emitted_at" in payload


def test_emit_failure_is_reported_not_raised(monkeypatch, organization):
    def broken(*args, **kwargs):
        raise ConnectionError("socket layer down")

    monkeypatch.setattr("rentflow.realtime.broadcast.sio.emit", broken)

    assert emit_to_organization(organization.id, "tenant:created", {}) is False


def test_member_joins_own_organization_room(socket_session, admin, organization):
    sessions, rooms = socket_session
    sessions["sid-1"] = {"user_id": str(admin.id)}

    ack = server.join_organization("sid-1", str(organization.id))

    assert ack == {"ok": True, "room": f"org-{organization.id}"}
    assert rooms == [("sid-1", f"org-{organization.id}")]


def test_member_cannot_join_another_organization(socket_session, admin, other_organization):
    sessions, rooms = socket_session
    sessions["sid-1"] = {"user_id": str(admin.id)}

    ack = server.join_organization("sid-1", str(other_organization.id))

    assert ack == {"ok": False, "code": "ORGANIZATION_ACCESS_DENIED"}
    assert rooms == []


def test_anonymous_socket_cannot_join(socket_session, organization):
    ack = server.join_organization("sid-anon", str(organization.id))

    assert ack == {"ok": False, "code": "TOKEN_REQUIRED"}


def test_super_admin_may_join_any_room(socket_session, super_admin, other_organization):
    sessions, rooms = socket_session
    sessions["sid-2"] = {"user_id": str(super_admin.id)}

    ack = server.join_organization("sid-2", str(other_organization.id))

    assert ack["ok"] is True
