# backend/rentflow/realtime/server.py
"""
Socket.IO server shared by the whole process.

Clients connect with {"token": "<access JWT>"} in the auth payload and then emit
`join-organization` with the organization id to receive that organization's
entity events (room `org-<id>`).
"""
from __future__ import annotations

import logging
from uuid import UUID

import socketio
from django.conf import settings
from socketio.exceptions import ConnectionRefusedError as SocketConnectionRefused
from rest_framework.exceptions import APIException
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import AccessToken

logger = logging.getLogger(__name__)


def _cors_origins():
    if getattr(settings, "CORS_ALLOW_ALL_ORIGINS", False):
        return "*"
    return list(getattr(settings, "CORS_ALLOWED_ORIGINS", []))


sio = socketio.Server(
    async_mode="threading",
    cors_allowed_origins=_cors_origins(),
    logger=False,
    engineio_logger=False,
)


def organization_room(organization_id) -> str:
    return f"org-{organization_id}"


def _user_from_token(token: str | None):
    from django.contrib.auth import get_user_model

    if not token:
        return None
    try:
        access = AccessToken(token)
    except TokenError:
        return None

    User = get_user_model()
    return User.objects.filter(id=access.get("user_id"), is_active=True).first()


@sio.event
def connect(sid, environ, auth=None):
    token = (auth or {}).get("token") if isinstance(auth, dict) else None
    user = _user_from_token(token)
    if token and user is None:
        logger.info("socket %s rejected: invalid token", sid)
        raise SocketConnectionRefused("INVALID_TOKEN")

    sio.save_session(sid, {"user_id": str(user.id) if user else None})
    logger.debug("socket connected sid=%s user=%s", sid, getattr(user, "id", None))
    return True


@sio.on("join-organization")
def join_organization(sid, organization_id):
    from django.contrib.auth import get_user_model

    from rentflow.common.scope import build_auth_context

    session = sio.get_session(sid)
    user_id = session.get("user_id")
    if not user_id:
        return {"ok": False, "code": "TOKEN_REQUIRED"}

    try:
        org_id = UUID(str(organization_id))
    except ValueError:
        return {"ok": False, "code": "INVALID_ORGANIZATION_ID"}

    user = get_user_model().objects.filter(id=user_id, is_active=True).first()
    if user is None:
        return {"ok": False, "code": "USER_NOT_FOUND"}

    try:
        build_auth_context(user, org_id)
    except APIException as exc:
        codes = exc.get_codes()
        code = codes if isinstance(codes, str) else "ORGANIZATION_ACCESS_DENIED"
        return {"ok": False, "code": code}

    room = organization_room(org_id)
    sio.enter_room(sid, room)
    logger.info("socket %s joined %s", sid, room)
    return {"ok": True, "room": room}


@sio.event
def disconnect(sid, *args):
    logger.debug("socket disconnected sid=%s", sid)
