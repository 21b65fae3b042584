# backend/rentflow/realtime/broadcast.py
from __future__ import annotations

import json
import logging
from typing import Any

from django.core.serializers.json import DjangoJSONEncoder
from django.utils import timezone

from rentflow.realtime.server import organization_room, sio

logger = logging.getLogger(__name__)


def emit_to_organization(organization_id, event: str, data: Any, actor: dict | None = None) -> bool:
    """
    Fire-and-forget broadcast of `<entity>:<created|updated|deleted>` to the org room.

    At-most-once: a failed emit is logged and reported as False, never raised,
    so the mutation that triggered it still succeeds.
    """
    payload = {
        "data": data,
        "actor": actor,
        "emitted_at": timezone.now(),
    }
    try:
        # UUID/Decimal/datetime -> JSON-native
        payload = json.loads(json.dumps(payload, cls=DjangoJSONEncoder))
        sio.emit(event, payload, to=organization_room(organization_id))
    except Exception:
        logger.exception("realtime emit failed event=%s org=%s", event, organization_id)
        return False

    logger.debug("realtime emit event=%s org=%s", event, organization_id)
    return True
