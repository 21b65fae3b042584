# backend/rentflow/scheduler/locks.py
from __future__ import annotations

import os
import socket
import threading
from datetime import timedelta

from django.conf import settings
from django.db.models import Q
from django.utils import timezone

from rentflow.scheduler.models import JobLock, JobRunStatus


def lock_owner() -> str:
    return f"{socket.gethostname()}:{os.getpid()}:{threading.get_ident()}"


def acquire_lease(name: str, owner: str, ttl_seconds: int | None = None) -> bool:
    """
    Take the database lease for `name`. Returns False when another owner holds
    an unexpired lease. The conditional UPDATE makes this safe across processes.
    """
    ttl = ttl_seconds if ttl_seconds is not None else settings.SCHEDULER_LOCK_TTL_SECONDS
    now = timezone.now()

    JobLock.objects.get_or_create(name=name)

    taken = (
        JobLock.objects.filter(name=name)
        .filter(Q(locked_until__isnull=True) | Q(locked_until__lt=now))
        .update(
            owner=owner,
            locked_until=now + timedelta(seconds=ttl),
            last_started_at=now,
            last_status=JobRunStatus.RUNNING,
            last_error="",
        )
    )
    return taken == 1


def release_lease(name: str, owner: str, *, error: str = "") -> None:
    JobLock.objects.filter(name=name, owner=owner).update(
        locked_until=None,
        last_finished_at=timezone.now(),
        last_status=JobRunStatus.FAILED if error else JobRunStatus.SUCCESS,
        last_error=error,
    )
