# backend/rentflow/scheduler/jobs.py
from __future__ import annotations

import logging
import threading
import traceback
from typing import Any, Callable, Dict

from django.db import DatabaseError, close_old_connections

from rentflow.contracts.services import expire_overdue_contracts
from rentflow.payments.generator import generate_pending_payments
from rentflow.scheduler.locks import acquire_lease, lock_owner, release_lease

logger = logging.getLogger(__name__)

JOB_GENERATE_PAYMENTS = "generate_payments"
JOB_EXPIRE_CONTRACTS = "expire_contracts"

_local_locks: Dict[str, threading.Lock] = {
    JOB_GENERATE_PAYMENTS: threading.Lock(),
    JOB_EXPIRE_CONTRACTS: threading.Lock(),
}


def run_exclusive(name: str, fn: Callable[[], Any]) -> bool:
    """
    Run `fn` unless another run of the same job is in progress, here or in
    another process. Returns True when `fn` ran and succeeded.

    Errors are logged and recorded on the JobLock row; they never propagate
    into the scheduler thread.
    """
    local = _local_locks.setdefault(name, threading.Lock())
    if not local.acquire(blocking=False):
        logger.warning("job %s skipped: already running in this process", name)
        return False

    try:
        owner = lock_owner()
        try:
            acquired = acquire_lease(name, owner)
        except DatabaseError:
            logger.exception("job %s skipped: could not take the lease", name)
            return False
        if not acquired:
            logger.warning("job %s skipped: lease held by another worker", name)
            return False

        error = ""
        try:
            result = fn()
            logger.info("job %s finished result=%s", name, result)
        except Exception as exc:
            error = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
            logger.exception("job %s failed", name)
        finally:
            release_lease(name, owner, error=error)
        return not error
    finally:
        local.release()


def generate_payments_job() -> bool:
    close_old_connections()
    return run_exclusive(JOB_GENERATE_PAYMENTS, lambda: generate_pending_payments().created)


def expire_contracts_job() -> bool:
    close_old_connections()
    return run_exclusive(JOB_EXPIRE_CONTRACTS, expire_overdue_contracts)
