# backend/rentflow/scheduler/runner.py
from __future__ import annotations

import logging
from typing import Optional, Type

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.schedulers.base import BaseScheduler
from apscheduler.triggers.cron import CronTrigger
from django.conf import settings

from rentflow.scheduler.jobs import (
    JOB_EXPIRE_CONTRACTS,
    JOB_GENERATE_PAYMENTS,
    expire_contracts_job,
    generate_payments_job,
)

logger = logging.getLogger(__name__)

_scheduler: Optional[BaseScheduler] = None


def build_scheduler(scheduler_class: Type[BaseScheduler] = BackgroundScheduler) -> BaseScheduler:
    tz = settings.SCHEDULER_TIMEZONE
    scheduler = scheduler_class(timezone=tz)

    scheduler.add_job(
        func=generate_payments_job,
        trigger=CronTrigger(hour=1, minute=0, timezone=tz),
        id=JOB_GENERATE_PAYMENTS,
        name="Generate pending rent payments for active contracts",
        max_instances=1,
        coalesce=True,
        replace_existing=True,
    )
    scheduler.add_job(
        func=expire_contracts_job,
        trigger=CronTrigger(hour=2, minute=0, timezone=tz),
        id=JOB_EXPIRE_CONTRACTS,
        name="Expire active contracts past their end date",
        max_instances=1,
        coalesce=True,
        replace_existing=True,
    )
    return scheduler


def start_scheduler() -> BaseScheduler:
    """Start the in-process scheduler once per process."""
    global _scheduler
    if _scheduler is None:
        _scheduler = build_scheduler()
        _scheduler.start()
        logger.info("scheduler started tz=%s jobs=%s", settings.SCHEDULER_TIMEZONE, [j.id for j in _scheduler.get_jobs()])
    return _scheduler
