# backend/rentflow/scheduler/tests/test_jobs.py
from datetime import timedelta

import pytest
from django.utils import timezone

from rentflow.scheduler import jobs
from rentflow.scheduler.locks import acquire_lease, release_lease
from rentflow.scheduler.models import JobLock, JobRunStatus
from rentflow.scheduler.runner import build_scheduler

pytestmark = pytest.mark.django_db


def test_run_exclusive_records_success():
    calls = []

    assert jobs.run_exclusive("demo", lambda: calls.append(1)) is True

    lock = JobLock.objects.get(name="demo")
    assert calls == [1]
    assert lock.last_status == JobRunStatus.SUCCESS
    assert lock.locked_until is None
    assert lock.last_finished_at is not None


def test_run_exclusive_swallows_and_records_errors():
    def boom():
        raise RuntimeError("db went away")

    assert jobs.run_exclusive("demo", boom) is False

    lock = JobLock.objects.get(name="demo")
    assert lock.last_status == JobRunStatus.FAILED
    assert "db went away" in lock.last_error
    assert lock.locked_until is None


def test_run_is_skipped_while_another_worker_holds_the_lease():
    assert acquire_lease("demo", "other-host:1:1") is True
    calls = []

    assert jobs.run_exclusive("demo", lambda: calls.append(1)) is False
    assert calls == []


def test_expired_lease_can_be_taken_over():
    JobLock.objects.create(name="demo", owner="dead-host", locked_until=timezone.now() - timedelta(seconds=1))

    assert acquire_lease("demo", "me") is True
    assert JobLock.objects.get(name="demo").owner == "me"


def test_release_only_by_owner():
    acquire_lease("demo", "me")
    release_lease("demo", "someone-else")

    assert JobLock.objects.get(name="demo").locked_until is not None


def test_same_process_overlap_is_skipped():
    inner = []

    def outer():
        inner.append(jobs.run_exclusive("demo", lambda: None))

    jobs.run_exclusive("demo", outer)
    assert inner == [False]


def test_scheduler_registers_both_daily_jobs(settings):
    scheduler = build_scheduler()
    by_id = {job.id: job for job in scheduler.get_jobs()}

    assert set(by_id) == {jobs.JOB_GENERATE_PAYMENTS, jobs.JOB_EXPIRE_CONTRACTS}
    assert str(by_id[jobs.JOB_GENERATE_PAYMENTS].trigger.timezone) == settings.SCHEDULER_TIMEZONE
    assert by_id[jobs.JOB_GENERATE_PAYMENTS].max_instances == 1
    assert by_id[jobs.JOB_EXPIRE_CONTRACTS].coalesce is True
