# backend/rentflow/scheduler/models.py
from django.db import models


class JobRunStatus(models.TextChoices):
    RUNNING = "RUNNING", "Running"
    SUCCESS = "SUCCESS", "Success"
    FAILED = "FAILED", "Failed"


class JobLock(models.Model):
    """
    Lease row for one scheduled job. A worker owns the job while locked_until
    is in the future; the lease is released when the run finishes.
    """

    name = models.CharField(primary_key=True, max_length=64)
    owner = models.CharField(max_length=128, blank=True, default="")
    locked_until = models.DateTimeField(null=True, blank=True)

    last_started_at = models.DateTimeField(null=True, blank=True)
    last_finished_at = models.DateTimeField(null=True, blank=True)
    last_status = models.CharField(max_length=16, choices=JobRunStatus.choices, blank=True, default="")
    last_error = models.TextField(blank=True, default="")

    class Meta:
        db_table = "scheduler_job_lock"

    def __str__(self) -> str:
        return self.name
