# backend/rentflow/scheduler/admin.py
from django.contrib import admin

from rentflow.scheduler.models import JobLock


@admin.register(JobLock)
class JobLockAdmin(admin.ModelAdmin):
    list_display = ("name", "owner", "locked_until", "last_status", "last_started_at", "last_finished_at")
    list_filter = ("last_status",)
    readonly_fields = ("last_error",)
