# backend/rentflow/activity/admin.py
from django.contrib import admin

from rentflow.activity.models import ActivityLog


@admin.register(ActivityLog)
class ActivityLogAdmin(admin.ModelAdmin):
    list_display = (
        "entity_type",
        "action",
        "entity_id",
        "organization",
        "user",
        "is_system_action",
        "created_at",
    )
    list_filter = ("entity_type", "action", "is_system_action")
    search_fields = ("entity_id", "description")
    readonly_fields = ("created_at",)
    ordering = ("-created_at",)
