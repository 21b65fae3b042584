# backend/rentflow/maintenance/admin.py
from django.contrib import admin

from rentflow.maintenance.models import MaintenanceRequest


@admin.register(MaintenanceRequest)
class MaintenanceRequestAdmin(admin.ModelAdmin):
    list_display = ("title", "property", "priority", "category", "status", "reported_date", "organization")
    list_filter = ("status", "priority", "category")
    search_fields = ("title", "description", "assigned_to")
    raw_id_fields = ("property", "tenant")
    ordering = ("-reported_date",)
