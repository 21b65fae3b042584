# backend/rentflow/contracts/admin.py
from django.contrib import admin

from rentflow.contracts.models import Contract


@admin.register(Contract)
class ContractAdmin(admin.ModelAdmin):
    list_display = ("id", "property", "tenant", "status", "start_date", "end_date", "monthly_rent", "organization")
    list_filter = ("status",)
    search_fields = ("id", "property__name", "tenant__last_name", "tenant__email")
    raw_id_fields = ("property", "tenant")
    ordering = ("-created_at",)
