# backend/rentflow/accounting/admin.py
from django.contrib import admin

from rentflow.accounting.models import AccountingEntry


@admin.register(AccountingEntry)
class AccountingEntryAdmin(admin.ModelAdmin):
    list_display = ("date", "type", "concept", "amount", "organization", "created_by")
    list_filter = ("type",)
    search_fields = ("concept", "notes")
    raw_id_fields = ("property", "unit", "contract", "created_by")
    date_hierarchy = "date"
    ordering = ("-date",)
