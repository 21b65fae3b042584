# backend/rentflow/payments/admin.py
from django.contrib import admin

from rentflow.payments.models import Payment


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    list_display = ("id", "contract", "type", "status", "amount", "due_date", "period_start", "period_end", "organization")
    list_filter = ("status", "type", "method")
    search_fields = ("id", "contract__id", "tenant__email")
    raw_id_fields = ("contract", "tenant")
    date_hierarchy = "due_date"
    ordering = ("-due_date",)
