# backend/rentflow/tenants/admin.py
from django.contrib import admin

from rentflow.tenants.models import Tenant


@admin.register(Tenant)
class TenantAdmin(admin.ModelAdmin):
    list_display = ("first_name", "last_name", "email", "status", "credit_score", "organization", "created_at")
    list_filter = ("status",)
    search_fields = ("first_name", "last_name", "email", "phone")
    ordering = ("-created_at",)
