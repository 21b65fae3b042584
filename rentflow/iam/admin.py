# backend/rentflow/iam/admin.py
from __future__ import annotations

from django.contrib import admin

from rentflow.iam.models import User


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ("email", "first_name", "last_name", "role", "organization", "is_active", "last_login")
    list_filter = ("role", "is_active")
    search_fields = ("email", "first_name", "last_name")
    autocomplete_fields = ("organization",)
    readonly_fields = ("last_login", "date_joined", "updated_at")
    exclude = ("password",)
    ordering = ("email",)
