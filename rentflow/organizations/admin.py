# backend/rentflow/organizations/admin.py
from django.contrib import admin

from rentflow.organizations.models import Organization, Plan, Subscription


@admin.register(Plan)
class PlanAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "price", "is_active", "created_at")
    list_filter = ("is_active",)
    search_fields = ("id", "name")
    ordering = ("price",)


class SubscriptionInline(admin.TabularInline):
    model = Subscription
    extra = 0
    fields = ("plan", "status", "current_period_start", "current_period_end", "trial_end")


@admin.register(Organization)
class OrganizationAdmin(admin.ModelAdmin):
    list_display = ("name", "slug", "plan", "is_active", "created_at")
    list_filter = ("is_active", "plan")
    search_fields = ("name", "slug", "email")
    readonly_fields = ("id", "created_at", "updated_at")
    inlines = [SubscriptionInline]
    ordering = ("-created_at",)


@admin.register(Subscription)
class SubscriptionAdmin(admin.ModelAdmin):
    list_display = ("organization", "plan", "status", "current_period_end", "trial_end")
    list_filter = ("status", "plan")
    search_fields = ("organization__name",)
    ordering = ("-created_at",)
