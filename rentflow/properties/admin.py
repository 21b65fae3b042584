# backend/rentflow/properties/admin.py
from django.contrib import admin

from rentflow.properties.models import Property, Unit


class PropertyInline(admin.TabularInline):
    model = Property
    extra = 0
    fields = ("name", "type", "status", "unit_number", "floor", "rent")


@admin.register(Unit)
class UnitAdmin(admin.ModelAdmin):
    list_display = ("name", "type", "organization", "total_floors", "created_at")
    list_filter = ("type",)
    search_fields = ("name", "address")
    inlines = [PropertyInline]
    ordering = ("-created_at",)


@admin.register(Property)
class PropertyAdmin(admin.ModelAdmin):
    list_display = ("name", "type", "status", "rent", "unit", "organization", "created_at")
    list_filter = ("type", "status")
    search_fields = ("name", "address", "unit_number")
    ordering = ("-created_at",)
