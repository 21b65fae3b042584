# backend/rentflow/maintenance/filters.py
import django_filters

from rentflow.maintenance.models import (
    MaintenanceCategory,
    MaintenancePriority,
    MaintenanceRequest,
    MaintenanceStatus,
)


class MaintenanceFilter(django_filters.FilterSet):
    status = django_filters.ChoiceFilter(choices=MaintenanceStatus.choices)
    priority = django_filters.ChoiceFilter(choices=MaintenancePriority.choices)
    category = django_filters.ChoiceFilter(choices=MaintenanceCategory.choices)
    property = django_filters.UUIDFilter(field_name="property_id")
    tenant = django_filters.UUIDFilter(field_name="tenant_id")

    class Meta:
        model = MaintenanceRequest
        fields = ["status", "priority", "category", "property", "tenant"]
