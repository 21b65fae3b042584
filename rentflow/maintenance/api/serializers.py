# backend/rentflow/maintenance/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from rentflow.maintenance.models import (
    MaintenanceCategory,
    MaintenancePriority,
    MaintenanceRequest,
    MaintenanceStatus,
)


class MaintenanceRequestSerializer(serializers.ModelSerializer):
    property_name = serializers.CharField(source="property.name", read_only=True)
    tenant_name = serializers.CharField(source="tenant.full_name", read_only=True, default=None)

    class Meta:
        model = MaintenanceRequest
        fields = [
            "id",
            "organization_id",
            "property_id",
            "property_name",
            "tenant_id",
            "tenant_name",
            "title",
            "description",
            "priority",
            "category",
            "status",
            "reported_date",
            "completed_date",
            "assigned_to",
            "estimated_cost",
            "actual_cost",
            "notes",
            "photos",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class MaintenanceWriteSerializer(serializers.Serializer):
    property_id = serializers.UUIDField()
    tenant_id = serializers.UUIDField(required=False, allow_null=True)
    title = serializers.CharField(max_length=255)
    description = serializers.CharField()
    priority = serializers.ChoiceField(choices=MaintenancePriority.choices, required=False)
    category = serializers.ChoiceField(choices=MaintenanceCategory.choices, required=False)
    status = serializers.ChoiceField(choices=MaintenanceStatus.choices, required=False)
    assigned_to = serializers.CharField(max_length=255, required=False, allow_blank=True)
    estimated_cost = serializers.DecimalField(max_digits=14, decimal_places=2, min_value=0, required=False, allow_null=True)
    actual_cost = serializers.DecimalField(max_digits=14, decimal_places=2, min_value=0, required=False, allow_null=True)
    notes = serializers.CharField(required=False, allow_blank=True)
    photos = serializers.ListField(child=serializers.CharField(), required=False)
