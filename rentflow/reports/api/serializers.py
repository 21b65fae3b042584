# backend/rentflow/reports/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from rentflow.maintenance.models import MaintenanceCategory, MaintenancePriority
from rentflow.properties.models import PropertyStatus, PropertyType, UnitType
from rentflow.reports.services import EXPORT_FORMATS, EXPORT_TYPES, TREND_GROUPS
from rentflow.tenants.models import TenantStatus


class FinancialQuerySerializer(serializers.Serializer):
    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False)
    group_by = serializers.ChoiceField(choices=[(g, g) for g in TREND_GROUPS], required=False, default="month")


class PropertyReportQuerySerializer(serializers.Serializer):
    unit_id = serializers.UUIDField(required=False)
    type = serializers.ChoiceField(choices=PropertyType.choices, required=False)
    status = serializers.ChoiceField(choices=PropertyStatus.choices, required=False)


class TenantReportQuerySerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=TenantStatus.choices, required=False)


class MaintenanceReportQuerySerializer(serializers.Serializer):
    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False)
    priority = serializers.ChoiceField(choices=MaintenancePriority.choices, required=False)
    category = serializers.ChoiceField(choices=MaintenanceCategory.choices, required=False)


class UnitReportQuerySerializer(serializers.Serializer):
    type = serializers.ChoiceField(choices=UnitType.choices, required=False)


class ExportQuerySerializer(serializers.Serializer):
    type = serializers.ChoiceField(choices=[(t, t) for t in EXPORT_TYPES])
    format = serializers.ChoiceField(choices=[(f, f) for f in EXPORT_FORMATS], required=False, default="json")
