# backend/rentflow/tenants/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from rentflow.tenants.models import Tenant, TenantStatus


class TenantSerializer(serializers.ModelSerializer):
    active_contracts = serializers.IntegerField(read_only=True, required=False)

    class Meta:
        model = Tenant
        fields = [
            "id",
            "organization_id",
            "first_name",
            "last_name",
            "email",
            "phone",
            "emergency_contact",
            "employment",
            "references",
            "application_date",
            "status",
            "credit_score",
            "active_contracts",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class EmergencyContactSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    phone = serializers.CharField(max_length=64)
    relationship = serializers.CharField(max_length=64, required=False, allow_blank=True)


class EmploymentSerializer(serializers.Serializer):
    employer = serializers.CharField(max_length=255, required=False, allow_blank=True)
    position = serializers.CharField(max_length=255, required=False, allow_blank=True)
    income = serializers.DecimalField(max_digits=14, decimal_places=2, min_value=0, required=False, coerce_to_string=False)


class TenantWriteSerializer(serializers.Serializer):
    first_name = serializers.CharField(min_length=2, max_length=150)
    last_name = serializers.CharField(min_length=2, max_length=150)
    email = serializers.EmailField()
    phone = serializers.CharField(max_length=64)
    emergency_contact = EmergencyContactSerializer(required=False)
    employment = EmploymentSerializer(required=False)
    references = serializers.ListField(child=serializers.DictField(), required=False)
    application_date = serializers.DateField(required=False, allow_null=True)
    status = serializers.ChoiceField(choices=TenantStatus.choices, required=False)
    credit_score = serializers.IntegerField(min_value=300, max_value=850, required=False, allow_null=True)

    def validate_email(self, value: str) -> str:
        return value.strip().lower()

    def validate_employment(self, value):
        # JSONField cannot hold Decimal
        if "income" in value:
            value = {**value, "income": float(value["income"])}
        return value
