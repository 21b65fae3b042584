# backend/rentflow/contracts/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from rentflow.contracts.models import Contract, ContractStatus
from rentflow.contracts.services import ACTION_CONTEXTS
from rentflow.payments.api.serializers import PaymentSerializer


class ContractPropertySerializer(serializers.Serializer):
    id = serializers.UUIDField()
    name = serializers.CharField()
    address = serializers.CharField()
    status = serializers.CharField()
    unit_name = serializers.CharField(source="unit.name", default=None)


class ContractTenantSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    first_name = serializers.CharField()
    last_name = serializers.CharField()
    email = serializers.EmailField()
    phone = serializers.CharField()


class ContractSerializer(serializers.ModelSerializer):
    property = ContractPropertySerializer(read_only=True)
    tenant = ContractTenantSerializer(read_only=True)

    class Meta:
        model = Contract
        fields = [
            "id",
            "organization_id",
            "property",
            "tenant",
            "start_date",
            "end_date",
            "monthly_rent",
            "security_deposit",
            "status",
            "terms",
            "signed_date",
            "termination_date",
            "termination_reason",
            "renewal_notification_sent",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class ContractDetailSerializer(ContractSerializer):
    payments = PaymentSerializer(many=True, read_only=True)

    class Meta(ContractSerializer.Meta):
        fields = ContractSerializer.Meta.fields + ["payments"]
        read_only_fields = fields


class ContractWriteSerializer(serializers.Serializer):
    property_id = serializers.UUIDField()
    tenant_id = serializers.UUIDField()
    start_date = serializers.DateField()
    end_date = serializers.DateField()
    monthly_rent = serializers.DecimalField(max_digits=14, decimal_places=2, min_value=0)
    security_deposit = serializers.DecimalField(max_digits=14, decimal_places=2, min_value=0, required=False)
    status = serializers.ChoiceField(choices=ContractStatus.choices, required=False)
    terms = serializers.ListField(child=serializers.CharField(), required=False)
    signed_date = serializers.DateField(required=False, allow_null=True)
    termination_date = serializers.DateField(required=False, allow_null=True)
    termination_reason = serializers.CharField(required=False, allow_blank=True)
    renewal_notification_sent = serializers.BooleanField(required=False)

    # Not persisted: selects the activity description on update.
    action_context = serializers.ChoiceField(choices=[(c, c) for c in ACTION_CONTEXTS], required=False)

    def validate(self, attrs):
        start, end = attrs.get("start_date"), attrs.get("end_date")
        if start and end and end < start:
            raise serializers.ValidationError({"end_date": "end_date must be on or after start_date."})
        return attrs
