# backend/rentflow/payments/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from rentflow.payments.models import Payment, PaymentMethod, PaymentStatus, PaymentType, TERMINAL_STATUSES


class PaymentSerializer(serializers.ModelSerializer):
    class Meta:
        model = Payment
        fields = [
            "id",
            "organization_id",
            "contract_id",
            "tenant_id",
            "amount",
            "type",
            "status",
            "method",
            "due_date",
            "paid_date",
            "period_start",
            "period_end",
            "notes",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class PaymentCreateSerializer(serializers.Serializer):
    contract_id = serializers.UUIDField()
    tenant_id = serializers.UUIDField(required=False)
    amount = serializers.DecimalField(max_digits=14, decimal_places=2, min_value=0)
    type = serializers.ChoiceField(choices=PaymentType.choices)
    due_date = serializers.DateField()
    paid_date = serializers.DateField(required=False, allow_null=True)
    status = serializers.ChoiceField(
        choices=[c for c in PaymentStatus.choices if c[0] not in TERMINAL_STATUSES],
        required=False,
    )
    method = serializers.ChoiceField(choices=PaymentMethod.choices, required=False, allow_blank=True)
    notes = serializers.CharField(required=False, allow_blank=True, trim_whitespace=True)


class PaymentUpdateSerializer(serializers.Serializer):
    amount = serializers.DecimalField(max_digits=14, decimal_places=2, min_value=0, required=False)
    type = serializers.ChoiceField(choices=PaymentType.choices, required=False)
    due_date = serializers.DateField(required=False)
    paid_date = serializers.DateField(required=False, allow_null=True)
    status = serializers.ChoiceField(choices=PaymentStatus.choices, required=False)
    method = serializers.ChoiceField(choices=PaymentMethod.choices, required=False, allow_blank=True)
    notes = serializers.CharField(required=False, allow_blank=True)


class PaymentFinalStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=[(s, s) for s in TERMINAL_STATUSES])


class PaymentFinalStatusResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
    payment = PaymentSerializer()
    regenerated = PaymentSerializer(allow_null=True)
