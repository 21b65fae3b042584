# backend/rentflow/accounting/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from rentflow.accounting.models import AccountingEntry, EntryType


class AccountingEntrySerializer(serializers.ModelSerializer):
    created_by_name = serializers.CharField(source="created_by.get_full_name", read_only=True, default=None)

    class Meta:
        model = AccountingEntry
        fields = [
            "id",
            "organization_id",
            "type",
            "concept",
            "amount",
            "date",
            "notes",
            "property_id",
            "unit_id",
            "contract_id",
            "created_by_id",
            "created_by_name",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class AccountingEntryWriteSerializer(serializers.Serializer):
    type = serializers.ChoiceField(choices=EntryType.choices)
    concept = serializers.CharField(max_length=255)
    amount = serializers.DecimalField(max_digits=14, decimal_places=2, min_value=0)
    date = serializers.DateField()
    notes = serializers.CharField(required=False, allow_blank=True)
    property_id = serializers.UUIDField(required=False, allow_null=True)
    unit_id = serializers.UUIDField(required=False, allow_null=True)
    contract_id = serializers.UUIDField(required=False, allow_null=True)


class LedgerReportQuerySerializer(serializers.Serializer):
    date_from = serializers.DateField(required=False)
    date_to = serializers.DateField(required=False)
    group_by = serializers.ChoiceField(choices=[("month", "month"), ("day", "day")], required=False)


class LedgerBucketSerializer(serializers.Serializer):
    income = serializers.DecimalField(max_digits=16, decimal_places=2)
    expense = serializers.DecimalField(max_digits=16, decimal_places=2)


class LedgerReportSerializer(serializers.Serializer):
    total_income = serializers.DecimalField(max_digits=16, decimal_places=2)
    total_expense = serializers.DecimalField(max_digits=16, decimal_places=2)
    balance = serializers.DecimalField(max_digits=16, decimal_places=2)
    grouped = serializers.DictField(child=LedgerBucketSerializer(), allow_null=True)
