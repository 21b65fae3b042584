# backend/rentflow/organizations/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from rentflow.organizations.defaults import CURRENCIES, DATE_FORMATS, LANGUAGES, PLAN_OWNED_SETTINGS
from rentflow.organizations.models import Organization, Plan, Subscription, SubscriptionStatus


class PlanSerializer(serializers.ModelSerializer):
    class Meta:
        model = Plan
        fields = [
            "id",
            "name",
            "price",
            "features",
            "limits",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class PlanCreateSerializer(serializers.Serializer):
    id = serializers.SlugField(max_length=64)
    name = serializers.CharField(max_length=128)
    price = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)
    features = serializers.ListField(child=serializers.CharField(), required=False, default=list)
    limits = serializers.DictField(child=serializers.IntegerField(min_value=0), required=False, default=dict)
    is_active = serializers.BooleanField(required=False, default=True)


class PlanBulkItemSerializer(serializers.Serializer):
    id = serializers.CharField(max_length=64)
    name = serializers.CharField(max_length=128, required=False)
    price = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0, required=False)
    features = serializers.ListField(child=serializers.CharField(), required=False)
    limits = serializers.DictField(child=serializers.IntegerField(min_value=0), required=False)
    is_active = serializers.BooleanField(required=False)


class PlanBulkUpdateSerializer(serializers.Serializer):
    plans = PlanBulkItemSerializer(many=True, allow_empty=False)


class SubscriptionSerializer(serializers.ModelSerializer):
    plan = PlanSerializer(read_only=True)

    class Meta:
        model = Subscription
        fields = [
            "id",
            "organization_id",
            "plan",
            "status",
            "current_period_start",
            "current_period_end",
            "trial_end",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class SubscriptionUpdateSerializer(serializers.Serializer):
    plan_id = serializers.CharField(max_length=64, required=False)
    status = serializers.ChoiceField(choices=SubscriptionStatus.choices, required=False)
    current_period_end = serializers.DateTimeField(required=False)


class OrganizationSerializer(serializers.ModelSerializer):
    plan_id = serializers.CharField(read_only=True, allow_null=True)

    class Meta:
        model = Organization
        fields = [
            "id",
            "name",
            "slug",
            "domain",
            "logo",
            "address",
            "phone",
            "email",
            "plan_id",
            "is_active",
            "settings",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class OrganizationListSerializer(OrganizationSerializer):
    """Super-admin listing: adds usage counts and the latest subscription."""
    users_count = serializers.IntegerField(read_only=True)
    properties_count = serializers.IntegerField(read_only=True)
    tenants_count = serializers.IntegerField(read_only=True)
    subscription = serializers.SerializerMethodField()

    class Meta(OrganizationSerializer.Meta):
        fields = OrganizationSerializer.Meta.fields + [
            "users_count",
            "properties_count",
            "tenants_count",
            "subscription",
        ]
        read_only_fields = fields

    def get_subscription(self, obj):
        sub = obj.subscriptions.select_related("plan").order_by("-created_at").first()
        return SubscriptionSerializer(sub).data if sub else None


class OrganizationUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255, required=False)
    domain = serializers.CharField(max_length=255, required=False, allow_blank=True)
    logo = serializers.URLField(max_length=500, required=False, allow_blank=True)
    address = serializers.CharField(required=False, allow_blank=True)
    phone = serializers.CharField(max_length=64, required=False, allow_blank=True)
    email = serializers.EmailField(required=False, allow_blank=True)
    settings = serializers.DictField(required=False)

    def validate_settings(self, value: dict) -> dict:
        errors = {}
        if "currency" in value and value["currency"] not in CURRENCIES:
            errors["currency"] = f"Must be one of: {', '.join(CURRENCIES)}."
        if "dateFormat" in value and value["dateFormat"] not in DATE_FORMATS:
            errors["dateFormat"] = f"Must be one of: {', '.join(DATE_FORMATS)}."
        if "language" in value and value["language"] not in LANGUAGES:
            errors["language"] = f"Must be one of: {', '.join(LANGUAGES)}."
        if "timezone" in value and not isinstance(value["timezone"], str):
            errors["timezone"] = "Must be a string."
        if errors:
            raise serializers.ValidationError(errors)

        # limits/features follow the plan; only SUPER_ADMIN may override them
        if not self.context.get("is_super_admin"):
            value = {k: v for k, v in value.items() if k not in PLAN_OWNED_SETTINGS}
        return value
