# backend/rentflow/iam/api/serializers.py
from __future__ import annotations

from django.contrib.auth import get_user_model
from rest_framework import serializers

from rentflow.iam.models import UserRole
from rentflow.organizations.api.serializers import OrganizationSerializer, SubscriptionSerializer

User = get_user_model()


class UserSerializer(serializers.ModelSerializer):
    organization_id = serializers.UUIDField(read_only=True, allow_null=True)

    class Meta:
        model = User
        fields = [
            "id",
            "email",
            "first_name",
            "last_name",
            "role",
            "organization_id",
            "is_active",
            "last_login",
            "date_joined",
            "updated_at",
        ]
        read_only_fields = fields


class RegisterSerializer(serializers.Serializer):
    first_name = serializers.CharField(min_length=2, max_length=150)
    last_name = serializers.CharField(min_length=2, max_length=150)
    email = serializers.EmailField()
    password = serializers.CharField(min_length=8, write_only=True)
    organization_name = serializers.CharField(min_length=2, max_length=255)
    plan_id = serializers.CharField(max_length=64)
    phone = serializers.CharField(max_length=64, required=False, allow_blank=True, default="")


class LoginRequestSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField()


class SessionResponseSerializer(serializers.Serializer):
    user = UserSerializer()
    organization = OrganizationSerializer(allow_null=True)
    subscription = SubscriptionSerializer(allow_null=True)
    token = serializers.CharField(required=False)
    refresh = serializers.CharField(required=False)


class DetailResponseSerializer(serializers.Serializer):
    detail = serializers.CharField()


class UserCreateSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(min_length=8, write_only=True)
    first_name = serializers.CharField(min_length=2, max_length=150)
    last_name = serializers.CharField(min_length=2, max_length=150)
    role = serializers.ChoiceField(choices=UserRole.choices, required=False, default=UserRole.USER)


class UserUpdateSerializer(serializers.Serializer):
    email = serializers.EmailField(required=False)
    first_name = serializers.CharField(min_length=2, max_length=150, required=False)
    last_name = serializers.CharField(min_length=2, max_length=150, required=False)
    role = serializers.ChoiceField(choices=UserRole.choices, required=False)
    is_active = serializers.BooleanField(required=False)


class PasswordChangeSerializer(serializers.Serializer):
    current_password = serializers.CharField(required=False, allow_blank=True)
    new_password = serializers.CharField(min_length=8)
