# backend/rentflow/activity/api/serializers.py
from rest_framework import serializers

from rentflow.activity.models import ActivityLog


class ActivityUserSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    first_name = serializers.CharField()
    last_name = serializers.CharField()
    email = serializers.EmailField()


class ActivityLogSerializer(serializers.ModelSerializer):
    user = ActivityUserSerializer(read_only=True, allow_null=True)

    class Meta:
        model = ActivityLog
        fields = [
            "id",
            "organization_id",
            "entity_type",
            "entity_id",
            "action",
            "description",
            "is_system_action",
            "metadata",
            "user",
            "created_at",
        ]
        read_only_fields = fields
