# backend/rentflow/org_settings/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

THEMES = ("light", "dark", "system")


class PreferencesSerializer(serializers.Serializer):
    theme = serializers.ChoiceField(choices=[(t, t) for t in THEMES], required=False)
    notifications = serializers.DictField(child=serializers.BooleanField(), required=False)
    display = serializers.DictField(required=False)
    dashboard = serializers.DictField(required=False)


class PreferencesResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
    preferences = serializers.DictField()
