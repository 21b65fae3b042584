# backend/rentflow/properties/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from rentflow.properties.models import Property, PropertyStatus, PropertyType, Unit, UnitType


class UnitMiniSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    name = serializers.CharField()


class PropertySerializer(serializers.ModelSerializer):
    unit = UnitMiniSerializer(read_only=True, allow_null=True)

    class Meta:
        model = Property
        fields = [
            "id",
            "organization_id",
            "unit",
            "name",
            "type",
            "address",
            "size",
            "rooms",
            "bathrooms",
            "rent",
            "status",
            "unit_number",
            "floor",
            "amenities",
            "photos",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class PropertyWriteSerializer(serializers.Serializer):
    """
    Create (all required fields) and update (partial=True).
    """
    name = serializers.CharField(max_length=255)
    type = serializers.ChoiceField(choices=PropertyType.choices)
    address = serializers.CharField()
    size = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0, required=False)
    rooms = serializers.IntegerField(min_value=0, required=False)
    bathrooms = serializers.DecimalField(max_digits=4, decimal_places=1, min_value=0, required=False)
    rent = serializers.DecimalField(max_digits=14, decimal_places=2, min_value=0)
    status = serializers.ChoiceField(choices=PropertyStatus.choices, required=False)
    unit_id = serializers.UUIDField(required=False, allow_null=True)
    unit_number = serializers.CharField(max_length=32, required=False, allow_blank=True)
    floor = serializers.IntegerField(required=False, allow_null=True)
    amenities = serializers.ListField(child=serializers.CharField(), required=False)
    photos = serializers.ListField(child=serializers.CharField(), required=False)


class UnitSerializer(serializers.ModelSerializer):
    properties_count = serializers.IntegerField(read_only=True, required=False)

    class Meta:
        model = Unit
        fields = [
            "id",
            "organization_id",
            "name",
            "type",
            "address",
            "description",
            "total_floors",
            "floors",
            "size",
            "amenities",
            "photos",
            "manager",
            "properties_count",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class UnitDetailSerializer(UnitSerializer):
    properties = PropertySerializer(many=True, read_only=True)

    class Meta(UnitSerializer.Meta):
        fields = UnitSerializer.Meta.fields + ["properties"]
        read_only_fields = fields


class UnitWriteSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    type = serializers.ChoiceField(choices=UnitType.choices, required=False)
    address = serializers.CharField()
    description = serializers.CharField(required=False, allow_blank=True)
    total_floors = serializers.IntegerField(min_value=0, required=False, allow_null=True)
    floors = serializers.IntegerField(min_value=0, required=False, allow_null=True)
    size = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0, required=False, allow_null=True)
    amenities = serializers.ListField(child=serializers.CharField(), required=False)
    photos = serializers.ListField(child=serializers.CharField(), required=False)
    manager = serializers.CharField(max_length=255, required=False, allow_blank=True)
