# backend/rentflow/properties/filters.py
from __future__ import annotations

import django_filters

from rentflow.properties.models import Property, PropertyStatus, PropertyType, Unit, UnitType


class PropertyFilter(django_filters.FilterSet):
    status = django_filters.ChoiceFilter(choices=PropertyStatus.choices)
    type = django_filters.ChoiceFilter(choices=PropertyType.choices)
    unit = django_filters.UUIDFilter(field_name="unit_id")
    min_rent = django_filters.NumberFilter(field_name="rent", lookup_expr="gte")
    max_rent = django_filters.NumberFilter(field_name="rent", lookup_expr="lte")

    class Meta:
        model = Property
        fields = ["status", "type", "unit"]


class UnitFilter(django_filters.FilterSet):
    type = django_filters.ChoiceFilter(choices=UnitType.choices)

    class Meta:
        model = Unit
        fields = ["type"]
