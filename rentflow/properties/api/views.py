# backend/rentflow/properties/api/views.py
from __future__ import annotations

from uuid import UUID

from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework import status, viewsets
from rest_framework.response import Response

from rentflow.common.api.pagination import paginate
from rentflow.common.permissions import PropertyPermission
from rentflow.common.scope import require_scope
from rentflow.properties.api.serializers import (
    PropertySerializer,
    PropertyWriteSerializer,
    UnitDetailSerializer,
    UnitSerializer,
    UnitWriteSerializer,
)
from rentflow.properties.filters import PropertyFilter, UnitFilter
from rentflow.properties.models import Property, Unit
from rentflow.properties.selectors import property_qs, unit_qs
from rentflow.properties.services import PropertyService, UnitService
from rentflow.realtime.broadcast import emit_to_organization


@extend_schema_view(
    list=extend_schema(tags=["Properties"], responses={200: PropertySerializer(many=True)}),
    retrieve=extend_schema(tags=["Properties"], responses={200: PropertySerializer}),
    create=extend_schema(tags=["Properties"], request=PropertyWriteSerializer, responses={201: PropertySerializer}),
    update=extend_schema(tags=["Properties"], request=PropertyWriteSerializer, responses={200: PropertySerializer}),
    partial_update=extend_schema(tags=["Properties"], request=PropertyWriteSerializer, responses={200: PropertySerializer}),
    destroy=extend_schema(tags=["Properties"], responses={204: None}),
)
class PropertyViewSet(viewsets.GenericViewSet):
    """
    Properties of the organization.
    Filters: status, type, unit, min_rent, max_rent; search: name/address; ordering.
    """
    permission_classes = [PropertyPermission]
    lookup_value_regex = r"[0-9a-fA-F-]{36}"

    serializer_class = PropertySerializer
    queryset = Property.objects.none()
    filterset_class = PropertyFilter
    search_fields = ["name", "address", "unit_number"]
    ordering_fields = ["name", "rent", "created_at", "status"]

    def list(self, request):
        ctx = require_scope(request)
        qs = self.filter_queryset(property_qs(organization_id=ctx.organization_id))
        return paginate(request, qs, PropertySerializer)

    def retrieve(self, request, pk=None):
        ctx = require_scope(request)
        obj = property_qs(organization_id=ctx.organization_id).get(id=UUID(str(pk)))
        return Response(PropertySerializer(obj).data, status=status.HTTP_200_OK)

    def create(self, request):
        ctx = require_scope(request)
        ser = PropertyWriteSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        prop = PropertyService.create(organization_id=ctx.organization_id, data=ser.validated_data)
        data = PropertySerializer(prop).data
        emit_to_organization(ctx.organization_id, "property:created", data, ctx.as_actor())
        return Response(data, status=status.HTTP_201_CREATED)

    def partial_update(self, request, pk=None):
        ctx = require_scope(request)
        ser = PropertyWriteSerializer(data=request.data, partial=True)
        ser.is_valid(raise_exception=True)

        prop = PropertyService.update(
            organization_id=ctx.organization_id,
            property_id=UUID(str(pk)),
            data=ser.validated_data,
        )
        data = PropertySerializer(prop).data
        emit_to_organization(ctx.organization_id, "property:updated", data, ctx.as_actor())
        return Response(data, status=status.HTTP_200_OK)

    def update(self, request, pk=None):
        return self.partial_update(request, pk=pk)

    def destroy(self, request, pk=None):
        ctx = require_scope(request)
        PropertyService.delete(organization_id=ctx.organization_id, property_id=UUID(str(pk)))
        emit_to_organization(ctx.organization_id, "property:deleted", {"id": str(pk)}, ctx.as_actor())
        return Response(status=status.HTTP_204_NO_CONTENT)


@extend_schema_view(
    list=extend_schema(tags=["Units"], responses={200: UnitSerializer(many=True)}),
    retrieve=extend_schema(tags=["Units"], responses={200: UnitDetailSerializer}),
    create=extend_schema(tags=["Units"], request=UnitWriteSerializer, responses={201: UnitSerializer}),
    update=extend_schema(tags=["Units"], request=UnitWriteSerializer, responses={200: UnitSerializer}),
    partial_update=extend_schema(tags=["Units"], request=UnitWriteSerializer, responses={200: UnitSerializer}),
    destroy=extend_schema(tags=["Units"], responses={204: None}),
)
class UnitViewSet(viewsets.GenericViewSet):
    """
    Buildings/complexes. Deleting a unit deletes its properties.
    """
    permission_classes = [PropertyPermission]
    lookup_value_regex = r"[0-9a-fA-F-]{36}"

    serializer_class = UnitSerializer
    queryset = Unit.objects.none()
    filterset_class = UnitFilter
    search_fields = ["name", "address"]
    ordering_fields = ["name", "created_at"]

    def list(self, request):
        ctx = require_scope(request)
        qs = self.filter_queryset(unit_qs(organization_id=ctx.organization_id))
        return paginate(request, qs, UnitSerializer)

    def retrieve(self, request, pk=None):
        ctx = require_scope(request)
        obj = unit_qs(organization_id=ctx.organization_id).prefetch_related("properties").get(id=UUID(str(pk)))
        return Response(UnitDetailSerializer(obj).data, status=status.HTTP_200_OK)

    def create(self, request):
        ctx = require_scope(request)
        ser = UnitWriteSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        unit = UnitService.create(organization_id=ctx.organization_id, data=ser.validated_data)
        data = UnitSerializer(unit).data
        emit_to_organization(ctx.organization_id, "unit:created", data, ctx.as_actor())
        return Response(data, status=status.HTTP_201_CREATED)

    def partial_update(self, request, pk=None):
        ctx = require_scope(request)
        ser = UnitWriteSerializer(data=request.data, partial=True)
        ser.is_valid(raise_exception=True)

        unit = UnitService.update(organization_id=ctx.organization_id, unit_id=UUID(str(pk)), data=ser.validated_data)
        data = UnitSerializer(unit).data
        emit_to_organization(ctx.organization_id, "unit:updated", data, ctx.as_actor())
        return Response(data, status=status.HTTP_200_OK)

    def update(self, request, pk=None):
        return self.partial_update(request, pk=pk)

    def destroy(self, request, pk=None):
        ctx = require_scope(request)
        UnitService.delete(organization_id=ctx.organization_id, unit_id=UUID(str(pk)))
        emit_to_organization(ctx.organization_id, "unit:deleted", {"id": str(pk)}, ctx.as_actor())
        return Response(status=status.HTTP_204_NO_CONTENT)
