# backend/rentflow/payments/api/views.py
from __future__ import annotations

from uuid import UUID

from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework import status, viewsets
from rest_framework.response import Response

from rentflow.common.api.pagination import paginate
from rentflow.common.permissions import PaymentPermission
from rentflow.common.scope import require_scope
from rentflow.payments.api.serializers import (
    PaymentCreateSerializer,
    PaymentFinalStatusResponseSerializer,
    PaymentFinalStatusSerializer,
    PaymentSerializer,
    PaymentUpdateSerializer,
)
from rentflow.payments.filters import PaymentFilter
from rentflow.payments.models import Payment
from rentflow.payments.selectors import payment_qs
from rentflow.payments.services import PaymentService
from rentflow.realtime.broadcast import emit_to_organization


@extend_schema_view(
    list=extend_schema(tags=["Payments"], responses={200: PaymentSerializer(many=True)}),
    retrieve=extend_schema(tags=["Payments"], responses={200: PaymentSerializer}),
    create=extend_schema(tags=["Payments"], request=PaymentCreateSerializer, responses={201: PaymentSerializer}),
    update=extend_schema(tags=["Payments"], request=PaymentUpdateSerializer, responses={200: PaymentSerializer}),
    partial_update=extend_schema(
        tags=["Payments"],
        request=PaymentFinalStatusSerializer,
        responses={200: PaymentFinalStatusResponseSerializer},
        description="Cancel or refund a payment. Refunded RENT/DEPOSIT payments of active contracts are regenerated.",
    ),
    destroy=extend_schema(tags=["Payments"], responses={204: None}),
)
class PaymentViewSet(viewsets.GenericViewSet):
    """
    Payments. Filters: status, type, method, contract, tenant, due_from, due_to.
    PUT edits a live payment; PATCH is the CANCELLED/REFUNDED transition.
    """
    permission_classes = [PaymentPermission]
    lookup_value_regex = r"[0-9a-fA-F-]{36}"

    serializer_class = PaymentSerializer
    queryset = Payment.objects.none()
    filterset_class = PaymentFilter
    search_fields = ["notes", "tenant__first_name", "tenant__last_name"]
    ordering_fields = ["due_date", "amount", "created_at", "status"]

    def list(self, request):
        ctx = require_scope(request)
        qs = self.filter_queryset(payment_qs(organization_id=ctx.organization_id))
        return paginate(request, qs, PaymentSerializer)

    def retrieve(self, request, pk=None):
        ctx = require_scope(request)
        obj = payment_qs(organization_id=ctx.organization_id).get(id=UUID(str(pk)))
        return Response(PaymentSerializer(obj).data, status=status.HTTP_200_OK)

    def create(self, request):
        ctx = require_scope(request)
        ser = PaymentCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        payment = PaymentService.create(organization_id=ctx.organization_id, actor_id=ctx.user_id, data=ser.validated_data)
        data = PaymentSerializer(payment).data
        emit_to_organization(ctx.organization_id, "payment:created", data, ctx.as_actor())
        return Response(data, status=status.HTTP_201_CREATED)

    def update(self, request, pk=None):
        ctx = require_scope(request)
        ser = PaymentUpdateSerializer(data=request.data, partial=True)
        ser.is_valid(raise_exception=True)

        payment = PaymentService.update(
            organization_id=ctx.organization_id,
            payment_id=UUID(str(pk)),
            actor_id=ctx.user_id,
            data=ser.validated_data,
        )
        data = PaymentSerializer(payment).data
        emit_to_organization(ctx.organization_id, "payment:updated", data, ctx.as_actor())
        return Response(data, status=status.HTTP_200_OK)

    def partial_update(self, request, pk=None):
        ctx = require_scope(request)
        ser = PaymentFinalStatusSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        new_status = ser.validated_data["status"]

        result = PaymentService.set_final_status(
            organization_id=ctx.organization_id,
            payment_id=UUID(str(pk)),
            status=new_status,
            actor_id=ctx.user_id,
        )

        payment_data = PaymentSerializer(result.payment).data
        emit_to_organization(ctx.organization_id, "payment:updated", payment_data, ctx.as_actor())

        regenerated_data = None
        if result.regenerated is not None:
            regenerated_data = PaymentSerializer(result.regenerated).data
            emit_to_organization(ctx.organization_id, "payment:created", regenerated_data, ctx.as_actor())

        return Response(
            {
                "message": f"Payment status successfully updated to {new_status}.",
                "payment": payment_data,
                "regenerated": regenerated_data,
            },
            status=status.HTTP_200_OK,
        )

    def destroy(self, request, pk=None):
        ctx = require_scope(request)
        PaymentService.delete(organization_id=ctx.organization_id, payment_id=UUID(str(pk)), actor_id=ctx.user_id)
        emit_to_organization(ctx.organization_id, "payment:deleted", {"id": str(pk)}, ctx.as_actor())
        return Response(status=status.HTTP_204_NO_CONTENT)
