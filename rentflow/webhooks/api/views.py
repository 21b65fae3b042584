# backend/rentflow/webhooks/api/views.py
from __future__ import annotations

import logging

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

logger = logging.getLogger(__name__)


class StripeWebhookView(APIView):
    """
    Billing provider callback. Events are logged and acknowledged; nothing is applied yet.
    """
    permission_classes = [AllowAny]
    authentication_classes: list = []

    @extend_schema(tags=["Webhooks"], request=OpenApiTypes.OBJECT, responses={200: OpenApiTypes.OBJECT})
    def post(self, request):
        payload = request.data if isinstance(request.data, dict) else {}
        logger.info(
            "stripe webhook received type=%s id=%s signed=%s",
            payload.get("type"),
            payload.get("id"),
            bool(request.headers.get("Stripe-Signature")),
        )
        return Response({"received": True}, status=status.HTTP_200_OK)
