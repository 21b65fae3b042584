# backend/rentflow/iam/api/auth.py

from __future__ import annotations

from datetime import timedelta
from typing import Any

from django.conf import settings
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.serializers import TokenRefreshSerializer
from rest_framework_simplejwt.tokens import RefreshToken

from rentflow.iam.api.serializers import (
    DetailResponseSerializer,
    LoginRequestSerializer,
    RegisterSerializer,
    SessionResponseSerializer,
    UserSerializer,
)
from rentflow.iam.services.registration import AuthService, RegistrationService
from rentflow.organizations.api.serializers import OrganizationSerializer, SubscriptionSerializer
from rentflow.organizations.selectors import latest_subscription


def _seconds(value: Any) -> int:
    """
    Convert a JWT lifetime setting into seconds.
    Supports timedelta OR int/float (already seconds).
    """
    if isinstance(value, timedelta):
        return int(value.total_seconds())
    try:
        return int(value)
    except (TypeError, ValueError):
        # 0 means "session cookie"
        return 0


def _set_auth_cookies(response: Response, *, access: str, refresh: str) -> None:
    jwt_cfg = getattr(settings, "SIMPLE_JWT", {}) or {}

    access_name = jwt_cfg.get("AUTH_COOKIE", "rf_access")
    refresh_name = jwt_cfg.get("AUTH_COOKIE_REFRESH", "rf_refresh")

    access_lifetime = _seconds(jwt_cfg.get("ACCESS_TOKEN_LIFETIME", timedelta(minutes=60)))
    refresh_lifetime = _seconds(jwt_cfg.get("REFRESH_TOKEN_LIFETIME", timedelta(days=7)))

    secure = bool(jwt_cfg.get("AUTH_COOKIE_SECURE", False))
    samesite = jwt_cfg.get("AUTH_COOKIE_SAMESITE", "Lax")

    response.set_cookie(
        access_name,
        access,
        max_age=access_lifetime,
        httponly=True,
        secure=secure,
        samesite=samesite,
        path="/",
    )
    response.set_cookie(
        refresh_name,
        refresh,
        max_age=refresh_lifetime,
        httponly=True,
        secure=secure,
        samesite=samesite,
        path="/",
    )


def _clear_auth_cookies(response: Response) -> None:
    jwt_cfg = getattr(settings, "SIMPLE_JWT", {}) or {}
    response.delete_cookie(jwt_cfg.get("AUTH_COOKIE", "rf_access"), path="/")
    response.delete_cookie(jwt_cfg.get("AUTH_COOKIE_REFRESH", "rf_refresh"), path="/")


def session_payload(user) -> dict[str, Any]:
    """
    user + organization + latest subscription, the shape shared by register/login/me.
    """
    org = getattr(user, "organization", None)
    sub = latest_subscription(organization_id=org.id) if org is not None else None
    return {
        "user": UserSerializer(user).data,
        "organization": OrganizationSerializer(org).data if org is not None else None,
        "subscription": SubscriptionSerializer(sub).data if sub is not None else None,
    }


def _issue_tokens(user) -> tuple[str, str]:
    refresh = RefreshToken.for_user(user)
    return str(refresh.access_token), str(refresh)


class RegisterView(APIView):
    permission_classes = [AllowAny]
    authentication_classes: list = []

    @extend_schema(request=RegisterSerializer, responses={201: SessionResponseSerializer}, tags=["Auth"])
    def post(self, request):
        ser = RegisterSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        data = ser.validated_data

        result = RegistrationService.register(
            first_name=data["first_name"],
            last_name=data["last_name"],
            email=data["email"],
            password=data["password"],
            organization_name=data["organization_name"],
            plan_id=data["plan_id"],
            phone=data.get("phone") or "",
        )

        access, refresh = _issue_tokens(result.user)
        body = session_payload(result.user)
        body.update({"message": "Registration successful", "token": access, "refresh": refresh})

        res = Response(body, status=status.HTTP_201_CREATED)
        _set_auth_cookies(res, access=access, refresh=refresh)
        return res


class LoginView(APIView):
    permission_classes = [AllowAny]
    authentication_classes: list = []

    @extend_schema(request=LoginRequestSerializer, responses={200: SessionResponseSerializer}, tags=["Auth"])
    def post(self, request):
        ser = LoginRequestSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        user = AuthService.login(email=ser.validated_data["email"], password=ser.validated_data["password"])

        access, refresh = _issue_tokens(user)
        body = session_payload(user)
        body.update({"message": "Login successful", "token": access, "refresh": refresh})

        res = Response(body, status=status.HTTP_200_OK)
        _set_auth_cookies(res, access=access, refresh=refresh)
        return res


class RefreshView(APIView):
    permission_classes = [AllowAny]
    authentication_classes: list = []

    @extend_schema(request=None, responses={200: DetailResponseSerializer}, tags=["Auth"])
    def post(self, request):
        jwt_cfg = getattr(settings, "SIMPLE_JWT", {}) or {}
        refresh_cookie_name = jwt_cfg.get("AUTH_COOKIE_REFRESH", "rf_refresh")
        refresh = request.data.get("refresh") or request.COOKIES.get(refresh_cookie_name)

        serializer = TokenRefreshSerializer(data={"refresh": refresh})
        serializer.is_valid(raise_exception=True)

        access = serializer.validated_data["access"]
        new_refresh = serializer.validated_data.get("refresh", refresh)

        res = Response({"detail": "refreshed", "token": access, "refresh": new_refresh}, status=status.HTTP_200_OK)
        _set_auth_cookies(res, access=access, refresh=new_refresh)
        return res


class LogoutView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(request=None, responses={200: DetailResponseSerializer}, tags=["Auth"])
    def post(self, request):
        res = Response({"detail": "logged out"}, status=status.HTTP_200_OK)
        _clear_auth_cookies(res)
        return res


class MeView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(responses={200: SessionResponseSerializer}, tags=["Auth"])
    def get(self, request):
        return Response(session_payload(request.user), status=status.HTTP_200_OK)
