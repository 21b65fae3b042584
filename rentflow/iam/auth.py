# backend/rentflow/iam/auth.py

from __future__ import annotations

import time

import jwt
from django.conf import settings
from rest_framework.exceptions import AuthenticationFailed
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import InvalidToken as JWTInvalidToken

from rentflow.common.api.exceptions import (
    InvalidToken,
    OrganizationInactive,
    TokenExpired,
    UserNotFound,
)
from rentflow.common.permissions import is_super_admin


def token_is_expired(raw_token) -> bool:
    """
    True when the token decodes and its `exp` is in the past.
    Signature is not checked here; this only picks the error code.
    """
    try:
        claims = jwt.decode(raw_token, options={"verify_signature": False})
    except jwt.PyJWTError:
        return False
    exp = claims.get("exp")
    return exp is not None and float(exp) < time.time()


def ensure_organization_active(user) -> None:
    if is_super_admin(user):
        return
    org = getattr(user, "organization", None)
    if org is not None and not org.is_active:
        raise OrganizationInactive()


class CookieOrHeaderJWTAuthentication(JWTAuthentication):
    """
    Authenticate using:
      1) Authorization: Bearer <access>
      2) HttpOnly cookie containing access token

    Failures map to TOKEN_EXPIRED / INVALID_TOKEN / USER_NOT_FOUND, and a user of
    an inactive organization gets ORGANIZATION_INACTIVE.
    """

    def get_validated_token(self, raw_token):
        try:
            return super().get_validated_token(raw_token)
        except JWTInvalidToken:
            if token_is_expired(raw_token):
                raise TokenExpired()
            raise InvalidToken()

    def get_user(self, validated_token):
        try:
            return super().get_user(validated_token)
        except JWTInvalidToken:
            raise InvalidToken()
        except AuthenticationFailed:
            raise UserNotFound()

    def authenticate(self, request):
        # 1) Prefer Authorization header
        header = self.get_header(request)
        if header:
            auth_result = super().authenticate(request)
            if auth_result is None:
                return None
            user, token = auth_result
            ensure_organization_active(user)
            return user, token

        # 2) Cookie access token
        cookie_name = settings.SIMPLE_JWT.get("AUTH_COOKIE", "rf_access")
        raw_token = request.COOKIES.get(cookie_name)
        if not raw_token:
            return None

        validated_token = self.get_validated_token(raw_token)
        user = self.get_user(validated_token)

        ensure_organization_active(user)
        return user, validated_token
