# backend/rentflow/iam/openapi.py
from drf_spectacular.extensions import OpenApiAuthenticationExtension


class CookieOrHeaderJWTAuthenticationScheme(OpenApiAuthenticationExtension):
    """Imported from IamConfig.ready(); lets /api/docs authorize requests."""

    target_class = "rentflow.iam.auth.CookieOrHeaderJWTAuthentication"
    name = "RentflowJWT"

    def get_security_definition(self, auto_schema):
        return {
            "type": "http",
            "scheme": "bearer",
            "bearerFormat": "JWT",
            "description": (
                "Access token from /api/v1/auth/login/ as `Authorization: Bearer <token>`, "
                "or the HttpOnly `rf_access` cookie set by the same call. "
                "Organization-scoped endpoints also need `X-Organization-ID`."
            ),
        }
