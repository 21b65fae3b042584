# backend/rentflow/organizations/defaults.py
from __future__ import annotations

import copy
from typing import Any

PLAN_BASIC = "plan-basic"
PLAN_PROFESSIONAL = "plan-professional"
PLAN_ENTERPRISE = "plan-enterprise"

TRIAL_DAYS = 14

# Organization.settings["limits"] per plan
PLAN_LIMITS: dict[str, dict[str, int]] = {
    PLAN_BASIC: {"maxProperties": 10, "maxTenants": 20, "maxUsers": 2, "storageGB": 5},
    PLAN_PROFESSIONAL: {"maxProperties": 100, "maxTenants": 200, "maxUsers": 5, "storageGB": 10},
    PLAN_ENTERPRISE: {"maxProperties": 1000, "maxTenants": 2000, "maxUsers": 20, "storageGB": 100},
}

# Rows created by `manage.py seed_rentflow`
DEFAULT_PLANS: list[dict[str, Any]] = [
    {
        "id": PLAN_BASIC,
        "name": "Basic",
        "price": "29.00",
        "features": ["Up to 10 properties", "Up to 20 tenants", "2 users", "Email support"],
        "limits": {"properties": 10, "tenants": 20, "users": 2},
    },
    {
        "id": PLAN_PROFESSIONAL,
        "name": "Professional",
        "price": "79.00",
        "features": ["Up to 100 properties", "Up to 200 tenants", "5 users", "Priority support"],
        "limits": {"properties": 100, "tenants": 200, "users": 5},
    },
    {
        "id": PLAN_ENTERPRISE,
        "name": "Enterprise",
        "price": "199.00",
        "features": ["Up to 1000 properties", "Up to 2000 tenants", "20 users", "API access", "Custom branding"],
        "limits": {"properties": 1000, "tenants": 2000, "users": 20},
    },
]

CURRENCIES = ("USD", "EUR", "MXN", "CAD", "GBP", "COP")
DATE_FORMATS = ("DD/MM/YYYY", "MM/DD/YYYY", "YYYY-MM-DD")
LANGUAGES = ("es", "en", "fr", "de")

# keys of Organization.settings derived from the plan
PLAN_OWNED_SETTINGS = ("limits", "features")

BASE_SETTINGS: dict[str, Any] = {
    "currency": "USD",
    "timezone": "America/Mexico_City",
    "dateFormat": "DD/MM/YYYY",
    "language": "es",
}

DEFAULT_PREFERENCES: dict[str, Any] = {
    "theme": "light",
    "notifications": {
        "email": True,
        "push": True,
        "paymentReminders": True,
        "maintenanceUpdates": True,
        "contractExpirations": True,
    },
    "dashboard": {
        "defaultView": "overview",
        "showWelcome": True,
    },
}


def features_for_plan(plan_id: str) -> dict[str, bool]:
    return {
        "multipleProperties": plan_id != PLAN_BASIC,
        "advancedReports": plan_id == PLAN_ENTERPRISE,
        "apiAccess": plan_id == PLAN_ENTERPRISE,
        "customBranding": plan_id == PLAN_ENTERPRISE,
        "prioritySupport": plan_id != PLAN_BASIC,
    }


def limits_for_plan(plan_id: str, plan_limits: dict | None = None) -> dict[str, int]:
    """
    Per-plan limits. A Plan row's own `limits` (properties/tenants/users) win over the table.
    """
    limits = dict(PLAN_LIMITS.get(plan_id, PLAN_LIMITS[PLAN_BASIC]))
    plan_limits = plan_limits or {}
    if "properties" in plan_limits:
        limits["maxProperties"] = int(plan_limits["properties"])
    if "tenants" in plan_limits:
        limits["maxTenants"] = int(plan_limits["tenants"])
    if "users" in plan_limits:
        limits["maxUsers"] = int(plan_limits["users"])
    return limits


def default_settings_for_plan(plan_id: str, plan_limits: dict | None = None) -> dict[str, Any]:
    settings = copy.deepcopy(BASE_SETTINGS)
    settings["features"] = features_for_plan(plan_id)
    settings["limits"] = limits_for_plan(plan_id, plan_limits)
    return settings


def merge_settings(current: dict | None, incoming: dict | None) -> dict[str, Any]:
    """
    Merge `incoming` over `current`. Nested dicts (features, limits, notifications)
    are merged key by key instead of replaced.
    """
    merged = copy.deepcopy(current or {})
    for key, value in (incoming or {}).items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_settings(merged[key], value)
        else:
            merged[key] = value
    return merged
