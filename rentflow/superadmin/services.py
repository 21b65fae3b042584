# backend/rentflow/superadmin/services.py
from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict

from django.db.models import Count, DecimalField, Sum, Value
from django.db.models.functions import Coalesce

from rentflow.contracts.models import Contract
from rentflow.iam.models import User
from rentflow.organizations.models import Organization, Plan, Subscription, SubscriptionStatus
from rentflow.properties.models import Property


def platform_dashboard() -> Dict[str, Any]:
    """
    Cross-organization totals for the SUPER_ADMIN console.
    """
    by_status = {
        row["status"]: row["count"]
        for row in Subscription.objects.values("status").annotate(count=Count("id")).order_by("status")
    }

    plans = (
        Plan.objects.annotate(organizations_count=Count("organizations"))
        .order_by("price", "id")
        .values("id", "name", "organizations_count")
    )

    revenue = Subscription.objects.filter(status=SubscriptionStatus.ACTIVE).aggregate(
        total=Coalesce(Sum("plan__price"), Value(Decimal("0.00")), output_field=DecimalField(max_digits=14, decimal_places=2))
    )["total"]

    return {
        "organizations": {
            "total": Organization.objects.count(),
            "active": Organization.objects.filter(is_active=True).count(),
        },
        "users": User.objects.count(),
        "properties": Property.objects.count(),
        "contracts": Contract.objects.count(),
        "subscriptions": {status: by_status.get(status, 0) for status in SubscriptionStatus.values},
        "plan_distribution": [
            {"plan_id": p["id"], "name": p["name"], "organizations": p["organizations_count"]} for p in plans
        ],
        "monthly_revenue": float(revenue),
    }
