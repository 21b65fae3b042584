# backend/rentflow/organizations/models.py
import uuid
from decimal import Decimal

from django.db import models

from rentflow.common.models import TimeStampedModel


class Plan(TimeStampedModel):
    """
    Commercial plan. The id is a stable slug (plan-basic, plan-professional, ...)
    so clients and seeds can reference it directly.
    """

    id = models.CharField(primary_key=True, max_length=64)
    name = models.CharField(max_length=128)
    price = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))

    # marketing bullet list, e.g. ["Up to 10 properties", "Email support"]
    features = models.JSONField(default=list, blank=True)
    # {"properties": 10, "tenants": 20, "users": 2}
    limits = models.JSONField(default=dict, blank=True)

    is_active = models.BooleanField(default=True, db_index=True)

    class Meta:
        db_table = "organizations_plan"
        ordering = ["price", "id"]

    def __str__(self) -> str:
        return f"{self.name} ({self.id})"


class Organization(TimeStampedModel):
    """
    Tenant boundary. Root of all scoping in the system.
    NOT an OrganizationScopedModel (it *is* the organization).
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    name = models.CharField(max_length=255)
    slug = models.SlugField(max_length=128, unique=True)
    domain = models.CharField(max_length=255, blank=True, default="")
    logo = models.URLField(max_length=500, blank=True, default="")
    address = models.TextField(blank=True, default="")
    phone = models.CharField(max_length=64, blank=True, default="")
    email = models.EmailField(blank=True, default="")

    plan = models.ForeignKey(
        Plan,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="organizations",
    )

    is_active = models.BooleanField(default=True, db_index=True)

    # currency, timezone, dateFormat, language, features{}, limits{}
    settings = models.JSONField(default=dict, blank=True)

    class Meta:
        db_table = "organizations_organization"
        indexes = [
            models.Index(fields=["slug"]),
            models.Index(fields=["is_active"]),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.slug})"

    def limit(self, key: str, default: int | None = None) -> int | None:
        limits = (self.settings or {}).get("limits") or {}
        value = limits.get(key, default)
        return int(value) if value is not None else None


class SubscriptionStatus(models.TextChoices):
    TRIALING = "TRIALING", "Trialing"
    ACTIVE = "ACTIVE", "Active"
    PAST_DUE = "PAST_DUE", "Past due"
    CANCELED = "CANCELED", "Canceled"
    DEMO = "DEMO", "Demo"


class Subscription(TimeStampedModel):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    organization = models.ForeignKey(
        Organization,
        on_delete=models.CASCADE,
        related_name="subscriptions",
    )
    plan = models.ForeignKey(
        Plan,
        on_delete=models.PROTECT,
        related_name="subscriptions",
    )

    status = models.CharField(
        max_length=16,
        choices=SubscriptionStatus.choices,
        default=SubscriptionStatus.TRIALING,
        db_index=True,
    )

    current_period_start = models.DateTimeField()
    current_period_end = models.DateTimeField()
    trial_end = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "organizations_subscription"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["organization", "created_at"]),
            models.Index(fields=["status"]),
        ]

    def __str__(self) -> str:
        return f"{self.organization_id} {self.plan_id} {self.status}"
