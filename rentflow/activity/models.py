# backend/rentflow/activity/models.py
from django.conf import settings
from django.db import models

from rentflow.common.models import OrganizationScopedModel


class ActivityEntity(models.TextChoices):
    ORGANIZATION = "ORGANIZATION", "Organization"
    USER = "USER", "User"
    PROPERTY = "PROPERTY", "Property"
    UNIT = "UNIT", "Unit"
    TENANT = "TENANT", "Tenant"
    CONTRACT = "CONTRACT", "Contract"
    PAYMENT = "PAYMENT", "Payment"
    MAINTENANCE = "MAINTENANCE", "Maintenance"
    ACCOUNTING = "ACCOUNTING", "Accounting"
    PLAN = "PLAN", "Plan"


class ActivityAction(models.TextChoices):
    CREATE = "CREATE", "Create"
    UPDATE = "UPDATE", "Update"
    DELETE = "DELETE", "Delete"
    ACTIVATE = "ACTIVATE", "Activate"
    DEACTIVATE = "DEACTIVATE", "Deactivate"
    EXPIRE = "EXPIRE", "Expire"
    TERMINATE = "TERMINATE", "Terminate"
    REFUND = "REFUND", "Refund"
    CANCEL = "CANCEL", "Cancel"


class ActivityLog(OrganizationScopedModel):
    """
    Immutable activity record shown in the UI timeline.
    """
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        related_name="activity_logs",
        null=True,
        blank=True,
    )

    entity_type = models.CharField(max_length=32, choices=ActivityEntity.choices, db_index=True)
    # string so PLAN slugs fit next to UUIDs
    entity_id = models.CharField(max_length=64, db_index=True)
    action = models.CharField(max_length=32, choices=ActivityAction.choices, db_index=True)
    description = models.TextField(blank=True, default="")
    is_system_action = models.BooleanField(default=False, db_index=True)
    metadata = models.JSONField(default=dict, blank=True)

    class Meta:
        db_table = "activity_activity_log"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["organization", "created_at"]),
            models.Index(fields=["entity_type", "entity_id"]),
        ]

    def __str__(self) -> str:
        return f"{self.entity_type}:{self.action} {self.entity_id}"
