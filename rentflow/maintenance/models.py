# backend/rentflow/maintenance/models.py
from django.db import models
from django.utils import timezone

from rentflow.common.models import OrganizationScopedModel


class MaintenancePriority(models.TextChoices):
    LOW = "LOW", "Low"
    MEDIUM = "MEDIUM", "Medium"
    HIGH = "HIGH", "High"
    EMERGENCY = "EMERGENCY", "Emergency"


class MaintenanceCategory(models.TextChoices):
    PLUMBING = "PLUMBING", "Plumbing"
    ELECTRICAL = "ELECTRICAL", "Electrical"
    HVAC = "HVAC", "HVAC"
    APPLIANCE = "APPLIANCE", "Appliance"
    STRUCTURAL = "STRUCTURAL", "Structural"
    OTHER = "OTHER", "Other"


class MaintenanceStatus(models.TextChoices):
    OPEN = "OPEN", "Open"
    IN_PROGRESS = "IN_PROGRESS", "In progress"
    COMPLETED = "COMPLETED", "Completed"
    CANCELLED = "CANCELLED", "Cancelled"


class MaintenanceRequest(OrganizationScopedModel):
    property = models.ForeignKey(
        "properties.Property",
        on_delete=models.CASCADE,
        related_name="maintenance_requests",
    )
    tenant = models.ForeignKey(
        "tenants.Tenant",
        on_delete=models.SET_NULL,
        related_name="maintenance_requests",
        null=True,
        blank=True,
    )

    title = models.CharField(max_length=255)
    description = models.TextField()
    priority = models.CharField(
        max_length=16,
        choices=MaintenancePriority.choices,
        default=MaintenancePriority.MEDIUM,
        db_index=True,
    )
    category = models.CharField(max_length=16, choices=MaintenanceCategory.choices, default=MaintenanceCategory.OTHER)
    status = models.CharField(
        max_length=16,
        choices=MaintenanceStatus.choices,
        default=MaintenanceStatus.OPEN,
        db_index=True,
    )

    reported_date = models.DateTimeField(default=timezone.now)
    completed_date = models.DateTimeField(null=True, blank=True)
    assigned_to = models.CharField(max_length=255, blank=True, default="")

    estimated_cost = models.DecimalField(max_digits=14, decimal_places=2, null=True, blank=True)
    actual_cost = models.DecimalField(max_digits=14, decimal_places=2, null=True, blank=True)

    notes = models.TextField(blank=True, default="")
    photos = models.JSONField(default=list, blank=True)

    class Meta:
        db_table = "maintenance_request"
        indexes = [
            models.Index(fields=["organization", "status"]),
            models.Index(fields=["organization", "priority"]),
        ]

    def __str__(self) -> str:
        return f"{self.title} ({self.status})"
