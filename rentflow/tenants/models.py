# backend/rentflow/tenants/models.py
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from rentflow.common.models import OrganizationScopedModel


class TenantStatus(models.TextChoices):
    PENDING = "PENDING", "Pending"
    APPROVED = "APPROVED", "Approved"
    REJECTED = "REJECTED", "Rejected"
    ACTIVE = "ACTIVE", "Active"
    FORMER = "FORMER", "Former"


class Tenant(OrganizationScopedModel):
    """
    A renter (person) of the organization. Not to be confused with the
    organization itself, which is the multi-tenancy boundary.
    """
    first_name = models.CharField(max_length=150)
    last_name = models.CharField(max_length=150)
    email = models.EmailField()
    phone = models.CharField(max_length=64)

    # {"name", "phone", "relationship"}
    emergency_contact = models.JSONField(default=dict, blank=True)
    # {"employer", "position", "income"}
    employment = models.JSONField(default=dict, blank=True)
    references = models.JSONField(default=list, blank=True)

    application_date = models.DateField(null=True, blank=True)
    status = models.CharField(
        max_length=16,
        choices=TenantStatus.choices,
        default=TenantStatus.PENDING,
        db_index=True,
    )
    credit_score = models.PositiveIntegerField(
        null=True,
        blank=True,
        validators=[MinValueValidator(300), MaxValueValidator(850)],
    )

    class Meta:
        db_table = "tenants_tenant"
        constraints = [
            models.UniqueConstraint(
                fields=["organization", "email"],
                name="uq_tenant_org_email",
            ),
        ]
        indexes = [
            models.Index(fields=["organization", "last_name"]),
            models.Index(fields=["organization", "status"]),
        ]

    def __str__(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
