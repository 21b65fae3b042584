# backend/rentflow/contracts/models.py
from decimal import Decimal

from django.db import models

from rentflow.common.models import OrganizationScopedModel


class ContractStatus(models.TextChoices):
    DRAFT = "DRAFT", "Draft"
    ACTIVE = "ACTIVE", "Active"
    EXPIRED = "EXPIRED", "Expired"
    TERMINATED = "TERMINATED", "Terminated"


class Contract(OrganizationScopedModel):
    """
    Lease between the organization and a tenant for one property.
    Only ACTIVE contracts produce monthly RENT payments; end_date drives expiry.
    """
    property = models.ForeignKey(
        "properties.Property",
        on_delete=models.PROTECT,
        related_name="contracts",
    )
    tenant = models.ForeignKey(
        "tenants.Tenant",
        on_delete=models.PROTECT,
        related_name="contracts",
    )

    start_date = models.DateField()
    end_date = models.DateField()
    monthly_rent = models.DecimalField(max_digits=14, decimal_places=2)
    security_deposit = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0.00"))

    status = models.CharField(
        max_length=16,
        choices=ContractStatus.choices,
        default=ContractStatus.DRAFT,
        db_index=True,
    )
    terms = models.JSONField(default=list, blank=True)
    signed_date = models.DateField(null=True, blank=True)

    termination_date = models.DateField(null=True, blank=True)
    termination_reason = models.TextField(blank=True, default="")
    renewal_notification_sent = models.BooleanField(default=False)

    class Meta:
        db_table = "contracts_contract"
        indexes = [
            models.Index(fields=["organization", "status"]),
            models.Index(fields=["status", "end_date"]),
        ]

    def __str__(self) -> str:
        return f"Contract {self.id} ({self.status})"
