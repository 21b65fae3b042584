# backend/rentflow/payments/models.py
from django.db import models

from rentflow.common.models import OrganizationScopedModel


class PaymentType(models.TextChoices):
    RENT = "RENT", "Rent"
    DEPOSIT = "DEPOSIT", "Deposit"
    LATE_FEE = "LATE_FEE", "Late fee"
    UTILITY = "UTILITY", "Utility"
    MAINTENANCE = "MAINTENANCE", "Maintenance"


class PaymentStatus(models.TextChoices):
    PENDING = "PENDING", "Pending"
    PAID = "PAID", "Paid"
    OVERDUE = "OVERDUE", "Overdue"
    PARTIAL = "PARTIAL", "Partial"
    CANCELLED = "CANCELLED", "Cancelled"
    REFUNDED = "REFUNDED", "Refunded"


class PaymentMethod(models.TextChoices):
    CASH = "CASH", "Cash"
    CHECK = "CHECK", "Check"
    BANK_TRANSFER = "BANK_TRANSFER", "Bank transfer"
    ONLINE = "ONLINE", "Online"


TERMINAL_STATUSES = (PaymentStatus.CANCELLED, PaymentStatus.REFUNDED)

# Types whose refund re-opens the obligation with a fresh PENDING copy.
REGENERABLE_TYPES = (PaymentType.RENT, PaymentType.DEPOSIT)


class Payment(OrganizationScopedModel):
    contract = models.ForeignKey(
        "contracts.Contract",
        on_delete=models.PROTECT,
        related_name="payments",
    )
    # redundant with contract.tenant; kept for filtering
    tenant = models.ForeignKey(
        "tenants.Tenant",
        on_delete=models.PROTECT,
        related_name="payments",
    )

    amount = models.DecimalField(max_digits=14, decimal_places=2)
    type = models.CharField(max_length=16, choices=PaymentType.choices, default=PaymentType.RENT, db_index=True)
    status = models.CharField(max_length=16, choices=PaymentStatus.choices, default=PaymentStatus.PENDING, db_index=True)
    method = models.CharField(max_length=16, choices=PaymentMethod.choices, blank=True, default="")

    due_date = models.DateField(db_index=True)
    paid_date = models.DateField(null=True, blank=True)
    period_start = models.DateField(null=True, blank=True)
    period_end = models.DateField(null=True, blank=True)

    notes = models.TextField(blank=True, default="")

    class Meta:
        db_table = "payments_payment"
        constraints = [
            # at most one live RENT payment per contract period
            models.UniqueConstraint(
                fields=["contract", "period_start"],
                condition=models.Q(type="RENT") & ~models.Q(status__in=["CANCELLED", "REFUNDED"]),
                name="uq_payment_live_rent_period",
            ),
        ]
        indexes = [
            models.Index(fields=["organization", "status"]),
            models.Index(fields=["organization", "due_date"]),
            models.Index(fields=["contract", "period_start"]),
        ]

    def __str__(self) -> str:
        return f"{self.type} {self.amount} due {self.due_date} ({self.status})"

    @property
    def is_final(self) -> bool:
        return self.status in TERMINAL_STATUSES
