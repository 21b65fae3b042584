# backend/rentflow/accounting/models.py
from django.conf import settings
from django.db import models

from rentflow.common.models import OrganizationScopedModel


class EntryType(models.TextChoices):
    INCOME = "INCOME", "Income"
    EXPENSE = "EXPENSE", "Expense"


class AccountingEntry(OrganizationScopedModel):
    """
    Manual ledger line (income or expense), optionally tied to a property,
    unit or contract.
    """
    type = models.CharField(max_length=8, choices=EntryType.choices, db_index=True)
    concept = models.CharField(max_length=255)
    amount = models.DecimalField(max_digits=14, decimal_places=2)
    date = models.DateField(db_index=True)
    notes = models.TextField(blank=True, default="")

    property = models.ForeignKey(
        "properties.Property",
        on_delete=models.SET_NULL,
        related_name="accounting_entries",
        null=True,
        blank=True,
    )
    unit = models.ForeignKey(
        "properties.Unit",
        on_delete=models.SET_NULL,
        related_name="accounting_entries",
        null=True,
        blank=True,
    )
    contract = models.ForeignKey(
        "contracts.Contract",
        on_delete=models.SET_NULL,
        related_name="accounting_entries",
        null=True,
        blank=True,
    )
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        related_name="accounting_entries",
        null=True,
        blank=True,
    )

    class Meta:
        db_table = "accounting_entry"
        verbose_name_plural = "accounting entries"
        indexes = [
            models.Index(fields=["organization", "date"]),
            models.Index(fields=["organization", "type"]),
        ]

    def __str__(self) -> str:
        return f"{self.type} {self.amount} {self.concept}"
