# backend/rentflow/properties/models.py
from decimal import Decimal

from django.db import models

from rentflow.common.models import OrganizationScopedModel


class UnitType(models.TextChoices):
    BUILDING = "BUILDING", "Building"
    HOUSE = "HOUSE", "House"
    COMMERCIAL = "COMMERCIAL", "Commercial"


class PropertyType(models.TextChoices):
    APARTMENT = "APARTMENT", "Apartment"
    HOUSE = "HOUSE", "House"
    COMMERCIAL = "COMMERCIAL", "Commercial"


class PropertyStatus(models.TextChoices):
    AVAILABLE = "AVAILABLE", "Available"
    RESERVED = "RESERVED", "Reserved"
    RENTED = "RENTED", "Rented"
    MAINTENANCE = "MAINTENANCE", "Maintenance"


class Unit(OrganizationScopedModel):
    """
    A building/complex grouping several rentable properties.
    """
    name = models.CharField(max_length=255)
    type = models.CharField(max_length=16, choices=UnitType.choices, default=UnitType.BUILDING)
    address = models.TextField()
    description = models.TextField(blank=True, default="")

    total_floors = models.PositiveIntegerField(null=True, blank=True)
    floors = models.PositiveIntegerField(null=True, blank=True)
    size = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)

    amenities = models.JSONField(default=list, blank=True)
    photos = models.JSONField(default=list, blank=True)
    manager = models.CharField(max_length=255, blank=True, default="")

    class Meta:
        db_table = "properties_unit"
        indexes = [
            models.Index(fields=["organization", "name"]),
        ]

    def __str__(self) -> str:
        return self.name


class Property(OrganizationScopedModel):
    """
    A rentable space. Optionally part of a Unit (unit_number/floor inside it).
    """
    unit = models.ForeignKey(
        Unit,
        on_delete=models.CASCADE,
        related_name="properties",
        null=True,
        blank=True,
    )

    name = models.CharField(max_length=255)
    type = models.CharField(max_length=16, choices=PropertyType.choices, default=PropertyType.APARTMENT)
    address = models.TextField()

    size = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    rooms = models.PositiveIntegerField(default=0)
    bathrooms = models.DecimalField(max_digits=4, decimal_places=1, default=Decimal("0.0"))
    rent = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0.00"))

    status = models.CharField(
        max_length=16,
        choices=PropertyStatus.choices,
        default=PropertyStatus.AVAILABLE,
        db_index=True,
    )

    unit_number = models.CharField(max_length=32, blank=True, default="")
    floor = models.IntegerField(null=True, blank=True)

    amenities = models.JSONField(default=list, blank=True)
    photos = models.JSONField(default=list, blank=True)

    class Meta:
        db_table = "properties_property"
        verbose_name_plural = "properties"
        indexes = [
            models.Index(fields=["organization", "status"]),
            models.Index(fields=["organization", "type"]),
        ]

    def __str__(self) -> str:
        return self.name
