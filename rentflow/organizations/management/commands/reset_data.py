# backend/rentflow/organizations/management/commands/reset_data.py
from __future__ import annotations

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from rentflow.accounting.models import AccountingEntry
from rentflow.activity.models import ActivityLog
from rentflow.contracts.models import Contract
from rentflow.maintenance.models import MaintenanceRequest
from rentflow.organizations.models import Organization
from rentflow.payments.models import Payment
from rentflow.properties.models import Property, Unit
from rentflow.tenants.models import Tenant

from .seed_rentflow import PLATFORM_SLUG

# Children first: contracts/payments reference properties and tenants with PROTECT
BUSINESS_MODELS = [
    Payment,
    AccountingEntry,
    MaintenanceRequest,
    Contract,
    Tenant,
    Property,
    Unit,
    ActivityLog,
]


class Command(BaseCommand):
    help = "Delete all business data. Plans, the platform organization and its users are kept."

    def add_arguments(self, parser):
        parser.add_argument("--yes", action="store_true", help="Confirm the deletion.")

    @transaction.atomic
    def handle(self, *args, **opts):
        if not opts["yes"]:
            raise CommandError("Refusing to delete data without --yes.")

        for model in BUSINESS_MODELS:
            deleted, _ = model.objects.all().delete()
            self.stdout.write(f"{model._meta.label}: {deleted} deleted")

        others = Organization.objects.exclude(slug=PLATFORM_SLUG)
        users_deleted, _ = get_user_model().objects.filter(organization__in=others).delete()
        orgs_deleted, _ = others.delete()
        self.stdout.write(f"users: {users_deleted} deleted, organizations: {orgs_deleted} deleted")

        self.stdout.write(self.style.SUCCESS("Reset complete."))
