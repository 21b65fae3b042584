# backend/rentflow/organizations/management/commands/seed_rentflow.py
from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal

from dateutil.relativedelta import relativedelta
from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction
from django.utils import timezone

from rentflow.contracts.models import Contract, ContractStatus
from rentflow.iam.models import UserRole
from rentflow.organizations.defaults import (
    DEFAULT_PLANS,
    PLAN_ENTERPRISE,
    PLAN_PROFESSIONAL,
    TRIAL_DAYS,
    default_settings_for_plan,
)
from rentflow.organizations.models import Organization, Plan, Subscription, SubscriptionStatus
from rentflow.properties.models import Property, PropertyStatus, PropertyType, Unit, UnitType
from rentflow.tenants.models import Tenant, TenantStatus

PLATFORM_SLUG = "rentflow-platform"
DEMO_SLUG = "demo-properties"
DEMO_ADMIN_EMAIL = "demo@rentflow.com"
DEMO_PASSWORD = "Demo123!"


class Command(BaseCommand):
    help = "Seed plans, the platform organization with its super admin, and a demo organization (idempotent)."

    def add_arguments(self, parser):
        parser.add_argument("--skip-demo", action="store_true", help="Only seed plans and the platform organization.")

    @transaction.atomic
    def handle(self, *args, **opts):
        if not settings.SUPER_ADMIN_PASSWORD:
            raise CommandError("SUPER_ADMIN_PASSWORD is not set.")

        plans_created = 0
        for row in DEFAULT_PLANS:
            _, created = Plan.objects.update_or_create(
                id=row["id"],
                defaults={
                    "name": row["name"],
                    "price": Decimal(row["price"]),
                    "features": row["features"],
                    "limits": row["limits"],
                    "is_active": True,
                },
            )
            plans_created += 1 if created else 0
        self.stdout.write(f"Plans ensured. Newly created: {plans_created}")

        platform = self._organization(PLATFORM_SLUG, "RentFlow Platform", PLAN_ENTERPRISE, SubscriptionStatus.ACTIVE)
        self._user(
            email=settings.SUPER_ADMIN_EMAIL,
            password=settings.SUPER_ADMIN_PASSWORD,
            first_name="Super",
            last_name="Admin",
            role=UserRole.SUPER_ADMIN,
            organization=platform,
            is_superuser=True,
            is_staff=True,
        )
        self.stdout.write(f"Super admin ensured: {settings.SUPER_ADMIN_EMAIL}")

        if opts["skip_demo"]:
            self.stdout.write(self.style.SUCCESS("Seed complete (demo skipped)."))
            return

        demo = self._organization(DEMO_SLUG, "Demo Properties", PLAN_PROFESSIONAL, SubscriptionStatus.DEMO)
        self._user(
            email=DEMO_ADMIN_EMAIL,
            password=DEMO_PASSWORD,
            first_name="Demo",
            last_name="Admin",
            role=UserRole.ADMIN,
            organization=demo,
        )
        self._demo_portfolio(demo)
        self.stdout.write(self.style.SUCCESS(f"Seed complete. Demo login: {DEMO_ADMIN_EMAIL} / {DEMO_PASSWORD}"))

    def _organization(self, slug: str, name: str, plan_id: str, sub_status: str) -> Organization:
        plan = Plan.objects.get(id=plan_id)
        org, created = Organization.objects.get_or_create(
            slug=slug,
            defaults={
                "name": name,
                "plan": plan,
                "is_active": True,
                "settings": default_settings_for_plan(plan.id, plan.limits),
            },
        )
        if created:
            now = timezone.now()
            Subscription.objects.create(
                organization=org,
                plan=plan,
                status=sub_status,
                current_period_start=now,
                current_period_end=now + timedelta(days=365 if sub_status == SubscriptionStatus.ACTIVE else TRIAL_DAYS),
            )
        return org

    def _user(self, *, email: str, password: str, organization: Organization, **fields):
        User = get_user_model()
        user = User.objects.filter(email=email.lower()).first()
        if user is None:
            user = User.objects.create_user(email=email, password=password, organization=organization, **fields)
        return user

    def _demo_portfolio(self, org: Organization) -> None:
        if Property.objects.filter(organization=org).exists():
            return

        building = Unit.objects.create(
            organization=org,
            name="Torres del Parque",
            type=UnitType.BUILDING,
            address="Cra 5 # 26-40, Bogota",
            total_floors=12,
        )
        rented = Property.objects.create(
            organization=org,
            unit=building,
            name="Apartment 301",
            type=PropertyType.APARTMENT,
            address=building.address,
            size=Decimal("68.00"),
            rooms=2,
            bathrooms=Decimal("2.0"),
            rent=Decimal("1800000.00"),
            status=PropertyStatus.RENTED,
            unit_number="301",
            floor=3,
        )
        Property.objects.create(
            organization=org,
            name="Casa Chapinero",
            type=PropertyType.HOUSE,
            address="Calle 60 # 4-12, Bogota",
            size=Decimal("140.00"),
            rooms=4,
            bathrooms=Decimal("3.0"),
            rent=Decimal("4200000.00"),
        )
        tenant = Tenant.objects.create(
            organization=org,
            first_name="Laura",
            last_name="Gomez",
            email="laura.gomez@example.com",
            phone="+57 300 000 0000",
            status=TenantStatus.ACTIVE,
            credit_score=720,
        )
        start = date.today().replace(day=1) - relativedelta(months=2)
        Contract.objects.create(
            organization=org,
            property=rented,
            tenant=tenant,
            start_date=start,
            end_date=start + relativedelta(years=1) - timedelta(days=1),
            monthly_rent=rented.rent,
            security_deposit=rented.rent,
            status=ContractStatus.ACTIVE,
            signed_date=start,
        )
