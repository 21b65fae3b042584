# backend/rentflow/conftest.py
from datetime import date
from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from rentflow.contracts.models import Contract, ContractStatus
from rentflow.iam.models import UserRole
from rentflow.organizations.defaults import DEFAULT_PLANS, PLAN_BASIC, default_settings_for_plan
from rentflow.organizations.models import Organization, Plan
from rentflow.properties.models import Property
from rentflow.tenants.models import Tenant


def org_headers(org):
    """
    Organization scope header used by require_scope().
    DRF test client requires HTTP_ prefix.
    """
    return {"HTTP_X_ORGANIZATION_ID": str(org.id)}


def make_user(org, *, email, role=UserRole.USER, password="Pass@12345", **extra):
    return get_user_model().objects.create_user(
        email=email,
        password=password,
        first_name=extra.pop("first_name", role.title()),
        last_name=extra.pop("last_name", "Tester"),
        role=role,
        organization=org,
        **extra,
    )


def client_for(user):
    c = APIClient()
    c.force_authenticate(user=user)
    return c


@pytest.fixture
def plans(db):
    return [
        Plan.objects.create(
            id=row["id"],
            name=row["name"],
            price=Decimal(row["price"]),
            features=row["features"],
            limits=row["limits"],
        )
        for row in DEFAULT_PLANS
    ]


@pytest.fixture
def organization(plans):
    plan = plans[0]
    return Organization.objects.create(
        name="Acme Rentals",
        slug="acme-rentals",
        plan=plan,
        settings=default_settings_for_plan(PLAN_BASIC, plan.limits),
    )


@pytest.fixture
def other_organization(plans):
    plan = plans[0]
    return Organization.objects.create(
        name="Other Rentals",
        slug="other-rentals",
        plan=plan,
        settings=default_settings_for_plan(PLAN_BASIC, plan.limits),
    )


@pytest.fixture
def admin(organization):
    return make_user(organization, email="admin@acme.test", role=UserRole.ADMIN)


@pytest.fixture
def manager(organization):
    return make_user(organization, email="manager@acme.test", role=UserRole.MANAGER)


@pytest.fixture
def member(organization):
    return make_user(organization, email="user@acme.test", role=UserRole.USER)


@pytest.fixture
def super_admin(plans):
    platform = Organization.objects.create(name="Platform", slug="rentflow-platform", plan=plans[-1])
    return make_user(platform, email="root@rentflow.test", role=UserRole.SUPER_ADMIN, is_superuser=True, is_staff=True)


@pytest.fixture
def api_client(admin):
    return client_for(admin)


@pytest.fixture
def manager_client(manager):
    return client_for(manager)


@pytest.fixture
def member_client(member):
    return client_for(member)


@pytest.fixture
def headers(organization):
    return org_headers(organization)


@pytest.fixture
def rental_property(organization):
    return Property.objects.create(
        organization=organization,
        name="Apartment 101",
        address="Calle 1 # 2-3",
        rent=Decimal("900000.00"),
    )


@pytest.fixture
def tenant(organization):
    return Tenant.objects.create(
        organization=organization,
        first_name="Ana",
        last_name="Perez",
        email="ana@example.com",
        phone="3000000000",
    )


@pytest.fixture
def active_contract(organization, rental_property, tenant):
    return Contract.objects.create(
        organization=organization,
        property=rental_property,
        tenant=tenant,
        start_date=date(2024, 1, 15),
        end_date=date(2024, 12, 31),
        monthly_rent=Decimal("900000.00"),
        status=ContractStatus.ACTIVE,
    )
