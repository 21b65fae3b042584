import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from rentflow.organizations.models import Organization


@pytest.fixture
def org(db):
    return Organization.objects.create(name="Scope Test", slug="scope-test")


@pytest.fixture
def foreign_org(db):
    return Organization.objects.create(name="Foreign", slug="foreign")


@pytest.fixture
def staff_user(org):
    return get_user_model().objects.create_user(
        email="staff@scope.test",
        password="Pass@12345",
        first_name="Staff",
        last_name="User",
        role="ADMIN",
        organization=org,
    )


@pytest.fixture
def client(staff_user):
    c = APIClient()
    c.force_authenticate(user=staff_user)
    return c


@pytest.fixture
def scope_headers(org):
    return {"HTTP_X_ORGANIZATION_ID": str(org.id)}
