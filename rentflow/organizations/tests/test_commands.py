# backend/rentflow/organizations/tests/test_commands.py
import pytest
from django.contrib.auth import get_user_model
from django.core.management import CommandError, call_command

from rentflow.contracts.models import Contract
from rentflow.organizations.models import Organization, Plan, Subscription
from rentflow.properties.models import Property

pytestmark = pytest.mark.django_db


def test_seed_is_idempotent(settings):
    call_command("seed_rentflow")
    call_command("seed_rentflow")

    assert Plan.objects.count() == 3
    assert set(Organization.objects.values_list("slug", flat=True)) == {"rentflow-platform", "demo-properties"}
    assert Subscription.objects.count() == 2
    assert Property.objects.filter(organization__slug="demo-properties").count() == 2
    assert Contract.objects.count() == 1

    root = get_user_model().objects.get(email=settings.SUPER_ADMIN_EMAIL)
    assert root.is_superuser
    assert root.check_password("SuperAdmin123!")


def test_seed_skip_demo():
    call_command("seed_rentflow", "--skip-demo")

    assert not Organization.objects.filter(slug="demo-properties").exists()


def test_seed_requires_super_admin_password(settings):
    settings.SUPER_ADMIN_PASSWORD = ""

    with pytest.raises(CommandError):
        call_command("seed_rentflow")


def test_reset_requires_confirmation():
    with pytest.raises(CommandError):
        call_command("reset_data")


def test_reset_keeps_platform(settings):
    call_command("seed_rentflow")

    call_command("reset_data", "--yes")

    assert list(Organization.objects.values_list("slug", flat=True)) == ["rentflow-platform"]
    assert Property.objects.count() == 0
    assert get_user_model().objects.filter(email=settings.SUPER_ADMIN_EMAIL).exists()
    assert Plan.objects.count() == 3
