# backend/rentflow/iam/services/registration.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import timedelta

from django.contrib.auth import get_user_model
from django.contrib.auth.models import update_last_login
from django.db import transaction
from django.utils import timezone
from django.utils.text import slugify
from rest_framework import status
from rest_framework.exceptions import ValidationError

from rentflow.activity.models import ActivityAction, ActivityEntity
from rentflow.activity.services import ActivityService
from rentflow.common.api.exceptions import ConflictError, RentflowAPIException
from rentflow.iam.auth import ensure_organization_active
from rentflow.iam.models import UserRole
from rentflow.organizations.defaults import TRIAL_DAYS, default_settings_for_plan
from rentflow.organizations.models import Organization, Plan, Subscription, SubscriptionStatus

logger = logging.getLogger(__name__)


class InvalidCredentials(RentflowAPIException):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Invalid email or password."
    default_code = "INVALID_CREDENTIALS"


@dataclass(frozen=True)
class RegistrationResult:
    user: object
    organization: Organization
    subscription: Subscription


def unique_organization_slug(name: str) -> str:
    base = slugify(name)[:100] or "organization"
    slug = base
    n = 1
    while Organization.objects.filter(slug=slug).exists():
        n += 1
        slug = f"{base}-{n}"
    return slug


class RegistrationService:
    @staticmethod
    @transaction.atomic
    def register(
        *,
        first_name: str,
        last_name: str,
        email: str,
        password: str,
        organization_name: str,
        plan_id: str,
        phone: str = "",
    ) -> RegistrationResult:
        """
        Organization + trial subscription + ADMIN user, all or nothing.
        """
        User = get_user_model()
        email = email.strip().lower()

        if User.objects.filter(email=email).exists():
            raise ConflictError("Email already registered.", code="EMAIL_EXISTS")

        plan = Plan.objects.filter(id=plan_id, is_active=True).first()
        if plan is None:
            raise ValidationError({"plan_id": "Invalid plan."})

        org = Organization.objects.create(
            name=organization_name.strip(),
            slug=unique_organization_slug(organization_name),
            email=email,
            phone=phone or "",
            plan=plan,
            is_active=True,
            settings=default_settings_for_plan(plan.id, plan.limits),
        )

        now = timezone.now()
        trial_end = now + timedelta(days=TRIAL_DAYS)
        subscription = Subscription.objects.create(
            organization=org,
            plan=plan,
            status=SubscriptionStatus.TRIALING,
            current_period_start=now,
            current_period_end=trial_end,
            trial_end=trial_end,
        )

        user = User.objects.create_user(
            email=email,
            password=password,
            first_name=first_name.strip(),
            last_name=last_name.strip(),
            role=UserRole.ADMIN,
            organization=org,
        )

        ActivityService.log(
            organization_id=org.id,
            user_id=user.id,
            entity_type=ActivityEntity.ORGANIZATION,
            entity_id=org.id,
            action=ActivityAction.CREATE,
            description=f"Organization {org.name} registered on {plan.name} trial",
        )

        logger.info("organization registered org=%s plan=%s", org.id, plan.id)
        return RegistrationResult(user=user, organization=org, subscription=subscription)


class AuthService:
    @staticmethod
    def login(*, email: str, password: str):
        User = get_user_model()
        user = User.objects.select_related("organization").filter(email=(email or "").strip().lower()).first()

        if user is None or not user.is_active or not user.check_password(password or ""):
            logger.info("login failed email=%s", email)
            raise InvalidCredentials()

        ensure_organization_active(user)
        update_last_login(None, user)
        return user
