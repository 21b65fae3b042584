# backend/rentflow/api/urls.py
from __future__ import annotations

from django.urls import path
from rest_framework.routers import DefaultRouter

from rentflow.accounting.api.views import AccountingEntryViewSet
from rentflow.activity.api.views import ActivityLogViewSet
from rentflow.contracts.api.views import ContractViewSet
from rentflow.iam.api.auth import LoginView, LogoutView, MeView, RefreshView, RegisterView
from rentflow.iam.api.users import UserViewSet
from rentflow.maintenance.api.views import MaintenanceViewSet
from rentflow.org_settings.api.views import SettingsViewSet
from rentflow.organizations.api.views import OrganizationViewSet, PlanAdminViewSet, PublicPlanViewSet
from rentflow.payments.api.views import PaymentViewSet
from rentflow.properties.api.views import PropertyViewSet, UnitViewSet
from rentflow.reports.api.views import ReportViewSet
from rentflow.superadmin.api.views import SuperAdminDashboardView
from rentflow.tenants.api.views import TenantViewSet
from rentflow.webhooks.api.views import StripeWebhookView

router = DefaultRouter()

router.register(r"organizations", OrganizationViewSet, basename="organizations")
router.register(r"users", UserViewSet, basename="users")
router.register(r"properties", PropertyViewSet, basename="properties")
router.register(r"units", UnitViewSet, basename="units")
router.register(r"tenants", TenantViewSet, basename="tenants")
router.register(r"contracts", ContractViewSet, basename="contracts")
router.register(r"payments", PaymentViewSet, basename="payments")
router.register(r"maintenance", MaintenanceViewSet, basename="maintenance")
router.register(r"accounting", AccountingEntryViewSet, basename="accounting")
router.register(r"activity-log", ActivityLogViewSet, basename="activity-log")
router.register(r"reports", ReportViewSet, basename="reports")
router.register(r"settings", SettingsViewSet, basename="settings")

# Plans: public catalogue + super admin management
router.register(r"plans", PublicPlanViewSet, basename="plans")
router.register(r"super-admin/plans", PlanAdminViewSet, basename="super-admin-plans")

urlpatterns = [
    # Auth
    path("auth/register/", RegisterView.as_view(), name="register"),
    path("auth/login/", LoginView.as_view(), name="login"),
    path("auth/refresh/", RefreshView.as_view(), name="refresh"),
    path("auth/logout/", LogoutView.as_view(), name="logout"),
    path("auth/me/", MeView.as_view(), name="me"),

    path("super-admin/dashboard/", SuperAdminDashboardView.as_view(), name="super-admin-dashboard"),
    path("webhooks/stripe/", StripeWebhookView.as_view(), name="webhooks-stripe"),

    # Router URLs last (so explicit paths win if ever overlapping)
    *router.urls,
]
