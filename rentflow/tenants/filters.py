# backend/rentflow/tenants/filters.py
import django_filters

from rentflow.tenants.models import Tenant, TenantStatus


class TenantFilter(django_filters.FilterSet):
    status = django_filters.ChoiceFilter(choices=TenantStatus.choices)
    min_credit_score = django_filters.NumberFilter(field_name="credit_score", lookup_expr="gte")

    class Meta:
        model = Tenant
        fields = ["status"]
