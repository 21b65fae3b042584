# backend/rentflow/contracts/filters.py
import django_filters

from rentflow.contracts.models import Contract, ContractStatus


class ContractFilter(django_filters.FilterSet):
    status = django_filters.ChoiceFilter(choices=ContractStatus.choices)
    property = django_filters.UUIDFilter(field_name="property_id")
    tenant = django_filters.UUIDFilter(field_name="tenant_id")
    ends_before = django_filters.DateFilter(field_name="end_date", lookup_expr="lte")

    class Meta:
        model = Contract
        fields = ["status", "property", "tenant"]
