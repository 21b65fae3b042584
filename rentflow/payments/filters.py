# backend/rentflow/payments/filters.py
import django_filters

from rentflow.payments.models import Payment, PaymentMethod, PaymentStatus, PaymentType


class PaymentFilter(django_filters.FilterSet):
    status = django_filters.ChoiceFilter(choices=PaymentStatus.choices)
    type = django_filters.ChoiceFilter(choices=PaymentType.choices)
    method = django_filters.ChoiceFilter(choices=PaymentMethod.choices)
    contract = django_filters.UUIDFilter(field_name="contract_id")
    tenant = django_filters.UUIDFilter(field_name="tenant_id")
    due_from = django_filters.DateFilter(field_name="due_date", lookup_expr="gte")
    due_to = django_filters.DateFilter(field_name="due_date", lookup_expr="lte")

    class Meta:
        model = Payment
        fields = ["status", "type", "method", "contract", "tenant"]
