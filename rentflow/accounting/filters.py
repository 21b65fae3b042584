# backend/rentflow/accounting/filters.py
import django_filters

from rentflow.accounting.models import AccountingEntry, EntryType


class AccountingEntryFilter(django_filters.FilterSet):
    type = django_filters.ChoiceFilter(choices=EntryType.choices)
    # "from" is a keyword, so the filter attribute gets a different name
    date_from = django_filters.DateFilter(field_name="date", lookup_expr="gte", label="from")
    date_to = django_filters.DateFilter(field_name="date", lookup_expr="lte", label="to")
    concept = django_filters.CharFilter(field_name="concept", lookup_expr="icontains")
    property = django_filters.UUIDFilter(field_name="property_id")
    unit = django_filters.UUIDFilter(field_name="unit_id")
    contract = django_filters.UUIDFilter(field_name="contract_id")

    class Meta:
        model = AccountingEntry
        fields = ["type", "concept"]

    def __init__(self, data=None, *args, **kwargs):
        # accept ?from=&to= as aliases
        if data is not None and ("from" in data or "to" in data):
            data = data.copy()
            if "from" in data:
                data["date_from"] = data["from"]
            if "to" in data:
                data["date_to"] = data["to"]
        super().__init__(data, *args, **kwargs)
