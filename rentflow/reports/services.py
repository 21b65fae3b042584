# backend/rentflow/reports/services.py
"""
Read-only aggregations behind /reports. Each function takes the effective
organization id and returns plain dicts ready for Response().
"""
from __future__ import annotations

import csv
import io
import json
from datetime import date, timedelta
from decimal import Decimal
from typing import Any, Dict, Iterable, List
from uuid import UUID

from django.db.models import Avg, Count, DecimalField, Prefetch, Q, Sum, Value
from django.db.models.functions import Coalesce, TruncMonth, TruncQuarter, TruncYear
from django.utils import timezone

from rentflow.contracts.api.serializers import ContractSerializer
from rentflow.contracts.models import Contract, ContractStatus
from rentflow.maintenance.api.serializers import MaintenanceRequestSerializer
from rentflow.maintenance.models import MaintenancePriority, MaintenanceRequest, MaintenanceStatus
from rentflow.payments.api.serializers import PaymentSerializer
from rentflow.payments.models import Payment, PaymentStatus
from rentflow.properties.api.serializers import PropertySerializer
from rentflow.properties.models import Property, PropertyStatus, Unit
from rentflow.tenants.api.serializers import TenantSerializer
from rentflow.tenants.models import Tenant

EXPORT_TYPES = ("properties", "tenants", "contracts", "payments", "maintenance", "all")
EXPORT_FORMATS = ("json", "csv")
TREND_GROUPS = ("month", "quarter", "year")

_ZERO = Value(Decimal("0.00"), output_field=DecimalField(max_digits=16, decimal_places=2))


def _money(expr) -> Coalesce:
    return Coalesce(expr, _ZERO)


def _pct(part, whole) -> float:
    return round(part / whole * 100, 2) if whole else 0.0


def _counts_by(qs, field: str) -> Dict[str, int]:
    return {row[field].lower(): row["n"] for row in qs.values(field).annotate(n=Count("id")).order_by(field)}


def _days_since(start: date, today: date) -> int:
    return max((today - start).days, 0)


# ---------------------------------------------------------------------------
# dashboard
# ---------------------------------------------------------------------------

def dashboard_report(*, organization_id: UUID, today: date | None = None) -> Dict[str, Any]:
    today = today or timezone.localdate()

    properties = Property.objects.filter(organization_id=organization_id)
    tenants = Tenant.objects.filter(organization_id=organization_id)
    payments = Payment.objects.filter(organization_id=organization_id)
    maintenance = MaintenanceRequest.objects.filter(organization_id=organization_id)

    total_properties = properties.count()
    rented = properties.filter(status=PropertyStatus.RENTED).count()

    revenue = payments.aggregate(
        total_collected=_money(Sum("amount", filter=Q(status=PaymentStatus.PAID))),
        total_pending=_money(Sum("amount", filter=Q(status=PaymentStatus.PENDING))),
        total_overdue=_money(
            Sum("amount", filter=Q(status=PaymentStatus.OVERDUE) | Q(status=PaymentStatus.PENDING, due_date__lt=today))
        ),
        total_revenue=_money(Sum("amount")),
    )

    total_tenants = tenants.count()
    total_maintenance = maintenance.count()

    return {
        "overview": {
            "total_properties": total_properties,
            "total_tenants": total_tenants,
            "total_contracts": Contract.objects.filter(organization_id=organization_id).count(),
            "active_contracts": Contract.objects.filter(
                organization_id=organization_id, status=ContractStatus.ACTIVE
            ).count(),
            "total_payments": payments.count(),
            "total_maintenance": total_maintenance,
            "occupancy_rate": _pct(rented, total_properties),
        },
        "properties": {"total": total_properties, "by_status": _counts_by(properties, "status")},
        "tenants": {"total": total_tenants, "by_status": _counts_by(tenants, "status")},
        "revenue": revenue,
        "maintenance": {"total": total_maintenance, "by_status": _counts_by(maintenance, "status")},
    }


# ---------------------------------------------------------------------------
# financial
# ---------------------------------------------------------------------------

_TRUNC = {"month": TruncMonth, "quarter": TruncQuarter, "year": TruncYear}


def financial_report(
    *,
    organization_id: UUID,
    start_date: date | None = None,
    end_date: date | None = None,
    group_by: str = "month",
    today: date | None = None,
) -> Dict[str, Any]:
    """
    Payments filtered on due_date. Without an explicit range the trend covers
    the last 12 months.
    """
    today = today or timezone.localdate()
    payments = Payment.objects.filter(organization_id=organization_id)
    if start_date:
        payments = payments.filter(due_date__gte=start_date)
    if end_date:
        payments = payments.filter(due_date__lte=end_date)

    overview = payments.aggregate(total=_money(Sum("amount")), count=Count("id"), avg=Avg("amount"))

    costs = MaintenanceRequest.objects.filter(organization_id=organization_id, actual_cost__isnull=False).aggregate(
        total=_money(Sum("actual_cost")),
        count=Count("id"),
        avg=Avg("actual_cost"),
    )

    by_type = [
        {"type": row["type"].lower(), "amount": row["amount"], "count": row["count"]}
        for row in payments.values("type").annotate(amount=_money(Sum("amount")), count=Count("id")).order_by("type")
    ]
    by_status = [
        {"status": row["status"].lower(), "amount": row["amount"], "count": row["count"]}
        for row in payments.values("status").annotate(amount=_money(Sum("amount")), count=Count("id")).order_by("status")
    ]

    trend_qs = payments
    if not start_date and not end_date:
        trend_qs = trend_qs.filter(due_date__gte=today - timedelta(days=365))
    trunc = _TRUNC.get(group_by, TruncMonth)
    monthly_trend = [
        {"period": row["period"].isoformat(), "revenue": row["revenue"], "payment_count": row["payment_count"]}
        for row in trend_qs.annotate(period=trunc("due_date"))
        .values("period")
        .annotate(revenue=_money(Sum("amount")), payment_count=Count("id"))
        .order_by("-period")
    ]

    contracts = (
        Contract.objects.filter(organization_id=organization_id)
        .select_related("property", "tenant")
        .annotate(
            total_paid=_money(Sum("payments__amount", filter=Q(payments__status=PaymentStatus.PAID))),
            payment_count=Count("payments", filter=Q(payments__status=PaymentStatus.PAID)),
        )
        .order_by("-created_at")
    )
    contract_revenues = [
        {
            "contract_id": str(c.id),
            "property": c.property.name,
            "tenant": c.tenant.full_name,
            "monthly_rent": c.monthly_rent,
            "total_paid": c.total_paid,
            "payment_count": c.payment_count,
        }
        for c in contracts
    ]

    return {
        "summary": {
            "total_revenue": overview["total"],
            "total_payments": overview["count"],
            "average_payment": round(overview["avg"] or Decimal("0"), 2),
            "maintenance_costs": costs["total"],
            "net_revenue": overview["total"] - costs["total"],
        },
        "payments_by_type": by_type,
        "payments_by_status": by_status,
        "monthly_trend": monthly_trend,
        "contract_revenues": contract_revenues,
        "maintenance_stats": {
            "total_cost": costs["total"],
            "request_count": costs["count"],
            "average_cost": round(costs["avg"] or Decimal("0"), 2),
        },
    }


# ---------------------------------------------------------------------------
# properties / units
# ---------------------------------------------------------------------------

def property_report(
    *,
    organization_id: UUID,
    unit_id: UUID | None = None,
    type: str | None = None,
    status: str | None = None,
    today: date | None = None,
) -> Dict[str, Any]:
    today = today or timezone.localdate()

    qs = Property.objects.filter(organization_id=organization_id)
    if unit_id:
        qs = qs.filter(unit_id=unit_id)
    if type:
        qs = qs.filter(type=type)
    if status:
        qs = qs.filter(status=status)

    active = Contract.objects.filter(status=ContractStatus.ACTIVE).select_related("tenant")
    qs = (
        qs.select_related("unit")
        .prefetch_related(Prefetch("contracts", queryset=active, to_attr="active_contracts"))
        .annotate(
            total_revenue=_money(
                Sum("contracts__payments__amount", filter=Q(contracts__payments__status=PaymentStatus.PAID))
            ),
        )
    )

    costs = {
        row["property_id"]: row
        for row in MaintenanceRequest.objects.filter(organization_id=organization_id)
        .values("property_id")
        .annotate(n=Count("id"), actual=Sum("actual_cost"), estimated=Sum("estimated_cost"))
    }

    rows: List[Dict[str, Any]] = []
    for p in qs:
        m = costs.get(p.id, {})
        cost = m.get("actual") or m.get("estimated") or Decimal("0")
        contract = p.active_contracts[0] if p.active_contracts else None
        days = _days_since(contract.start_date, today) if contract else 0
        rows.append(
            {
                "id": str(p.id),
                "name": p.name,
                "address": p.address,
                "type": p.type,
                "status": p.status,
                "rent": p.rent,
                "size": p.size,
                "unit": p.unit.name if p.unit_id else None,
                "current_tenant": contract.tenant.full_name if contract else None,
                "total_revenue": p.total_revenue,
                "maintenance_cost": cost,
                "net_revenue": p.total_revenue - cost,
                "maintenance_requests": m.get("n", 0),
                "days_occupied": days,
            }
        )
    rows.sort(key=lambda r: r["net_revenue"], reverse=True)

    total_revenue = sum((r["total_revenue"] for r in rows), Decimal("0"))
    total_cost = sum((r["maintenance_cost"] for r in rows), Decimal("0"))
    all_props = Property.objects.filter(organization_id=organization_id)
    occupancy = _counts_by(all_props, "status")
    total_all = sum(occupancy.values())

    return {
        "summary": {
            "total_properties": len(rows),
            "total_revenue": total_revenue,
            "total_maintenance_cost": total_cost,
            "net_revenue": total_revenue - total_cost,
            "average_rent": round(sum((r["rent"] for r in rows), Decimal("0")) / len(rows), 2) if rows else Decimal("0"),
            "occupancy_rate": _pct(occupancy.get("rented", 0), total_all),
        },
        "occupancy_stats": [{"status": k, "count": v} for k, v in occupancy.items()],
        "properties": rows,
    }


def unit_report(*, organization_id: UUID, type: str | None = None) -> Dict[str, Any]:
    qs = Unit.objects.filter(organization_id=organization_id)
    if type:
        qs = qs.filter(type=type)

    qs = qs.prefetch_related("properties").annotate(
        total_revenue=_money(
            Sum(
                "properties__contracts__payments__amount",
                filter=Q(properties__contracts__payments__status=PaymentStatus.PAID),
            )
        )
    )

    rows = []
    for u in qs:
        props = list(u.properties.all())
        occupied = sum(1 for p in props if p.status == PropertyStatus.RENTED)
        rows.append(
            {
                "id": str(u.id),
                "name": u.name,
                "type": u.type.lower(),
                "address": u.address,
                "total_floors": u.total_floors,
                "floors": u.floors,
                "size": u.size,
                "manager": u.manager,
                "total_properties": len(props),
                "occupied_properties": occupied,
                "available_properties": len(props) - occupied,
                "occupancy_rate": _pct(occupied, len(props)),
                "total_revenue": u.total_revenue,
                "average_rent": round(sum((p.rent for p in props), Decimal("0")) / len(props), 2) if props else Decimal("0"),
                "amenities": u.amenities,
            }
        )
    rows.sort(key=lambda r: r["total_revenue"], reverse=True)

    total_units = len(rows)
    total_properties = sum(r["total_properties"] for r in rows)
    return {
        "summary": {
            "total_units": total_units,
            "total_properties": total_properties,
            "total_revenue": sum((r["total_revenue"] for r in rows), Decimal("0")),
            "overall_occupancy_rate": _pct(sum(r["occupied_properties"] for r in rows), total_properties),
            "average_properties_per_unit": round(total_properties / total_units, 2) if total_units else 0,
        },
        "unit_type_stats": [
            {"type": k, "count": v}
            for k, v in _counts_by(Unit.objects.filter(organization_id=organization_id), "type").items()
        ],
        "units": rows,
    }


# ---------------------------------------------------------------------------
# tenants
# ---------------------------------------------------------------------------

def tenant_report(*, organization_id: UUID, status: str | None = None, today: date | None = None) -> Dict[str, Any]:
    today = today or timezone.localdate()

    qs = Tenant.objects.filter(organization_id=organization_id)
    if status:
        qs = qs.filter(status=status)

    active = Contract.objects.filter(status=ContractStatus.ACTIVE).select_related("property")
    qs = qs.prefetch_related(Prefetch("contracts", queryset=active, to_attr="active_contracts"))

    # separate grouped queries; joining both relations at once would multiply the sums
    paid = {
        row["tenant_id"]: row
        for row in Payment.objects.filter(organization_id=organization_id)
        .values("tenant_id")
        .annotate(
            total=_money(Sum("amount", filter=Q(status=PaymentStatus.PAID))),
            n=Count("id"),
            n_paid=Count("id", filter=Q(status=PaymentStatus.PAID)),
        )
    }
    requests = dict(
        MaintenanceRequest.objects.filter(organization_id=organization_id, tenant__isnull=False)
        .values_list("tenant_id")
        .annotate(n=Count("id"))
    )

    rows = []
    scores: List[int] = []
    incomes: List[float] = []
    for t in qs:
        contract = t.active_contracts[0] if t.active_contracts else None
        p = paid.get(t.id, {})
        if t.credit_score:
            scores.append(t.credit_score)
        income = (t.employment or {}).get("income")
        if isinstance(income, (int, float)):
            incomes.append(income)
        rows.append(
            {
                "id": str(t.id),
                "name": t.full_name,
                "email": t.email,
                "phone": t.phone,
                "status": t.status,
                "credit_score": t.credit_score,
                "employment": t.employment,
                "application_date": t.application_date,
                "current_property": contract.property.name if contract else None,
                "current_rent": contract.monthly_rent if contract else Decimal("0"),
                "total_paid": p.get("total", Decimal("0")),
                "payment_count": p.get("n", 0),
                "maintenance_requests": requests.get(t.id, 0),
                "payment_reliability": _pct(p.get("n_paid", 0), p.get("n", 0)),
                "days_as_tenant": _days_since(contract.start_date, today) if contract else 0,
            }
        )
    rows.sort(key=lambda r: r["total_paid"], reverse=True)

    return {
        "summary": {
            "total_tenants": len(rows),
            "average_credit_score": round(sum(scores) / len(scores)) if scores else 0,
            "average_income": round(sum(incomes) / len(rows)) if rows else 0,
        },
        "tenant_stats": [
            {"status": k, "count": v}
            for k, v in _counts_by(Tenant.objects.filter(organization_id=organization_id), "status").items()
        ],
        "tenants": rows,
    }


# ---------------------------------------------------------------------------
# maintenance
# ---------------------------------------------------------------------------

def maintenance_report(
    *,
    organization_id: UUID,
    start_date: date | None = None,
    end_date: date | None = None,
    priority: str | None = None,
    category: str | None = None,
) -> Dict[str, Any]:
    qs = MaintenanceRequest.objects.filter(organization_id=organization_id)
    if start_date:
        qs = qs.filter(reported_date__date__gte=start_date)
    if end_date:
        qs = qs.filter(reported_date__date__lte=end_date)
    if priority:
        qs = qs.filter(priority=priority)
    if category:
        qs = qs.filter(category=category)

    costs = qs.filter(actual_cost__isnull=False).aggregate(total=_money(Sum("actual_cost")), avg=Avg("actual_cost"))

    completion: Dict[str, List[int]] = {p: [] for p in MaintenancePriority.values}
    completed = qs.filter(status=MaintenanceStatus.COMPLETED, completed_date__isnull=False)
    for reported, done, prio in completed.values_list("reported_date", "completed_date", "priority"):
        completion[prio].append(max((done - reported).days, 0))
    all_days = [d for days in completion.values() for d in days]

    status_stats = _counts_by(qs, "status")
    requests = [
        {
            "id": str(r.id),
            "title": r.title,
            "priority": r.priority.lower(),
            "category": r.category.lower(),
            "status": r.status.lower(),
            "property": r.property.name,
            "tenant": r.tenant.full_name if r.tenant_id else "Property Management",
            "reported_date": r.reported_date,
            "completed_date": r.completed_date,
            "estimated_cost": r.estimated_cost,
            "actual_cost": r.actual_cost,
            "assigned_to": r.assigned_to,
        }
        for r in qs.select_related("property", "tenant").order_by("-reported_date")
    ]

    return {
        "summary": {
            "total_requests": len(requests),
            "total_cost": costs["total"],
            "average_cost": round(costs["avg"] or Decimal("0"), 2),
            "avg_completion_days": round(sum(all_days) / len(all_days)) if all_days else 0,
            "completed_requests": status_stats.get("completed", 0),
        },
        "status_stats": [{"status": k, "count": v} for k, v in status_stats.items()],
        "priority_stats": [{"priority": k, "count": v} for k, v in _counts_by(qs, "priority").items()],
        "category_stats": [{"category": k, "count": v} for k, v in _counts_by(qs, "category").items()],
        "completion_by_priority": [
            {
                "priority": prio.lower(),
                "avg_days": round(sum(completion[prio]) / len(completion[prio])) if completion[prio] else 0,
                "count": len(completion[prio]),
            }
            for prio in ("EMERGENCY", "HIGH", "MEDIUM", "LOW")
        ],
        "requests": requests,
    }


# ---------------------------------------------------------------------------
# export
# ---------------------------------------------------------------------------

def export_data(*, organization_id: UUID, export_type: str) -> Dict[str, List[Dict[str, Any]]]:
    sources = {
        "properties": (Property.objects.select_related("unit"), PropertySerializer),
        "tenants": (Tenant.objects.all(), TenantSerializer),
        "contracts": (Contract.objects.select_related("property__unit", "tenant"), ContractSerializer),
        "payments": (Payment.objects.all(), PaymentSerializer),
        "maintenance": (MaintenanceRequest.objects.select_related("property", "tenant"), MaintenanceRequestSerializer),
    }
    wanted = list(sources) if export_type == "all" else [export_type]

    data: Dict[str, List[Dict[str, Any]]] = {}
    for key in wanted:
        qs, serializer = sources[key]
        data[key] = serializer(qs.filter(organization_id=organization_id).order_by("created_at"), many=True).data
    return data


def _flat(value: Any) -> Any:
    if isinstance(value, (dict, list)):
        return json.dumps(value, default=str)
    return "" if value is None else value


def to_csv(data: Dict[str, Iterable[Dict[str, Any]]]) -> str:
    """
    One CSV block per section, each preceded by a "# <section>" line.
    Nested values are written as JSON.
    """
    buf = io.StringIO()
    writer = csv.writer(buf)
    for i, (section, rows) in enumerate(data.items()):
        rows = list(rows)
        if i:
            buf.write("\n")
        buf.write(f"# {section}\n")
        if not rows:
            continue
        header = list(rows[0].keys())
        writer.writerow(header)
        for row in rows:
            writer.writerow([_flat(row.get(col)) for col in header])
    return buf.getvalue()


def record_count(data: Dict[str, List[Any]]) -> int:
    return sum(len(rows) for rows in data.values())
