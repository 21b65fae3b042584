# backend/rentflow/common/dates.py
from __future__ import annotations

from datetime import date, timedelta

from dateutil.relativedelta import relativedelta


def add_months(value: date, months: int) -> date:
    """
    Calendar-month arithmetic; the day is clamped to the target month's length
    (2024-01-31 + 1 month -> 2024-02-29).
    """
    return value + relativedelta(months=months)


def month_period(start: date, offset: int = 0) -> tuple[date, date]:
    """
    The `offset`-th monthly period anchored on `start`.

    Always computed from the anchor so a clamped day does not drift:
    anchor 2024-01-31 yields 01-31, 02-29, 03-31 ...
    """
    period_start = add_months(start, offset)
    period_end = add_months(start, offset + 1) - timedelta(days=1)
    return period_start, period_end


def same_month(a: date, b: date) -> bool:
    return a.year == b.year and a.month == b.month
