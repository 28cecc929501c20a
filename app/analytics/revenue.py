"""
Revenue sums over payment-like records (anything with `amount` and `date`).
"""

from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional

from app.analytics.dates import (
    DateLike,
    add_months,
    as_date,
    filter_by_month,
    filter_by_range,
    filter_by_year,
    month_range,
)


def sum_amounts(records: Iterable) -> float:
    return sum((record.amount or 0) for record in records)


def total_revenue(payments: Iterable) -> float:
    return sum_amounts(payments)


def monthly_revenue(payments: Iterable, month: DateLike) -> float:
    return sum_amounts(filter_by_month(payments, month, "date"))


def yearly_revenue(payments: Iterable, year: int) -> float:
    return sum_amounts(filter_by_year(payments, year, "date"))


def growth_percent(current: float, previous: float) -> float:
    """
    Month-over-month change in percent.

    Growth from zero is reported as a flat 100 (or 0 when both are zero)
    instead of an infinite percentage.
    """
    if previous == 0:
        return 0.0 if current == 0 else 100.0
    return (current - previous) / previous * 100


def last_week_revenue(payments: Iterable, today: DateLike) -> float:
    """Revenue of the previous Monday-to-Sunday week."""
    day = as_date(today)
    this_monday = day - timedelta(days=day.weekday())
    start = this_monday - timedelta(days=7)
    return sum_amounts(filter_by_range(payments, start, start + timedelta(days=6), "date"))


def yearly_series(payments: Iterable, end_year: int, years: int) -> List[Dict]:
    payments = list(payments)
    return [
        {"year": year, "revenue": yearly_revenue(payments, year)}
        for year in range(end_year - years + 1, end_year + 1)
    ]


def revenue_summary(payments: Iterable, month: date) -> Dict[str, float]:
    """This month, previous month and the growth between them."""
    payments = list(payments)
    current = monthly_revenue(payments, month)
    previous = monthly_revenue(payments, add_months(month, -1))
    return {
        "total": total_revenue(payments),
        "this_month": current,
        "last_month": previous,
        "growth_percent": growth_percent(current, previous),
    }


PERIOD_DEFAULTS = {"week": 1, "month": 6, "year": 3}


def revenue_by_period(payments: Iterable, period: str, today: DateLike, count: Optional[int] = None) -> List[Dict]:
    """
    Revenue buckets for the week / month / year toggle, oldest first.

    - week: a single bucket for the previous Monday-to-Sunday week
    - month: the last `count` calendar months up to today's (default 6)
    - year: the last `count` calendar years up to today's (default 3)

    Raises:
        ValueError: If `period` is not week, month or year
    """
    if period not in PERIOD_DEFAULTS:
        raise ValueError(f"Unknown period: {period}")
    payments = list(payments)
    day = as_date(today)

    if period == "week":
        start = day - timedelta(days=day.weekday() + 7)
        end = start + timedelta(days=6)
        return [{"label": f"{start:%b %d} - {end:%b %d, %Y}", "revenue": last_week_revenue(payments, day)}]

    count = count or PERIOD_DEFAULTS[period]
    if period == "month":
        return [
            {"label": month.strftime("%b %Y"), "revenue": monthly_revenue(payments, month)}
            for month in month_range(day, count)
        ]
    return [
        {"label": str(bucket["year"]), "revenue": bucket["revenue"]}
        for bucket in yearly_series(payments, day.year, count)
    ]
