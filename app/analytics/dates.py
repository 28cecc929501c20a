"""
Calendar-month helpers and the date-range filter.

Boundaries are local calendar months: a record belongs to a month when the
calendar date of its timestamp lies between the first and the last day of
that month, inclusive. Time of day and timezone are ignored.
"""

import calendar
from datetime import date, datetime
from typing import Iterable, List, Optional, TypeVar, Union

T = TypeVar("T")
DateLike = Union[date, datetime, str]


def as_date(value: Optional[DateLike]) -> Optional[date]:
    """Coerce a date, datetime or ISO string to its calendar date."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.fromisoformat(value).date()


def start_of_month(reference: DateLike) -> date:
    return as_date(reference).replace(day=1)


def end_of_month(reference: DateLike) -> date:
    day = as_date(reference)
    return day.replace(day=calendar.monthrange(day.year, day.month)[1])


def add_months(reference: DateLike, months: int) -> date:
    """First day of the month `months` away from `reference` (negative goes back)."""
    first = start_of_month(reference)
    index = first.year * 12 + (first.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


def month_range(end_month: DateLike, count: int) -> List[date]:
    """`count` month starts ending with `end_month`, oldest first."""
    return [add_months(end_month, offset) for offset in range(-(count - 1), 1)] if count > 0 else []


def parse_month(value: Optional[str], default: Optional[date] = None) -> date:
    """
    Parse "YYYY-MM" (or a full ISO date) into the first day of that month.

    Raises:
        ValueError: If the value is not a valid month
    """
    if not value:
        return start_of_month(default or date.today())
    if len(value) == 7:
        value = f"{value}-01"
    return start_of_month(date.fromisoformat(value))


def in_range(value: Optional[DateLike], start: date, end: date) -> bool:
    day = as_date(value)
    return day is not None and start <= day <= end


def filter_by_range(records: Iterable[T], start: date, end: date, field: str) -> List[T]:
    return [record for record in records if in_range(getattr(record, field, None), start, end)]


def filter_by_month(records: Iterable[T], reference: DateLike, field: str = "date") -> List[T]:
    """
    Records whose `field` falls inside the calendar month of `reference`.

    Records with no value for `field` are skipped.
    """
    return filter_by_range(records, start_of_month(reference), end_of_month(reference), field)


def filter_by_year(records: Iterable[T], year: int, field: str = "date") -> List[T]:
    return filter_by_range(records, date(year, 1, 1), date(year, 12, 31), field)
