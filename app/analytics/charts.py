from dataclasses import dataclass
from datetime import date
from typing import Iterable, List

from app.analytics.dates import DateLike, end_of_month, filter_by_range, month_range
from app.analytics.revenue import sum_amounts


@dataclass
class MonthBucket:
    label: str
    full_label: str
    month: date
    payments_total: float
    projects_created: int
    projects_completed: int


def monthly_series(
    payments: Iterable,
    projects: Iterable,
    num_months: int,
    end_month: DateLike
) -> List[MonthBucket]:
    """
    One bucket per calendar month, oldest first, the last being `end_month`.

    A project counts as created in the month of its `created_at` and as
    completed in the month of its `completed_date`. Completion is attributed
    by that date alone, so a backdated completed_date moves the project into
    an earlier bucket.
    """
    payments = list(payments)
    projects = list(projects)

    series = []
    for start in month_range(end_month, num_months):
        end = end_of_month(start)
        series.append(MonthBucket(
            label=start.strftime("%b"),
            full_label=start.strftime("%b %Y"),
            month=start,
            payments_total=sum_amounts(filter_by_range(payments, start, end, "date")),
            projects_created=len(filter_by_range(projects, start, end, "created_at")),
            projects_completed=len(filter_by_range(projects, start, end, "completed_date")),
        ))
    return series
