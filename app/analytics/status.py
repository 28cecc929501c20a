from dataclasses import dataclass
from typing import Iterable, Optional

from app.analytics.dates import DateLike, filter_by_month, filter_by_year


@dataclass
class StatusCounts:
    active: int = 0
    completed: int = 0
    on_hold: int = 0
    cancelled: int = 0
    total: int = 0


STATUS_FIELDS = {
    "active": "active",
    "completed": "completed",
    "on-hold": "on_hold",
    "cancelled": "cancelled",
}


def status_counts(
    projects: Iterable,
    month: Optional[DateLike] = None,
    year: Optional[int] = None
) -> StatusCounts:
    """
    Tally projects by status.

    With `month` or `year` only projects created in that period are counted
    (the creation cohort), whatever their status is today. `month` wins when
    both are given.
    """
    if month is not None:
        projects = filter_by_month(projects, month, "created_at")
    elif year is not None:
        projects = filter_by_year(projects, year, "created_at")

    counts = StatusCounts()
    for project in projects:
        field = STATUS_FIELDS.get(project.status)
        if field:
            setattr(counts, field, getattr(counts, field) + 1)
        counts.total += 1
    return counts


LEAD_STATUSES = ("new", "contacted", "qualified", "converted", "lost")


@dataclass
class LeadStatusCounts:
    new: int = 0
    contacted: int = 0
    qualified: int = 0
    converted: int = 0
    lost: int = 0
    total: int = 0


def lead_status_counts(leads: Iterable) -> LeadStatusCounts:
    """Tally leads by status; unknown statuses only count toward the total."""
    counts = LeadStatusCounts()
    for lead in leads:
        if lead.status in LEAD_STATUSES:
            setattr(counts, lead.status, getattr(counts, lead.status) + 1)
        counts.total += 1
    return counts
