"""
Derived, not stored: notifications are recomputed from the owner's projects
and payments on every request.
"""

from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Optional

from app.analytics.balances import paid_by_project
from app.analytics.dates import DateLike, as_date
from app.core.permissions import Feature, plan_has_feature

PRIORITY_ORDER = {"high": 0, "medium": 1, "low": 2}

DEADLINE_WINDOW_DAYS = 3
REMINDER_WINDOW_DAYS = 7
PAYMENT_STALE_DAYS = 30


@dataclass
class Notification:
    id: str
    type: str  # 'overdue', 'deadline', 'reminder', 'payment'
    title: str
    message: str
    project_id: int
    priority: str
    date: date


def upcoming_reminders(projects: Iterable, today: DateLike, days: int = REMINDER_WINDOW_DAYS) -> List:
    """Projects whose reminder falls within the next `days` days, soonest first."""
    today = as_date(today)
    due = [
        project for project in projects
        if project.reminder_date and 0 <= (as_date(project.reminder_date) - today).days <= days
    ]
    return sorted(due, key=lambda project: as_date(project.reminder_date))


def build_notifications(
    projects: Iterable,
    payments: Iterable,
    plan: Optional[str],
    today: DateLike,
    currency: str = "₹"
) -> List[Notification]:
    today = as_date(today)
    projects = list(projects)
    payments = list(payments)
    notifications = []

    for project in projects:
        if project.deadline and project.status == "active":
            days = (as_date(project.deadline) - today).days
            if days < 0:
                notifications.append(Notification(
                    id=f"overdue-{project.id}",
                    type="overdue",
                    title="Overdue Project",
                    message=f"{project.name} deadline was {abs(days)} day(s) ago",
                    project_id=project.id,
                    priority="high",
                    date=as_date(project.deadline),
                ))
            elif days <= DEADLINE_WINDOW_DAYS:
                notifications.append(Notification(
                    id=f"deadline-{project.id}",
                    type="deadline",
                    title="Upcoming Deadline",
                    message=f"{project.name} deadline in {days} day(s)",
                    project_id=project.id,
                    priority="high" if days == 0 else "medium",
                    date=as_date(project.deadline),
                ))

    if plan_has_feature(plan, Feature.FOLLOW_UP_REMINDERS):
        for project in upcoming_reminders(projects, today):
            days = (as_date(project.reminder_date) - today).days
            notifications.append(Notification(
                id=f"reminder-{project.id}",
                type="reminder",
                title="Follow-up Reminder",
                message=f"Follow up on {project.name}",
                project_id=project.id,
                priority="high" if days <= 1 else "medium",
                date=as_date(project.reminder_date),
            ))

    if plan_has_feature(plan, Feature.PAYMENT_FOLLOW_UPS):
        paid = paid_by_project(payments)
        last_payment = {}
        for payment in payments:
            day = as_date(payment.date)
            if payment.project_id not in last_payment or day > last_payment[payment.project_id]:
                last_payment[payment.project_id] = day

        for project in projects:
            pending = (project.total_amount or 0) - paid.get(project.id, 0.0)
            last = last_payment.get(project.id)
            if pending > 0 and last is not None and (today - last).days >= PAYMENT_STALE_DAYS:
                notifications.append(Notification(
                    id=f"payment-{project.id}",
                    type="payment",
                    title="Pending Payment",
                    message=f"{currency}{pending:,.0f} pending for {project.name}",
                    project_id=project.id,
                    priority="medium",
                    date=last,
                ))

    notifications.sort(key=lambda n: (PRIORITY_ORDER[n.priority], n.date))
    return notifications
