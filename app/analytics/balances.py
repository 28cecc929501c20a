from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Iterable, List


@dataclass
class ProjectBalance:
    project: Any
    paid: float
    pending: float  # signed; negative means overpaid

    @property
    def pending_display(self) -> float:
        return max(self.pending, 0.0)


def paid_by_project(payments: Iterable) -> dict:
    paid = defaultdict(float)
    for payment in payments:
        paid[payment.project_id] += payment.amount or 0
    return paid


def project_balances(projects: Iterable, payments: Iterable) -> List[ProjectBalance]:
    paid = paid_by_project(payments)
    return [
        ProjectBalance(project=project, paid=paid.get(project.id, 0.0), pending=(project.total_amount or 0) - paid.get(project.id, 0.0))
        for project in projects
    ]


def total_pending(projects: Iterable, payments: Iterable) -> float:
    """Outstanding amount over all projects; overpaid projects count as zero."""
    return sum(balance.pending_display for balance in project_balances(projects, payments))
