from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

from app.analytics.dates import DateLike, filter_by_month


@dataclass
class ClientRevenue:
    client: Any
    revenue: float
    percent_of_total: float = 0.0
    project_count: int = 0


def index_by_id(records: Iterable) -> Dict[Any, Any]:
    return {record.id: record for record in records}


def revenue_by_client(
    clients: Iterable,
    projects: Iterable,
    payments: Iterable,
    month: Optional[DateLike] = None
) -> List[ClientRevenue]:
    """
    Revenue of every client (zero included), highest first.

    Payments join to projects and projects to clients through id maps built
    once. Payments whose project (or whose project's client) is unknown are
    ignored. Equal revenues keep the order of `clients`.
    """
    clients = list(clients)
    projects_by_id = index_by_id(projects)

    if month is not None:
        payments = filter_by_month(payments, month, "date")

    revenue = defaultdict(float)
    for payment in payments:
        project = projects_by_id.get(payment.project_id)
        if project is not None:
            revenue[project.client_id] += payment.amount or 0

    project_count = defaultdict(int)
    for project in projects_by_id.values():
        project_count[project.client_id] += 1

    rows = [
        ClientRevenue(client=client, revenue=revenue.get(client.id, 0.0), project_count=project_count.get(client.id, 0))
        for client in clients
    ]
    rows.sort(key=lambda row: row.revenue, reverse=True)
    return rows


def top_clients_by_revenue(
    clients: Iterable,
    projects: Iterable,
    payments: Iterable,
    month: Optional[DateLike],
    top_n: int = 5
) -> List[ClientRevenue]:
    """
    The `top_n` highest-earning clients for `month` (all time when None).

    `percent_of_total` is each client's share of the revenue of the returned
    rows, so the shown shares add up to 100.
    """
    ranked = revenue_by_client(clients, projects, payments, month)[:max(top_n, 0)]
    shown_total = sum(row.revenue for row in ranked)
    for row in ranked:
        row.percent_of_total = row.revenue / shown_total * 100 if shown_total > 0 else 0.0
    return ranked
