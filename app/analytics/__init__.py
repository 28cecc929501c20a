"""
Pure aggregation over in-memory record collections.

Nothing in this package touches the database: routers load the owner's
collections once and pass them in, so every function here can be tested
with plain objects. Records are read by attribute, so ORM rows and simple
namespaces both work.
"""

from app.analytics.dates import (
    start_of_month,
    end_of_month,
    add_months,
    month_range,
    parse_month,
    filter_by_month,
    filter_by_year,
)
from app.analytics.revenue import monthly_revenue, growth_percent, total_revenue
from app.analytics.charts import MonthBucket, monthly_series
from app.analytics.status import LeadStatusCounts, StatusCounts, lead_status_counts, status_counts
from app.analytics.ranking import ClientRevenue, top_clients_by_revenue
from app.analytics.balances import ProjectBalance, project_balances, total_pending

__all__ = [
    "start_of_month",
    "end_of_month",
    "add_months",
    "month_range",
    "parse_month",
    "filter_by_month",
    "filter_by_year",
    "monthly_revenue",
    "growth_percent",
    "total_revenue",
    "MonthBucket",
    "monthly_series",
    "StatusCounts",
    "status_counts",
    "LeadStatusCounts",
    "lead_status_counts",
    "ClientRevenue",
    "top_clients_by_revenue",
    "ProjectBalance",
    "project_balances",
    "total_pending",
]
