"""
Dashboard endpoints.

Each request loads the owner's collections once (stopping early if the
client disconnects) and hands them to the pure functions in app.analytics.
"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.analytics import monthly_series, parse_month, status_counts, top_clients_by_revenue, total_pending
from app.analytics.notifications import build_notifications
from app.analytics.revenue import last_week_revenue, monthly_revenue, revenue_by_period, revenue_summary
from app.analytics.team import investment_totals, team_payment_breakdown
from app.api.dependencies import get_db, require_access
from app.core.config import settings
from app.core.permissions import Resource, has_access
from app.crud.owned import load_collections
from app.models.user import User
from app.schemas.analytics import (
    DashboardSummaryOut,
    MonthBucketOut,
    NotificationOut,
    RevenueBucketOut,
    RevenuePeriodOut,
    RevenueSummaryOut,
    StatusCountsOut,
    TeamMemberTotalsOut,
    TeamPaymentsSummaryOut,
    TopClientOut,
)

router = APIRouter()

MONTH_PATTERN = r"^\d{4}-\d{2}$"


def month_or_400(value: Optional[str]) -> date:
    try:
        return parse_month(value)
    except ValueError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Invalid month: {value}")


@router.get("/summary", response_model=DashboardSummaryOut)
async def get_summary(
    request: Request,
    month: Optional[str] = Query(None, pattern=MONTH_PATTERN, description="YYYY-MM, defaults to the current month"),
    months: int = Query(6, ge=1, le=24, description="Number of months in the chart series"),
    current_user: User = Depends(require_access(Resource.REPORT)),
    db: AsyncSession = Depends(get_db)
):
    selected = month_or_400(month)
    data = await load_collections(db, current_user.id, ["clients", "projects", "payments"], request)
    projects, payments = data["projects"], data["payments"]

    return DashboardSummaryOut(
        month=selected,
        revenue=RevenueSummaryOut(**revenue_summary(payments, selected)),
        last_week_revenue=last_week_revenue(payments, date.today()),
        total_pending=total_pending(projects, payments),
        clients_count=len(data["clients"]),
        projects_count=len(projects),
        active_projects_count=sum(1 for project in projects if project.status == "active"),
        series=[MonthBucketOut.model_validate(bucket) for bucket in monthly_series(payments, projects, months, selected)],
    )


@router.get("/revenue", response_model=RevenuePeriodOut)
async def get_revenue(
    request: Request,
    period: str = Query("month", pattern=r"^(week|month|year)$"),
    count: Optional[int] = Query(None, ge=1, le=24, description="Buckets for month or year; 6 months or 3 years by default"),
    current_user: User = Depends(require_access(Resource.REPORT)),
    db: AsyncSession = Depends(get_db)
):
    """Revenue of last week, of the last months or of the last years."""
    data = await load_collections(db, current_user.id, ["payments"], request)
    buckets = revenue_by_period(data["payments"], period, date.today(), count)
    revenues = [bucket["revenue"] for bucket in buckets]
    return RevenuePeriodOut(
        period=period,
        buckets=[RevenueBucketOut(**bucket) for bucket in buckets],
        total=sum(revenues),
        average=sum(revenues) / len(revenues),
        max=max(revenues),
    )


@router.get("/status-counts", response_model=StatusCountsOut)
async def get_status_counts(
    request: Request,
    month: Optional[str] = Query(None, pattern=MONTH_PATTERN),
    year: Optional[int] = Query(None, ge=1970, le=9999),
    current_user: User = Depends(require_access(Resource.REPORT)),
    db: AsyncSession = Depends(get_db)
):
    """
    Project counts by status. Scoped to a month or year, only projects
    created in that period are counted; unscoped, every project counts.
    """
    selected = month_or_400(month) if month else None
    data = await load_collections(db, current_user.id, ["projects"], request)
    return StatusCountsOut.model_validate(status_counts(data["projects"], month=selected, year=year))


@router.get("/top-clients", response_model=List[TopClientOut])
async def get_top_clients(
    request: Request,
    month: Optional[str] = Query(None, pattern=MONTH_PATTERN, description="YYYY-MM; all time when omitted"),
    limit: int = Query(5, ge=1, le=50),
    current_user: User = Depends(require_access(Resource.REPORT)),
    db: AsyncSession = Depends(get_db)
):
    selected = month_or_400(month) if month else None
    data = await load_collections(db, current_user.id, ["clients", "projects", "payments"], request)
    ranked = top_clients_by_revenue(data["clients"], data["projects"], data["payments"], selected, limit)
    return [
        TopClientOut(
            client_id=row.client.id,
            name=row.client.name,
            revenue=row.revenue,
            percent_of_total=row.percent_of_total,
            project_count=row.project_count,
        )
        for row in ranked
    ]


@router.get("/notifications", response_model=List[NotificationOut])
async def get_notifications(
    request: Request,
    current_user: User = Depends(require_access(Resource.REPORT)),
    db: AsyncSession = Depends(get_db)
):
    data = await load_collections(db, current_user.id, ["projects", "payments"], request)
    notifications = build_notifications(
        data["projects"],
        data["payments"],
        current_user.plan,
        date.today(),
        settings.CURRENCY_SYMBOL,
    )
    return [NotificationOut.model_validate(notification) for notification in notifications]


@router.get("/team-payments", response_model=TeamPaymentsSummaryOut)
async def get_team_payments(
    request: Request,
    month: Optional[str] = Query(None, pattern=MONTH_PATTERN),
    current_user: User = Depends(require_access(Resource.TEAM_PAYMENT)),
    db: AsyncSession = Depends(get_db)
):
    """Money paid out to the team and invested, next to the month's revenue."""
    selected = month_or_400(month)
    names = ["team_members", "team_payments", "payments"]
    if has_access(current_user.user_type, Resource.INVESTMENT):
        names.append("investments")
    data = await load_collections(db, current_user.id, names, request)

    breakdown = team_payment_breakdown(data["team_members"], data["team_payments"], selected)
    investments = investment_totals(data.get("investments", []), selected)
    return TeamPaymentsSummaryOut(
        month=selected,
        total_paid=breakdown["total_paid"],
        month_total=breakdown["month_total"],
        members=[TeamMemberTotalsOut(**member) for member in breakdown["members"]],
        investments_total=investments["total"],
        investments_month_total=investments["month_total"],
        net_month=monthly_revenue(data["payments"], selected) - breakdown["month_total"],
    )
