"""
Response schemas for the dashboard endpoints.
"""

import datetime as dt
from typing import List, Optional
from pydantic import BaseModel


class RevenueSummaryOut(BaseModel):
    total: float
    this_month: float
    last_month: float
    growth_percent: float


class MonthBucketOut(BaseModel):
    label: str
    full_label: str
    month: dt.date
    payments_total: float
    projects_created: int
    projects_completed: int

    class Config:
        from_attributes = True


class DashboardSummaryOut(BaseModel):
    month: dt.date
    revenue: RevenueSummaryOut
    last_week_revenue: float
    total_pending: float
    clients_count: int
    projects_count: int
    active_projects_count: int
    series: List[MonthBucketOut]


class StatusCountsOut(BaseModel):
    active: int
    completed: int
    on_hold: int
    cancelled: int
    total: int

    class Config:
        from_attributes = True


class TopClientOut(BaseModel):
    client_id: int
    name: str
    revenue: float
    percent_of_total: float
    project_count: int


class NotificationOut(BaseModel):
    id: str
    type: str
    title: str
    message: str
    project_id: int
    priority: str
    date: dt.date

    class Config:
        from_attributes = True


class TeamMemberTotalsOut(BaseModel):
    team_member_id: int
    name: str
    role: str
    total: float
    month_total: float


class TeamPaymentsSummaryOut(BaseModel):
    month: dt.date
    total_paid: float
    month_total: float
    members: List[TeamMemberTotalsOut]
    investments_total: float
    investments_month_total: float
    net_month: Optional[float] = None  # month revenue minus team payments


class RevenueBucketOut(BaseModel):
    label: str
    revenue: float


class RevenuePeriodOut(BaseModel):
    period: str
    buckets: List[RevenueBucketOut]
    total: float
    average: float
    max: float
