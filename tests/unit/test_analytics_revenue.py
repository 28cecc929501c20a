"""
Unit tests for revenue sums, growth and the monthly chart series.
"""

import pytest
from datetime import date, datetime, timezone
from types import SimpleNamespace

from app.analytics.charts import monthly_series
from app.analytics.revenue import (
    growth_percent,
    last_week_revenue,
    monthly_revenue,
    revenue_by_period,
    revenue_summary,
    total_revenue,
    yearly_series,
)


def payment(amount, day, project_id=1):
    return SimpleNamespace(amount=amount, date=day, project_id=project_id)


def project(id, created_at, completed_date=None, status="active"):
    return SimpleNamespace(id=id, created_at=created_at, completed_date=completed_date, status=status)


class TestRevenue:

    def test_total_and_monthly(self):
        payments = [
            payment(1000, date(2024, 1, 5)),
            payment(500, date(2024, 1, 31)),
            payment(250, date(2024, 2, 1)),
        ]

        assert total_revenue(payments) == 1750
        assert monthly_revenue(payments, date(2024, 1, 1)) == 1500
        assert monthly_revenue(payments, date(2024, 2, 1)) == 250
        assert monthly_revenue(payments, date(2024, 3, 1)) == 0

    def test_empty_collection(self):
        assert total_revenue([]) == 0
        assert monthly_revenue([], date(2024, 1, 1)) == 0

    def test_summary_compares_with_previous_month(self):
        payments = [
            payment(1000, date(2023, 12, 10)),
            payment(1500, date(2024, 1, 10)),
        ]

        summary = revenue_summary(payments, date(2024, 1, 1))

        assert summary["this_month"] == 1500
        assert summary["last_month"] == 1000
        assert summary["growth_percent"] == 50.0
        assert summary["total"] == 2500

    def test_yearly_series(self):
        payments = [payment(100, date(2022, 6, 1)), payment(300, date(2024, 6, 1))]

        assert yearly_series(payments, 2024, 3) == [
            {"year": 2022, "revenue": 100},
            {"year": 2023, "revenue": 0},
            {"year": 2024, "revenue": 300},
        ]


class TestGrowthPercent:

    def test_growth_from_zero_is_flat_hundred(self):
        assert growth_percent(500, 0) == 100.0

    def test_zero_to_zero_is_zero(self):
        assert growth_percent(0, 0) == 0.0

    def test_decline_is_negative(self):
        assert growth_percent(250, 1000) == -75.0


class TestLastWeekRevenue:

    def test_previous_monday_to_sunday(self):
        # 2024-05-15 is a Wednesday; last week is 6th..12th May
        payments = [
            payment(100, date(2024, 5, 5)),   # Sunday before
            payment(200, date(2024, 5, 6)),   # Monday
            payment(300, date(2024, 5, 12)),  # Sunday
            payment(400, date(2024, 5, 13)),  # this week
        ]

        assert last_week_revenue(payments, date(2024, 5, 15)) == 500


class TestMonthlySeries:

    def test_one_bucket_per_month_oldest_first(self):
        series = monthly_series([], [], 3, date(2024, 2, 1))

        assert [bucket.month for bucket in series] == [date(2023, 12, 1), date(2024, 1, 1), date(2024, 2, 1)]
        assert [bucket.label for bucket in series] == ["Dec", "Jan", "Feb"]
        assert series[0].full_label == "Dec 2023"

    def test_buckets_count_payments_and_projects(self):
        payments = [payment(1000, date(2024, 1, 15)), payment(200, date(2024, 2, 2))]
        projects = [
            project(1, datetime(2024, 1, 3, tzinfo=timezone.utc), completed_date=date(2024, 2, 20), status="completed"),
            project(2, datetime(2024, 2, 10, tzinfo=timezone.utc)),
        ]

        jan, feb = monthly_series(payments, projects, 2, date(2024, 2, 1))

        assert jan.payments_total == 1000
        assert jan.projects_created == 1
        assert jan.projects_completed == 0
        assert feb.payments_total == 200
        assert feb.projects_created == 1
        assert feb.projects_completed == 1

    def test_completion_follows_completed_date(self):
        # Created in March, completion backdated to January
        projects = [project(1, datetime(2024, 3, 1, tzinfo=timezone.utc), completed_date=date(2024, 1, 20), status="completed")]

        jan, feb, mar = monthly_series([], projects, 3, date(2024, 3, 1))

        assert jan.projects_completed == 1
        assert mar.projects_created == 1
        assert mar.projects_completed == 0


class TestRevenueByPeriod:

    PAYMENTS = [
        payment(100, date(2022, 6, 1)),
        payment(200, date(2024, 1, 20)),
        payment(300, date(2024, 3, 4)),
        payment(400, date(2024, 3, 10)),
        payment(500, date(2024, 3, 12)),
    ]

    def test_week_is_previous_monday_to_sunday(self):
        buckets = revenue_by_period(self.PAYMENTS, "week", date(2024, 3, 13))

        assert buckets == [{"label": "Mar 04 - Mar 10, 2024", "revenue": 700}]

    def test_month_defaults_to_six_months(self):
        buckets = revenue_by_period(self.PAYMENTS, "month", date(2024, 3, 13))

        assert [b["label"] for b in buckets] == ["Oct 2023", "Nov 2023", "Dec 2023", "Jan 2024", "Feb 2024", "Mar 2024"]
        assert [b["revenue"] for b in buckets] == [0, 0, 0, 200, 0, 1200]

    def test_year_defaults_to_three_years(self):
        buckets = revenue_by_period(self.PAYMENTS, "year", date(2024, 3, 13))

        assert buckets == [
            {"label": "2022", "revenue": 100},
            {"label": "2023", "revenue": 0},
            {"label": "2024", "revenue": 1400},
        ]

    def test_custom_count(self):
        assert len(revenue_by_period(self.PAYMENTS, "month", date(2024, 3, 13), count=2)) == 2

    def test_unknown_period(self):
        with pytest.raises(ValueError):
            revenue_by_period(self.PAYMENTS, "decade", date(2024, 3, 13))
