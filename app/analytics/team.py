from collections import defaultdict
from typing import Dict, Iterable, List

from app.analytics.dates import DateLike, filter_by_month
from app.analytics.revenue import sum_amounts


def team_payment_breakdown(team_members: Iterable, team_payments: Iterable, month: DateLike) -> Dict:
    """
    Totals of money paid to team members: overall, for `month`, and per
    member (members with no payments included with zeros).
    """
    team_payments = list(team_payments)
    month_payments = filter_by_month(team_payments, month, "date")

    total_by_member = defaultdict(float)
    for payment in team_payments:
        total_by_member[payment.team_member_id] += payment.amount or 0
    month_by_member = defaultdict(float)
    for payment in month_payments:
        month_by_member[payment.team_member_id] += payment.amount or 0

    members: List[Dict] = [
        {
            "team_member_id": member.id,
            "name": member.name,
            "role": member.role,
            "total": total_by_member.get(member.id, 0.0),
            "month_total": month_by_member.get(member.id, 0.0),
        }
        for member in team_members
    ]
    return {
        "total_paid": sum_amounts(team_payments),
        "month_total": sum_amounts(month_payments),
        "members": members,
    }


def investment_totals(investments: Iterable, month: DateLike) -> Dict[str, float]:
    investments = list(investments)
    return {
        "total": sum_amounts(investments),
        "month_total": sum_amounts(filter_by_month(investments, month, "date")),
    }
