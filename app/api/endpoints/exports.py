"""
CSV exports of the owner's records.
"""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.analytics.ranking import index_by_id
from app.api.dependencies import get_db, require_access
from app.core.permissions import Resource, has_access
from app.crud.owned import load_collections
from app.models.user import User
from app.services.exports import export_csv, export_filename

router = APIRouter()

EXPORTS = {
    "clients": {
        "collections": ["clients"],
        "headers": ["id", "name", "email", "phone", "notes", "created_at"],
    },
    "leads": {
        "collections": ["leads"],
        "headers": ["id", "name", "email", "phone", "company", "source", "status", "notes", "created_at"],
    },
    "projects": {
        "collections": ["projects", "clients"],
        "headers": ["id", "name", "client", "status", "total_amount", "deadline", "completed_date", "reminder_date", "created_at"],
    },
    "payments": {
        "collections": ["payments", "projects", "clients"],
        "headers": ["id", "date", "amount", "project", "client", "payment_type", "payment_method", "notes"],
    },
    "team-payments": {
        "collections": ["team_payments", "team_members", "projects"],
        "headers": ["id", "date", "amount", "team_member", "role", "project", "notes"],
        "resource": Resource.TEAM_PAYMENT,
    },
    "investments": {
        "collections": ["investments"],
        "headers": ["id", "date", "name", "amount", "payment_method", "upi_id", "transaction_id", "notes"],
        "resource": Resource.INVESTMENT,
    },
}


def _name(records_by_id: dict, record_id):
    record = records_by_id.get(record_id)
    return record.name if record is not None else None


def build_rows(kind: str, data: dict) -> list:
    if kind == "clients":
        return [
            {"id": c.id, "name": c.name, "email": c.email, "phone": c.phone, "notes": c.notes, "created_at": c.created_at}
            for c in data["clients"]
        ]
    if kind == "leads":
        return [
            {
                "id": lead.id,
                "name": lead.name,
                "email": lead.email,
                "phone": lead.phone,
                "company": lead.company,
                "source": lead.source,
                "status": lead.status,
                "notes": lead.notes,
                "created_at": lead.created_at,
            }
            for lead in data["leads"]
        ]
    if kind == "projects":
        clients = index_by_id(data["clients"])
        return [
            {
                "id": p.id,
                "name": p.name,
                "client": _name(clients, p.client_id),
                "status": p.status,
                "total_amount": p.total_amount,
                "deadline": p.deadline,
                "completed_date": p.completed_date,
                "reminder_date": p.reminder_date,
                "created_at": p.created_at,
            }
            for p in data["projects"]
        ]
    if kind == "payments":
        projects = index_by_id(data["projects"])
        clients = index_by_id(data["clients"])
        rows = []
        for pay in data["payments"]:
            project = projects.get(pay.project_id)
            rows.append({
                "id": pay.id,
                "date": pay.date,
                "amount": pay.amount,
                "project": project.name if project else None,
                "client": _name(clients, project.client_id) if project else None,
                "payment_type": pay.payment_type,
                "payment_method": pay.payment_method,
                "notes": pay.notes,
            })
        return rows
    if kind == "team-payments":
        members = index_by_id(data["team_members"])
        projects = index_by_id(data["projects"])
        rows = []
        for pay in data["team_payments"]:
            member = members.get(pay.team_member_id)
            rows.append({
                "id": pay.id,
                "date": pay.date,
                "amount": pay.amount,
                "team_member": member.name if member else None,
                "role": member.role if member else None,
                "project": _name(projects, pay.project_id),
                "notes": pay.notes,
            })
        return rows
    return [
        {
            "id": i.id,
            "date": i.date,
            "name": i.name,
            "amount": i.amount,
            "payment_method": i.payment_method,
            "upi_id": i.upi_id,
            "transaction_id": i.transaction_id,
            "notes": i.notes,
        }
        for i in data["investments"]
    ]


@router.get("/{kind}.csv")
async def export_collection(
    kind: str,
    request: Request,
    current_user: User = Depends(require_access(Resource.EXPORT)),
    db: AsyncSession = Depends(get_db)
):
    spec = EXPORTS.get(kind)
    if spec is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown export: {kind}")
    resource = spec.get("resource")
    if resource is not None and not has_access(current_user.user_type, resource):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=f"Your account type cannot export {kind}")

    data = await load_collections(db, current_user.id, spec["collections"], request)
    rows = build_rows(kind, data)
    if not rows:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No data to export")

    filename = export_filename(kind.replace("-", "_"), date.today())
    return Response(
        content=export_csv(rows, spec["headers"]),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
