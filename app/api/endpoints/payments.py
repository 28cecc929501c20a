"""
Client payment endpoints. Payments cannot be edited: delete and re-create.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.analytics.balances import project_balances
from app.api.dependencies import get_db, require_access
from app.core.logging import get_logger
from app.core.permissions import Resource
from app.crud.owned import commit, get_owned_or_404, list_owned, load_collections
from app.models.payment import Payment
from app.models.user import User
from app.schemas.payment import PaymentCreate, PaymentOut, ProjectBalanceOut

router = APIRouter()
logger = get_logger(__name__)


@router.get("", response_model=List[PaymentOut])
async def list_payments(
    project_id: Optional[int] = Query(None),
    current_user: User = Depends(require_access(Resource.PAYMENT)),
    db: AsyncSession = Depends(get_db)
):
    criteria = [Payment.project_id == project_id] if project_id is not None else []
    return await list_owned(db, "payments", current_user.id, *criteria)


@router.get("/balances", response_model=List[ProjectBalanceOut])
async def list_balances(
    request: Request,
    current_user: User = Depends(require_access(Resource.PAYMENT)),
    db: AsyncSession = Depends(get_db)
):
    """Paid and pending amount of every project."""
    data = await load_collections(db, current_user.id, ["projects", "payments"], request)
    return [
        ProjectBalanceOut(
            project_id=balance.project.id,
            project_name=balance.project.name,
            client_id=balance.project.client_id,
            total_amount=balance.project.total_amount or 0,
            paid=balance.paid,
            pending=balance.pending,
            pending_display=balance.pending_display,
        )
        for balance in project_balances(data["projects"], data["payments"])
    ]


@router.post("", response_model=PaymentOut, status_code=status.HTTP_201_CREATED)
async def create_payment(
    payment_in: PaymentCreate,
    current_user: User = Depends(require_access(Resource.PAYMENT)),
    db: AsyncSession = Depends(get_db)
):
    await get_owned_or_404(db, "projects", payment_in.project_id, current_user.id, "Project")
    payment = Payment(user_id=current_user.id, **payment_in.model_dump())
    db.add(payment)
    await commit(db, "payments")
    await db.refresh(payment)
    logger.info(f"Payment {payment.id} of {payment.amount} recorded for project {payment.project_id}")
    return payment


@router.delete("/{payment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_payment(
    payment_id: int,
    current_user: User = Depends(require_access(Resource.PAYMENT)),
    db: AsyncSession = Depends(get_db)
):
    payment = await get_owned_or_404(db, "payments", payment_id, current_user.id, "Payment")
    await db.delete(payment)
    await commit(db, "payments")
