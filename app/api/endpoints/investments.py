"""
Agency investment endpoints.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import get_db, require_access
from app.core.permissions import Resource
from app.crud.owned import commit, get_owned_or_404, list_owned
from app.models.investment import Investment
from app.models.user import User
from app.schemas.investment import InvestmentCreate, InvestmentOut, InvestmentUpdate

router = APIRouter()


@router.get("", response_model=List[InvestmentOut])
async def list_investments(
    current_user: User = Depends(require_access(Resource.INVESTMENT)),
    db: AsyncSession = Depends(get_db)
):
    return await list_owned(db, "investments", current_user.id)


@router.post("", response_model=InvestmentOut, status_code=status.HTTP_201_CREATED)
async def create_investment(
    investment_in: InvestmentCreate,
    current_user: User = Depends(require_access(Resource.INVESTMENT)),
    db: AsyncSession = Depends(get_db)
):
    investment = Investment(user_id=current_user.id, **investment_in.model_dump())
    db.add(investment)
    await commit(db, "investments")
    await db.refresh(investment)
    return investment


@router.get("/{investment_id}", response_model=InvestmentOut)
async def get_investment(
    investment_id: int,
    current_user: User = Depends(require_access(Resource.INVESTMENT)),
    db: AsyncSession = Depends(get_db)
):
    return await get_owned_or_404(db, "investments", investment_id, current_user.id, "Investment")


@router.put("/{investment_id}", response_model=InvestmentOut)
async def update_investment(
    investment_id: int,
    investment_in: InvestmentUpdate,
    current_user: User = Depends(require_access(Resource.INVESTMENT)),
    db: AsyncSession = Depends(get_db)
):
    investment = await get_owned_or_404(db, "investments", investment_id, current_user.id, "Investment")
    changes = investment_in.model_dump(exclude_unset=True)

    # Switching an existing record to UPI still needs both references
    method = changes.get("payment_method") or investment.payment_method
    upi_id = changes.get("upi_id", investment.upi_id)
    transaction_id = changes.get("transaction_id", investment.transaction_id)
    if method == "upi" and not (upi_id and transaction_id):
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="UPI ID and transaction ID are required for UPI payments",
        )

    for field, value in changes.items():
        if value is None and field in ("name", "amount", "date", "payment_method"):
            continue
        setattr(investment, field, value)
    await commit(db, "investments")
    await db.refresh(investment)
    return investment


@router.delete("/{investment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_investment(
    investment_id: int,
    current_user: User = Depends(require_access(Resource.INVESTMENT)),
    db: AsyncSession = Depends(get_db)
):
    investment = await get_owned_or_404(db, "investments", investment_id, current_user.id, "Investment")
    await db.delete(investment)
    await commit(db, "investments")
