"""
Agency team endpoints: team members and the payments made to them.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import get_db, require_access
from app.core.logging import get_logger
from app.core.permissions import Resource
from app.crud.owned import commit, get_owned_or_404, list_owned
from app.models.team_member import TeamMember
from app.models.team_member_payment import TeamMemberPayment
from app.models.user import User
from app.schemas.team_member import (
    TeamMemberCreate,
    TeamMemberOut,
    TeamMemberPaymentCreate,
    TeamMemberPaymentOut,
    TeamMemberPaymentUpdate,
    TeamMemberUpdate,
)

router = APIRouter()
logger = get_logger(__name__)


# ==================== Team Members ====================

@router.get("/members", response_model=List[TeamMemberOut])
async def list_team_members(
    current_user: User = Depends(require_access(Resource.TEAM_MEMBER)),
    db: AsyncSession = Depends(get_db)
):
    return await list_owned(db, "team_members", current_user.id)


@router.post("/members", response_model=TeamMemberOut, status_code=status.HTTP_201_CREATED)
async def create_team_member(
    member_in: TeamMemberCreate,
    current_user: User = Depends(require_access(Resource.TEAM_MEMBER)),
    db: AsyncSession = Depends(get_db)
):
    member = TeamMember(user_id=current_user.id, **member_in.model_dump())
    db.add(member)
    await commit(db, "team_members")
    await db.refresh(member)
    logger.info(f"Team member {member.id} added by user {current_user.id}")
    return member


@router.get("/members/{member_id}", response_model=TeamMemberOut)
async def get_team_member(
    member_id: int,
    current_user: User = Depends(require_access(Resource.TEAM_MEMBER)),
    db: AsyncSession = Depends(get_db)
):
    return await get_owned_or_404(db, "team_members", member_id, current_user.id, "Team member")


@router.put("/members/{member_id}", response_model=TeamMemberOut)
async def update_team_member(
    member_id: int,
    member_in: TeamMemberUpdate,
    current_user: User = Depends(require_access(Resource.TEAM_MEMBER)),
    db: AsyncSession = Depends(get_db)
):
    member = await get_owned_or_404(db, "team_members", member_id, current_user.id, "Team member")
    for field, value in member_in.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(member, field, value)
    await commit(db, "team_members")
    await db.refresh(member)
    return member


@router.delete("/members/{member_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_team_member(
    member_id: int,
    current_user: User = Depends(require_access(Resource.TEAM_MEMBER)),
    db: AsyncSession = Depends(get_db)
):
    """Delete a team member and every payment made to them."""
    member = await get_owned_or_404(db, "team_members", member_id, current_user.id, "Team member")
    await db.delete(member)
    await commit(db, "team_members")
    logger.info(f"Team member {member_id} removed by user {current_user.id}")


# ==================== Team Member Payments ====================

async def check_payment_links(db: AsyncSession, user: User, team_member_id: Optional[int], project_id: Optional[int]):
    if team_member_id is not None:
        await get_owned_or_404(db, "team_members", team_member_id, user.id, "Team member")
    if project_id is not None:
        await get_owned_or_404(db, "projects", project_id, user.id, "Project")


@router.get("/payments", response_model=List[TeamMemberPaymentOut])
async def list_team_payments(
    team_member_id: Optional[int] = Query(None),
    current_user: User = Depends(require_access(Resource.TEAM_PAYMENT)),
    db: AsyncSession = Depends(get_db)
):
    criteria = [TeamMemberPayment.team_member_id == team_member_id] if team_member_id is not None else []
    return await list_owned(db, "team_payments", current_user.id, *criteria)


@router.post("/payments", response_model=TeamMemberPaymentOut, status_code=status.HTTP_201_CREATED)
async def create_team_payment(
    payment_in: TeamMemberPaymentCreate,
    current_user: User = Depends(require_access(Resource.TEAM_PAYMENT)),
    db: AsyncSession = Depends(get_db)
):
    await check_payment_links(db, current_user, payment_in.team_member_id, payment_in.project_id)
    payment = TeamMemberPayment(user_id=current_user.id, **payment_in.model_dump())
    db.add(payment)
    await commit(db, "team_payments")
    await db.refresh(payment)
    return payment


@router.put("/payments/{payment_id}", response_model=TeamMemberPaymentOut)
async def update_team_payment(
    payment_id: int,
    payment_in: TeamMemberPaymentUpdate,
    current_user: User = Depends(require_access(Resource.TEAM_PAYMENT)),
    db: AsyncSession = Depends(get_db)
):
    payment = await get_owned_or_404(db, "team_payments", payment_id, current_user.id, "Team payment")
    changes = payment_in.model_dump(exclude_unset=True)
    await check_payment_links(db, current_user, changes.get("team_member_id"), changes.get("project_id"))
    for field, value in changes.items():
        if value is None and field in ("team_member_id", "amount", "date"):
            continue
        setattr(payment, field, value)
    await commit(db, "team_payments")
    await db.refresh(payment)
    return payment


@router.delete("/payments/{payment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_team_payment(
    payment_id: int,
    current_user: User = Depends(require_access(Resource.TEAM_PAYMENT)),
    db: AsyncSession = Depends(get_db)
):
    payment = await get_owned_or_404(db, "team_payments", payment_id, current_user.id, "Team payment")
    await db.delete(payment)
    await commit(db, "team_payments")
