"""
Profile and onboarding endpoints.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import get_current_user, get_db
from app.core.logging import get_logger
from app.crud.owned import commit
from app.models.user import User
from app.schemas.user import ProfileOut, ProfileUpdate
from app.services.avatar import avatar_url

router = APIRouter()
logger = get_logger(__name__)


def profile_out(user: User) -> ProfileOut:
    profile = ProfileOut.model_validate(user)
    profile.avatar_url = avatar_url(user.photo_url, user.email)
    return profile


@router.get("", response_model=ProfileOut)
async def get_profile(current_user: User = Depends(get_current_user)):
    return profile_out(current_user)


@router.put("", response_model=ProfileOut)
async def update_profile(
    profile_in: ProfileUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    Update the profile. Sending a user type completes onboarding; the
    details of the other account types are kept as they are.
    """
    for field, value in profile_in.model_dump(exclude_unset=True).items():
        setattr(current_user, field, value)

    if current_user.user_type and not current_user.profile_complete:
        current_user.profile_complete = True
        logger.info(f"User {current_user.id} completed onboarding as {current_user.user_type}")

    await commit(db, "users")
    await db.refresh(current_user)
    return profile_out(current_user)
