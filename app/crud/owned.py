"""
Data access for owner-scoped records.

Every query filters on `user_id`, and every SQLAlchemy failure is translated
into the DataAccessError taxonomy here, so routers only deal with records,
HTTPException and the error types from app.core.errors.
"""

from typing import Dict, Iterable, List, Optional

from fastapi import HTTPException, Request, status
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import RequestCancelled, translate_db_error
from app.core.logging import get_logger
from app.models.client import Client
from app.models.investment import Investment
from app.models.lead import Lead
from app.models.payment import Payment
from app.models.project import Project
from app.models.team_member import TeamMember
from app.models.team_member_payment import TeamMemberPayment

logger = get_logger(__name__)

COLLECTIONS = {
    "clients": Client,
    "leads": Lead,
    "projects": Project,
    "payments": Payment,
    "team_members": TeamMember,
    "team_payments": TeamMemberPayment,
    "investments": Investment,
}

DEFAULT_ORDER = {
    "clients": Client.created_at.desc(),
    "leads": Lead.created_at.desc(),
    "projects": Project.created_at.desc(),
    "payments": Payment.date.desc(),
    "team_members": TeamMember.created_at.desc(),
    "team_payments": TeamMemberPayment.date.desc(),
    "investments": Investment.date.desc(),
}


async def list_owned(
    db: AsyncSession,
    collection: str,
    owner_id: int,
    *criteria,
) -> List:
    """All records of `collection` owned by `owner_id`, newest first."""
    model = COLLECTIONS[collection]
    query = select(model).filter(model.user_id == owner_id, *criteria).order_by(DEFAULT_ORDER[collection], model.id.desc())
    try:
        result = await db.execute(query)
    except SQLAlchemyError as e:
        raise translate_db_error(e, collection) from e
    return list(result.scalars().all())


async def get_owned(db: AsyncSession, collection: str, record_id: int, owner_id: int):
    model = COLLECTIONS[collection]
    try:
        result = await db.execute(select(model).filter(model.id == record_id, model.user_id == owner_id))
    except SQLAlchemyError as e:
        raise translate_db_error(e, collection) from e
    return result.scalar_one_or_none()


async def get_owned_or_404(db: AsyncSession, collection: str, record_id: int, owner_id: int, label: str):
    """
    Fetch an owned record or raise 404. Records of other owners are reported
    as missing, never as forbidden.
    """
    record = await get_owned(db, collection, record_id, owner_id)
    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{label} not found")
    return record


async def owned_ids(db: AsyncSession, collection: str, owner_id: int, ids: Iterable[int]) -> set:
    """Subset of `ids` that belong to `owner_id`."""
    ids = set(ids)
    if not ids:
        return set()
    model = COLLECTIONS[collection]
    try:
        result = await db.execute(select(model.id).filter(model.user_id == owner_id, model.id.in_(ids)))
    except SQLAlchemyError as e:
        raise translate_db_error(e, collection) from e
    return set(result.scalars().all())


async def load_collections(
    db: AsyncSession,
    owner_id: int,
    names: Iterable[str],
    request: Optional[Request] = None,
) -> Dict[str, List]:
    """
    Load several collections for one owner, one query each.

    When `request` is given, the client connection is checked before every
    load and RequestCancelled is raised once it is gone, so nothing is
    computed for a response nobody will read.
    """
    data = {}
    for name in names:
        if request is not None and await request.is_disconnected():
            logger.info(f"Client disconnected, skipping remaining loads from {name}")
            raise RequestCancelled()
        data[name] = await list_owned(db, name, owner_id)
    return data


async def commit(db: AsyncSession, collection: str):
    """Commit the unit of work, translating failures for `collection`."""
    try:
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        raise translate_db_error(e, collection) from e
