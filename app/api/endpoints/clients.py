"""
Client endpoints. Every operation is scoped to the authenticated owner.
"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import get_db, require_access
from app.core.logging import get_logger
from app.core.permissions import Resource
from app.crud.owned import commit, get_owned_or_404, list_owned
from app.models.client import Client
from app.models.project import Project
from app.models.user import User
from app.schemas.client import ClientCreate, ClientOut, ClientUpdate
from app.schemas.project import ProjectOut
from app.services.email import trigger_email_event

router = APIRouter()
logger = get_logger(__name__)


@router.get("", response_model=List[ClientOut])
async def list_clients(
    current_user: User = Depends(require_access(Resource.CLIENT)),
    db: AsyncSession = Depends(get_db)
):
    return await list_owned(db, "clients", current_user.id)


@router.post("", response_model=ClientOut, status_code=status.HTTP_201_CREATED)
async def create_client(
    client_in: ClientCreate,
    current_user: User = Depends(require_access(Resource.CLIENT)),
    db: AsyncSession = Depends(get_db)
):
    client = Client(user_id=current_user.id, **client_in.model_dump())
    db.add(client)
    await commit(db, "clients")
    await db.refresh(client)
    logger.info(f"Client {client.id} created by user {current_user.id}")

    out = ClientOut.model_validate(client)
    await trigger_email_event(
        db,
        current_user,
        "CLIENT_CREATED",
        {"client_name": out.name},
        out.email,
    )
    return out


@router.get("/{client_id}", response_model=ClientOut)
async def get_client(
    client_id: int,
    current_user: User = Depends(require_access(Resource.CLIENT)),
    db: AsyncSession = Depends(get_db)
):
    return await get_owned_or_404(db, "clients", client_id, current_user.id, "Client")


@router.get("/{client_id}/projects", response_model=List[ProjectOut])
async def list_client_projects(
    client_id: int,
    current_user: User = Depends(require_access(Resource.PROJECT)),
    db: AsyncSession = Depends(get_db)
):
    await get_owned_or_404(db, "clients", client_id, current_user.id, "Client")
    return await list_owned(db, "projects", current_user.id, Project.client_id == client_id)


@router.put("/{client_id}", response_model=ClientOut)
async def update_client(
    client_id: int,
    client_in: ClientUpdate,
    current_user: User = Depends(require_access(Resource.CLIENT)),
    db: AsyncSession = Depends(get_db)
):
    client = await get_owned_or_404(db, "clients", client_id, current_user.id, "Client")
    for field, value in client_in.model_dump(exclude_unset=True).items():
        setattr(client, field, value)
    await commit(db, "clients")
    await db.refresh(client)
    return client


@router.delete("/{client_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_client(
    client_id: int,
    current_user: User = Depends(require_access(Resource.CLIENT)),
    db: AsyncSession = Depends(get_db)
):
    """Delete a client together with its projects and their payments."""
    client = await get_owned_or_404(db, "clients", client_id, current_user.id, "Client")
    await db.delete(client)
    await commit(db, "clients")
    logger.info(f"Client {client_id} deleted by user {current_user.id}")
