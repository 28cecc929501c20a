"""
Project endpoints.

Status rules:
- completed_date only lives while a project is completed; it defaults to
  today when the status becomes completed and is cleared otherwise.
- Entering active, completed or on-hold fires the matching email event.
- team_members (up to 3 team member ids) is for agency accounts only.
"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import get_db, require_access
from app.core.logging import get_logger
from app.core.permissions import Resource, has_access
from app.crud.owned import commit, get_owned_or_404, list_owned, owned_ids
from app.models.project import Project
from app.models.user import User
from app.schemas.project import ProjectCreate, ProjectOut, ProjectUpdate
from app.services.email import trigger_email_event

router = APIRouter()
logger = get_logger(__name__)

STATUS_EVENTS = {
    "active": "PROJECT_STARTED",
    "completed": "PROJECT_COMPLETED",
    "on-hold": "PROJECT_ON_HOLD",
}


async def check_team_members(db: AsyncSession, user: User, team_members: Optional[List[int]]):
    if not team_members:
        return
    if not has_access(user.user_type, Resource.TEAM_MEMBER):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Only agency accounts can assign team members")
    unknown = set(team_members) - await owned_ids(db, "team_members", user.id, team_members)
    if unknown:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Unknown team members: {sorted(unknown)}")


def apply_completed_date(project: Project, explicit: Optional[date] = None):
    if project.status == "completed":
        project.completed_date = explicit or project.completed_date or date.today()
    else:
        project.completed_date = None


async def notify_status(db: AsyncSession, user: User, out: ProjectOut, client_name: str, client_email: Optional[str]):
    event = STATUS_EVENTS.get(out.status)
    if event is None:
        return
    await trigger_email_event(
        db,
        user,
        event,
        {"client_name": client_name, "project_name": out.name},
        client_email,
    )


@router.get("", response_model=List[ProjectOut])
async def list_projects(
    client_id: Optional[int] = Query(None),
    current_user: User = Depends(require_access(Resource.PROJECT)),
    db: AsyncSession = Depends(get_db)
):
    criteria = [Project.client_id == client_id] if client_id is not None else []
    return await list_owned(db, "projects", current_user.id, *criteria)


@router.post("", response_model=ProjectOut, status_code=status.HTTP_201_CREATED)
async def create_project(
    project_in: ProjectCreate,
    current_user: User = Depends(require_access(Resource.PROJECT)),
    db: AsyncSession = Depends(get_db)
):
    client = await get_owned_or_404(db, "clients", project_in.client_id, current_user.id, "Client")
    await check_team_members(db, current_user, project_in.team_members)

    project = Project(user_id=current_user.id, **project_in.model_dump(exclude={"completed_date"}))
    apply_completed_date(project, project_in.completed_date)
    db.add(project)
    await commit(db, "projects")
    await db.refresh(project)
    logger.info(f"Project {project.id} created for client {client.id}")

    out = ProjectOut.model_validate(project)
    await notify_status(db, current_user, out, client.name, client.email)
    return out


@router.get("/{project_id}", response_model=ProjectOut)
async def get_project(
    project_id: int,
    current_user: User = Depends(require_access(Resource.PROJECT)),
    db: AsyncSession = Depends(get_db)
):
    return await get_owned_or_404(db, "projects", project_id, current_user.id, "Project")


@router.put("/{project_id}", response_model=ProjectOut)
async def update_project(
    project_id: int,
    project_in: ProjectUpdate,
    current_user: User = Depends(require_access(Resource.PROJECT)),
    db: AsyncSession = Depends(get_db)
):
    project = await get_owned_or_404(db, "projects", project_id, current_user.id, "Project")
    changes = project_in.model_dump(exclude_unset=True)

    if changes.get("client_id") is not None:
        await get_owned_or_404(db, "clients", changes["client_id"], current_user.id, "Client")
    if "team_members" in changes:
        await check_team_members(db, current_user, changes["team_members"])

    previous_status = project.status
    explicit_completed = changes.pop("completed_date", None)
    for field, value in changes.items():
        if field in ("name", "status", "client_id", "total_amount") and value is None:
            continue
        setattr(project, field, value)
    apply_completed_date(project, explicit_completed)

    await commit(db, "projects")
    await db.refresh(project)

    out = ProjectOut.model_validate(project)
    if out.status != previous_status:
        logger.info(f"Project {project.id} status {previous_status} -> {out.status}")
        client = await get_owned_or_404(db, "clients", out.client_id, current_user.id, "Client")
        await notify_status(db, current_user, out, client.name, client.email)
    return out


@router.post("/{project_id}/reminder/dismiss", response_model=ProjectOut)
async def dismiss_reminder(
    project_id: int,
    current_user: User = Depends(require_access(Resource.PROJECT)),
    db: AsyncSession = Depends(get_db)
):
    project = await get_owned_or_404(db, "projects", project_id, current_user.id, "Project")
    project.reminder_date = None
    await commit(db, "projects")
    await db.refresh(project)
    return project


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_project(
    project_id: int,
    current_user: User = Depends(require_access(Resource.PROJECT)),
    db: AsyncSession = Depends(get_db)
):
    """Delete a project and its payments; team payments linked to it are unlinked."""
    project = await get_owned_or_404(db, "projects", project_id, current_user.id, "Project")
    await db.delete(project)
    await commit(db, "projects")
    logger.info(f"Project {project_id} deleted by user {current_user.id}")
