"""
Lead endpoints: the leads board with status filter and tally, and CSV import.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile, status
from sqlalchemy import or_
from sqlalchemy.ext.asyncio import AsyncSession

from app.analytics import lead_status_counts
from app.api.dependencies import get_db, require_access
from app.core.logging import get_logger
from app.core.permissions import Resource
from app.crud.owned import commit, get_owned_or_404, list_owned
from app.models.lead import Lead
from app.models.user import User
from app.schemas.lead import LeadCreate, LeadImportOut, LeadOut, LeadStatus, LeadStatusCountsOut, LeadUpdate
from app.services.leads import LeadImportError, parse_lead_rows

router = APIRouter()
logger = get_logger(__name__)


@router.get("", response_model=List[LeadOut])
async def list_leads(
    status_filter: Optional[LeadStatus] = Query(None, alias="status"),
    q: Optional[str] = Query(None, max_length=100, description="Matches name, email, company or phone"),
    current_user: User = Depends(require_access(Resource.LEAD)),
    db: AsyncSession = Depends(get_db)
):
    criteria = []
    if status_filter is not None:
        criteria.append(Lead.status == status_filter)
    if q:
        pattern = f"%{q.strip()}%"
        criteria.append(or_(
            Lead.name.ilike(pattern),
            Lead.email.ilike(pattern),
            Lead.company.ilike(pattern),
            Lead.phone.ilike(pattern),
        ))
    return await list_owned(db, "leads", current_user.id, *criteria)


@router.get("/stats", response_model=LeadStatusCountsOut)
async def get_lead_stats(
    current_user: User = Depends(require_access(Resource.LEAD)),
    db: AsyncSession = Depends(get_db)
):
    """Leads per status over the whole board."""
    leads = await list_owned(db, "leads", current_user.id)
    return LeadStatusCountsOut.model_validate(lead_status_counts(leads))


@router.post("", response_model=LeadOut, status_code=status.HTTP_201_CREATED)
async def create_lead(
    lead_in: LeadCreate,
    current_user: User = Depends(require_access(Resource.LEAD)),
    db: AsyncSession = Depends(get_db)
):
    lead = Lead(user_id=current_user.id, **lead_in.model_dump())
    db.add(lead)
    await commit(db, "leads")
    await db.refresh(lead)
    return lead


@router.post("/import", response_model=LeadImportOut, status_code=status.HTTP_201_CREATED)
async def import_leads(
    file: UploadFile = File(..., description="CSV with a header row: name*, email, phone, company, source, status, notes"),
    current_user: User = Depends(require_access(Resource.LEAD)),
    db: AsyncSession = Depends(get_db)
):
    try:
        content = (await file.read()).decode("utf-8-sig")
        rows, skipped = parse_lead_rows(content)
    except UnicodeDecodeError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Could not parse the file. Please upload a valid .csv file.")
    except LeadImportError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    db.add_all([Lead(user_id=current_user.id, **row) for row in rows])
    await commit(db, "leads")
    logger.info(f"Imported {len(rows)} leads for user {current_user.id} ({skipped} rows skipped)")
    return LeadImportOut(imported=len(rows), skipped=skipped)


@router.get("/{lead_id}", response_model=LeadOut)
async def get_lead(
    lead_id: int,
    current_user: User = Depends(require_access(Resource.LEAD)),
    db: AsyncSession = Depends(get_db)
):
    return await get_owned_or_404(db, "leads", lead_id, current_user.id, "Lead")


@router.put("/{lead_id}", response_model=LeadOut)
async def update_lead(
    lead_id: int,
    lead_in: LeadUpdate,
    current_user: User = Depends(require_access(Resource.LEAD)),
    db: AsyncSession = Depends(get_db)
):
    lead = await get_owned_or_404(db, "leads", lead_id, current_user.id, "Lead")
    for field, value in lead_in.model_dump(exclude_unset=True).items():
        if field in ("name", "status") and value is None:
            continue
        setattr(lead, field, value)
    await commit(db, "leads")
    await db.refresh(lead)
    return lead


@router.delete("/{lead_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_lead(
    lead_id: int,
    current_user: User = Depends(require_access(Resource.LEAD)),
    db: AsyncSession = Depends(get_db)
):
    lead = await get_owned_or_404(db, "leads", lead_id, current_user.id, "Lead")
    await db.delete(lead)
    await commit(db, "leads")
