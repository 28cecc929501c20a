"""
Email automation endpoints (agency accounts), plus the queue processing
hook for cron.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Header, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import get_db, require_access
from app.core.config import settings
from app.core.logging import get_logger
from app.core.permissions import Resource
from app.crud.owned import commit
from app.models.email import AutomationRule, EmailLog, EmailSettings, EmailTemplate
from app.models.user import User
from app.schemas.email import (
    AutomationRuleCreate,
    AutomationRuleOut,
    AutomationRuleUpdate,
    EmailLogOut,
    EmailSettingsOut,
    EmailSettingsUpdate,
    EmailTemplateCreate,
    EmailTemplateOut,
    QueueRunOut,
)
from app.services.email import get_email_settings, process_queue, seed_default_templates

router = APIRouter()
logger = get_logger(__name__)


async def owned_or_404(db: AsyncSession, model, record_id: int, user_id: int, label: str):
    result = await db.execute(select(model).filter(model.id == record_id, model.user_id == user_id))
    record = result.scalar_one_or_none()
    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{label} not found")
    return record


# ==================== Settings ====================

@router.get("/settings", response_model=EmailSettingsOut)
async def read_settings(
    current_user: User = Depends(require_access(Resource.EMAIL_AUTOMATION)),
    db: AsyncSession = Depends(get_db)
):
    email_settings = await get_email_settings(db, current_user.id)
    if email_settings is None:
        # Not configured yet: disabled, with the agency identity as a starting point
        return EmailSettingsOut(
            enabled=False,
            from_name=current_user.agency_name or current_user.name or "",
            reply_to=current_user.agency_email or current_user.email,
        )
    return email_settings


@router.put("/settings", response_model=EmailSettingsOut)
async def update_settings(
    settings_in: EmailSettingsUpdate,
    current_user: User = Depends(require_access(Resource.EMAIL_AUTOMATION)),
    db: AsyncSession = Depends(get_db)
):
    email_settings = await get_email_settings(db, current_user.id)
    if email_settings is None:
        email_settings = EmailSettings(user_id=current_user.id)
        db.add(email_settings)
    email_settings.enabled = settings_in.enabled
    email_settings.from_name = settings_in.from_name
    email_settings.reply_to = settings_in.reply_to
    await commit(db, "email_settings")
    await db.refresh(email_settings)
    logger.info(f"Email automation {'enabled' if email_settings.enabled else 'disabled'} for user {current_user.id}")
    return email_settings


# ==================== Templates ====================

@router.get("/templates", response_model=List[EmailTemplateOut])
async def list_templates(
    current_user: User = Depends(require_access(Resource.EMAIL_AUTOMATION)),
    db: AsyncSession = Depends(get_db)
):
    """List templates; the defaults are created on first access."""
    await seed_default_templates(db, current_user.id)
    result = await db.execute(
        select(EmailTemplate).filter(EmailTemplate.user_id == current_user.id).order_by(EmailTemplate.id)
    )
    return result.scalars().all()


@router.post("/templates", response_model=EmailTemplateOut, status_code=status.HTTP_201_CREATED)
async def create_template(
    template_in: EmailTemplateCreate,
    current_user: User = Depends(require_access(Resource.EMAIL_AUTOMATION)),
    db: AsyncSession = Depends(get_db)
):
    template = EmailTemplate(user_id=current_user.id, **template_in.model_dump())
    db.add(template)
    await commit(db, "email_templates")
    await db.refresh(template)
    return template


# ==================== Rules ====================

@router.get("/rules", response_model=List[AutomationRuleOut])
async def list_rules(
    current_user: User = Depends(require_access(Resource.EMAIL_AUTOMATION)),
    db: AsyncSession = Depends(get_db)
):
    result = await db.execute(
        select(AutomationRule).filter(AutomationRule.user_id == current_user.id).order_by(AutomationRule.id)
    )
    return result.scalars().all()


@router.post("/rules", response_model=AutomationRuleOut, status_code=status.HTTP_201_CREATED)
async def create_rule(
    rule_in: AutomationRuleCreate,
    current_user: User = Depends(require_access(Resource.EMAIL_AUTOMATION)),
    db: AsyncSession = Depends(get_db)
):
    await owned_or_404(db, EmailTemplate, rule_in.template_id, current_user.id, "Email template")
    rule = AutomationRule(user_id=current_user.id, **rule_in.model_dump())
    db.add(rule)
    await commit(db, "automation_rules")
    await db.refresh(rule)
    return rule


@router.put("/rules/{rule_id}", response_model=AutomationRuleOut)
async def update_rule(
    rule_id: int,
    rule_in: AutomationRuleUpdate,
    current_user: User = Depends(require_access(Resource.EMAIL_AUTOMATION)),
    db: AsyncSession = Depends(get_db)
):
    rule = await owned_or_404(db, AutomationRule, rule_id, current_user.id, "Automation rule")
    changes = rule_in.model_dump(exclude_unset=True, exclude_none=True)
    if "template_id" in changes:
        await owned_or_404(db, EmailTemplate, changes["template_id"], current_user.id, "Email template")
    for field, value in changes.items():
        setattr(rule, field, value)
    await commit(db, "automation_rules")
    await db.refresh(rule)
    return rule


@router.delete("/rules/{rule_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_rule(
    rule_id: int,
    current_user: User = Depends(require_access(Resource.EMAIL_AUTOMATION)),
    db: AsyncSession = Depends(get_db)
):
    rule = await owned_or_404(db, AutomationRule, rule_id, current_user.id, "Automation rule")
    await db.delete(rule)
    await commit(db, "automation_rules")


# ==================== Logs ====================

@router.get("/logs", response_model=List[EmailLogOut])
async def list_logs(
    limit: int = 100,
    current_user: User = Depends(require_access(Resource.EMAIL_AUTOMATION)),
    db: AsyncSession = Depends(get_db)
):
    result = await db.execute(
        select(EmailLog)
        .filter(EmailLog.user_id == current_user.id)
        .order_by(EmailLog.sent_at.desc(), EmailLog.id.desc())
        .limit(min(max(limit, 1), 500))
    )
    return result.scalars().all()


# ==================== Queue ====================

@router.post("/process-queue", response_model=QueueRunOut)
async def run_queue(
    authorization: Optional[str] = Header(None),
    db: AsyncSession = Depends(get_db)
):
    """
    Send due emails now. Meant for a cron job; when CRON_SECRET is set the
    caller must send it as a bearer token.
    """
    if settings.CRON_SECRET and authorization != f"Bearer {settings.CRON_SECRET}":
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    return await process_queue(db)
