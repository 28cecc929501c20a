"""
Invoice endpoints: template catalog, HTML rendering and emailing.
"""

from datetime import datetime, timezone
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import HTMLResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import get_db, require_access
from app.core.logging import get_logger
from app.core.permissions import Resource
from app.crud.owned import get_owned_or_404, list_owned
from app.invoices import build_payment_invoice, list_templates, render_invoice
from app.models.payment import Payment
from app.models.user import User
from app.schemas.invoice import InvoiceData, InvoiceEmailRequest, InvoiceTemplateInfo
from app.services.email import EmailAutomationDisabled, queue_invoice_email, schedule_queue_flush

router = APIRouter()
logger = get_logger(__name__)


async def payment_invoice(db: AsyncSession, user: User, payment_id: int) -> InvoiceData:
    payment = await get_owned_or_404(db, "payments", payment_id, user.id, "Payment")
    project = await get_owned_or_404(db, "projects", payment.project_id, user.id, "Project")
    client = await get_owned_or_404(db, "clients", project.client_id, user.id, "Client")
    project_payments = await list_owned(db, "payments", user.id, Payment.project_id == project.id)
    return build_payment_invoice(payment, project, client, project_payments, datetime.now(timezone.utc))


@router.get("/templates", response_model=List[InvoiceTemplateInfo])
async def get_templates(current_user: User = Depends(require_access(Resource.INVOICE))):
    return list_templates()


@router.get("/payments/{payment_id}", response_class=HTMLResponse)
async def get_payment_invoice(
    payment_id: int,
    template: str = Query("classic", description="classic, minimal, professional or elegant"),
    current_user: User = Depends(require_access(Resource.INVOICE)),
    db: AsyncSession = Depends(get_db)
):
    invoice = await payment_invoice(db, current_user, payment_id)
    return HTMLResponse(content=render_invoice(invoice, current_user, template))


@router.post("/payments/{payment_id}/email", status_code=status.HTTP_202_ACCEPTED)
async def email_payment_invoice(
    payment_id: int,
    email_in: InvoiceEmailRequest,
    current_user: User = Depends(require_access(Resource.INVOICE)),
    db: AsyncSession = Depends(get_db)
):
    """Queue the invoice for a payment to be emailed to the client."""
    invoice = await payment_invoice(db, current_user, payment_id)
    recipient = email_in.to or invoice.client.email
    if not recipient:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Client has no email address")

    try:
        item = await queue_invoice_email(
            db,
            current_user,
            invoice,
            recipient,
            template_id=email_in.template,
            subject=email_in.subject,
            message=email_in.message,
        )
    except EmailAutomationDisabled as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    try:
        schedule_queue_flush()
    except Exception as e:
        # The periodic run still picks the email up
        logger.warning(f"Could not schedule queue flush for invoice {invoice.invoice_number}: {e}")

    return {"queued": True, "queue_id": item.id, "invoice_number": invoice.invoice_number, "to": recipient}
