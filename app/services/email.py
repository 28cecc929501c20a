"""
Email automation: event triggers, the outbound queue and SMTP delivery.

Triggers are best effort. They run after the primary write has been
committed, catch every failure and only log it, so a broken mail setup can
never block or undo creating a client or updating a project.
"""

import asyncio
import html
import smtplib
from datetime import datetime, timedelta, timezone
from email.mime.application import MIMEApplication
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr
from typing import Callable, Dict, List, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.logging import capture_error, get_logger
from app.core.permissions import Resource, has_access
from app.invoices.renderer import format_invoice_date, format_money, render_invoice
from app.models.email import AutomationRule, EmailLog, EmailQueueItem, EmailSettings, EmailTemplate
from app.models.user import User
from app.schemas.invoice import InvoiceData
from app.services.email_templates import DEFAULT_TEMPLATES, replace_variables, single_line

logger = get_logger(__name__)

# (filename, content, mime subtype)
Attachment = Tuple[str, bytes, str]


class EmailNotConfigured(Exception):
    """SMTP credentials are missing."""


class EmailAutomationDisabled(Exception):
    """The account has no email settings, or they are switched off."""


def agency_display_name(user: User, email_settings: Optional[EmailSettings] = None) -> str:
    if user.agency_name:
        return user.agency_name
    if email_settings is not None and email_settings.from_name:
        return email_settings.from_name
    return user.name or ""


def send_email(
    to: str,
    subject: str,
    html_body: str,
    from_name: str,
    reply_to: Optional[str] = None,
    attachments: Optional[List[Attachment]] = None,
):
    """
    Send one HTML email over SMTP (STARTTLS).

    The From address is always the configured sender; `from_name` is the
    display name and replies go to `reply_to`.

    Raises:
        EmailNotConfigured: If SMTP credentials are not set
        smtplib.SMTPException / OSError: On delivery failure
    """
    if not settings.SMTP_USERNAME or not settings.SMTP_PASSWORD:
        raise EmailNotConfigured("Email service not configured")

    from_email = settings.SMTP_FROM_EMAIL or settings.SMTP_USERNAME

    msg = MIMEMultipart()
    msg["From"] = formataddr((from_name, from_email))
    msg["To"] = to
    msg["Subject"] = single_line(subject)
    if reply_to:
        msg["Reply-To"] = reply_to
    msg.attach(MIMEText(html_body, "html"))

    for filename, content, subtype in attachments or []:
        part = MIMEApplication(content, _subtype=subtype)
        part.add_header("Content-Disposition", "attachment", filename=filename)
        msg.attach(part)

    server = smtplib.SMTP(settings.SMTP_SERVER, settings.SMTP_PORT)
    try:
        server.starttls()
        server.login(settings.SMTP_USERNAME, settings.SMTP_PASSWORD)
        server.sendmail(from_email, [to], msg.as_string())
    finally:
        server.quit()
    logger.info(f"Email '{subject}' sent to {to}")


async def get_email_settings(db: AsyncSession, user_id: int) -> Optional[EmailSettings]:
    result = await db.execute(select(EmailSettings).filter(EmailSettings.user_id == user_id))
    return result.scalar_one_or_none()


async def seed_default_templates(db: AsyncSession, user_id: int) -> List[EmailTemplate]:
    """Create the default templates for an account that has none yet."""
    result = await db.execute(select(EmailTemplate.id).filter(EmailTemplate.user_id == user_id).limit(1))
    if result.scalar_one_or_none() is not None:
        return []

    templates = [EmailTemplate(user_id=user_id, **template) for template in DEFAULT_TEMPLATES]
    db.add_all(templates)
    await db.commit()
    logger.info(f"Seeded {len(templates)} default email templates for user {user_id}")
    return templates


def schedule_queue_flush():
    """Ask the worker to process the queue now."""
    from app.mycelery.worker import process_email_queue

    process_email_queue.delay()


async def trigger_email_event(
    db: AsyncSession,
    user: User,
    event: str,
    variables: Dict[str, str],
    recipient: Optional[str],
) -> int:
    """
    Queue one email per enabled automation rule for `event`.

    Returns the number of queued emails. Never raises: any failure is
    logged and reported as zero queued emails.
    """
    if not recipient or not has_access(user.user_type, Resource.EMAIL_AUTOMATION):
        return 0

    user_id = user.id
    try:
        email_settings = await get_email_settings(db, user_id)
        if email_settings is None or not email_settings.enabled:
            return 0

        result = await db.execute(
            select(AutomationRule, EmailTemplate)
            .join(EmailTemplate, EmailTemplate.id == AutomationRule.template_id)
            .filter(
                AutomationRule.user_id == user.id,
                AutomationRule.event == event,
                AutomationRule.enabled.is_(True),
                EmailTemplate.user_id == user.id,
            )
        )
        matches = result.all()
        if not matches:
            return 0

        variables = {"agency_name": agency_display_name(user, email_settings), **variables}
        now = datetime.now(timezone.utc)
        for rule, template in matches:
            db.add(EmailQueueItem(
                user_id=user.id,
                to=recipient,
                subject=single_line(replace_variables(template.subject, variables)),
                body=replace_variables(template.body, variables, escape=True),
                reply_to=email_settings.reply_to,
                from_name=email_settings.from_name,
                status="pending",
                send_at=now + timedelta(minutes=rule.delay or 0),
                template_name=template.name,
                event=event,
                email_type="template",
            ))
        await db.commit()
        logger.info(f"Queued {len(matches)} email(s) for {event} to {recipient}")

        schedule_queue_flush()
        return len(matches)
    except Exception as e:
        await db.rollback()
        capture_error(e, context={"email_event": {"event": event, "user_id": user_id}})
        return 0


def invoice_email_body(invoice: InvoiceData, from_name: str, message: Optional[str] = None) -> str:
    intro = message or (
        f"Please find attached the invoice for your project <strong>{invoice.project.name}</strong>."
    )
    return f"""
    <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
      <h2 style="color: #7e22ce;">Invoice {invoice.invoice_number}</h2>
      <p>Hi {invoice.client.name},</p>
      <p>{intro}</p>
      <p><strong>Invoice #:</strong> {invoice.invoice_number}<br>
      <strong>Amount:</strong> {format_money(invoice.total_amount)}<br>
      <strong>Date:</strong> {format_invoice_date(invoice.invoice_date)}</p>
      <p>Please review the attached invoice and let us know if you have any questions.</p>
      <p>Best regards,<br>{from_name}</p>
      <hr style="border: none; border-top: 1px solid #e5e7eb; margin: 20px 0;">
      <p style="font-size: 12px; color: #6b7280;">This is a transactional email from {from_name}</p>
    </div>
    """


async def queue_invoice_email(
    db: AsyncSession,
    user: User,
    invoice: InvoiceData,
    recipient: str,
    template_id: str = "classic",
    subject: Optional[str] = None,
    message: Optional[str] = None,
) -> EmailQueueItem:
    """
    Queue an invoice email. The invoice document itself is rendered when
    the queue is processed and attached as an HTML file.

    Raises:
        EmailAutomationDisabled: If the account's email settings are off
    """
    email_settings = await get_email_settings(db, user.id)
    if email_settings is None or not email_settings.enabled:
        raise EmailAutomationDisabled("Email automation not enabled")

    # Client-provided text goes into HTML
    safe_invoice = invoice.model_copy(deep=True)
    safe_invoice.client.name = _escape(invoice.client.name)
    safe_invoice.project.name = _escape(invoice.project.name)

    item = EmailQueueItem(
        user_id=user.id,
        to=recipient,
        subject=single_line(subject or f"Invoice {invoice.invoice_number} from {email_settings.from_name}"),
        body=invoice_email_body(safe_invoice, _escape(email_settings.from_name), _escape(message) if message else None),
        reply_to=email_settings.reply_to,
        from_name=email_settings.from_name,
        status="pending",
        send_at=datetime.now(timezone.utc),
        template_name="Invoice",
        event="INVOICE_CREATED",
        email_type="invoice",
        invoice_payload={"invoice": invoice.model_dump(mode="json"), "template": template_id},
    )
    db.add(item)
    await db.commit()
    await db.refresh(item)
    logger.info(f"Invoice {invoice.invoice_number} email queued for {recipient}")
    return item


def _escape(value: str) -> str:
    return html.escape(value or "")


def retry_delay(retry_count: int) -> timedelta:
    """Backoff before the next attempt: 15, 45, 135... minutes."""
    return timedelta(minutes=(3 ** retry_count) * 5)


async def _attachments_for(db: AsyncSession, item: EmailQueueItem) -> List[Attachment]:
    if item.email_type != "invoice" or not item.invoice_payload:
        return []
    invoice = InvoiceData.model_validate(item.invoice_payload["invoice"])
    result = await db.execute(select(User).filter(User.id == item.user_id))
    profile = result.scalar_one()
    document = render_invoice(invoice, profile, item.invoice_payload.get("template", "classic"))
    return [(f"Invoice-{invoice.invoice_number}.html", document.encode("utf-8"), "html")]


async def process_queue(
    db: AsyncSession,
    now: Optional[datetime] = None,
    sender: Callable = send_email,
) -> Dict[str, int]:
    """
    Send every pending email whose send time has come.

    A failed attempt bumps `retry_count` and reschedules the email; once
    EMAIL_MAX_RETRIES attempts have failed it is marked failed. Sent and
    finally-failed emails are written to the email log.
    """
    now = now or datetime.now(timezone.utc)
    result = await db.execute(
        select(EmailQueueItem)
        .filter(EmailQueueItem.status == "pending", EmailQueueItem.send_at <= now)
        .order_by(EmailQueueItem.send_at, EmailQueueItem.id)
    )
    items = result.scalars().all()
    stats = {"processed": len(items), "sent": 0, "failed": 0, "retried": 0}

    for item in items:
        try:
            attachments = await _attachments_for(db, item)
            await asyncio.to_thread(
                sender,
                item.to,
                item.subject,
                item.body,
                item.from_name or settings.APP_NAME,
                item.reply_to,
                attachments,
            )
        except Exception as e:
            error = str(e) or e.__class__.__name__
            logger.error(f"Email {item.id} to {item.to} failed: {error}")
            item.retry_count = (item.retry_count or 0) + 1
            item.error = error
            if item.retry_count < settings.EMAIL_MAX_RETRIES:
                item.send_at = now + retry_delay(item.retry_count)
                stats["retried"] += 1
            else:
                item.status = "failed"
                db.add(_log_entry(item, "failed", error))
                stats["failed"] += 1
        else:
            item.status = "sent"
            item.sent_at = now
            item.error = None
            db.add(_log_entry(item, "sent"))
            stats["sent"] += 1
        await db.commit()

    if items:
        logger.info(f"Email queue run: {stats}")
    return stats


def _log_entry(item: EmailQueueItem, status: str, error: Optional[str] = None) -> EmailLog:
    return EmailLog(
        user_id=item.user_id,
        to=item.to,
        subject=item.subject,
        template_name=item.template_name or "Email Template",
        event=item.event,
        status=status,
        error=error,
    )
