"""
Render invoice HTML.

All four templates go through one Jinja2 template; the theme decides the
look. Autoescaping is on, so client names, notes and other user text can
never inject markup into the document.
"""

import time
from datetime import date, datetime
from pathlib import Path
from typing import Iterable, List, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from app.analytics.dates import as_date
from app.core.config import settings
from app.invoices.themes import THEMES, get_theme
from app.schemas.invoice import InvoiceClient, InvoiceData, InvoiceItem, InvoiceProject, InvoiceTemplateInfo


def format_money(amount, symbol: Optional[str] = None) -> str:
    """₹1,234 style; fractional amounts keep up to two decimals."""
    symbol = settings.CURRENCY_SYMBOL if symbol is None else symbol
    amount = float(amount or 0)
    if amount == int(amount):
        text = f"{int(amount):,}"
    else:
        text = f"{amount:,.2f}".rstrip("0").rstrip(".")
    return f"{symbol}{text}"


def format_invoice_date(value) -> str:
    day = as_date(value)
    return day.strftime("%b %d, %Y") if day else ""


def format_payment_type(value: Optional[str], uppercase: bool = False) -> str:
    if not value:
        return "-"
    return value.upper() if uppercase else value.capitalize()


TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

_env = Environment(
    loader=FileSystemLoader(TEMPLATES_DIR),
    autoescape=select_autoescape(["html"]),
    trim_blocks=True,
    lstrip_blocks=True,
)
_env.filters["money"] = format_money
_env.filters["invoice_date"] = format_invoice_date
_env.filters["payment_type"] = format_payment_type


def issuer_details(profile) -> dict:
    """
    Company block of the invoice: agency details for agency accounts,
    personal details otherwise.
    """
    if getattr(profile, "user_type", None) == "agency":
        name = profile.agency_name or profile.name or ""
        lines = [profile.agency_address, profile.agency_phone, profile.agency_email, profile.agency_website]
    else:
        name = getattr(profile, "name", None) or ""
        lines = [getattr(profile, "email", None), getattr(profile, "phone", None), getattr(profile, "location", None)]
    return {
        "name": name,
        "lines": [line for line in lines if line],
        "gstin": getattr(profile, "gstin", None),
    }


def render_invoice(invoice: InvoiceData, profile, template_id: str = "classic") -> str:
    """
    Render `invoice` as a standalone HTML document.

    Args:
        invoice: Invoice data (numbers, snapshots, line items, totals)
        profile: The issuing user; any object with the profile attributes
        template_id: 'classic', 'minimal', 'professional' or 'elegant';
            anything else renders classic

    Returns:
        HTML string
    """
    theme = get_theme(template_id)
    footer_lines = [line.format(app_name=settings.APP_NAME) for line in theme.footer_lines]
    return _env.get_template("invoice.html").render(
        invoice=invoice,
        issuer=issuer_details(profile),
        theme=theme,
        footer_lines=footer_lines,
    )


def list_templates() -> List[InvoiceTemplateInfo]:
    return [
        InvoiceTemplateInfo(id=theme.id, name=theme.name, description=theme.description, preview=theme.preview)
        for theme in THEMES.values()
    ]


def invoice_number(payment_id: int, now: Optional[datetime] = None) -> str:
    """INV-<payment id zero-padded to 8>-<last 6 digits of the epoch seconds>."""
    seconds = int(now.timestamp()) if now else int(time.time())
    return f"INV-{int(payment_id):08d}-{str(seconds)[-6:]}"


def build_payment_invoice(payment, project, client, project_payments: Iterable, now: Optional[datetime] = None) -> InvoiceData:
    """
    Invoice for a single payment. Totals cover every payment of the
    project, so the document shows what is still owed after this one.
    """
    paid = sum((p.amount or 0) for p in project_payments)
    total = project.total_amount or 0
    return InvoiceData(
        invoice_number=invoice_number(payment.id, now),
        invoice_date=as_date(payment.date) or date.today(),
        client=InvoiceClient(name=client.name, email=client.email, phone=client.phone),
        project=InvoiceProject(name=project.name, status=project.status, deadline=project.deadline),
        items=[
            InvoiceItem(
                description=f"Payment for: {project.name}",
                amount=payment.amount,
                date=payment.date,
                payment_type=payment.payment_type,
            )
        ],
        total_amount=total,
        paid_amount=paid,
        pending_amount=total - paid,
        notes=payment.notes,
    )
