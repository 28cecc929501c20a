"""
Invoice data contract shared by all invoice templates.
"""

import datetime as dt
from typing import List, Optional
from pydantic import BaseModel


class InvoiceClient(BaseModel):
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None


class InvoiceProject(BaseModel):
    name: str
    status: str
    deadline: Optional[dt.date] = None


class InvoiceItem(BaseModel):
    description: str
    amount: float
    date: Optional[dt.date] = None
    payment_type: Optional[str] = None


class InvoiceData(BaseModel):
    invoice_number: str
    invoice_date: dt.date
    client: InvoiceClient
    project: InvoiceProject
    items: List[InvoiceItem]
    total_amount: float
    paid_amount: float
    pending_amount: float
    notes: Optional[str] = None


class InvoiceTemplateInfo(BaseModel):
    id: str
    name: str
    description: str
    preview: str


class InvoiceEmailRequest(BaseModel):
    """Send the invoice to the client's email unless `to` overrides it"""
    template: str = "classic"
    to: Optional[str] = None
    subject: Optional[str] = None
    message: Optional[str] = None
