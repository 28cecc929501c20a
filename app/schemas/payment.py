"""
Pydantic schemas for client payments.

Payments are created, listed and deleted; there is no update.
"""

import datetime as dt
from typing import Literal, Optional
from pydantic import BaseModel, Field


class PaymentCreate(BaseModel):
    project_id: int
    amount: float = Field(..., gt=0)
    date: dt.date
    notes: Optional[str] = None
    payment_type: Optional[Literal["advance", "partial", "final"]] = None
    payment_method: Optional[str] = Field(None, max_length=50)


class PaymentOut(BaseModel):
    id: int
    project_id: int
    user_id: int
    amount: float
    date: dt.date
    notes: Optional[str] = None
    payment_type: Optional[str] = None
    payment_method: Optional[str] = None
    created_at: dt.datetime

    class Config:
        from_attributes = True


class ProjectBalanceOut(BaseModel):
    """Paid and outstanding amounts of one project"""
    project_id: int
    project_name: str
    client_id: int
    total_amount: float
    paid: float
    pending: float  # signed, negative when overpaid
    pending_display: float  # clamped at zero
