"""
Pydantic schemas for agency investments.

UPI payments need the UPI id and transaction id; that rule lives here, on
the request schemas, and is not enforced by the database.
"""

import datetime as dt
from typing import Literal, Optional
from pydantic import BaseModel, Field, model_validator

PaymentMethod = Literal["upi", "cash", "card"]


class InvestmentBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    amount: float = Field(..., gt=0)
    date: dt.date
    payment_method: PaymentMethod
    upi_id: Optional[str] = Field(None, max_length=100)
    transaction_id: Optional[str] = Field(None, max_length=100)
    notes: Optional[str] = None


class InvestmentCreate(InvestmentBase):

    @model_validator(mode="after")
    def check_upi_details(self):
        if self.payment_method == "upi" and not (self.upi_id and self.transaction_id):
            raise ValueError("UPI ID and transaction ID are required for UPI payments")
        return self


class InvestmentUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    amount: Optional[float] = Field(None, gt=0)
    date: Optional[dt.date] = None
    payment_method: Optional[PaymentMethod] = None
    upi_id: Optional[str] = Field(None, max_length=100)
    transaction_id: Optional[str] = Field(None, max_length=100)
    notes: Optional[str] = None

    @model_validator(mode="after")
    def check_upi_details(self):
        if self.payment_method == "upi" and not (self.upi_id and self.transaction_id):
            raise ValueError("UPI ID and transaction ID are required for UPI payments")
        return self


class InvestmentOut(InvestmentBase):
    id: int
    user_id: int
    created_at: dt.datetime
    updated_at: Optional[dt.datetime] = None

    class Config:
        from_attributes = True
