"""
Pydantic schemas for email automation.
"""

from datetime import datetime
from typing import List, Literal, Optional
from pydantic import BaseModel, EmailStr, Field

EmailEventLiteral = Literal[
    "CLIENT_CREATED",
    "PROJECT_STARTED",
    "PROJECT_COMPLETED",
    "PROJECT_ON_HOLD",
    "INVOICE_CREATED",
    "INVOICE_OVERDUE",
    "PAYMENT_RECEIVED",
]


class EmailSettingsUpdate(BaseModel):
    enabled: bool
    from_name: str = Field(..., min_length=1, max_length=255)
    reply_to: EmailStr


class EmailSettingsOut(BaseModel):
    enabled: bool
    from_name: str
    reply_to: str

    class Config:
        from_attributes = True


class EmailTemplateCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    subject: str = Field(..., min_length=1, max_length=500)
    body: str = Field(..., min_length=1)
    event: EmailEventLiteral
    variables: List[str] = []


class EmailTemplateOut(BaseModel):
    id: int
    name: str
    subject: str
    body: str
    event: str
    variables: List[str]
    created_at: datetime

    class Config:
        from_attributes = True


class AutomationRuleCreate(BaseModel):
    event: EmailEventLiteral
    template_id: int
    delay: int = Field(0, ge=0, description="Minutes to wait before sending")
    enabled: bool = True


class AutomationRuleUpdate(BaseModel):
    event: Optional[EmailEventLiteral] = None
    template_id: Optional[int] = None
    delay: Optional[int] = Field(None, ge=0)
    enabled: Optional[bool] = None


class AutomationRuleOut(BaseModel):
    id: int
    event: str
    template_id: int
    delay: int
    enabled: bool
    created_at: datetime

    class Config:
        from_attributes = True


class EmailLogOut(BaseModel):
    id: int
    to: str
    subject: str
    template_name: Optional[str] = None
    event: Optional[str] = None
    status: str
    error: Optional[str] = None
    sent_at: datetime

    class Config:
        from_attributes = True


class QueueRunOut(BaseModel):
    processed: int
    sent: int
    failed: int
    retried: int
