"""
Pydantic schemas for leads.
"""

from datetime import datetime
from typing import Literal, Optional
from pydantic import BaseModel, EmailStr, Field

LeadStatus = Literal["new", "contacted", "qualified", "converted", "lost"]


class LeadBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=30)
    company: Optional[str] = Field(None, max_length=255)
    source: Optional[str] = Field(None, max_length=100)
    status: LeadStatus = "new"
    notes: Optional[str] = None


class LeadCreate(LeadBase):
    pass


class LeadUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=30)
    company: Optional[str] = Field(None, max_length=255)
    source: Optional[str] = Field(None, max_length=100)
    status: Optional[LeadStatus] = None
    notes: Optional[str] = None


class LeadOut(LeadBase):
    id: int
    user_id: int
    # Imported emails are stored as given
    email: Optional[str] = None
    status: str
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class LeadStatusCountsOut(BaseModel):
    new: int
    contacted: int
    qualified: int
    converted: int
    lost: int
    total: int

    class Config:
        from_attributes = True


class LeadImportOut(BaseModel):
    imported: int
    skipped: int
