"""
Pydantic schemas for agency team members and the payments made to them.
"""

import datetime as dt
from typing import Optional
from pydantic import BaseModel, EmailStr, Field


class TeamMemberBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    role: str = Field(..., min_length=1, max_length=100)


class TeamMemberCreate(TeamMemberBase):
    pass


class TeamMemberUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    role: Optional[str] = Field(None, min_length=1, max_length=100)


class TeamMemberOut(TeamMemberBase):
    id: int
    user_id: int
    email: str
    created_at: dt.datetime
    updated_at: Optional[dt.datetime] = None

    class Config:
        from_attributes = True


class TeamMemberPaymentCreate(BaseModel):
    team_member_id: int
    amount: float = Field(..., gt=0)
    date: dt.date
    notes: Optional[str] = None
    project_id: Optional[int] = None


class TeamMemberPaymentUpdate(BaseModel):
    team_member_id: Optional[int] = None
    amount: Optional[float] = Field(None, gt=0)
    date: Optional[dt.date] = None
    notes: Optional[str] = None
    project_id: Optional[int] = None


class TeamMemberPaymentOut(BaseModel):
    id: int
    user_id: int
    team_member_id: int
    amount: float
    date: dt.date
    notes: Optional[str] = None
    project_id: Optional[int] = None
    created_at: dt.datetime
    updated_at: Optional[dt.datetime] = None

    class Config:
        from_attributes = True
