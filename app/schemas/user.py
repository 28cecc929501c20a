"""
Pydantic schemas for accounts and onboarding profiles.
"""

from datetime import datetime
from typing import Literal, Optional
from pydantic import BaseModel, EmailStr, Field

UserTypeLiteral = Literal["freelancer", "agency", "business"]
PlanLiteral = Literal["free", "pro", "agency"]


class UserCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=6)


class UserOut(BaseModel):
    id: int
    name: Optional[str] = None
    email: EmailStr
    plan: str
    user_type: Optional[str] = None
    profile_complete: bool

    class Config:
        from_attributes = True


class ProfileUpdate(BaseModel):
    """
    Onboarding / profile edit. Only the fields sent are changed; choosing a
    user type completes the profile.
    """
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    user_type: Optional[UserTypeLiteral] = None
    photo_url: Optional[str] = Field(None, max_length=500)
    gstin: Optional[str] = Field(None, max_length=20)

    phone: Optional[str] = Field(None, max_length=30)
    location: Optional[str] = Field(None, max_length=255)
    bio: Optional[str] = None

    agency_name: Optional[str] = Field(None, max_length=255)
    agency_phone: Optional[str] = Field(None, max_length=30)
    agency_email: Optional[EmailStr] = None
    agency_address: Optional[str] = None
    agency_website: Optional[str] = Field(None, max_length=255)
    agency_description: Optional[str] = None
    number_of_employees: Optional[str] = Field(None, max_length=20)

    business_name: Optional[str] = Field(None, max_length=255)
    business_phone: Optional[str] = Field(None, max_length=30)
    business_email: Optional[EmailStr] = None
    business_address: Optional[str] = None
    business_type: Optional[str] = Field(None, max_length=100)


class ProfileOut(BaseModel):
    id: int
    name: Optional[str] = None
    email: EmailStr
    plan: PlanLiteral
    user_type: Optional[UserTypeLiteral] = None
    profile_complete: bool
    photo_url: Optional[str] = None
    avatar_url: Optional[str] = None
    gstin: Optional[str] = None

    phone: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None

    agency_name: Optional[str] = None
    agency_phone: Optional[str] = None
    agency_email: Optional[str] = None
    agency_address: Optional[str] = None
    agency_website: Optional[str] = None
    agency_description: Optional[str] = None
    number_of_employees: Optional[str] = None

    business_name: Optional[str] = None
    business_phone: Optional[str] = None
    business_email: Optional[str] = None
    business_address: Optional[str] = None
    business_type: Optional[str] = None

    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
