"""
Pydantic schemas for projects.
"""

from datetime import date, datetime
from typing import List, Literal, Optional
from pydantic import BaseModel, Field, field_validator

ProjectStatus = Literal["active", "completed", "on-hold", "cancelled"]

MAX_PROJECT_TEAM_MEMBERS = 3


def _check_team_members(value: Optional[List[int]]) -> Optional[List[int]]:
    if value is None:
        return value
    if len(value) > MAX_PROJECT_TEAM_MEMBERS:
        raise ValueError(f"A project can have at most {MAX_PROJECT_TEAM_MEMBERS} team members")
    if len(set(value)) != len(value):
        raise ValueError("Team members must be unique")
    return value


class ProjectBase(BaseModel):
    """Base schema for project with common fields"""
    name: str = Field(..., min_length=1, max_length=255)
    status: ProjectStatus = "active"
    deadline: Optional[date] = None
    total_amount: float = Field(0, ge=0)
    reminder_date: Optional[date] = None
    completed_date: Optional[date] = None
    team_members: Optional[List[int]] = None


class ProjectCreate(ProjectBase):
    client_id: int

    _team_members = field_validator("team_members")(_check_team_members)


class ProjectUpdate(BaseModel):
    client_id: Optional[int] = None
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    status: Optional[ProjectStatus] = None
    deadline: Optional[date] = None
    total_amount: Optional[float] = Field(None, ge=0)
    reminder_date: Optional[date] = None
    completed_date: Optional[date] = None
    team_members: Optional[List[int]] = None

    _team_members = field_validator("team_members")(_check_team_members)


class ProjectOut(ProjectBase):
    id: int
    client_id: int
    user_id: int
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
