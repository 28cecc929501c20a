from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, Float, ForeignKey, DateTime, Date, JSON
from sqlalchemy.orm import relationship
from app.db.base import Base


class Project(Base):
    """
    Billable work for a client.

    Attributes:
        status: 'active', 'completed', 'on-hold' or 'cancelled'
        total_amount: Agreed project value (currency-agnostic)
        completed_date: Only set while status is 'completed'
        reminder_date: Follow-up date; cleared when the reminder is dismissed
        team_members: Ordered list of up to 3 TeamMember ids (agency only)
    """
    __tablename__ = "projects"

    id = Column(Integer, primary_key=True, index=True)
    client_id = Column(Integer, ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    status = Column(String(20), nullable=False, default="active", index=True)
    deadline = Column(Date, nullable=True)
    total_amount = Column(Float, nullable=False, default=0)
    reminder_date = Column(Date, nullable=True)
    completed_date = Column(Date, nullable=True)
    team_members = Column(JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), index=True)
    updated_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    client = relationship("Client", back_populates="projects")
    payments = relationship("Payment", back_populates="project", cascade="all, delete-orphan", passive_deletes=True)

    def __repr__(self):
        return f"<Project(id={self.id}, name='{self.name}', status='{self.status}')>"
