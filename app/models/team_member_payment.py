from datetime import datetime, timezone
from sqlalchemy import Column, Integer, Float, ForeignKey, DateTime, Date, Text
from sqlalchemy.orm import relationship
from app.db.base import Base


class TeamMemberPayment(Base):
    """
    Money paid by an agency to one of its team members, optionally linked to
    a project. Unlike client payments these can be edited.
    """
    __tablename__ = "team_member_payments"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    team_member_id = Column(Integer, ForeignKey("team_members.id", ondelete="CASCADE"), nullable=False, index=True)
    project_id = Column(Integer, ForeignKey("projects.id", ondelete="SET NULL"), nullable=True)
    amount = Column(Float, nullable=False)
    date = Column(Date, nullable=False, index=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    team_member = relationship("TeamMember", back_populates="payments")

    def __repr__(self):
        return f"<TeamMemberPayment(id={self.id}, team_member_id={self.team_member_id}, amount={self.amount})>"
