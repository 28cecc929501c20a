from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, ForeignKey, DateTime
from sqlalchemy.orm import relationship
from app.db.base import Base


class TeamMember(Base):
    """
    Staff of an agency account. Not a login; just a payee that can be
    staffed on projects.
    """
    __tablename__ = "team_members"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    role = Column(String(100), nullable=False)  # free text, e.g. 'Designer'
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    payments = relationship("TeamMemberPayment", back_populates="team_member", cascade="all, delete-orphan", passive_deletes=True)

    def __repr__(self):
        return f"<TeamMember(id={self.id}, name='{self.name}', role='{self.role}')>"
