from sqlalchemy import Boolean, Column, Integer, String, DateTime, Text
from sqlalchemy.orm import relationship
from datetime import datetime, timezone
from app.db.base import Base


class User(Base):
    """
    Account and profile in one row.

    `profile_complete` stays False from registration until onboarding sets a
    user type and the type-specific details.
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password = Column(String(150), nullable=False)
    plan = Column(String(20), default="free", nullable=False)  # 'free', 'pro', 'agency'
    user_type = Column(String(20), nullable=True)  # 'freelancer', 'agency', 'business'
    profile_complete = Column(Boolean, default=False, nullable=False)
    photo_url = Column(String(500), nullable=True)
    gstin = Column(String(20), nullable=True)

    # Freelancer
    phone = Column(String(30), nullable=True)
    location = Column(String(255), nullable=True)
    bio = Column(Text, nullable=True)

    # Agency
    agency_name = Column(String(255), nullable=True)
    agency_phone = Column(String(30), nullable=True)
    agency_email = Column(String(255), nullable=True)
    agency_address = Column(Text, nullable=True)
    agency_website = Column(String(255), nullable=True)
    agency_description = Column(Text, nullable=True)
    number_of_employees = Column(String(20), nullable=True)

    # Business
    business_name = Column(String(255), nullable=True)
    business_phone = Column(String(30), nullable=True)
    business_email = Column(String(255), nullable=True)
    business_address = Column(Text, nullable=True)
    business_type = Column(String(100), nullable=True)

    token_version = Column(Integer, default=1, nullable=False)  # invalidate old JWTs
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    clients = relationship("Client", back_populates="owner", cascade="all, delete-orphan", passive_deletes=True)
    leads = relationship("Lead", back_populates="owner", cascade="all, delete-orphan", passive_deletes=True)
    email_settings = relationship("EmailSettings", back_populates="user", uselist=False, cascade="all, delete-orphan")

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}', type='{self.user_type}', plan='{self.plan}')>"

    @property
    def is_agency(self):
        return self.user_type == "agency"
