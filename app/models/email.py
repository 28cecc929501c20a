from datetime import datetime, timezone
from sqlalchemy import Boolean, Column, Integer, String, ForeignKey, DateTime, Text, JSON
from sqlalchemy.orm import relationship
from app.db.base import Base


class EmailSettings(Base):
    """Per-account switch and sender identity for automated emails."""
    __tablename__ = "email_settings"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True)
    enabled = Column(Boolean, default=False, nullable=False)
    from_name = Column(String(255), nullable=False)
    reply_to = Column(String(255), nullable=False)
    updated_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    user = relationship("User", back_populates="email_settings")


class EmailTemplate(Base):
    """
    Subject and HTML body with {{variable}} placeholders, bound to an event.
    """
    __tablename__ = "email_templates"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    subject = Column(String(500), nullable=False)
    body = Column(Text, nullable=False)
    event = Column(String(50), nullable=False, index=True)
    variables = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    def __repr__(self):
        return f"<EmailTemplate(id={self.id}, name='{self.name}', event='{self.event}')>"


class AutomationRule(Base):
    """When `event` fires, queue `template_id`; `delay` is in minutes."""
    __tablename__ = "automation_rules"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    event = Column(String(50), nullable=False, index=True)
    template_id = Column(Integer, ForeignKey("email_templates.id", ondelete="CASCADE"), nullable=False)
    delay = Column(Integer, default=0, nullable=False)
    enabled = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    template = relationship("EmailTemplate")


class EmailQueueItem(Base):
    """
    Outbound email waiting for the queue processor.

    Attributes:
        status: 'pending', 'sent' or 'failed'
        email_type: 'template' (body already rendered) or 'invoice'
            (invoice HTML is rendered from `invoice_payload` at send time)
    """
    __tablename__ = "email_queue"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    to = Column(String(255), nullable=False)
    subject = Column(String(500), nullable=False)
    body = Column(Text, nullable=False)
    reply_to = Column(String(255), nullable=True)
    from_name = Column(String(255), nullable=True)
    status = Column(String(20), default="pending", nullable=False, index=True)
    send_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), index=True)
    sent_at = Column(DateTime(timezone=True), nullable=True)
    retry_count = Column(Integer, default=0, nullable=False)
    error = Column(Text, nullable=True)
    template_name = Column(String(255), nullable=True)
    event = Column(String(50), nullable=True)
    email_type = Column(String(20), default="template", nullable=False)
    invoice_payload = Column(JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    def __repr__(self):
        return f"<EmailQueueItem(id={self.id}, to='{self.to}', status='{self.status}')>"


class EmailLog(Base):
    __tablename__ = "email_logs"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    to = Column(String(255), nullable=False)
    subject = Column(String(500), nullable=False)
    template_name = Column(String(255), nullable=True)
    event = Column(String(50), nullable=True)
    status = Column(String(20), nullable=False)  # 'sent' or 'failed'
    error = Column(Text, nullable=True)
    sent_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), index=True)
