from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, Float, ForeignKey, DateTime, Date, Text
from app.db.base import Base


class Investment(Base):
    """
    Money an agency put into its business (tools, hardware, ads...).

    upi_id and transaction_id are only required by the request schema when
    payment_method is 'upi'; the table accepts nulls.
    """
    __tablename__ = "investments"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    amount = Column(Float, nullable=False)
    date = Column(Date, nullable=False, index=True)
    payment_method = Column(String(10), nullable=False)  # 'upi', 'cash', 'card'
    upi_id = Column(String(100), nullable=True)
    transaction_id = Column(String(100), nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    def __repr__(self):
        return f"<Investment(id={self.id}, name='{self.name}', amount={self.amount})>"
