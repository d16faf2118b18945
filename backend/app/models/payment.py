"""Scheduled payment records."""

import uuid

from sqlalchemy import Column, Date, DateTime, Numeric, String

from backend.app.core.time import utc_now
from backend.app.db.base_class import Base


class Payment(Base):
    __tablename__ = "payments"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    amount = Column(Numeric(10, 2), nullable=False)
    currency = Column(String(3), nullable=False)
    scheduled_date = Column(Date, nullable=False, index=True)
    recipient = Column(String(255), nullable=False, index=True)
    status = Column(String(50), nullable=False, default="pending", server_default="pending")
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now)
    deleted_at = Column(DateTime(timezone=True), nullable=True)
