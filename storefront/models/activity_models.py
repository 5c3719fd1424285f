# storefront/models/activity_models.py
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Index
from sqlalchemy.sql import func
from storefront.core.db import Base

class ActivityLog(Base):
    """Audit trail of catalogue, discount, order and account changes."""
    __tablename__ = "activity_log"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    # Copied at write time so entries survive the user row
    user_email = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    __table_args__ = (
        Index("ix_activity_user_created", "user_id", "created_at"),
    )
