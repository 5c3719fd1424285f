from sqlalchemy import Column, Integer, String, Float, DateTime, CheckConstraint, Index, func
from storefront.core.db import Base

class Discount(Base):
    __tablename__ = "discounts"

    id = Column(Integer, primary_key=True, index=True)
    target_type = Column(String(20), nullable=False)  # 'product' or 'collection'
    target_id = Column(Integer, nullable=False)        # product id or collection id
    percentage = Column(Float, nullable=False)         # 0-100

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        CheckConstraint("percentage >= 0 AND percentage <= 100", name="check_discount_percentage_range"),
        CheckConstraint("target_type IN ('product', 'collection')", name="check_discount_target_type"),
        Index("ix_discount_target", "target_type", "target_id"),
    )
