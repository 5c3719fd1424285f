from pydantic import BaseModel, Field
from typing import List, Literal, Optional
from datetime import datetime

class DiscountBase(BaseModel):
    target_type: Literal["product", "collection"]
    target_id: int = Field(..., ge=1)
    percentage: float = Field(..., ge=0, le=100, description="Percentage off, 0-100")

class DiscountCreate(DiscountBase):
    pass

class DiscountUpdate(DiscountBase):
    """PUT replaces target and percentage; the old effect is reverted first."""
    pass

class DiscountOut(DiscountBase):
    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class FanOutOut(BaseModel):
    attempted: int
    succeeded: int
    skipped: int
    failed: List[int]

    class Config:
        from_attributes = True

class DiscountResponse(BaseModel):
    message: str
    data: Optional[DiscountOut] = None
    applied: Optional[FanOutOut] = None
    reverted: Optional[FanOutOut] = None

class DiscountListResponse(BaseModel):
    message: str
    data: List[DiscountOut]
