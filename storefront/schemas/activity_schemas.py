# storefront/schemas/activity_schemas.py
from pydantic import BaseModel
from datetime import datetime
from typing import Optional, List


class ActivityOut(BaseModel):
    id: int
    user_id: Optional[int] = None
    user_email: str
    message: str
    created_at: datetime

    class Config:
        from_attributes = True


class ActivityPage(BaseModel):
    message: str
    total: int
    page: int
    page_size: int
    data: List[ActivityOut]
