from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime

class AnnouncementIn(BaseModel):
    message: str = Field(..., min_length=1, max_length=1000)

class AnnouncementOut(BaseModel):
    id: int
    message: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class AnnouncementResponse(BaseModel):
    message: str
    data: Optional[AnnouncementOut] = None

class AnnouncementListResponse(BaseModel):
    message: str
    data: List[AnnouncementOut]
