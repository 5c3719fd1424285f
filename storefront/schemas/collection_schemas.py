from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime

class CollectionCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    product_ids: List[int] = []
    show_collection: bool = True

class CollectionUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    product_ids: Optional[List[int]] = None
    show_collection: Optional[bool] = None

class CollectionOut(BaseModel):
    id: int
    name: str
    product_ids: List[int] = []
    show_collection: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class CollectionResponse(BaseModel):
    message: str
    data: Optional[CollectionOut] = None

class CollectionListResponse(BaseModel):
    message: str
    data: List[CollectionOut]
