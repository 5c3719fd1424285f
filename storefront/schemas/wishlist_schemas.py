from pydantic import BaseModel, Field
from typing import List

class WishlistItemIn(BaseModel):
    product_id: int = Field(..., ge=1)

class WishlistItemOut(BaseModel):
    id: int
    product_id: int

    class Config:
        from_attributes = True

class WishlistResponse(BaseModel):
    message: str
    data: List[WishlistItemOut]
