from pydantic import BaseModel, Field
from typing import List

class CartItemIn(BaseModel):
    product_id: int = Field(..., ge=1)
    quantity: int = Field(1, ge=1)

class CartItemQuantity(BaseModel):
    quantity: int = Field(..., ge=1)

class CartItemOut(BaseModel):
    product_id: int
    quantity: int

    class Config:
        from_attributes = True

class CartResponse(BaseModel):
    message: str
    data: List[CartItemOut]
