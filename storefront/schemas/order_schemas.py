# storefront/schemas/order_schemas.py
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime
from storefront.models.order_models import OrderStatus


class OrderItemCreate(BaseModel):
    product_id: int = Field(..., ge=1)
    quantity: int = Field(..., ge=1)


class OrderCreate(BaseModel):
    phone_number: str = Field(..., min_length=1)
    location: str = Field(..., min_length=1)
    items: List[OrderItemCreate]


class OrderUpdate(BaseModel):
    phone_number: Optional[str] = None
    location: Optional[str] = None
    status: Optional[OrderStatus] = None


class OrderItemOut(BaseModel):
    product_id: int
    quantity: int
    unit_price: float

    class Config:
        from_attributes = True


class OrderOut(BaseModel):
    id: int
    order_number: str
    user_id: Optional[int] = None
    phone_number: str
    location: str
    items: List[OrderItemOut]
    subtotal: float
    total: float
    discounted: bool
    status: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class OrderResponse(BaseModel):
    message: str
    data: Optional[OrderOut] = None


class OrderListResponse(BaseModel):
    message: str
    data: List[OrderOut]
