# storefront/schemas/product_schemas.py

from pydantic import BaseModel, Field, field_validator
from typing import Any, Dict, List, Optional
from datetime import datetime

# --------------------------
# Base schema for Product
# --------------------------
class ProductBase(BaseModel):
    sku: Optional[str] = None
    title: Optional[str] = None
    title_ar: Optional[str] = None
    description: Optional[str] = None
    description_ar: Optional[str] = None
    price: Optional[float] = None
    image: Optional[str] = None
    stock: Optional[int] = None
    tags: Optional[List[str]] = None


# --------------------------
# Schema for creating Product
# --------------------------
class ProductCreate(BaseModel):
    sku: str = ""
    title: str = ""
    title_ar: Optional[str] = None
    description: Optional[str] = None
    description_ar: Optional[str] = None
    price: float = 0.0
    image: Optional[str] = None
    stock: int = 0
    tags: List[str] = []

    @field_validator('price', 'stock')
    def non_negative_values(cls, value):
        """
        Ensure numeric fields are non-negative.
        """
        if value < 0:
            raise ValueError('Must be non-negative')
        return value


# --------------------------
# Schema for updating Product
# --------------------------
class ProductUpdate(ProductBase):
    """
    All fields optional for partial updates. original_price is never accepted.
    """
    pass


class ProductIdsRequest(BaseModel):
    product_ids: List[int] = []


# --------------------------
# Output schemas
# --------------------------
class ProductOut(BaseModel):
    """Customer-facing view, localised title/description."""
    id: int
    sku: str
    title: str
    description: Optional[str] = None
    price: float
    original_price: Optional[float] = None
    image: Optional[str] = None
    stock: int
    tags: List[str] = []

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ProductAdminOut(ProductOut):
    title_ar: Optional[str] = None
    description_ar: Optional[str] = None


# --------------------------
# Response schemas
# --------------------------
class ProductResponse(BaseModel):
    message: str
    data: Optional[Dict[str, Any]] = None


class ProductListResponse(BaseModel):
    message: str
    data: List[Dict[str, Any]]


# --------------------------
# Generic Message Response
# --------------------------
class MessageResponse(BaseModel):
    message: str
