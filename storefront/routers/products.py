# storefront/routers/products.py
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Literal

from storefront.core.db import get_db
from storefront.schemas.product_schemas import (
    ProductCreate, ProductUpdate, ProductIdsRequest, ProductResponse, ProductListResponse, MessageResponse
)
from storefront.services.product_service import (
    create_product, get_all_products, get_product, get_products_by_ids, update_product, delete_product
)
from storefront.utils.check_roles import admin_only
from storefront.utils.get_user import get_current_user

router = APIRouter(prefix="/products", tags=["Products"])

Lang = Literal["en", "ar"]


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
@admin_only
async def create_product_route(
    data: ProductCreate,
    db: AsyncSession = Depends(get_db),
    _user = Depends(get_current_user)
):
    """Create a product; each tag adds it to the collection of that name."""
    return await create_product(db, data, _user)


@router.get("", response_model=ProductListResponse)
async def list_products_route(
    db: AsyncSession = Depends(get_db),
    lang: Lang = Query("en"),
    is_admin: bool = Query(False, description="Return both languages"),
):
    return await get_all_products(db, lang=lang, admin=is_admin)


@router.post("/batch", response_model=ProductListResponse)
async def get_products_by_ids_route(
    data: ProductIdsRequest,
    db: AsyncSession = Depends(get_db),
    lang: Lang = Query("en"),
):
    return await get_products_by_ids(db, data.product_ids, lang=lang)


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product_route(
    product_id: int,
    db: AsyncSession = Depends(get_db),
    lang: Lang = Query("en"),
    is_admin: bool = Query(False),
):
    return await get_product(db, product_id, lang=lang, admin=is_admin)


@router.put("/{product_id}", response_model=ProductResponse)
@admin_only
async def update_product_route(
    product_id: int,
    data: ProductUpdate,
    db: AsyncSession = Depends(get_db),
    _user = Depends(get_current_user)
):
    return await update_product(db, product_id, data, _user)


@router.delete("/{product_id}", response_model=MessageResponse)
@admin_only
async def delete_product_route(
    product_id: int,
    db: AsyncSession = Depends(get_db),
    _user = Depends(get_current_user)
):
    return await delete_product(db, product_id, _user)
