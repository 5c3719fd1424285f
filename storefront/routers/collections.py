# storefront/routers/collections.py
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Literal

from storefront.core.db import get_db
from storefront.schemas.collection_schemas import (
    CollectionCreate, CollectionUpdate, CollectionResponse, CollectionListResponse
)
from storefront.schemas.product_schemas import ProductListResponse, MessageResponse
from storefront.services.collection_service import (
    create_collection, get_collections, get_collection, get_collection_products,
    update_collection, delete_collection
)
from storefront.utils.check_roles import admin_only
from storefront.utils.get_user import get_current_user

router = APIRouter(prefix="/collections", tags=["Collections"])


@router.post("", response_model=CollectionResponse, status_code=status.HTTP_201_CREATED)
@admin_only
async def create_collection_route(
    data: CollectionCreate,
    db: AsyncSession = Depends(get_db),
    _user = Depends(get_current_user)
):
    return await create_collection(db, data, _user)


@router.get("", response_model=CollectionListResponse)
async def list_collections_route(db: AsyncSession = Depends(get_db)):
    """Visible collections only."""
    return await get_collections(db)


@router.get("/all", response_model=CollectionListResponse)
@admin_only
async def list_all_collections_route(db: AsyncSession = Depends(get_db), _user = Depends(get_current_user)):
    """Every collection, hidden ones included."""
    return await get_collections(db, include_hidden=True)


@router.get("/{collection_id}", response_model=CollectionResponse)
async def get_collection_route(collection_id: int, db: AsyncSession = Depends(get_db)):
    return await get_collection(db, collection_id)


@router.get("/{collection_id}/products", response_model=ProductListResponse)
async def get_collection_products_route(
    collection_id: int,
    db: AsyncSession = Depends(get_db),
    lang: Literal["en", "ar"] = Query("en"),
):
    return await get_collection_products(db, collection_id, lang=lang)


@router.put("/{collection_id}", response_model=CollectionResponse)
@admin_only
async def update_collection_route(
    collection_id: int,
    data: CollectionUpdate,
    db: AsyncSession = Depends(get_db),
    _user = Depends(get_current_user)
):
    return await update_collection(db, collection_id, data, _user)


@router.delete("/{collection_id}", response_model=MessageResponse)
@admin_only
async def delete_collection_route(
    collection_id: int,
    db: AsyncSession = Depends(get_db),
    _user = Depends(get_current_user)
):
    """Reverts and removes discounts aimed at the collection before deleting it."""
    return await delete_collection(db, collection_id, _user)
