from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Literal
from storefront.schemas.discount_schemas import (
    DiscountCreate, DiscountUpdate, DiscountResponse, DiscountListResponse, DiscountOut
)
from storefront.services.discount_service import (
    create_discount,
    get_all_discounts,
    get_discount_by_id,
    update_discount,
    delete_discount,
)
from storefront.utils.check_roles import admin_only
from storefront.core.db import get_db
from storefront.utils.get_user import get_current_user

router = APIRouter(prefix="/discounts", tags=["Discounts"])


@router.post("", response_model=DiscountResponse, status_code=status.HTTP_201_CREATED)
@admin_only
async def route_create_discount(
    payload: DiscountCreate,
    db: AsyncSession = Depends(get_db),
    _user = Depends(get_current_user)
):
    """
    Create a discount and apply it to its product or collection.
    A missing target still creates the record; the price change is skipped.
    """
    return await create_discount(db, payload, _user)


@router.get("", response_model=DiscountListResponse)
async def route_get_all_discounts(
    db: AsyncSession = Depends(get_db),
    target_type: Literal["product", "collection"] | None = Query(None, description="Filter by target type"),
    target_id: int | None = Query(None, ge=1, description="Filter by target id"),
):
    return await get_all_discounts(db, target_type=target_type, target_id=target_id)


@router.get("/{discount_id}", response_model=DiscountResponse)
async def route_get_discount(discount_id: int, db: AsyncSession = Depends(get_db)):
    """Fetch a single discount by ID."""
    discount = await get_discount_by_id(db, discount_id)
    return {"message": "Discount fetched successfully", "data": DiscountOut.model_validate(discount)}


@router.put("/{discount_id}", response_model=DiscountResponse)
@admin_only
async def route_update_discount(
    discount_id: int,
    payload: DiscountUpdate,
    db: AsyncSession = Depends(get_db),
    _user = Depends(get_current_user)
):
    """Revert the current effect, then store and apply the new target/percentage."""
    return await update_discount(db, discount_id, payload, _user)


@router.delete("/{discount_id}", response_model=DiscountResponse)
@admin_only
async def route_delete_discount(
    discount_id: int,
    db: AsyncSession = Depends(get_db),
    _user = Depends(get_current_user)
):
    """Restore the affected prices, then delete the discount."""
    return await delete_discount(db, discount_id, _user)
