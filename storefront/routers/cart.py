from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.db import get_db
from storefront.schemas.cart_schemas import CartItemIn, CartItemQuantity, CartResponse
from storefront.services.cart_service import add_to_cart, get_cart, update_cart_item, remove_from_cart, clear_cart
from storefront.utils.get_user import get_current_user

router = APIRouter(prefix="/cart", tags=["Cart"])


@router.post("/items", response_model=CartResponse, status_code=status.HTTP_201_CREATED)
async def add_to_cart_route(item: CartItemIn, db: AsyncSession = Depends(get_db), current_user = Depends(get_current_user)):
    return await add_to_cart(db, current_user.id, item)


@router.get("", response_model=CartResponse)
async def get_cart_route(db: AsyncSession = Depends(get_db), current_user = Depends(get_current_user)):
    return await get_cart(db, current_user.id)


@router.put("/items/{product_id}", response_model=CartResponse)
async def update_cart_item_route(
    product_id: int,
    body: CartItemQuantity,
    db: AsyncSession = Depends(get_db),
    current_user = Depends(get_current_user)
):
    return await update_cart_item(db, current_user.id, product_id, body.quantity)


@router.delete("/items/{product_id}", response_model=CartResponse)
async def remove_from_cart_route(product_id: int, db: AsyncSession = Depends(get_db), current_user = Depends(get_current_user)):
    return await remove_from_cart(db, current_user.id, product_id)


@router.delete("", response_model=CartResponse)
async def clear_cart_route(db: AsyncSession = Depends(get_db), current_user = Depends(get_current_user)):
    return await clear_cart(db, current_user.id)
