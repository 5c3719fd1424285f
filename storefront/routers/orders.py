# storefront/routers/orders.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.db import get_db
from storefront.schemas.order_schemas import OrderCreate, OrderUpdate, OrderResponse, OrderListResponse
from storefront.schemas.product_schemas import MessageResponse
from storefront.services.order_service import (
    create_order, get_order, list_orders, update_order, delete_order
)
from storefront.utils.check_roles import admin_only
from storefront.utils.get_user import get_current_user

router = APIRouter(prefix="/orders", tags=["Orders"])


@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
async def create_order_route(data: OrderCreate, db: AsyncSession = Depends(get_db), current_user = Depends(get_current_user)):
    return await create_order(db, data, current_user)


@router.get("", response_model=OrderListResponse)
@admin_only
async def list_orders_route(db: AsyncSession = Depends(get_db), _user = Depends(get_current_user)):
    return await list_orders(db)


@router.get("/me", response_model=OrderListResponse)
async def my_orders_route(db: AsyncSession = Depends(get_db), current_user = Depends(get_current_user)):
    return await list_orders(db, user_id=current_user.id)


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order_route(order_id: int, db: AsyncSession = Depends(get_db), current_user = Depends(get_current_user)):
    return await get_order(db, order_id, current_user)


@router.put("/{order_id}", response_model=OrderResponse)
@admin_only
async def update_order_route(
    order_id: int,
    data: OrderUpdate,
    db: AsyncSession = Depends(get_db),
    _user = Depends(get_current_user)
):
    return await update_order(db, order_id, data, _user)


@router.delete("/{order_id}", response_model=MessageResponse)
@admin_only
async def delete_order_route(order_id: int, db: AsyncSession = Depends(get_db), _user = Depends(get_current_user)):
    return await delete_order(db, order_id, _user)
