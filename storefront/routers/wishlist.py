from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.db import get_db
from storefront.schemas.wishlist_schemas import WishlistItemIn, WishlistResponse
from storefront.services.wishlist_service import add_to_wishlist, get_wishlist, remove_from_wishlist
from storefront.utils.get_user import get_current_user

router = APIRouter(prefix="/wishlist", tags=["Wishlist"])


@router.post("/items", response_model=WishlistResponse, status_code=status.HTTP_201_CREATED)
async def add_to_wishlist_route(item: WishlistItemIn, db: AsyncSession = Depends(get_db), current_user = Depends(get_current_user)):
    return await add_to_wishlist(db, current_user.id, item)


@router.get("", response_model=WishlistResponse)
async def get_wishlist_route(db: AsyncSession = Depends(get_db), current_user = Depends(get_current_user)):
    return await get_wishlist(db, current_user.id)


@router.delete("/items/{item_id}", response_model=WishlistResponse)
async def remove_from_wishlist_route(item_id: int, db: AsyncSession = Depends(get_db), current_user = Depends(get_current_user)):
    return await remove_from_wishlist(db, current_user.id, item_id)
