# storefront/services/wishlist_service.py
from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from storefront.core.exceptions import ConflictError, NotFoundError, StoreError
from storefront.models.product_models import Product
from storefront.models.wishlist_models import Wishlist, WishlistItem
from storefront.schemas.wishlist_schemas import WishlistItemIn, WishlistItemOut


async def _get_wishlist(db: AsyncSession, user_id: int) -> Wishlist | None:
    result = await db.execute(select(Wishlist).where(Wishlist.user_id == user_id))
    return result.scalars().first()


async def add_to_wishlist(db: AsyncSession, user_id: int, item: WishlistItemIn):
    try:
        if not await db.get(Product, item.product_id):
            raise NotFoundError("Product not found")

        wishlist = await _get_wishlist(db, user_id)
        if not wishlist:
            wishlist = Wishlist(user_id=user_id, items=[])
            db.add(wishlist)
        elif any(i.product_id == item.product_id for i in wishlist.items):
            raise ConflictError("Product already in wishlist")

        wishlist.items.append(WishlistItem(product_id=item.product_id))
        await db.commit()
        await db.refresh(wishlist)
        return {
            "message": "Item added successfully",
            "data": [WishlistItemOut.model_validate(i) for i in wishlist.items],
        }

    except HTTPException:
        await db.rollback()
        raise
    except SQLAlchemyError as e:
        await db.rollback()
        raise StoreError(f"Database update failed: {e}")


async def get_wishlist(db: AsyncSession, user_id: int):
    """An absent wishlist reads as empty."""
    wishlist = await _get_wishlist(db, user_id)
    items = wishlist.items if wishlist else []
    return {
        "message": "Wishlist fetched successfully",
        "data": [WishlistItemOut.model_validate(i) for i in items],
    }


async def remove_from_wishlist(db: AsyncSession, user_id: int, item_id: int):
    try:
        wishlist = await _get_wishlist(db, user_id)
        item = next((i for i in wishlist.items if i.id == item_id), None) if wishlist else None
        if not item:
            raise NotFoundError("Wishlist item not found")

        wishlist.items.remove(item)
        await db.commit()
        await db.refresh(wishlist)
        return {
            "message": "Wishlist item removed",
            "data": [WishlistItemOut.model_validate(i) for i in wishlist.items],
        }

    except HTTPException:
        await db.rollback()
        raise
    except SQLAlchemyError as e:
        await db.rollback()
        raise StoreError(f"Failed to remove wishlist item: {e}")
