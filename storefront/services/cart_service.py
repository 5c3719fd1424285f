# storefront/services/cart_service.py
from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from storefront.core.exceptions import NotFoundError, StoreError
from storefront.models.cart_models import Cart, CartItem
from storefront.models.product_models import Product
from storefront.schemas.cart_schemas import CartItemIn, CartItemOut


async def get_user_cart(db: AsyncSession, user_id: int) -> Cart | None:
    result = await db.execute(select(Cart).where(Cart.user_id == user_id))
    return result.scalars().first()


def _cart_payload(message: str, cart: Cart | None) -> dict:
    items = cart.items if cart else []
    return {"message": message, "data": [CartItemOut.model_validate(i) for i in items]}


# ---------------------------
# ADD ITEM
# ---------------------------
async def add_to_cart(db: AsyncSession, user_id: int, item: CartItemIn):
    """Add a product to the user's cart, creating the cart on first use."""
    try:
        if not await db.get(Product, item.product_id):
            raise NotFoundError("Product not found")

        cart = await get_user_cart(db, user_id)
        if not cart:
            cart = Cart(user_id=user_id, items=[])
            db.add(cart)

        line = next((i for i in cart.items if i.product_id == item.product_id), None)
        if line:
            line.quantity += item.quantity
        else:
            cart.items.append(CartItem(product_id=item.product_id, quantity=item.quantity))

        await db.commit()
        await db.refresh(cart)
        return _cart_payload("Item added to cart", cart)

    except HTTPException:
        await db.rollback()
        raise
    except SQLAlchemyError as e:
        await db.rollback()
        raise StoreError(f"Failed to add to cart: {e}")


# ---------------------------
# GET CART
# ---------------------------
async def get_cart(db: AsyncSession, user_id: int):
    cart = await get_user_cart(db, user_id)
    if not cart:
        raise NotFoundError("Cart not found")
    return _cart_payload("Cart fetched successfully", cart)


# ---------------------------
# UPDATE QUANTITY
# ---------------------------
async def update_cart_item(db: AsyncSession, user_id: int, product_id: int, quantity: int):
    try:
        cart = await get_user_cart(db, user_id)
        line = next((i for i in cart.items if i.product_id == product_id), None) if cart else None
        if not line:
            raise NotFoundError("Item not in cart")

        line.quantity = quantity
        await db.commit()
        await db.refresh(cart)
        return _cart_payload("Cart item updated", cart)

    except HTTPException:
        await db.rollback()
        raise
    except SQLAlchemyError as e:
        await db.rollback()
        raise StoreError(f"Failed to update cart item: {e}")


# ---------------------------
# REMOVE ITEM / CLEAR
# ---------------------------
async def remove_from_cart(db: AsyncSession, user_id: int, product_id: int):
    try:
        cart = await get_user_cart(db, user_id)
        line = next((i for i in cart.items if i.product_id == product_id), None) if cart else None
        if not line:
            raise NotFoundError("Item not in cart")

        cart.items.remove(line)
        await db.commit()
        await db.refresh(cart)
        return _cart_payload("Cart item removed", cart)

    except HTTPException:
        await db.rollback()
        raise
    except SQLAlchemyError as e:
        await db.rollback()
        raise StoreError(f"Failed to remove cart item: {e}")


async def clear_cart(db: AsyncSession, user_id: int, commit: bool = True):
    cart = await get_user_cart(db, user_id)
    if cart:
        cart.items.clear()
        if commit:
            await db.commit()
    return _cart_payload("Cart cleared", None)
