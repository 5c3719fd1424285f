# storefront/services/order_service.py
from datetime import datetime, timezone
import logging

from fastapi import HTTPException
from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from storefront.core.config import DELIVERY_FEE
from storefront.core.exceptions import NotFoundError, StoreError, ValidationError
from storefront.models.order_models import Order, OrderItem
from storefront.models.product_models import Product
from storefront.schemas.order_schemas import OrderCreate, OrderOut, OrderUpdate
from storefront.services.cart_service import clear_cart
from storefront.utils.activity_helpers import record_activity
from storefront.utils.check_roles import is_admin

logger = logging.getLogger(__name__)


def generate_order_number() -> str:
    return f"OS{int(datetime.now(timezone.utc).timestamp())}"


# --------------------------
# CREATE ORDER
# --------------------------
async def create_order(db: AsyncSession, data: OrderCreate, current_user):
    """
    Prices are snapshotted from the products' current (possibly discounted)
    price. Stock is reserved with a conditional decrement per line.
    """
    if not data.items:
        raise ValidationError("Order must contain at least one item")

    try:
        # Merge duplicate lines
        quantities: dict[int, int] = {}
        for item in data.items:
            quantities[item.product_id] = quantities.get(item.product_id, 0) + item.quantity

        order = Order(
            order_number=generate_order_number(),
            user_id=current_user.id,
            phone_number=data.phone_number,
            location=data.location,
        )

        subtotal = 0.0
        discounted = False
        for product_id, quantity in quantities.items():
            product = await db.get(Product, product_id)
            if not product:
                raise NotFoundError(f"Product {product_id} not found")

            res = await db.execute(
                update(Product)
                .where(Product.id == product_id, Product.stock >= quantity)
                .values(stock=Product.stock - quantity)
                .execution_options(synchronize_session=False)
            )
            if not res.rowcount:
                raise ValidationError(f"Insufficient stock for product {product_id}")

            order.items.append(OrderItem(product_id=product_id, quantity=quantity, unit_price=product.price))
            subtotal += product.price * quantity
            discounted = discounted or product.has_active_discount

        order.subtotal = round(subtotal, 2)
        order.total = round(subtotal + DELIVERY_FEE, 2)
        order.discounted = discounted
        db.add(order)

        await clear_cart(db, current_user.id, commit=False)
        await db.commit()
        await db.refresh(order)

        logger.info("Order %s placed by user %s, total %.2f", order.order_number, current_user.id, order.total)
        return {"message": "Order created successfully", "data": OrderOut.model_validate(order)}

    except HTTPException:
        await db.rollback()
        raise
    except SQLAlchemyError as e:
        await db.rollback()
        raise StoreError(f"Error creating order: {e}")


# --------------------------
# READ
# --------------------------
async def _get_order_or_404(db: AsyncSession, order_id: int) -> Order:
    order = await db.get(Order, order_id)
    if not order:
        raise NotFoundError("Order not found")
    return order


async def get_order(db: AsyncSession, order_id: int, current_user):
    order = await _get_order_or_404(db, order_id)
    if order.user_id != current_user.id and not is_admin(current_user):
        raise HTTPException(status_code=403, detail="Permission denied")
    return {"message": "Order fetched successfully", "data": OrderOut.model_validate(order)}


async def list_orders(db: AsyncSession, user_id: int | None = None):
    stmt = select(Order).order_by(Order.created_at.desc(), Order.id.desc())
    if user_id is not None:
        stmt = stmt.where(Order.user_id == user_id)
    result = await db.execute(stmt)
    return {
        "message": "Orders fetched successfully",
        "data": [OrderOut.model_validate(o) for o in result.scalars().all()],
    }


# --------------------------
# UPDATE / DELETE
# --------------------------
async def update_order(db: AsyncSession, order_id: int, data: OrderUpdate, current_user):
    try:
        order = await _get_order_or_404(db, order_id)
        changes = []
        for key, value in data.model_dump(exclude_unset=True).items():
            if value is None:
                continue
            value = value.value if hasattr(value, "value") else value
            if getattr(order, key) != value:
                changes.append(f"{key}: {getattr(order, key)} → {value}")
                setattr(order, key, value)

        if changes:
            await record_activity(
                db,
                current_user,
                f"Updated order {order.order_number} — {', '.join(changes)}"
            )
        await db.commit()
        await db.refresh(order)
        return {"message": "Order updated successfully", "data": OrderOut.model_validate(order)}

    except HTTPException:
        await db.rollback()
        raise
    except SQLAlchemyError as e:
        await db.rollback()
        raise StoreError(f"Error updating order: {e}")


async def delete_order(db: AsyncSession, order_id: int, current_user):
    try:
        order = await _get_order_or_404(db, order_id)
        number = order.order_number
        await db.delete(order)
        await record_activity(
            db,
            current_user,
            f"Deleted order {number} (ID: {order_id})"
        )
        await db.commit()
        return {"message": "Order deleted successfully"}

    except HTTPException:
        await db.rollback()
        raise
    except SQLAlchemyError as e:
        await db.rollback()
        raise StoreError(f"Error deleting order: {e}")
