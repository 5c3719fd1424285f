# storefront/services/discount_service.py
import logging

from fastapi import HTTPException
from sqlalchemy import and_, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.exceptions import NotFoundError, StoreError
from storefront.models.discount_models import Discount
from storefront.models.product_models import collection_products
from storefront.schemas.discount_schemas import DiscountCreate, DiscountUpdate, DiscountOut, FanOutOut
from storefront.services.pricing_engine import (
    PriceDiscountEngine, FanOutResult, validate_percentage, PRODUCT_TARGET, COLLECTION_TARGET
)
from storefront.utils.activity_helpers import record_activity

logger = logging.getLogger(__name__)


async def _apply_tolerant(engine: PriceDiscountEngine, discount: Discount) -> FanOutResult | None:
    """Apply a discount; a missing target is logged and skipped."""
    try:
        return await engine.apply(discount)
    except NotFoundError as e:
        logger.warning("Discount %s not applied: %s", discount.id, e.detail)
        return None


async def _revert_tolerant(engine: PriceDiscountEngine, discount: Discount) -> FanOutResult | None:
    """Revert a discount; a missing target is logged and skipped."""
    try:
        return await engine.revert_discount(discount)
    except NotFoundError as e:
        logger.warning("Discount %s not reverted: %s", discount.id, e.detail)
        return None


def _fan_out_out(result: FanOutResult | None) -> FanOutOut | None:
    return FanOutOut.model_validate(result) if result is not None else None


# -----------------------
# CREATE
# -----------------------
async def create_discount(db: AsyncSession, payload: DiscountCreate, _user):
    # Reject before anything is written
    validate_percentage(payload.percentage)

    try:
        discount = Discount(**payload.model_dump())
        db.add(discount)
        await db.flush()

        await record_activity(
            db,
            _user,
            f"Created {discount.percentage}% discount on {discount.target_type} {discount.target_id} (ID: {discount.id})"
        )
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        raise StoreError(f"Error creating discount: {e}")

    applied = await _apply_tolerant(PriceDiscountEngine(db), discount)
    await db.refresh(discount)

    return {
        "message": "Discount created successfully",
        "data": DiscountOut.model_validate(discount),
        "applied": _fan_out_out(applied),
    }


# -----------------------
# READ
# -----------------------
async def get_all_discounts(db: AsyncSession, target_type: str | None = None, target_id: int | None = None):
    filters = []
    if target_type:
        filters.append(Discount.target_type == target_type)
    if target_id:
        filters.append(Discount.target_id == target_id)

    result = await db.execute(select(Discount).where(*filters).order_by(Discount.id))
    return {
        "message": "Discounts fetched successfully",
        "data": [DiscountOut.model_validate(d) for d in result.scalars().all()],
    }


async def get_discount_by_id(db: AsyncSession, discount_id: int) -> Discount:
    discount = await db.get(Discount, discount_id)
    if not discount:
        raise NotFoundError("Discount not found")
    return discount


# -----------------------
# UPDATE
# -----------------------
async def update_discount(db: AsyncSession, discount_id: int, payload: DiscountUpdate, _user):
    validate_percentage(payload.percentage)
    discount = await get_discount_by_id(db, discount_id)
    engine = PriceDiscountEngine(db)

    # Old effect goes first, otherwise the products stay discounted with no record
    reverted = await _revert_tolerant(engine, discount)
    await db.refresh(discount)

    try:
        old_summary = f"{discount.percentage}% on {discount.target_type} {discount.target_id}"
        for key, value in payload.model_dump().items():
            setattr(discount, key, value)

        await record_activity(
            db,
            _user,
            (
                f"Updated discount (ID: {discount.id}) from {old_summary} "
                f"to {discount.percentage}% on {discount.target_type} {discount.target_id}"
            )
        )
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        raise StoreError(f"Error updating discount: {e}")

    applied = await _apply_tolerant(engine, discount)
    await db.refresh(discount)

    return {
        "message": "Discount updated successfully",
        "data": DiscountOut.model_validate(discount),
        "applied": _fan_out_out(applied),
        "reverted": _fan_out_out(reverted),
    }


# -----------------------
# DELETE
# -----------------------
async def delete_discount(db: AsyncSession, discount_id: int, _user):
    discount = await get_discount_by_id(db, discount_id)
    reverted = await _revert_tolerant(PriceDiscountEngine(db), discount)
    await db.refresh(discount)

    data = DiscountOut.model_validate(discount)
    try:
        await db.delete(discount)
        await record_activity(
            db,
            _user,
            f"Deleted {data.percentage}% discount on {data.target_type} {data.target_id} (ID: {data.id})"
        )
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        raise StoreError(f"Error deleting discount: {e}")

    return {
        "message": "Discount deleted successfully",
        "data": data,
        "reverted": _fan_out_out(reverted),
    }


# -----------------------
# CASCADE FROM TARGET DELETION
# -----------------------
async def remove_discounts_for_target(db: AsyncSession, target_type: str, target_id: int) -> int:
    """
    Revert and delete every discount pointing at a product or collection that
    is about to be removed. Does not commit the deletions.
    """
    result = await db.execute(
        select(Discount).where(Discount.target_type == target_type, Discount.target_id == target_id)
    )
    discounts = result.scalars().all()
    engine = PriceDiscountEngine(db)
    for discount in discounts:
        try:
            await engine.revert_discount(discount)
        except HTTPException as e:
            logger.warning("Discount %s not reverted before target removal: %s", discount.id, e.detail)
    for discount in discounts:
        await db.refresh(discount)
        await db.delete(discount)
    return len(discounts)


# -----------------------
# MEMBERSHIP CHANGES
# -----------------------
async def _still_covered(db: AsyncSession, product_id: int) -> bool:
    """True if a discount still targets the product directly or through a collection it is in."""
    member_of = select(collection_products.c.collection_id).where(collection_products.c.product_id == product_id)
    result = await db.execute(
        select(Discount.id).where(or_(
            and_(Discount.target_type == PRODUCT_TARGET, Discount.target_id == product_id),
            and_(Discount.target_type == COLLECTION_TARGET, Discount.target_id.in_(member_of)),
        )).limit(1)
    )
    return result.scalar_one_or_none() is not None


async def release_from_collections(db: AsyncSession, collection_ids, product_ids) -> FanOutResult | None:
    """
    Restore products that have left discounted collections. Call after the
    membership change is committed. A product that another discount still
    covers keeps its price.
    """
    collection_ids = list(collection_ids)
    product_ids = list(product_ids)
    if not collection_ids or not product_ids:
        return None

    result = await db.execute(
        select(Discount.id).where(
            Discount.target_type == COLLECTION_TARGET, Discount.target_id.in_(collection_ids)
        ).limit(1)
    )
    if result.scalar_one_or_none() is None:
        return None

    released = [pid for pid in product_ids if not await _still_covered(db, pid)]
    if not released:
        return None
    return await PriceDiscountEngine(db).revert_products(released)
