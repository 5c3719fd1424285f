# storefront/services/pricing_engine.py
"""
Apply and revert percentage discounts on product prices.

A product's ``original_price`` is the only record that a discount is active:
it is set when a discount is applied and cleared when it is reverted, and a
NULL or zero value means "not discounted". Only this module writes it.

Every per-product write is a conditional UPDATE that computes the new values
from the row's own columns, so two requests racing on the same product can
never double-discount it or restore it twice. Writes are committed one
product at a time; a failure on one member of a collection is logged and
recorded in the returned ``FanOutResult`` without stopping the others.
"""
import logging
from dataclasses import dataclass, field
from typing import List

from sqlalchemy import and_, or_, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.exceptions import NotFoundError, ValidationError
from storefront.models.discount_models import Discount
from storefront.models.product_models import Collection, Product, collection_products

logger = logging.getLogger(__name__)

PRODUCT_TARGET = "product"
COLLECTION_TARGET = "collection"
TARGET_TYPES = (PRODUCT_TARGET, COLLECTION_TARGET)


@dataclass
class FanOutResult:
    attempted: int = 0
    succeeded: int = 0
    skipped: int = 0
    failed: List[int] = field(default_factory=list)

    @property
    def fully_applied(self) -> bool:
        return not self.failed


def validate_percentage(percentage: float) -> None:
    if percentage is None or not (0 <= percentage <= 100):
        raise ValidationError("Percentage discount must be between 0 and 100")


def _not_discounted():
    return or_(Product.original_price.is_(None), Product.original_price == 0)


def _discounted():
    return and_(Product.original_price.is_not(None), Product.original_price != 0)


def _restore_stmt():
    return (
        update(Product)
        .values(price=Product.original_price, original_price=None)
        .execution_options(synchronize_session=False)
    )


class PriceDiscountEngine:
    """Owns the price/original_price fields of products for one session."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # ---------------------------
    # APPLY
    # ---------------------------
    async def apply(self, discount: Discount) -> FanOutResult:
        target_type = discount.target_type
        target_id = discount.target_id
        percentage = discount.percentage
        validate_percentage(percentage)

        if target_type == PRODUCT_TARGET:
            await self._require_product(target_id)
            product_ids = [target_id]
        elif target_type == COLLECTION_TARGET:
            await self._require_collection(target_id)
            product_ids = await self._member_ids(target_id)
        else:
            raise ValidationError(f"Unsupported target type '{target_type}'")

        stmt = (
            update(Product)
            .values(
                original_price=Product.price,
                price=Product.price - Product.price * percentage / 100,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self._fan_out(stmt, product_ids, _not_discounted())

        logger.info(
            "Applied %s%% discount to %s %s: %s updated, %s already discounted, %s failed",
            percentage, target_type, target_id, result.succeeded, result.skipped, len(result.failed),
        )
        return result

    # ---------------------------
    # REVERT
    # ---------------------------
    async def revert(self, discount_id: int) -> FanOutResult:
        discount = await self.db.get(Discount, discount_id)
        if not discount:
            raise NotFoundError("Discount not found")
        return await self.revert_discount(discount)

    async def revert_discount(self, discount: Discount) -> FanOutResult:
        """Restore every product touched by an already loaded discount row."""
        target_type = discount.target_type
        target_id = discount.target_id

        if target_type == PRODUCT_TARGET:
            await self._require_product(target_id)
            product_ids = [target_id]
        elif target_type == COLLECTION_TARGET:
            await self._require_collection(target_id)
            product_ids = await self._member_ids(target_id, discounted_only=True)
        else:
            raise ValidationError(f"Unsupported target type '{target_type}'")

        result = await self._fan_out(_restore_stmt(), product_ids, _discounted())

        logger.info(
            "Reverted discount on %s %s: %s restored, %s had nothing to revert, %s failed",
            target_type, target_id, result.succeeded, result.skipped, len(result.failed),
        )
        return result

    async def revert_products(self, product_ids: List[int]) -> FanOutResult:
        """Restore specific products, e.g. members that left a discounted collection."""
        result = await self._fan_out(_restore_stmt(), list(product_ids), _discounted())
        logger.info(
            "Restored %s of %s released product(s), %s failed",
            result.succeeded, result.attempted, len(result.failed),
        )
        return result

    # ---------------------------
    # HELPERS
    # ---------------------------
    async def _fan_out(self, stmt, product_ids: List[int], condition) -> FanOutResult:
        result = FanOutResult()
        for product_id in product_ids:
            result.attempted += 1
            try:
                res = await self.db.execute(stmt.where(Product.id == product_id, condition))
                await self.db.commit()
            except SQLAlchemyError as e:
                await self.db.rollback()
                logger.error("Error updating price of product %s: %s", product_id, e)
                result.failed.append(product_id)
                continue

            # Zero rows: the product already was (or no longer is) discounted
            if res.rowcount:
                result.succeeded += 1
            else:
                result.skipped += 1
        return result

    async def _require_product(self, product_id: int) -> None:
        res = await self.db.execute(select(Product.id).where(Product.id == product_id))
        if res.scalar_one_or_none() is None:
            raise NotFoundError(f"Product {product_id} not found")

    async def _require_collection(self, collection_id: int) -> None:
        res = await self.db.execute(select(Collection.id).where(Collection.id == collection_id))
        if res.scalar_one_or_none() is None:
            raise NotFoundError(f"Collection {collection_id} not found")

    async def _member_ids(self, collection_id: int, discounted_only: bool = False) -> List[int]:
        stmt = (
            select(Product.id)
            .join(collection_products, collection_products.c.product_id == Product.id)
            .where(collection_products.c.collection_id == collection_id)
            .order_by(Product.id)
        )
        if discounted_only:
            stmt = stmt.where(_discounted())
        res = await self.db.execute(stmt)
        return list(res.scalars().all())
