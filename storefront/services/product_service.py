# storefront/services/product_service.py
import logging
from typing import List

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from storefront.core.exceptions import ConflictError, NotFoundError, StoreError, ValidationError
from storefront.models.product_models import Collection, Product
from storefront.schemas.product_schemas import ProductAdminOut, ProductCreate, ProductOut, ProductUpdate
from storefront.services.discount_service import release_from_collections, remove_discounts_for_target
from storefront.services.pricing_engine import PRODUCT_TARGET
from storefront.utils.activity_helpers import record_activity

logger = logging.getLogger(__name__)


def validate_product(data: ProductCreate) -> None:
    if not data.sku:
        raise ValidationError("SKU is required")
    if not data.title:
        raise ValidationError("Title is missing")
    if not data.price:
        raise ValidationError("Price is missing")


def format_product(product: Product, lang: str | None = None, admin: bool = False) -> dict:
    """
    Shape a product for the response: admins get both languages,
    customers get the title/description in the requested language.
    """
    if admin:
        return ProductAdminOut.model_validate(product).model_dump()

    out = ProductOut.model_validate(product)
    if lang == "ar":
        out.title = product.title_ar or product.title
        out.description = product.description_ar or product.description
    return out.model_dump()


async def resolve_tags(db: AsyncSession, tags: List[str]) -> List[Collection]:
    """Collections named by the tags, created (visible) when missing."""
    collections = []
    for name in dict.fromkeys(t.strip() for t in tags if t and t.strip()):
        result = await db.execute(select(Collection).where(Collection.name == name))
        collection = result.scalars().first()
        if not collection:
            collection = Collection(name=name, show_collection=True)
            db.add(collection)
            logger.info("Created collection '%s' from product tag", name)
        collections.append(collection)
    return collections


async def _get_product_or_404(db: AsyncSession, product_id: int) -> Product:
    result = await db.execute(select(Product).where(Product.id == product_id))
    product = result.scalars().first()
    if not product:
        raise NotFoundError("Product not found")
    return product


# ---------------------------------------------------
# CREATE PRODUCT
# ---------------------------------------------------
async def create_product(db: AsyncSession, data: ProductCreate, current_user):
    """
    Create a new product, attach it to its tag collections and log the creation.
    """
    validate_product(data)
    try:
        existing = await db.execute(select(Product).where(Product.sku == data.sku))
        if existing.scalars().first():
            raise ConflictError("SKU already exists")

        product = Product(**data.model_dump(exclude={"tags"}))
        product.collections = await resolve_tags(db, data.tags)
        db.add(product)
        await db.flush()

        if current_user:
            await record_activity(
                db,
                current_user,
                f"{current_user.role.capitalize()} created product '{product.title}' (SKU: {product.sku}, ID: {product.id})"
            )

        await db.commit()
        await db.refresh(product)
        return {"message": "Product created successfully", "data": format_product(product, admin=True)}

    except HTTPException:
        await db.rollback()
        raise
    except SQLAlchemyError as e:
        await db.rollback()
        raise StoreError(f"Error creating product: {e}")


# ---------------------------------------------------
# GET ALL PRODUCTS
# ---------------------------------------------------
async def get_all_products(db: AsyncSession, lang: str | None = None, admin: bool = False) -> dict:
    result = await db.execute(select(Product).order_by(Product.id))
    products = result.scalars().all()
    return {
        "message": "Products fetched successfully",
        "data": [format_product(p, lang, admin) for p in products],
    }


# ---------------------------------------------------
# GET SINGLE PRODUCT
# ---------------------------------------------------
async def get_product(db: AsyncSession, product_id: int, lang: str | None = None, admin: bool = False) -> dict:
    product = await _get_product_or_404(db, product_id)
    return {"message": "Product fetched successfully", "data": format_product(product, lang, admin)}


# ---------------------------------------------------
# GET PRODUCTS BY IDS
# ---------------------------------------------------
async def get_products_by_ids(db: AsyncSession, product_ids: List[int], lang: str | None = None) -> dict:
    if not product_ids:
        raise ValidationError("No product IDs provided")
    result = await db.execute(select(Product).where(Product.id.in_(product_ids)).order_by(Product.id))
    return {
        "message": "Products fetched successfully",
        "data": [format_product(p, lang) for p in result.scalars().all()],
    }


# ---------------------------------------------------
# UPDATE PRODUCT
# ---------------------------------------------------
async def update_product(db: AsyncSession, product_id: int, data: ProductUpdate, current_user):
    """
    Partial update. Tags re-sync collection membership. original_price is
    only changed by the engine, when the product leaves a discounted collection.
    """
    try:
        product = await _get_product_or_404(db, product_id)

        if data.price is not None and data.price <= 0:
            raise ValidationError("Price must be positive")
        if data.stock is not None and data.stock < 0:
            raise ValidationError("Stock must be non-negative")

        changes = []

        if data.sku and data.sku != product.sku:
            existing = await db.execute(
                select(Product).where(Product.sku == data.sku, Product.id != product_id)
            )
            if existing.scalars().first():
                raise ConflictError("SKU already exists")

        update_data = data.model_dump(exclude_unset=True)
        tags = update_data.pop("tags", None)

        for key, value in update_data.items():
            if value is None:
                continue
            old_val = getattr(product, key)
            if old_val != value:
                changes.append(f"{key}: {old_val} → {value}")
                setattr(product, key, value)

        left_collections = set()
        if tags is not None:
            old_tags = product.tags
            old_ids = {c.id for c in product.collections}
            product.collections = await resolve_tags(db, tags)
            left_collections = old_ids - {c.id for c in product.collections}
            if old_tags != product.tags:
                changes.append(f"tags: {old_tags} → {product.tags}")

        if current_user and changes:
            await record_activity(
                db,
                current_user,
                f"{current_user.role.capitalize()} updated product '{product.title}' "
                        f"(ID: {product.id}) — {', '.join(changes)}"
            )

        await db.commit()
        # Leaving a discounted collection restores the price
        await release_from_collections(db, left_collections, [product_id])
        await db.refresh(product)
        return {"message": "Product updated successfully", "data": format_product(product, admin=True)}

    except HTTPException:
        await db.rollback()
        raise
    except SQLAlchemyError as e:
        await db.rollback()
        raise StoreError(f"Error updating product: {e}")


# ---------------------------------------------------
# DELETE PRODUCT
# ---------------------------------------------------
async def delete_product(db: AsyncSession, product_id: int, current_user):
    """
    Delete a product, its collection memberships and any discount aimed at it.
    """
    try:
        product = await _get_product_or_404(db, product_id)
        title = product.title

        removed = await remove_discounts_for_target(db, PRODUCT_TARGET, product_id)
        if removed:
            logger.info("Removed %s discount(s) targeting product %s", removed, product_id)

        product = await _get_product_or_404(db, product_id)
        product.collections = []
        await db.delete(product)

        if current_user:
            await record_activity(
                db,
                current_user,
                f"{current_user.role.capitalize()} deleted product '{title}' (ID: {product_id})"
            )
        await db.commit()
        return {"message": "Product deleted successfully"}

    except HTTPException:
        await db.rollback()
        raise
    except SQLAlchemyError as e:
        await db.rollback()
        raise StoreError(f"Error deleting product: {e}")
