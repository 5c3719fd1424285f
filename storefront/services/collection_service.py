# storefront/services/collection_service.py
import logging
from typing import List

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload

from storefront.core.exceptions import ConflictError, NotFoundError, StoreError, ValidationError
from storefront.models.product_models import Collection, Product, collection_products
from storefront.schemas.collection_schemas import CollectionCreate, CollectionOut, CollectionUpdate
from storefront.services.discount_service import release_from_collections, remove_discounts_for_target
from storefront.services.pricing_engine import COLLECTION_TARGET
from storefront.services.product_service import format_product
from storefront.utils.activity_helpers import record_activity

logger = logging.getLogger(__name__)


async def _load_products(db: AsyncSession, product_ids: List[int]) -> List[Product]:
    ids = list(dict.fromkeys(product_ids))
    if not ids:
        return []
    result = await db.execute(select(Product).where(Product.id.in_(ids)))
    products = result.scalars().all()
    missing = set(ids) - {p.id for p in products}
    if missing:
        raise ValidationError(f"Unknown product ids: {sorted(missing)}")
    return list(products)


async def _get_collection_or_404(db: AsyncSession, collection_id: int, visible_only: bool = False) -> Collection:
    stmt = select(Collection).where(Collection.id == collection_id)
    if visible_only:
        stmt = stmt.where(Collection.show_collection == True)
    result = await db.execute(stmt)
    collection = result.scalars().first()
    if not collection:
        detail = "Collection not found or hidden" if visible_only else "Collection not found"
        raise NotFoundError(detail)
    return collection


# --------------------------
# CREATE COLLECTION
# --------------------------
async def create_collection(db: AsyncSession, data: CollectionCreate, current_user):
    try:
        existing = await db.execute(select(Collection).where(Collection.name == data.name))
        if existing.scalars().first():
            raise ConflictError("Collection name already exists")

        collection = Collection(name=data.name, show_collection=data.show_collection)
        collection.products = await _load_products(db, data.product_ids)
        db.add(collection)
        await db.flush()

        await record_activity(
            db,
            current_user,
            f"Created collection '{collection.name}' (ID: {collection.id}) with {len(collection.products)} products"
        )
        await db.commit()
        await db.refresh(collection)
        return {"message": "Collection created successfully", "data": CollectionOut.model_validate(collection)}

    except HTTPException:
        await db.rollback()
        raise
    except SQLAlchemyError as e:
        await db.rollback()
        raise StoreError(f"Error creating collection: {e}")


# --------------------------
# LIST / GET
# --------------------------
async def get_collections(db: AsyncSession, include_hidden: bool = False):
    stmt = select(Collection).order_by(Collection.id)
    if not include_hidden:
        stmt = stmt.where(Collection.show_collection == True)
    result = await db.execute(stmt)
    return {
        "message": "Collections fetched successfully",
        "data": [CollectionOut.model_validate(c) for c in result.scalars().all()],
    }


async def get_collection(db: AsyncSession, collection_id: int):
    collection = await _get_collection_or_404(db, collection_id, visible_only=True)
    return {"message": "Collection fetched successfully", "data": CollectionOut.model_validate(collection)}


async def get_collection_products(db: AsyncSession, collection_id: int, lang: str | None = None):
    exists = await db.execute(select(Collection.id).where(Collection.id == collection_id))
    if exists.scalar_one_or_none() is None:
        raise NotFoundError("Collection not found")

    # Members need their own collections loaded for the tags field
    result = await db.execute(
        select(Product)
        .join(collection_products, collection_products.c.product_id == Product.id)
        .where(collection_products.c.collection_id == collection_id)
        .options(selectinload(Product.collections))
        .order_by(Product.id)
    )
    products = result.scalars().all()
    return {
        "message": "Products fetched successfully",
        "data": [format_product(p, lang) for p in products],
    }


# --------------------------
# UPDATE COLLECTION
# --------------------------
async def update_collection(db: AsyncSession, collection_id: int, data: CollectionUpdate, current_user):
    """
    Products dropped from the collection get their price restored when a
    discount on the collection no longer covers them. Products added later
    are not re-priced.
    """
    try:
        collection = await _get_collection_or_404(db, collection_id)
        changes = []

        if data.name and data.name != collection.name:
            existing = await db.execute(
                select(Collection).where(Collection.name == data.name, Collection.id != collection_id)
            )
            if existing.scalars().first():
                raise ConflictError("Collection name already exists")
            changes.append(f"name: {collection.name} → {data.name}")
            collection.name = data.name

        if data.show_collection is not None and data.show_collection != collection.show_collection:
            changes.append(f"show_collection: {collection.show_collection} → {data.show_collection}")
            collection.show_collection = data.show_collection

        removed_ids = set()
        if data.product_ids is not None:
            old_ids = sorted(collection.product_ids)
            collection.products = await _load_products(db, data.product_ids)
            if old_ids != sorted(collection.product_ids):
                changes.append(f"product_ids: {old_ids} → {sorted(collection.product_ids)}")
            removed_ids = set(old_ids) - set(collection.product_ids)

        if changes:
            await record_activity(
                db,
                current_user,
                f"Updated collection (ID: {collection.id}) — {', '.join(changes)}"
            )

        await db.commit()
        await release_from_collections(db, [collection_id], sorted(removed_ids))
        await db.refresh(collection)
        return {"message": "Collection updated successfully", "data": CollectionOut.model_validate(collection)}

    except HTTPException:
        await db.rollback()
        raise
    except SQLAlchemyError as e:
        await db.rollback()
        raise StoreError(f"Error updating collection: {e}")


# --------------------------
# DELETE COLLECTION
# --------------------------
async def delete_collection(db: AsyncSession, collection_id: int, current_user):
    try:
        collection = await _get_collection_or_404(db, collection_id)
        name = collection.name

        # Restore member prices while membership still exists
        removed = await remove_discounts_for_target(db, COLLECTION_TARGET, collection_id)
        if removed:
            logger.info("Removed %s discount(s) targeting collection %s", removed, collection_id)

        collection = await _get_collection_or_404(db, collection_id)
        collection.products = []
        await db.delete(collection)

        await record_activity(
            db,
            current_user,
            f"Deleted collection '{name}' (ID: {collection_id})"
        )
        await db.commit()
        return {"message": "Collection deleted successfully"}

    except HTTPException:
        await db.rollback()
        raise
    except SQLAlchemyError as e:
        await db.rollback()
        raise StoreError(f"Error deleting collection: {e}")
