# storefront/models/product_models.py
from sqlalchemy import (
    Column, Integer, String, Float, Boolean, Text, CheckConstraint, Index,
    ForeignKey, DateTime, Table, func
)
from sqlalchemy.orm import relationship
from storefront.core.db import Base

collection_products = Table(
    "collection_products",
    Base.metadata,
    Column("collection_id", Integer, ForeignKey("collections.id", ondelete="CASCADE"), primary_key=True),
    Column("product_id", Integer, ForeignKey("products.id", ondelete="CASCADE"), primary_key=True),
)


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    sku = Column(String(100), unique=True, index=True, nullable=False)
    title = Column(String(255), nullable=False)
    title_ar = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)
    description_ar = Column(Text, nullable=True)
    price = Column(Float, default=0.0, nullable=False)
    # Set only while a discount is active; owned by PriceDiscountEngine
    original_price = Column(Float, nullable=True)
    image = Column(String(500), nullable=True)
    stock = Column(Integer, default=0, nullable=False)

    collections = relationship(
        "Collection",
        secondary=collection_products,
        back_populates="products",
        lazy="selectin",
    )

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        CheckConstraint(price >= 0, name="check_product_price_non_negative"),
        CheckConstraint(stock >= 0, name="check_product_stock_non_negative"),
    )

    @property
    def tags(self):
        return [c.name for c in self.collections]

    @property
    def has_active_discount(self) -> bool:
        return bool(self.original_price)

    def __repr__(self):
        return f"<Product(id={self.id}, sku='{self.sku}')>"


class Collection(Base):
    __tablename__ = "collections"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, index=True, nullable=False)
    show_collection = Column(Boolean, default=True, nullable=False)

    products = relationship(
        "Product",
        secondary=collection_products,
        back_populates="collections",
        lazy="selectin",
    )

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index("ix_collection_visible", "show_collection"),
    )

    @property
    def product_ids(self):
        return [p.id for p in self.products]

    def __repr__(self):
        return f"<Collection(id={self.id}, name='{self.name}')>"
