"""
Catalog models: categories, products, shipping methods and carts.
"""

import uuid

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    SmallInteger,
    String,
    Text,
)
from sqlalchemy.dialects.postgresql import JSONB, UUID

from .base import Base, TimestampMixin


class Category(Base, TimestampMixin):
    """Product categories; parent_category_id links a subcategory to its parent"""

    __tablename__ = "categories"

    id = Column(String(64), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    parent_category_id = Column(String(64), ForeignKey("categories.id"))
    image_url = Column(String(500))
    is_active = Column(Boolean, nullable=False, default=True)

    __table_args__ = (Index("idx_categories_parent", parent_category_id),)

    def __repr__(self):
        return f"<Category(id='{self.id}', name='{self.name}')>"


class Product(Base, TimestampMixin):
    """Products (merchandising, price, stock and warranty terms)"""

    __tablename__ = "products"

    id = Column(String(64), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    price = Column(Numeric(12, 2), nullable=False)
    stock = Column(Integer, nullable=False, default=0)
    category_id = Column(String(64), ForeignKey("categories.id"))
    images = Column(JSONB, nullable=False, default=list)
    specifications = Column(JSONB, nullable=False, default=dict)
    is_featured = Column(Boolean, nullable=False, default=False)
    is_new = Column(Boolean, nullable=False, default=True)
    warranty_months = Column(Integer, nullable=False, default=24)
    warranty_type = Column(String(50), nullable=False, default="Légale")
    is_active = Column(Boolean, nullable=False, default=True)

    __table_args__ = (
        CheckConstraint("stock >= 0", name="ck_products_stock_non_negative"),
        Index("idx_products_category", category_id),
        Index("idx_products_featured", is_featured, is_active),
    )

    def __repr__(self):
        return f"<Product(id='{self.id}', name='{self.name}', stock={self.stock})>"


class ShippingMethod(Base, TimestampMixin):
    """Delivery options offered at checkout"""

    __tablename__ = "shipping_methods"

    id = Column(String(64), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    price = Column(Numeric(12, 2), nullable=False)
    min_delivery_days = Column(Integer, nullable=False, default=1)
    max_delivery_days = Column(Integer, nullable=False, default=1)
    carrier = Column(SmallInteger)
    is_active = Column(Boolean, nullable=False, default=True)

    __table_args__ = (
        CheckConstraint("min_delivery_days <= max_delivery_days", name="ck_shipping_methods_delivery_window"),
    )

    def __repr__(self):
        return f"<ShippingMethod(id='{self.id}', name='{self.name}')>"


class Cart(Base, TimestampMixin):
    """One cart per user; items is [{"product_id", "quantity"}]"""

    __tablename__ = "carts"

    id = Column(UUID(as_uuid=False), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(64), nullable=False, unique=True)
    items = Column(JSONB, nullable=False, default=list)

    def __repr__(self):
        return f"<Cart(user_id='{self.user_id}', items={len(self.items or [])})>"
