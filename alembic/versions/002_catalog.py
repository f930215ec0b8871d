"""Add catalog: categories, product merchandising fields, shipping methods.

Revision ID: 002_catalog
Revises: 001_storefront_schema
Create Date: 2026-10-19
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "002_catalog"
down_revision: Union[str, Sequence[str], None] = "001_storefront_schema"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def upgrade() -> None:
    op.create_table(
        "categories",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column("parent_category_id", sa.String(64), sa.ForeignKey("categories.id")),
        sa.Column("image_url", sa.String(500)),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_index("idx_categories_parent", "categories", ["parent_category_id"])

    op.add_column("products", sa.Column("description", sa.Text(), nullable=False, server_default=""))
    op.add_column("products", sa.Column("category_id", sa.String(64), sa.ForeignKey("categories.id")))
    op.add_column("products", sa.Column("images", postgresql.JSONB(), nullable=False, server_default="[]"))
    op.add_column(
        "products", sa.Column("specifications", postgresql.JSONB(), nullable=False, server_default="{}")
    )
    op.add_column("products", sa.Column("is_featured", sa.Boolean(), nullable=False, server_default=sa.false()))
    op.add_column("products", sa.Column("is_new", sa.Boolean(), nullable=False, server_default=sa.true()))
    op.add_column("products", sa.Column("warranty_type", sa.String(50), nullable=False, server_default="Légale"))
    op.alter_column("products", "warranty_months", server_default="24")
    op.create_index("idx_products_category", "products", ["category_id"])
    op.create_index("idx_products_featured", "products", ["is_featured", "is_active"])

    op.create_table(
        "shipping_methods",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column("price", sa.Numeric(12, 2), nullable=False),
        sa.Column("min_delivery_days", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("max_delivery_days", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("carrier", sa.SmallInteger()),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.CheckConstraint("min_delivery_days <= max_delivery_days", name="ck_shipping_methods_delivery_window"),
    )


def downgrade() -> None:
    op.drop_table("shipping_methods")
    op.drop_index("idx_products_featured", table_name="products")
    op.drop_index("idx_products_category", table_name="products")
    op.alter_column("products", "warranty_months", server_default="0")
    for column in ("warranty_type", "is_new", "is_featured", "specifications", "images", "category_id", "description"):
        op.drop_column("products", column)
    op.drop_index("idx_categories_parent", table_name="categories")
    op.drop_table("categories")
