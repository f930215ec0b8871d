"""Create storefront schema.

Revision ID: 001_storefront_schema
Revises:
Create Date: 2026-10-19

Creates the tables used by ordering and after-sales:
- products, carts
- orders
- packages (one per order)
- support_tickets (messages embedded as JSONB)
- warranty_claims (one per order/product)

Unique constraints are named explicitly; the repositories map violations of
these names to duplicate-entity errors.
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001_storefront_schema"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def upgrade() -> None:
    op.create_table(
        "products",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("price", sa.Numeric(12, 2), nullable=False),
        sa.Column("stock", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("warranty_months", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.CheckConstraint("stock >= 0", name="ck_products_stock_non_negative"),
    )

    op.create_table(
        "carts",
        sa.Column("id", postgresql.UUID(as_uuid=False), primary_key=True),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("items", postgresql.JSONB(), nullable=False, server_default="[]"),
        *_timestamps(),
        sa.UniqueConstraint("user_id", name="carts_user_id_key"),
    )

    op.create_table(
        "orders",
        sa.Column("id", postgresql.UUID(as_uuid=False), primary_key=True),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("contact_email", sa.String(255)),
        sa.Column("items", postgresql.JSONB(), nullable=False, server_default="[]"),
        sa.Column("total_amount", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("currency", sa.String(3), nullable=False, server_default="USD"),
        sa.Column("status", sa.SmallInteger(), nullable=False, server_default="0"),
        sa.Column("payment_status", sa.SmallInteger(), nullable=False, server_default="0"),
        sa.Column("payment_intent_id", sa.String(255)),
        sa.Column("shipping_address", postgresql.JSONB()),
        sa.Column("tracking_number", sa.String(100)),
        sa.Column("carrier_name", sa.String(50)),
        sa.Column("shipped_at", sa.DateTime(timezone=True)),
        sa.Column("estimated_delivery_date", sa.DateTime(timezone=True)),
        sa.Column("delivered_at", sa.DateTime(timezone=True)),
        sa.Column("cancelled_at", sa.DateTime(timezone=True)),
        sa.Column("return_status", sa.SmallInteger(), nullable=False, server_default="0"),
        sa.Column("return_deadline", sa.DateTime(timezone=True)),
        sa.Column("return_requested_at", sa.DateTime(timezone=True)),
        sa.Column("return_reason", sa.Text()),
        *_timestamps(),
        sa.UniqueConstraint("payment_intent_id", name="orders_payment_intent_id_key"),
    )
    op.create_index("idx_orders_user", "orders", ["user_id"])
    op.create_index("idx_orders_status", "orders", ["status"])
    op.create_index("idx_orders_return_status", "orders", ["return_status"])

    op.create_table(
        "packages",
        sa.Column("id", postgresql.UUID(as_uuid=False), primary_key=True),
        sa.Column("order_id", postgresql.UUID(as_uuid=False), sa.ForeignKey("orders.id"), nullable=False),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("weight", sa.Numeric(8, 3), nullable=False, server_default="0"),
        sa.Column("length", sa.Numeric(8, 2), nullable=False, server_default="0"),
        sa.Column("width", sa.Numeric(8, 2), nullable=False, server_default="0"),
        sa.Column("height", sa.Numeric(8, 2), nullable=False, server_default="0"),
        sa.Column("status", sa.SmallInteger(), nullable=False, server_default="0"),
        sa.Column("prepared_at", sa.DateTime(timezone=True)),
        sa.Column("prepared_by", sa.String(64)),
        sa.Column("carrier", sa.SmallInteger(), nullable=False, server_default="1"),
        sa.Column("tracking_number", sa.String(100)),
        sa.Column("label_url", sa.String(500)),
        sa.Column("shipped_at", sa.DateTime(timezone=True)),
        sa.Column("delivered_at", sa.DateTime(timezone=True)),
        sa.Column("pickup_point_id", sa.String(100)),
        sa.Column("pickup_point_name", sa.String(255)),
        sa.Column("pickup_point_address", sa.String(500)),
        sa.Column("shipping_address", postgresql.JSONB()),
        sa.Column("tracking_notification_sent", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("tracking_notification_sent_at", sa.DateTime(timezone=True)),
        sa.Column("notes", sa.Text()),
        *_timestamps(),
        sa.UniqueConstraint("order_id", name="packages_order_id_key"),
    )
    op.create_index("idx_packages_status", "packages", ["status"])

    op.create_table(
        "support_tickets",
        sa.Column("id", postgresql.UUID(as_uuid=False), primary_key=True),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("order_id", postgresql.UUID(as_uuid=False), sa.ForeignKey("orders.id")),
        sa.Column("subject", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("category", sa.SmallInteger(), nullable=False, server_default="6"),
        sa.Column("status", sa.SmallInteger(), nullable=False, server_default="0"),
        sa.Column("priority", sa.SmallInteger(), nullable=False, server_default="1"),
        sa.Column("messages", postgresql.JSONB(), nullable=False, server_default="[]"),
        sa.Column("assigned_to_admin_id", sa.String(64)),
        sa.Column("closed_at", sa.DateTime(timezone=True)),
        *_timestamps(),
    )
    op.create_index("idx_support_tickets_user", "support_tickets", ["user_id"])
    op.create_index("idx_support_tickets_status", "support_tickets", ["status"])

    op.create_table(
        "warranty_claims",
        sa.Column("id", postgresql.UUID(as_uuid=False), primary_key=True),
        sa.Column("order_id", postgresql.UUID(as_uuid=False), sa.ForeignKey("orders.id"), nullable=False),
        sa.Column("product_id", sa.String(64), nullable=False),
        sa.Column("product_name", sa.String(255), nullable=False, server_default=""),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("purchase_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("warranty_expiration_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("issue_description", sa.Text(), nullable=False),
        sa.Column("photos", postgresql.JSONB(), nullable=False, server_default="[]"),
        sa.Column("status", sa.SmallInteger(), nullable=False, server_default="0"),
        sa.Column("resolution", sa.Text()),
        sa.Column("admin_notes", sa.Text()),
        sa.Column("resolved_at", sa.DateTime(timezone=True)),
        *_timestamps(),
        sa.UniqueConstraint("order_id", "product_id", name="uq_warranty_claims_order_product"),
    )
    op.create_index("idx_warranty_claims_user", "warranty_claims", ["user_id"])


def downgrade() -> None:
    op.drop_table("warranty_claims")
    op.drop_table("support_tickets")
    op.drop_table("packages")
    op.drop_table("orders")
    op.drop_table("carts")
    op.drop_table("products")
