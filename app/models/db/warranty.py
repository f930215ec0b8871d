"""
Warranty claim model

(order_id, product_id) is unique: one claim per purchased product.
"""

import uuid

from sqlalchemy import Column, DateTime, ForeignKey, Index, SmallInteger, String, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import JSONB, UUID

from .base import Base, TimestampMixin


class WarrantyClaim(Base, TimestampMixin):
    __tablename__ = "warranty_claims"

    id = Column(UUID(as_uuid=False), primary_key=True, default=lambda: str(uuid.uuid4()))
    order_id = Column(UUID(as_uuid=False), ForeignKey("orders.id"), nullable=False)
    product_id = Column(String(64), nullable=False)
    product_name = Column(String(255), nullable=False, default="")
    user_id = Column(String(64), nullable=False)

    purchase_date = Column(DateTime(timezone=True), nullable=False)
    warranty_expiration_date = Column(DateTime(timezone=True), nullable=False)
    issue_description = Column(Text, nullable=False)
    photos = Column(JSONB, nullable=False, default=list)

    status = Column(SmallInteger, nullable=False, default=0)
    resolution = Column(Text)
    admin_notes = Column(Text)
    resolved_at = Column(DateTime(timezone=True))

    __table_args__ = (
        UniqueConstraint("order_id", "product_id", name="uq_warranty_claims_order_product"),
        Index("idx_warranty_claims_user", user_id),
    )

    def __repr__(self):
        return f"<WarrantyClaim(id='{self.id}', order_id='{self.order_id}', product_id='{self.product_id}')>"
