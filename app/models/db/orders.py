"""
Order model

Items and the shipping address are embedded JSONB snapshots; they are
owned by the order and never reference the cart or the address book.
"""

import uuid

from sqlalchemy import Column, DateTime, Index, Numeric, SmallInteger, String, Text
from sqlalchemy.dialects.postgresql import JSONB, UUID

from .base import Base, TimestampMixin


class Order(Base, TimestampMixin):
    """Customer orders"""

    __tablename__ = "orders"

    id = Column(UUID(as_uuid=False), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(64), nullable=False)
    contact_email = Column(String(255))

    # [{"product_id", "product_name", "quantity", "price"}]
    items = Column(JSONB, nullable=False, default=list)
    total_amount = Column(Numeric(12, 2), nullable=False, default=0)
    currency = Column(String(3), nullable=False, default="USD")

    # Status (integer wire values of OrderStatus / PaymentStatus / ReturnStatus)
    status = Column(SmallInteger, nullable=False, default=0)
    payment_status = Column(SmallInteger, nullable=False, default=0)
    payment_intent_id = Column(String(255), unique=True)

    shipping_address = Column(JSONB)

    # Shipping
    tracking_number = Column(String(100))
    carrier_name = Column(String(50))
    shipped_at = Column(DateTime(timezone=True))
    estimated_delivery_date = Column(DateTime(timezone=True))
    delivered_at = Column(DateTime(timezone=True))
    cancelled_at = Column(DateTime(timezone=True))

    # Returns
    return_status = Column(SmallInteger, nullable=False, default=0)
    return_deadline = Column(DateTime(timezone=True))
    return_requested_at = Column(DateTime(timezone=True))
    return_reason = Column(Text)

    __table_args__ = (
        Index("idx_orders_user", user_id),
        Index("idx_orders_status", status),
        Index("idx_orders_return_status", return_status),
    )

    def __repr__(self):
        return f"<Order(id='{self.id}', status={self.status}, total={self.total_amount})>"
