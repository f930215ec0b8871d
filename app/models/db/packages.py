"""
Package model

`order_id` is unique: the store, not the application, guarantees a single
package per order.
"""

import uuid

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, Numeric, SmallInteger, String, Text
from sqlalchemy.dialects.postgresql import JSONB, UUID

from .base import Base, TimestampMixin


class Package(Base, TimestampMixin):
    """Physical shipments"""

    __tablename__ = "packages"

    id = Column(UUID(as_uuid=False), primary_key=True, default=lambda: str(uuid.uuid4()))
    order_id = Column(UUID(as_uuid=False), ForeignKey("orders.id"), nullable=False, unique=True)
    user_id = Column(String(64), nullable=False)

    # kg / cm
    weight = Column(Numeric(8, 3), nullable=False, default=0)
    length = Column(Numeric(8, 2), nullable=False, default=0)
    width = Column(Numeric(8, 2), nullable=False, default=0)
    height = Column(Numeric(8, 2), nullable=False, default=0)

    status = Column(SmallInteger, nullable=False, default=0)
    prepared_at = Column(DateTime(timezone=True))
    prepared_by = Column(String(64))

    carrier = Column(SmallInteger, nullable=False, default=1)
    tracking_number = Column(String(100))
    label_url = Column(String(500))
    shipped_at = Column(DateTime(timezone=True))
    delivered_at = Column(DateTime(timezone=True))

    pickup_point_id = Column(String(100))
    pickup_point_name = Column(String(255))
    pickup_point_address = Column(String(500))
    shipping_address = Column(JSONB)

    tracking_notification_sent = Column(Boolean, nullable=False, default=False)
    tracking_notification_sent_at = Column(DateTime(timezone=True))
    notes = Column(Text)

    __table_args__ = (Index("idx_packages_status", status),)

    def __repr__(self):
        return f"<Package(id='{self.id}', order_id='{self.order_id}', status={self.status})>"
