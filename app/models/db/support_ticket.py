"""
Support Ticket model.

Messages are stored in order inside the ticket row; they have no table
of their own.
"""

import uuid

from sqlalchemy import Column, DateTime, ForeignKey, Index, SmallInteger, String, Text
from sqlalchemy.dialects.postgresql import JSONB, UUID

from .base import Base, TimestampMixin


class SupportTicket(Base, TimestampMixin):
    """
    Customer support tickets.

    Attributes:
        user_id: Ticket owner
        order_id: Optional order the ticket is about
        category / status / priority: integer values of the ticket enums
        messages: [{"sender_id", "sender_name", "is_from_admin", "message",
            "attachments", "created_at"}] in display order
        assigned_to_admin_id: Admin handling the ticket
        closed_at: Set while the ticket is RESOLVED or CLOSED
    """

    __tablename__ = "support_tickets"

    id = Column(UUID(as_uuid=False), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(64), nullable=False)
    order_id = Column(UUID(as_uuid=False), ForeignKey("orders.id"))

    subject = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    category = Column(SmallInteger, nullable=False, default=6)
    status = Column(SmallInteger, nullable=False, default=0)
    priority = Column(SmallInteger, nullable=False, default=1)

    messages = Column(JSONB, nullable=False, default=list)
    assigned_to_admin_id = Column(String(64))
    closed_at = Column(DateTime(timezone=True))

    __table_args__ = (
        Index("idx_support_tickets_user", user_id),
        Index("idx_support_tickets_status", status),
    )

    def __repr__(self):
        return f"<SupportTicket(id='{self.id}', subject='{self.subject}', status={self.status})>"
