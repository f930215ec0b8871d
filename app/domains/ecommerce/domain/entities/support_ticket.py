"""
Support Ticket Entity

Customer issue thread with an ordered, append-only list of messages.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from app.core.domain import AggregateRoot, ValidationException, utcnow

from ..value_objects.ticket_status import TicketCategory, TicketPriority, TicketStatus


@dataclass(frozen=True)
class TicketMessage:
    """A single message; embedded in its ticket and never addressed on its own."""

    sender_id: str
    sender_name: str
    is_from_admin: bool
    message: str
    attachments: tuple[str, ...] = ()
    created_at: datetime = field(default_factory=utcnow)

    def to_dict(self) -> dict[str, Any]:
        return {
            "sender_id": self.sender_id,
            "sender_name": self.sender_name,
            "is_from_admin": self.is_from_admin,
            "message": self.message,
            "attachments": list(self.attachments),
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TicketMessage":
        created_at = data.get("created_at")
        return cls(
            sender_id=data["sender_id"],
            sender_name=data.get("sender_name", ""),
            is_from_admin=bool(data.get("is_from_admin", False)),
            message=data["message"],
            attachments=tuple(data.get("attachments") or ()),
            created_at=datetime.fromisoformat(created_at) if created_at else utcnow(),
        )


@dataclass
class SupportTicket(AggregateRoot[str]):
    """
    Support ticket aggregate.

    Status rules when a message is appended:
    - admin reply on an OPEN ticket -> IN_PROGRESS
    - owner reply on WAITING_CUSTOMER, RESOLVED or CLOSED -> IN_PROGRESS
    """

    user_id: str = ""
    order_id: str | None = None
    subject: str = ""
    description: str = ""
    category: TicketCategory = TicketCategory.OTHER
    status: TicketStatus = TicketStatus.OPEN
    priority: TicketPriority = TicketPriority.MEDIUM
    messages: list[TicketMessage] = field(default_factory=list)
    assigned_to_admin_id: str | None = None
    closed_at: datetime | None = None

    @classmethod
    def open(
        cls,
        user_id: str,
        sender_name: str,
        subject: str,
        description: str,
        category: TicketCategory = TicketCategory.OTHER,
        priority: TicketPriority = TicketPriority.MEDIUM,
        order_id: str | None = None,
        attachments: list[str] | None = None,
    ) -> "SupportTicket":
        """New OPEN ticket whose first message is the description."""
        if not subject or not subject.strip():
            raise ValidationException("Subject is required", field="subject")
        if not description or not description.strip():
            raise ValidationException("Description is required", field="description")
        ticket = cls(
            user_id=user_id,
            order_id=order_id,
            subject=subject.strip(),
            description=description.strip(),
            category=category,
            priority=priority,
        )
        ticket.messages.append(
            TicketMessage(
                sender_id=user_id,
                sender_name=sender_name,
                is_from_admin=False,
                message=ticket.description,
                attachments=tuple(attachments or ()),
                created_at=ticket.created_at,
            )
        )
        return ticket

    def add_message(
        self,
        sender_id: str,
        sender_name: str,
        is_admin: bool,
        text: str,
        attachments: list[str] | None = None,
        now: datetime | None = None,
    ) -> TicketMessage:
        if not text or not text.strip():
            raise ValidationException("Message cannot be empty", field="message")

        message = TicketMessage(
            sender_id=sender_id,
            sender_name=sender_name,
            is_from_admin=is_admin,
            message=text.strip(),
            attachments=tuple(attachments or ()),
            created_at=now or utcnow(),
        )
        self.messages.append(message)

        if is_admin and self.status == TicketStatus.OPEN:
            self.status = TicketStatus.IN_PROGRESS
        elif not is_admin and sender_id == self.user_id and self.status in (
            TicketStatus.WAITING_CUSTOMER,
            TicketStatus.RESOLVED,
            TicketStatus.CLOSED,
        ):
            self.status = TicketStatus.IN_PROGRESS
            self.closed_at = None

        self.touch()
        return message

    def assign_to(self, admin_id: str) -> None:
        self.assigned_to_admin_id = admin_id
        self.touch()

    def set_status(self, new_status: TicketStatus, now: datetime | None = None) -> None:
        self.status = new_status
        self.closed_at = (now or utcnow()) if new_status.is_closed() else None
        self.touch()

    def set_priority(self, priority: TicketPriority) -> None:
        self.priority = priority
        self.touch()
