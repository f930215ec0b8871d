"""
Support ticket enums.

Ticket status has no transition table: admins may move a ticket between
any two states, and customer replies reopen it.
"""

from app.core.domain import StatusEnum


class TicketStatus(StatusEnum):
    OPEN = 0
    IN_PROGRESS = 1
    WAITING_CUSTOMER = 2
    RESOLVED = 3
    CLOSED = 4

    def is_closed(self) -> bool:
        return self in (TicketStatus.RESOLVED, TicketStatus.CLOSED)


class TicketPriority(StatusEnum):
    LOW = 0
    MEDIUM = 1
    HIGH = 2
    URGENT = 3


class TicketCategory(StatusEnum):
    ORDER = 0
    PRODUCT = 1
    DELIVERY = 2
    RETURN = 3
    TECHNICAL = 4
    PAYMENT = 5
    OTHER = 6
