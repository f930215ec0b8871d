"""
Order Status Value Objects for E-commerce Domain

Order, payment and return lifecycles with their transition rules.
Wire values are the integer positions of each member.
"""

from app.core.domain import StatusEnum


class OrderStatus(StatusEnum):
    """
    Order lifecycle states.

    Valid transitions:
    - PENDING -> PROCESSING, CANCELLED
    - PROCESSING -> SHIPPED, CANCELLED
    - SHIPPED -> DELIVERED
    - DELIVERED -> RETURN_REQUESTED
    - RETURN_REQUESTED -> RETURNED (return refunded), DELIVERED (return rejected)
    - CANCELLED, RETURNED -> (terminal states)
    """

    PENDING = 0
    PROCESSING = 1
    SHIPPED = 2
    DELIVERED = 3
    CANCELLED = 4
    RETURN_REQUESTED = 5
    RETURNED = 6

    @classmethod
    def transition_table(cls):
        return _ORDER_TRANSITIONS

    def is_active(self) -> bool:
        """Order can still be cancelled."""
        return self in (OrderStatus.PENDING, OrderStatus.PROCESSING)

    def allows_return_status(self) -> bool:
        """Statuses in which a return may be on record."""
        return self in (OrderStatus.DELIVERED, OrderStatus.RETURN_REQUESTED, OrderStatus.RETURNED)


class PaymentStatus(StatusEnum):
    """
    Payment status for orders.

    Valid transitions:
    - PENDING -> COMPLETED, FAILED
    - FAILED -> COMPLETED (customer retried)
    - COMPLETED -> REFUNDED
    """

    PENDING = 0
    COMPLETED = 1
    FAILED = 2
    REFUNDED = 3

    @classmethod
    def transition_table(cls):
        return _PAYMENT_TRANSITIONS

    def is_successful(self) -> bool:
        return self == PaymentStatus.COMPLETED

    def is_settled(self) -> bool:
        """Money was captured, even if refunded since."""
        return self in (PaymentStatus.COMPLETED, PaymentStatus.REFUNDED)


class ReturnStatus(StatusEnum):
    """
    Return sub-state of an order.

    Valid transitions:
    - NONE -> REQUESTED
    - REQUESTED -> APPROVED, REJECTED
    - APPROVED -> IN_TRANSIT
    - IN_TRANSIT -> RECEIVED
    - RECEIVED -> REFUNDED
    """

    NONE = 0
    REQUESTED = 1
    APPROVED = 2
    IN_TRANSIT = 3
    RECEIVED = 4
    REFUNDED = 5
    REJECTED = 6

    @classmethod
    def transition_table(cls):
        return _RETURN_TRANSITIONS


_ORDER_TRANSITIONS = {
    OrderStatus.PENDING: frozenset({OrderStatus.PROCESSING, OrderStatus.CANCELLED}),
    OrderStatus.PROCESSING: frozenset({OrderStatus.SHIPPED, OrderStatus.CANCELLED}),
    OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED}),
    OrderStatus.DELIVERED: frozenset({OrderStatus.RETURN_REQUESTED}),
    OrderStatus.RETURN_REQUESTED: frozenset({OrderStatus.RETURNED, OrderStatus.DELIVERED}),
}

_PAYMENT_TRANSITIONS = {
    PaymentStatus.PENDING: frozenset({PaymentStatus.COMPLETED, PaymentStatus.FAILED}),
    PaymentStatus.FAILED: frozenset({PaymentStatus.COMPLETED}),
    PaymentStatus.COMPLETED: frozenset({PaymentStatus.REFUNDED}),
}

_RETURN_TRANSITIONS = {
    ReturnStatus.NONE: frozenset({ReturnStatus.REQUESTED}),
    ReturnStatus.REQUESTED: frozenset({ReturnStatus.APPROVED, ReturnStatus.REJECTED}),
    ReturnStatus.APPROVED: frozenset({ReturnStatus.IN_TRANSIT}),
    ReturnStatus.IN_TRANSIT: frozenset({ReturnStatus.RECEIVED}),
    ReturnStatus.RECEIVED: frozenset({ReturnStatus.REFUNDED}),
}
