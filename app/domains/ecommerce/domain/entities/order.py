"""
Order Entity for E-commerce Domain

A confirmed purchase: item snapshot, payment, fulfillment and return state.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Any

from app.core.domain import (
    Address,
    AggregateRoot,
    InvalidOperationException,
    InvalidTransitionException,
    Money,
    ValidationException,
    utcnow,
)

from ..value_objects.order_status import OrderStatus, PaymentStatus, ReturnStatus


@dataclass
class OrderItem:
    """
    Line item copied from the cart at checkout.

    Price is the unit price at the time of purchase.
    """

    product_id: str
    product_name: str
    quantity: int
    price: Decimal

    def __post_init__(self):
        if not isinstance(self.price, Decimal):
            self.price = Decimal(str(self.price))
        if self.quantity <= 0:
            raise ValidationException("Quantity must be positive", field="quantity")

    @property
    def subtotal(self) -> Decimal:
        return self.price * self.quantity

    def to_dict(self) -> dict[str, Any]:
        return {
            "product_id": self.product_id,
            "product_name": self.product_name,
            "quantity": self.quantity,
            "price": str(self.price),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "OrderItem":
        return cls(
            product_id=data["product_id"],
            product_name=data.get("product_name", ""),
            quantity=int(data["quantity"]),
            price=Decimal(str(data["price"])),
        )


@dataclass
class Order(AggregateRoot[str]):
    """
    Order aggregate root.

    Owns its item list and the shipping address snapshot. Every status
    change goes through `OrderStatus`'s transition table.

    Example:
        ```python
        order = Order.from_cart_snapshot(user_id="u-1", items=items, shipping_address=address)
        order.attach_payment_intent("pi_123")
        order.confirm_payment()          # -> PROCESSING / COMPLETED
        order.transition_to(OrderStatus.SHIPPED)
        ```
    """

    user_id: str = ""
    items: list[OrderItem] = field(default_factory=list)
    total_amount: Decimal = Decimal("0")
    currency: str = "USD"
    contact_email: str | None = None

    status: OrderStatus = OrderStatus.PENDING
    payment_status: PaymentStatus = PaymentStatus.PENDING
    payment_intent_id: str | None = None

    shipping_address: Address | None = None

    # Shipping
    tracking_number: str | None = None
    carrier_name: str | None = None
    shipped_at: datetime | None = None
    estimated_delivery_date: datetime | None = None
    delivered_at: datetime | None = None
    cancelled_at: datetime | None = None

    # Returns
    return_status: ReturnStatus = ReturnStatus.NONE
    return_deadline: datetime | None = None
    return_requested_at: datetime | None = None
    return_reason: str | None = None

    @classmethod
    def from_cart_snapshot(
        cls,
        user_id: str,
        items: list[OrderItem],
        shipping_address: Address,
        contact_email: str | None = None,
        currency: str = "USD",
    ) -> "Order":
        """Build a Pending order from priced cart lines."""
        if not items:
            raise ValidationException("Cannot create an order from an empty cart", field="items")
        order = cls(
            user_id=user_id,
            items=list(items),
            shipping_address=shipping_address,
            contact_email=contact_email,
            currency=currency,
        )
        order.total_amount = sum((item.subtotal for item in order.items), Decimal("0"))
        return order

    @property
    def total(self) -> Money:
        return Money(amount=self.total_amount, currency=self.currency)

    # Status transitions

    def transition_to(
        self,
        new_status: OrderStatus,
        now: datetime | None = None,
        return_window: timedelta | None = None,
    ) -> None:
        """
        Move the order along its lifecycle.

        Leaving RETURN_REQUESTED settles the open return: back to DELIVERED
        rejects it, RETURNED refunds it.

        Raises:
            InvalidTransitionException: If `new_status` is not a legal successor
                or the return/payment state does not allow it
        """
        if not self.status.can_transition_to(new_status):
            raise InvalidTransitionException("Order", self.status.name, new_status.name)
        if new_status == OrderStatus.RETURN_REQUESTED and self.return_status != ReturnStatus.NONE:
            raise InvalidTransitionException(
                "Order",
                self.status.name,
                new_status.name,
                message="A return has already been requested for this order",
            )
        if self.status == OrderStatus.RETURN_REQUESTED:
            self._settle_return(new_status)

        now = now or utcnow()
        if new_status == OrderStatus.DELIVERED and self.status == OrderStatus.SHIPPED:
            self.delivered_at = now
            if return_window is not None:
                self.return_deadline = now + return_window
        elif new_status == OrderStatus.SHIPPED:
            self.shipped_at = self.shipped_at or now
        elif new_status == OrderStatus.CANCELLED:
            self.cancelled_at = now
        elif new_status == OrderStatus.RETURN_REQUESTED and self.return_status == ReturnStatus.NONE:
            self.return_status = ReturnStatus.REQUESTED
            self.return_requested_at = now

        self.status = new_status
        self.touch()

    def attach_payment_intent(self, payment_intent_id: str) -> None:
        if self.status != OrderStatus.PENDING or self.payment_status == PaymentStatus.COMPLETED:
            raise InvalidOperationException(
                operation="create_payment_intent",
                current_state=f"{self.status.name}/{self.payment_status.name}",
                message="Payment can only be started for unpaid pending orders",
            )
        self.payment_intent_id = payment_intent_id
        self.touch()

    def is_paid(self) -> bool:
        return self.payment_status == PaymentStatus.COMPLETED

    def confirm_payment(self) -> bool:
        """
        Record a successful payment.

        Returns:
            False when the payment was already settled, whatever the order
            status (nothing changes)
        """
        if self.payment_status.is_settled():
            return False
        if not self.status.can_transition_to(OrderStatus.PROCESSING):
            raise InvalidTransitionException("Order", self.status.name, OrderStatus.PROCESSING.name)
        self._set_payment_status(PaymentStatus.COMPLETED)
        self.transition_to(OrderStatus.PROCESSING)
        return True

    def mark_payment_failed(self) -> None:
        if self.payment_status == PaymentStatus.FAILED:
            return
        self._set_payment_status(PaymentStatus.FAILED)
        self.touch()

    def _set_payment_status(self, new_status: PaymentStatus) -> None:
        if not self.payment_status.can_transition_to(new_status):
            raise InvalidTransitionException("Payment", self.payment_status.name, new_status.name)
        self.payment_status = new_status

    def record_shipment(
        self,
        tracking_number: str,
        carrier_name: str,
        estimated_delivery_date: datetime | None = None,
        now: datetime | None = None,
    ) -> None:
        """Store carrier details and move a Processing order to Shipped."""
        if self.status == OrderStatus.PROCESSING:
            self.transition_to(OrderStatus.SHIPPED, now=now)
        elif self.status != OrderStatus.SHIPPED:
            raise InvalidTransitionException("Order", self.status.name, OrderStatus.SHIPPED.name)
        self.tracking_number = tracking_number
        self.carrier_name = carrier_name
        if estimated_delivery_date is not None:
            self.estimated_delivery_date = estimated_delivery_date
        self.touch()

    # Returns

    def can_return(self, now: datetime | None = None) -> bool:
        now = now or utcnow()
        return (
            self.status == OrderStatus.DELIVERED
            and self.return_status == ReturnStatus.NONE
            and self.return_deadline is not None
            and now <= self.return_deadline
        )

    def request_return(self, reason: str, now: datetime | None = None) -> None:
        """
        Open a return on a delivered order.

        Raises:
            InvalidTransitionException: If the order is not Delivered, already
                has a return on record or the deadline has passed
        """
        now = now or utcnow()
        if not reason or not reason.strip():
            raise ValidationException("A return reason is required", field="reason")
        if not self.can_return(now):
            raise InvalidTransitionException(
                "Order",
                self.status.name,
                OrderStatus.RETURN_REQUESTED.name,
                message=self._return_refusal_reason(now),
            )
        self.return_status = ReturnStatus.REQUESTED
        self.return_reason = reason.strip()
        self.return_requested_at = now
        self.status = OrderStatus.RETURN_REQUESTED
        self.touch()

    def _return_refusal_reason(self, now: datetime) -> str:
        if self.status != OrderStatus.DELIVERED:
            return f"Only delivered orders can be returned (current status: {self.status.name})"
        if self.return_status != ReturnStatus.NONE:
            return "A return has already been requested for this order"
        return "The return window for this order has closed"

    def update_return_status(self, new_status: ReturnStatus) -> None:
        """
        Advance the return workflow and keep the order status in step.

        REJECTED puts the order back to DELIVERED, REFUNDED closes it as
        RETURNED with the payment refunded.
        """
        if not self.return_status.can_transition_to(new_status):
            raise InvalidTransitionException("Return", self.return_status.name, new_status.name)

        if new_status == ReturnStatus.REJECTED:
            self.transition_to(OrderStatus.DELIVERED)
        elif new_status == ReturnStatus.REFUNDED:
            self.transition_to(OrderStatus.RETURNED)
        else:
            self.return_status = new_status
            self.touch()

    def _settle_return(self, new_status: OrderStatus) -> None:
        """Close the open return so it matches the order leaving RETURN_REQUESTED."""
        target = ReturnStatus.REJECTED if new_status == OrderStatus.DELIVERED else ReturnStatus.REFUNDED
        if not self.return_status.can_transition_to(target):
            raise InvalidTransitionException(
                "Return",
                self.return_status.name,
                target.name,
                message=f"Order cannot move to {new_status.name} while the return is {self.return_status.name}",
            )
        if target == ReturnStatus.REFUNDED:
            self._set_payment_status(PaymentStatus.REFUNDED)
        self.return_status = target

    def has_return(self) -> bool:
        return self.return_status != ReturnStatus.NONE

    # Delivery tracking

    def is_delivery_delayed(self, now: datetime | None = None) -> bool:
        now = now or utcnow()
        return (
            self.status == OrderStatus.SHIPPED
            and self.estimated_delivery_date is not None
            and now > self.estimated_delivery_date
        )

    def check_invariants(self) -> None:
        if self.return_status != ReturnStatus.NONE and not self.status.allows_return_status():
            raise ValidationException(
                f"Order in status {self.status.name} cannot carry return status {self.return_status.name}",
                field="return_status",
            )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "items": [item.to_dict() for item in self.items],
            "total_amount": str(self.total_amount),
            "status": int(self.status),
            "payment_status": int(self.payment_status),
            "return_status": int(self.return_status),
            "tracking_number": self.tracking_number,
            "carrier_name": self.carrier_name,
        }
