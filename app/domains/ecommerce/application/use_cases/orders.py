"""
Order Use Cases

Checkout, payment and the admin-driven order lifecycle.
"""

import logging
from collections.abc import Callable
from datetime import datetime, timedelta

from app.core.domain import (
    Email,
    EntityNotFoundException,
    InvalidOperationException,
    PaymentException,
    ValidationException,
    utcnow,
)
from app.domains.ecommerce.application.dto import CreateOrderRequest
from app.domains.ecommerce.application.ports import (
    ICartRepository,
    IOrderRepository,
    IPaymentGateway,
    IProductRepository,
)
from app.domains.ecommerce.application.use_cases.cart import load_or_create_cart
from app.domains.ecommerce.domain.entities import Order, OrderItem
from app.domains.ecommerce.domain.value_objects import Actor, OrderStatus, PaymentStatus

logger = logging.getLogger(__name__)

PAYMENT_SUCCEEDED = "succeeded"
PAYMENT_CANCELED = "canceled"


async def load_order(order_repository: IOrderRepository, order_id: str) -> Order:
    order = await order_repository.get(order_id)
    if order is None:
        raise EntityNotFoundException("Order", order_id)
    return order


class CreateOrderUseCase:
    """
    Use Case: Checkout

    Responsibilities:
    - Snapshot the actor's cart lines with current prices
    - Check and deduct stock for every line
    - Persist the order as PENDING / PENDING
    - Empty the cart (the cart document itself is kept)
    - Normalize the contact email (request value, else the actor's)
    """

    def __init__(
        self,
        order_repository: IOrderRepository,
        cart_repository: ICartRepository,
        product_repository: IProductRepository,
        currency: str = "USD",
    ):
        self.order_repository = order_repository
        self.cart_repository = cart_repository
        self.product_repository = product_repository
        self.currency = currency

    async def execute(self, actor: Actor, request: CreateOrderRequest) -> Order:
        cart = await load_or_create_cart(self.cart_repository, actor.user_id)
        if cart.is_empty():
            raise ValidationException("Cart is empty", field="items")

        products = await self.product_repository.get_many([item.product_id for item in cart.items])

        items: list[OrderItem] = []
        for line in cart.items:
            product = products.get(line.product_id)
            if product is None:
                raise EntityNotFoundException("Product", line.product_id)
            product.ensure_available(line.quantity)
            items.append(
                OrderItem(
                    product_id=line.product_id,
                    product_name=product.name,
                    quantity=line.quantity,
                    price=product.price,
                )
            )

        order = Order.from_cart_snapshot(
            user_id=actor.user_id,
            items=items,
            shipping_address=request.shipping_address,
            contact_email=self._contact_email(request.contact_email or actor.email),
            currency=self.currency,
        )

        for line in cart.items:
            product = products[line.product_id]
            product.deduct_stock(line.quantity)
            await self.product_repository.update(product)

        order = await self.order_repository.create(order)

        cart.clear()
        await self.cart_repository.update(cart)

        logger.info(f"Order {order.id} created for user {actor.user_id} ({len(items)} lines, total {order.total})")
        return order

    @staticmethod
    def _contact_email(raw: str | None) -> str | None:
        if not raw:
            return None
        try:
            return str(Email(raw))
        except ValueError as e:
            raise ValidationException(str(e), field="contact_email") from e


class CreatePaymentIntentUseCase:
    """
    Use Case: Start payment

    Creates a gateway payment intent for an unpaid order owned by the actor
    and stores its id. Nothing is persisted if the gateway fails.
    """

    def __init__(self, order_repository: IOrderRepository, payment_gateway: IPaymentGateway):
        self.order_repository = order_repository
        self.payment_gateway = payment_gateway

    async def execute(self, order_id: str, actor: Actor) -> dict:
        order = await load_order(self.order_repository, order_id)
        actor.ensure_owner(order.user_id, "create_payment_intent", f"order:{order_id}")

        if order.status != OrderStatus.PENDING or order.payment_status == PaymentStatus.COMPLETED:
            raise InvalidOperationException(
                operation="create_payment_intent",
                current_state=f"{order.status.name}/{order.payment_status.name}",
                message="Payment can only be started for unpaid pending orders",
            )

        try:
            intent = await self.payment_gateway.create_payment_intent(
                amount=order.total_amount,
                currency=order.currency,
                metadata={"orderId": str(order.id), "userId": order.user_id},
            )
        except PaymentException:
            logger.error(f"Payment gateway failed creating intent for order {order_id}")
            raise

        order.attach_payment_intent(intent.id)
        await self.order_repository.update(order)

        logger.info(f"Payment intent {intent.id} attached to order {order_id}")
        return {"client_secret": intent.client_secret, "payment_intent_id": intent.id}


class ConfirmPaymentUseCase:
    """
    Use Case: Confirm payment

    Idempotent: an order whose payment was already captured returns False
    without asking the gateway again, whatever its fulfillment status.
    """

    def __init__(self, order_repository: IOrderRepository, payment_gateway: IPaymentGateway):
        self.order_repository = order_repository
        self.payment_gateway = payment_gateway

    async def execute(self, payment_intent_id: str) -> bool:
        order = await self.order_repository.get_by_payment_intent_id(payment_intent_id)
        if order is None:
            raise EntityNotFoundException(
                "Order",
                payment_intent_id,
                message=f"No order matches payment intent {payment_intent_id}",
            )

        if order.payment_status.is_settled():
            logger.info(f"Payment {payment_intent_id} already confirmed for order {order.id}")
            return False

        gateway_status = await self.payment_gateway.get_payment_intent(payment_intent_id)

        if gateway_status == PAYMENT_SUCCEEDED:
            confirmed = order.confirm_payment()
            await self.order_repository.update(order)
            logger.info(f"Payment {payment_intent_id} confirmed, order {order.id} is now PROCESSING")
            return confirmed

        if gateway_status == PAYMENT_CANCELED and order.payment_status == PaymentStatus.PENDING:
            order.mark_payment_failed()
            await self.order_repository.update(order)

        logger.warning(f"Payment {payment_intent_id} not confirmed (gateway status: {gateway_status})")
        return False


class UpdateOrderStatusUseCase:
    """
    Use Case: Admin status change

    Validated against the order transition table. Delivering stamps the
    return deadline; cancelling puts the items back in stock.
    """

    def __init__(
        self,
        order_repository: IOrderRepository,
        product_repository: IProductRepository,
        return_window: timedelta,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.order_repository = order_repository
        self.product_repository = product_repository
        self.return_window = return_window
        self.clock = clock

    async def execute(self, order_id: str, new_status: OrderStatus, actor: Actor) -> Order:
        actor.ensure_admin("update_order_status", f"order:{order_id}")
        order = await load_order(self.order_repository, order_id)
        previous = order.status

        order.transition_to(new_status, now=self.clock(), return_window=self.return_window)

        if new_status == OrderStatus.CANCELLED:
            await self._restock(order)

        order = await self.order_repository.update(order)
        logger.info(f"Order {order_id} moved from {previous.name} to {new_status.name} by {actor.user_id}")
        return order

    async def _restock(self, order: Order) -> None:
        products = await self.product_repository.get_many([item.product_id for item in order.items])
        for item in order.items:
            product = products.get(item.product_id)
            if product is None:
                logger.warning(f"Product {item.product_id} of cancelled order {order.id} no longer exists")
                continue
            product.restock(item.quantity)
            await self.product_repository.update(product)


class GetOrderUseCase:
    def __init__(self, order_repository: IOrderRepository):
        self.order_repository = order_repository

    async def execute(self, order_id: str, actor: Actor) -> Order:
        order = await load_order(self.order_repository, order_id)
        actor.ensure_owner_or_admin(order.user_id, "get_order", f"order:{order_id}")
        return order


class ListOrdersUseCase:
    """Customers see their own orders; admins see every order, optionally by status."""

    def __init__(self, order_repository: IOrderRepository):
        self.order_repository = order_repository

    async def execute(self, actor: Actor, status: OrderStatus | None = None) -> list[Order]:
        if not actor.is_admin:
            orders = await self.order_repository.get_by_user_id(actor.user_id)
            return [o for o in orders if status is None or o.status == status]
        if status is not None:
            return await self.order_repository.get_by_status(status)
        return await self.order_repository.get_all(limit=1000)


__all__ = [
    "load_order",
    "CreateOrderUseCase",
    "CreatePaymentIntentUseCase",
    "ConfirmPaymentUseCase",
    "UpdateOrderStatusUseCase",
    "GetOrderUseCase",
    "ListOrdersUseCase",
]
