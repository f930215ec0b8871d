"""
Shipping Use Cases

Tracking view of an order, manual shipping updates, delayed deliveries and
the shipping options offered at checkout.
"""

import logging
from collections.abc import Callable
from datetime import datetime, timedelta
from decimal import Decimal

from app.core.domain import CarrierUnavailableException, ValidationException, utcnow
from app.domains.ecommerce.application.dto import OrderTrackingDTO, ShippingMethodQuote, UpdateShippingRequest
from app.domains.ecommerce.application.ports import (
    ICarrierService,
    IOrderRepository,
    IPackageRepository,
    IShippingMethodRepository,
)
from app.domains.ecommerce.application.use_cases.orders import load_order
from app.domains.ecommerce.domain.entities import Order, ShippingMethod
from app.domains.ecommerce.domain.value_objects import Actor, OrderStatus

logger = logging.getLogger(__name__)


class GetOrderTrackingUseCase:
    """
    Use Case: Track an order

    When a package with a tracking number exists the carrier is asked for
    live status. A carrier outage degrades to the stored data.
    """

    def __init__(
        self,
        order_repository: IOrderRepository,
        package_repository: IPackageRepository,
        carrier_service: ICarrierService,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.order_repository = order_repository
        self.package_repository = package_repository
        self.carrier_service = carrier_service
        self.clock = clock

    async def execute(self, order_id: str, actor: Actor) -> OrderTrackingDTO:
        order = await load_order(self.order_repository, order_id)
        actor.ensure_owner_or_admin(order.user_id, "get_tracking", f"order:{order_id}")

        tracking = OrderTrackingDTO(
            order_id=order.id,
            status=int(order.status),
            tracking_number=order.tracking_number,
            carrier_name=order.carrier_name,
            shipped_at=order.shipped_at,
            estimated_delivery_date=order.estimated_delivery_date,
            delivered_at=order.delivered_at,
            is_delayed=order.is_delivery_delayed(self.clock()),
        )

        package = await self.package_repository.get_by_order_id(order_id)
        if package is None or not package.tracking_number:
            return tracking

        tracking.tracking_url = self.carrier_service.get_tracking_url(package.carrier, package.tracking_number)
        try:
            info = await self.carrier_service.get_tracking(package.tracking_number, package.carrier)
        except CarrierUnavailableException as e:
            logger.warning(f"Live tracking unavailable for order {order_id}: {e.message}")
            return tracking

        tracking.carrier_status = info.status
        tracking.events = info.events
        return tracking


class UpdateShippingInfoUseCase:
    """
    Use Case: Manual shipping update (admin)

    Records tracking details for orders shipped outside the label flow.
    A PROCESSING order moves to SHIPPED through the transition table.
    """

    def __init__(
        self,
        order_repository: IOrderRepository,
        default_delivery_days: int = 3,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.order_repository = order_repository
        self.default_delivery_days = default_delivery_days
        self.clock = clock

    async def execute(self, order_id: str, request: UpdateShippingRequest, actor: Actor) -> Order:
        actor.ensure_admin("update_shipping", f"order:{order_id}")
        if not request.tracking_number or not request.carrier_name:
            raise ValidationException("Tracking number and carrier are required", field="tracking_number")

        order = await load_order(self.order_repository, order_id)
        now = self.clock()
        days = request.estimated_delivery_days
        if days is None:
            days = self.default_delivery_days
        if days < 0:
            raise ValidationException("Estimated delivery days cannot be negative", field="estimated_delivery_days")

        order.record_shipment(
            tracking_number=request.tracking_number,
            carrier_name=request.carrier_name,
            estimated_delivery_date=now + timedelta(days=days),
            now=now,
        )
        order = await self.order_repository.update(order)
        logger.info(f"Shipping info for order {order_id} set to {request.carrier_name} {request.tracking_number}")
        return order


class ListDelayedOrdersUseCase:
    def __init__(self, order_repository: IOrderRepository, clock: Callable[[], datetime] = utcnow):
        self.order_repository = order_repository
        self.clock = clock

    async def execute(self, actor: Actor) -> list[Order]:
        actor.ensure_admin("list_delayed_orders")
        now = self.clock()
        shipped = await self.order_repository.get_by_status(OrderStatus.SHIPPED)
        return [order for order in shipped if order.is_delivery_delayed(now)]


class ListShippingMethodsUseCase:
    """
    Use Case: Shipping options

    Active methods with their flat price. Given a parcel weight, methods
    bound to a supported carrier are quoted from that carrier's tariff; a
    carrier that cannot quote leaves the flat price in place.
    """

    def __init__(self, shipping_method_repository: IShippingMethodRepository, carrier_service: ICarrierService):
        self.shipping_method_repository = shipping_method_repository
        self.carrier_service = carrier_service

    async def execute(self, weight: Decimal | None = None) -> list[ShippingMethodQuote]:
        if weight is not None and weight <= 0:
            raise ValidationException("Weight must be positive", field="weight")

        methods = await self.shipping_method_repository.get_active()
        return [await self._quote(method, weight) for method in methods]

    async def _quote(self, method: ShippingMethod, weight: Decimal | None) -> ShippingMethodQuote:
        quote = ShippingMethodQuote(
            id=method.id,
            name=method.name,
            description=method.description,
            price=method.price,
            min_delivery_days=method.min_delivery_days,
            max_delivery_days=method.max_delivery_days,
            carrier_name=method.carrier_name,
        )
        if weight is None or method.carrier is None or not self.carrier_service.supports_carrier(method.carrier):
            return quote

        try:
            quote.price = await self.carrier_service.calculate_shipping_cost(method.carrier, weight)
            quote.is_weight_based = True
        except CarrierUnavailableException as e:
            logger.warning(f"No quote from {method.carrier_name} for method {method.id}: {e.message}")
        return quote


__all__ = [
    "GetOrderTrackingUseCase",
    "UpdateShippingInfoUseCase",
    "ListDelayedOrdersUseCase",
    "ListShippingMethodsUseCase",
]
