"""
Return Use Cases

Customers request a return on a delivered order within the return window;
admins move the return through its workflow.
"""

import logging
from collections.abc import Callable
from datetime import datetime

from app.core.domain import utcnow
from app.domains.ecommerce.application.dto import ReturnInfoDTO
from app.domains.ecommerce.application.ports import IOrderRepository, IPackageRepository
from app.domains.ecommerce.application.use_cases.orders import load_order
from app.domains.ecommerce.domain.entities import Order
from app.domains.ecommerce.domain.value_objects import Actor, PackageStatus, ReturnStatus

logger = logging.getLogger(__name__)


def build_return_info(order: Order, now: datetime) -> ReturnInfoDTO:
    days_remaining = None
    if order.return_deadline is not None and order.can_return(now):
        days_remaining = max(0, (order.return_deadline - now).days)
    return ReturnInfoDTO(
        order_id=order.id,
        status=int(order.status),
        return_status=int(order.return_status),
        can_return=order.can_return(now),
        return_deadline=order.return_deadline,
        return_requested_at=order.return_requested_at,
        return_reason=order.return_reason,
        days_remaining=days_remaining,
    )


class RequestReturnUseCase:
    """
    Use Case: Request return

    Legal only for the order owner, on a DELIVERED order, up to its return
    deadline. Anything else is an invalid transition.
    """

    def __init__(self, order_repository: IOrderRepository, clock: Callable[[], datetime] = utcnow):
        self.order_repository = order_repository
        self.clock = clock

    async def execute(self, order_id: str, actor: Actor, reason: str) -> Order:
        order = await load_order(self.order_repository, order_id)
        actor.ensure_owner(order.user_id, "request_return", f"order:{order_id}")

        order.request_return(reason, now=self.clock())
        order = await self.order_repository.update(order)
        logger.info(f"Return requested for order {order_id} by {actor.user_id}")
        return order


class GetReturnInfoUseCase:
    def __init__(self, order_repository: IOrderRepository, clock: Callable[[], datetime] = utcnow):
        self.order_repository = order_repository
        self.clock = clock

    async def execute(self, order_id: str, actor: Actor) -> ReturnInfoDTO:
        order = await load_order(self.order_repository, order_id)
        actor.ensure_owner_or_admin(order.user_id, "get_return_info", f"order:{order_id}")
        return build_return_info(order, self.clock())


class UpdateReturnStatusUseCase:
    """
    Use Case: Admin return workflow

    REQUESTED -> APPROVED | REJECTED, APPROVED -> IN_TRANSIT,
    IN_TRANSIT -> RECEIVED, RECEIVED -> REFUNDED. Once the goods are back
    (RECEIVED) a shipped or delivered package is marked RETURNED.
    """

    def __init__(self, order_repository: IOrderRepository, package_repository: IPackageRepository):
        self.order_repository = order_repository
        self.package_repository = package_repository

    async def execute(self, order_id: str, new_status: ReturnStatus, actor: Actor) -> Order:
        actor.ensure_admin("update_return_status", f"order:{order_id}")
        order = await load_order(self.order_repository, order_id)
        previous = order.return_status

        order.update_return_status(new_status)

        if new_status == ReturnStatus.RECEIVED:
            package = await self.package_repository.get_by_order_id(order_id)
            if package is not None and package.status in (PackageStatus.SHIPPED, PackageStatus.DELIVERED):
                package.mark_returned()
                await self.package_repository.update(package)

        order = await self.order_repository.update(order)
        logger.info(
            f"Return of order {order_id} moved from {previous.name} to {new_status.name} by {actor.user_id}"
        )
        return order


class ListReturnsUseCase:
    def __init__(self, order_repository: IOrderRepository):
        self.order_repository = order_repository

    async def execute(self, actor: Actor) -> list[Order]:
        actor.ensure_admin("list_returns")
        return await self.order_repository.get_with_returns()


__all__ = [
    "build_return_info",
    "RequestReturnUseCase",
    "GetReturnInfoUseCase",
    "UpdateReturnStatusUseCase",
    "ListReturnsUseCase",
]
