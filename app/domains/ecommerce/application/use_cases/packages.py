"""
Package Fulfillment Use Cases

Admin-driven fulfillment of a paid order: one package per order, from
PENDING through label generation to delivery.
"""

import logging
from collections.abc import Callable
from datetime import datetime, timedelta

from app.core.domain import (
    CarrierUnavailableException,
    EntityNotFoundException,
    InvalidOperationException,
    InvalidTransitionException,
    utcnow,
)
from app.domains.ecommerce.application.dto import (
    CreatePackageRequest,
    ShippingLabelRequest,
    UpdatePackageRequest,
)
from app.domains.ecommerce.application.ports import (
    ICarrierService,
    ILabelRenderer,
    IOrderRepository,
    IPackageRepository,
)
from app.domains.ecommerce.application.services import ShipmentNotifier
from app.domains.ecommerce.application.use_cases.orders import load_order
from app.domains.ecommerce.domain.entities import Package
from app.domains.ecommerce.domain.value_objects import Actor, OrderStatus, PackageStatus

logger = logging.getLogger(__name__)


async def load_package(package_repository: IPackageRepository, package_id: str) -> Package:
    package = await package_repository.get(package_id)
    if package is None:
        raise EntityNotFoundException("Package", package_id)
    return package


async def cancel_voided_shipment(carrier_service: ICarrierService, tracking_number: str, package: Package) -> None:
    """Best effort: the package is already recovered whatever the carrier answers."""
    try:
        cancelled = await carrier_service.cancel_shipment(tracking_number, package.carrier)
    except CarrierUnavailableException as e:
        logger.warning(f"Could not cancel shipment {tracking_number} for package {package.id}: {e.message}")
        return
    if not cancelled:
        logger.warning(f"Carrier refused to cancel shipment {tracking_number} for package {package.id}")


class CreatePackageUseCase:
    """
    Use Case: Create package

    Only for paid orders in PROCESSING. The one-package-per-order rule is
    a unique index on the store; the repository reports a violation as
    DuplicateEntityException.
    """

    def __init__(self, package_repository: IPackageRepository, order_repository: IOrderRepository):
        self.package_repository = package_repository
        self.order_repository = order_repository

    async def execute(self, request: CreatePackageRequest, actor: Actor) -> Package:
        actor.ensure_admin("create_package", f"order:{request.order_id}")
        order = await load_order(self.order_repository, request.order_id)

        if not order.is_paid() or order.status != OrderStatus.PROCESSING:
            raise InvalidOperationException(
                operation="create_package",
                current_state=f"{order.status.name}/{order.payment_status.name}",
                message="A package can only be created for a paid order in processing",
            )

        package = Package(
            order_id=order.id,
            user_id=order.user_id,
            weight=request.weight,
            length=request.length,
            width=request.width,
            height=request.height,
            carrier=request.carrier,
            pickup_point_id=request.pickup_point_id,
            pickup_point_name=request.pickup_point_name,
            pickup_point_address=request.pickup_point_address,
            shipping_address=order.shipping_address,
            notes=request.notes,
        )
        package = await self.package_repository.create(package)
        logger.info(f"Package {package.id} created for order {order.id} by {actor.user_id}")
        return package


class GetPackageUseCase:
    def __init__(self, package_repository: IPackageRepository):
        self.package_repository = package_repository

    async def execute(self, package_id: str, actor: Actor) -> Package:
        package = await load_package(self.package_repository, package_id)
        actor.ensure_owner_or_admin(package.user_id, "get_package", f"package:{package_id}")
        return package


class GetPackageByOrderUseCase:
    def __init__(self, package_repository: IPackageRepository, order_repository: IOrderRepository):
        self.package_repository = package_repository
        self.order_repository = order_repository

    async def execute(self, order_id: str, actor: Actor) -> Package:
        order = await load_order(self.order_repository, order_id)
        actor.ensure_owner_or_admin(order.user_id, "get_package", f"order:{order_id}")
        package = await self.package_repository.get_by_order_id(order_id)
        if package is None:
            raise EntityNotFoundException("Package", order_id, message=f"No package for order {order_id}")
        return package


class ListPackagesUseCase:
    def __init__(self, package_repository: IPackageRepository):
        self.package_repository = package_repository

    async def execute(self, actor: Actor, status: PackageStatus | None = None) -> list[Package]:
        actor.ensure_admin("list_packages")
        if status is not None:
            return await self.package_repository.get_by_status(status)
        return await self.package_repository.get_all(limit=1000)


class UpdatePackageUseCase:
    """
    Use Case: Update package

    Dimensions, carrier and notes. A status in the request goes through the
    transition table; SHIPPED and DELIVERED have dedicated operations.
    """

    def __init__(self, package_repository: IPackageRepository, carrier_service: ICarrierService):
        self.package_repository = package_repository
        self.carrier_service = carrier_service

    async def execute(self, package_id: str, request: UpdatePackageRequest, actor: Actor) -> Package:
        actor.ensure_admin("update_package", f"package:{package_id}")
        package = await load_package(self.package_repository, package_id)

        if request.carrier is not None and request.carrier != package.carrier:
            package.change_carrier(request.carrier)

        if any(v is not None for v in (request.weight, request.length, request.width, request.height)):
            package.update_dimensions(request.weight, request.length, request.width, request.height)

        if request.notes is not None:
            package.notes = request.notes

        voided = None
        if request.status is not None and request.status != package.status:
            voided = self._apply_status(package, request.status, actor)

        package = await self.package_repository.update(package)
        logger.info(f"Package {package_id} updated by {actor.user_id} (status {package.status.name})")

        if voided:
            await cancel_voided_shipment(self.carrier_service, voided, package)
        return package

    @staticmethod
    def _apply_status(package: Package, new_status: PackageStatus, actor: Actor) -> str | None:
        if new_status == PackageStatus.SHIPPED:
            raise InvalidTransitionException(
                "Package",
                package.status.name,
                new_status.name,
                message="A package is shipped by generating its label",
            )
        if new_status == PackageStatus.DELIVERED:
            raise InvalidOperationException(
                operation="update_package",
                current_state=package.status.name,
                message="Use mark-delivered so the order is delivered together with its package",
            )
        if new_status == PackageStatus.PREPARING:
            if package.status == PackageStatus.EXCEPTION:
                return package.recover(actor.user_id)
            package.mark_preparing(actor.user_id)
        elif new_status == PackageStatus.READY_TO_SHIP:
            package.mark_ready_to_ship()
        elif new_status == PackageStatus.EXCEPTION:
            package.report_exception()
        elif new_status == PackageStatus.RETURNED:
            package.mark_returned()
        else:
            raise InvalidTransitionException("Package", package.status.name, new_status.name)
        return None


class MarkPackagePreparingUseCase:
    def __init__(self, package_repository: IPackageRepository, clock: Callable[[], datetime] = utcnow):
        self.package_repository = package_repository
        self.clock = clock

    async def execute(self, package_id: str, actor: Actor) -> Package:
        actor.ensure_admin("mark_as_preparing", f"package:{package_id}")
        package = await load_package(self.package_repository, package_id)
        package.mark_preparing(actor.user_id, now=self.clock())
        package = await self.package_repository.update(package)
        logger.info(f"Package {package_id} is being prepared by {actor.user_id}")
        return package


class MarkPackageReadyUseCase:
    def __init__(self, package_repository: IPackageRepository):
        self.package_repository = package_repository

    async def execute(self, package_id: str, actor: Actor) -> Package:
        actor.ensure_admin("mark_ready_to_ship", f"package:{package_id}")
        package = await load_package(self.package_repository, package_id)
        package.mark_ready_to_ship()
        package = await self.package_repository.update(package)
        logger.info(f"Package {package_id} is ready to ship")
        return package


class GenerateLabelUseCase:
    """
    Use Case: Generate shipping label

    Responsibilities:
    - Ask the carrier for a label (nothing is mutated if it fails)
    - Flip the package to SHIPPED with tracking number and label URL
    - Move the order to SHIPPED with the carrier details (an order already
      SHIPPED keeps its status and takes the new tracking number)
    - Send the tracking email; a failed email does not undo the shipment

    Package and order are written in the same unit of work.
    """

    def __init__(
        self,
        package_repository: IPackageRepository,
        order_repository: IOrderRepository,
        carrier_service: ICarrierService,
        notifier: ShipmentNotifier,
        sender_address: dict,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.package_repository = package_repository
        self.order_repository = order_repository
        self.carrier_service = carrier_service
        self.notifier = notifier
        self.sender_address = sender_address
        self.clock = clock

    async def execute(self, package_id: str, actor: Actor) -> Package:
        actor.ensure_admin("generate_label", f"package:{package_id}")
        package = await load_package(self.package_repository, package_id)
        order = await load_order(self.order_repository, package.order_id)

        if package.status != PackageStatus.READY_TO_SHIP:
            raise InvalidTransitionException(
                "Package",
                package.status.name,
                PackageStatus.SHIPPED.name,
                message="The package must be ready to ship before a label can be generated",
            )
        # SHIPPED when a recovered package is shipped again
        if order.status not in (OrderStatus.PROCESSING, OrderStatus.SHIPPED):
            raise InvalidTransitionException("Order", order.status.name, OrderStatus.SHIPPED.name)
        if not self.carrier_service.supports_carrier(package.carrier):
            raise CarrierUnavailableException(
                package.carrier.display_name,
                message=f"No integration available for carrier {package.carrier.display_name}",
            )

        address = package.shipping_address or order.shipping_address
        label_request = ShippingLabelRequest(
            order_id=order.id,
            carrier=package.carrier,
            weight=package.weight,
            length=package.length,
            width=package.width,
            height=package.height,
            recipient_name=order.contact_email or order.user_id,
            recipient_address=address,
            sender_address=self.sender_address,
            pickup_point_id=package.pickup_point_id,
        )

        try:
            label = await self.carrier_service.generate_label(label_request)
        except CarrierUnavailableException as e:
            logger.error(f"Label generation failed for package {package_id}: {e.message}")
            raise

        now = self.clock()
        package.ship_with_label(label.tracking_number, label.label_url, now=now)
        order.record_shipment(
            tracking_number=label.tracking_number,
            carrier_name=package.carrier.display_name,
            estimated_delivery_date=label.estimated_delivery_date,
            now=now,
        )
        await self.order_repository.update(order)
        package = await self.package_repository.update(package)
        logger.info(f"Label {label.tracking_number} generated for package {package_id}, order {order.id} shipped")

        if await self.notifier.notify_shipped(package, order):
            package.mark_tracking_notified(now=self.clock())
            package = await self.package_repository.update(package)

        return package


class MarkPackageDeliveredUseCase:
    """Package and order become DELIVERED together; the return window starts."""

    def __init__(
        self,
        package_repository: IPackageRepository,
        order_repository: IOrderRepository,
        return_window: timedelta,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.package_repository = package_repository
        self.order_repository = order_repository
        self.return_window = return_window
        self.clock = clock

    async def execute(self, package_id: str, actor: Actor) -> Package:
        actor.ensure_admin("mark_delivered", f"package:{package_id}")
        package = await load_package(self.package_repository, package_id)
        order = await load_order(self.order_repository, package.order_id)

        now = self.clock()
        package.mark_delivered(now=now)
        if order.status == OrderStatus.SHIPPED:
            order.transition_to(OrderStatus.DELIVERED, now=now, return_window=self.return_window)
            await self.order_repository.update(order)

        package = await self.package_repository.update(package)
        logger.info(f"Package {package_id} delivered (order {order.id} is {order.status.name})")
        return package


class ReportPackageExceptionUseCase:
    def __init__(self, package_repository: IPackageRepository):
        self.package_repository = package_repository

    async def execute(self, package_id: str, actor: Actor, note: str | None = None) -> Package:
        actor.ensure_admin("report_exception", f"package:{package_id}")
        package = await load_package(self.package_repository, package_id)
        package.report_exception(note)
        package = await self.package_repository.update(package)
        logger.warning(f"Package {package_id} moved to EXCEPTION: {note or 'no details'}")
        return package


class RecoverPackageUseCase:
    """
    Use Case: Recover package

    Back to PREPARING from EXCEPTION. A label issued before the incident is
    cancelled with the carrier; the package ships again under a new label.
    """

    def __init__(
        self,
        package_repository: IPackageRepository,
        carrier_service: ICarrierService,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.package_repository = package_repository
        self.carrier_service = carrier_service
        self.clock = clock

    async def execute(self, package_id: str, actor: Actor) -> Package:
        actor.ensure_admin("recover_package", f"package:{package_id}")
        package = await load_package(self.package_repository, package_id)
        voided = package.recover(actor.user_id, now=self.clock())
        package = await self.package_repository.update(package)
        logger.info(f"Package {package_id} recovered from EXCEPTION by {actor.user_id}")

        if voided:
            await cancel_voided_shipment(self.carrier_service, voided, package)
        return package


class DeletePackageUseCase:
    """Only PENDING or EXCEPTION packages can be deleted."""

    def __init__(self, package_repository: IPackageRepository):
        self.package_repository = package_repository

    async def execute(self, package_id: str, actor: Actor) -> None:
        actor.ensure_admin("delete_package", f"package:{package_id}")
        package = await load_package(self.package_repository, package_id)
        package.ensure_deletable()
        await self.package_repository.delete(package_id)
        logger.info(f"Package {package_id} deleted by {actor.user_id}")


class RenderLabelPdfUseCase:
    def __init__(
        self,
        package_repository: IPackageRepository,
        order_repository: IOrderRepository,
        renderer: ILabelRenderer,
    ):
        self.package_repository = package_repository
        self.order_repository = order_repository
        self.renderer = renderer

    async def execute(self, package_id: str, actor: Actor) -> bytes:
        actor.ensure_admin("download_label", f"package:{package_id}")
        package = await load_package(self.package_repository, package_id)
        if not package.tracking_number:
            raise InvalidOperationException(
                operation="download_label",
                current_state=package.status.name,
                message="Generate the label before downloading it",
            )
        order = await load_order(self.order_repository, package.order_id)
        return self.renderer.render(package, order)


__all__ = [
    "load_package",
    "cancel_voided_shipment",
    "CreatePackageUseCase",
    "GetPackageUseCase",
    "GetPackageByOrderUseCase",
    "ListPackagesUseCase",
    "UpdatePackageUseCase",
    "MarkPackagePreparingUseCase",
    "MarkPackageReadyUseCase",
    "GenerateLabelUseCase",
    "MarkPackageDeliveredUseCase",
    "ReportPackageExceptionUseCase",
    "RecoverPackageUseCase",
    "DeletePackageUseCase",
    "RenderLabelPdfUseCase",
]
