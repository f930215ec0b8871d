"""
Ecommerce Application Ports

Interface definitions (ports) for the Ecommerce domain.
Uses Protocol for structural typing.
"""

from decimal import Decimal
from typing import Protocol, runtime_checkable

from app.core.interfaces import IRepository
from app.domains.ecommerce.application.dto import (
    EmailMessage,
    PaymentIntentResult,
    ShippingLabelRequest,
    ShippingLabelResult,
    TrackingInfo,
)
from app.domains.ecommerce.domain.entities import (
    Cart,
    Category,
    Order,
    Package,
    Product,
    ShippingMethod,
    SupportTicket,
    WarrantyClaim,
)
from app.domains.ecommerce.domain.value_objects import (
    CarrierType,
    OrderStatus,
    PackageStatus,
)

# ==================== Repositories ====================


@runtime_checkable
class IProductRepository(IRepository[Product, str], Protocol):
    """Product data access"""

    async def get_many(self, product_ids: list[str]) -> dict[str, Product]:
        """Get products keyed by ID; unknown IDs are absent from the result"""
        ...

    async def get_active(self, skip: int = 0, limit: int = 100) -> list[Product]:
        ...

    async def get_featured(self) -> list[Product]:
        """Active products flagged as featured"""
        ...

    async def get_by_category(self, category_id: str) -> list[Product]:
        ...

    async def search(self, term: str, limit: int = 50) -> list[Product]:
        """Case-insensitive substring match on name or description, active products only"""
        ...


@runtime_checkable
class ICategoryRepository(IRepository[Category, str], Protocol):
    async def get_active(self) -> list[Category]:
        ...

    async def get_subcategories(self, parent_category_id: str) -> list[Category]:
        """Active direct children of a category"""
        ...


@runtime_checkable
class IShippingMethodRepository(IRepository[ShippingMethod, str], Protocol):
    async def get_active(self) -> list[ShippingMethod]:
        ...


@runtime_checkable
class ICartRepository(IRepository[Cart, str], Protocol):
    async def get_by_user_id(self, user_id: str) -> Cart | None:
        ...


@runtime_checkable
class IOrderRepository(IRepository[Order, str], Protocol):
    """
    Interface for order repository.

    Defines the contract for order data access.
    """

    async def get_by_payment_intent_id(self, payment_intent_id: str) -> Order | None:
        """Get the order a payment intent was created for"""
        ...

    async def get_by_user_id(self, user_id: str) -> list[Order]:
        """Orders of a customer, newest first"""
        ...

    async def get_by_status(self, status: OrderStatus) -> list[Order]:
        ...

    async def get_with_returns(self) -> list[Order]:
        """Orders that have a return on record"""
        ...


@runtime_checkable
class IPackageRepository(IRepository[Package, str], Protocol):
    async def get_by_order_id(self, order_id: str) -> Package | None:
        ...

    async def get_by_status(self, status: PackageStatus) -> list[Package]:
        ...


@runtime_checkable
class ISupportTicketRepository(IRepository[SupportTicket, str], Protocol):
    async def get_by_user_id(self, user_id: str) -> list[SupportTicket]:
        ...


@runtime_checkable
class IWarrantyClaimRepository(IRepository[WarrantyClaim, str], Protocol):
    async def get_by_user_id(self, user_id: str) -> list[WarrantyClaim]:
        ...

    async def get_by_order_and_product(self, order_id: str, product_id: str) -> WarrantyClaim | None:
        ...


# ==================== Gateways ====================


@runtime_checkable
class IPaymentGateway(Protocol):
    """
    Payment provider.

    Implementations raise PaymentException on any provider failure.
    """

    async def create_payment_intent(
        self, amount: Decimal, currency: str, metadata: dict[str, str]
    ) -> PaymentIntentResult:
        ...

    async def get_payment_intent(self, payment_intent_id: str) -> str:
        """Provider status string, e.g. "succeeded" or "requires_payment_method" """
        ...


@runtime_checkable
class ICarrierService(Protocol):
    """
    Carrier integration.

    Implementations raise CarrierUnavailableException on provider failure.
    """

    def supports_carrier(self, carrier: CarrierType) -> bool:
        ...

    async def generate_label(self, request: ShippingLabelRequest) -> ShippingLabelResult:
        ...

    async def get_tracking(self, tracking_number: str, carrier: CarrierType) -> TrackingInfo:
        ...

    async def cancel_shipment(self, tracking_number: str, carrier: CarrierType) -> bool:
        ...

    async def calculate_shipping_cost(self, carrier: CarrierType, weight: Decimal) -> Decimal:
        ...

    def get_tracking_url(self, carrier: CarrierType, tracking_number: str) -> str:
        ...


@runtime_checkable
class IEmailSender(Protocol):
    """Transactional email relay"""

    async def send(self, message: EmailMessage) -> None:
        ...


@runtime_checkable
class ILabelRenderer(Protocol):
    """Printable shipping label"""

    def render(self, package: Package, order: Order) -> bytes:
        ...


__all__ = [
    "IProductRepository",
    "ICategoryRepository",
    "IShippingMethodRepository",
    "ICartRepository",
    "IOrderRepository",
    "IPackageRepository",
    "ISupportTicketRepository",
    "IWarrantyClaimRepository",
    "IPaymentGateway",
    "ICarrierService",
    "IEmailSender",
    "ILabelRenderer",
]
