"""
Ecommerce Application DTOs

Data Transfer Objects exchanged between use cases and gateways, and the
request objects of the multi-field commands.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from app.core.domain import Address
from app.domains.ecommerce.domain.value_objects import (
    CarrierType,
    PackageStatus,
    TicketCategory,
    TicketPriority,
)

# ==================== Gateway DTOs ====================


@dataclass
class PaymentIntentResult:
    """What the payment gateway returns when an intent is created"""

    id: str
    client_secret: str
    status: str = "requires_payment_method"


@dataclass
class ShippingLabelRequest:
    """Everything a carrier needs to produce a label"""

    order_id: str
    carrier: CarrierType
    weight: Decimal
    length: Decimal
    width: Decimal
    height: Decimal
    recipient_name: str
    recipient_address: Address
    sender_address: dict
    pickup_point_id: str | None = None


@dataclass
class ShippingLabelResult:
    tracking_number: str
    label_url: str
    carrier: CarrierType
    shipping_cost: Decimal
    estimated_delivery_date: datetime


@dataclass
class TrackingEvent:
    occurred_at: datetime
    status: str
    location: str | None = None
    description: str | None = None


@dataclass
class TrackingInfo:
    tracking_number: str
    carrier: CarrierType
    status: str
    events: list[TrackingEvent] = field(default_factory=list)
    estimated_delivery_date: datetime | None = None
    tracking_url: str | None = None


@dataclass
class EmailMessage:
    to: str
    subject: str
    html_body: str


# ==================== Command requests ====================


@dataclass
class CreateProductRequest:
    name: str
    price: Decimal
    description: str = ""
    stock: int = 0
    category_id: str | None = None
    images: list[str] = field(default_factory=list)
    specifications: dict[str, str] = field(default_factory=dict)
    is_featured: bool = False
    is_new: bool = True
    warranty_months: int | None = None
    warranty_type: str | None = None


@dataclass
class UpdateProductRequest:
    """Partial update; None leaves a field untouched"""

    name: str | None = None
    description: str | None = None
    price: Decimal | None = None
    stock: int | None = None
    category_id: str | None = None
    images: list[str] | None = None
    specifications: dict[str, str] | None = None
    is_featured: bool | None = None
    is_new: bool | None = None
    warranty_months: int | None = None
    warranty_type: str | None = None
    is_active: bool | None = None


@dataclass
class CreateCategoryRequest:
    name: str
    description: str = ""
    parent_category_id: str | None = None
    image_url: str | None = None


@dataclass
class CreateOrderRequest:
    """Checkout: turn the actor's cart into an order"""

    shipping_address: Address
    contact_email: str | None = None


@dataclass
class CreatePackageRequest:
    order_id: str
    weight: Decimal = Decimal("0")
    length: Decimal = Decimal("0")
    width: Decimal = Decimal("0")
    height: Decimal = Decimal("0")
    carrier: CarrierType = CarrierType.COLISSIMO
    pickup_point_id: str | None = None
    pickup_point_name: str | None = None
    pickup_point_address: str | None = None
    notes: str | None = None


@dataclass
class UpdatePackageRequest:
    """Partial update; None leaves a field untouched"""

    weight: Decimal | None = None
    length: Decimal | None = None
    width: Decimal | None = None
    height: Decimal | None = None
    carrier: CarrierType | None = None
    status: PackageStatus | None = None
    notes: str | None = None


@dataclass
class UpdateShippingRequest:
    tracking_number: str
    carrier_name: str
    estimated_delivery_days: int | None = None


@dataclass
class CreateTicketRequest:
    subject: str
    description: str
    category: TicketCategory = TicketCategory.OTHER
    priority: TicketPriority = TicketPriority.MEDIUM
    order_id: str | None = None
    attachments: list[str] = field(default_factory=list)


@dataclass
class SubmitWarrantyClaimRequest:
    order_id: str
    product_id: str
    issue_description: str
    photos: list[str] = field(default_factory=list)


@dataclass
class OrderTrackingDTO:
    """Shipping view of an order"""

    order_id: str
    status: int
    tracking_number: str | None
    carrier_name: str | None
    shipped_at: datetime | None
    estimated_delivery_date: datetime | None
    delivered_at: datetime | None
    is_delayed: bool
    tracking_url: str | None = None
    carrier_status: str | None = None
    events: list[TrackingEvent] = field(default_factory=list)


@dataclass
class ReturnInfoDTO:
    order_id: str
    status: int
    return_status: int
    can_return: bool
    return_deadline: datetime | None
    return_requested_at: datetime | None
    return_reason: str | None
    days_remaining: int | None = None


@dataclass
class ShippingMethodQuote:
    """A shipping method with the price for the requested weight"""

    id: str
    name: str
    description: str
    price: Decimal
    min_delivery_days: int
    max_delivery_days: int
    carrier_name: str | None = None
    is_weight_based: bool = False


__all__ = [
    "PaymentIntentResult",
    "ShippingLabelRequest",
    "ShippingLabelResult",
    "TrackingEvent",
    "TrackingInfo",
    "EmailMessage",
    "CreateProductRequest",
    "UpdateProductRequest",
    "CreateCategoryRequest",
    "CreateOrderRequest",
    "CreatePackageRequest",
    "UpdatePackageRequest",
    "UpdateShippingRequest",
    "CreateTicketRequest",
    "SubmitWarrantyClaimRequest",
    "OrderTrackingDTO",
    "ReturnInfoDTO",
    "ShippingMethodQuote",
]
