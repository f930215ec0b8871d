"""
E-commerce API Schemas

Pydantic schemas for API request/response validation. Status fields are
declared with the domain IntEnums, so they are accepted and serialized as
small integers.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from app.core.domain import Address
from app.domains.ecommerce.domain.value_objects import (
    CarrierType,
    OrderStatus,
    PackageStatus,
    PaymentStatus,
    ReturnStatus,
    TicketCategory,
    TicketPriority,
    TicketStatus,
    WarrantyClaimStatus,
)

# ==================== Shared ====================


class AddressSchema(BaseModel):
    """Postal address."""

    model_config = ConfigDict(from_attributes=True)

    street: str = Field(..., min_length=1, max_length=255)
    city: str = Field(..., min_length=1, max_length=100)
    state: str = ""
    zip_code: str = ""
    country: str = ""

    def to_domain(self) -> Address:
        return Address(
            street=self.street,
            city=self.city,
            state=self.state,
            zip_code=self.zip_code,
            country=self.country,
        )


# ==================== Catalog ====================


class ProductResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str
    price: Decimal
    stock: int
    category_id: str | None = None
    images: list[str]
    specifications: dict[str, str]
    is_featured: bool
    is_new: bool
    warranty_months: int
    warranty_type: str
    is_active: bool


class CreateProductBody(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str = ""
    price: Decimal = Field(..., ge=0)
    stock: int = Field(default=0, ge=0)
    category_id: str | None = None
    images: list[str] = Field(default_factory=list)
    specifications: dict[str, str] = Field(default_factory=dict)
    is_featured: bool = False
    is_new: bool = True
    warranty_months: int | None = Field(default=None, ge=0)
    warranty_type: str | None = Field(default=None, max_length=50)


class UpdateProductBody(BaseModel):
    """Omitted fields are left unchanged."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    price: Decimal | None = Field(default=None, ge=0)
    stock: int | None = Field(default=None, ge=0)
    category_id: str | None = None
    images: list[str] | None = None
    specifications: dict[str, str] | None = None
    is_featured: bool | None = None
    is_new: bool | None = None
    warranty_months: int | None = Field(default=None, ge=0)
    warranty_type: str | None = Field(default=None, max_length=50)
    is_active: bool | None = None


class CategoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str
    parent_category_id: str | None = None
    image_url: str | None = None
    is_active: bool


class CreateCategoryBody(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str = ""
    parent_category_id: str | None = None
    image_url: str | None = Field(default=None, max_length=500)


class ShippingMethodResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str
    price: Decimal
    min_delivery_days: int
    max_delivery_days: int
    carrier_name: str | None = None
    is_weight_based: bool = False


# ==================== Cart ====================


class AddCartItemRequest(BaseModel):
    product_id: str = Field(..., min_length=1)
    quantity: int = Field(default=1, ge=1)


class UpdateCartItemRequest(BaseModel):
    """A quantity of 0 removes the line."""

    product_id: str = Field(..., min_length=1)
    quantity: int = Field(..., ge=0)


class CartItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    product_id: str
    quantity: int


class CartResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str | None = None
    user_id: str
    items: list[CartItemResponse]


# ==================== Orders & payments ====================


class CreateOrderBody(BaseModel):
    shipping_address: AddressSchema
    contact_email: str | None = Field(default=None, max_length=255)


class OrderItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    product_id: str
    product_name: str
    quantity: int
    price: Decimal
    subtotal: Decimal


class OrderResponse(BaseModel):
    """Order response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    items: list[OrderItemResponse]
    total_amount: Decimal
    currency: str
    contact_email: str | None = None
    status: OrderStatus
    payment_status: PaymentStatus
    payment_intent_id: str | None = None
    shipping_address: AddressSchema | None = None
    tracking_number: str | None = None
    carrier_name: str | None = None
    shipped_at: datetime | None = None
    estimated_delivery_date: datetime | None = None
    delivered_at: datetime | None = None
    return_status: ReturnStatus
    return_deadline: datetime | None = None
    return_requested_at: datetime | None = None
    return_reason: str | None = None
    created_at: datetime
    updated_at: datetime


class UpdateOrderStatusBody(BaseModel):
    status: OrderStatus


class PaymentIntentResponse(BaseModel):
    client_secret: str
    payment_intent_id: str


class ConfirmPaymentBody(BaseModel):
    payment_intent_id: str = Field(..., min_length=1)


class ConfirmPaymentResponse(BaseModel):
    confirmed: bool


# ==================== Packages ====================


class CreatePackageBody(BaseModel):
    order_id: str = Field(..., min_length=1)
    weight: Decimal = Field(default=Decimal("0"), ge=0)
    length: Decimal = Field(default=Decimal("0"), ge=0)
    width: Decimal = Field(default=Decimal("0"), ge=0)
    height: Decimal = Field(default=Decimal("0"), ge=0)
    carrier: CarrierType = CarrierType.COLISSIMO
    pickup_point_id: str | None = None
    pickup_point_name: str | None = None
    pickup_point_address: str | None = None
    notes: str | None = None


class UpdatePackageBody(BaseModel):
    """Partial update; omitted fields are left untouched."""

    weight: Decimal | None = Field(default=None, ge=0)
    length: Decimal | None = Field(default=None, ge=0)
    width: Decimal | None = Field(default=None, ge=0)
    height: Decimal | None = Field(default=None, ge=0)
    carrier: CarrierType | None = None
    status: PackageStatus | None = None
    notes: str | None = None


class ReportExceptionBody(BaseModel):
    note: str | None = None


class PackageResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    order_id: str
    user_id: str
    weight: Decimal
    length: Decimal
    width: Decimal
    height: Decimal
    status: PackageStatus
    prepared_at: datetime | None = None
    prepared_by: str | None = None
    carrier: CarrierType
    tracking_number: str | None = None
    label_url: str | None = None
    shipped_at: datetime | None = None
    delivered_at: datetime | None = None
    pickup_point_id: str | None = None
    pickup_point_name: str | None = None
    pickup_point_address: str | None = None
    shipping_address: AddressSchema | None = None
    tracking_notification_sent: bool
    notes: str | None = None
    created_at: datetime
    updated_at: datetime


# ==================== Shipping ====================


class TrackingEventResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    occurred_at: datetime
    status: str
    location: str | None = None
    description: str | None = None


class OrderTrackingResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    order_id: str
    status: int
    tracking_number: str | None = None
    carrier_name: str | None = None
    shipped_at: datetime | None = None
    estimated_delivery_date: datetime | None = None
    delivered_at: datetime | None = None
    is_delayed: bool
    tracking_url: str | None = None
    carrier_status: str | None = None
    events: list[TrackingEventResponse] = []


class UpdateShippingBody(BaseModel):
    tracking_number: str = Field(..., min_length=1)
    carrier_name: str = Field(..., min_length=1)
    estimated_delivery_days: int | None = Field(default=None, ge=0)


# ==================== Returns ====================


class RequestReturnBody(BaseModel):
    reason: str = Field(..., min_length=1, max_length=2000)


class UpdateReturnStatusBody(BaseModel):
    status: ReturnStatus


class ReturnInfoResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    order_id: str
    status: int
    return_status: int
    can_return: bool
    return_deadline: datetime | None = None
    return_requested_at: datetime | None = None
    return_reason: str | None = None
    days_remaining: int | None = None


# ==================== Support ====================


class CreateTicketBody(BaseModel):
    subject: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    category: TicketCategory = TicketCategory.OTHER
    priority: TicketPriority = TicketPriority.MEDIUM
    order_id: str | None = None
    attachments: list[str] = []


class AddTicketMessageBody(BaseModel):
    message: str = Field(..., min_length=1)
    attachments: list[str] = []


class AssignTicketBody(BaseModel):
    admin_id: str = Field(..., min_length=1)


class UpdateTicketStatusBody(BaseModel):
    status: TicketStatus
    priority: TicketPriority | None = None


class TicketMessageResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    sender_id: str
    sender_name: str
    is_from_admin: bool
    message: str
    attachments: list[str]
    created_at: datetime


class TicketResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    order_id: str | None = None
    subject: str
    description: str
    category: TicketCategory
    status: TicketStatus
    priority: TicketPriority
    messages: list[TicketMessageResponse]
    assigned_to_admin_id: str | None = None
    closed_at: datetime | None = None
    created_at: datetime
    updated_at: datetime


# ==================== Warranty ====================


class SubmitWarrantyClaimBody(BaseModel):
    order_id: str = Field(..., min_length=1)
    product_id: str = Field(..., min_length=1)
    issue_description: str = Field(..., min_length=1)
    photos: list[str] = []


class UpdateWarrantyClaimBody(BaseModel):
    status: WarrantyClaimStatus | None = None
    resolution: str | None = None
    admin_notes: str | None = None


class WarrantyClaimResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    order_id: str
    product_id: str
    product_name: str
    user_id: str
    purchase_date: datetime
    warranty_expiration_date: datetime
    issue_description: str
    photos: list[str]
    status: WarrantyClaimStatus
    resolution: str | None = None
    admin_notes: str | None = None
    resolved_at: datetime | None = None
    created_at: datetime
