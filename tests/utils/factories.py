"""
Factories for creating domain objects quickly in tests.

Every factory returns a real entity with sensible defaults; pass keyword
arguments to override any field.
"""

from datetime import UTC, datetime, timedelta
from decimal import Decimal

from app.core.domain import Address
from app.domains.ecommerce.domain.entities import (
    Cart,
    CartItem,
    Category,
    Order,
    OrderItem,
    Package,
    Product,
    ShippingMethod,
    SupportTicket,
    WarrantyClaim,
)
from app.domains.ecommerce.domain.value_objects import (
    Actor,
    CarrierType,
    OrderStatus,
    PackageStatus,
    PaymentStatus,
)

FIXED_NOW = datetime(2025, 3, 10, 12, 0, tzinfo=UTC)

CUSTOMER_ID = "user-1"
OTHER_CUSTOMER_ID = "user-2"
ADMIN_ID = "admin-1"


def create_customer(user_id: str = CUSTOMER_ID, **kwargs) -> Actor:
    kwargs.setdefault("email", f"{user_id}@example.com")
    return Actor(user_id=user_id, is_admin=False, **kwargs)


def create_admin(user_id: str = ADMIN_ID, **kwargs) -> Actor:
    kwargs.setdefault("display_name", "Alice Admin")
    return Actor(user_id=user_id, is_admin=True, **kwargs)


def create_address(**kwargs) -> Address:
    data = {
        "street": "12 Rue de la Paix",
        "city": "Paris",
        "zip_code": "75002",
        "country": "France",
    }
    data.update(kwargs)
    return Address(**data)


def create_product(
    product_id: str = "prod-1",
    name: str = "Kettle",
    price: str = "25.00",
    stock: int = 10,
    warranty_months: int = 24,
    **kwargs,
) -> Product:
    return Product(
        id=product_id,
        name=name,
        price=Decimal(price),
        stock=stock,
        warranty_months=warranty_months,
        **kwargs,
    )


def create_category(category_id: str = "cat-1", name: str = "Kitchen", **kwargs) -> Category:
    return Category(id=category_id, name=name, **kwargs)


def create_shipping_method(
    method_id: str = "ship-1",
    name: str = "Colissimo Domicile",
    price: str = "4.95",
    **kwargs,
) -> ShippingMethod:
    kwargs.setdefault("min_delivery_days", 2)
    kwargs.setdefault("max_delivery_days", 3)
    return ShippingMethod(id=method_id, name=name, price=Decimal(price), **kwargs)


def create_cart(user_id: str = CUSTOMER_ID, items: list[tuple[str, int]] | None = None, **kwargs) -> Cart:
    lines = [CartItem(product_id=pid, quantity=qty) for pid, qty in (items or [])]
    kwargs.setdefault("id", "cart-1")
    return Cart(user_id=user_id, items=lines, **kwargs)


def create_order(
    order_id: str = "order-1",
    user_id: str = CUSTOMER_ID,
    status: OrderStatus = OrderStatus.PENDING,
    payment_status: PaymentStatus = PaymentStatus.PENDING,
    items: list[OrderItem] | None = None,
    **kwargs,
) -> Order:
    """
    Order with two units of one product.

    Example:
        order = create_order(status=OrderStatus.DELIVERED, return_deadline=FIXED_NOW + timedelta(days=3))
    """
    items = items or [OrderItem(product_id="prod-1", product_name="Kettle", quantity=2, price=Decimal("25.00"))]
    kwargs.setdefault("shipping_address", create_address())
    kwargs.setdefault("contact_email", f"{user_id}@example.com")
    kwargs.setdefault("created_at", FIXED_NOW - timedelta(days=30))
    return Order(
        id=order_id,
        user_id=user_id,
        items=items,
        total_amount=sum((item.subtotal for item in items), Decimal("0")),
        status=status,
        payment_status=payment_status,
        **kwargs,
    )


def create_paid_order(**kwargs) -> Order:
    kwargs.setdefault("payment_intent_id", "pi_123")
    kwargs.setdefault("status", OrderStatus.PROCESSING)
    kwargs.setdefault("payment_status", PaymentStatus.COMPLETED)
    return create_order(**kwargs)


def create_package(
    package_id: str = "pkg-1",
    order_id: str = "order-1",
    user_id: str = CUSTOMER_ID,
    status: PackageStatus = PackageStatus.PENDING,
    carrier: CarrierType = CarrierType.COLISSIMO,
    **kwargs,
) -> Package:
    kwargs.setdefault("weight", Decimal("1.2"))
    kwargs.setdefault("length", Decimal("30"))
    kwargs.setdefault("width", Decimal("20"))
    kwargs.setdefault("height", Decimal("10"))
    kwargs.setdefault("shipping_address", create_address())
    return Package(
        id=package_id,
        order_id=order_id,
        user_id=user_id,
        status=status,
        carrier=carrier,
        **kwargs,
    )


def create_ticket(ticket_id: str = "ticket-1", user_id: str = CUSTOMER_ID, **kwargs) -> SupportTicket:
    ticket = SupportTicket.open(
        user_id=user_id,
        sender_name="Customer",
        subject=kwargs.pop("subject", "Broken lid"),
        description=kwargs.pop("description", "The lid of my kettle does not close."),
        **kwargs,
    )
    ticket.id = ticket_id
    return ticket


def create_claim(claim_id: str = "claim-1", **kwargs) -> WarrantyClaim:
    data = {
        "order_id": "order-1",
        "product_id": "prod-1",
        "product_name": "Kettle",
        "user_id": CUSTOMER_ID,
        "purchase_date": FIXED_NOW - timedelta(days=30),
        "warranty_months": 24,
        "issue_description": "Stopped heating",
        "now": FIXED_NOW,
    }
    data.update(kwargs)
    claim = WarrantyClaim.submit(**data)
    claim.id = claim_id
    return claim
