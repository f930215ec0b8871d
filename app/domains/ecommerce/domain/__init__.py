"""
E-commerce Domain Layer

Domain-Driven Design implementation for the storefront bounded context.

This module contains:
- Entities: Cart, Order, Package, SupportTicket, WarrantyClaim, Product
- Value Objects: lifecycles (OrderStatus, PackageStatus, ...) and Actor
"""

from app.domains.ecommerce.domain.entities import (
    Cart,
    CartItem,
    Order,
    OrderItem,
    Package,
    Product,
    SupportTicket,
    TicketMessage,
    WarrantyClaim,
)
from app.domains.ecommerce.domain.value_objects import (
    Actor,
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

__all__ = [
    # Entities
    "Product",
    "Cart",
    "CartItem",
    "Order",
    "OrderItem",
    "Package",
    "SupportTicket",
    "TicketMessage",
    "WarrantyClaim",
    # Value Objects
    "Actor",
    "OrderStatus",
    "PaymentStatus",
    "ReturnStatus",
    "PackageStatus",
    "CarrierType",
    "TicketStatus",
    "TicketPriority",
    "TicketCategory",
    "WarrantyClaimStatus",
]
