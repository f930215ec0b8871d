"""
E-commerce Domain Entities

Business entities with identity and lifecycle for the e-commerce domain.
"""

from app.domains.ecommerce.domain.entities.cart import Cart, CartItem
from app.domains.ecommerce.domain.entities.category import Category
from app.domains.ecommerce.domain.entities.order import Order, OrderItem
from app.domains.ecommerce.domain.entities.package import Package
from app.domains.ecommerce.domain.entities.product import Product
from app.domains.ecommerce.domain.entities.shipping_method import ShippingMethod
from app.domains.ecommerce.domain.entities.support_ticket import SupportTicket, TicketMessage
from app.domains.ecommerce.domain.entities.warranty_claim import WarrantyClaim

__all__ = [
    "Product",
    "Category",
    "ShippingMethod",
    "Cart",
    "CartItem",
    "Order",
    "OrderItem",
    "Package",
    "SupportTicket",
    "TicketMessage",
    "WarrantyClaim",
]
