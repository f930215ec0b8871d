"""
Database models package - Organized by responsibility
"""

from .base import Base, TimestampMixin
from .catalog import Cart, Category, Product, ShippingMethod
from .orders import Order
from .packages import Package
from .support_ticket import SupportTicket
from .warranty import WarrantyClaim

__all__ = [
    # Base
    "Base",
    "TimestampMixin",
    # Catalog
    "Category",
    "Product",
    "ShippingMethod",
    "Cart",
    # Orders & fulfillment
    "Order",
    "Package",
    # After-sales
    "SupportTicket",
    "WarrantyClaim",
]
