"""
E-commerce Infrastructure Repositories

Repository implementations for data access.
All repositories implement core interfaces from app.core.interfaces.repository
"""

from .base import SQLAlchemyRepository
from .cart_repository import SQLAlchemyCartRepository
from .category_repository import SQLAlchemyCategoryRepository
from .order_repository import SQLAlchemyOrderRepository
from .package_repository import SQLAlchemyPackageRepository
from .product_repository import SQLAlchemyProductRepository
from .shipping_method_repository import SQLAlchemyShippingMethodRepository
from .support_ticket_repository import SQLAlchemySupportTicketRepository
from .warranty_claim_repository import SQLAlchemyWarrantyClaimRepository

__all__ = [
    "SQLAlchemyRepository",
    "SQLAlchemyCartRepository",
    "SQLAlchemyCategoryRepository",
    "SQLAlchemyOrderRepository",
    "SQLAlchemyPackageRepository",
    "SQLAlchemyProductRepository",
    "SQLAlchemyShippingMethodRepository",
    "SQLAlchemySupportTicketRepository",
    "SQLAlchemyWarrantyClaimRepository",
]
