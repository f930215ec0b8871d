"""
E-commerce Domain Value Objects

Immutable value objects for the e-commerce domain.
"""

from app.domains.ecommerce.domain.value_objects.actor import Actor
from app.domains.ecommerce.domain.value_objects.order_status import (
    OrderStatus,
    PaymentStatus,
    ReturnStatus,
)
from app.domains.ecommerce.domain.value_objects.package_status import CarrierType, PackageStatus
from app.domains.ecommerce.domain.value_objects.ticket_status import (
    TicketCategory,
    TicketPriority,
    TicketStatus,
)
from app.domains.ecommerce.domain.value_objects.warranty_status import WarrantyClaimStatus

__all__ = [
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
