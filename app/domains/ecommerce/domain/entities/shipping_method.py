"""
Shipping Method Entity

A delivery option offered at checkout (flat price and delivery window).
"""

from dataclasses import dataclass
from decimal import Decimal

from app.core.domain import AggregateRoot, ValidationException

from ..value_objects.package_status import CarrierType


@dataclass
class ShippingMethod(AggregateRoot[str]):
    """
    `price` is the advertised flat rate. When the method is bound to a
    carrier, a weight-based quote from that carrier can replace it.
    """

    name: str = ""
    description: str = ""
    price: Decimal = Decimal("0")
    min_delivery_days: int = 1
    max_delivery_days: int = 1
    carrier: CarrierType | None = None
    is_active: bool = True

    def __post_init__(self):
        if not isinstance(self.price, Decimal):
            self.price = Decimal(str(self.price))

    @property
    def carrier_name(self) -> str | None:
        return self.carrier.display_name if self.carrier is not None else None

    def check_invariants(self) -> None:
        if not self.name or not self.name.strip():
            raise ValidationException("Shipping method name is required", field="name")
        if self.price < 0:
            raise ValidationException("Price cannot be negative", field="price")
        if self.min_delivery_days < 0 or self.max_delivery_days < self.min_delivery_days:
            raise ValidationException(
                "Delivery window must satisfy 0 <= min_delivery_days <= max_delivery_days",
                field="max_delivery_days",
            )
