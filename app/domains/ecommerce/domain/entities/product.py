"""
Product Entity for E-commerce Domain

A catalog product: merchandising fields, price, stock and warranty terms.
"""

from dataclasses import dataclass, field
from decimal import Decimal

from app.core.domain import AggregateRoot, InsufficientStockException, ValidationException

DEFAULT_WARRANTY_MONTHS = 24
DEFAULT_WARRANTY_TYPE = "Légale"


@dataclass
class Product(AggregateRoot[str]):
    """
    Example:
        ```python
        product = Product(id="p-1", name="Kettle", price=Decimal("39.90"), stock=12, warranty_months=24)
        product.deduct_stock(2)
        ```
    """

    name: str = ""
    description: str = ""
    price: Decimal = Decimal("0")
    stock: int = 0
    category_id: str | None = None
    images: list[str] = field(default_factory=list)
    specifications: dict[str, str] = field(default_factory=dict)
    is_featured: bool = False
    is_new: bool = True
    warranty_months: int = DEFAULT_WARRANTY_MONTHS
    warranty_type: str = DEFAULT_WARRANTY_TYPE
    is_active: bool = True

    def __post_init__(self):
        if not isinstance(self.price, Decimal):
            self.price = Decimal(str(self.price))

    # Stock Management

    def is_available(self, quantity: int = 1) -> bool:
        return self.is_active and self.stock >= quantity

    def ensure_available(self, quantity: int) -> None:
        """
        Raises:
            InsufficientStockException: If not enough stock
        """
        if quantity <= 0:
            raise ValidationException("Quantity must be positive", field="quantity")
        if not self.is_available(quantity):
            raise InsufficientStockException(
                product_id=self.id or "",
                requested=quantity,
                available=self.stock if self.is_active else 0,
            )

    def deduct_stock(self, quantity: int) -> None:
        self.ensure_available(quantity)
        self.stock -= quantity
        self.touch()

    def restock(self, quantity: int) -> None:
        """Put units back, e.g. when an order is cancelled."""
        if quantity <= 0:
            raise ValidationException("Quantity must be positive", field="quantity")
        self.stock += quantity
        self.touch()

    def check_invariants(self) -> None:
        if not self.name or not self.name.strip():
            raise ValidationException("Product name is required", field="name")
        if self.price < 0:
            raise ValidationException("Price cannot be negative", field="price")
        if self.stock < 0:
            raise ValidationException("Stock cannot be negative", field="stock")
        if self.warranty_months < 0:
            raise ValidationException("Warranty length cannot be negative", field="warranty_months")
