"""
Cart Entity

One cart per user. Checkout copies its lines into an order and empties it;
the cart itself is never deleted.
"""

from dataclasses import dataclass, field
from typing import Any

from app.core.domain import AggregateRoot, ValidationException


@dataclass
class CartItem:
    product_id: str
    quantity: int

    def to_dict(self) -> dict[str, Any]:
        return {"product_id": self.product_id, "quantity": self.quantity}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CartItem":
        return cls(product_id=data["product_id"], quantity=int(data["quantity"]))


@dataclass
class Cart(AggregateRoot[str]):
    user_id: str = ""
    items: list[CartItem] = field(default_factory=list)

    def _find(self, product_id: str) -> CartItem | None:
        return next((item for item in self.items if item.product_id == product_id), None)

    def add_item(self, product_id: str, quantity: int) -> None:
        """Add units, merging with an existing line for the same product."""
        if quantity <= 0:
            raise ValidationException("Quantity must be positive", field="quantity")
        existing = self._find(product_id)
        if existing:
            existing.quantity += quantity
        else:
            self.items.append(CartItem(product_id=product_id, quantity=quantity))
        self.touch()

    def update_item(self, product_id: str, quantity: int) -> bool:
        """
        Set the quantity of a line; zero or less removes it.

        Returns:
            False if the product is not in the cart
        """
        existing = self._find(product_id)
        if existing is None:
            return False
        if quantity <= 0:
            return self.remove_item(product_id)
        existing.quantity = quantity
        self.touch()
        return True

    def remove_item(self, product_id: str) -> bool:
        existing = self._find(product_id)
        if existing is None:
            return False
        self.items.remove(existing)
        self.touch()
        return True

    def clear(self) -> None:
        self.items.clear()
        self.touch()

    def is_empty(self) -> bool:
        return not self.items

    def quantity_of(self, product_id: str) -> int:
        existing = self._find(product_id)
        return existing.quantity if existing else 0
