"""
Base Value Object Classes for Domain-Driven Design

Value Objects are immutable domain primitives that have no identity.
They are compared by their values, not by reference.
"""

from abc import ABC
from collections.abc import Mapping
from dataclasses import asdict, dataclass
from decimal import ROUND_HALF_UP, Decimal
from enum import IntEnum
from typing import Any, Self


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for all value objects.

    Value objects are:
    - Immutable (frozen=True)
    - Compared by value (dataclass equality)
    - Have no identity
    """

    def __post_init__(self):
        """Override to add validation logic."""
        self._validate()

    def _validate(self) -> None:
        """Validate the value object. Override in subclasses."""
        pass


@dataclass(frozen=True)
class Money(ValueObject):
    """
    Money value object for financial calculations.

    Example:
        ```python
        price = Money(amount=Decimal("99.99"))
        total = price.multiply(3)
        cents = total.to_minor_units()  # 29997
        ```
    """

    amount: Decimal
    currency: str = "USD"

    def _validate(self) -> None:
        """Validate money constraints."""
        if not isinstance(self.amount, Decimal):
            object.__setattr__(self, "amount", Decimal(str(self.amount)))
        if self.amount < 0:
            raise ValueError("Money amount cannot be negative")
        if not self.currency or len(self.currency) != 3:
            raise ValueError("Currency must be a 3-letter ISO code")

    def add(self, other: "Money") -> "Money":
        """Add two Money values (must be same currency)."""
        if self.currency != other.currency:
            raise ValueError(f"Cannot add {self.currency} to {other.currency}")
        return Money(amount=self.amount + other.amount, currency=self.currency)

    def multiply(self, factor: int | float | Decimal) -> "Money":
        """Multiply by a factor."""
        new_amount = self.amount * Decimal(str(factor))
        return Money(amount=new_amount.quantize(Decimal("0.01"), ROUND_HALF_UP), currency=self.currency)

    def to_minor_units(self) -> int:
        """Amount in the smallest currency unit (cents), as payment gateways expect."""
        return int((self.amount * 100).quantize(Decimal("1"), ROUND_HALF_UP))

    def is_zero(self) -> bool:
        return self.amount == Decimal("0")

    def __str__(self) -> str:
        return f"{self.currency} {self.amount:,.2f}"

    @classmethod
    def zero(cls, currency: str = "USD") -> "Money":
        """Create a zero Money value."""
        return cls(amount=Decimal("0"), currency=currency)


@dataclass(frozen=True)
class Email(ValueObject):
    """
    Email address value object.

    Validates and normalizes email addresses.
    """

    address: str

    def _validate(self) -> None:
        if not self.address or "@" not in self.address:
            raise ValueError(f"Invalid email address: {self.address}")
        object.__setattr__(self, "address", self.address.lower().strip())

    def __str__(self) -> str:
        return self.address


@dataclass(frozen=True)
class Address(ValueObject):
    """
    Physical address value object.

    Orders and packages keep a copy of it, never a reference to the
    customer's address book.
    """

    street: str
    city: str
    state: str = ""
    zip_code: str = ""
    country: str = ""
    is_default: bool = False

    def _validate(self) -> None:
        if not self.street or not self.city:
            raise ValueError("Street and city are required")

    def get_full_address(self) -> str:
        """Get full formatted address."""
        parts = [self.street, self.city, self.state, self.zip_code, self.country]
        return ", ".join(p for p in parts if p)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Address":
        return cls(
            street=data.get("street", ""),
            city=data.get("city", ""),
            state=data.get("state", ""),
            zip_code=data.get("zip_code", ""),
            country=data.get("country", ""),
            is_default=bool(data.get("is_default", False)),
        )

    def __str__(self) -> str:
        return self.get_full_address()


class StatusEnum(IntEnum):
    """
    Base class for status enums.

    Statuses travel over the wire as small integers in declaration order.
    Subclasses may override `transition_table()` to restrict which status
    can follow which; without a table every change is allowed.
    """

    @classmethod
    def values(cls) -> list[int]:
        """Get all possible values."""
        return [e.value for e in cls]

    @classmethod
    def from_string(cls, value: str) -> Self:
        """Create from a member name ("ReadyToShip", "READY_TO_SHIP") or its integer value."""
        text = str(value).strip()
        if text.isdigit():
            return cls(int(text))
        normalized = text.replace("_", "").replace(" ", "").lower()
        for member in cls:
            if member.name.replace("_", "").lower() == normalized:
                return member
        raise ValueError(f"Invalid {cls.__name__}: {value}")

    @classmethod
    def transition_table(cls) -> Mapping[Any, frozenset] | None:
        """Allowed successors per status, or None when any change is allowed."""
        return None

    def allowed_next(self) -> frozenset[Self]:
        table = type(self).transition_table()
        if table is None:
            return frozenset(member for member in type(self) if member is not self)
        return table.get(self, frozenset())

    def can_transition_to(self, new_status: Self) -> bool:
        return new_status in self.allowed_next()

    def is_terminal(self) -> bool:
        return not self.allowed_next()

    @property
    def label(self) -> str:
        """Human readable name, e.g. READY_TO_SHIP -> "Ready To Ship"."""
        return self.name.replace("_", " ").title()
