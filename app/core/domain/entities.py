"""
Base Entity Classes for Domain-Driven Design

Entities are domain objects with identity and lifecycle.
They maintain their identity regardless of their attributes.
"""

from abc import ABC
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Generic, TypeVar
from uuid import UUID, uuid4

# Type variable for entity ID (int, str, UUID, etc.)
TId = TypeVar("TId")


def utcnow() -> datetime:
    """Timezone-aware current time used for every domain timestamp."""
    return datetime.now(UTC)


@dataclass
class Entity(ABC, Generic[TId]):
    """
    Base class for all domain entities.

    An entity is a domain object that has a distinct identity
    that runs through time and different states.

    Type Parameters:
        TId: Type of entity identifier (int, str, UUID)
    """

    id: TId | None = field(default=None)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    def __eq__(self, other: object) -> bool:
        """Entities are equal if they have the same ID."""
        if not isinstance(other, Entity):
            return False
        if self.id is None or other.id is None:
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        """Hash based on ID for use in sets and dicts."""
        return hash(self.id) if self.id is not None else id(self)

    def is_new(self) -> bool:
        """Check if entity is new (not yet persisted)."""
        return self.id is None

    def touch(self) -> None:
        """Update the updated_at timestamp."""
        self.updated_at = utcnow()


@dataclass
class AggregateRoot(Entity[TId], Generic[TId]):
    """
    Base class for aggregate roots.

    An aggregate root is the entry point to an aggregate. Repositories
    call `check_invariants()` before every write so an inconsistent
    aggregate never reaches the store.

    Example:
        ```python
        @dataclass
        class Package(AggregateRoot[str]):
            status: PackageStatus = PackageStatus.PENDING

            def check_invariants(self) -> None:
                if self.status == PackageStatus.SHIPPED and not self.label_url:
                    raise ValidationException("Shipped package needs a label")
        ```
    """

    def check_invariants(self) -> None:
        """Raise if the aggregate is in an inconsistent state. Override in subclasses."""
        return None


# Helper functions for ID generation
def generate_uuid() -> UUID:
    """Generate a new UUID for entity identification."""
    return uuid4()


def generate_uuid_str() -> str:
    """Generate a new UUID as string."""
    return str(uuid4())
