"""
Actor Value Object

The authenticated caller of a use case, as resolved by the auth layer.
"""

from dataclasses import dataclass

from app.core.domain import AuthorizationException, ValueObject


@dataclass(frozen=True)
class Actor(ValueObject):
    """
    Identity supplied by the auth layer and trusted as-is.

    Example:
        ```python
        actor = Actor(user_id="u-42", is_admin=False, email="ana@example.com")
        actor.ensure_owner_or_admin(order.user_id, "get_order", f"order:{order.id}")
        ```
    """

    user_id: str
    is_admin: bool = False
    email: str | None = None
    display_name: str | None = None

    def _validate(self) -> None:
        if not self.user_id:
            raise ValueError("Actor requires a user_id")

    def owns(self, owner_id: str) -> bool:
        return self.user_id == owner_id

    def can_access(self, owner_id: str) -> bool:
        return self.is_admin or self.owns(owner_id)

    def ensure_admin(self, operation: str, resource: str | None = None) -> None:
        if not self.is_admin:
            raise AuthorizationException(operation, resource, self.user_id)

    def ensure_owner(self, owner_id: str, operation: str, resource: str | None = None) -> None:
        if not self.owns(owner_id):
            raise AuthorizationException(operation, resource, self.user_id)

    def ensure_owner_or_admin(self, owner_id: str, operation: str, resource: str | None = None) -> None:
        if not self.can_access(owner_id):
            raise AuthorizationException(operation, resource, self.user_id)
