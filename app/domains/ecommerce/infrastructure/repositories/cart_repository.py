"""
Cart Repository Implementation
"""

from sqlalchemy import select

from app.domains.ecommerce.domain.entities.cart import Cart, CartItem
from app.models.db.catalog import Cart as CartModel

from .base import SQLAlchemyRepository


class SQLAlchemyCartRepository(SQLAlchemyRepository[Cart, CartModel]):
    model = CartModel
    entity_name = "Cart"
    unique_fields = {"carts_user_id_key": "user_id"}

    async def get_by_user_id(self, user_id: str) -> Cart | None:
        result = await self.session.execute(select(CartModel).where(CartModel.user_id == user_id))
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    def _to_entity(self, model: CartModel) -> Cart:
        return Cart(
            id=str(model.id),
            user_id=model.user_id,
            items=[CartItem.from_dict(item) for item in (model.items or [])],
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _apply(self, model: CartModel, entity: Cart) -> None:
        model.user_id = entity.user_id
        model.items = [item.to_dict() for item in entity.items]
