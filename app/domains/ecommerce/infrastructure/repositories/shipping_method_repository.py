"""
Shipping Method Repository Implementation
"""

from decimal import Decimal

from sqlalchemy import select

from app.domains.ecommerce.domain.entities.shipping_method import ShippingMethod
from app.domains.ecommerce.domain.value_objects import CarrierType
from app.models.db.catalog import ShippingMethod as ShippingMethodModel

from .base import SQLAlchemyRepository, to_column_value


class SQLAlchemyShippingMethodRepository(SQLAlchemyRepository[ShippingMethod, ShippingMethodModel]):
    model = ShippingMethodModel
    entity_name = "ShippingMethod"

    async def get_active(self) -> list[ShippingMethod]:
        """Active methods, cheapest first."""
        result = await self.session.execute(
            select(ShippingMethodModel)
            .where(ShippingMethodModel.is_active.is_(True))
            .order_by(ShippingMethodModel.price, ShippingMethodModel.min_delivery_days)
        )
        return [self._to_entity(m) for m in result.scalars().all()]

    def _to_entity(self, model: ShippingMethodModel) -> ShippingMethod:
        return ShippingMethod(
            id=str(model.id),
            name=model.name,
            description=model.description or "",
            price=Decimal(str(model.price)),
            min_delivery_days=model.min_delivery_days,
            max_delivery_days=model.max_delivery_days,
            carrier=CarrierType(model.carrier) if model.carrier is not None else None,
            is_active=model.is_active,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _apply(self, model: ShippingMethodModel, entity: ShippingMethod) -> None:
        model.name = entity.name
        model.description = entity.description
        model.price = entity.price
        model.min_delivery_days = entity.min_delivery_days
        model.max_delivery_days = entity.max_delivery_days
        model.carrier = to_column_value(entity.carrier)
        model.is_active = entity.is_active
