"""
Order Repository Implementation

SQLAlchemy implementation of IOrderRepository.
"""

import logging
from decimal import Decimal

from sqlalchemy import select

from app.core.domain import Address
from app.domains.ecommerce.domain.entities.order import Order, OrderItem
from app.domains.ecommerce.domain.value_objects import OrderStatus, PaymentStatus, ReturnStatus
from app.models.db.orders import Order as OrderModel

from .base import SQLAlchemyRepository

logger = logging.getLogger(__name__)


class SQLAlchemyOrderRepository(SQLAlchemyRepository[Order, OrderModel]):
    """
    SQLAlchemy implementation of order repository.
    """

    model = OrderModel
    entity_name = "Order"
    unique_fields = {"orders_payment_intent_id_key": "payment_intent_id"}

    async def get_by_payment_intent_id(self, payment_intent_id: str) -> Order | None:
        result = await self.session.execute(
            select(OrderModel).where(OrderModel.payment_intent_id == payment_intent_id)
        )
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_by_user_id(self, user_id: str) -> list[Order]:
        result = await self.session.execute(
            select(OrderModel).where(OrderModel.user_id == user_id).order_by(OrderModel.created_at.desc())
        )
        return [self._to_entity(m) for m in result.scalars().all()]

    async def get_by_status(self, status: OrderStatus) -> list[Order]:
        return await self.find(status=status)

    async def get_with_returns(self) -> list[Order]:
        result = await self.session.execute(
            select(OrderModel)
            .where(OrderModel.return_status != int(ReturnStatus.NONE))
            .order_by(OrderModel.return_requested_at.desc())
        )
        return [self._to_entity(m) for m in result.scalars().all()]

    # Mapping methods

    def _to_entity(self, model: OrderModel) -> Order:
        """Convert model to entity."""
        return Order(
            id=str(model.id),
            user_id=model.user_id,
            contact_email=model.contact_email,
            items=[OrderItem.from_dict(item) for item in (model.items or [])],
            total_amount=Decimal(str(model.total_amount)),
            currency=model.currency or "USD",
            status=OrderStatus(model.status),
            payment_status=PaymentStatus(model.payment_status),
            payment_intent_id=model.payment_intent_id,
            shipping_address=Address.from_dict(model.shipping_address) if model.shipping_address else None,
            tracking_number=model.tracking_number,
            carrier_name=model.carrier_name,
            shipped_at=model.shipped_at,
            estimated_delivery_date=model.estimated_delivery_date,
            delivered_at=model.delivered_at,
            cancelled_at=model.cancelled_at,
            return_status=ReturnStatus(model.return_status),
            return_deadline=model.return_deadline,
            return_requested_at=model.return_requested_at,
            return_reason=model.return_reason,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _apply(self, model: OrderModel, entity: Order) -> None:
        """Copy entity state onto the model."""
        model.user_id = entity.user_id
        model.contact_email = entity.contact_email
        model.items = [item.to_dict() for item in entity.items]
        model.total_amount = entity.total_amount
        model.currency = entity.currency
        model.status = int(entity.status)
        model.payment_status = int(entity.payment_status)
        model.payment_intent_id = entity.payment_intent_id
        model.shipping_address = entity.shipping_address.to_dict() if entity.shipping_address else None
        model.tracking_number = entity.tracking_number
        model.carrier_name = entity.carrier_name
        model.shipped_at = entity.shipped_at
        model.estimated_delivery_date = entity.estimated_delivery_date
        model.delivered_at = entity.delivered_at
        model.cancelled_at = entity.cancelled_at
        model.return_status = int(entity.return_status)
        model.return_deadline = entity.return_deadline
        model.return_requested_at = entity.return_requested_at
        model.return_reason = entity.return_reason
