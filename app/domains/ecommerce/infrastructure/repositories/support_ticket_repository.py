"""
Support Ticket Repository Implementation
"""

from sqlalchemy import select

from app.domains.ecommerce.domain.entities.support_ticket import SupportTicket, TicketMessage
from app.domains.ecommerce.domain.value_objects import TicketCategory, TicketPriority, TicketStatus
from app.models.db.support_ticket import SupportTicket as SupportTicketModel

from .base import SQLAlchemyRepository


class SQLAlchemySupportTicketRepository(SQLAlchemyRepository[SupportTicket, SupportTicketModel]):
    model = SupportTicketModel
    entity_name = "SupportTicket"

    async def get_by_user_id(self, user_id: str) -> list[SupportTicket]:
        result = await self.session.execute(
            select(SupportTicketModel)
            .where(SupportTicketModel.user_id == user_id)
            .order_by(SupportTicketModel.created_at.desc())
        )
        return [self._to_entity(m) for m in result.scalars().all()]

    def _to_entity(self, model: SupportTicketModel) -> SupportTicket:
        return SupportTicket(
            id=str(model.id),
            user_id=model.user_id,
            order_id=str(model.order_id) if model.order_id else None,
            subject=model.subject,
            description=model.description,
            category=TicketCategory(model.category),
            status=TicketStatus(model.status),
            priority=TicketPriority(model.priority),
            messages=[TicketMessage.from_dict(m) for m in (model.messages or [])],
            assigned_to_admin_id=model.assigned_to_admin_id,
            closed_at=model.closed_at,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _apply(self, model: SupportTicketModel, entity: SupportTicket) -> None:
        model.user_id = entity.user_id
        model.order_id = entity.order_id
        model.subject = entity.subject
        model.description = entity.description
        model.category = int(entity.category)
        model.status = int(entity.status)
        model.priority = int(entity.priority)
        model.messages = [m.to_dict() for m in entity.messages]
        model.assigned_to_admin_id = entity.assigned_to_admin_id
        model.closed_at = entity.closed_at
