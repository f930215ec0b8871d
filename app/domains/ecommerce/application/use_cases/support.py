"""
Support Ticket Use Cases
"""

import logging

from app.core.domain import EntityNotFoundException
from app.domains.ecommerce.application.dto import CreateTicketRequest
from app.domains.ecommerce.application.ports import IOrderRepository, ISupportTicketRepository
from app.domains.ecommerce.domain.entities import SupportTicket
from app.domains.ecommerce.domain.value_objects import Actor, TicketPriority, TicketStatus

logger = logging.getLogger(__name__)


def sender_name(actor: Actor) -> str:
    if actor.display_name:
        return actor.display_name
    if actor.is_admin:
        return "Support"
    return actor.email or actor.user_id


async def load_ticket(ticket_repository: ISupportTicketRepository, ticket_id: str) -> SupportTicket:
    ticket = await ticket_repository.get(ticket_id)
    if ticket is None:
        raise EntityNotFoundException("SupportTicket", ticket_id)
    return ticket


class CreateTicketUseCase:
    """
    Use Case: Open a ticket

    A referenced order must exist and belong to the actor.
    """

    def __init__(self, ticket_repository: ISupportTicketRepository, order_repository: IOrderRepository):
        self.ticket_repository = ticket_repository
        self.order_repository = order_repository

    async def execute(self, request: CreateTicketRequest, actor: Actor) -> SupportTicket:
        if request.order_id:
            order = await self.order_repository.get(request.order_id)
            if order is None:
                raise EntityNotFoundException("Order", request.order_id)
            actor.ensure_owner(order.user_id, "create_ticket", f"order:{request.order_id}")

        ticket = SupportTicket.open(
            user_id=actor.user_id,
            sender_name=sender_name(actor),
            subject=request.subject,
            description=request.description,
            category=request.category,
            priority=request.priority,
            order_id=request.order_id,
            attachments=request.attachments,
        )
        ticket = await self.ticket_repository.create(ticket)
        logger.info(f"Support ticket {ticket.id} opened by {actor.user_id} ({ticket.category.name})")
        return ticket


class GetTicketUseCase:
    def __init__(self, ticket_repository: ISupportTicketRepository):
        self.ticket_repository = ticket_repository

    async def execute(self, ticket_id: str, actor: Actor) -> SupportTicket:
        ticket = await load_ticket(self.ticket_repository, ticket_id)
        actor.ensure_owner_or_admin(ticket.user_id, "get_ticket", f"ticket:{ticket_id}")
        return ticket


class ListMyTicketsUseCase:
    def __init__(self, ticket_repository: ISupportTicketRepository):
        self.ticket_repository = ticket_repository

    async def execute(self, actor: Actor) -> list[SupportTicket]:
        return await self.ticket_repository.get_by_user_id(actor.user_id)


class ListTicketsUseCase:
    def __init__(self, ticket_repository: ISupportTicketRepository):
        self.ticket_repository = ticket_repository

    async def execute(self, actor: Actor, status: TicketStatus | None = None) -> list[SupportTicket]:
        actor.ensure_admin("list_tickets")
        if status is not None:
            return await self.ticket_repository.find(status=status)
        return await self.ticket_repository.get_all(limit=1000)


class AddTicketMessageUseCase:
    """
    Use Case: Reply on a ticket

    Owner or admin only. An admin reply on an OPEN ticket starts work on it;
    an owner reply on a waiting, resolved or closed ticket reopens it.
    """

    def __init__(self, ticket_repository: ISupportTicketRepository):
        self.ticket_repository = ticket_repository

    async def execute(
        self,
        ticket_id: str,
        actor: Actor,
        text: str,
        attachments: list[str] | None = None,
    ) -> SupportTicket:
        ticket = await load_ticket(self.ticket_repository, ticket_id)
        actor.ensure_owner_or_admin(ticket.user_id, "add_message", f"ticket:{ticket_id}")

        previous = ticket.status
        ticket.add_message(
            sender_id=actor.user_id,
            sender_name=sender_name(actor),
            is_admin=actor.is_admin,
            text=text,
            attachments=attachments,
        )
        ticket = await self.ticket_repository.update(ticket)

        if ticket.status != previous:
            logger.info(f"Ticket {ticket_id} moved from {previous.name} to {ticket.status.name} on reply")
        return ticket


class AssignTicketUseCase:
    def __init__(self, ticket_repository: ISupportTicketRepository):
        self.ticket_repository = ticket_repository

    async def execute(self, ticket_id: str, admin_id: str, actor: Actor) -> SupportTicket:
        actor.ensure_admin("assign_ticket", f"ticket:{ticket_id}")
        ticket = await load_ticket(self.ticket_repository, ticket_id)
        ticket.assign_to(admin_id)
        ticket = await self.ticket_repository.update(ticket)
        logger.info(f"Ticket {ticket_id} assigned to {admin_id}")
        return ticket


class UpdateTicketStatusUseCase:
    """Admin only; any status may follow any other."""

    def __init__(self, ticket_repository: ISupportTicketRepository):
        self.ticket_repository = ticket_repository

    async def execute(
        self,
        ticket_id: str,
        new_status: TicketStatus,
        actor: Actor,
        priority: TicketPriority | None = None,
    ) -> SupportTicket:
        actor.ensure_admin("update_ticket_status", f"ticket:{ticket_id}")
        ticket = await load_ticket(self.ticket_repository, ticket_id)
        ticket.set_status(new_status)
        if priority is not None:
            ticket.set_priority(priority)
        ticket = await self.ticket_repository.update(ticket)
        logger.info(f"Ticket {ticket_id} set to {new_status.name} by {actor.user_id}")
        return ticket


__all__ = [
    "load_ticket",
    "CreateTicketUseCase",
    "GetTicketUseCase",
    "ListMyTicketsUseCase",
    "ListTicketsUseCase",
    "AddTicketMessageUseCase",
    "AssignTicketUseCase",
    "UpdateTicketStatusUseCase",
]
