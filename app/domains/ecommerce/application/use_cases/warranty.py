"""
Warranty Claim Use Cases
"""

import logging
from collections.abc import Callable
from datetime import datetime

from app.core.domain import EntityNotFoundException, ValidationException, utcnow
from app.domains.ecommerce.application.dto import SubmitWarrantyClaimRequest
from app.domains.ecommerce.application.ports import (
    IOrderRepository,
    IProductRepository,
    IWarrantyClaimRepository,
)
from app.domains.ecommerce.application.use_cases.orders import load_order
from app.domains.ecommerce.domain.entities import WarrantyClaim
from app.domains.ecommerce.domain.value_objects import Actor, WarrantyClaimStatus

logger = logging.getLogger(__name__)


async def load_claim(claim_repository: IWarrantyClaimRepository, claim_id: str) -> WarrantyClaim:
    claim = await claim_repository.get(claim_id)
    if claim is None:
        raise EntityNotFoundException("WarrantyClaim", claim_id)
    return claim


class SubmitWarrantyClaimUseCase:
    """
    Use Case: Submit warranty claim

    Responsibilities:
    - Check the order belongs to the actor and contains the product
    - Compute the expiry from the order date and the product's warranty length
    - Persist; a second claim for the same (order, product) hits the store's
      unique index and surfaces as DuplicateEntityException
    """

    def __init__(
        self,
        claim_repository: IWarrantyClaimRepository,
        order_repository: IOrderRepository,
        product_repository: IProductRepository,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.claim_repository = claim_repository
        self.order_repository = order_repository
        self.product_repository = product_repository
        self.clock = clock

    async def execute(self, request: SubmitWarrantyClaimRequest, actor: Actor) -> WarrantyClaim:
        order = await load_order(self.order_repository, request.order_id)
        actor.ensure_owner(order.user_id, "submit_warranty_claim", f"order:{request.order_id}")

        item = next((i for i in order.items if i.product_id == request.product_id), None)
        if item is None:
            raise ValidationException("This product is not part of the order", field="product_id")

        product = await self.product_repository.get(request.product_id)
        if product is None:
            raise EntityNotFoundException("Product", request.product_id)

        claim = WarrantyClaim.submit(
            order_id=order.id,
            product_id=product.id,
            product_name=item.product_name,
            user_id=actor.user_id,
            purchase_date=order.created_at,
            warranty_months=product.warranty_months,
            issue_description=request.issue_description,
            photos=request.photos,
            now=self.clock(),
        )
        claim = await self.claim_repository.create(claim)
        logger.info(f"Warranty claim {claim.id} submitted for order {order.id}, product {product.id}")
        return claim


class ListMyWarrantyClaimsUseCase:
    def __init__(self, claim_repository: IWarrantyClaimRepository):
        self.claim_repository = claim_repository

    async def execute(self, actor: Actor) -> list[WarrantyClaim]:
        return await self.claim_repository.get_by_user_id(actor.user_id)


class ListWarrantyClaimsUseCase:
    def __init__(self, claim_repository: IWarrantyClaimRepository):
        self.claim_repository = claim_repository

    async def execute(self, actor: Actor, status: WarrantyClaimStatus | None = None) -> list[WarrantyClaim]:
        actor.ensure_admin("list_warranty_claims")
        if status is not None:
            return await self.claim_repository.find(status=status)
        return await self.claim_repository.get_all(limit=1000)


class GetWarrantyClaimUseCase:
    def __init__(self, claim_repository: IWarrantyClaimRepository):
        self.claim_repository = claim_repository

    async def execute(self, claim_id: str, actor: Actor) -> WarrantyClaim:
        claim = await load_claim(self.claim_repository, claim_id)
        actor.ensure_owner_or_admin(claim.user_id, "get_warranty_claim", f"claim:{claim_id}")
        return claim


class UpdateWarrantyClaimUseCase:
    def __init__(self, claim_repository: IWarrantyClaimRepository, clock: Callable[[], datetime] = utcnow):
        self.claim_repository = claim_repository
        self.clock = clock

    async def execute(
        self,
        claim_id: str,
        actor: Actor,
        status: WarrantyClaimStatus | None = None,
        resolution: str | None = None,
        admin_notes: str | None = None,
    ) -> WarrantyClaim:
        actor.ensure_admin("update_warranty_claim", f"claim:{claim_id}")
        claim = await load_claim(self.claim_repository, claim_id)
        previous = claim.status
        claim.review(status, resolution=resolution, admin_notes=admin_notes, now=self.clock())
        claim = await self.claim_repository.update(claim)
        logger.info(f"Warranty claim {claim_id} updated by {actor.user_id} ({previous.name} -> {claim.status.name})")
        return claim


__all__ = [
    "load_claim",
    "SubmitWarrantyClaimUseCase",
    "ListMyWarrantyClaimsUseCase",
    "ListWarrantyClaimsUseCase",
    "GetWarrantyClaimUseCase",
    "UpdateWarrantyClaimUseCase",
]
