"""
Warranty Claim Repository Implementation
"""

from sqlalchemy import select

from app.domains.ecommerce.domain.entities.warranty_claim import WarrantyClaim
from app.domains.ecommerce.domain.value_objects import WarrantyClaimStatus
from app.models.db.warranty import WarrantyClaim as WarrantyClaimModel

from .base import SQLAlchemyRepository


class SQLAlchemyWarrantyClaimRepository(SQLAlchemyRepository[WarrantyClaim, WarrantyClaimModel]):
    model = WarrantyClaimModel
    entity_name = "WarrantyClaim"
    unique_fields = {"uq_warranty_claims_order_product": "order_id,product_id"}

    async def get_by_user_id(self, user_id: str) -> list[WarrantyClaim]:
        result = await self.session.execute(
            select(WarrantyClaimModel)
            .where(WarrantyClaimModel.user_id == user_id)
            .order_by(WarrantyClaimModel.created_at.desc())
        )
        return [self._to_entity(m) for m in result.scalars().all()]

    async def get_by_order_and_product(self, order_id: str, product_id: str) -> WarrantyClaim | None:
        result = await self.session.execute(
            select(WarrantyClaimModel).where(
                WarrantyClaimModel.order_id == order_id,
                WarrantyClaimModel.product_id == product_id,
            )
        )
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    def _to_entity(self, model: WarrantyClaimModel) -> WarrantyClaim:
        return WarrantyClaim(
            id=str(model.id),
            order_id=str(model.order_id),
            product_id=model.product_id,
            product_name=model.product_name,
            user_id=model.user_id,
            purchase_date=model.purchase_date,
            warranty_expiration_date=model.warranty_expiration_date,
            issue_description=model.issue_description,
            photos=list(model.photos or []),
            status=WarrantyClaimStatus(model.status),
            resolution=model.resolution,
            admin_notes=model.admin_notes,
            resolved_at=model.resolved_at,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _apply(self, model: WarrantyClaimModel, entity: WarrantyClaim) -> None:
        model.order_id = entity.order_id
        model.product_id = entity.product_id
        model.product_name = entity.product_name
        model.user_id = entity.user_id
        model.purchase_date = entity.purchase_date
        model.warranty_expiration_date = entity.warranty_expiration_date
        model.issue_description = entity.issue_description
        model.photos = list(entity.photos)
        model.status = int(entity.status)
        model.resolution = entity.resolution
        model.admin_notes = entity.admin_notes
        model.resolved_at = entity.resolved_at
