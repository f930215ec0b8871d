"""
Package Repository Implementation
"""

from decimal import Decimal

from sqlalchemy import select

from app.core.domain import Address
from app.domains.ecommerce.domain.entities.package import Package
from app.domains.ecommerce.domain.value_objects import CarrierType, PackageStatus
from app.models.db.packages import Package as PackageModel

from .base import SQLAlchemyRepository


class SQLAlchemyPackageRepository(SQLAlchemyRepository[Package, PackageModel]):
    """
    A second package for the same order is rejected by the unique index
    on packages.order_id and surfaces as DuplicateEntityException.
    """

    model = PackageModel
    entity_name = "Package"
    unique_fields = {"packages_order_id_key": "order_id"}

    async def get_by_order_id(self, order_id: str) -> Package | None:
        result = await self.session.execute(select(PackageModel).where(PackageModel.order_id == order_id))
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_by_status(self, status: PackageStatus) -> list[Package]:
        return await self.find(status=status)

    def _to_entity(self, model: PackageModel) -> Package:
        return Package(
            id=str(model.id),
            order_id=str(model.order_id),
            user_id=model.user_id,
            weight=Decimal(str(model.weight)),
            length=Decimal(str(model.length)),
            width=Decimal(str(model.width)),
            height=Decimal(str(model.height)),
            status=PackageStatus(model.status),
            prepared_at=model.prepared_at,
            prepared_by=model.prepared_by,
            carrier=CarrierType(model.carrier),
            tracking_number=model.tracking_number,
            label_url=model.label_url,
            shipped_at=model.shipped_at,
            delivered_at=model.delivered_at,
            pickup_point_id=model.pickup_point_id,
            pickup_point_name=model.pickup_point_name,
            pickup_point_address=model.pickup_point_address,
            shipping_address=Address.from_dict(model.shipping_address) if model.shipping_address else None,
            tracking_notification_sent=bool(model.tracking_notification_sent),
            tracking_notification_sent_at=model.tracking_notification_sent_at,
            notes=model.notes,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _apply(self, model: PackageModel, entity: Package) -> None:
        model.order_id = entity.order_id
        model.user_id = entity.user_id
        model.weight = entity.weight
        model.length = entity.length
        model.width = entity.width
        model.height = entity.height
        model.status = int(entity.status)
        model.prepared_at = entity.prepared_at
        model.prepared_by = entity.prepared_by
        model.carrier = int(entity.carrier)
        model.tracking_number = entity.tracking_number
        model.label_url = entity.label_url
        model.shipped_at = entity.shipped_at
        model.delivered_at = entity.delivered_at
        model.pickup_point_id = entity.pickup_point_id
        model.pickup_point_name = entity.pickup_point_name
        model.pickup_point_address = entity.pickup_point_address
        model.shipping_address = entity.shipping_address.to_dict() if entity.shipping_address else None
        model.tracking_notification_sent = entity.tracking_notification_sent
        model.tracking_notification_sent_at = entity.tracking_notification_sent_at
        model.notes = entity.notes
