"""
Product Repository Implementation
"""

from decimal import Decimal

from sqlalchemy import or_, select

from app.domains.ecommerce.domain.entities.product import Product
from app.models.db.catalog import Product as ProductModel

from .base import SQLAlchemyRepository


def like_pattern(term: str) -> str:
    """Substring pattern for ILIKE with the wildcard characters escaped."""
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class SQLAlchemyProductRepository(SQLAlchemyRepository[Product, ProductModel]):
    model = ProductModel
    entity_name = "Product"

    async def get_many(self, product_ids: list[str]) -> dict[str, Product]:
        if not product_ids:
            return {}
        # Row locks keep concurrent checkouts from overselling the same stock
        result = await self.session.execute(
            select(ProductModel).where(ProductModel.id.in_(product_ids)).with_for_update()
        )
        return {str(m.id): self._to_entity(m) for m in result.scalars().all()}

    async def get_active(self, skip: int = 0, limit: int = 100) -> list[Product]:
        result = await self.session.execute(
            select(ProductModel)
            .where(ProductModel.is_active.is_(True))
            .order_by(ProductModel.name)
            .offset(skip)
            .limit(limit)
        )
        return [self._to_entity(m) for m in result.scalars().all()]

    async def get_featured(self) -> list[Product]:
        result = await self.session.execute(
            select(ProductModel)
            .where(ProductModel.is_featured.is_(True), ProductModel.is_active.is_(True))
            .order_by(ProductModel.created_at.desc())
        )
        return [self._to_entity(m) for m in result.scalars().all()]

    async def get_by_category(self, category_id: str) -> list[Product]:
        result = await self.session.execute(
            select(ProductModel)
            .where(ProductModel.category_id == category_id, ProductModel.is_active.is_(True))
            .order_by(ProductModel.name)
        )
        return [self._to_entity(m) for m in result.scalars().all()]

    async def search(self, term: str, limit: int = 50) -> list[Product]:
        pattern = like_pattern(term)
        result = await self.session.execute(
            select(ProductModel)
            .where(
                ProductModel.is_active.is_(True),
                or_(
                    ProductModel.name.ilike(pattern, escape="\\"),
                    ProductModel.description.ilike(pattern, escape="\\"),
                ),
            )
            .order_by(ProductModel.name)
            .limit(limit)
        )
        return [self._to_entity(m) for m in result.scalars().all()]

    def _to_entity(self, model: ProductModel) -> Product:
        return Product(
            id=str(model.id),
            name=model.name,
            description=model.description or "",
            price=Decimal(str(model.price)),
            stock=model.stock,
            category_id=model.category_id,
            images=list(model.images or []),
            specifications=dict(model.specifications or {}),
            is_featured=model.is_featured,
            is_new=model.is_new,
            warranty_months=model.warranty_months,
            warranty_type=model.warranty_type,
            is_active=model.is_active,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _apply(self, model: ProductModel, entity: Product) -> None:
        model.name = entity.name
        model.description = entity.description
        model.price = entity.price
        model.stock = entity.stock
        model.category_id = entity.category_id
        model.images = list(entity.images)
        model.specifications = dict(entity.specifications)
        model.is_featured = entity.is_featured
        model.is_new = entity.is_new
        model.warranty_months = entity.warranty_months
        model.warranty_type = entity.warranty_type
        model.is_active = entity.is_active
