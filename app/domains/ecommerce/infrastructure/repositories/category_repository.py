"""
Category Repository Implementation

SQLAlchemy implementation of ICategoryRepository.
"""

from sqlalchemy import select

from app.domains.ecommerce.domain.entities.category import Category
from app.models.db.catalog import Category as CategoryModel

from .base import SQLAlchemyRepository


class SQLAlchemyCategoryRepository(SQLAlchemyRepository[Category, CategoryModel]):
    model = CategoryModel
    entity_name = "Category"

    async def get_active(self) -> list[Category]:
        result = await self.session.execute(
            select(CategoryModel).where(CategoryModel.is_active.is_(True)).order_by(CategoryModel.name)
        )
        return [self._to_entity(m) for m in result.scalars().all()]

    async def get_subcategories(self, parent_category_id: str) -> list[Category]:
        result = await self.session.execute(
            select(CategoryModel)
            .where(
                CategoryModel.parent_category_id == parent_category_id,
                CategoryModel.is_active.is_(True),
            )
            .order_by(CategoryModel.name)
        )
        return [self._to_entity(m) for m in result.scalars().all()]

    def _to_entity(self, model: CategoryModel) -> Category:
        return Category(
            id=str(model.id),
            name=model.name,
            description=model.description or "",
            parent_category_id=model.parent_category_id,
            image_url=model.image_url,
            is_active=model.is_active,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _apply(self, model: CategoryModel, entity: Category) -> None:
        model.name = entity.name
        model.description = entity.description
        model.parent_category_id = entity.parent_category_id
        model.image_url = entity.image_url
        model.is_active = entity.is_active
