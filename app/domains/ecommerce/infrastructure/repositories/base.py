"""
SQLAlchemy repository base

Implements the generic IRepository contract for one model/entity pair.
Repositories flush but never commit: the request-scoped session commits
once at the end, or rolls everything back.
"""

import logging
from abc import ABC, abstractmethod
from enum import IntEnum
from typing import Any, Generic, TypeVar

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.domain import AggregateRoot, DuplicateEntityException, EntityNotFoundException

logger = logging.getLogger(__name__)

TEntity = TypeVar("TEntity", bound=AggregateRoot)
TModel = TypeVar("TModel")


def to_column_value(value: Any) -> Any:
    """Enums are stored by their integer value."""
    if isinstance(value, IntEnum):
        return int(value)
    return value


class SQLAlchemyRepository(ABC, Generic[TEntity, TModel]):
    """
    Base class for SQLAlchemy repositories.

    Subclasses set `model` and `entity_name` and implement the two mapping
    methods. `unique_fields` maps a constraint name (or column) to the field
    reported when an insert violates it.
    """

    model: type
    entity_name: str = "Entity"
    unique_fields: dict[str, str] = {}

    def __init__(self, session: AsyncSession):
        """
        Initialize repository.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    # Mapping

    @abstractmethod
    def _to_entity(self, model: TModel) -> TEntity:
        """Convert model to entity."""

    @abstractmethod
    def _apply(self, model: TModel, entity: TEntity) -> None:
        """Copy entity state onto the model."""

    def _new_model(self, entity: TEntity) -> TModel:
        model = self.model()
        if entity.id is not None:
            model.id = entity.id
        model.created_at = entity.created_at
        self._apply(model, entity)
        return model

    # IRepository

    async def _get_model(self, id: str) -> TModel | None:
        result = await self.session.execute(select(self.model).where(self.model.id == id))
        return result.scalar_one_or_none()

    async def get(self, id: str) -> TEntity | None:
        model = await self._get_model(id)
        return self._to_entity(model) if model else None

    async def get_all(self, skip: int = 0, limit: int = 100) -> list[TEntity]:
        result = await self.session.execute(
            select(self.model).order_by(self.model.created_at.desc()).offset(skip).limit(limit)
        )
        return [self._to_entity(m) for m in result.scalars().all()]

    async def find(self, **criteria: Any) -> list[TEntity]:
        result = await self.session.execute(
            select(self.model).where(*self._conditions(criteria)).order_by(self.model.created_at.desc())
        )
        return [self._to_entity(m) for m in result.scalars().all()]

    async def count(self, **criteria: Any) -> int:
        result = await self.session.execute(
            select(func.count()).select_from(self.model).where(*self._conditions(criteria))
        )
        return result.scalar_one()

    async def create(self, entity: TEntity) -> TEntity:
        entity.check_invariants()
        model = self._new_model(entity)
        self.session.add(model)
        await self._flush(entity)
        entity.id = model.id
        return entity

    async def update(self, entity: TEntity) -> TEntity:
        entity.check_invariants()
        model = await self._get_model(entity.id)
        if model is None:
            raise EntityNotFoundException(self.entity_name, entity.id)
        self._apply(model, entity)
        model.updated_at = entity.updated_at
        await self._flush(entity)
        return entity

    async def delete(self, id: str) -> bool:
        model = await self._get_model(id)
        if model is None:
            return False
        await self.session.delete(model)
        await self.session.flush()
        return True

    # Helpers

    def _conditions(self, criteria: dict[str, Any]) -> list:
        conditions = []
        for name, value in criteria.items():
            column = getattr(self.model, name, None)
            if column is None:
                raise ValueError(f"{self.model.__name__} has no column '{name}'")
            conditions.append(column == to_column_value(value))
        return conditions

    async def _flush(self, entity: TEntity) -> None:
        try:
            await self.session.flush()
        except IntegrityError as e:
            field = self._violated_field(e)
            if field is None:
                logger.error(f"Integrity error writing {self.entity_name} {entity.id}: {e}")
                raise
            value = ",".join(str(getattr(entity, name, None)) for name in field.split(","))
            logger.warning(f"Duplicate {self.entity_name} rejected by unique index on {field}")
            raise DuplicateEntityException(self.entity_name, field, value) from e

    def _violated_field(self, error: IntegrityError) -> str | None:
        message = str(error.orig) if error.orig is not None else str(error)
        for marker, field in self.unique_fields.items():
            if marker in message:
                return field
        return None
