"""Base repository with common CRUD operations."""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Generic, TypeVar
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from intake_engine.domain.errors import DatabaseError
from intake_engine.infrastructure.database.models.base import Base

ModelType = TypeVar("ModelType", bound=Base)
EntityType = TypeVar("EntityType")


@contextmanager
def translate_errors(operation: str) -> Iterator[None]:
    """Re-raise SQLAlchemy failures as DatabaseError."""
    try:
        yield
    except SQLAlchemyError as exc:
        raise DatabaseError(
            message=f"Database operation failed: {operation}",
            details={"error": str(exc)},
            retryable=True,
            operation=operation,
        ) from exc


class BaseRepository(Generic[ModelType, EntityType]):
    """Base repository providing common CRUD operations.

    Subclasses should set:
    - model_class: The SQLAlchemy model class
    - Implement to_entity and from_entity on the model
    """

    model_class: type[ModelType]

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, id: UUID) -> EntityType | None:
        """Get entity by primary key."""
        with translate_errors(f"{self.model_class.__tablename__}.get_by_id"):
            result = await self.session.get(self.model_class, id)
        if result is None:
            return None
        return result.to_entity()

    async def create(self, entity: EntityType) -> EntityType:
        """Create a new entity."""
        with translate_errors(f"{self.model_class.__tablename__}.create"):
            model = self.model_class.from_entity(entity)
            self.session.add(model)
            await self.session.flush()
            await self.session.refresh(model)
        return model.to_entity()

    async def update(self, entity: EntityType) -> EntityType:
        """Update an existing entity."""
        with translate_errors(f"{self.model_class.__tablename__}.update"):
            merged = await self.session.merge(self.model_class.from_entity(entity))
            await self.session.flush()
            await self.session.refresh(merged)
        return merged.to_entity()
