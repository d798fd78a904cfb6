"""Generic manager translating between ORM entities and Pydantic schemas."""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel

from .models import Entity
from .repository import BaseRepository

ModelT = TypeVar("ModelT", bound=Entity)
InSchemaT = TypeVar("InSchemaT", bound=BaseModel)
OutSchemaT = TypeVar("OutSchemaT", bound=BaseModel)
IdT = TypeVar("IdT")


class BaseManager(Generic[ModelT, InSchemaT, OutSchemaT, IdT]):
    """Base manager with create, lookup, delete and count operations."""

    def __init__(
        self,
        repo: BaseRepository[ModelT, IdT],
        model_cls: type[ModelT],
        out_schema_cls: type[OutSchemaT],
    ) -> None:
        """Initialize manager with repository, ORM model class and output schema class."""
        self.repo = repo
        self.model_cls = model_cls
        self.out_schema_cls = out_schema_cls

    def _to_output_schema(self, entity: ModelT) -> OutSchemaT:
        """Convert an ORM entity to the output schema."""
        return self.out_schema_cls.model_validate(entity, from_attributes=True)

    async def save(self, data: InSchemaT) -> OutSchemaT:
        """Persist a new entity built from the input schema."""
        entity = self.model_cls(**data.model_dump(exclude_none=True))
        await self.repo.save(entity)
        await self.repo.commit()
        await self.repo.refresh(entity)
        return self._to_output_schema(entity)

    async def find_by_id(self, id: IdT) -> OutSchemaT | None:
        """Find an entity by id."""
        entity = await self.repo.find_by_id(id)
        if entity is None:
            return None
        return self._to_output_schema(entity)

    async def find_all(self) -> list[OutSchemaT]:
        """Return all entities."""
        entities = await self.repo.find_all()
        return [self._to_output_schema(e) for e in entities]

    async def exists_by_id(self, id: IdT) -> bool:
        """Return whether an entity exists."""
        return await self.repo.exists_by_id(id)

    async def delete_by_id(self, id: IdT) -> None:
        """Delete an entity by id."""
        await self.repo.delete_by_id(id)
        await self.repo.commit()

    async def count(self) -> int:
        """Count all entities."""
        return await self.repo.count()
