"""
Base Repository - Science Fair Evaluation Platform
fairscore/repositories/base.py

Shared lookups and writes over one collection of the entity store.
"""

import time
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel

from fairscore.core.exceptions import EntityNotFoundException
from fairscore.models.enumerations import EntityKind
from fairscore.repositories.entity_store import EntityStore
from fairscore.services.identifiers import IdentifierAllocator

T = TypeVar("T", bound=BaseModel)


def now_ms() -> int:
    """Current time as epoch milliseconds, the timestamp format on the wire."""
    return int(time.time() * 1000)


class BaseRepository(Generic[T]):
    """Base repository over a single entity collection."""

    kind: EntityKind
    entity_name: str = "Entity"

    def __init__(self, store: EntityStore):
        self.store = store
        self.ids = IdentifierAllocator(store)

    @property
    def items(self) -> List[T]:
        return self.store.collection(self.kind)

    def get_all(self) -> List[T]:
        return list(self.items)

    def get_by_id(self, entity_id: str) -> Optional[T]:
        for entity in self.items:
            if entity.id == entity_id:
                return entity
        return None

    def get_or_raise(self, entity_id: str) -> T:
        entity = self.get_by_id(entity_id)
        if entity is None:
            raise EntityNotFoundException(self.entity_name, entity_id)
        return entity

    def _upsert(self, entity: T) -> T:
        """Replace the first entity with the same id, or append."""
        items = self.items
        for index, existing in enumerate(items):
            if existing.id == entity.id:
                items[index] = entity
                return entity
        items.append(entity)
        return entity

    def _remove(self, entity_id: str) -> T:
        items = self.items
        for index, existing in enumerate(items):
            if existing.id == entity_id:
                return items.pop(index)
        raise EntityNotFoundException(self.entity_name, entity_id)

    def _apply_update(self, entity: T, update: BaseModel) -> T:
        """Copy of entity with the fields the caller actually set."""
        changes = update.model_dump(exclude_unset=True)
        return entity.model_copy(update=changes)
