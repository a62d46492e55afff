"""
Base repository interface for data access layer.
This follows the Repository pattern to separate business logic from data access.
"""

from typing import Generic, TypeVar, Optional, List
from abc import ABC, abstractmethod

from domain.schemas.food_schemas import FoodCreate, FoodUpdate

EntityType = TypeVar("EntityType")


class BaseRepository(Generic[EntityType], ABC):
    """
    Capability set shared by every food repository implementation.

    Implementations are picked at construction time (SQL or in-memory) and
    must return fully materialized entities, never ORM objects bound to a
    session.
    """

    @abstractmethod
    def find_all(self) -> List[EntityType]:
        """Return every entity; an empty list when there are none"""

    @abstractmethod
    def find_by_id(self, entity_id: int) -> Optional[EntityType]:
        """Return the entity or None if it does not exist"""

    @abstractmethod
    def create(self, data: FoodCreate) -> EntityType:
        """Create an entity and return it as stored"""

    @abstractmethod
    def update(self, entity_id: int, data: FoodUpdate) -> Optional[EntityType]:
        """Apply a partial update; None if the entity does not exist"""

    @abstractmethod
    def delete(self, entity_id: int) -> bool:
        """Delete entity by ID, returning whether a row was removed"""

    def exists(self, entity_id: int) -> bool:
        """Check if entity exists"""
        return self.find_by_id(entity_id) is not None
