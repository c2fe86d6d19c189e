"""Base repository interfaces."""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from evoting.domain.entities.base import BaseEntity


T = TypeVar("T", bound=BaseEntity)


class BaseRepository(ABC, Generic[T]):
    """Lookup and insert, shared by every repository.

    Ballots and witness exceptions are append-only records and stop here.
    """

    @abstractmethod
    async def get_by_id(self, entity_id: int) -> T | None:
        """Get entity by ID."""
        pass

    @abstractmethod
    async def create(self, entity: T) -> T:
        """Create a new entity."""
        pass


class MutableRepository(BaseRepository[T]):
    """Repository whose rows are edited in place after creation."""

    @abstractmethod
    async def update(self, entity: T) -> T:
        """Update an existing entity."""
        pass
