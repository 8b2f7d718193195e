"""Generic repository interface (Dependency Inversion Principle).

Provides ``IRepository[T]``, the base abstract class that all
domain-specific repository interfaces extend.  Service-layer code
depends on this abstraction, never on Django ORM directly.

Reads return independent snapshots: mutating an entity obtained from a
repository has no effect on storage until it is handed back to
``update``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, List, Optional, TypeVar
from uuid import UUID

T = TypeVar("T")


class IRepository(ABC, Generic[T]):
    """Base generic repository contract.

    Type parameter ``T`` represents the aggregate root managed by the
    repository (e.g. ``Customer``).
    """

    @abstractmethod
    def get_by_id(self, id: UUID | str) -> Optional[T]:
        """Retrieve an entity by its identifier, or ``None``."""

    @abstractmethod
    def get_all(self) -> List[T]:
        """Return every stored entity."""

    @abstractmethod
    def add(self, entity: T) -> None:
        """Persist a new entity."""

    @abstractmethod
    def update(self, entity: T) -> None:
        """Replace the stored version of an existing entity."""

    @abstractmethod
    def delete(self, id: UUID | str) -> None:
        """Remove an entity by ID."""
