"""Generic repository contract shared by every aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

T = TypeVar("T")


class Repository(ABC, Generic[T]):

    @abstractmethod
    def get_by_id(self, entity_id: str) -> T | None:
        """Return the entity with this ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[T]:
        """Return every entity, in storage order."""

    @abstractmethod
    def add(self, entity: T) -> None:
        """Persist a new entity, assigning its ``id``."""

    @abstractmethod
    def save(self, entity: T) -> None:
        """Persist changes to an existing entity."""

    @abstractmethod
    def delete(self, entity_id: str) -> bool:
        """Remove an entity; return False if it did not exist."""
