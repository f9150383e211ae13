"""Shared plumbing for the catalog administration services.

Each simple entity (product, bundle, discount, shipping rate, category,
care instruction) gets list/get/create/update/delete with "write what
was sent" semantics.  Subclasses name their repository and add their
own uniqueness rules and finders.
"""

from __future__ import annotations

import dataclasses
import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Generic, TypeVar

from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.repository.base import Repository
from storefront.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CatalogService(ABC, Generic[T]):

    entity_label = "Entity"

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    @abstractmethod
    def _repository(self, uow: UnitOfWork) -> Repository[T]:
        """Return the repository this service manages, bound to ``uow``."""

    def _check_constraints(self, uow: UnitOfWork, entity: T) -> None:
        """Raise ValidationError if ``entity`` clashes with stored data."""

    # --- Queries --------------------------------------------------------------

    def get(self, entity_id: str) -> T:
        with self._uow as uow:
            entity = self._repository(uow).get_by_id(entity_id)
        if entity is None:
            raise EntityNotFoundError(f"{self.entity_label} not found")
        return entity

    # --- Commands -------------------------------------------------------------

    def create(self, entity: T) -> T:
        entity.validate()  # type: ignore[attr-defined]
        with self._uow as uow:
            self._check_constraints(uow, entity)
            self._repository(uow).add(entity)
            uow.commit()
        logger.info(f"{self.entity_label} {entity.id} created")  # type: ignore[attr-defined]
        return entity

    def update(self, entity_id: str, changes: dict[str, Any]) -> T:
        """Overwrite the given fields; fields not in ``changes`` are kept."""
        with self._uow as uow:
            repo = self._repository(uow)
            current = repo.get_by_id(entity_id)
            if current is None:
                raise EntityNotFoundError(f"{self.entity_label} not found")

            try:
                updated = dataclasses.replace(current, **changes)
            except TypeError as exc:
                raise ValidationError(f"Unknown field in update: {exc}") from exc
            if any(f.name == "updated_at" for f in dataclasses.fields(updated)):
                updated.updated_at = datetime.now(timezone.utc)  # type: ignore[attr-defined]

            updated.validate()  # type: ignore[attr-defined]
            self._check_constraints(uow, updated)
            repo.save(updated)
            uow.commit()
        logger.info(f"{self.entity_label} {entity_id} updated: {sorted(changes)}")
        return updated

    def delete(self, entity_id: str) -> None:
        with self._uow as uow:
            if not self._repository(uow).delete(entity_id):
                raise EntityNotFoundError(f"{self.entity_label} not found")
            uow.commit()
        logger.info(f"{self.entity_label} {entity_id} deleted")
