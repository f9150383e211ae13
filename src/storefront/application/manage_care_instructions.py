"""Application service: care instructions, one per product category."""

from __future__ import annotations

from storefront.application.catalog_service import CatalogService
from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.catalog import CareInstruction
from storefront.domain.repository.base import Repository
from storefront.domain.repository.unit_of_work import UnitOfWork


class CareInstructionService(CatalogService[CareInstruction]):

    entity_label = "Care instructions"

    def _repository(self, uow: UnitOfWork) -> Repository[CareInstruction]:
        return uow.care_instructions

    def _check_constraints(self, uow: UnitOfWork, entity: CareInstruction) -> None:
        existing = uow.care_instructions.get_by_category(entity.category)
        if existing is not None and existing.id != entity.id:
            raise ValidationError("Care instructions for this category already exist")

    def list_all(self) -> list[CareInstruction]:
        with self._uow as uow:
            items = uow.care_instructions.list_all()
        return sorted(items, key=lambda c: c.category)

    def get_by_category(self, category: str) -> CareInstruction:
        with self._uow as uow:
            care = uow.care_instructions.get_by_category(category)
        if care is None:
            raise EntityNotFoundError("Care instructions not found for this category")
        return care
