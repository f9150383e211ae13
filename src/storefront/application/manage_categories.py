"""Application service: product categories."""

from __future__ import annotations

from storefront.application.catalog_service import CatalogService
from storefront.domain.exceptions import ValidationError
from storefront.domain.model.catalog import Category
from storefront.domain.repository.base import Repository
from storefront.domain.repository.unit_of_work import UnitOfWork


class CategoryService(CatalogService[Category]):

    entity_label = "Category"

    def _repository(self, uow: UnitOfWork) -> Repository[Category]:
        return uow.categories

    def _check_constraints(self, uow: UnitOfWork, entity: Category) -> None:
        existing = uow.categories.get_by_name(entity.name)
        if existing is not None and existing.id != entity.id:
            raise ValidationError("Category already exists")

    def list_all(self) -> list[Category]:
        with self._uow as uow:
            categories = uow.categories.list_all()
        return sorted(categories, key=lambda c: c.sort_order)
