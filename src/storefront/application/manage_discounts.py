"""Application service: discount code administration."""

from __future__ import annotations

from storefront.application.catalog_service import CatalogService
from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.discount import Discount
from storefront.domain.repository.base import Repository
from storefront.domain.repository.unit_of_work import UnitOfWork


class DiscountService(CatalogService[Discount]):

    entity_label = "Discount"

    def _repository(self, uow: UnitOfWork) -> Repository[Discount]:
        return uow.discounts

    def _check_constraints(self, uow: UnitOfWork, entity: Discount) -> None:
        existing = uow.discounts.get_by_code(entity.code)
        if existing is not None and existing.id != entity.id:
            raise ValidationError("Discount code already exists")

    def list_all(self) -> list[Discount]:
        """Every discount, newest first."""
        with self._uow as uow:
            discounts = uow.discounts.list_all()
        return sorted(discounts, key=lambda d: d.created_at, reverse=True)

    def get_active_by_code(self, code: str) -> Discount:
        with self._uow as uow:
            discount = uow.discounts.get_by_code(Discount.normalize_code(code), active_only=True)
        if discount is None:
            raise EntityNotFoundError("Discount code not found or inactive")
        return discount
