"""Application service: per-city shipping rate table."""

from __future__ import annotations

from storefront.application.catalog_service import CatalogService
from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.catalog import ShippingRate
from storefront.domain.repository.base import Repository
from storefront.domain.repository.unit_of_work import UnitOfWork


class ShippingRateService(CatalogService[ShippingRate]):

    entity_label = "Shipping rate"

    def _repository(self, uow: UnitOfWork) -> Repository[ShippingRate]:
        return uow.shipping_rates

    def _check_constraints(self, uow: UnitOfWork, entity: ShippingRate) -> None:
        existing = uow.shipping_rates.get_by_city(entity.city)
        if existing is not None and existing.id != entity.id:
            raise ValidationError("Shipping rate for this city already exists")

    def list_all(self) -> list[ShippingRate]:
        with self._uow as uow:
            rates = uow.shipping_rates.list_all()
        return sorted(rates, key=lambda r: r.city)

    def get_by_city(self, city: str) -> ShippingRate:
        with self._uow as uow:
            rate = uow.shipping_rates.get_by_city(city)
        if rate is None:
            raise EntityNotFoundError("Shipping rate not found for this city")
        return rate
