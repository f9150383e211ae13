"""Application service: product catalog administration and search."""

from __future__ import annotations

from storefront.application.catalog_service import CatalogService
from storefront.domain.model.product import Product
from storefront.domain.repository.base import Repository
from storefront.domain.repository.product_repository import CatalogQuery, Page
from storefront.domain.repository.unit_of_work import UnitOfWork


class ProductService(CatalogService[Product]):

    entity_label = "Product"

    def _repository(self, uow: UnitOfWork) -> Repository[Product]:
        return uow.products

    def search(self, query: CatalogQuery) -> Page:
        with self._uow as uow:
            return uow.products.search(query)
