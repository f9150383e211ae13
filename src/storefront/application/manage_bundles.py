"""Application service: bundle administration.

Reads populate the products a bundle references; references to deleted
products are dropped from the view rather than failing the read.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.application.catalog_service import CatalogService
from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.catalog import Bundle
from storefront.domain.model.product import Product
from storefront.domain.repository.base import Repository
from storefront.domain.repository.product_repository import CatalogQuery, Page
from storefront.domain.repository.unit_of_work import UnitOfWork


@dataclass(frozen=True)
class BundleView:
    bundle: Bundle
    products: list[Product]


class BundleService(CatalogService[Bundle]):

    entity_label = "Bundle"

    def _repository(self, uow: UnitOfWork) -> Repository[Bundle]:
        return uow.bundles

    def _check_constraints(self, uow: UnitOfWork, entity: Bundle) -> None:
        for product_id in entity.product_ids:
            if uow.products.get_by_id(product_id) is None:
                raise ValidationError(f"Bundle references unknown product {product_id}")

    def search(self, query: CatalogQuery) -> Page:
        with self._uow as uow:
            page = uow.bundles.search(query)
            views = [self._populate(uow, bundle) for bundle in page.results]
        return Page(total=page.total, page=page.page, limit=page.limit, results=views)

    def view(self, bundle_id: str) -> BundleView:
        with self._uow as uow:
            bundle = uow.bundles.get_by_id(bundle_id)
            if bundle is None:
                raise EntityNotFoundError("Bundle not found")
            return self._populate(uow, bundle)

    @staticmethod
    def _populate(uow: UnitOfWork, bundle: Bundle) -> BundleView:
        products = [uow.products.get_by_id(pid) for pid in bundle.product_ids]
        return BundleView(bundle=bundle, products=[p for p in products if p is not None])
