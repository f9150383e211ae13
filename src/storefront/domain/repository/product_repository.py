"""Abstract repositories for the catalog: products and bundles.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (MongoDB, JSON files) live in
the infrastructure layer.
"""

from __future__ import annotations

from abc import abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from storefront.domain.model.catalog import Bundle
from storefront.domain.model.product import Product, ProductStatus
from storefront.domain.repository.base import Repository


class SortOrder(Enum):
    PRICE_ASC = "price_asc"
    PRICE_DESC = "price_desc"
    NEWEST = "newest"


@dataclass(frozen=True)
class CatalogQuery:
    """Filters, sort and pagination for catalog listings."""

    search: str = ""
    category: str | None = None
    min_price: Decimal | None = None
    max_price: Decimal | None = None
    status: ProductStatus | None = ProductStatus.ACTIVE
    sort: SortOrder | None = None
    page: int = 1
    limit: int = 10

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(frozen=True)
class Page:
    total: int
    page: int
    limit: int
    results: list


def page_in_memory(query: CatalogQuery, entries: list) -> Page:
    """Apply ``query`` to already-loaded products or bundles.

    For stores without a query engine.  Bundles have no category, so the
    category filter only applies to entries that carry one.
    """
    needle = query.search.strip().lower()
    selected = []
    for entry in entries:
        if needle and needle not in entry.name.lower():
            continue
        if query.category and getattr(entry, "category", query.category) != query.category:
            continue
        if query.min_price is not None and entry.price.amount < query.min_price:
            continue
        if query.max_price is not None and entry.price.amount > query.max_price:
            continue
        if query.status is not None and entry.status != query.status:
            continue
        selected.append(entry)

    if query.sort == SortOrder.PRICE_ASC:
        selected.sort(key=lambda e: e.price.amount)
    elif query.sort == SortOrder.PRICE_DESC:
        selected.sort(key=lambda e: e.price.amount, reverse=True)
    elif query.sort == SortOrder.NEWEST:
        selected.sort(key=lambda e: e.created_at, reverse=True)

    window = selected[query.offset:query.offset + query.limit]
    return Page(total=len(selected), page=query.page, limit=query.limit, results=window)


class ProductRepository(Repository[Product]):

    @abstractmethod
    def search(self, query: CatalogQuery) -> Page:
        """Return one page of products matching the query."""


class BundleRepository(Repository[Bundle]):

    @abstractmethod
    def search(self, query: CatalogQuery) -> Page:
        """Return one page of bundles; the category filter does not apply."""
