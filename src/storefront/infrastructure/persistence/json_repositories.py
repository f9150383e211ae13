"""JSON-file-backed repositories.

Each repository works on the in-memory records its ``JsonUnitOfWork``
staged for the current scope.  Nothing touches disk until the unit of
work commits.  Records are kept JSON-ready (amounts as strings,
timestamps as ISO-8601) so committing is a plain dump.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, Generic, TypeVar

from bson import ObjectId

from storefront.domain.model.catalog import Bundle, CareInstruction, Category, ShippingRate
from storefront.domain.model.discount import Discount
from storefront.domain.model.order import Order
from storefront.domain.model.product import Product
from storefront.domain.repository.catalog_repository import (
    CareInstructionRepository,
    CategoryRepository,
    ShippingRateRepository,
)
from storefront.domain.repository.discount_repository import DiscountRepository
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import (
    BundleRepository,
    CatalogQuery,
    Page,
    ProductRepository,
    page_in_memory,
)
from storefront.infrastructure.persistence.documents import DocumentMapper

T = TypeVar("T")


def encode(value: Any) -> Any:
    """Make a document JSON-serializable."""
    if isinstance(value, dict):
        return {k: encode(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [encode(v) for v in value]
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    return value


class JsonCollection(Generic[T]):

    def __init__(
        self,
        records: dict[str, dict[str, Any]],
        mapper: DocumentMapper[T],
        dirty: set[str],
    ) -> None:
        self._records = records
        self._mapper = mapper
        self._dirty = dirty

    # --- Repository interface -------------------------------------------------

    def get_by_id(self, entity_id: str) -> T | None:
        raw = self._records.get(entity_id)
        if raw is None:
            return None
        return self._mapper.from_document(entity_id, raw)

    def list_all(self) -> list[T]:
        return [self._mapper.from_document(eid, raw) for eid, raw in self._records.items()]

    def add(self, entity: T) -> None:
        if entity.id is None:  # type: ignore[attr-defined]
            entity.id = str(ObjectId())  # type: ignore[attr-defined]
        self._write(entity)

    def save(self, entity: T) -> None:
        self._write(entity)

    def delete(self, entity_id: str) -> bool:
        if self._records.pop(entity_id, None) is None:
            return False
        self._dirty.add(self._mapper.collection)
        return True

    # --- Helpers --------------------------------------------------------------

    def _write(self, entity: T) -> None:
        self._records[entity.id] = encode(self._mapper.to_document(entity))  # type: ignore[attr-defined]
        self._dirty.add(self._mapper.collection)

    def _find_one(self, field: str, value: Any) -> T | None:
        for entity_id, raw in self._records.items():
            if raw.get(field) == value:
                return self._mapper.from_document(entity_id, raw)
        return None


class JsonProductRepository(JsonCollection[Product], ProductRepository):

    def search(self, query: CatalogQuery) -> Page:
        return page_in_memory(query, self.list_all())


class JsonBundleRepository(JsonCollection[Bundle], BundleRepository):

    def search(self, query: CatalogQuery) -> Page:
        return page_in_memory(query, self.list_all())


class JsonOrderRepository(JsonCollection[Order], OrderRepository):

    def list_recent(self) -> list[Order]:
        return sorted(self.list_all(), key=lambda o: o.created_at, reverse=True)


class JsonDiscountRepository(JsonCollection[Discount], DiscountRepository):

    def get_by_code(self, code: str, active_only: bool = False) -> Discount | None:
        discount = self._find_one("code", Discount.normalize_code(code))
        if discount is not None and active_only and not discount.is_active:
            return None
        return discount


class JsonShippingRateRepository(JsonCollection[ShippingRate], ShippingRateRepository):

    def get_by_city(self, city: str) -> ShippingRate | None:
        return self._find_one("city", city)


class JsonCategoryRepository(JsonCollection[Category], CategoryRepository):

    def get_by_name(self, name: str) -> Category | None:
        return self._find_one("name", name)


class JsonCareInstructionRepository(JsonCollection[CareInstruction], CareInstructionRepository):

    def get_by_category(self, category: str) -> CareInstruction | None:
        return self._find_one("category", category)
