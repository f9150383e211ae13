"""MongoDB-backed repositories.

Every read and write is issued on the ``ClientSession`` of the owning
``MongoUnitOfWork`` so that it joins the open transaction.
"""

from __future__ import annotations

import re
from decimal import Decimal
from typing import Any, Generic, TypeVar

from bson import Decimal128, ObjectId
from bson.errors import InvalidId
from pymongo import ASCENDING, DESCENDING
from pymongo.client_session import ClientSession
from pymongo.database import Database

from storefront.domain.model.catalog import Bundle, CareInstruction, Category, ShippingRate
from storefront.domain.model.discount import Discount, DiscountStatus
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
    SortOrder,
)
from storefront.infrastructure.persistence.documents import DocumentMapper

T = TypeVar("T")

_SORT_KEYS = {
    SortOrder.PRICE_ASC: [("price", ASCENDING)],
    SortOrder.PRICE_DESC: [("price", DESCENDING)],
    SortOrder.NEWEST: [("createdAt", DESCENDING)],
}


def encode(value: Any) -> Any:
    """Store amounts as Decimal128 so MongoDB compares them numerically."""
    if isinstance(value, dict):
        return {k: encode(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [encode(v) for v in value]
    if isinstance(value, Decimal):
        return Decimal128(value)
    return value


def object_id(entity_id: str) -> ObjectId | None:
    try:
        return ObjectId(entity_id)
    except (InvalidId, TypeError):
        return None


class MongoCollection(Generic[T]):

    def __init__(self, db: Database, session: ClientSession, mapper: DocumentMapper[T]) -> None:
        self._collection = db[mapper.collection]
        self._session = session
        self._mapper = mapper

    # --- Repository interface -------------------------------------------------

    def get_by_id(self, entity_id: str) -> T | None:
        oid = object_id(entity_id)
        if oid is None:
            return None
        return self._find_one({"_id": oid})

    def list_all(self) -> list[T]:
        return self._find({})

    def add(self, entity: T) -> None:
        doc = encode(self._mapper.to_document(entity))
        result = self._collection.insert_one(doc, session=self._session)
        entity.id = str(result.inserted_id)  # type: ignore[attr-defined]

    def save(self, entity: T) -> None:
        doc = encode(self._mapper.to_document(entity))
        self._collection.replace_one(
            {"_id": ObjectId(entity.id)}, doc, session=self._session  # type: ignore[attr-defined]
        )

    def delete(self, entity_id: str) -> bool:
        oid = object_id(entity_id)
        if oid is None:
            return False
        result = self._collection.delete_one({"_id": oid}, session=self._session)
        return result.deleted_count == 1

    # --- Helpers --------------------------------------------------------------

    def _to_entity(self, doc: dict[str, Any]) -> T:
        entity_id = str(doc.pop("_id"))
        return self._mapper.from_document(entity_id, doc)

    def _find_one(self, filter: dict[str, Any]) -> T | None:
        doc = self._collection.find_one(filter, session=self._session)
        return self._to_entity(doc) if doc is not None else None

    def _find(self, filter: dict[str, Any], sort: list | None = None) -> list[T]:
        cursor = self._collection.find(filter, session=self._session)
        if sort:
            cursor = cursor.sort(sort)
        return [self._to_entity(doc) for doc in cursor]

    def _search(self, query: CatalogQuery, filter: dict[str, Any]) -> Page:
        if query.search.strip():
            filter["name"] = {"$regex": re.escape(query.search.strip()), "$options": "i"}
        price: dict[str, Any] = {}
        if query.min_price is not None:
            price["$gte"] = Decimal128(query.min_price)
        if query.max_price is not None:
            price["$lte"] = Decimal128(query.max_price)
        if price:
            filter["price"] = price
        if query.status is not None:
            filter["status"] = query.status.value

        total = self._collection.count_documents(filter, session=self._session)
        cursor = self._collection.find(filter, session=self._session)
        if query.sort is not None:
            cursor = cursor.sort(_SORT_KEYS[query.sort])
        cursor = cursor.skip(query.offset).limit(query.limit)
        results = [self._to_entity(doc) for doc in cursor]
        return Page(total=total, page=query.page, limit=query.limit, results=results)


class MongoProductRepository(MongoCollection[Product], ProductRepository):

    def search(self, query: CatalogQuery) -> Page:
        filter: dict[str, Any] = {}
        if query.category:
            filter["category"] = query.category
        return self._search(query, filter)


class MongoBundleRepository(MongoCollection[Bundle], BundleRepository):

    def search(self, query: CatalogQuery) -> Page:
        return self._search(query, {})


class MongoOrderRepository(MongoCollection[Order], OrderRepository):

    def list_recent(self) -> list[Order]:
        return self._find({}, sort=[("createdAt", DESCENDING)])


class MongoDiscountRepository(MongoCollection[Discount], DiscountRepository):

    def get_by_code(self, code: str, active_only: bool = False) -> Discount | None:
        filter: dict[str, Any] = {"code": Discount.normalize_code(code)}
        if active_only:
            filter["status"] = DiscountStatus.ACTIVE.value
        return self._find_one(filter)


class MongoShippingRateRepository(MongoCollection[ShippingRate], ShippingRateRepository):

    def get_by_city(self, city: str) -> ShippingRate | None:
        return self._find_one({"city": city})


class MongoCategoryRepository(MongoCollection[Category], CategoryRepository):

    def get_by_name(self, name: str) -> Category | None:
        return self._find_one({"name": name})


class MongoCareInstructionRepository(MongoCollection[CareInstruction], CareInstructionRepository):

    def get_by_category(self, category: str) -> CareInstruction | None:
        return self._find_one({"category": category})
