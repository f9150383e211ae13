"""MongoDB repository tests against a mocked pymongo collection."""

from decimal import Decimal
from unittest.mock import MagicMock, Mock

from bson import Decimal128, ObjectId
from pymongo import ASCENDING, DESCENDING

from storefront.domain.model.discount import DiscountStatus
from storefront.domain.model.product import Product, ProductType
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import CatalogQuery, SortOrder
from storefront.infrastructure.persistence import documents
from storefront.infrastructure.persistence.mongo_repositories import (
    MongoBundleRepository,
    MongoDiscountRepository,
    MongoOrderRepository,
    MongoProductRepository,
    encode,
)


def _product_document(name: str = "Amber Candle") -> dict:
    product = Product(
        id=None, product_type=ProductType.SINGLE, category="Candles",
        name=name, price=Money.of("500"), stock=10,
    )
    doc = encode(documents.PRODUCTS.to_document(product))
    doc["_id"] = ObjectId()
    return doc


def _collection(docs=(), total=0) -> Mock:
    cursor = MagicMock()
    cursor.sort.return_value = cursor
    cursor.skip.return_value = cursor
    cursor.limit.return_value = cursor
    cursor.__iter__.return_value = iter(list(docs))

    collection = Mock()
    collection.find = Mock(return_value=cursor)
    collection.find_one = Mock(return_value=None)
    collection.count_documents = Mock(return_value=total)
    return collection


def _db(collection: Mock) -> MagicMock:
    db = MagicMock()
    db.__getitem__.return_value = collection
    return db


class TestMongoSearch:

    def _setup(self, docs=(), total=0):
        session = object()
        collection = _collection(docs, total)
        return session, collection

    def test_product_search_builds_filter_sort_and_page(self):
        session, collection = self._setup([_product_document()], total=7)
        repo = MongoProductRepository(_db(collection), session, documents.PRODUCTS)

        page = repo.search(
            CatalogQuery(
                search=" amber (jar) ",
                category="Candles",
                min_price=Decimal("100"),
                max_price=Decimal("600"),
                sort=SortOrder.PRICE_ASC,
                page=2,
                limit=5,
            )
        )

        expected = {
            "category": "Candles",
            "name": {"$regex": r"amber\ \(jar\)", "$options": "i"},
            "price": {"$gte": Decimal128("100"), "$lte": Decimal128("600")},
            "status": "Active",
        }
        collection.count_documents.assert_called_once_with(expected, session=session)
        collection.find.assert_called_once_with(expected, session=session)
        cursor = collection.find.return_value
        cursor.sort.assert_called_once_with([("price", ASCENDING)])
        cursor.skip.assert_called_once_with(5)
        cursor.limit.assert_called_once_with(5)

        assert page.total == 7
        assert page.page == 2
        assert page.limit == 5
        assert [p.name for p in page.results] == ["Amber Candle"]
        assert page.results[0].price == Money.of("500")

    def test_newest_sort_uses_created_at(self):
        session, collection = self._setup()
        repo = MongoProductRepository(_db(collection), session, documents.PRODUCTS)

        repo.search(CatalogQuery(sort=SortOrder.NEWEST))

        collection.find.return_value.sort.assert_called_once_with([("createdAt", DESCENDING)])

    def test_bundle_search_without_filters(self):
        session, collection = self._setup()
        repo = MongoBundleRepository(_db(collection), session, documents.BUNDLES)

        page = repo.search(CatalogQuery(status=None))

        collection.find.assert_called_once_with({}, session=session)
        collection.find.return_value.sort.assert_not_called()
        collection.find.return_value.skip.assert_called_once_with(0)
        assert page.total == 0
        assert page.results == []


class TestMongoLookups:

    def test_invalid_id_skips_the_database(self):
        collection = _collection()
        repo = MongoProductRepository(_db(collection), object(), documents.PRODUCTS)

        assert repo.get_by_id("not-an-id") is None
        assert repo.delete("not-an-id") is False
        collection.find_one.assert_not_called()
        collection.delete_one.assert_not_called()

    def test_active_discount_lookup_normalizes_code(self):
        session = object()
        collection = _collection()
        repo = MongoDiscountRepository(_db(collection), session, documents.DISCOUNTS)

        assert repo.get_by_code(" save10 ", active_only=True) is None
        collection.find_one.assert_called_once_with(
            {"code": "SAVE10", "status": DiscountStatus.ACTIVE.value}, session=session
        )

    def test_orders_listed_newest_first(self):
        session = object()
        collection = _collection()
        repo = MongoOrderRepository(_db(collection), session, documents.ORDERS)

        assert repo.list_recent() == []
        collection.find.assert_called_once_with({}, session=session)
        collection.find.return_value.sort.assert_called_once_with([("createdAt", DESCENDING)])
