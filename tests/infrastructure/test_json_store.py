"""Tests for the JSON-file unit of work against a temporary directory."""

import json
from decimal import Decimal

import pytest

from storefront.application.dto import CustomerDetails, OrderItemSpec, PlaceOrderCommand
from storefront.application.place_order import PlaceOrderHandler
from storefront.domain.exceptions import InsufficientStockError, PersistenceError
from storefront.domain.model.catalog import Category
from storefront.domain.model.discount import Discount, DiscountType
from storefront.domain.model.product import Product, ProductType, ProductVariant
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import CatalogQuery, SortOrder
from storefront.infrastructure.persistence.json_unit_of_work import JsonUnitOfWork


def _seed(uow: JsonUnitOfWork) -> tuple[str, str]:
    with uow:
        amber = Product(
            id=None, product_type=ProductType.SINGLE, category="Candles",
            name="Amber Candle", price=Money.of("500"), stock=10,
        )
        jar = Product(
            id=None, product_type=ProductType.SINGLE, category="Candles",
            name="Jar Candle", price=Money.of("100"),
            variants=[ProductVariant("Large", "Size", Money.of("180"), stock=3)],
        )
        uow.products.add(amber)
        uow.products.add(jar)
        uow.commit()
    return amber.id, jar.id


def _command(*items: OrderItemSpec) -> PlaceOrderCommand:
    return PlaceOrderCommand(
        customer=CustomerDetails(
            name="Mona", email="m@x.com", phone="0100", address="1 Nile St", city="Cairo"
        ),
        items=list(items),
    )


class TestJsonUnitOfWork:

    def test_commit_writes_file(self, tmp_path):
        uow = JsonUnitOfWork(tmp_path)
        amber_id, _ = _seed(uow)

        records = json.loads((tmp_path / "products.json").read_text())
        amber = next(r for r in records if r["id"] == amber_id)
        assert amber["name"] == "Amber Candle"
        assert amber["price"] == "500"
        assert amber["productType"] == "Single"

    def test_ids_are_object_id_strings(self, tmp_path):
        amber_id, _ = _seed(JsonUnitOfWork(tmp_path))
        assert len(amber_id) == 24
        int(amber_id, 16)

    def test_without_commit_nothing_is_written(self, tmp_path):
        uow = JsonUnitOfWork(tmp_path)
        with uow:
            uow.categories.add(Category(id=None, name="Candles"))
        assert not (tmp_path / "categories.json").exists()

    def test_exception_rolls_back_staged_writes(self, tmp_path):
        uow = JsonUnitOfWork(tmp_path)
        amber_id, _ = _seed(uow)

        with pytest.raises(RuntimeError):
            with uow:
                product = uow.products.get_by_id(amber_id)
                product.stock = 0
                uow.products.save(product)
                raise RuntimeError("boom")

        with uow:
            assert uow.products.get_by_id(amber_id).stock == 10

    def test_only_dirty_collections_rewritten(self, tmp_path):
        uow = JsonUnitOfWork(tmp_path)
        _seed(uow)
        with uow:
            uow.discounts.add(
                Discount(id=None, code="SAVE10", type=DiscountType.PERCENTAGE, value=Decimal("10"))
            )
            uow.commit()
        assert (tmp_path / "discounts.json").exists()
        assert not (tmp_path / "orders.json").exists()

    def test_corrupt_file_raises_persistence_error(self, tmp_path):
        (tmp_path / "products.json").write_text("{not json")
        with pytest.raises(PersistenceError, match="Cannot read products.json"):
            with JsonUnitOfWork(tmp_path):
                pass

    def test_lock_released_after_failed_begin(self, tmp_path):
        (tmp_path / "orders.json").write_text("[")
        uow = JsonUnitOfWork(tmp_path)
        with pytest.raises(PersistenceError):
            with uow:
                pass
        (tmp_path / "orders.json").write_text("[]")
        with uow:
            assert uow.orders.list_all() == []


class TestJsonRepositories:

    def test_product_search(self, tmp_path):
        uow = JsonUnitOfWork(tmp_path)
        _seed(uow)
        with uow:
            page = uow.products.search(CatalogQuery(search="candle", sort=SortOrder.PRICE_ASC))
        assert page.total == 2
        assert [p.name for p in page.results] == ["Jar Candle", "Amber Candle"]

    def test_variants_round_trip(self, tmp_path):
        uow = JsonUnitOfWork(tmp_path)
        _, jar_id = _seed(uow)
        with uow:
            jar = uow.products.get_by_id(jar_id)
        assert jar.variants[0].price == Money.of("180")
        assert jar.variants[0].stock == 3

    def test_discount_lookup_by_code(self, tmp_path):
        uow = JsonUnitOfWork(tmp_path)
        with uow:
            uow.discounts.add(
                Discount(id=None, code="SAVE10", type=DiscountType.PERCENTAGE, value=Decimal("10"))
            )
            uow.commit()
        with uow:
            assert uow.discounts.get_by_code(" save10").value == Decimal("10")
            assert uow.discounts.get_by_code("OTHER") is None

    def test_delete(self, tmp_path):
        uow = JsonUnitOfWork(tmp_path)
        amber_id, _ = _seed(uow)
        with uow:
            assert uow.products.delete(amber_id) is True
            assert uow.products.delete(amber_id) is False
            uow.commit()
        with uow:
            assert uow.products.get_by_id(amber_id) is None


class TestPlaceOrderOnJsonStore:

    def test_order_and_stock_persisted_together(self, tmp_path):
        uow = JsonUnitOfWork(tmp_path)
        amber_id, jar_id = _seed(uow)

        dto = PlaceOrderHandler(uow).handle(
            _command(OrderItemSpec(amber_id, 2), OrderItemSpec(jar_id, 1, variant_name="Large"))
        )

        assert dto.subtotal == Decimal("1180")
        fresh = JsonUnitOfWork(tmp_path)
        with fresh:
            assert fresh.products.get_by_id(amber_id).stock == 8
            assert fresh.products.get_by_id(jar_id).variants[0].stock == 2
            order = fresh.orders.get_by_id(dto.id)
        assert order.total_amount == Money.of("1230")
        assert order.items[1].variant_name == "Large"

    def test_failed_order_leaves_files_untouched(self, tmp_path):
        uow = JsonUnitOfWork(tmp_path)
        amber_id, jar_id = _seed(uow)
        before = (tmp_path / "products.json").read_text()

        with pytest.raises(InsufficientStockError):
            PlaceOrderHandler(uow).handle(
                _command(OrderItemSpec(amber_id, 2), OrderItemSpec(jar_id, 5, variant_name="Large"))
            )

        assert (tmp_path / "products.json").read_text() == before
        assert not (tmp_path / "orders.json").exists()

    def test_failed_second_write_commits_nothing(self, tmp_path, monkeypatch):
        uow = JsonUnitOfWork(tmp_path)
        amber_id, _ = _seed(uow)
        before = (tmp_path / "products.json").read_text()

        original = JsonUnitOfWork._write_tmp

        def write_tmp(self, collection, records):
            if collection == "orders":
                raise PersistenceError("Cannot write orders.json.tmp")
            return original(self, collection, records)

        monkeypatch.setattr(JsonUnitOfWork, "_write_tmp", write_tmp)
        with pytest.raises(PersistenceError):
            PlaceOrderHandler(uow).handle(_command(OrderItemSpec(amber_id, 2)))

        assert (tmp_path / "products.json").read_text() == before
        assert not (tmp_path / "orders.json").exists()
        assert list(tmp_path.glob("*.tmp")) == []

    def test_failed_stock_rename_leaves_no_order(self, tmp_path, monkeypatch):
        uow = JsonUnitOfWork(tmp_path)
        amber_id, _ = _seed(uow)

        original = JsonUnitOfWork._replace

        def replace(self, tmp_file, collection):
            if collection == "products":
                raise PersistenceError("Cannot write products.json")
            original(self, tmp_file, collection)

        monkeypatch.setattr(JsonUnitOfWork, "_replace", replace)
        with pytest.raises(PersistenceError):
            PlaceOrderHandler(uow).handle(_command(OrderItemSpec(amber_id, 2)))
        monkeypatch.undo()

        assert not (tmp_path / "orders.json").exists()
        assert list(tmp_path.glob("*.tmp")) == []
        with uow:
            assert uow.products.get_by_id(amber_id).stock == 10
