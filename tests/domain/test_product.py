"""Unit tests for the Product aggregate: stock allocation and validation."""

import pytest

from storefront.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    ValidationError,
)
from storefront.domain.model.product import (
    BundleComponent,
    Product,
    ProductType,
    ProductVariant,
)
from storefront.domain.model.value_objects import Money, Quantity


def _candle(stock: int = 5, variants: list[ProductVariant] | None = None) -> Product:
    return Product(
        id="p1",
        product_type=ProductType.SINGLE,
        category="Candles",
        name="Candle",
        price=Money.of("100"),
        stock=stock,
        variants=variants or [],
    )


def _variant(name: str = "Large", price: str = "180", stock: int = 3) -> ProductVariant:
    return ProductVariant(variant_name=name, variant_type="Size", price=Money.of(price), stock=stock)


class TestAllocateMainStock:

    def test_deducts_and_uses_product_price(self):
        product = _candle(stock=5)
        allocation = product.allocate(Quantity(2))
        assert product.stock == 3
        assert allocation.unit_price == Money.of("100")
        assert allocation.variant_name is None

    def test_exact_stock_reaches_zero(self):
        product = _candle(stock=2)
        product.allocate(Quantity(2))
        assert product.stock == 0

    def test_insufficient_stock(self):
        product = _candle(stock=1)
        with pytest.raises(InsufficientStockError, match="Insufficient stock for Candle"):
            product.allocate(Quantity(2))
        assert product.stock == 1

    def test_variant_name_without_variants_falls_through(self):
        product = _candle(stock=4)
        allocation = product.allocate(Quantity(1), "Large")
        assert product.stock == 3
        assert allocation.variant_name is None


class TestAllocateVariant:

    def test_deducts_variant_only(self):
        product = _candle(stock=10, variants=[_variant(stock=3)])
        allocation = product.allocate(Quantity(2), "Large")
        assert product.variants[0].stock == 1
        assert product.stock == 10
        assert allocation.unit_price == Money.of("180")
        assert allocation.variant_name == "Large"

    def test_insufficient_variant_stock_names_variant(self):
        product = _candle(variants=[_variant(stock=1)])
        with pytest.raises(InsufficientStockError, match=r"Insufficient stock for Candle \(Large\)"):
            product.allocate(Quantity(2), "Large")

    def test_unknown_variant(self):
        product = _candle(variants=[_variant()])
        with pytest.raises(EntityNotFoundError, match="Variant not found"):
            product.allocate(Quantity(1), "Huge")

    def test_no_variant_name_uses_main_stock(self):
        product = _candle(stock=2, variants=[_variant(stock=9)])
        product.allocate(Quantity(1))
        assert product.stock == 1
        assert product.variants[0].stock == 9


class TestValidate:

    def test_valid_product(self):
        _candle(variants=[_variant("S"), _variant("L")]).validate()

    def test_name_required(self):
        product = _candle()
        product.name = " "
        with pytest.raises(ValidationError, match="name is required"):
            product.validate()

    def test_negative_stock(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            _candle(stock=-1).validate()

    def test_duplicate_variant_names(self):
        with pytest.raises(ValidationError, match="Duplicate variant name"):
            _candle(variants=[_variant("L"), _variant("L")]).validate()

    def test_bundle_items_only_on_bundles(self):
        product = _candle()
        product.bundle_items = [BundleComponent("Big Jar Candle", "200 gm")]
        with pytest.raises(ValidationError, match="Only Bundle products"):
            product.validate()
        product.product_type = ProductType.BUNDLE
        product.validate()
