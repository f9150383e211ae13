"""Tests for the stored document shape shared by both backends."""

from datetime import datetime, timezone
from decimal import Decimal

from bson import Decimal128

from storefront.domain.model.order import CustomerInfo, Order, OrderLineItem, OrderStatus
from storefront.domain.model.value_objects import Money, Quantity
from storefront.infrastructure.persistence import documents
from storefront.infrastructure.persistence.mongo_repositories import encode, object_id


def _order() -> Order:
    return Order.create(
        customer_info=CustomerInfo.create("Mona", "m@x.com", "0100", "1 Nile St", "Cairo"),
        items=[OrderLineItem("p1", "Candle", Quantity(2), Money.of("100"), "Large", ("Oud",))],
        subtotal=Money.of("200"),
        shipping_fee=Money.of("50"),
        discount_amount=Money.of("20"),
        total_amount=Money.of("230"),
        discount_code="SAVE10",
    )


class TestOrderDocument:

    def test_camel_case_keys(self):
        doc = documents.ORDERS.to_document(_order())
        assert doc["customerInfo"]["city"] == "Cairo"
        assert doc["items"][0] == {
            "productId": "p1",
            "name": "Candle",
            "quantity": 2,
            "price": Decimal("100"),
            "variantName": "Large",
            "customization": ["Oud"],
        }
        assert doc["shippingFee"] == Decimal("50")
        assert doc["totalAmount"] == Decimal("230")
        assert doc["status"] == "Pending"
        assert "id" not in doc

    def test_reads_mongo_shaped_document(self):
        doc = encode(documents.ORDERS.to_document(_order()))
        doc["createdAt"] = datetime(2024, 5, 1, 12, 0)  # naive timestamps are read as UTC
        order = documents.ORDERS.from_document("abc", doc)

        assert isinstance(doc["totalAmount"], Decimal128)
        assert order.id == "abc"
        assert order.total_amount == Money.of("230")
        assert order.items[0].customization == ("Oud",)
        assert order.created_at.tzinfo == timezone.utc
        assert order.status == OrderStatus.PENDING

    def test_missing_optional_fields_default(self):
        doc = encode(documents.ORDERS.to_document(_order()))
        del doc["discountAmount"]
        del doc["currency"]
        order = documents.ORDERS.from_document("abc", doc)
        assert order.discount_amount == Money.zero()
        assert order.total_amount.currency == "EGP"


class TestObjectId:

    def test_invalid_id_is_none(self):
        assert object_id("not-an-id") is None

    def test_valid_id(self):
        assert str(object_id("65f0c0ffee0000000000abcd")) == "65f0c0ffee0000000000abcd"
