"""Unit tests for the Order aggregate."""

from decimal import Decimal

import pytest

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.order import (
    CustomerInfo,
    Order,
    OrderLineItem,
    OrderStatus,
)
from storefront.domain.model.value_objects import Money, Quantity


def _customer() -> CustomerInfo:
    return CustomerInfo.create(
        name="Mona", email="mona@example.com", phone="0100", address="1 Nile St", city="Cairo"
    )


def _line(price: str = "100", qty: int = 2) -> OrderLineItem:
    return OrderLineItem(
        product_id="p1", product_name="Candle", quantity=Quantity(qty), unit_price=Money.of(price)
    )


def _order(**overrides) -> Order:
    kwargs = dict(
        customer_info=_customer(),
        items=[_line()],
        subtotal=Money.of("200"),
        shipping_fee=Money.of("50"),
        discount_amount=Money.zero(),
        total_amount=Money.of("250"),
    )
    kwargs.update(overrides)
    return Order.create(**kwargs)


class TestCustomerInfo:

    def test_fields_are_trimmed(self):
        info = CustomerInfo.create(
            name=" Mona ", email="m@x.com ", phone=" 1", address="a", city=" Giza", notes="  "
        )
        assert info.name == "Mona"
        assert info.city == "Giza"
        assert info.notes is None

    @pytest.mark.parametrize("missing", ["name", "email", "phone", "address", "city"])
    def test_missing_field_rejected(self, missing):
        fields = dict(name="a", email="b", phone="c", address="d", city="e")
        fields[missing] = "   "
        with pytest.raises(ValidationError, match="Missing required customer information"):
            CustomerInfo.create(**fields)


class TestOrderCreate:

    def test_new_order_is_pending(self):
        order = _order()
        assert order.status == OrderStatus.PENDING
        assert order.id is None
        assert order.created_at == order.updated_at

    def test_blank_payment_method_defaults_to_cash(self):
        assert _order(payment_method="  ").payment_method == "Cash on Delivery"
        assert _order(payment_method="Card").payment_method == "Card"

    def test_empty_items_rejected(self):
        with pytest.raises(ValidationError, match="No order items provided"):
            _order(items=[])

    def test_subtotal_must_match_lines(self):
        with pytest.raises(ValidationError, match="does not match line items"):
            _order(subtotal=Money.of("199"), total_amount=Money.of("249"))

    def test_total_must_match_breakdown(self):
        with pytest.raises(ValidationError, match="does not match breakdown"):
            _order(total_amount=Money.of("200"))

    def test_total_floors_at_zero(self):
        order = _order(discount_amount=Money.of("500"), total_amount=Money.zero())
        assert order.total_amount.amount == Decimal("0")

    def test_item_count(self):
        order = _order(
            items=[_line("100", 2), _line("50", 1)],
            subtotal=Money.of("250"),
            total_amount=Money.of("300"),
        )
        assert order.item_count == 3

    def test_line_total(self):
        assert _line("12.50", 4).line_total == Money.of("50")


class TestOrderStatus:

    def test_parse_accepts_exact_values(self):
        assert OrderStatus.parse("Shipped") == OrderStatus.SHIPPED

    @pytest.mark.parametrize("raw", [None, "", "shipped", "Lost"])
    def test_parse_rejects_others(self, raw):
        with pytest.raises(ValidationError, match="Allowed values: Pending, Processing"):
            OrderStatus.parse(raw)

    def test_any_transition_allowed(self):
        order = _order()
        order.set_status(OrderStatus.DELIVERED)
        order.set_status(OrderStatus.PENDING)
        assert order.status == OrderStatus.PENDING

    def test_set_status_refreshes_updated_at(self):
        order = _order()
        before = order.updated_at
        order.set_status(OrderStatus.PROCESSING)
        assert order.updated_at >= before
