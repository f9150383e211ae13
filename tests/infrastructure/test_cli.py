"""CLI tests using click's CliRunner over a JSON store in a temp directory."""

from decimal import Decimal

import pytest
from click.testing import CliRunner

from storefront.application.dto import CustomerDetails, OrderItemSpec, PlaceOrderCommand
from storefront.application.place_order import PlaceOrderHandler
from storefront.domain.model.product import Product, ProductType
from storefront.domain.model.value_objects import Money
from storefront.infrastructure.cli.main import cli
from storefront.infrastructure.cli.state import CliState
from storefront.infrastructure.config import Settings
from storefront.infrastructure.persistence.json_unit_of_work import JsonUnitOfWork


@pytest.fixture
def state(tmp_path) -> CliState:
    settings = Settings(backend="json", data_dir=tmp_path, log_level="WARNING")
    return CliState(settings=settings, uow_factory=lambda: JsonUnitOfWork(tmp_path))


def _run(state: CliState, *args: str):
    return CliRunner().invoke(cli, list(args), obj=state)


def _seed_order(state: CliState) -> str:
    uow = state.uow()
    with uow:
        product = Product(
            id=None, product_type=ProductType.SINGLE, category="Candles",
            name="Amber Candle", price=Money.of("500"), stock=10,
        )
        uow.products.add(product)
        uow.commit()
    command = PlaceOrderCommand(
        customer=CustomerDetails(
            name="Mona", email="m@x.com", phone="0100", address="1 Nile St", city="Cairo"
        ),
        items=[OrderItemSpec(product.id, 2)],
    )
    return PlaceOrderHandler(state.uow()).handle(command).id


class TestOrderCommands:

    def test_list_empty(self, state):
        result = _run(state, "order", "list")
        assert result.exit_code == 0
        assert "No orders found." in result.output

    def test_list_and_show(self, state):
        order_id = _seed_order(state)

        listing = _run(state, "order", "list")
        assert order_id in listing.output
        assert "Pending" in listing.output

        shown = _run(state, "order", "show", "--id", order_id)
        assert shown.exit_code == 0
        assert "Amber Candle" in shown.output
        assert "1050" in shown.output

    def test_show_unknown(self, state):
        result = _run(state, "order", "show", "--id", "nope")
        assert result.exit_code != 0
        assert "Order not found" in result.output

    def test_status(self, state):
        order_id = _seed_order(state)
        result = _run(state, "order", "status", "--id", order_id, "--set", "Delivered")
        assert result.exit_code == 0
        assert "is now Delivered" in result.output

    def test_status_rejects_unknown_value(self, state):
        order_id = _seed_order(state)
        result = _run(state, "order", "status", "--id", order_id, "--set", "Lost")
        assert result.exit_code == 2


class TestCatalogCommands:

    def test_product_list(self, state):
        _seed_order(state)
        result = _run(state, "product", "list")
        assert result.exit_code == 0
        assert "Amber Candle" in result.output

    def test_discount_add_and_list(self, state):
        result = _run(
            state, "discount", "add", "--code", "save10", "--type", "percentage", "--value", "10"
        )
        assert result.exit_code == 0
        assert "Discount SAVE10 added" in result.output

        listing = _run(state, "discount", "list")
        assert "SAVE10" in listing.output

        duplicate = _run(
            state, "discount", "add", "--code", "SAVE10", "--type", "fixed", "--value", "5"
        )
        assert duplicate.exit_code == 1
        assert "Discount code already exists" in duplicate.output

    def test_discount_add_rejects_bad_value(self, state):
        result = _run(
            state, "discount", "add", "--code", "X", "--type", "fixed", "--value", "lots"
        )
        assert result.exit_code == 2

    def test_shipping_set_creates_then_updates(self, state):
        assert _run(state, "shipping", "set", "--city", "Giza", "--fee", "60").exit_code == 0
        assert _run(state, "shipping", "set", "--city", "Giza", "--fee", "65").exit_code == 0

        listing = _run(state, "shipping", "list")
        assert listing.output.count("Giza") == 1
        assert "65" in listing.output
        with state.uow() as uow:
            assert uow.shipping_rates.get_by_city("Giza").shipping_fee.amount == Decimal("65")
