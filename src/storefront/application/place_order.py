"""Application service: Place Order use case.

This is the only place that coordinates several aggregates in one
transaction: products (stock), discounts (lookup) and the new order.
Everything between entering the unit of work and ``commit()`` is staged;
any exception on the way out rolls all of it back, so a cart that fails
on its third line leaves the first two lines' stock untouched.
"""

from __future__ import annotations

import logging

from storefront.application.dto import (
    CustomerDetails,
    OrderDTO,
    OrderItemSpec,
    PlaceOrderCommand,
)
from storefront.domain.exceptions import (
    DomainException,
    EntityNotFoundError,
    ProductUnavailableError,
    ValidationError,
)
from storefront.domain.model.discount import Discount
from storefront.domain.model.order import CustomerInfo, Order, OrderLineItem
from storefront.domain.model.value_objects import Quantity
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.domain.service import pricing

logger = logging.getLogger(__name__)


class PlaceOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, command: PlaceOrderCommand) -> OrderDTO:
        """Place an order atomically.

        Steps:
        1. Reject an empty cart or incomplete customer info up front.
        2. Inside one unit of work, load each product, take stock from it
           (variant or main) and snapshot a line item at the server price.
        3. Price the order (shipping tier, discount, floored total).
        4. Persist the Pending order and commit.
        """
        if not command.items:
            raise ValidationError("No order items provided")
        customer = self._customer_info(command.customer)
        fee_hint = pricing.parse_fee_hint(command.shipping_fee_hint)

        try:
            with self._uow as uow:
                line_items = [self._take_stock(uow, spec) for spec in command.items]

                discount = self._find_discount(uow, command.discount_code)
                breakdown = pricing.price_order(line_items, fee_hint, discount)

                order = Order.create(
                    customer_info=customer,
                    items=line_items,
                    subtotal=breakdown.subtotal,
                    shipping_fee=breakdown.shipping_fee,
                    discount_amount=breakdown.discount_amount,
                    total_amount=breakdown.total_amount,
                    payment_method=command.payment_method,
                    discount_code=discount.code if discount else None,
                )
                uow.orders.add(order)
                uow.commit()
        except DomainException as exc:
            logger.warning(f"Order rejected: {exc}")
            raise

        logger.info(
            f"Order {order.id} placed: {order.item_count} units, total {order.total_amount}"
        )
        return OrderDTO.from_domain(order)

    # --- Steps ----------------------------------------------------------------

    @staticmethod
    def _customer_info(details: CustomerDetails | None) -> CustomerInfo:
        if details is None:
            raise ValidationError("Missing required customer information")
        return CustomerInfo.create(
            name=details.name,
            email=details.email,
            phone=details.phone,
            address=details.address,
            city=details.city,
            notes=details.notes,
        )

    @staticmethod
    def _take_stock(uow: UnitOfWork, spec: OrderItemSpec) -> OrderLineItem:
        quantity = Quantity(spec.quantity)

        product = uow.products.get_by_id(spec.product_id) if spec.product_id else None
        if product is None:
            raise EntityNotFoundError(
                f"Product not found: {spec.name or spec.product_id}"
            )
        if not product.is_active:
            raise ProductUnavailableError(f"Product is not available: {product.name}")

        allocation = product.allocate(quantity, spec.variant_name)
        product.touch()
        uow.products.save(product)

        return OrderLineItem(
            product_id=product.id,  # type: ignore[arg-type]
            product_name=product.name,
            quantity=quantity,
            unit_price=allocation.unit_price,  # <-- price snapshot
            variant_name=allocation.variant_name,
            customization=spec.customization or None,
        )

    @staticmethod
    def _find_discount(uow: UnitOfWork, raw_code: str | None) -> Discount | None:
        code = Discount.normalize_code(raw_code)
        if not code:
            return None
        discount = uow.discounts.get_by_code(code, active_only=True)
        if discount is None:
            logger.debug(f"Discount code {code!r} not found or inactive; ignoring")
        return discount
