"""Domain service: order pricing.

Pure functions with no store access, so the coordinator and the tests
can call them independently.  Shipping is free from
``FREE_SHIPPING_THRESHOLD`` upwards; below it the caller's city fee is
used when positive, else ``DEFAULT_SHIPPING_FEE``.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.discount import Discount, DiscountType
from storefront.domain.model.order import OrderLineItem
from storefront.domain.model.value_objects import Money, Quantity

FREE_SHIPPING_THRESHOLD = Money(Decimal("2000"))
DEFAULT_SHIPPING_FEE = Money(Decimal("50"))


@dataclass(frozen=True)
class PriceBreakdown:
    subtotal: Money
    shipping_fee: Money
    discount_amount: Money
    total_amount: Money


def compute_line_total(unit_price: Money, quantity: Quantity) -> Money:
    return unit_price * quantity.value


def parse_fee_hint(raw: str | float | int | Decimal | None) -> Money | None:
    """Read a client-supplied shipping fee; unusable values count as absent."""
    if raw is None or raw == "":
        return None
    try:
        fee = Money.of(raw)
    except ValidationError:
        return None
    return None if fee.is_zero else fee


def compute_shipping(subtotal: Money, city_fee_hint: Money | None) -> Money:
    if subtotal >= FREE_SHIPPING_THRESHOLD:
        return Money.zero(subtotal.currency)
    if city_fee_hint is not None and not city_fee_hint.is_zero:
        return city_fee_hint
    return DEFAULT_SHIPPING_FEE


def compute_discount(subtotal: Money, discount: Discount | None) -> Money:
    if discount is None:
        return Money.zero(subtotal.currency)
    if discount.type == DiscountType.PERCENTAGE:
        return subtotal.fraction(discount.value)
    return Money(discount.value, subtotal.currency)


def compute_total(subtotal: Money, shipping: Money, discount: Money) -> Money:
    return (subtotal + shipping).subtract_floored(discount)


def price_order(
    items: list[OrderLineItem],
    city_fee_hint: Money | None,
    discount: Discount | None,
) -> PriceBreakdown:
    """Derive every server-side amount of an order from its line items."""
    subtotal = Money.zero()
    for item in items:
        subtotal = subtotal + compute_line_total(item.unit_price, item.quantity)

    shipping_fee = compute_shipping(subtotal, city_fee_hint)
    discount_amount = compute_discount(subtotal, discount)
    return PriceBreakdown(
        subtotal=subtotal,
        shipping_fee=shipping_fee,
        discount_amount=discount_amount,
        total_amount=compute_total(subtotal, shipping_fee, discount_amount),
    )
