"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the HTTP/CLI layers and the application layer
without exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from storefront.domain.model.order import Order


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: one cart line as submitted by the client."""

    product_id: str
    quantity: int
    variant_name: str | None = None
    customization: tuple[str, ...] | None = None
    name: str | None = None  # client label, only used in error messages


@dataclass(frozen=True)
class CustomerDetails:
    """Input: customer fields exactly as submitted; any may be missing."""

    name: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    city: str | None = None
    notes: str | None = None


@dataclass(frozen=True)
class PlaceOrderCommand:
    customer: CustomerDetails | None
    items: list[OrderItemSpec] = field(default_factory=list)
    payment_method: str | None = None
    discount_code: str | None = None
    shipping_fee_hint: str | float | int | Decimal | None = None


@dataclass(frozen=True)
class OrderLineItemDTO:
    product_id: str
    product_name: str
    quantity: int
    unit_price: Decimal
    line_total: Decimal
    variant_name: str | None
    customization: list[str] | None


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as returned to callers."""

    id: str
    customer: CustomerDetails
    items: list[OrderLineItemDTO]
    subtotal: Decimal
    shipping_fee: Decimal
    discount_code: str | None
    discount_amount: Decimal
    total_amount: Decimal
    currency: str
    payment_method: str
    status: str
    created_at: datetime
    updated_at: datetime

    @staticmethod
    def from_domain(order: Order) -> OrderDTO:
        info = order.customer_info
        return OrderDTO(
            id=order.id,  # type: ignore[arg-type]
            customer=CustomerDetails(
                name=info.name,
                email=info.email,
                phone=info.phone,
                address=info.address,
                city=info.city,
                notes=info.notes,
            ),
            items=[
                OrderLineItemDTO(
                    product_id=item.product_id,
                    product_name=item.product_name,
                    quantity=item.quantity.value,
                    unit_price=item.unit_price.amount,
                    line_total=item.line_total.amount,
                    variant_name=item.variant_name,
                    customization=list(item.customization) if item.customization else None,
                )
                for item in order.items
            ],
            subtotal=order.subtotal.amount,
            shipping_fee=order.shipping_fee.amount,
            discount_code=order.discount_code,
            discount_amount=order.discount_amount.amount,
            total_amount=order.total_amount.amount,
            currency=order.total_amount.currency,
            payment_method=order.payment_method,
            status=order.status.value,
            created_at=order.created_at,
            updated_at=order.updated_at,
        )
