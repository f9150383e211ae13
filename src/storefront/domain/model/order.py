"""Order aggregate — the core of the domain.

The Order is an aggregate root that owns its line items and its price
breakdown.  Once created, items and amounts never change; only the
status moves.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money, Quantity

DEFAULT_PAYMENT_METHOD = "Cash on Delivery"


class OrderStatus(Enum):
    PENDING = "Pending"
    PROCESSING = "Processing"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"

    @classmethod
    def parse(cls, raw: str | None) -> OrderStatus:
        for status in cls:
            if status.value == raw:
                return status
        allowed = ", ".join(s.value for s in cls)
        raise ValidationError(f"Invalid status '{raw}'. Allowed values: {allowed}")


@dataclass(frozen=True)
class CustomerInfo:
    name: str
    email: str
    phone: str
    address: str
    city: str
    notes: str | None = None

    @classmethod
    def create(
        cls,
        name: str | None,
        email: str | None,
        phone: str | None,
        address: str | None,
        city: str | None,
        notes: str | None = None,
    ) -> CustomerInfo:
        """Build customer info, rejecting any blank required field."""
        values = [name, email, phone, address, city]
        if any(v is None or not str(v).strip() for v in values):
            raise ValidationError("Missing required customer information")
        return cls(
            name=name.strip(),
            email=email.strip(),
            phone=phone.strip(),
            address=address.strip(),
            city=city.strip(),
            notes=notes.strip() if notes and notes.strip() else None,
        )


@dataclass(frozen=True)
class OrderLineItem:
    """Frozen snapshot of what was bought and at which server-side price."""

    product_id: str
    product_name: str
    quantity: Quantity
    unit_price: Money  # resolved from the catalog, never from the client
    variant_name: str | None = None
    customization: tuple[str, ...] | None = None

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass
class Order:
    """Aggregate root for customer orders.

    Use ``Order.create()`` for new orders — it enforces the creation
    rules.  The ``__init__`` is intentionally simple so repositories can
    reconstitute persisted orders without re-validating.
    """

    id: str | None
    customer_info: CustomerInfo
    items: list[OrderLineItem]
    subtotal: Money
    shipping_fee: Money
    total_amount: Money
    discount_amount: Money = field(default_factory=Money.zero)
    discount_code: str | None = None
    payment_method: str = DEFAULT_PAYMENT_METHOD
    status: OrderStatus = OrderStatus.PENDING
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        customer_info: CustomerInfo,
        items: list[OrderLineItem],
        subtotal: Money,
        shipping_fee: Money,
        discount_amount: Money,
        total_amount: Money,
        payment_method: str | None = None,
        discount_code: str | None = None,
    ) -> Order:
        """Create a new Pending order, enforcing all invariants."""
        if not items:
            raise ValidationError("No order items provided")

        line_sum = Money.zero(subtotal.currency)
        for item in items:
            line_sum = line_sum + item.line_total
        if line_sum != subtotal:
            raise ValidationError(
                f"Subtotal {subtotal} does not match line items ({line_sum})"
            )

        expected_total = (subtotal + shipping_fee).subtract_floored(discount_amount)
        if total_amount != expected_total:
            raise ValidationError(
                f"Total {total_amount} does not match breakdown ({expected_total})"
            )

        method = (payment_method or "").strip() or DEFAULT_PAYMENT_METHOD
        now = datetime.now(timezone.utc)
        return Order(
            id=None,
            customer_info=customer_info,
            items=list(items),
            subtotal=subtotal,
            shipping_fee=shipping_fee,
            discount_amount=discount_amount,
            discount_code=discount_code,
            total_amount=total_amount,
            payment_method=method,
            status=OrderStatus.PENDING,
            created_at=now,
            updated_at=now,
        )

    # --- State transitions ----------------------------------------------------

    def set_status(self, new_status: OrderStatus) -> None:
        """Move to any status; no transition graph is enforced."""
        self.status = new_status
        self.updated_at = datetime.now(timezone.utc)

    # --- Computed properties --------------------------------------------------

    @property
    def item_count(self) -> int:
        return sum(item.quantity.value for item in self.items)
