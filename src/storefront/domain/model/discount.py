"""Discount aggregate — promotional codes redeemable at checkout."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum

from storefront.domain.exceptions import ValidationError


class DiscountType(Enum):
    PERCENTAGE = "percentage"
    FIXED = "fixed"


class DiscountScope(Enum):
    ENTIRE = "entire"
    CATEGORIES = "categories"
    PRODUCTS = "products"


class DiscountStatus(Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


@dataclass
class Discount:
    """A percentage or fixed reduction of the order subtotal.

    ``applies_to`` with its ``categories`` / ``products`` lists is stored
    for administration but does not narrow the discounted amount.
    """

    id: str | None
    code: str
    type: DiscountType
    value: Decimal
    applies_to: DiscountScope = DiscountScope.ENTIRE
    categories: list[str] = field(default_factory=list)
    products: list[str] = field(default_factory=list)
    status: DiscountStatus = DiscountStatus.ACTIVE
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def normalize_code(code: str | None) -> str:
        return (code or "").strip().upper()

    @property
    def is_active(self) -> bool:
        return self.status == DiscountStatus.ACTIVE

    def validate(self) -> None:
        if not self.code:
            raise ValidationError("Discount code is required")
        if self.code != Discount.normalize_code(self.code):
            raise ValidationError("Discount code must be uppercase without surrounding spaces")
        if self.value < Decimal("0"):
            raise ValidationError("Discount value cannot be negative")
        if self.type == DiscountType.PERCENTAGE and self.value > Decimal("100"):
            raise ValidationError("Percentage discount cannot exceed 100")
