"""Small catalog reference entities.

These have no invariants beyond required, trimmed fields and the
uniqueness rules their services enforce.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.product import ProductStatus
from storefront.domain.model.value_objects import Money


def _require(value: str | None, message: str) -> None:
    if value is None or not value.strip():
        raise ValidationError(message)


@dataclass
class ShippingRate:
    """Flat delivery fee for one city."""

    id: str | None
    city: str
    shipping_fee: Money

    def validate(self) -> None:
        _require(self.city, "City is required")


@dataclass
class Category:
    id: str | None
    name: str
    sort_order: int = 0

    def validate(self) -> None:
        _require(self.name, "Category name is required")


@dataclass
class CareInstruction:
    id: str | None
    category: str
    care_title: str
    care_content: str

    def validate(self) -> None:
        _require(self.category, "Category is required")
        _require(self.care_title, "Care title is required")
        _require(self.care_content, "Care content is required")


@dataclass
class Bundle:
    """A curated set of products sold together at one price."""

    id: str | None
    name: str
    price: Money
    description: str | None = None
    product_ids: list[str] = field(default_factory=list)
    image: str | None = None
    status: ProductStatus = ProductStatus.ACTIVE
    featured: bool = False
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def validate(self) -> None:
        _require(self.name, "Bundle name is required")
