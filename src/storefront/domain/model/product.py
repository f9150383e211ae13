"""Product aggregate.

A product is either a Single item or a Bundle of customizable components.
Stock lives on the product itself and, for products sold in several
configurations, on each variant independently.  The order coordinator is
the only code path that decrements stock.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from storefront.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    ValidationError,
)
from storefront.domain.model.value_objects import Money, Quantity


class ProductType(Enum):
    SINGLE = "Single"
    BUNDLE = "Bundle"


class ProductStatus(Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"


@dataclass
class ProductVariant:
    """A purchasable configuration (size, scent, colour) with its own stock."""

    variant_name: str
    variant_type: str
    price: Money
    stock: int = 0
    sku: str | None = None

    def deduct(self, quantity: Quantity, product_name: str) -> None:
        if self.stock < quantity.value:
            raise InsufficientStockError(
                f"Insufficient stock for {product_name} ({self.variant_name})"
            )
        self.stock -= quantity.value


@dataclass(frozen=True)
class BundleComponent:
    """A customizable slot inside a bundle, e.g. 'Big Jar Candle, 200 gm'."""

    sub_product_name: str
    size: str
    allowed_scents: tuple[str, ...] = ()


@dataclass(frozen=True)
class Allocation:
    """Result of taking stock from a product for one cart line."""

    unit_price: Money
    variant_name: str | None


@dataclass
class Product:
    """A catalog entry.

    ``name`` is the single display name for both product types; for a
    Bundle it holds the bundle name.  Construction does not validate so
    repositories can reconstitute stored documents as-is; call
    ``validate()`` on admin writes.
    """

    id: str | None
    product_type: ProductType
    category: str
    name: str
    price: Money
    stock: int = 0
    status: ProductStatus = ProductStatus.ACTIVE
    featured: bool = False
    description: str | None = None
    variants: list[ProductVariant] = field(default_factory=list)
    bundle_items: list[BundleComponent] = field(default_factory=list)
    image_paths: list[str] = field(default_factory=list)
    scents: str | None = None
    size: str | None = None
    burn_time: str | None = None
    wick_type: str | None = None
    coverage_space: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_active(self) -> bool:
        return self.status == ProductStatus.ACTIVE

    @property
    def is_bundle(self) -> bool:
        return self.product_type == ProductType.BUNDLE

    def validate(self) -> None:
        """Check the invariants an admin write must satisfy."""
        if not self.category or not self.category.strip():
            raise ValidationError("Product category is required")
        if not self.name or not self.name.strip():
            raise ValidationError("Product name is required")
        if self.stock < 0:
            raise ValidationError("Product stock cannot be negative")

        seen: set[str] = set()
        for variant in self.variants:
            if not variant.variant_name or not variant.variant_name.strip():
                raise ValidationError("Variant name is required")
            if variant.stock < 0:
                raise ValidationError(
                    f"Stock for variant {variant.variant_name} cannot be negative"
                )
            if variant.variant_name in seen:
                raise ValidationError(f"Duplicate variant name: {variant.variant_name}")
            seen.add(variant.variant_name)

        if self.bundle_items and not self.is_bundle:
            raise ValidationError("Only Bundle products can have bundle items")

    def find_variant(self, variant_name: str) -> ProductVariant:
        for variant in self.variants:
            if variant.variant_name == variant_name:
                return variant
        raise EntityNotFoundError("Variant not found")

    def allocate(self, quantity: Quantity, variant_name: str | None = None) -> Allocation:
        """Take ``quantity`` units from stock and return the authoritative price.

        A variant name only selects a variant when the product actually has
        variants; otherwise the request falls through to the main stock.
        """
        if variant_name and self.variants:
            variant = self.find_variant(variant_name)
            variant.deduct(quantity, self.name)
            return Allocation(unit_price=variant.price, variant_name=variant.variant_name)

        if self.stock < quantity.value:
            raise InsufficientStockError(f"Insufficient stock for {self.name}")
        self.stock -= quantity.value
        return Allocation(unit_price=self.price, variant_name=None)

    def touch(self) -> None:
        self.updated_at = datetime.now(timezone.utc)
