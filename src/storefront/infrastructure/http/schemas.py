"""Request and response bodies for the HTTP API.

Field names are camelCase on the wire and snake_case in Python.  Request
models convert themselves into domain objects (``to_domain``) or into a
dict of field changes (``to_changes``); response models are built from
domain objects or DTOs with ``from_domain``.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Annotated, Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel

from storefront.application.dto import (
    CustomerDetails,
    OrderDTO,
    OrderItemSpec,
    PlaceOrderCommand,
)
from storefront.application.manage_bundles import BundleView
from storefront.domain.model.catalog import Bundle, CareInstruction, Category, ShippingRate
from storefront.domain.model.discount import Discount, DiscountScope, DiscountStatus, DiscountType
from storefront.domain.model.product import (
    BundleComponent,
    Product,
    ProductStatus,
    ProductType,
    ProductVariant,
)
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import Page

# Amounts are exact Decimals internally and plain JSON numbers on the wire.
Amount = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class UpdateModel(CamelModel):
    """Partial update body: only fields present and non-null are applied."""

    def to_changes(self) -> dict[str, Any]:
        return {
            name: getattr(self, name)
            for name in self.model_fields_set
            if getattr(self, name) is not None
        }


class MessageOut(CamelModel):
    message: str


# --- Orders -------------------------------------------------------------------


class CustomerInfoIn(CamelModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    notes: Optional[str] = None


class OrderItemIn(CamelModel):
    product_id: str
    quantity: int
    variant_name: Optional[str] = None
    customization: Union[str, list[str], None] = None
    name: Optional[str] = None

    def to_spec(self) -> OrderItemSpec:
        customization = self.customization
        if isinstance(customization, str):
            customization = [customization]
        return OrderItemSpec(
            product_id=self.product_id,
            quantity=self.quantity,
            variant_name=self.variant_name or None,
            customization=tuple(customization) if customization else None,
            name=self.name,
        )


class PlaceOrderRequest(CamelModel):
    customer_info: Optional[CustomerInfoIn] = None
    items: list[OrderItemIn] = Field(default_factory=list)
    payment_method: Optional[str] = None
    discount_code: Optional[str] = None
    shipping_fee: Union[Decimal, str, None] = None

    def to_command(self) -> PlaceOrderCommand:
        customer = None
        if self.customer_info is not None:
            customer = CustomerDetails(**self.customer_info.model_dump())
        return PlaceOrderCommand(
            customer=customer,
            items=[item.to_spec() for item in self.items],
            payment_method=self.payment_method,
            discount_code=self.discount_code,
            shipping_fee_hint=self.shipping_fee,
        )


class OrderCreatedOut(CamelModel):
    message: str
    order_id: str


class StatusUpdateRequest(CamelModel):
    status: str


class CustomerInfoOut(CamelModel):
    name: Optional[str]
    email: Optional[str]
    phone: Optional[str]
    address: Optional[str]
    city: Optional[str]
    notes: Optional[str]


class OrderLineOut(CamelModel):
    product_id: str
    name: str
    quantity: int
    price: Amount
    line_total: Amount
    variant_name: Optional[str]
    customization: Optional[list[str]]


class OrderOut(CamelModel):
    id: str
    customer_info: CustomerInfoOut
    items: list[OrderLineOut]
    subtotal: Amount
    shipping_fee: Amount
    discount_code: Optional[str]
    discount_amount: Amount
    total_amount: Amount
    currency: str
    payment_method: str
    status: str
    created_at: datetime
    updated_at: datetime

    @staticmethod
    def from_domain(dto: OrderDTO) -> OrderOut:
        c = dto.customer
        return OrderOut(
            id=dto.id,
            customer_info=CustomerInfoOut(
                name=c.name, email=c.email, phone=c.phone,
                address=c.address, city=c.city, notes=c.notes,
            ),
            items=[
                OrderLineOut(
                    product_id=i.product_id,
                    name=i.product_name,
                    quantity=i.quantity,
                    price=i.unit_price,
                    line_total=i.line_total,
                    variant_name=i.variant_name,
                    customization=i.customization,
                )
                for i in dto.items
            ],
            subtotal=dto.subtotal,
            shipping_fee=dto.shipping_fee,
            discount_code=dto.discount_code,
            discount_amount=dto.discount_amount,
            total_amount=dto.total_amount,
            currency=dto.currency,
            payment_method=dto.payment_method,
            status=dto.status,
            created_at=dto.created_at,
            updated_at=dto.updated_at,
        )


# --- Products -----------------------------------------------------------------


class VariantIn(CamelModel):
    variant_name: str
    variant_type: str = ""
    price: Decimal
    stock: int = 0
    sku: Optional[str] = None

    def to_domain(self) -> ProductVariant:
        return ProductVariant(
            variant_name=self.variant_name,
            variant_type=self.variant_type,
            price=Money(self.price),
            stock=self.stock,
            sku=self.sku,
        )


class BundleItemIn(CamelModel):
    sub_product_name: str
    size: str
    allowed_scents: list[str] = Field(default_factory=list)

    def to_domain(self) -> BundleComponent:
        return BundleComponent(
            sub_product_name=self.sub_product_name,
            size=self.size,
            allowed_scents=tuple(self.allowed_scents),
        )


class ProductUpdate(UpdateModel):
    product_type: Optional[ProductType] = None
    category: Optional[str] = None
    name: Optional[str] = None
    price: Optional[Decimal] = None
    stock: Optional[int] = None
    status: Optional[ProductStatus] = None
    featured: Optional[bool] = None
    description: Optional[str] = None
    variants: Optional[list[VariantIn]] = None
    bundle_items: Optional[list[BundleItemIn]] = None
    image_paths: Optional[list[str]] = None
    scents: Optional[str] = None
    size: Optional[str] = None
    burn_time: Optional[str] = None
    wick_type: Optional[str] = None
    coverage_space: Optional[str] = None

    def to_changes(self) -> dict[str, Any]:
        changes = super().to_changes()
        if "price" in changes:
            changes["price"] = Money(changes["price"])
        if "variants" in changes:
            changes["variants"] = [v.to_domain() for v in changes["variants"]]
        if "bundle_items" in changes:
            changes["bundle_items"] = [c.to_domain() for c in changes["bundle_items"]]
        return changes


class ProductIn(ProductUpdate):
    category: str
    name: str
    price: Decimal
    product_type: ProductType = ProductType.SINGLE
    status: ProductStatus = ProductStatus.ACTIVE
    featured: bool = False
    stock: int = 0

    def to_domain(self) -> Product:
        fields = self.to_changes()
        fields.update(
            product_type=self.product_type,
            status=self.status,
            featured=self.featured,
            stock=self.stock,
        )
        return Product(id=None, **fields)


class VariantOut(CamelModel):
    variant_name: str
    variant_type: str
    price: Amount
    stock: int
    sku: Optional[str]


class BundleItemOut(CamelModel):
    sub_product_name: str
    size: str
    allowed_scents: list[str]


class ProductOut(CamelModel):
    id: str
    product_type: str
    category: str
    name: str
    price: Amount
    currency: str
    stock: int
    status: str
    featured: bool
    description: Optional[str]
    variants: list[VariantOut]
    bundle_items: list[BundleItemOut]
    image_paths: list[str]
    scents: Optional[str]
    size: Optional[str]
    burn_time: Optional[str]
    wick_type: Optional[str]
    coverage_space: Optional[str]
    created_at: datetime
    updated_at: datetime

    @staticmethod
    def from_domain(p: Product) -> ProductOut:
        return ProductOut(
            id=p.id,
            product_type=p.product_type.value,
            category=p.category,
            name=p.name,
            price=p.price.amount,
            currency=p.price.currency,
            stock=p.stock,
            status=p.status.value,
            featured=p.featured,
            description=p.description,
            variants=[
                VariantOut(
                    variant_name=v.variant_name,
                    variant_type=v.variant_type,
                    price=v.price.amount,
                    stock=v.stock,
                    sku=v.sku,
                )
                for v in p.variants
            ],
            bundle_items=[
                BundleItemOut(
                    sub_product_name=c.sub_product_name,
                    size=c.size,
                    allowed_scents=list(c.allowed_scents),
                )
                for c in p.bundle_items
            ],
            image_paths=list(p.image_paths),
            scents=p.scents,
            size=p.size,
            burn_time=p.burn_time,
            wick_type=p.wick_type,
            coverage_space=p.coverage_space,
            created_at=p.created_at,
            updated_at=p.updated_at,
        )


class ProductPageOut(CamelModel):
    total: int
    page: int
    limit: int
    results: list[ProductOut]

    @staticmethod
    def from_domain(page: Page) -> ProductPageOut:
        return ProductPageOut(
            total=page.total,
            page=page.page,
            limit=page.limit,
            results=[ProductOut.from_domain(p) for p in page.results],
        )


# --- Bundles ------------------------------------------------------------------


class BundleUpdate(UpdateModel):
    name: Optional[str] = None
    price: Optional[Decimal] = None
    description: Optional[str] = None
    product_ids: Optional[list[str]] = Field(default=None, alias="products")
    image: Optional[str] = None
    status: Optional[ProductStatus] = None
    featured: Optional[bool] = None

    def to_changes(self) -> dict[str, Any]:
        changes = super().to_changes()
        if "price" in changes:
            changes["price"] = Money(changes["price"])
        return changes


class BundleIn(BundleUpdate):
    name: str
    price: Decimal
    product_ids: list[str] = Field(default_factory=list, alias="products")
    status: ProductStatus = ProductStatus.ACTIVE
    featured: bool = False

    def to_domain(self) -> Bundle:
        fields = self.to_changes()
        fields.update(product_ids=self.product_ids, status=self.status, featured=self.featured)
        return Bundle(id=None, **fields)


class BundleOut(CamelModel):
    id: str
    name: str
    price: Amount
    currency: str
    description: Optional[str]
    products: list[ProductOut]
    image: Optional[str]
    status: str
    featured: bool
    created_at: datetime
    updated_at: datetime

    @staticmethod
    def from_domain(view: BundleView) -> BundleOut:
        b = view.bundle
        return BundleOut(
            id=b.id,
            name=b.name,
            price=b.price.amount,
            currency=b.price.currency,
            description=b.description,
            products=[ProductOut.from_domain(p) for p in view.products],
            image=b.image,
            status=b.status.value,
            featured=b.featured,
            created_at=b.created_at,
            updated_at=b.updated_at,
        )


class BundlePageOut(CamelModel):
    total: int
    page: int
    limit: int
    results: list[BundleOut]

    @staticmethod
    def from_domain(page: Page) -> BundlePageOut:
        return BundlePageOut(
            total=page.total,
            page=page.page,
            limit=page.limit,
            results=[BundleOut.from_domain(v) for v in page.results],
        )


# --- Discounts ----------------------------------------------------------------


class DiscountUpdate(UpdateModel):
    code: Optional[str] = None
    type: Optional[DiscountType] = None
    value: Optional[Decimal] = None
    applies_to: Optional[DiscountScope] = None
    categories: Optional[list[str]] = None
    products: Optional[list[str]] = None
    status: Optional[DiscountStatus] = None

    def to_changes(self) -> dict[str, Any]:
        changes = super().to_changes()
        if "code" in changes:
            changes["code"] = Discount.normalize_code(changes["code"])
        return changes


class DiscountIn(DiscountUpdate):
    code: str
    type: DiscountType
    value: Decimal
    applies_to: DiscountScope = DiscountScope.ENTIRE
    categories: list[str] = Field(default_factory=list)
    products: list[str] = Field(default_factory=list)
    status: DiscountStatus = DiscountStatus.ACTIVE

    def to_domain(self) -> Discount:
        return Discount(
            id=None,
            code=Discount.normalize_code(self.code),
            type=self.type,
            value=self.value,
            applies_to=self.applies_to,
            categories=list(self.categories),
            products=list(self.products),
            status=self.status,
        )


class DiscountValidateRequest(CamelModel):
    code: Optional[str] = None


class DiscountOut(CamelModel):
    id: str
    code: str
    type: str
    value: Amount
    applies_to: str
    categories: list[str]
    products: list[str]
    status: str
    created_at: datetime
    updated_at: datetime

    @staticmethod
    def from_domain(d: Discount) -> DiscountOut:
        return DiscountOut(
            id=d.id,
            code=d.code,
            type=d.type.value,
            value=d.value,
            applies_to=d.applies_to.value,
            categories=list(d.categories),
            products=list(d.products),
            status=d.status.value,
            created_at=d.created_at,
            updated_at=d.updated_at,
        )


class AppliedDiscountOut(CamelModel):
    code: str
    type: str
    value: Amount


class DiscountValidationOut(CamelModel):
    valid: bool
    discount: AppliedDiscountOut


# --- Shipping rates, categories, care instructions ----------------------------


class ShippingRateUpdate(UpdateModel):
    city: Optional[str] = None
    shipping_fee: Optional[Decimal] = None

    def to_changes(self) -> dict[str, Any]:
        changes = super().to_changes()
        if "shipping_fee" in changes:
            changes["shipping_fee"] = Money(changes["shipping_fee"])
        return changes


class ShippingRateIn(ShippingRateUpdate):
    city: str
    shipping_fee: Decimal

    def to_domain(self) -> ShippingRate:
        return ShippingRate(id=None, city=self.city, shipping_fee=Money(self.shipping_fee))


class ShippingRateOut(CamelModel):
    id: str
    city: str
    shipping_fee: Amount

    @staticmethod
    def from_domain(rate: ShippingRate) -> ShippingRateOut:
        return ShippingRateOut(id=rate.id, city=rate.city, shipping_fee=rate.shipping_fee.amount)


class CategoryUpdate(UpdateModel):
    name: Optional[str] = None
    sort_order: Optional[int] = None


class CategoryIn(CategoryUpdate):
    name: str
    sort_order: int = 0

    def to_domain(self) -> Category:
        return Category(id=None, name=self.name, sort_order=self.sort_order)


class CategoryOut(CamelModel):
    id: str
    name: str
    sort_order: int

    @staticmethod
    def from_domain(category: Category) -> CategoryOut:
        return CategoryOut(id=category.id, name=category.name, sort_order=category.sort_order)


class CareInstructionUpdate(UpdateModel):
    category: Optional[str] = None
    care_title: Optional[str] = None
    care_content: Optional[str] = None


class CareInstructionIn(CareInstructionUpdate):
    category: str
    care_title: str
    care_content: str

    def to_domain(self) -> CareInstruction:
        return CareInstruction(
            id=None,
            category=self.category,
            care_title=self.care_title,
            care_content=self.care_content,
        )


class CareInstructionOut(CamelModel):
    id: str
    category: str
    care_title: str
    care_content: str

    @staticmethod
    def from_domain(care: CareInstruction) -> CareInstructionOut:
        return CareInstructionOut(
            id=care.id,
            category=care.category,
            care_title=care.care_title,
            care_content=care.care_content,
        )
