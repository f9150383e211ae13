"""Translation between domain entities and stored documents.

Both backends store the same document shape (camelCase keys, as the
storefront's original MongoDB collections did).  Documents produced here
hold ``Decimal`` amounts and ``datetime`` timestamps; each backend encodes
those for its medium.  The entity ID is never part of the document body.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Callable, Generic, TypeVar

from storefront.domain.model.catalog import Bundle, CareInstruction, Category, ShippingRate
from storefront.domain.model.discount import Discount, DiscountScope, DiscountStatus, DiscountType
from storefront.domain.model.order import CustomerInfo, Order, OrderLineItem, OrderStatus
from storefront.domain.model.product import (
    BundleComponent,
    Product,
    ProductStatus,
    ProductType,
    ProductVariant,
)
from storefront.domain.model.value_objects import DEFAULT_CURRENCY, Money, Quantity

T = TypeVar("T")


@dataclass(frozen=True)
class DocumentMapper(Generic[T]):
    collection: str
    to_document: Callable[[T], dict[str, Any]]
    from_document: Callable[[str, dict[str, Any]], T]


# --- Field helpers ------------------------------------------------------------


def _decimal(value: Any) -> Decimal:
    # Accepts Decimal, str, int, float and bson Decimal128 alike.
    return Decimal(str(value))


def _money(value: Any, currency: str | None = None) -> Money:
    return Money(_decimal(value), currency or DEFAULT_CURRENCY)


def _datetime(value: Any) -> datetime:
    if value is None:
        return datetime.now(timezone.utc)
    if isinstance(value, str):
        value = datetime.fromisoformat(value)
    if value.tzinfo is None:
        # MongoDB hands back naive UTC datetimes
        value = value.replace(tzinfo=timezone.utc)
    return value


# --- Product ------------------------------------------------------------------


def product_to_document(product: Product) -> dict[str, Any]:
    return {
        "productType": product.product_type.value,
        "category": product.category,
        "name": product.name,
        "price": product.price.amount,
        "currency": product.price.currency,
        "stock": product.stock,
        "status": product.status.value,
        "featured": product.featured,
        "description": product.description,
        "variants": [
            {
                "variantName": v.variant_name,
                "variantType": v.variant_type,
                "price": v.price.amount,
                "stock": v.stock,
                "sku": v.sku,
            }
            for v in product.variants
        ],
        "bundleItems": [
            {
                "subProductName": c.sub_product_name,
                "size": c.size,
                "allowedScents": list(c.allowed_scents),
            }
            for c in product.bundle_items
        ],
        "imagePaths": list(product.image_paths),
        "scents": product.scents,
        "size": product.size,
        "burnTime": product.burn_time,
        "wickType": product.wick_type,
        "coverageSpace": product.coverage_space,
        "createdAt": product.created_at,
        "updatedAt": product.updated_at,
    }


def product_from_document(entity_id: str, doc: dict[str, Any]) -> Product:
    currency = doc.get("currency")
    return Product(
        id=entity_id,
        product_type=ProductType(doc["productType"]),
        category=doc["category"],
        name=doc["name"],
        price=_money(doc["price"], currency),
        stock=int(doc.get("stock", 0)),
        status=ProductStatus(doc.get("status", ProductStatus.ACTIVE.value)),
        featured=bool(doc.get("featured", False)),
        description=doc.get("description"),
        variants=[
            ProductVariant(
                variant_name=v["variantName"],
                variant_type=v.get("variantType", ""),
                price=_money(v["price"], currency),
                stock=int(v.get("stock", 0)),
                sku=v.get("sku"),
            )
            for v in doc.get("variants") or []
        ],
        bundle_items=[
            BundleComponent(
                sub_product_name=c["subProductName"],
                size=c["size"],
                allowed_scents=tuple(c.get("allowedScents") or ()),
            )
            for c in doc.get("bundleItems") or []
        ],
        image_paths=list(doc.get("imagePaths") or []),
        scents=doc.get("scents"),
        size=doc.get("size"),
        burn_time=doc.get("burnTime"),
        wick_type=doc.get("wickType"),
        coverage_space=doc.get("coverageSpace"),
        created_at=_datetime(doc.get("createdAt")),
        updated_at=_datetime(doc.get("updatedAt")),
    )


# --- Bundle -------------------------------------------------------------------


def bundle_to_document(bundle: Bundle) -> dict[str, Any]:
    return {
        "name": bundle.name,
        "description": bundle.description,
        "price": bundle.price.amount,
        "currency": bundle.price.currency,
        "products": list(bundle.product_ids),
        "image": bundle.image,
        "status": bundle.status.value,
        "featured": bundle.featured,
        "createdAt": bundle.created_at,
        "updatedAt": bundle.updated_at,
    }


def bundle_from_document(entity_id: str, doc: dict[str, Any]) -> Bundle:
    return Bundle(
        id=entity_id,
        name=doc["name"],
        price=_money(doc["price"], doc.get("currency")),
        description=doc.get("description"),
        product_ids=[str(p) for p in doc.get("products") or []],
        image=doc.get("image"),
        status=ProductStatus(doc.get("status", ProductStatus.ACTIVE.value)),
        featured=bool(doc.get("featured", False)),
        created_at=_datetime(doc.get("createdAt")),
        updated_at=_datetime(doc.get("updatedAt")),
    )


# --- Order --------------------------------------------------------------------


def order_to_document(order: Order) -> dict[str, Any]:
    info = order.customer_info
    return {
        "customerInfo": {
            "name": info.name,
            "email": info.email,
            "phone": info.phone,
            "address": info.address,
            "city": info.city,
            "notes": info.notes,
        },
        "items": [
            {
                "productId": item.product_id,
                "name": item.product_name,
                "quantity": item.quantity.value,
                "price": item.unit_price.amount,
                "variantName": item.variant_name,
                "customization": list(item.customization) if item.customization else None,
            }
            for item in order.items
        ],
        "currency": order.total_amount.currency,
        "subtotal": order.subtotal.amount,
        "shippingFee": order.shipping_fee.amount,
        "discountCode": order.discount_code,
        "discountAmount": order.discount_amount.amount,
        "totalAmount": order.total_amount.amount,
        "paymentMethod": order.payment_method,
        "status": order.status.value,
        "createdAt": order.created_at,
        "updatedAt": order.updated_at,
    }


def order_from_document(entity_id: str, doc: dict[str, Any]) -> Order:
    currency = doc.get("currency")
    info = doc["customerInfo"]
    return Order(
        id=entity_id,
        customer_info=CustomerInfo(
            name=info["name"],
            email=info["email"],
            phone=info["phone"],
            address=info["address"],
            city=info["city"],
            notes=info.get("notes"),
        ),
        items=[
            OrderLineItem(
                product_id=str(i["productId"]),
                product_name=i["name"],
                quantity=Quantity(int(i["quantity"])),
                unit_price=_money(i["price"], currency),
                variant_name=i.get("variantName"),
                customization=tuple(i["customization"]) if i.get("customization") else None,
            )
            for i in doc["items"]
        ],
        subtotal=_money(doc["subtotal"], currency),
        shipping_fee=_money(doc["shippingFee"], currency),
        discount_amount=_money(doc.get("discountAmount", 0), currency),
        discount_code=doc.get("discountCode"),
        total_amount=_money(doc["totalAmount"], currency),
        payment_method=doc["paymentMethod"],
        status=OrderStatus(doc["status"]),
        created_at=_datetime(doc.get("createdAt")),
        updated_at=_datetime(doc.get("updatedAt")),
    )


# --- Discount -----------------------------------------------------------------


def discount_to_document(discount: Discount) -> dict[str, Any]:
    return {
        "code": discount.code,
        "type": discount.type.value,
        "value": discount.value,
        "appliesTo": discount.applies_to.value,
        "categories": list(discount.categories),
        "products": list(discount.products),
        "status": discount.status.value,
        "createdAt": discount.created_at,
        "updatedAt": discount.updated_at,
    }


def discount_from_document(entity_id: str, doc: dict[str, Any]) -> Discount:
    return Discount(
        id=entity_id,
        code=doc["code"],
        type=DiscountType(doc["type"]),
        value=_decimal(doc["value"]),
        applies_to=DiscountScope(doc.get("appliesTo", DiscountScope.ENTIRE.value)),
        categories=list(doc.get("categories") or []),
        products=[str(p) for p in doc.get("products") or []],
        status=DiscountStatus(doc.get("status", DiscountStatus.ACTIVE.value)),
        created_at=_datetime(doc.get("createdAt")),
        updated_at=_datetime(doc.get("updatedAt")),
    )


# --- Reference data -----------------------------------------------------------


def shipping_rate_to_document(rate: ShippingRate) -> dict[str, Any]:
    return {
        "city": rate.city,
        "shippingFee": rate.shipping_fee.amount,
        "currency": rate.shipping_fee.currency,
    }


def shipping_rate_from_document(entity_id: str, doc: dict[str, Any]) -> ShippingRate:
    return ShippingRate(
        id=entity_id,
        city=doc["city"],
        shipping_fee=_money(doc["shippingFee"], doc.get("currency")),
    )


def category_to_document(category: Category) -> dict[str, Any]:
    return {"name": category.name, "sortOrder": category.sort_order}


def category_from_document(entity_id: str, doc: dict[str, Any]) -> Category:
    return Category(id=entity_id, name=doc["name"], sort_order=int(doc.get("sortOrder", 0)))


def care_instruction_to_document(care: CareInstruction) -> dict[str, Any]:
    return {
        "category": care.category,
        "careTitle": care.care_title,
        "careContent": care.care_content,
    }


def care_instruction_from_document(entity_id: str, doc: dict[str, Any]) -> CareInstruction:
    return CareInstruction(
        id=entity_id,
        category=doc["category"],
        care_title=doc["careTitle"],
        care_content=doc["careContent"],
    )


PRODUCTS = DocumentMapper("products", product_to_document, product_from_document)
BUNDLES = DocumentMapper("bundles", bundle_to_document, bundle_from_document)
ORDERS = DocumentMapper("orders", order_to_document, order_from_document)
DISCOUNTS = DocumentMapper("discounts", discount_to_document, discount_from_document)
SHIPPING_RATES = DocumentMapper(
    "shippingrates", shipping_rate_to_document, shipping_rate_from_document
)
CATEGORIES = DocumentMapper("categories", category_to_document, category_from_document)
CARE_INSTRUCTIONS = DocumentMapper(
    "careinstructions", care_instruction_to_document, care_instruction_from_document
)
