"""Products and bundles."""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, Query

from storefront.application.manage_bundles import BundleService
from storefront.application.manage_products import ProductService
from storefront.domain.model.product import ProductStatus
from storefront.domain.repository.product_repository import CatalogQuery, SortOrder
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.infrastructure.http.dependencies import get_uow
from storefront.infrastructure.http.schemas import (
    BundleIn,
    BundleOut,
    BundlePageOut,
    BundleUpdate,
    MessageOut,
    ProductIn,
    ProductOut,
    ProductPageOut,
    ProductUpdate,
)

router = APIRouter(tags=["catalog"])


# --- Products -----------------------------------------------------------------


@router.get("/api/products", response_model=ProductPageOut)
def search_products(
    search: str = "",
    category: Optional[str] = None,
    min_price: Optional[Decimal] = Query(None, alias="minPrice", ge=0),
    max_price: Optional[Decimal] = Query(None, alias="maxPrice", ge=0),
    sort: Optional[SortOrder] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    include_inactive: bool = Query(False, alias="includeInactive"),
    uow: UnitOfWork = Depends(get_uow),
):
    query = CatalogQuery(
        search=search,
        category=category or None,
        min_price=min_price,
        max_price=max_price,
        status=None if include_inactive else ProductStatus.ACTIVE,
        sort=sort,
        page=page,
        limit=limit,
    )
    return ProductPageOut.from_domain(ProductService(uow).search(query))


@router.post("/api/products", status_code=201, response_model=ProductOut)
def create_product(body: ProductIn, uow: UnitOfWork = Depends(get_uow)):
    return ProductOut.from_domain(ProductService(uow).create(body.to_domain()))


@router.get("/api/products/{product_id}", response_model=ProductOut)
def get_product(product_id: str, uow: UnitOfWork = Depends(get_uow)):
    return ProductOut.from_domain(ProductService(uow).get(product_id))


@router.put("/api/products/{product_id}", response_model=ProductOut)
def update_product(product_id: str, body: ProductUpdate, uow: UnitOfWork = Depends(get_uow)):
    return ProductOut.from_domain(ProductService(uow).update(product_id, body.to_changes()))


@router.delete("/api/products/{product_id}", response_model=MessageOut)
def delete_product(product_id: str, uow: UnitOfWork = Depends(get_uow)):
    ProductService(uow).delete(product_id)
    return MessageOut(message="Product deleted successfully")


# --- Bundles ------------------------------------------------------------------


@router.get("/api/bundles", response_model=BundlePageOut)
def search_bundles(
    search: str = "",
    sort: Optional[SortOrder] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    uow: UnitOfWork = Depends(get_uow),
):
    query = CatalogQuery(search=search, status=None, sort=sort, page=page, limit=limit)
    return BundlePageOut.from_domain(BundleService(uow).search(query))


@router.post("/api/bundles", status_code=201, response_model=BundleOut)
def create_bundle(body: BundleIn, uow: UnitOfWork = Depends(get_uow)):
    service = BundleService(uow)
    bundle = service.create(body.to_domain())
    return BundleOut.from_domain(service.view(bundle.id))


@router.get("/api/bundles/{bundle_id}", response_model=BundleOut)
def get_bundle(bundle_id: str, uow: UnitOfWork = Depends(get_uow)):
    return BundleOut.from_domain(BundleService(uow).view(bundle_id))


@router.put("/api/bundles/{bundle_id}", response_model=BundleOut)
def update_bundle(bundle_id: str, body: BundleUpdate, uow: UnitOfWork = Depends(get_uow)):
    service = BundleService(uow)
    service.update(bundle_id, body.to_changes())
    return BundleOut.from_domain(service.view(bundle_id))


@router.delete("/api/bundles/{bundle_id}", response_model=MessageOut)
def delete_bundle(bundle_id: str, uow: UnitOfWork = Depends(get_uow)):
    BundleService(uow).delete(bundle_id)
    return MessageOut(message="Bundle deleted")
