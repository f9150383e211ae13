"""Shipping rates, categories and care instructions."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from storefront.application.manage_care_instructions import CareInstructionService
from storefront.application.manage_categories import CategoryService
from storefront.application.manage_shipping_rates import ShippingRateService
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.infrastructure.http.dependencies import get_uow
from storefront.infrastructure.http.schemas import (
    CareInstructionIn,
    CareInstructionOut,
    CareInstructionUpdate,
    CategoryIn,
    CategoryOut,
    CategoryUpdate,
    MessageOut,
    ShippingRateIn,
    ShippingRateOut,
    ShippingRateUpdate,
)

router = APIRouter(tags=["reference data"])


# --- Shipping rates -----------------------------------------------------------


@router.get("/api/shipping-rates", response_model=list[ShippingRateOut])
def list_shipping_rates(uow: UnitOfWork = Depends(get_uow)):
    return [ShippingRateOut.from_domain(r) for r in ShippingRateService(uow).list_all()]


@router.get("/api/shipping-rates/city/{city}", response_model=ShippingRateOut)
def get_shipping_rate(city: str, uow: UnitOfWork = Depends(get_uow)):
    return ShippingRateOut.from_domain(ShippingRateService(uow).get_by_city(city))


@router.post("/api/shipping-rates", status_code=201, response_model=ShippingRateOut)
def create_shipping_rate(body: ShippingRateIn, uow: UnitOfWork = Depends(get_uow)):
    return ShippingRateOut.from_domain(ShippingRateService(uow).create(body.to_domain()))


@router.put("/api/shipping-rates/{rate_id}", response_model=ShippingRateOut)
def update_shipping_rate(
    rate_id: str, body: ShippingRateUpdate, uow: UnitOfWork = Depends(get_uow)
):
    return ShippingRateOut.from_domain(
        ShippingRateService(uow).update(rate_id, body.to_changes())
    )


@router.delete("/api/shipping-rates/{rate_id}", response_model=MessageOut)
def delete_shipping_rate(rate_id: str, uow: UnitOfWork = Depends(get_uow)):
    ShippingRateService(uow).delete(rate_id)
    return MessageOut(message="Shipping rate deleted successfully")


# --- Categories ---------------------------------------------------------------


@router.get("/api/categories", response_model=list[CategoryOut])
def list_categories(uow: UnitOfWork = Depends(get_uow)):
    return [CategoryOut.from_domain(c) for c in CategoryService(uow).list_all()]


@router.post("/api/categories", status_code=201, response_model=CategoryOut)
def create_category(body: CategoryIn, uow: UnitOfWork = Depends(get_uow)):
    return CategoryOut.from_domain(CategoryService(uow).create(body.to_domain()))


@router.put("/api/categories/{category_id}", response_model=CategoryOut)
def update_category(category_id: str, body: CategoryUpdate, uow: UnitOfWork = Depends(get_uow)):
    return CategoryOut.from_domain(CategoryService(uow).update(category_id, body.to_changes()))


@router.delete("/api/categories/{category_id}", response_model=MessageOut)
def delete_category(category_id: str, uow: UnitOfWork = Depends(get_uow)):
    CategoryService(uow).delete(category_id)
    return MessageOut(message="Category deleted successfully")


# --- Care instructions --------------------------------------------------------


@router.get("/api/care", response_model=list[CareInstructionOut])
def list_care_instructions(uow: UnitOfWork = Depends(get_uow)):
    return [CareInstructionOut.from_domain(c) for c in CareInstructionService(uow).list_all()]


@router.get("/api/care/category/{category}", response_model=CareInstructionOut)
def get_care_instruction(category: str, uow: UnitOfWork = Depends(get_uow)):
    return CareInstructionOut.from_domain(CareInstructionService(uow).get_by_category(category))


@router.post("/api/care", status_code=201, response_model=CareInstructionOut)
def create_care_instruction(body: CareInstructionIn, uow: UnitOfWork = Depends(get_uow)):
    return CareInstructionOut.from_domain(CareInstructionService(uow).create(body.to_domain()))


@router.put("/api/care/{care_id}", response_model=CareInstructionOut)
def update_care_instruction(
    care_id: str, body: CareInstructionUpdate, uow: UnitOfWork = Depends(get_uow)
):
    return CareInstructionOut.from_domain(
        CareInstructionService(uow).update(care_id, body.to_changes())
    )


@router.delete("/api/care/{care_id}", response_model=MessageOut)
def delete_care_instruction(care_id: str, uow: UnitOfWork = Depends(get_uow)):
    CareInstructionService(uow).delete(care_id)
    return MessageOut(message="Care instructions deleted successfully")
