from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from storefront.application.manage_discounts import DiscountService
from storefront.application.validate_discount import ValidateDiscountHandler
from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.infrastructure.http.dependencies import get_uow
from storefront.infrastructure.http.errors import status_for
from storefront.infrastructure.http.schemas import (
    AppliedDiscountOut,
    DiscountIn,
    DiscountOut,
    DiscountUpdate,
    DiscountValidateRequest,
    DiscountValidationOut,
    MessageOut,
)

router = APIRouter(prefix="/api/discounts", tags=["discounts"])


@router.post("/validate", response_model=DiscountValidationOut)
def validate_discount(body: DiscountValidateRequest, uow: UnitOfWork = Depends(get_uow)):
    try:
        discount = ValidateDiscountHandler(uow).handle(body.code)
    except (ValidationError, EntityNotFoundError) as exc:
        return JSONResponse(
            status_code=status_for(exc), content={"valid": False, "message": str(exc)}
        )
    return DiscountValidationOut(
        valid=True,
        discount=AppliedDiscountOut(
            code=discount.code, type=discount.type.value, value=discount.value
        ),
    )


@router.get("", response_model=list[DiscountOut])
def list_discounts(uow: UnitOfWork = Depends(get_uow)):
    return [DiscountOut.from_domain(d) for d in DiscountService(uow).list_all()]


@router.get("/code/{code}", response_model=DiscountOut)
def get_discount_by_code(code: str, uow: UnitOfWork = Depends(get_uow)):
    return DiscountOut.from_domain(DiscountService(uow).get_active_by_code(code))


@router.post("", status_code=201, response_model=DiscountOut)
def create_discount(body: DiscountIn, uow: UnitOfWork = Depends(get_uow)):
    return DiscountOut.from_domain(DiscountService(uow).create(body.to_domain()))


@router.put("/{discount_id}", response_model=DiscountOut)
def update_discount(discount_id: str, body: DiscountUpdate, uow: UnitOfWork = Depends(get_uow)):
    return DiscountOut.from_domain(DiscountService(uow).update(discount_id, body.to_changes()))


@router.delete("/{discount_id}", response_model=MessageOut)
def delete_discount(discount_id: str, uow: UnitOfWork = Depends(get_uow)):
    DiscountService(uow).delete(discount_id)
    return MessageOut(message="Discount deleted successfully")
