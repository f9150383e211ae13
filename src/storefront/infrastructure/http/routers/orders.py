from __future__ import annotations

from fastapi import APIRouter, Depends

from storefront.application.list_orders import ListOrdersHandler
from storefront.application.place_order import PlaceOrderHandler
from storefront.application.show_order import ShowOrderHandler
from storefront.application.update_order_status import UpdateOrderStatusHandler
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.infrastructure.http.dependencies import get_uow
from storefront.infrastructure.http.schemas import (
    OrderCreatedOut,
    OrderOut,
    PlaceOrderRequest,
    StatusUpdateRequest,
)

router = APIRouter(prefix="/api/orders", tags=["orders"])


@router.post("", status_code=201, response_model=OrderCreatedOut)
def place_order(body: PlaceOrderRequest, uow: UnitOfWork = Depends(get_uow)):
    order = PlaceOrderHandler(uow).handle(body.to_command())
    return OrderCreatedOut(message="Order created successfully", order_id=order.id)


@router.get("", response_model=list[OrderOut])
def list_orders(uow: UnitOfWork = Depends(get_uow)):
    return [OrderOut.from_domain(o) for o in ListOrdersHandler(uow).handle()]


@router.get("/{order_id}", response_model=OrderOut)
def show_order(order_id: str, uow: UnitOfWork = Depends(get_uow)):
    return OrderOut.from_domain(ShowOrderHandler(uow).handle(order_id))


@router.put("/{order_id}/status", response_model=OrderOut)
def update_status(order_id: str, body: StatusUpdateRequest, uow: UnitOfWork = Depends(get_uow)):
    return OrderOut.from_domain(UpdateOrderStatusHandler(uow).handle(order_id, body.status))
