"""Application service: Update Order Status use case.

Any of the five statuses may follow any other; only membership in the
allowed set is checked.  Re-applying the current status is a no-op
apart from the ``updated_at`` refresh.
"""

from __future__ import annotations

import logging

from storefront.application.dto import OrderDTO
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.order import OrderStatus
from storefront.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class UpdateOrderStatusHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, order_id: str, new_status: str | None) -> OrderDTO:
        status = OrderStatus.parse(new_status)

        with self._uow as uow:
            order = uow.orders.get_by_id(order_id)
            if order is None:
                raise EntityNotFoundError("Order not found")

            previous = order.status
            order.set_status(status)
            uow.orders.save(order)
            uow.commit()

        logger.info(f"Order {order_id} status {previous.value} -> {status.value}")
        return OrderDTO.from_domain(order)
