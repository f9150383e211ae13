"""Application service: List Orders use case (query)."""

from __future__ import annotations

from storefront.application.dto import OrderDTO
from storefront.domain.repository.unit_of_work import UnitOfWork


class ListOrdersHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self) -> list[OrderDTO]:
        """Return every order, newest first."""
        with self._uow as uow:
            orders = uow.orders.list_recent()
        return [OrderDTO.from_domain(order) for order in orders]
