"""Application service: Validate Discount use case (query).

Used by the checkout page before an order is placed.  Placing the order
looks the code up again inside its own transaction.
"""

from __future__ import annotations

from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.discount import Discount
from storefront.domain.repository.unit_of_work import UnitOfWork


class ValidateDiscountHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, code: str | None) -> Discount:
        normalized = Discount.normalize_code(code)
        if not normalized:
            raise ValidationError("No code provided")

        with self._uow as uow:
            discount = uow.discounts.get_by_code(normalized, active_only=True)
        if discount is None:
            raise EntityNotFoundError("Invalid or expired code")
        return discount
