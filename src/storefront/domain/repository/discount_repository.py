"""Abstract repository for Discount aggregate."""

from __future__ import annotations

from abc import abstractmethod

from storefront.domain.model.discount import Discount
from storefront.domain.repository.base import Repository


class DiscountRepository(Repository[Discount]):

    @abstractmethod
    def get_by_code(self, code: str, active_only: bool = False) -> Discount | None:
        """Return the discount with this normalized code, or None."""
