"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import abstractmethod

from storefront.domain.model.order import Order
from storefront.domain.repository.base import Repository


class OrderRepository(Repository[Order]):

    @abstractmethod
    def list_recent(self) -> list[Order]:
        """Return every order, newest first."""
