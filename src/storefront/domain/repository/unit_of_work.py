"""Abstract unit of work: one atomic transaction scope over every store.

Usage::

    with uow:
        product = uow.products.get_by_id(pid)
        ...
        uow.commit()

Leaving the ``with`` block without calling ``commit()`` (including by an
exception) rolls back every staged write.  A unit of work may be entered
again after it exits; each entry opens a fresh scope.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from types import TracebackType

from storefront.domain.repository.catalog_repository import (
    CareInstructionRepository,
    CategoryRepository,
    ShippingRateRepository,
)
from storefront.domain.repository.discount_repository import DiscountRepository
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import (
    BundleRepository,
    ProductRepository,
)


class UnitOfWork(ABC):

    products: ProductRepository
    bundles: BundleRepository
    orders: OrderRepository
    discounts: DiscountRepository
    shipping_rates: ShippingRateRepository
    categories: CategoryRepository
    care_instructions: CareInstructionRepository

    _committed: bool = False

    def __enter__(self) -> UnitOfWork:
        self._committed = False
        self._begin()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        try:
            if not self._committed:
                self._rollback()
        finally:
            self._end()

    def commit(self) -> None:
        self._commit()
        self._committed = True

    # --- Backend hooks --------------------------------------------------------

    @abstractmethod
    def _begin(self) -> None:
        """Open the transaction scope and bind repositories to it."""

    @abstractmethod
    def _commit(self) -> None:
        """Make every staged write durable."""

    @abstractmethod
    def _rollback(self) -> None:
        """Discard every staged write."""

    @abstractmethod
    def _end(self) -> None:
        """Release resources held by the scope."""
