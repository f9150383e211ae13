"""Abstract repositories for the small reference entities."""

from __future__ import annotations

from abc import abstractmethod

from storefront.domain.model.catalog import CareInstruction, Category, ShippingRate
from storefront.domain.repository.base import Repository


class ShippingRateRepository(Repository[ShippingRate]):

    @abstractmethod
    def get_by_city(self, city: str) -> ShippingRate | None:
        """Return the rate for an exact city name, or None."""


class CategoryRepository(Repository[Category]):

    @abstractmethod
    def get_by_name(self, name: str) -> Category | None:
        """Return the category with this exact name, or None."""


class CareInstructionRepository(Repository[CareInstruction]):

    @abstractmethod
    def get_by_category(self, category: str) -> CareInstruction | None:
        """Return the care instruction for a category, or None."""
