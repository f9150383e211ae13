"""Per-invocation state shared by the CLI commands."""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.infrastructure.bootstrap import UnitOfWorkFactory, unit_of_work_factory
from storefront.infrastructure.config import Settings


@dataclass
class CliState:
    settings: Settings
    uow_factory: UnitOfWorkFactory | None = None

    def uow(self) -> UnitOfWork:
        # Built on first use so `--help` and `serve` never open a store here.
        if self.uow_factory is None:
            self.uow_factory = unit_of_work_factory(self.settings)
        return self.uow_factory()
