"""FastAPI dependencies shared by the routers."""

from __future__ import annotations

from fastapi import Request

from storefront.domain.repository.unit_of_work import UnitOfWork


def get_uow(request: Request) -> UnitOfWork:
    """A fresh unit of work per request, from the factory ``create_app`` installed."""
    return request.app.state.uow_factory()
