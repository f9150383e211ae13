"""FastAPI application factory."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from storefront.infrastructure.bootstrap import UnitOfWorkFactory, unit_of_work_factory
from storefront.infrastructure.config import Settings
from storefront.infrastructure.http.errors import register_error_handlers
from storefront.infrastructure.http.routers import catalog, discounts, orders, reference


def create_app(settings: Settings, uow_factory: UnitOfWorkFactory | None = None) -> FastAPI:
    """Build the API.  ``uow_factory`` overrides the backend chosen by ``settings``."""
    app = FastAPI(title="Storefront API", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.settings = settings
    app.state.uow_factory = uow_factory or unit_of_work_factory(settings)

    register_error_handlers(app)
    app.include_router(orders.router)
    app.include_router(catalog.router)
    app.include_router(discounts.router)
    app.include_router(reference.router)

    @app.get("/")
    def root():
        return {"message": "Storefront API is running"}

    return app
