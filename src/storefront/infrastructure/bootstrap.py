"""Wires the configured storage backend into a unit-of-work factory."""

from __future__ import annotations

import logging
from typing import Callable

from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.infrastructure.config import Settings

logger = logging.getLogger(__name__)

UnitOfWorkFactory = Callable[[], UnitOfWork]


def unit_of_work_factory(settings: Settings) -> UnitOfWorkFactory:
    if settings.backend == "mongo":
        from pymongo import MongoClient

        from storefront.infrastructure.persistence.mongo_unit_of_work import MongoUnitOfWork

        client: MongoClient = MongoClient(settings.mongo_uri, tz_aware=True)
        logger.info(f"Using MongoDB backend, database '{settings.database_name}'")
        return lambda: MongoUnitOfWork(client, settings.database_name)

    from storefront.infrastructure.persistence.json_unit_of_work import JsonUnitOfWork

    logger.info(f"Using JSON backend in {settings.data_dir}")
    return lambda: JsonUnitOfWork(settings.data_dir)
