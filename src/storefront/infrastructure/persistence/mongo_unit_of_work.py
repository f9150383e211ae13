"""MongoDB unit of work backed by a multi-document transaction.

Requires the server to run as a replica set.  Write conflicts between
concurrent scopes surface from ``commit()`` as ``PersistenceError``.
"""

from __future__ import annotations

import logging

from pymongo import MongoClient
from pymongo.client_session import ClientSession
from pymongo.errors import PyMongoError

from storefront.domain.exceptions import PersistenceError
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.infrastructure.persistence import documents
from storefront.infrastructure.persistence.mongo_repositories import (
    MongoBundleRepository,
    MongoCareInstructionRepository,
    MongoCategoryRepository,
    MongoDiscountRepository,
    MongoOrderRepository,
    MongoProductRepository,
    MongoShippingRateRepository,
)

logger = logging.getLogger(__name__)


class MongoUnitOfWork(UnitOfWork):

    def __init__(self, client: MongoClient, database_name: str) -> None:
        self._client = client
        self._db = client[database_name]
        self._session: ClientSession | None = None

    # --- UnitOfWork hooks -----------------------------------------------------

    def _begin(self) -> None:
        try:
            session = self._client.start_session()
        except PyMongoError as exc:
            raise PersistenceError(f"Cannot open session: {exc}") from exc
        try:
            session.start_transaction()
        except PyMongoError as exc:
            session.end_session()
            raise PersistenceError(f"Cannot open transaction: {exc}") from exc
        self._session = session

        db = self._db
        self.products = MongoProductRepository(db, session, documents.PRODUCTS)
        self.bundles = MongoBundleRepository(db, session, documents.BUNDLES)
        self.orders = MongoOrderRepository(db, session, documents.ORDERS)
        self.discounts = MongoDiscountRepository(db, session, documents.DISCOUNTS)
        self.shipping_rates = MongoShippingRateRepository(db, session, documents.SHIPPING_RATES)
        self.categories = MongoCategoryRepository(db, session, documents.CATEGORIES)
        self.care_instructions = MongoCareInstructionRepository(
            db, session, documents.CARE_INSTRUCTIONS
        )

    def _commit(self) -> None:
        try:
            self._session.commit_transaction()
        except PyMongoError as exc:
            raise PersistenceError(f"Transaction commit failed: {exc}") from exc

    def _rollback(self) -> None:
        if self._session is not None and self._session.in_transaction:
            logger.debug("Aborting MongoDB transaction")
            self._session.abort_transaction()

    def _end(self) -> None:
        if self._session is not None:
            self._session.end_session()
            self._session = None
