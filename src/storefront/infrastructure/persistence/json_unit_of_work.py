"""JSON-file-backed unit of work for local development and tests.

One file per collection under ``data_dir``.  Entering the scope takes a
per-directory lock, so scopes on the same directory run one at a time
within a process, and stages every collection in memory.  Commit
rewrites only the collections that changed in two phases: every changed
collection is first written to a temporary file, and only once all of
them are on disk are they renamed into place, orders last.
"""

from __future__ import annotations

import json
import logging
import os
import threading
from pathlib import Path
from typing import Any

from storefront.domain.exceptions import PersistenceError
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.infrastructure.persistence import documents
from storefront.infrastructure.persistence.json_repositories import (
    JsonBundleRepository,
    JsonCareInstructionRepository,
    JsonCategoryRepository,
    JsonDiscountRepository,
    JsonOrderRepository,
    JsonProductRepository,
    JsonShippingRateRepository,
)

logger = logging.getLogger(__name__)

# Also the commit order: an order file never lands before the stock it deducts.
_MAPPERS = (
    documents.PRODUCTS,
    documents.BUNDLES,
    documents.DISCOUNTS,
    documents.SHIPPING_RATES,
    documents.CATEGORIES,
    documents.CARE_INSTRUCTIONS,
    documents.ORDERS,
)

_registry_lock = threading.Lock()
_directory_locks: dict[Path, threading.RLock] = {}


def _lock_for(data_dir: Path) -> threading.RLock:
    with _registry_lock:
        return _directory_locks.setdefault(data_dir, threading.RLock())


class JsonUnitOfWork(UnitOfWork):

    def __init__(self, data_dir: Path) -> None:
        self._data_dir = Path(data_dir).resolve()
        self._data_dir.mkdir(parents=True, exist_ok=True)
        self._lock = _lock_for(self._data_dir)
        self._staged: dict[str, dict[str, dict[str, Any]]] = {}
        self._dirty: set[str] = set()

    # --- UnitOfWork hooks -----------------------------------------------------

    def _begin(self) -> None:
        self._lock.acquire()
        try:
            self._staged = {m.collection: self._load_raw(m.collection) for m in _MAPPERS}
        except BaseException:
            self._lock.release()
            raise
        self._dirty = set()

        staged, dirty = self._staged, self._dirty
        self.products = JsonProductRepository(staged["products"], documents.PRODUCTS, dirty)
        self.bundles = JsonBundleRepository(staged["bundles"], documents.BUNDLES, dirty)
        self.orders = JsonOrderRepository(staged["orders"], documents.ORDERS, dirty)
        self.discounts = JsonDiscountRepository(staged["discounts"], documents.DISCOUNTS, dirty)
        self.shipping_rates = JsonShippingRateRepository(
            staged["shippingrates"], documents.SHIPPING_RATES, dirty
        )
        self.categories = JsonCategoryRepository(
            staged["categories"], documents.CATEGORIES, dirty
        )
        self.care_instructions = JsonCareInstructionRepository(
            staged["careinstructions"], documents.CARE_INSTRUCTIONS, dirty
        )

    def _commit(self) -> None:
        written: list[tuple[Path, str]] = []
        try:
            for mapper in _MAPPERS:
                if mapper.collection in self._dirty:
                    records = self._staged[mapper.collection]
                    written.append((self._write_tmp(mapper.collection, records), mapper.collection))
            for tmp_path, collection in written:
                self._replace(tmp_path, collection)
        finally:
            # Only temp files that were never renamed still exist.
            for tmp_path, _ in written:
                tmp_path.unlink(missing_ok=True)
        self._dirty.clear()

    def _rollback(self) -> None:
        if self._dirty:
            logger.debug(f"Discarding staged changes to {sorted(self._dirty)}")
        self._dirty.clear()

    def _end(self) -> None:
        self._staged = {}
        self._lock.release()

    # --- File helpers ---------------------------------------------------------

    def _path(self, collection: str) -> Path:
        return self._data_dir / f"{collection}.json"

    def _load_raw(self, collection: str) -> dict[str, dict[str, Any]]:
        path = self._path(collection)
        if not path.exists():
            return {}
        try:
            records = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise PersistenceError(f"Cannot read {path.name}: {exc}") from exc
        return {raw.pop("id"): raw for raw in records}

    def _write_tmp(self, collection: str, records: dict[str, dict[str, Any]]) -> Path:
        tmp_path = self._path(collection).with_suffix(".json.tmp")
        payload = [{"id": entity_id, **raw} for entity_id, raw in records.items()]
        try:
            tmp_path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
        except OSError as exc:
            tmp_path.unlink(missing_ok=True)
            raise PersistenceError(f"Cannot write {tmp_path.name}: {exc}") from exc
        return tmp_path

    def _replace(self, tmp_path: Path, collection: str) -> None:
        path = self._path(collection)
        try:
            os.replace(tmp_path, path)
        except OSError as exc:
            raise PersistenceError(f"Cannot write {path.name}: {exc}") from exc
