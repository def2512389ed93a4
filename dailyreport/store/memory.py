"""In-memory document store for tests, dry runs and local tooling."""

from __future__ import annotations

import copy
import time
import uuid
from collections.abc import Callable
from typing import Any

from dailyreport.store.base import (
    CREATION_TIME_FIELD,
    ID_FIELD,
    DocumentNotFoundError,
    DocumentStore,
    ordering_key,
    strip_system_fields,
)


def _wall_clock_ms() -> int:
    return int(time.time() * 1000)


class InMemoryDocumentStore(DocumentStore):
    """Dict-backed store. Not thread-safe; one instance per test or run.

    Collections keep insertion order, so first() returns the earliest
    inserted document. Callers must not rely on that.
    """

    def __init__(self, clock: Callable[[], int] | None = None) -> None:
        self._clock = clock or _wall_clock_ms
        self._collections: dict[str, dict[str, dict[str, Any]]] = {}
        self._last_creation_time = 0

    def _table(self, collection: str) -> dict[str, dict[str, Any]]:
        return self._collections.setdefault(collection, {})

    def collect(self, collection: str) -> list[dict[str, Any]]:
        return [copy.deepcopy(doc) for doc in self._table(collection).values()]

    def first(self, collection: str) -> dict[str, Any] | None:
        for doc in self._table(collection).values():
            return copy.deepcopy(doc)
        return None

    def query_ordered(
        self,
        collection: str,
        field: str,
        *,
        descending: bool = True,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        docs = sorted(
            self._table(collection).values(),
            key=lambda doc: ordering_key(doc, field, descending),
        )
        if limit is not None:
            docs = docs[:limit]
        return [copy.deepcopy(doc) for doc in docs]

    def get(self, collection: str, doc_id: str) -> dict[str, Any] | None:
        doc = self._table(collection).get(doc_id)
        return copy.deepcopy(doc) if doc is not None else None

    def insert(self, collection: str, fields: dict[str, Any]) -> str:
        doc_id = str(uuid.uuid4())
        # Creation times are strictly increasing even when the clock is frozen.
        creation_time = max(self._clock(), self._last_creation_time + 1)
        self._last_creation_time = creation_time
        doc = copy.deepcopy(strip_system_fields(fields))
        doc[ID_FIELD] = doc_id
        doc[CREATION_TIME_FIELD] = creation_time
        self._table(collection)[doc_id] = doc
        return doc_id

    def patch(self, collection: str, doc_id: str, fields: dict[str, Any]) -> None:
        doc = self._table(collection).get(doc_id)
        if doc is None:
            raise DocumentNotFoundError(collection, doc_id)
        doc.update(copy.deepcopy(strip_system_fields(fields)))

    def delete(self, collection: str, doc_id: str) -> None:
        if self._table(collection).pop(doc_id, None) is None:
            raise DocumentNotFoundError(collection, doc_id)

    def now(self) -> int:
        return self._clock()
