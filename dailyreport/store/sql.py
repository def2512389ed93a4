"""SQLAlchemy-backed document store over the ``documents`` table.

Each write commits on its own, so every insert/patch/delete is one atomic
unit. Ordered scans sort on a numeric JSON body field.
"""

from __future__ import annotations

import copy
import logging
import time
import uuid
from typing import Any

from sqlalchemy.orm import Session

from dailyreport.models.document import Document
from dailyreport.store.base import (
    CREATION_TIME_FIELD,
    ID_FIELD,
    DocumentNotFoundError,
    DocumentStore,
    strip_system_fields,
)

logger = logging.getLogger(__name__)


def _row_to_document(row: Document) -> dict[str, Any]:
    doc = copy.deepcopy(row.body or {})
    doc[ID_FIELD] = row.id
    doc[CREATION_TIME_FIELD] = row.creation_time
    return doc


class SqlDocumentStore(DocumentStore):
    """Document store using a caller-owned SQLAlchemy session."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def _query(self, collection: str):
        return self.db.query(Document).filter(Document.collection == collection)

    def _get_row(self, collection: str, doc_id: str) -> Document | None:
        return self._query(collection).filter(Document.id == doc_id).first()

    def collect(self, collection: str) -> list[dict[str, Any]]:
        return [_row_to_document(row) for row in self._query(collection).all()]

    def first(self, collection: str) -> dict[str, Any] | None:
        row = self._query(collection).first()
        return _row_to_document(row) if row is not None else None

    def count(self, collection: str) -> int:
        return self._query(collection).count()

    def query_ordered(
        self,
        collection: str,
        field: str,
        *,
        descending: bool = True,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        value = Document.body[field].as_float()
        if descending:
            order = (value.is_(None), value.desc(), Document.creation_time.desc())
        else:
            order = (value.is_(None), value.asc(), Document.creation_time.asc())
        query = self._query(collection).order_by(*order)
        if limit is not None:
            query = query.limit(limit)
        return [_row_to_document(row) for row in query.all()]

    def get(self, collection: str, doc_id: str) -> dict[str, Any] | None:
        row = self._get_row(collection, doc_id)
        return _row_to_document(row) if row is not None else None

    def insert(self, collection: str, fields: dict[str, Any]) -> str:
        row = Document(
            id=str(uuid.uuid4()),
            collection=collection,
            body=copy.deepcopy(strip_system_fields(fields)),
            creation_time=self.now(),
        )
        self.db.add(row)
        self.db.commit()
        logger.debug("Inserted %s/%s", collection, row.id)
        return row.id

    def patch(self, collection: str, doc_id: str, fields: dict[str, Any]) -> None:
        row = self._get_row(collection, doc_id)
        if row is None:
            raise DocumentNotFoundError(collection, doc_id)
        # Reassign so the JSON column is flagged dirty.
        row.body = {**(row.body or {}), **copy.deepcopy(strip_system_fields(fields))}
        self.db.commit()

    def delete(self, collection: str, doc_id: str) -> None:
        row = self._get_row(collection, doc_id)
        if row is None:
            raise DocumentNotFoundError(collection, doc_id)
        self.db.delete(row)
        self.db.commit()

    def now(self) -> int:
        return int(time.time() * 1000)
