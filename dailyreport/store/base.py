"""
Document store abstraction.

The migration core only needs a narrow slice of a document database:
collection scans, ordered scans, get-by-id, insert, partial patch, delete
and a clock. Query planning, indexing and transactions belong to the
underlying store.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

# Collection names
ORGS = "orgs"
USER_PROFILES = "userProfiles"
REPORTS = "reports"
COMMENTS = "comments"
APPROVALS = "approvals"
SCHEMA_VERSIONS = "schema_versions"
AUDIT_LOGS = "audit_logs"

# System fields carried by every stored document
ID_FIELD = "_id"
CREATION_TIME_FIELD = "_creationTime"
SYSTEM_FIELDS = (ID_FIELD, CREATION_TIME_FIELD)


class DocumentNotFoundError(LookupError):
    """Raised when a write targets a document id that does not exist."""

    def __init__(self, collection: str, doc_id: str) -> None:
        super().__init__(f"{collection}/{doc_id} not found")
        self.collection = collection
        self.doc_id = doc_id


class DocumentStore(ABC):
    """Abstract base for document stores.

    Documents are plain dicts. Reads return copies that include the system
    fields; writes never accept them. Each call is one atomic unit.
    """

    @abstractmethod
    def collect(self, collection: str) -> list[dict[str, Any]]:
        """Return every document of the collection, in no guaranteed order."""
        ...

    @abstractmethod
    def first(self, collection: str) -> dict[str, Any] | None:
        """Return one arbitrary document of the collection, or None if empty."""
        ...

    @abstractmethod
    def query_ordered(
        self,
        collection: str,
        field: str,
        *,
        descending: bool = True,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        """Return documents sorted by a body field. Documents lacking it sort last."""
        ...

    @abstractmethod
    def get(self, collection: str, doc_id: str) -> dict[str, Any] | None:
        """Return the document with this id, or None."""
        ...

    @abstractmethod
    def insert(self, collection: str, fields: dict[str, Any]) -> str:
        """Insert a new document and return its id."""
        ...

    @abstractmethod
    def patch(self, collection: str, doc_id: str, fields: dict[str, Any]) -> None:
        """Merge top-level fields into an existing document.

        Keys set to None are stored as None, not removed. Raises
        DocumentNotFoundError when the id does not exist.
        """
        ...

    @abstractmethod
    def delete(self, collection: str, doc_id: str) -> None:
        """Delete a document. Raises DocumentNotFoundError when missing."""
        ...

    @abstractmethod
    def now(self) -> int:
        """Current time as Unix milliseconds."""
        ...

    def count(self, collection: str) -> int:
        """Number of documents in the collection (full scan)."""
        return len(self.collect(collection))

    def first_ordered(self, collection: str, field: str, *, descending: bool = True) -> dict[str, Any] | None:
        """Return the first document of an ordered scan, or None."""
        rows = self.query_ordered(collection, field, descending=descending, limit=1)
        return rows[0] if rows else None


def strip_system_fields(fields: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of fields without _id / _creationTime."""
    return {k: v for k, v in fields.items() if k not in SYSTEM_FIELDS}


def ordering_key(doc: dict[str, Any], field: str, descending: bool) -> tuple:
    """Sort key placing documents without the field last, ties by creation time."""
    value = doc.get(field)
    missing = value is None
    created = doc.get(CREATION_TIME_FIELD, 0)
    if descending:
        return (missing, _negate(value), -created)
    return (missing, value if not missing else 0, created)


def _negate(value: Any) -> Any:
    if value is None:
        return 0
    if isinstance(value, (int, float)):
        return -value
    raise TypeError(f"Cannot order descending by non-numeric value {value!r}")
