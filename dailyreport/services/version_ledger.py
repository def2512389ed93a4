"""Schema version ledger.

Append-only log of applied schema versions in ``schema_versions``. The
current version is the highest recorded ``version`` (0 for a fresh install),
read through an ordered scan, never from insertion order.
"""

from __future__ import annotations

import logging

from dailyreport.schemas.schema_version import (
    SchemaVersionRecord,
    VersionHistory,
    VersionStatus,
)
from dailyreport.store.base import SCHEMA_VERSIONS, DocumentStore

logger = logging.getLogger(__name__)

# Schema versions known to this code. Add a constant when a new version ships
# and point CURRENT_SCHEMA_VERSION at it.
V1_INITIAL = 1
V2_ENHANCED_REPORTS = 2
V3_PERFORMANCE_INDEXES = 3

KNOWN_VERSIONS: dict[int, str] = {
    V1_INITIAL: "Initial schema",
    V2_ENHANCED_REPORTS: "Enhanced reports",
    V3_PERFORMANCE_INDEXES: "Performance indexes",
}

CURRENT_SCHEMA_VERSION = V3_PERFORMANCE_INDEXES

VERSION_FIELD = "version"


def get_target_version() -> int:
    """Highest schema version the running code understands."""
    return CURRENT_SCHEMA_VERSION


def get_current_version(store: DocumentStore) -> int:
    """Return the highest recorded schema version, or 0 when the ledger is empty."""
    latest = store.first_ordered(SCHEMA_VERSIONS, VERSION_FIELD, descending=True)
    if latest is None:
        return 0
    return int(latest.get(VERSION_FIELD) or 0)


def record_version(
    store: DocumentStore,
    version: int,
    name: str,
    description: str,
    rollback_script: str | None = None,
) -> str:
    """Append a ledger entry stamped with the store clock. Returns its id.

    Duplicate version numbers are accepted; a warning is logged so operators
    can spot accidental re-runs.
    """
    if any(doc.get(VERSION_FIELD) == version for doc in store.collect(SCHEMA_VERSIONS)):
        logger.warning("Schema version %s already recorded; appending duplicate entry", version)

    entry = {
        "version": version,
        "name": name,
        "description": description,
        "appliedAt": store.now(),
    }
    if rollback_script is not None:
        entry["rollbackScript"] = rollback_script
    version_id = store.insert(SCHEMA_VERSIONS, entry)
    logger.info("Recorded schema version %s (%s) id=%s", version, name, version_id)
    return version_id


def get_version_history(store: DocumentStore) -> VersionHistory:
    """Full ledger, newest version first."""
    docs = store.query_ordered(SCHEMA_VERSIONS, VERSION_FIELD, descending=True)
    history = [SchemaVersionRecord.from_document(doc) for doc in docs]
    return VersionHistory(
        history=history,
        current_version=history[0].version if history else 0,
    )


def get_version_status(store: DocumentStore) -> VersionStatus:
    """Compare the recorded version with the supported one."""
    current = get_current_version(store)
    target = get_target_version()
    return VersionStatus(
        current_version=current,
        target_version=target,
        needs_update=current < target,
    )
