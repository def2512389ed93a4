"""Per-collection document counts for before/after migration comparison."""

from __future__ import annotations

from dailyreport.schemas.integrity import TableStats
from dailyreport.store.base import (
    APPROVALS,
    AUDIT_LOGS,
    COMMENTS,
    ORGS,
    REPORTS,
    SCHEMA_VERSIONS,
    USER_PROFILES,
    DocumentStore,
)


def get_table_stats(store: DocumentStore) -> TableStats:
    """Count documents in every collection the application owns. Full scans."""
    return TableStats(
        orgs=store.count(ORGS),
        users=store.count(USER_PROFILES),
        reports=store.count(REPORTS),
        comments=store.count(COMMENTS),
        approvals=store.count(APPROVALS),
        audit_logs=store.count(AUDIT_LOGS),
        schema_versions=store.count(SCHEMA_VERSIONS),
        timestamp=store.now(),
    )
