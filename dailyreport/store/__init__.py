"""Document store interface and implementations."""

from dailyreport.store.base import (
    APPROVALS,
    AUDIT_LOGS,
    COMMENTS,
    ORGS,
    REPORTS,
    SCHEMA_VERSIONS,
    USER_PROFILES,
    DocumentNotFoundError,
    DocumentStore,
)
from dailyreport.store.memory import InMemoryDocumentStore
from dailyreport.store.sql import SqlDocumentStore

__all__ = [
    "APPROVALS",
    "AUDIT_LOGS",
    "COMMENTS",
    "ORGS",
    "REPORTS",
    "SCHEMA_VERSIONS",
    "USER_PROFILES",
    "DocumentNotFoundError",
    "DocumentStore",
    "InMemoryDocumentStore",
    "SqlDocumentStore",
]
