"""Pydantic schemas for API and service results."""

from dailyreport.schemas.integrity import IntegrityReport, TableStats
from dailyreport.schemas.migration import (
    MigrationProgressRequest,
    MigrationProgressResponse,
    MigrationRunRequest,
    MigrationRunResponse,
    RecordMigrationResponse,
)
from dailyreport.schemas.report import ReportDocument
from dailyreport.schemas.schema_version import (
    RecordVersionRequest,
    RecordVersionResponse,
    SchemaVersionRecord,
    VersionHistory,
    VersionStatus,
)

__all__ = [
    "IntegrityReport",
    "MigrationProgressRequest",
    "MigrationProgressResponse",
    "MigrationRunRequest",
    "MigrationRunResponse",
    "RecordMigrationResponse",
    "RecordVersionRequest",
    "RecordVersionResponse",
    "ReportDocument",
    "SchemaVersionRecord",
    "TableStats",
    "VersionHistory",
    "VersionStatus",
]
