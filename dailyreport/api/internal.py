"""Internal schema administration endpoints.

These endpoints are secured with a static token (X-Internal-Token header)
and are meant for operators and migration scripts only.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from dailyreport.api.deps import get_store, require_internal_token
from dailyreport.schemas.integrity import IntegrityReport, TableStats
from dailyreport.schemas.migration import (
    MigrationProgressRequest,
    MigrationProgressResponse,
    MigrationRunRequest,
    MigrationRunResponse,
    RecordMigrationResponse,
)
from dailyreport.schemas.schema_version import (
    RecordVersionRequest,
    RecordVersionResponse,
    VersionHistory,
    VersionStatus,
)
from dailyreport.services import integrity_checker, version_ledger
from dailyreport.services.migration_progress import record_migration_progress
from dailyreport.services.migration_runner import run_report_migration
from dailyreport.services.record_migrator import migrate_record
from dailyreport.services.table_stats import get_table_stats
from dailyreport.store.base import DocumentStore

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/internal/schema",
    include_in_schema=False,
    dependencies=[Depends(require_internal_token)],
)


@router.get("/version", response_model=VersionStatus)
def get_version(store: DocumentStore = Depends(get_store)) -> VersionStatus:
    """Recorded schema version, supported version and whether an update is due."""
    return version_ledger.get_version_status(store)


@router.get("/history", response_model=VersionHistory)
def get_history(store: DocumentStore = Depends(get_store)) -> VersionHistory:
    return version_ledger.get_version_history(store)


@router.post("/versions", response_model=RecordVersionResponse, status_code=201)
def post_version(
    body: RecordVersionRequest,
    store: DocumentStore = Depends(get_store),
) -> RecordVersionResponse:
    """Append an applied version to the ledger."""
    version_id = version_ledger.record_version(
        store,
        body.version,
        body.name,
        body.description,
        rollback_script=body.rollback_script,
    )
    return RecordVersionResponse(id=version_id, version=body.version)


@router.get("/validate", response_model=IntegrityReport)
def get_validate(store: DocumentStore = Depends(get_store)) -> IntegrityReport:
    """Integrity audit. Issues are returned as data with status 200."""
    return integrity_checker.validate(store)


@router.get("/stats", response_model=TableStats)
def get_stats(store: DocumentStore = Depends(get_store)) -> TableStats:
    return get_table_stats(store)


@router.post("/progress", response_model=MigrationProgressResponse)
def post_progress(
    body: MigrationProgressRequest,
    store: DocumentStore = Depends(get_store),
) -> MigrationProgressResponse:
    result = record_migration_progress(
        store,
        body.migration_name,
        body.status,
        details=body.details,
        error=body.error,
    )
    return MigrationProgressResponse(**result)


@router.post("/reports/{report_id}/migrate", response_model=RecordMigrationResponse)
def post_migrate_report(
    report_id: str,
    store: DocumentStore = Depends(get_store),
) -> RecordMigrationResponse:
    """Migrate one report. A missing report is reported as found=false, not 404."""
    if not report_id.strip():
        raise HTTPException(status_code=422, detail="Invalid report_id")
    delta = migrate_record(store, report_id.strip())
    return RecordMigrationResponse(
        report_id=report_id.strip(),
        found=delta is not None,
        updated_fields=sorted(delta or {}),
    )


@router.post("/migrate_reports", response_model=MigrationRunResponse)
def post_migrate_reports(
    body: MigrationRunRequest | None = None,
    store: DocumentStore = Depends(get_store),
) -> MigrationRunResponse:
    """Run the report backfill across all reports.

    Per-report failures come back in the summary with status "failed".
    """
    body = body or MigrationRunRequest()
    result = run_report_migration(
        store,
        body.migration_name,
        record_target_version=body.record_target_version,
        stop_on_error=body.stop_on_error,
    )
    if result["status"] != "completed":
        logger.warning("Report migration %s finished with failures", body.migration_name)
    return MigrationRunResponse(**result)
