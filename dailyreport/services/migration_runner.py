"""Report backfill driver.

Enumerates every report, migrates each one independently and records the
run in the audit log. One report failing does not stop the run unless
stop_on_error is set. Because per-report migration is idempotent, a failed or
interrupted run can simply be started again.
"""

from __future__ import annotations

import logging

from dailyreport.config import get_settings
from dailyreport.services.migration_progress import record_migration_progress
from dailyreport.services.record_migrator import get_all_reports, migrate_record
from dailyreport.services.version_ledger import (
    KNOWN_VERSIONS,
    get_target_version,
    record_version,
)
from dailyreport.store.base import ID_FIELD, DocumentStore

logger = logging.getLogger(__name__)

DEFAULT_MIGRATION_NAME = "report_fields_backfill"


def run_report_migration(
    store: DocumentStore,
    migration_name: str = DEFAULT_MIGRATION_NAME,
    *,
    record_target_version: bool = False,
    stop_on_error: bool | None = None,
) -> dict:
    """Migrate all reports to the current shape.

    When record_target_version is true and every report succeeded, the
    target schema version is appended to the ledger.

    Returns:
        dict with status, reports_total, reports_migrated, reports_unchanged,
        reports_missing, reports_failed, version_id, error
    """
    if stop_on_error is None:
        stop_on_error = get_settings().migration_stop_on_error

    record_migration_progress(store, migration_name, "started")

    migrated = unchanged = missing = 0
    report_ids: list[str] = []
    errors: list[str] = []
    try:
        report_ids = [doc[ID_FIELD] for doc in get_all_reports(store)]
        logger.info("Migrating %d report(s) for %s", len(report_ids), migration_name)

        for report_id in report_ids:
            try:
                delta = migrate_record(store, report_id)
            except Exception as exc:
                logger.exception("Report %s migration failed", report_id)
                errors.append(f"{report_id}: {exc}")
                if stop_on_error:
                    break
                continue
            if delta is None:
                missing += 1
            elif delta:
                migrated += 1
            else:
                unchanged += 1
    except Exception as exc:
        logger.exception("Report migration %s aborted", migration_name)
        errors.append(str(exc))

    result = {
        "status": "completed",
        "reports_total": len(report_ids),
        "reports_migrated": migrated,
        "reports_unchanged": unchanged,
        "reports_missing": missing,
        "reports_failed": len(errors),
        "version_id": None,
        "error": None,
    }
    details = (
        f"migrated={migrated} unchanged={unchanged} "
        f"missing={missing} failed={len(errors)}"
    )

    if errors:
        result["status"] = "failed"
        result["error"] = "; ".join(errors[:10])
        record_migration_progress(
            store, migration_name, "failed", details=details, error=result["error"]
        )
        return result

    if record_target_version:
        target = get_target_version()
        result["version_id"] = record_version(
            store,
            target,
            KNOWN_VERSIONS.get(target, migration_name),
            f"Applied by {migration_name}",
        )
    record_migration_progress(store, migration_name, "completed", details=details)
    return result
