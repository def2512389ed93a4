"""Per-report migration to the current report shape.

Each step inspects one legacy field and proposes values only where the
record lacks them. The combined proposal is reduced to the keys whose value
actually changes, then written as a partial patch. Running a migration on an
already-migrated report therefore computes an empty delta and writes nothing.

Shape mismatches (``tasks`` not a list, ``metadata`` not a dict, non-dict
task items) skip that step only.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from dailyreport.schemas.report import ReportDocument
from dailyreport.store.base import REPORTS, DocumentNotFoundError, DocumentStore

logger = logging.getLogger(__name__)

_MISSING = object()

TASK_DEFAULT_FIELDS = ("estimatedHours", "actualHours", "category")
METADATA_LIST_FIELDS = ("achievements", "challenges", "learnings", "nextActionItems")
METADATA_NULL_FIELDS = ("previousReportId", "template", "difficulty")
METADATA_VERSION = 1

MigrationStep = Callable[[dict[str, Any]], dict[str, Any]]


def _ai_summary_status(report: dict[str, Any]) -> dict[str, Any]:
    if "aiSummaryStatus" in report:
        return {}
    # No summary means nothing was summarized: keep an explicit empty status.
    return {"aiSummaryStatus": "completed" if report.get("summary") else None}


def _extend_tasks(report: dict[str, Any]) -> dict[str, Any]:
    tasks = report.get("tasks")
    if not isinstance(tasks, list):
        return {}
    extended = []
    for task in tasks:
        if isinstance(task, dict):
            task = {**task, **{f: task.get(f) for f in TASK_DEFAULT_FIELDS}}
        extended.append(task)
    return {"tasks": extended}


def _extend_attachments(report: dict[str, Any]) -> dict[str, Any]:
    attachments = report.get("attachments")
    if not isinstance(attachments, list):
        return {}
    extended = []
    for attachment in attachments:
        if isinstance(attachment, dict):
            uploaded_at = attachment.get("uploadedAt")
            attachment = {
                **attachment,
                "uploadedAt": uploaded_at if uploaded_at is not None else report.get("created_at"),
                "description": attachment.get("description"),
            }
        extended.append(attachment)
    return {"attachments": extended}


def _extend_metadata(report: dict[str, Any]) -> dict[str, Any]:
    metadata = report.get("metadata")
    if not isinstance(metadata, dict):
        return {}
    extended = dict(metadata)
    version = extended.get("version")
    # Free-form legacy metadata may carry a non-numeric "version".
    if not isinstance(version, int) or isinstance(version, bool):
        extended["version"] = METADATA_VERSION
    for field in METADATA_NULL_FIELDS:
        extended.setdefault(field, None)
    for field in METADATA_LIST_FIELDS:
        if not isinstance(extended.get(field), list):
            extended[field] = []
    return {"metadata": extended}


def _status_timestamps(report: dict[str, Any]) -> dict[str, Any]:
    updates: dict[str, Any] = {}
    status = report.get("status")
    if status == "submitted" and "submittedAt" not in report:
        updates["submittedAt"] = report.get("updated_at")
    if status == "approved" and "approvedAt" not in report:
        updates["approvedAt"] = report.get("updated_at")
    return updates


def _deletion_fields(report: dict[str, Any]) -> dict[str, Any]:
    if not report.get("isDeleted") or "deletedAt" in report:
        return {}
    # Legacy data never recorded who deleted a report; the author stands in.
    return {
        "deletedAt": report.get("updated_at"),
        "deletedBy": report.get("authorId"),
    }


def _edit_history(report: dict[str, Any]) -> dict[str, Any]:
    if isinstance(report.get("editHistory"), list):
        return {}
    return {"editHistory": []}


MIGRATION_STEPS: tuple[MigrationStep, ...] = (
    _ai_summary_status,
    _extend_tasks,
    _extend_attachments,
    _extend_metadata,
    _status_timestamps,
    _deletion_fields,
    _edit_history,
)


def compute_report_delta(report: dict[str, Any]) -> dict[str, Any]:
    """Return the top-level fields that must change to reach the current shape."""
    proposed: dict[str, Any] = {}
    for step in MIGRATION_STEPS:
        proposed.update(step(report))
    return {
        key: value
        for key, value in proposed.items()
        if report.get(key, _MISSING) != value
    }


def upgrade_report(report: dict[str, Any]) -> dict[str, Any]:
    """Return the report with its migration delta applied. Does not write."""
    return {**report, **compute_report_delta(report)}


def to_report_document(report: dict[str, Any]) -> ReportDocument:
    """Upgrade and validate a report against the current typed shape."""
    return ReportDocument.model_validate(upgrade_report(report))


def get_all_reports(store: DocumentStore) -> list[dict[str, Any]]:
    """Every report document. Full scan; used by migration drivers."""
    return store.collect(REPORTS)


def migrate_record(store: DocumentStore, report_id: str) -> dict[str, Any] | None:
    """Bring one report up to the current shape with a partial patch.

    Returns the applied delta ({} when already current), or None when the
    report no longer exists. A missing report is not an error.
    """
    report = store.get(REPORTS, report_id)
    if report is None:
        logger.debug("Report %s not found; skipping migration", report_id)
        return None

    delta = compute_report_delta(report)
    if not delta:
        return delta

    try:
        store.patch(REPORTS, report_id, delta)
    except DocumentNotFoundError:
        logger.debug("Report %s deleted before patch; skipping migration", report_id)
        return None
    logger.debug("Migrated report %s fields=%s", report_id, sorted(delta))
    return delta
