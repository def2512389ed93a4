"""Integrity check and table statistics schemas."""

from __future__ import annotations

from pydantic import BaseModel


class IntegrityReport(BaseModel):
    """Result of a read-only integrity validation run."""

    is_valid: bool
    current_version: int
    issues: list[str]
    timestamp: int


class TableStats(BaseModel):
    """Per-collection document counts."""

    orgs: int
    users: int
    reports: int
    comments: int
    approvals: int
    audit_logs: int
    schema_versions: int
    timestamp: int
