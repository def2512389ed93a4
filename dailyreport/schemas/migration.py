"""Migration run and progress schemas."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class MigrationProgressRequest(BaseModel):
    """Schema for recording a migration lifecycle event."""

    migration_name: str = Field(..., min_length=1, max_length=200)
    status: Literal["started", "completed", "failed"]
    details: str | None = None
    error: str | None = None


class MigrationProgressResponse(BaseModel):
    success: bool


class MigrationRunRequest(BaseModel):
    """Schema for triggering the report backfill."""

    migration_name: str = Field("report_fields_backfill", min_length=1, max_length=200)
    record_target_version: bool = False
    stop_on_error: bool | None = None


class MigrationRunResponse(BaseModel):
    status: str
    reports_total: int
    reports_migrated: int
    reports_unchanged: int
    reports_missing: int
    reports_failed: int
    version_id: str | None = None
    error: str | None = None


class RecordMigrationResponse(BaseModel):
    """Result of migrating one report."""

    report_id: str
    found: bool
    updated_fields: list[str]
