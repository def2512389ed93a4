"""Schema version ledger schemas."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class SchemaVersionRecord(BaseModel):
    """One applied schema version, as stored in ``schema_versions``."""

    id: str | None = Field(None, alias="_id")
    version: int
    name: str
    description: str
    applied_at: int = Field(..., alias="appliedAt")
    rollback_script: str | None = Field(None, alias="rollbackScript")

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> "SchemaVersionRecord":
        return cls.model_validate(doc)


class VersionHistory(BaseModel):
    """Ledger entries newest first, plus the computed current version."""

    history: list[SchemaVersionRecord]
    current_version: int


class VersionStatus(BaseModel):
    """Recorded version compared with the version this code supports."""

    current_version: int
    target_version: int
    needs_update: bool


class RecordVersionRequest(BaseModel):
    """Schema for recording an applied schema version."""

    version: int = Field(..., ge=0)
    name: str = Field(..., min_length=1, max_length=200)
    description: str = Field("", max_length=5000)
    rollback_script: str | None = None


class RecordVersionResponse(BaseModel):
    id: str
    version: int
