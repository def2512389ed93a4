"""Current-version report document shape.

Fields typed ``X | None`` without a default must be present on a migrated
document; ``None`` is the explicit "no value" sentinel. Unknown fields are
kept (documents carry title, content, workingHours and other app fields).
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

ReportStatus = Literal["draft", "submitted", "approved", "rejected"]
AiSummaryStatus = Literal["pending", "processing", "completed", "failed"]
Difficulty = Literal["easy", "medium", "hard"]


class _Document(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")


class ReportTask(_Document):
    """Legacy task entry extended with effort tracking."""

    estimated_hours: float | None = Field(..., alias="estimatedHours")
    actual_hours: float | None = Field(..., alias="actualHours")
    category: str | None = Field(...)


class ReportAttachment(_Document):
    uploaded_at: int = Field(..., alias="uploadedAt")
    description: str | None = Field(...)


class ReportMetadata(_Document):
    version: int
    previous_report_id: str | None = Field(..., alias="previousReportId")
    template: str | None = Field(...)
    difficulty: Difficulty | None = Field(...)
    achievements: list[str]
    challenges: list[str]
    learnings: list[str]
    next_action_items: list[str] = Field(..., alias="nextActionItems")


class EditHistoryEntry(_Document):
    edited_at: int = Field(..., alias="editedAt")
    editor_id: str = Field(..., alias="editorId")
    changes: str


class ReportDocument(_Document):
    """A report after migration to the current schema."""

    id: str | None = Field(None, alias="_id")
    author_id: str = Field(..., alias="authorId")
    org_id: str = Field(..., alias="orgId")
    status: ReportStatus
    is_deleted: bool = Field(..., alias="isDeleted")
    created_at: int
    updated_at: int

    summary: str | None = None
    ai_summary_status: AiSummaryStatus | None = Field(..., alias="aiSummaryStatus")
    tasks: list[ReportTask] | None = None
    attachments: list[ReportAttachment] | None = None
    metadata: ReportMetadata

    submitted_at: int | None = Field(None, alias="submittedAt")
    approved_at: int | None = Field(None, alias="approvedAt")
    rejected_at: int | None = Field(None, alias="rejectedAt")
    rejection_reason: str | None = Field(None, alias="rejectionReason")
    edit_history: list[EditHistoryEntry] = Field(..., alias="editHistory")
    deleted_at: int | None = Field(None, alias="deletedAt")
    deleted_by: str | None = Field(None, alias="deletedBy")
