"""create documents table

Revision ID: 001_documents
Revises:
Create Date: 2026-10-18

Backing table for the document store: one row per document of every
collection (orgs, userProfiles, reports, schema_versions, audit_logs, ...).
"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001_documents"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "documents",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("collection", sa.String(length=64), nullable=False),
        sa.Column("body", sa.JSON(), nullable=False),
        sa.Column("creation_time", sa.BigInteger(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_documents_collection_creation",
        "documents",
        ["collection", "creation_time"],
    )


def downgrade() -> None:
    op.drop_index("ix_documents_collection_creation", table_name="documents")
    op.drop_table("documents")
