"""Document model."""

from typing import Any

from sqlalchemy import JSON, BigInteger, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from dailyreport.db.session import Base


class Document(Base):
    """One document of a named collection (orgs, reports, schema_versions, ...).

    The body holds the document's own fields; ``id`` and ``creation_time`` are
    system fields surfaced as ``_id`` and ``_creationTime``.
    """

    __tablename__ = "documents"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    collection: Mapped[str] = mapped_column(String(64), nullable=False)
    body: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    creation_time: Mapped[int] = mapped_column(BigInteger, nullable=False)

    __table_args__ = (
        Index("ix_documents_collection_creation", "collection", "creation_time"),
    )
