"""SQLAlchemy models."""

from dailyreport.models.document import Document

__all__ = ["Document"]
