"""
Base class and TimestampMixin for all SQLAlchemy ORM models.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class TimestampMixin:
    """
    created_at / updated_at on every row.

    No soft delete: deletes are hard deletes.
    """

    created_at: Mapped[datetime] = mapped_column(
        "Created At", DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False
    )
    updated_at: Mapped[Optional[datetime]] = mapped_column(
        "Updated At", DateTime(timezone=True), onupdate=utcnow, nullable=True
    )

    def __repr__(self) -> str:
        mapper = self.__mapper__  # type: ignore[attr-defined]
        keys = ", ".join(f"{c.key}={getattr(self, c.key, None)!r}" for c in mapper.primary_key)
        return f"<{self.__class__.__name__}({keys})>"
