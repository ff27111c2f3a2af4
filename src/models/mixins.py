"""SQLAlchemy column types and mixins shared by league tables."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import JSON, DateTime, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

# JSONB on PostgreSQL, plain JSON elsewhere (SQLite in tests and local runs).
JSONType = JSON().with_variant(JSONB(), "postgresql")


class TimestampMixin:
    """Row creation time, set by the database."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        nullable=False,
        server_default=func.now(),
    )
