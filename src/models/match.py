"""match_history table model."""

from __future__ import annotations

from typing import Any

from sqlalchemy import BigInteger, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base
from models.mixins import JSONType, TimestampMixin


class MatchRecord(TimestampMixin, Base):
    """Immutable match history (one row per recorded game)."""

    __tablename__ = "match_history"
    __table_args__ = (Index("idx_match_history_room_id", "room_id", "id"),)

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    room_id: Mapped[str] = mapped_column(String(128), nullable=False)
    time: Mapped[int] = mapped_column(BigInteger, nullable=False)
    teams: Mapped[list[list[str]]] = mapped_column(JSONType, nullable=False)
    scores: Mapped[list[Any] | None] = mapped_column(JSONType, nullable=True)
