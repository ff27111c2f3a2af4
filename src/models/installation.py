"""installations, rooms and room_members table models."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, ForeignKeyConstraint, Index, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base
from models.mixins import TimestampMixin


class InstallationRecord(TimestampMixin, Base):
    """One chat-platform account the bot is installed into."""

    __tablename__ = "installations"

    oauth_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    oauth_secret: Mapped[str] = mapped_column(String(256), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        nullable=False,
        server_default=func.now(),
    )


class RoomRecord(TimestampMixin, Base):
    """A chat room with a league, scoped to its installation."""

    __tablename__ = "rooms"

    oauth_id: Mapped[str] = mapped_column(
        ForeignKey("installations.oauth_id", ondelete="CASCADE"),
        primary_key=True,
    )
    room_id: Mapped[str] = mapped_column(String(128), primary_key=True)


class RoomMemberRecord(TimestampMixin, Base):
    """One registered league member; ``id`` order is registration order."""

    __tablename__ = "room_members"
    __table_args__ = (
        UniqueConstraint("oauth_id", "room_id", "member_key", name="uq_room_members_room_key"),
        ForeignKeyConstraint(
            ["oauth_id", "room_id"],
            ["rooms.oauth_id", "rooms.room_id"],
            ondelete="CASCADE",
        ),
        Index("idx_room_members_room", "oauth_id", "room_id", "id"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    oauth_id: Mapped[str] = mapped_column(String(128), nullable=False)
    room_id: Mapped[str] = mapped_column(String(128), nullable=False)
    member_key: Mapped[str] = mapped_column(String(256), nullable=False)
    display_name: Mapped[str] = mapped_column(String(256), nullable=False)
