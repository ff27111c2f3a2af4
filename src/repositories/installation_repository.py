"""Persistence for installations and room membership using SQLAlchemy."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import UTC, datetime

from sqlalchemy import select
from sqlalchemy.orm import Session, sessionmaker

from domain.common import Installation, Room
from domain.exceptions import InstallationNotFound
from models import InstallationRecord, RoomMemberRecord, RoomRecord
from repositories.common import insert_ignoring_conflicts, supports_upsert, upsert_rows

logger = logging.getLogger(__name__)

_ROOM_KEY = ("oauth_id", "room_id")
_MEMBER_KEY = ("oauth_id", "room_id", "member_key")


class InstallationRepository:
    """Reads installations with their rooms and writes membership changes.

    Each public method runs in its own transaction.
    """

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self.session_factory = session_factory

    def find_installation(self, oauth_id: str) -> Installation | None:
        with self.session_factory() as session:
            record = session.get(InstallationRecord, oauth_id)
            if record is None:
                return None

            rooms: dict[str, Room] = {
                room_id: Room()
                for room_id in session.scalars(
                    select(RoomRecord.room_id)
                    .where(RoomRecord.oauth_id == oauth_id)
                    .order_by(RoomRecord.room_id)
                )
            }
            member_rows = session.execute(
                select(
                    RoomMemberRecord.room_id,
                    RoomMemberRecord.member_key,
                    RoomMemberRecord.display_name,
                )
                .where(RoomMemberRecord.oauth_id == oauth_id)
                .order_by(RoomMemberRecord.id)
            )
            for row in member_rows:
                rooms.setdefault(row.room_id, Room()).members[row.member_key] = row.display_name

            return Installation(
                oauth_id=record.oauth_id,
                oauth_secret=record.oauth_secret,
                rooms=rooms,
            )

    def register_installation(self, oauth_id: str, oauth_secret: str) -> Installation:
        """Create the installation, or refresh its secret if it already exists."""
        with self.session_factory() as session, session.begin():
            record = session.get(InstallationRecord, oauth_id)
            if record is None:
                session.add(InstallationRecord(oauth_id=oauth_id, oauth_secret=oauth_secret))
                logger.info("Registered installation %s", oauth_id)
            else:
                record.oauth_secret = oauth_secret
                record.updated_at = datetime.now(UTC).replace(tzinfo=None)
                logger.info("Refreshed secret for installation %s", oauth_id)

        installation = self.find_installation(oauth_id)
        if installation is None:
            raise InstallationNotFound(oauth_id)
        return installation

    def add_members(self, oauth_id: str, room_id: str, members: Mapping[str, str]) -> None:
        """Ensure the room exists, then set each member's display name.

        Both steps share one transaction. Existing rooms and members outside
        ``members`` are never overwritten, so concurrent adds to the same room
        are safe to retry.
        """
        if not members:
            return

        room_id = str(room_id)
        room_row = {"oauth_id": oauth_id, "room_id": room_id}
        member_rows = [
            {
                "oauth_id": oauth_id,
                "room_id": room_id,
                "member_key": member_key,
                "display_name": display_name,
            }
            for member_key, display_name in members.items()
        ]

        with self.session_factory() as session, session.begin():
            if supports_upsert(session):
                insert_ignoring_conflicts(session, RoomRecord, [room_row], conflict_columns=_ROOM_KEY)
                upsert_rows(
                    session,
                    RoomMemberRecord,
                    member_rows,
                    conflict_columns=_MEMBER_KEY,
                    update_columns=("display_name",),
                )
            else:
                self._merge_members(session, room_row, member_rows)

        logger.debug("Wrote members=%s to room %s", sorted(members), room_id)

    @staticmethod
    def _merge_members(
        session: Session,
        room_row: dict[str, str],
        member_rows: list[dict[str, str]],
    ) -> None:
        if session.get(RoomRecord, (room_row["oauth_id"], room_row["room_id"])) is None:
            session.add(RoomRecord(**room_row))
            session.flush()

        existing = {
            record.member_key: record
            for record in session.scalars(
                select(RoomMemberRecord).where(
                    RoomMemberRecord.oauth_id == room_row["oauth_id"],
                    RoomMemberRecord.room_id == room_row["room_id"],
                    RoomMemberRecord.member_key.in_([row["member_key"] for row in member_rows]),
                )
            )
        }
        for row in member_rows:
            record = existing.get(row["member_key"])
            if record is None:
                session.add(RoomMemberRecord(**row))
            else:
                record.display_name = row["display_name"]


__all__ = ["InstallationRepository"]
