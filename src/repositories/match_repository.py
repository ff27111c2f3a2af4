"""Persistence for match history using SQLAlchemy."""

from __future__ import annotations

import logging
import random
import string
from collections.abc import Callable, Sequence
from datetime import UTC, datetime

from sqlalchemy import select
from sqlalchemy.orm import Session, sessionmaker

from domain.common import Match
from domain.exceptions import InvalidMatch
from models import MatchRecord
from repositories.common import insert_rows

_ID_ALPHABET = string.digits + string.ascii_lowercase

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(UTC)


def create_match_id(created_at: datetime) -> str:
    """Timestamp prefix plus a random base-36 suffix; sorts chronologically.

    Example: ``2026-10-19T12:00:00.000000Z#k3f9``
    """
    suffix = "".join(random.choices(_ID_ALPHABET, k=4))
    return f"{created_at.astimezone(UTC).strftime('%Y-%m-%dT%H:%M:%S.%fZ')}#{suffix}"


def _to_match(record: MatchRecord) -> Match:
    return Match(
        id=record.id,
        room_id=record.room_id,
        time=int(record.time),
        teams=tuple(tuple(str(player) for player in team) for team in record.teams),
        scores=None if record.scores is None else tuple(float(score) for score in record.scores),
    )


class MatchRepository:
    """Appends immutable match records and reads a room's history."""

    def __init__(
        self,
        session_factory: sessionmaker[Session],
        *,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self.session_factory = session_factory
        self.clock = clock

    def fetch_matches(self, room_id: str) -> list[Match]:
        with self.session_factory() as session:
            records = session.scalars(
                select(MatchRecord)
                .where(MatchRecord.room_id == str(room_id))
                .order_by(MatchRecord.id)
            )
            return [_to_match(record) for record in records]

    def save_match(
        self,
        room_id: str,
        teams: Sequence[Sequence[str]],
        scores: Sequence[float] | None = None,
    ) -> Match:
        """Stamp the match with a creation time and id, then store it."""
        if not teams or any(not team for team in teams):
            raise InvalidMatch(None, "needs at least one team and no empty teams")
        if scores is not None and len(scores) != len(teams):
            raise InvalidMatch(None, f"has {len(scores)} scores for {len(teams)} teams")

        created_at = self.clock()
        match = Match(
            id=create_match_id(created_at),
            room_id=str(room_id),
            time=int(created_at.timestamp()),
            teams=tuple(tuple(team) for team in teams),
            scores=None if scores is None else tuple(float(score) for score in scores),
        )

        with self.session_factory() as session, session.begin():
            insert_rows(
                session,
                MatchRecord,
                [
                    {
                        "id": match.id,
                        "room_id": match.room_id,
                        "time": match.time,
                        "teams": [list(team) for team in match.teams],
                        "scores": None if match.scores is None else list(match.scores),
                    }
                ],
            )

        logger.info("Saved match %s for room %s", match.id, match.room_id)
        return match


__all__ = ["MatchRepository", "create_match_id"]
