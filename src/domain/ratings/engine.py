"""Replay a room's match history into per-member scores."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from domain.common import Match
from domain.ratings.protocol import RatingCalculator

logger = logging.getLogger(__name__)


def chronological(matches: Iterable[Match]) -> list[Match]:
    """Sort matches by id; equal ids keep their input order."""
    return sorted(matches, key=lambda match: match.id)


def compute_ratings(
    members: Mapping[str, str],
    matches: Iterable[Match],
    calculator: RatingCalculator,
) -> dict[str, float]:
    """Return a score for every member, in member order.

    Unscored matches are skipped. Players outside ``members`` are still
    rated, since they affect their opponents, but are left out of the result.
    """
    processed = 0
    skipped = 0
    for match in chronological(matches):
        if not match.is_scored:
            skipped += 1
            continue
        calculator.process_match(match.teams, match.scores, match_id=match.id)
        processed += 1

    logger.debug(
        "rated processed_matches=%d skipped_unscored=%d tracked_players=%d",
        processed,
        skipped,
        calculator.tracked_entity_count(),
    )
    return {member_key: calculator.score(member_key) for member_key in members}


__all__ = ["chronological", "compute_ratings"]
