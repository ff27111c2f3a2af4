"""Shared protocols and enums for rating systems."""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
from typing import Any, Protocol, runtime_checkable


class RatingSystem(str, Enum):
    """Which skill model turns match history into scores."""

    ELO = "elo"
    OPENSKILL = "openskill"


@runtime_checkable
class RatingCalculator(Protocol):
    """Base contract all rating calculators satisfy.

    ``score`` is the leaderboard value of a player: 0.0 before any rated game.
    """

    def process_match(
        self,
        teams: Sequence[Sequence[str]],
        scores: Sequence[float],
        *,
        match_id: str | None = None,
    ) -> list[Any]: ...

    def score(self, player: str) -> float: ...

    def tracked_entity_count(self) -> int: ...


__all__ = ["RatingCalculator", "RatingSystem"]
