"""Validation and outcome helpers shared by rating calculators."""

from __future__ import annotations

from collections.abc import Sequence
from itertools import combinations

from domain.exceptions import InvalidMatch


def validate_scored_match(
    teams: Sequence[Sequence[str]],
    scores: Sequence[float],
    *,
    match_id: str | None = None,
) -> None:
    if len(teams) < 2:
        raise InvalidMatch(match_id, f"needs at least two teams, got {len(teams)}")
    if len(scores) != len(teams):
        raise InvalidMatch(
            match_id,
            f"has {len(scores)} scores for {len(teams)} teams",
        )
    if any(not team for team in teams):
        raise InvalidMatch(match_id, "has a team without players")

    seen: set[str] = set()
    for team in teams:
        overlap = seen.intersection(team)
        if overlap:
            raise InvalidMatch(match_id, f"has players on more than one team: {sorted(overlap)}")
        seen.update(team)


def team_pairs(team_count: int) -> list[tuple[int, int]]:
    """Every unordered pair of team indexes, in deterministic order."""
    return list(combinations(range(team_count), 2))


def pairwise_outcome(score: float, opponent_score: float) -> float:
    """Actual result for one side: 1.0 win, 0.5 draw, 0.0 loss."""
    if score > opponent_score:
        return 1.0
    if score < opponent_score:
        return 0.0
    return 0.5


def margin_index(score: float, opponent_score: float) -> float:
    """How one-sided a result was, from 0.0 (level) to 1.0 (shutout)."""
    score = max(score, 0.0)
    opponent_score = max(opponent_score, 0.0)
    total = score + opponent_score
    if total <= 0.0:
        return 0.0
    return min(abs(score - opponent_score) / total, 1.0)


def ranks_from_scores(scores: Sequence[float]) -> list[int]:
    """Competition ranks (1 is best, ties share a rank) for per-team scores."""
    return [1 + sum(1 for other in scores if other > score) for score in scores]


__all__ = [
    "margin_index",
    "pairwise_outcome",
    "ranks_from_scores",
    "team_pairs",
    "validate_scored_match",
]
