"""Player-level Elo logic weighted by margin of victory."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Sequence
from dataclasses import dataclass

from domain.ratings.common import (
    margin_index,
    pairwise_outcome,
    team_pairs,
    validate_scored_match,
)


@dataclass(frozen=True)
class EloParameters:
    initial_rating: float = 0.0
    k_factor: float = 8.0
    scale_factor: float = 40.0
    margin_multiplier: float = 2.0


@dataclass(frozen=True)
class PlayerEloEvent:
    player: str
    match_id: str | None
    team_index: int
    actual_score: float
    expected_score: float
    pre_rating: float
    rating_delta: float
    post_rating: float


def calculate_expected_score(rating: float, opponent_rating: float, scale_factor: float) -> float:
    """Compute the Elo expected score for one side."""
    return 1.0 / (1.0 + 10.0 ** ((opponent_rating - rating) / scale_factor))


class PlayerEloCalculator:
    """Stateful match-by-match player Elo calculator.

    Each pair of teams in a match is compared on its recorded scores. A team's
    strength is the mean rating of its players; each player moves by
    ``k_eff * (actual - expected)``, where ``expected`` is that player's own
    expectation against the opposing team mean and ``k_eff`` grows with the
    margin of victory.
    """

    def __init__(self, params: EloParameters) -> None:
        self.params = params
        self._ratings: dict[str, float] = {}

    def get_rating(self, player: str) -> float:
        return self._ratings.get(player, self.params.initial_rating)

    def score(self, player: str) -> float:
        return self.get_rating(player) - self.params.initial_rating

    def tracked_entity_count(self) -> int:
        return len(self._ratings)

    def ratings(self) -> dict[str, float]:
        """Return a snapshot of current player ratings."""
        return dict(self._ratings)

    def _margin_multiplier(self, score: float, opponent_score: float) -> float:
        if self.params.margin_multiplier == 1.0:
            return 1.0
        return 1.0 + ((self.params.margin_multiplier - 1.0) * margin_index(score, opponent_score))

    @staticmethod
    def _average_rating(pre_ratings: dict[str, float]) -> float:
        return sum(pre_ratings.values()) / float(len(pre_ratings))

    def process_match(
        self,
        teams: Sequence[Sequence[str]],
        scores: Sequence[float],
        *,
        match_id: str | None = None,
    ) -> list[PlayerEloEvent]:
        validate_scored_match(teams, scores, match_id=match_id)

        team_pre = [{player: self.get_rating(player) for player in team} for team in teams]
        team_avg_pre = [self._average_rating(pre) for pre in team_pre]

        deltas: dict[str, float] = defaultdict(float)
        expected_totals: dict[str, float] = defaultdict(float)
        actual_totals: dict[str, float] = defaultdict(float)

        for index_a, index_b in team_pairs(len(teams)):
            score_a = float(scores[index_a])
            score_b = float(scores[index_b])
            actual_a = pairwise_outcome(score_a, score_b)
            effective_k = self.params.k_factor * self._margin_multiplier(score_a, score_b)

            for side, opponent, actual in (
                (index_a, index_b, actual_a),
                (index_b, index_a, 1.0 - actual_a),
            ):
                for player, pre_rating in team_pre[side].items():
                    expected = calculate_expected_score(
                        rating=pre_rating,
                        opponent_rating=team_avg_pre[opponent],
                        scale_factor=self.params.scale_factor,
                    )
                    deltas[player] += effective_k * (actual - expected)
                    expected_totals[player] += expected
                    actual_totals[player] += actual

        pair_count = float(len(teams) - 1)
        events: list[PlayerEloEvent] = []
        for team_index, pre_ratings in enumerate(team_pre):
            for player, pre_rating in pre_ratings.items():
                post_rating = pre_rating + deltas[player]
                self._ratings[player] = post_rating
                events.append(
                    PlayerEloEvent(
                        player=player,
                        match_id=match_id,
                        team_index=team_index,
                        actual_score=actual_totals[player] / pair_count,
                        expected_score=expected_totals[player] / pair_count,
                        pre_rating=pre_rating,
                        rating_delta=deltas[player],
                        post_rating=post_rating,
                    )
                )
        return events


__all__ = [
    "EloParameters",
    "PlayerEloCalculator",
    "PlayerEloEvent",
    "calculate_expected_score",
]
