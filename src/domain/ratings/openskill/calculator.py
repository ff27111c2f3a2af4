"""Player-level OpenSkill logic (Plackett-Luce model)."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from openskill.models import PlackettLuce

from domain.ratings.common import (
    margin_index,
    ranks_from_scores,
    team_pairs,
    validate_scored_match,
)


@dataclass(frozen=True)
class OpenSkillParameters:
    initial_mu: float = 25.0
    initial_sigma: float = 25.0 / 3.0
    beta: float = 25.0 / 6.0
    kappa: float = 0.0001
    tau: float = 25.0 / 300.0
    limit_sigma: bool = False
    balance: bool = False
    ordinal_z: float = 3.0
    margin_multiplier: float = 2.0


@dataclass(frozen=True)
class PlayerOpenSkillEvent:
    player: str
    match_id: str | None
    team_index: int
    rank: int
    expected_score: float
    pre_mu: float
    pre_sigma: float
    pre_ordinal: float
    post_mu: float
    post_sigma: float
    post_ordinal: float

    @property
    def ordinal_delta(self) -> float:
        return self.post_ordinal - self.pre_ordinal


class PlayerOpenSkillCalculator:
    """Stateful match-by-match player OpenSkill calculator.

    A player's leaderboard score is the conservative ordinal
    ``mu - z * sigma`` measured from the ordinal of a fresh rating, so unrated
    players sit at exactly 0.0 and winners climb faster than losers fall while
    uncertainty shrinks. The model's mu change is scaled by the margin of
    victory, the same weighting the Elo calculator applies to its K-factor.
    """

    def __init__(self, params: OpenSkillParameters) -> None:
        self.params = params
        self._model = PlackettLuce(
            mu=self.params.initial_mu,
            sigma=self.params.initial_sigma,
            beta=self.params.beta,
            kappa=self.params.kappa,
            tau=self.params.tau,
            limit_sigma=self.params.limit_sigma,
            balance=self.params.balance,
        )
        self._ratings: dict[str, object] = {}
        self._initial_ordinal = self.params.initial_mu - (
            self.params.ordinal_z * self.params.initial_sigma
        )

    def _get_or_create_rating(self, player: str):
        existing = self._ratings.get(player)
        if existing is not None:
            return existing
        return self._model.rating(
            mu=self.params.initial_mu,
            sigma=self.params.initial_sigma,
            name=player,
        )

    def get_mu(self, player: str) -> float:
        return float(self._get_or_create_rating(player).mu)

    def get_sigma(self, player: str) -> float:
        return float(self._get_or_create_rating(player).sigma)

    def get_ordinal(self, player: str) -> float:
        if player not in self._ratings:
            return self._initial_ordinal
        return float(self._ratings[player].ordinal(self.params.ordinal_z))

    def score(self, player: str) -> float:
        return self.get_ordinal(player) - self._initial_ordinal

    def tracked_entity_count(self) -> int:
        return len(self._ratings)

    def ratings(self) -> dict[str, tuple[float, float, float]]:
        """Return a snapshot of current (mu, sigma, ordinal) per player."""
        return {
            player: (
                float(rating.mu),
                float(rating.sigma),
                float(rating.ordinal(self.params.ordinal_z)),
            )
            for player, rating in self._ratings.items()
        }

    def _team_margin_multipliers(self, scores: list[float]) -> list[float]:
        """Per-team mean of ``1 + (m - 1) * margin`` over the pairings it played."""
        totals = [0.0] * len(scores)
        for index_a, index_b in team_pairs(len(scores)):
            weight = 1.0 + (self.params.margin_multiplier - 1.0) * margin_index(
                scores[index_a],
                scores[index_b],
            )
            totals[index_a] += weight
            totals[index_b] += weight
        pair_count = float(len(scores) - 1)
        return [total / pair_count for total in totals]

    def process_match(
        self,
        teams: Sequence[Sequence[str]],
        scores: Sequence[float],
        *,
        match_id: str | None = None,
    ) -> list[PlayerOpenSkillEvent]:
        validate_scored_match(teams, scores, match_id=match_id)

        pre_teams = [[self._get_or_create_rating(player) for player in team] for team in teams]
        predicted = self._model.predict_win(pre_teams)
        float_scores = [float(score) for score in scores]
        ranks = ranks_from_scores(float_scores)

        updated = self._model.rate(pre_teams, ranks=ranks)
        multipliers = self._team_margin_multipliers(float_scores)

        events: list[PlayerOpenSkillEvent] = []
        for team_index, team in enumerate(teams):
            for player_index, player in enumerate(team):
                pre = pre_teams[team_index][player_index]
                rated = updated[team_index][player_index]
                post = self._model.rating(
                    mu=pre.mu + multipliers[team_index] * (rated.mu - pre.mu),
                    sigma=rated.sigma,
                    name=player,
                )
                self._ratings[player] = post
                events.append(
                    PlayerOpenSkillEvent(
                        player=player,
                        match_id=match_id,
                        team_index=team_index,
                        rank=ranks[team_index],
                        expected_score=float(predicted[team_index]),
                        pre_mu=float(pre.mu),
                        pre_sigma=float(pre.sigma),
                        pre_ordinal=float(pre.ordinal(self.params.ordinal_z)),
                        post_mu=float(post.mu),
                        post_sigma=float(post.sigma),
                        post_ordinal=float(post.ordinal(self.params.ordinal_z)),
                    )
                )
        return events


__all__ = [
    "OpenSkillParameters",
    "PlayerOpenSkillCalculator",
    "PlayerOpenSkillEvent",
]
