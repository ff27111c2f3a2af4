"""Leaderboard ranking, decoration and chat formatting."""

from __future__ import annotations

import html
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum

EMPTY_LEAGUE_MESSAGE = "There is no foosball league running in this room!"
LEADERBOARD_HEADING = "Table football leaderboard, sorted by skill level:"


class Decoration(str, Enum):
    NONE = ""
    HOT = "🔥🔥"
    COLD = "💩💩"


@dataclass(frozen=True)
class PlayerRating:
    member_key: str
    display_name: str
    score: float
    decoration: Decoration = Decoration.NONE

    @property
    def display_score(self) -> str:
        return f"{_rounded(self.score):.1f}"

    def label(self, *, escape: bool = False) -> str:
        name = html.escape(self.display_name) if escape else self.display_name
        entry = f"{name} ({self.display_score})"
        if self.decoration is Decoration.NONE:
            return entry
        return f"{entry} {self.decoration.value}"


@dataclass(frozen=True)
class FormattedLeaderboard:
    players: tuple[PlayerRating, ...]
    text: str
    html: str

    @property
    def is_empty(self) -> bool:
        return not self.players


def _rounded(score: float) -> float:
    # adding 0.0 turns -0.0 into 0.0
    return round(score, 1) + 0.0


def rank_players(members: Mapping[str, str], ratings: Mapping[str, float]) -> list[PlayerRating]:
    """Sort members by score, best first, keeping registration order on ties."""
    scored = [
        (member_key, display_name, ratings.get(member_key, 0.0))
        for member_key, display_name in members.items()
    ]
    if not scored:
        return []

    ordered = sorted(scored, key=lambda item: item[2], reverse=True)
    # sign tests use the raw score, extremes compare at displayed precision
    best = _rounded(ordered[0][2])
    worst = _rounded(ordered[-1][2])

    players: list[PlayerRating] = []
    for member_key, display_name, score in ordered:
        shown = _rounded(score)
        decoration = Decoration.NONE
        if score > 0.0 and shown == best:
            decoration = Decoration.HOT
        elif score < 0.0 and shown == worst:
            decoration = Decoration.COLD
        players.append(
            PlayerRating(
                member_key=member_key,
                display_name=display_name,
                score=score,
                decoration=decoration,
            )
        )
    return players


def render_leaderboard(players: Sequence[PlayerRating]) -> FormattedLeaderboard:
    """Format ranked players as plain text and as escaped HTML."""
    if not players:
        return FormattedLeaderboard(players=(), text=EMPTY_LEAGUE_MESSAGE, html=EMPTY_LEAGUE_MESSAGE)

    text_lines = [LEADERBOARD_HEADING]
    text_lines.extend(
        f"{position}. {player.label()}" for position, player in enumerate(players, start=1)
    )
    items = "".join(f"<li>{player.label(escape=True)}</li>" for player in players)
    return FormattedLeaderboard(
        players=tuple(players),
        text="\n".join(text_lines),
        html=f"{LEADERBOARD_HEADING} <ol>{items}</ol>",
    )


def build_leaderboard(members: Mapping[str, str], ratings: Mapping[str, float]) -> FormattedLeaderboard:
    return render_leaderboard(rank_players(members, ratings))


__all__ = [
    "Decoration",
    "EMPTY_LEAGUE_MESSAGE",
    "FormattedLeaderboard",
    "LEADERBOARD_HEADING",
    "PlayerRating",
    "build_leaderboard",
    "rank_players",
    "render_leaderboard",
]
