"""Elo rating modules."""

from domain.ratings.elo.calculator import (
    EloParameters,
    PlayerEloCalculator,
    PlayerEloEvent,
    calculate_expected_score,
)
from domain.ratings.elo.config import elo_config_json, parse_elo_parameters

__all__ = [
    "EloParameters",
    "PlayerEloCalculator",
    "PlayerEloEvent",
    "calculate_expected_score",
    "elo_config_json",
    "parse_elo_parameters",
]
