"""Registry of available rating calculators."""

from __future__ import annotations

from collections.abc import Callable

from domain.config import RatingConfig
from domain.ratings.elo.calculator import PlayerEloCalculator
from domain.ratings.openskill.calculator import PlayerOpenSkillCalculator
from domain.ratings.protocol import RatingCalculator, RatingSystem

CreateCalculatorFn = Callable[[RatingConfig], RatingCalculator]

_REGISTRY: dict[RatingSystem, CreateCalculatorFn] = {
    RatingSystem.ELO: lambda config: PlayerEloCalculator(params=config.elo),
    RatingSystem.OPENSKILL: lambda config: PlayerOpenSkillCalculator(params=config.openskill),
}


def create_calculator(config: RatingConfig) -> RatingCalculator:
    """Build a fresh calculator for the configured rating system."""
    try:
        creator = _REGISTRY[config.system]
    except KeyError as exc:
        available = ", ".join(system.value for system in _REGISTRY)
        raise KeyError(
            f"No rating calculator registered for {config.system.value}. Available: {available}"
        ) from exc
    return creator(config)


def calculator_factory(config: RatingConfig) -> Callable[[], RatingCalculator]:
    """Bind a config so each leaderboard request gets its own calculator."""

    def factory() -> RatingCalculator:
        return create_calculator(config)

    return factory


__all__ = ["calculator_factory", "create_calculator"]
