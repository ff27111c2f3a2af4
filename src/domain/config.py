"""Load league configuration from a TOML file."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any
import tomllib

from domain.ratings.elo.calculator import EloParameters
from domain.ratings.elo.config import elo_config_json, parse_elo_parameters
from domain.ratings.openskill.calculator import OpenSkillParameters
from domain.ratings.openskill.config import openskill_config_json, parse_openskill_parameters
from domain.ratings.protocol import RatingSystem

DEFAULT_DB_URL = "sqlite:///./foosball.db"


@dataclass(frozen=True)
class StorageConfig:
    db_url: str = DEFAULT_DB_URL


@dataclass(frozen=True)
class RatingConfig:
    system: RatingSystem = RatingSystem.ELO
    elo: EloParameters = field(default_factory=EloParameters)
    openskill: OpenSkillParameters = field(default_factory=OpenSkillParameters)

    def as_config_json(self) -> dict[str, Any]:
        return {
            "system": self.system.value,
            "elo": elo_config_json(self.elo),
            "openskill": openskill_config_json(self.openskill),
        }


@dataclass(frozen=True)
class LeagueConfig:
    """Everything the bot needs at construction time."""

    name: str = "default"
    description: str | None = None
    file_path: Path | None = None
    storage: StorageConfig = field(default_factory=StorageConfig)
    rating: RatingConfig = field(default_factory=RatingConfig)


def load_league_config(file_path: Path) -> LeagueConfig:
    """Load and validate one league TOML config file."""
    if not file_path.exists():
        raise FileNotFoundError(f"Config file not found: {file_path}")
    if not file_path.is_file():
        raise IsADirectoryError(f"Config path is not a file: {file_path}")

    with file_path.open("rb") as file:
        raw = tomllib.load(file)
    return parse_league_config(raw, file_path)


def parse_league_config(raw: dict[str, Any], file_path: Path) -> LeagueConfig:
    league_raw = raw.get("league", {})
    storage_raw = raw.get("storage", {})
    rating_raw = raw.get("rating", {})

    name = str(league_raw.get("name", "default")).strip()
    if not name:
        raise ValueError(f"{file_path}: [league].name must not be empty")

    description_value = league_raw.get("description")
    description = None if description_value is None else str(description_value)

    db_url = str(storage_raw.get("db_url", DEFAULT_DB_URL)).strip()
    if not db_url:
        raise ValueError(f"{file_path}: [storage].db_url must not be empty")

    system_value = str(rating_raw.get("system", RatingSystem.ELO.value)).strip().lower()
    try:
        system = RatingSystem(system_value)
    except ValueError as exc:
        available = ", ".join(option.value for option in RatingSystem)
        raise ValueError(
            f"{file_path}: [rating].system must be one of {available}, got {system_value!r}"
        ) from exc

    return LeagueConfig(
        name=name,
        description=description,
        file_path=file_path,
        storage=StorageConfig(db_url=db_url),
        rating=RatingConfig(
            system=system,
            elo=parse_elo_parameters(raw.get("elo", {}), file_path=file_path),
            openskill=parse_openskill_parameters(raw.get("openskill", {}), file_path=file_path),
        ),
    )


__all__ = [
    "DEFAULT_DB_URL",
    "LeagueConfig",
    "RatingConfig",
    "StorageConfig",
    "load_league_config",
    "parse_league_config",
]
