"""Parse the ``[elo]`` section of a league TOML config."""

from __future__ import annotations

from dataclasses import asdict
from pathlib import Path
from typing import Any

from domain.ratings.elo.calculator import EloParameters


def parse_elo_parameters(elo_raw: dict[str, Any], *, file_path: Path) -> EloParameters:
    values = {
        key: float(elo_raw.get(key, default))
        for key, default in asdict(EloParameters()).items()
    }
    parameters = EloParameters(**values)
    _validate_parameters(file_path=file_path, parameters=parameters)
    return parameters


def elo_config_json(parameters: EloParameters) -> dict[str, Any]:
    return asdict(parameters)


def _validate_parameters(*, file_path: Path, parameters: EloParameters) -> None:
    if parameters.k_factor <= 0.0:
        raise ValueError(f"{file_path}: [elo].k_factor must be > 0")
    if parameters.scale_factor <= 0.0:
        raise ValueError(f"{file_path}: [elo].scale_factor must be > 0")
    if parameters.margin_multiplier < 1.0:
        raise ValueError(f"{file_path}: [elo].margin_multiplier must be >= 1")
