"""Parse the ``[openskill]`` section of a league TOML config."""

from __future__ import annotations

from dataclasses import asdict
from pathlib import Path
from typing import Any

from domain.ratings.openskill.calculator import OpenSkillParameters

_POSITIVE_FLOAT_KEYS = ("initial_mu", "initial_sigma", "beta", "kappa", "tau", "ordinal_z")
_BOOL_KEYS = ("limit_sigma", "balance")
_TRUE_WORDS = frozenset({"true", "1", "yes", "on"})
_FALSE_WORDS = frozenset({"false", "0", "no", "off"})


def parse_openskill_parameters(
    openskill_raw: dict[str, Any],
    *,
    file_path: Path,
) -> OpenSkillParameters:
    """Build model parameters; every key is optional and falls back to the default."""
    values = asdict(OpenSkillParameters())

    for key in _POSITIVE_FLOAT_KEYS:
        value = float(openskill_raw.get(key, values[key]))
        if value <= 0.0:
            raise ValueError(f"{file_path}: [openskill].{key} must be > 0")
        values[key] = value

    for key in _BOOL_KEYS:
        values[key] = _to_bool(openskill_raw.get(key, values[key]), file_path=file_path, key=key)

    margin_multiplier = float(openskill_raw.get("margin_multiplier", values["margin_multiplier"]))
    if margin_multiplier < 1.0:
        raise ValueError(f"{file_path}: [openskill].margin_multiplier must be >= 1")
    values["margin_multiplier"] = margin_multiplier

    return OpenSkillParameters(**values)


def openskill_config_json(parameters: OpenSkillParameters) -> dict[str, Any]:
    return asdict(parameters)


def _to_bool(value: Any, *, file_path: Path, key: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        word = value.strip().lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
    raise ValueError(f"{file_path}: [openskill].{key} must be a boolean")
