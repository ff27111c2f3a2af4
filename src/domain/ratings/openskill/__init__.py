"""OpenSkill rating modules."""

from domain.ratings.openskill.calculator import (
    OpenSkillParameters,
    PlayerOpenSkillCalculator,
    PlayerOpenSkillEvent,
)
from domain.ratings.openskill.config import openskill_config_json, parse_openskill_parameters

__all__ = [
    "OpenSkillParameters",
    "PlayerOpenSkillCalculator",
    "PlayerOpenSkillEvent",
    "openskill_config_json",
    "parse_openskill_parameters",
]
