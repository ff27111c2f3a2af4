"""Database repository helpers."""

from repositories.installation_repository import InstallationRepository
from repositories.match_repository import MatchRepository, create_match_id

__all__ = [
    "InstallationRepository",
    "MatchRepository",
    "create_match_id",
]
