"""ORM models."""

from models.base import Base
from models.installation import InstallationRecord, RoomMemberRecord, RoomRecord
from models.match import MatchRecord

__all__ = [
    "Base",
    "InstallationRecord",
    "MatchRecord",
    "RoomMemberRecord",
    "RoomRecord",
]
