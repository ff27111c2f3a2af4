"""Storage contracts the message handler depends on."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Protocol, runtime_checkable

from domain.common import Installation, Match


@runtime_checkable
class InstallationStore(Protocol):
    def find_installation(self, oauth_id: str) -> Installation | None: ...

    def register_installation(self, oauth_id: str, oauth_secret: str) -> Installation: ...

    def add_members(self, oauth_id: str, room_id: str, members: Mapping[str, str]) -> None:
        """Create the room if missing, then set each key's display name, atomically."""
        ...


@runtime_checkable
class MatchStore(Protocol):
    def fetch_matches(self, room_id: str) -> list[Match]:
        """Return every match of a room, in any order."""
        ...

    def save_match(
        self,
        room_id: str,
        teams: Sequence[Sequence[str]],
        scores: Sequence[float] | None = None,
    ) -> Match: ...


__all__ = ["InstallationStore", "MatchStore"]
