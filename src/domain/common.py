"""Shared types for the league domain."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Match:
    """One recorded foosball game.

    ``id`` is a creation timestamp followed by ``#`` and a random suffix, so
    sorting ids lexically replays matches chronologically. ``scores`` is
    ``None`` for unscored games, which are kept but ignored by ratings.
    """

    id: str
    room_id: str
    time: int
    teams: tuple[tuple[str, ...], ...]
    scores: tuple[float, ...] | None = None

    @property
    def is_scored(self) -> bool:
        return self.scores is not None


@dataclass
class Room:
    """Member map of one chat room, keyed by normalized name in registration order."""

    members: dict[str, str] = field(default_factory=dict)


@dataclass
class Installation:
    """One chat-platform account the bot is installed into."""

    oauth_id: str
    oauth_secret: str
    rooms: dict[str, Room] = field(default_factory=dict)

    def get_room(self, room_id: str) -> Room | None:
        return self.rooms.get(str(room_id))


@dataclass(frozen=True)
class Mention:
    """An ``@handle`` mention attached to a chat message."""

    mention_name: str
    name: str


@dataclass(frozen=True)
class ChatEvent:
    """Inbound chat message, already stripped of transport details."""

    oauth_client_id: str
    room_id: str
    message: str
    sender_name: str
    mentions: tuple[Mention, ...] = ()


@dataclass(frozen=True)
class ChatResponse:
    """Outbound chat message; ``message_format`` is ``text`` or ``html``."""

    message: str
    message_format: str = "text"

    @classmethod
    def text(cls, message: str) -> ChatResponse:
        return cls(message=message, message_format="text")

    @classmethod
    def html(cls, message: str) -> ChatResponse:
        return cls(message=message, message_format="html")

    def as_payload(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "message_format": self.message_format,
            "notify": False,
        }


__all__ = [
    "ChatEvent",
    "ChatResponse",
    "Installation",
    "Match",
    "Mention",
    "Room",
]
