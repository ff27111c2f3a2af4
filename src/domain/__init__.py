"""Foosball league domain modules."""

from domain.common import ChatEvent, ChatResponse, Installation, Match, Mention, Room

__all__ = ["ChatEvent", "ChatResponse", "Installation", "Match", "Mention", "Room"]
