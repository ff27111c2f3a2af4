"""Turn parsed chat commands into storage calls and chat replies."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from domain.commands import (
    AddCommand,
    Command,
    ListCommand,
    RemoveCommand,
    UnknownCommand,
    parse_command,
)
from domain.common import ChatEvent, ChatResponse, Installation
from domain.leaderboard import EMPTY_LEAGUE_MESSAGE, build_leaderboard
from domain.names import normalize
from domain.protocol import InstallationStore, MatchStore
from domain.ratings.engine import compute_ratings
from domain.ratings.protocol import RatingCalculator

logger = logging.getLogger(__name__)

ASK_FOR_NAMES_MESSAGE = "Who do you want to add?"
REMOVE_UNSUPPORTED_MESSAGE = (
    "Sorry, I don't know how to remove competitors from the league yet. "
    "Why would anyone want to stop playing foosball anyway?"
)
HELP_MESSAGE = (
    'Sorry, I didn\'t get that. Try "add <names>" to join the league '
    'or "list" to see the leaderboard.'
)


def join_names(names: Sequence[str]) -> str:
    """``A``, ``A and B``, ``A, B and C``."""
    if len(names) <= 1:
        return "".join(names)
    return f"{', '.join(names[:-1])} and {names[-1]}"


class MessageHandler:
    """Handles one chat event per call; keeps no state between calls."""

    def __init__(
        self,
        installations: InstallationStore,
        matches: MatchStore,
        calculator_factory: Callable[[], RatingCalculator],
    ) -> None:
        self.installations = installations
        self.matches = matches
        self.calculator_factory = calculator_factory

    def handle(self, installation: Installation, event: ChatEvent) -> ChatResponse:
        command = parse_command(event.message, event.mentions, event.sender_name)
        logger.debug(
            "room=%s command=%s",
            event.room_id,
            type(command).__name__,
        )
        return self.dispatch(installation, event.room_id, command)

    def dispatch(self, installation: Installation, room_id: str, command: Command) -> ChatResponse:
        match command:
            case AddCommand(names=names):
                return self._add_members(installation, room_id, names)
            case ListCommand():
                return self._list_members(installation, room_id)
            case RemoveCommand():
                return ChatResponse.text(REMOVE_UNSUPPORTED_MESSAGE)
            case UnknownCommand():
                return ChatResponse.text(HELP_MESSAGE)
        raise TypeError(f"Unsupported command type: {type(command)!r}")

    def _add_members(
        self,
        installation: Installation,
        room_id: str,
        names: Sequence[str],
    ) -> ChatResponse:
        if not names:
            return ChatResponse.text(ASK_FOR_NAMES_MESSAGE)

        additions = {normalize(name): name for name in names}
        self.installations.add_members(installation.oauth_id, room_id, additions)
        logger.info(
            "Added %d member(s) to room %s for installation %s",
            len(additions),
            room_id,
            installation.oauth_id,
        )
        return ChatResponse.text(f"OK, I've added {join_names(list(names))} to the league.")

    def _list_members(self, installation: Installation, room_id: str) -> ChatResponse:
        room = installation.get_room(room_id)
        if room is None or not room.members:
            return ChatResponse.text(EMPTY_LEAGUE_MESSAGE)

        history = self.matches.fetch_matches(room_id)
        ratings = compute_ratings(room.members, history, self.calculator_factory())
        leaderboard = build_leaderboard(room.members, ratings)
        return ChatResponse.html(leaderboard.html)


__all__ = [
    "ASK_FOR_NAMES_MESSAGE",
    "HELP_MESSAGE",
    "MessageHandler",
    "REMOVE_UNSUPPORTED_MESSAGE",
    "join_names",
]
