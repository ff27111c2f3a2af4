"""Chat command parsing for league membership and leaderboard requests."""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass

from domain.common import Mention
from domain.names import clean_display_name, normalize


@dataclass(frozen=True)
class AddCommand:
    """Register members; ``names`` are display names, deduplicated by key."""

    names: tuple[str, ...] = ()


@dataclass(frozen=True)
class ListCommand:
    """Show the leaderboard."""


@dataclass(frozen=True)
class RemoveCommand:
    """Remove members. Recognised but not supported."""


@dataclass(frozen=True)
class UnknownCommand:
    text: str = ""


Command = AddCommand | ListCommand | RemoveCommand | UnknownCommand

_ADD_RE = re.compile(r"^add\b(?P<rest>.*)$", re.IGNORECASE | re.DOTALL)
_LIST_RE = re.compile(r"^list\b", re.IGNORECASE)
_REMOVE_RE = re.compile(r"^(?:remove|delete|kick)\b", re.IGNORECASE)
_MEMBERS_PREFIX_RE = re.compile(r"^\s*(?:members?\s*:|:|members?\s*$)", re.IGNORECASE)
_SEPARATOR_RE = re.compile(r"\s*(?:,|&|\band\b)\s*", re.IGNORECASE)
_MENTIONS_ONLY_RE = re.compile(r"^@\S+(?:\s+@\S+)*$")
_SELF_REFERENCE = "me"


def parse_command(
    text: str,
    mentions: Sequence[Mention] = (),
    sender_name: str = "",
) -> Command:
    """Classify a chat message. Never raises for any string input."""
    stripped = (text or "").strip()

    add_match = _ADD_RE.match(stripped)
    if add_match:
        return AddCommand(
            names=extract_names(add_match.group("rest"), mentions=mentions, sender_name=sender_name)
        )
    if _LIST_RE.match(stripped):
        return ListCommand()
    if _REMOVE_RE.match(stripped):
        return RemoveCommand()
    return UnknownCommand(text=stripped)


def extract_names(
    raw_list: str,
    *,
    mentions: Sequence[Mention] = (),
    sender_name: str = "",
) -> tuple[str, ...]:
    """Split a human-written list of names and resolve mentions and ``me``.

    A key keeps the position of its first occurrence and the spelling of its
    latest one.
    """
    body = _MEMBERS_PREFIX_RE.sub("", raw_list, count=1)
    handles = {mention.mention_name.casefold(): mention.name for mention in mentions}

    resolved: dict[str, str] = {}
    for token in _SEPARATOR_RE.split(body):
        for name in _resolve_token(token.strip(), handles=handles, sender_name=sender_name):
            key = normalize(name)
            if key:
                resolved[key] = name
    return tuple(resolved.values())


def _resolve_token(token: str, *, handles: dict[str, str], sender_name: str) -> list[str]:
    if not token:
        return []
    if token.casefold() == _SELF_REFERENCE:
        return [clean_display_name(sender_name)] if sender_name.strip() else []
    if _MENTIONS_ONLY_RE.match(token):
        return [
            clean_display_name(handles.get(handle[1:].casefold(), handle[1:]))
            for handle in token.split()
        ]
    return [clean_display_name(token)]


__all__ = [
    "AddCommand",
    "Command",
    "ListCommand",
    "RemoveCommand",
    "UnknownCommand",
    "extract_names",
    "parse_command",
]
