"""Shared fixtures: in-memory stores for handler tests."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

import pytest

from domain.common import Installation, Match, Room


class FakeInstallationStore:
    def __init__(self, installations: dict[str, Installation] | None = None) -> None:
        self.installations = installations or {}
        self.add_calls: list[tuple[str, str, dict[str, str]]] = []

    def find_installation(self, oauth_id: str) -> Installation | None:
        return self.installations.get(oauth_id)

    def register_installation(self, oauth_id: str, oauth_secret: str) -> Installation:
        installation = self.installations.setdefault(
            oauth_id,
            Installation(oauth_id=oauth_id, oauth_secret=oauth_secret),
        )
        installation.oauth_secret = oauth_secret
        return installation

    def add_members(self, oauth_id: str, room_id: str, members: Mapping[str, str]) -> None:
        self.add_calls.append((oauth_id, room_id, dict(members)))
        room = self.installations[oauth_id].rooms.setdefault(room_id, Room())
        room.members.update(members)


class FakeMatchStore:
    def __init__(self, matches: dict[str, list[Match]] | None = None) -> None:
        self.matches = matches or {}
        self.fetch_calls: list[str] = []

    def fetch_matches(self, room_id: str) -> list[Match]:
        self.fetch_calls.append(room_id)
        return list(self.matches.get(room_id, []))

    def save_match(
        self,
        room_id: str,
        teams: Sequence[Sequence[str]],
        scores: Sequence[float] | None = None,
    ) -> Match:
        history = self.matches.setdefault(room_id, [])
        match = Match(
            id=f"match#{len(history) + 1}",
            room_id=room_id,
            time=0,
            teams=tuple(tuple(team) for team in teams),
            scores=None if scores is None else tuple(scores),
        )
        history.append(match)
        return match


@pytest.fixture
def installation() -> Installation:
    return Installation(oauth_id="oauth-id", oauth_secret="secret")


@pytest.fixture
def installation_store(installation: Installation) -> FakeInstallationStore:
    return FakeInstallationStore({installation.oauth_id: installation})


@pytest.fixture
def match_store() -> FakeMatchStore:
    return FakeMatchStore()
