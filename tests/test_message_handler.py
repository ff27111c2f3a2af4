"""Tests for dispatching chat commands to storage and replies."""

from __future__ import annotations

import pytest

from conftest import FakeInstallationStore, FakeMatchStore
from domain.common import ChatEvent, Installation, Match, Mention, Room
from domain.config import RatingConfig
from domain.dispatcher import (
    ASK_FOR_NAMES_MESSAGE,
    HELP_MESSAGE,
    REMOVE_UNSUPPORTED_MESSAGE,
    MessageHandler,
    join_names,
)
from domain.leaderboard import EMPTY_LEAGUE_MESSAGE
from domain.ratings.protocol import RatingSystem
from domain.ratings.registry import calculator_factory

ROOM_ID = "12321"


def _event(
    message: str,
    *,
    sender_name: str = "My Name",
    mentions: tuple[Mention, ...] = (),
    room_id: str = ROOM_ID,
) -> ChatEvent:
    return ChatEvent(
        oauth_client_id="oauth-id",
        room_id=room_id,
        message=message,
        sender_name=sender_name,
        mentions=mentions,
    )


def _handler(
    installation_store: FakeInstallationStore,
    match_store: FakeMatchStore,
    system: RatingSystem = RatingSystem.ELO,
) -> MessageHandler:
    return MessageHandler(
        installation_store,
        match_store,
        calculator_factory(RatingConfig(system=system)),
    )


def _xss_scenario(installation: Installation, match_store: FakeMatchStore) -> None:
    installation.rooms[ROOM_ID] = Room(members={"<xss>": "<XSS>", "a": "A", "b": "B"})
    match_store.matches[ROOM_ID] = [
        Match(id="match#1", room_id=ROOM_ID, time=0, teams=(("<xss>",), ("a",)), scores=(10, 0)),
        Match(id="match#1", room_id=ROOM_ID, time=0, teams=(("<xss>",), ("a",)), scores=(10, 0)),
        Match(id="match#2", room_id=ROOM_ID, time=0, teams=(("<xss>",), ("a",))),
    ]


def test_join_names() -> None:
    assert join_names([]) == ""
    assert join_names(["A"]) == "A"
    assert join_names(["A", "B"]) == "A and B"
    assert join_names(["A", "B", "C"]) == "A, B and C"


def test_add_without_names_asks_who(
    installation: Installation,
    installation_store: FakeInstallationStore,
    match_store: FakeMatchStore,
) -> None:
    response = _handler(installation_store, match_store).handle(installation, _event("add"))

    assert response.message == ASK_FOR_NAMES_MESSAGE
    assert response.message_format == "text"
    assert installation_store.add_calls == []


def test_add_members_mentions_and_me_in_one_write(
    installation: Installation,
    installation_store: FakeInstallationStore,
    match_store: FakeMatchStore,
) -> None:
    event = _event(
        "ADD members:Á New Member, @Anothermember and me",
        mentions=(Mention(mention_name="anothermember", name="Another Member"),),
    )

    response = _handler(installation_store, match_store).handle(installation, event)

    assert installation_store.add_calls == [
        (
            "oauth-id",
            ROOM_ID,
            {
                "a new member": "Á New Member",
                "another member": "Another Member",
                "my name": "My Name",
            },
        )
    ]
    assert response.message == (
        "OK, I've added Á New Member, Another Member and My Name to the league."
    )
    assert response.message_format == "text"


def test_add_to_existing_room_writes_only_new_names(
    installation: Installation,
    installation_store: FakeInstallationStore,
    match_store: FakeMatchStore,
) -> None:
    installation.rooms[ROOM_ID] = Room(members={"someone": "Someone"})

    response = _handler(installation_store, match_store).handle(
        installation,
        _event("add New Member"),
    )

    assert installation_store.add_calls == [("oauth-id", ROOM_ID, {"new member": "New Member"})]
    assert installation.rooms[ROOM_ID].members == {
        "someone": "Someone",
        "new member": "New Member",
    }
    assert response.message == "OK, I've added New Member to the league."


def test_add_deduplicates_names(
    installation: Installation,
    installation_store: FakeInstallationStore,
    match_store: FakeMatchStore,
) -> None:
    response = _handler(installation_store, match_store).handle(
        installation,
        _event("add someone , Someone Else,,Someone"),
    )

    assert installation_store.add_calls == [
        ("oauth-id", ROOM_ID, {"someone": "Someone", "someone else": "Someone Else"})
    ]
    assert response.message == "OK, I've added Someone and Someone Else to the league."


def test_remove_is_declined_without_writes(
    installation: Installation,
    installation_store: FakeInstallationStore,
    match_store: FakeMatchStore,
) -> None:
    response = _handler(installation_store, match_store).handle(
        installation,
        _event("Remove @someone @someoneelse"),
    )

    assert response.message == REMOVE_UNSUPPORTED_MESSAGE
    assert installation_store.add_calls == []


def test_unknown_text_gets_help(
    installation: Installation,
    installation_store: FakeInstallationStore,
    match_store: FakeMatchStore,
) -> None:
    response = _handler(installation_store, match_store).handle(installation, _event("hello"))

    assert response.message == HELP_MESSAGE
    assert installation_store.add_calls == []
    assert match_store.fetch_calls == []


def test_list_renders_escaped_html_leaderboard(
    installation: Installation,
    installation_store: FakeInstallationStore,
    match_store: FakeMatchStore,
) -> None:
    _xss_scenario(installation, match_store)

    response = _handler(installation_store, match_store).handle(installation, _event("LIST"))

    assert response.message_format == "html"
    assert response.message == (
        "Table football leaderboard, sorted by skill level: "
        "<ol><li>&lt;XSS&gt; (12.6) 🔥🔥</li><li>B (0.0)</li><li>A (-12.6) 💩💩</li></ol>"
    )
    assert response.as_payload()["notify"] is False


def test_list_with_openskill_keeps_order_and_decorations(
    installation: Installation,
    installation_store: FakeInstallationStore,
    match_store: FakeMatchStore,
) -> None:
    _xss_scenario(installation, match_store)

    response = _handler(installation_store, match_store, RatingSystem.OPENSKILL).handle(
        installation,
        _event("list"),
    )

    message = response.message
    assert message.index("&lt;XSS&gt;") < message.index("<li>B (0.0)</li>") < message.index("<li>A (")
    assert "&lt;XSS&gt; (" in message and "🔥🔥</li><li>B" in message
    assert message.endswith("💩💩</li></ol>")


@pytest.mark.parametrize(
    ("rooms", "room_id"),
    [
        ({ROOM_ID: Room()}, ROOM_ID),
        ({}, "unknown-room"),
    ],
)
def test_list_without_members_reports_no_league(
    installation: Installation,
    installation_store: FakeInstallationStore,
    match_store: FakeMatchStore,
    rooms: dict[str, Room],
    room_id: str,
) -> None:
    installation.rooms.update(rooms)

    response = _handler(installation_store, match_store).handle(
        installation,
        _event("List members", room_id=room_id),
    )

    assert response.message == EMPTY_LEAGUE_MESSAGE
    assert response.message_format == "text"
    assert match_store.fetch_calls == []


def test_handler_keeps_no_state_between_requests(
    installation: Installation,
    installation_store: FakeInstallationStore,
    match_store: FakeMatchStore,
) -> None:
    _xss_scenario(installation, match_store)
    handler = _handler(installation_store, match_store)

    first = handler.handle(installation, _event("list"))
    second = handler.handle(installation, _event("list"))

    assert first == second
