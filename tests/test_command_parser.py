"""Tests for chat command parsing."""

from __future__ import annotations

import pytest

from domain.commands import (
    AddCommand,
    ListCommand,
    RemoveCommand,
    UnknownCommand,
    extract_names,
    parse_command,
)
from domain.common import Mention


def test_add_with_members_prefix_mentions_and_me() -> None:
    command = parse_command(
        "ADD members:Á New Member, @Anothermember and me",
        mentions=[Mention(mention_name="anothermember", name="Another Member")],
        sender_name="My Name",
    )

    assert command == AddCommand(names=("Á New Member", "Another Member", "My Name"))


def test_add_without_names_is_empty() -> None:
    assert parse_command("add") == AddCommand(names=())
    assert parse_command("add:") == AddCommand(names=())
    assert parse_command("add members:  ") == AddCommand(names=())


def test_add_deduplicates_by_key_keeping_first_position_and_latest_spelling() -> None:
    command = parse_command("add someone , Someone Else,,Someone")

    assert command == AddCommand(names=("Someone", "Someone Else"))


def test_add_splits_on_ampersand_and_word_and() -> None:
    command = parse_command("add Andrew AND Anna & Sandra, Brandon")

    assert command == AddCommand(names=("Andrew", "Anna", "Sandra", "Brandon"))


def test_add_resolves_several_mentions_in_one_item() -> None:
    mentions = [
        Mention(mention_name="Alice", name="Alice Smith"),
        Mention(mention_name="bob", name="Bob Jones"),
    ]

    command = parse_command("add @alice @bob", mentions=mentions)

    assert command == AddCommand(names=("Alice Smith", "Bob Jones"))


def test_add_unknown_mention_falls_back_to_handle() -> None:
    assert parse_command("add @ghost") == AddCommand(names=("ghost",))


def test_add_me_without_sender_is_skipped() -> None:
    assert parse_command("add me, Someone") == AddCommand(names=("Someone",))


def test_add_requires_a_word_boundary() -> None:
    assert isinstance(parse_command("address book"), UnknownCommand)


@pytest.mark.parametrize("text", ["list", "LIST", "List members", "  list  "])
def test_list_commands(text: str) -> None:
    assert parse_command(text) == ListCommand()


def test_listen_is_not_list() -> None:
    assert parse_command("listen up") == UnknownCommand(text="listen up")


@pytest.mark.parametrize("text", ["Remove @someone @someoneelse", "delete Bob", "kick me"])
def test_remove_commands(text: str) -> None:
    assert parse_command(text) == RemoveCommand()


@pytest.mark.parametrize("text", ["", "   ", "hello there", "!!!"])
def test_other_text_is_unknown(text: str) -> None:
    assert isinstance(parse_command(text), UnknownCommand)


def test_extract_names_collapses_whitespace_in_names() -> None:
    assert extract_names("  Mary   Jane ,  Peter ") == ("Mary Jane", "Peter")


def test_add_keeps_names_starting_with_member_when_no_colon_follows() -> None:
    assert parse_command("add Member Berry") == AddCommand(names=("Member Berry",))
    assert parse_command("add members Only, Bob") == AddCommand(names=("members Only", "Bob"))


def test_add_members_word_alone_is_empty() -> None:
    assert parse_command("add members") == AddCommand(names=())
    assert parse_command("add Member : Berry") == AddCommand(names=("Berry",))
