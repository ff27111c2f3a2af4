"""Unit tests for player-level OpenSkill calculations."""

from __future__ import annotations

import pytest

from domain.exceptions import InvalidMatch
from domain.ratings.openskill.calculator import OpenSkillParameters, PlayerOpenSkillCalculator


def test_unrated_player_scores_zero() -> None:
    calculator = PlayerOpenSkillCalculator(OpenSkillParameters())

    assert calculator.score("nobody") == pytest.approx(0.0)
    assert calculator.get_mu("nobody") == pytest.approx(25.0)
    assert calculator.tracked_entity_count() == 0


def test_win_raises_winner_ordinal_and_lowers_loser_mu() -> None:
    calculator = PlayerOpenSkillCalculator(OpenSkillParameters())
    events = calculator.process_match([["xss"], ["a"]], [10, 0], match_id="m1")

    assert len(events) == 2
    winner, loser = events
    assert winner.rank == 1
    assert loser.rank == 2
    assert winner.post_mu > winner.pre_mu
    assert loser.post_mu < loser.pre_mu
    assert winner.ordinal_delta > 0.0
    assert winner.expected_score == pytest.approx(0.5)
    assert calculator.score("xss") > 0.0
    assert calculator.score("xss") > calculator.score("a")


def test_repeated_wins_reduce_uncertainty() -> None:
    calculator = PlayerOpenSkillCalculator(OpenSkillParameters())
    calculator.process_match([["xss"], ["a"]], [10, 0])
    sigma_after_one = calculator.get_sigma("xss")
    calculator.process_match([["xss"], ["a"]], [10, 0])

    assert calculator.get_sigma("xss") < sigma_after_one
    assert calculator.score("xss") > calculator.score("b") > calculator.score("a")


def test_draw_keeps_equal_players_level() -> None:
    calculator = PlayerOpenSkillCalculator(OpenSkillParameters())
    calculator.process_match([["a", "b"], ["c", "d"]], [5, 5])

    assert calculator.get_mu("a") == pytest.approx(calculator.get_mu("c"))
    assert calculator.tracked_entity_count() == 4


def test_malformed_match_is_rejected() -> None:
    calculator = PlayerOpenSkillCalculator(OpenSkillParameters())

    with pytest.raises(InvalidMatch):
        calculator.process_match([["a"], ["a"]], [1, 0])


def test_close_win_moves_less_than_shutout() -> None:
    close = PlayerOpenSkillCalculator(OpenSkillParameters())
    close.process_match([["a"], ["b"]], [10, 9])
    shutout = PlayerOpenSkillCalculator(OpenSkillParameters())
    shutout.process_match([["a"], ["b"]], [10, 0])

    assert 0.0 < close.score("a") < shutout.score("a")
    assert shutout.score("b") < close.score("b")
    assert close.get_sigma("a") == pytest.approx(shutout.get_sigma("a"))


def test_margin_multiplier_of_one_ignores_margin() -> None:
    params = OpenSkillParameters(margin_multiplier=1.0)
    close = PlayerOpenSkillCalculator(params)
    close.process_match([["a"], ["b"]], [10, 9])
    shutout = PlayerOpenSkillCalculator(params)
    shutout.process_match([["a"], ["b"]], [10, 0])

    assert close.score("a") == pytest.approx(shutout.score("a"))


def test_shutout_doubles_mu_change_with_default_multiplier() -> None:
    plain = PlayerOpenSkillCalculator(OpenSkillParameters(margin_multiplier=1.0))
    plain.process_match([["a"], ["b"]], [10, 0])
    weighted = PlayerOpenSkillCalculator(OpenSkillParameters())
    weighted.process_match([["a"], ["b"]], [10, 0])

    assert weighted.get_mu("a") - 25.0 == pytest.approx(2.0 * (plain.get_mu("a") - 25.0))
