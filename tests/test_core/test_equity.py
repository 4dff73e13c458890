"""
Tests for Monte Carlo equity estimation.
"""

import random

import pytest
from holdem.core.card import parse_cards
from holdem.core.equity import estimate_win_probability


@pytest.fixture(autouse=True)
def seeded_random():
    """Trials draw from the module-level generator; pin it."""
    random.seed(1234)
    yield
    random.seed()


class TestEstimateWinProbability:
    """Tests for estimate_win_probability."""

    def test_pocket_aces_heads_up(self):
        """AA wins or ties about 85% of the time against one random hand."""
        probability = estimate_win_probability(parse_cards("As Ah"), [], 1)
        assert 80.0 <= probability <= 90.0

    def test_more_opponents_lowers_equity(self):
        one = estimate_win_probability(parse_cards("As Ah"), [], 1)
        five = estimate_win_probability(parse_cards("As Ah"), [], 5)
        assert five < one

    def test_weak_hand_is_below_half(self):
        probability = estimate_win_probability(parse_cards("7c 2d"), [], 1)
        assert probability < 50.0

    def test_nuts_on_complete_board(self):
        """A royal flush on the river cannot lose."""
        probability = estimate_win_probability(
            parse_cards("As Ks"), parse_cards("Qs Js Ts 3d 4c"), 3
        )
        assert probability == 100.0

    def test_board_plays_counts_ties_as_wins(self):
        probability = estimate_win_probability(
            parse_cards("2c 3d"), parse_cards("As Ks Qh Jd Tc"), 2
        )
        assert probability == 100.0

    def test_no_opponents(self):
        assert estimate_win_probability(parse_cards("7c 2d"), [], 0) == 100.0

    def test_result_is_a_percentage(self):
        probability = estimate_win_probability(parse_cards("Kd Qd"), parse_cards("2s 7h 9d"), 2)
        assert 0.0 <= probability <= 100.0

    def test_not_enough_cards(self):
        with pytest.raises(ValueError):
            estimate_win_probability(parse_cards("As Ah"), [], 25)
