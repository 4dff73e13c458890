"""
Tests for showdown hand comparison and pot payout.

These tests verify:
- The best hand takes the whole pot
- Ties split the pot, odd chips going left of the button
- Hole cards are revealed at showdown
"""

from holdem.core.game import TexasHoldemGame
from holdem.core.hand import HandRank
from holdem.core.rules import GamePhase, TableConfig


class TestShowdownPayout:
    """Pot goes to the best hand."""

    def test_all_in_confrontation(self, rig):
        """Both players all-in for 150: the winner collects exactly 300."""
        game = TexasHoldemGame(
            TableConfig(player_count=2, starting_stack=150, equity_hints=False)
        )
        game.start_hand()
        rig(game.state, ["As Ad", "7c 2d"], "Kh Qs 9d 5c 3h")

        state = game.raise_to(0, 150)
        assert state.players[0].stack == 0

        state = game.call(1)
        assert state.phase == GamePhase.SHOWDOWN
        assert state.players[0].stack == 300
        assert state.players[1].stack == 0
        assert state.pot == 0
        assert state.players[0].hand_result.rank == HandRank.ONE_PAIR
        assert "You wins the pot of 300 with One Pair of As." in state.messages

    def test_best_kicker_wins(self, two_player_game, rig):
        game = two_player_game
        game.start_hand()
        rig(game.state, ["As 3c", "Qs 3d"], "Kh Kd 7s 7c 2d")

        game.call(0)
        game.check(1)
        for _ in range(3):
            game.check(1)
            game.check(0)

        state = game.state
        assert state.phase == GamePhase.SHOWDOWN
        assert state.players[0].stack == 1020
        assert state.players[1].stack == 980

    def test_folded_player_cannot_win(self, three_player_game, rig):
        game = three_player_game
        game.start_hand()
        rig(game.state, ["7c 2d", "As Ah", "8c 3d"], "Kh Qs 9d 5c 4h")

        game.call(0)
        game.call(1)
        game.check(2)
        game.fold(1)      # aces fold on the flop
        game.check(2)
        game.check(0)
        game.check(2)
        game.check(0)
        game.check(2)
        state = game.check(0)

        assert state.phase == GamePhase.SHOWDOWN
        assert state.players[1].hand_result is None
        assert state.players[1].stack == 980
        assert state.players[2].stack == 1040


class TestSplitPot:
    """Tied hands share the pot."""

    def test_board_plays(self, two_player_game, rig):
        game = two_player_game
        game.start_hand()
        rig(game.state, ["2c 3d", "4c 5h"], "As Ks Qh Jd Tc")

        game.call(0)
        game.check(1)
        for _ in range(3):
            game.check(1)
            game.check(0)

        state = game.state
        assert state.phase == GamePhase.SHOWDOWN
        assert state.players[0].stack == 1000
        assert state.players[1].stack == 1000
        assert "You wins a share of the pot (20) with Straight, A-high." in state.messages

    def test_odd_chip_goes_left_of_button(self, rig):
        """A 25-chip pot split two ways: the first winner after the button gets 13."""
        game = TexasHoldemGame(
            TableConfig(player_count=3, small_blind=5, big_blind=10, equity_hints=False)
        )
        game.start_hand()
        rig(game.state, ["2c 3d", "7h 8h", "4c 5h"], "As Ks Qh Jd Tc")

        game.call(0)
        game.fold(1)      # small blind leaves 5 in the pot
        game.check(2)
        for _ in range(3):
            game.check(2)
            game.check(0)

        state = game.state
        assert state.phase == GamePhase.SHOWDOWN
        assert state.players[2].stack == 990 + 13
        assert state.players[0].stack == 990 + 12
        assert sum(p.stack for p in state.players) == 3000


class TestShowdownVisibility:
    """Cards are revealed once the hand is decided."""

    def test_cards_revealed_at_showdown(self, two_player_game, rig):
        game = two_player_game
        game.start_hand()
        rig(game.state, ["As Ad", "7c 2d"], "Kh Qs 9d 5c 3h")

        game.raise_to(0, 1000)
        game.call(1)

        data = game.get_state(for_player_id=0)
        assert data["phase"] == "SHOWDOWN"
        assert len(data["players"][1]["cards"]) == 2
        assert data["players"][1]["hand_result"]["description"] == "High Card K"

    def test_folded_cards_stay_hidden(self, two_player_game):
        game = two_player_game
        game.start_hand()
        game.fold(0)

        data = game.get_state(for_player_id=1)
        assert data["players"][0]["cards"] is None
        assert len(data["players"][1]["cards"]) == 2
