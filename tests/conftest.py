"""
Pytest configuration and shared fixtures for the Hold'em engine tests.
"""

import pytest
from holdem.core.card import Card, Rank, Suit, parse_cards
from holdem.core.game import GameState, TexasHoldemGame
from holdem.core.rules import TableConfig


def chip_total(state: GameState) -> int:
    """Chips in circulation: stacks, uncollected bets and the pot."""
    return sum(p.stack for p in state.players) + sum(p.bet for p in state.players) + state.pot


def rig_hand(state: GameState, hole_cards, board: str = "") -> None:
    """
    Give players known hole cards and stack the deck so that the next
    community cards dealt are `board`, in order.
    """
    for player, cards in zip(state.players, hole_cards):
        if cards:
            player.hole_cards = parse_cards(cards)

    upcoming = parse_cards(board)
    known = set(upcoming) | {c for p in state.players for c in p.hole_cards} | set(state.community_cards)
    filler = [c for c in state.deck if c not in known]
    # Cards are popped from the end of the deck
    state.deck = filler + list(reversed(upcoming))


@pytest.fixture
def chips():
    """Chip-conservation helper."""
    return chip_total


@pytest.fixture
def rig():
    """Deck-rigging helper."""
    return rig_hand


@pytest.fixture
def seven_player_config():
    """Default 7-seat table without equity hints."""
    return TableConfig(equity_hints=False)


@pytest.fixture
def heads_up_config():
    """Heads-up table without equity hints."""
    return TableConfig(player_count=2, equity_hints=False)


@pytest.fixture
def two_player_game(heads_up_config):
    """Create a 2-player game (heads-up)."""
    return TexasHoldemGame(heads_up_config)


@pytest.fixture
def three_player_game():
    """Create a 3-player game."""
    return TexasHoldemGame(TableConfig(player_count=3, equity_hints=False))


@pytest.fixture
def seven_player_game(seven_player_config):
    """Create a 7-player game."""
    return TexasHoldemGame(seven_player_config)


@pytest.fixture
def sample_hand():
    """Create a sample 5-card hand (pair of aces)."""
    return [
        Card(Rank.ACE, Suit.SPADES),
        Card(Rank.ACE, Suit.HEARTS),
        Card(Rank.KING, Suit.DIAMONDS),
        Card(Rank.QUEEN, Suit.CLUBS),
        Card(Rank.JACK, Suit.SPADES),
    ]


@pytest.fixture
def royal_flush():
    """Create a royal flush hand."""
    return [
        Card(Rank.ACE, Suit.SPADES),
        Card(Rank.KING, Suit.SPADES),
        Card(Rank.QUEEN, Suit.SPADES),
        Card(Rank.JACK, Suit.SPADES),
        Card(Rank.TEN, Suit.SPADES),
    ]


@pytest.fixture
def straight_flush():
    """Create a straight flush (9-high)."""
    return [
        Card(Rank.NINE, Suit.HEARTS),
        Card(Rank.EIGHT, Suit.HEARTS),
        Card(Rank.SEVEN, Suit.HEARTS),
        Card(Rank.SIX, Suit.HEARTS),
        Card(Rank.FIVE, Suit.HEARTS),
    ]


@pytest.fixture
def wheel_straight():
    """Create a wheel straight (A-2-3-4-5)."""
    return [
        Card(Rank.ACE, Suit.SPADES),
        Card(Rank.TWO, Suit.HEARTS),
        Card(Rank.THREE, Suit.DIAMONDS),
        Card(Rank.FOUR, Suit.CLUBS),
        Card(Rank.FIVE, Suit.SPADES),
    ]
