"""
Tests for Card and deck helpers.
"""

import random

import pytest
from holdem.core.card import (
    Card, Rank, Suit, build_deck, format_cards, parse_cards, shuffle_deck,
)


class TestCard:
    """Tests for Card class."""

    def test_card_creation(self):
        """Test creating a card."""
        card = Card(Rank.ACE, Suit.SPADES)
        assert card.rank == Rank.ACE
        assert card.suit == Suit.SPADES

    def test_card_from_string(self):
        """Test creating cards from string notation."""
        card1 = Card.from_string("As")
        assert card1.rank == Rank.ACE
        assert card1.suit == Suit.SPADES

        # With symbol
        card2 = Card.from_string("K♥")
        assert card2.rank == Rank.KING
        assert card2.suit == Suit.HEARTS

        # Ten, both spellings
        assert Card.from_string("Td") == Card(Rank.TEN, Suit.DIAMONDS)
        assert Card.from_string("10d") == Card(Rank.TEN, Suit.DIAMONDS)

    def test_invalid_card_string(self):
        """Test that malformed strings raise ValueError."""
        with pytest.raises(ValueError):
            Card.from_string("X")
        with pytest.raises(ValueError):
            Card.from_string("1s")
        with pytest.raises(ValueError):
            Card.from_string("Ax")

    def test_card_equality(self):
        """Equal rank and suit means equal cards."""
        assert Card(Rank.ACE, Suit.SPADES) == Card.from_string("As")
        assert Card(Rank.ACE, Suit.SPADES) != Card(Rank.ACE, Suit.HEARTS)
        assert len({Card.from_string("As"), Card.from_string("A♠")}) == 1

    def test_card_comparison(self):
        """Cards sort by rank."""
        assert Card.from_string("2c") < Card.from_string("As")
        assert sorted(parse_cards("Kd 2c As"))[0].rank == Rank.TWO

    def test_card_display(self):
        """Test string forms."""
        card = Card(Rank.TEN, Suit.HEARTS)
        assert str(card) == "T♥"
        assert repr(card) == "Card(Th)"
        assert card.short_str == "Th"
        assert card.color == "red"
        assert Card.from_string("Qc").color == "black"

    def test_to_dict(self):
        assert Card.from_string("Ad").to_dict() == {
            "rank": "A", "suit": "♦", "text": "A♦", "color": "red",
        }


class TestDeck:
    """Tests for deck construction and shuffling."""

    def test_deck_has_52_unique_cards(self):
        deck = build_deck()
        assert len(deck) == 52
        assert len(set(deck)) == 52

    def test_deck_order(self):
        """Suit-major, ranks ascending."""
        deck = build_deck()
        assert deck[0] == Card(Rank.TWO, Suit.SPADES)
        assert deck[12] == Card(Rank.ACE, Suit.SPADES)
        assert deck[13] == Card(Rank.TWO, Suit.HEARTS)
        assert deck[-1] == Card(Rank.ACE, Suit.CLUBS)

    def test_shuffle_is_permutation(self):
        deck = build_deck()
        shuffled = shuffle_deck(deck, random.Random(7))
        assert sorted(shuffled, key=repr) == sorted(deck, key=repr)

    def test_shuffle_leaves_input_untouched(self):
        deck = build_deck()
        shuffle_deck(deck)
        assert deck == build_deck()

    def test_shuffle_is_reproducible_with_seed(self):
        deck = build_deck()
        assert shuffle_deck(deck, random.Random(42)) == shuffle_deck(deck, random.Random(42))


class TestParseCards:
    """Tests for parse_cards helper."""

    def test_space_separated(self):
        cards = parse_cards("As Kh Td")
        assert cards == [
            Card(Rank.ACE, Suit.SPADES),
            Card(Rank.KING, Suit.HEARTS),
            Card(Rank.TEN, Suit.DIAMONDS),
        ]

    def test_no_separator(self):
        assert parse_cards("AsKh") == parse_cards("As Kh")

    def test_symbols(self):
        assert parse_cards("A♠ K♥") == parse_cards("As Kh")

    def test_empty(self):
        assert parse_cards("") == []

    def test_format_round_trip(self):
        assert format_cards(parse_cards("As Kh")) == "A♠ K♥"
