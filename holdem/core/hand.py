"""
Hand Evaluation for Texas Hold'em.

This module evaluates 5-7 cards and returns the best 5-card hand.
Every hand gets a numeric value where higher is better and equal values
are exact ties, so any two hands can be compared regardless of category.

Hand Rankings (best to worst):
1. Royal Flush: A♠ K♠ Q♠ J♠ T♠
2. Straight Flush: 5 consecutive cards of same suit
3. Four of a Kind: 4 cards of same rank
4. Full House: 3 of a kind + pair
5. Flush: 5 cards of same suit
6. Straight: 5 consecutive cards
7. Three of a Kind: 3 cards of same rank
8. Two Pair: 2 different pairs
9. One Pair: 2 cards of same rank
10. High Card: No made hand

Note: Ace can be low in A-2-3-4-5 straight (wheel), which is 5-high.
"""

from __future__ import annotations
from collections import Counter
from dataclasses import dataclass
from enum import IntEnum
from itertools import combinations
from typing import List, Sequence, Tuple

from holdem.core.card import Card, Rank, RANK_CHARS


class HandRank(IntEnum):
    """Hand categories from worst (lowest value) to best (highest value)."""
    HIGH_CARD = 0
    ONE_PAIR = 1
    TWO_PAIR = 2
    THREE_OF_A_KIND = 3
    STRAIGHT = 4
    FLUSH = 5
    FULL_HOUSE = 6
    FOUR_OF_A_KIND = 7
    STRAIGHT_FLUSH = 8
    ROYAL_FLUSH = 9


# Hand rank names for display
HAND_RANK_NAMES = {
    HandRank.ROYAL_FLUSH: "Royal Flush",
    HandRank.STRAIGHT_FLUSH: "Straight Flush",
    HandRank.FOUR_OF_A_KIND: "Four of a Kind",
    HandRank.FULL_HOUSE: "Full House",
    HandRank.FLUSH: "Flush",
    HandRank.STRAIGHT: "Straight",
    HandRank.THREE_OF_A_KIND: "Three of a Kind",
    HandRank.TWO_PAIR: "Two Pair",
    HandRank.ONE_PAIR: "One Pair",
    HandRank.HIGH_CARD: "High Card",
}

# value = category * CATEGORY_BASE + sum(tiebreak[i] * TIEBREAK_BASE ** (4 - i))
# Ranks are at most 14, so each tiebreak slot fits in two decimal digits and
# the five slots together stay below CATEGORY_BASE.
CATEGORY_BASE = 10 ** 10
TIEBREAK_BASE = 100

WHEEL_RANKS = {Rank.ACE, Rank.TWO, Rank.THREE, Rank.FOUR, Rank.FIVE}


@dataclass(frozen=True)
class HandResult:
    """
    The best five-card hand found for a player.

    Attributes:
        rank: Hand category
        description: Human-readable name, e.g. "Full House, As over Ks"
        cards: The five contributing cards, grouped cards first
        value: Total-order score; higher wins, equal means split
    """
    rank: HandRank
    description: str
    cards: Tuple[Card, ...]
    value: int

    @property
    def name(self) -> str:
        return HAND_RANK_NAMES[self.rank]

    def to_dict(self) -> dict:
        return {
            "rank": self.rank.name,
            "description": self.description,
            "cards": [card.to_dict() for card in self.cards],
            "value": self.value,
        }


def evaluate_hand(hole_cards: Sequence[Card], community_cards: Sequence[Card] = ()) -> HandResult:
    """
    Evaluate the best 5-card hand from hole and community cards.

    Every 5-card subset is scored (21 subsets for 7 cards) and the one with
    the highest value wins.

    Raises:
        ValueError: If the combined card count is not 5-7
    """
    cards = list(hole_cards) + list(community_cards)
    if len(cards) < 5 or len(cards) > 7:
        raise ValueError(f"Need 5-7 cards, got {len(cards)}")

    if len(cards) == 5:
        return rank_five_card_hand(cards)

    best_combo = max(combinations(cards, 5), key=hand_value)
    return rank_five_card_hand(best_combo)


def best_hand_value(cards: Sequence[Card]) -> int:
    """Value of the best 5-card subset of 5-7 cards, without building a HandResult."""
    if len(cards) < 5 or len(cards) > 7:
        raise ValueError(f"Need 5-7 cards, got {len(cards)}")
    return max(hand_value(combo) for combo in combinations(cards, 5))


def hand_value(cards: Sequence[Card]) -> int:
    """Numeric value of exactly five cards."""
    hand_type, tiebreak = _classify(cards)
    return _encode(hand_type, tiebreak)


def rank_five_card_hand(cards: Sequence[Card]) -> HandResult:
    """Classify exactly five cards into a HandResult."""
    if len(cards) != 5:
        raise ValueError(f"Need exactly 5 cards, got {len(cards)}")

    hand_type, tiebreak = _classify(cards)
    return HandResult(
        rank=hand_type,
        description=_describe(hand_type, tiebreak),
        cards=tuple(_order_cards(cards, hand_type, tiebreak)),
        value=_encode(hand_type, tiebreak),
    )


def compare_hands(hand1: HandResult, hand2: HandResult) -> int:
    """
    Compare two evaluated hands.

    Returns:
        1 if hand1 wins, -1 if hand2 wins, 0 if tie
    """
    if hand1.value > hand2.value:
        return 1
    if hand1.value < hand2.value:
        return -1
    return 0


def _classify(cards: Sequence[Card]) -> Tuple[HandRank, List[int]]:
    """Return the hand category and its tiebreak ranks, most significant first."""
    ranks = sorted((int(c.rank) for c in cards), reverse=True)
    is_flush = len({c.suit for c in cards}) == 1
    straight_high = _straight_high(ranks)

    rank_counts = Counter(ranks)
    # Groups ordered by size, then rank: e.g. full house -> [(K, 3), (4, 2)]
    groups = sorted(rank_counts.items(), key=lambda item: (item[1], item[0]), reverse=True)
    counts = [count for _, count in groups]
    grouped_ranks = [rank for rank, _ in groups]

    if straight_high and is_flush:
        if straight_high == Rank.ACE:
            return HandRank.ROYAL_FLUSH, [straight_high]
        return HandRank.STRAIGHT_FLUSH, [straight_high]

    if counts[0] == 4:
        return HandRank.FOUR_OF_A_KIND, grouped_ranks

    if counts[:2] == [3, 2]:
        return HandRank.FULL_HOUSE, grouped_ranks

    if is_flush:
        return HandRank.FLUSH, ranks

    if straight_high:
        return HandRank.STRAIGHT, [straight_high]

    if counts[0] == 3:
        return HandRank.THREE_OF_A_KIND, grouped_ranks

    if counts[:2] == [2, 2]:
        return HandRank.TWO_PAIR, grouped_ranks

    if counts[0] == 2:
        return HandRank.ONE_PAIR, grouped_ranks

    return HandRank.HIGH_CARD, ranks


def _straight_high(ranks: List[int]) -> int:
    """
    High card of a 5-card straight, or 0 if the ranks are not a straight.

    The wheel (A-2-3-4-5) is 5-high.
    """
    unique = set(ranks)
    if len(unique) != 5:
        return 0
    if max(unique) - min(unique) == 4:
        return max(unique)
    if unique == WHEEL_RANKS:
        return Rank.FIVE
    return 0


def _encode(hand_type: HandRank, tiebreak: List[int]) -> int:
    value = int(hand_type) * CATEGORY_BASE
    for i, rank in enumerate(tiebreak):
        value += int(rank) * TIEBREAK_BASE ** (4 - i)
    return value


def _order_cards(cards: Sequence[Card], hand_type: HandRank, tiebreak: List[int]) -> List[Card]:
    """Sort cards by group size then rank; a wheel lists the ace last."""
    if hand_type in (HandRank.STRAIGHT, HandRank.STRAIGHT_FLUSH) and tiebreak[0] == Rank.FIVE:
        return sorted(cards, key=lambda c: 1 if c.rank == Rank.ACE else int(c.rank), reverse=True)

    rank_counts = Counter(c.rank for c in cards)
    return sorted(cards, key=lambda c: (rank_counts[c.rank], c.rank), reverse=True)


def _describe(hand_type: HandRank, tiebreak: List[int]) -> str:
    """Human-readable description, e.g. 'Straight Flush, 5-high'."""
    chars = [RANK_CHARS[Rank(r)] for r in tiebreak]

    if hand_type == HandRank.ROYAL_FLUSH:
        return "Royal Flush"
    elif hand_type == HandRank.STRAIGHT_FLUSH:
        return f"Straight Flush, {chars[0]}-high"
    elif hand_type == HandRank.FOUR_OF_A_KIND:
        return f"Four of a Kind, {chars[0]}s"
    elif hand_type == HandRank.FULL_HOUSE:
        return f"Full House, {chars[0]}s over {chars[1]}s"
    elif hand_type == HandRank.FLUSH:
        return f"Flush, {chars[0]}-high"
    elif hand_type == HandRank.STRAIGHT:
        return f"Straight, {chars[0]}-high"
    elif hand_type == HandRank.THREE_OF_A_KIND:
        return f"Three of a Kind, {chars[0]}s"
    elif hand_type == HandRank.TWO_PAIR:
        return f"Two Pair, {chars[0]}s and {chars[1]}s"
    elif hand_type == HandRank.ONE_PAIR:
        return f"One Pair of {chars[0]}s"
    else:
        return f"High Card {chars[0]}"
