"""
Monte Carlo equity estimation.

Estimates how often a hand wins or ties against a number of random
opponent hands, completing the board at random on every trial.
"""

from __future__ import annotations
import logging
from typing import Sequence

from holdem.core.card import Card, build_deck, shuffle_deck
from holdem.core.hand import best_hand_value
from holdem.core.rules import HOLE_CARDS, TOTAL_COMMUNITY_CARDS


logger = logging.getLogger(__name__)

# Fixed trial count: 1000 trials x (opponents + 1) x 21 subsets per street
SIMULATION_TRIALS = 1000


def estimate_win_probability(
    hole_cards: Sequence[Card],
    community_cards: Sequence[Card],
    num_opponents: int,
) -> float:
    """
    Estimate the win/tie probability of a hand.

    Each trial shuffles the unseen cards, deals two cards to every
    opponent, completes the board to five cards and compares the best
    hands. A trial counts as a win unless some opponent has a strictly
    better hand.

    Args:
        hole_cards: The player's two hole cards
        community_cards: 0-5 known community cards
        num_opponents: Number of opponents still in the hand

    Returns:
        Percentage in [0, 100]

    Raises:
        ValueError: If the unseen cards cannot cover every opponent and the board
    """
    if num_opponents <= 0:
        return 100.0

    known = set(hole_cards) | set(community_cards)
    unseen = [card for card in build_deck() if card not in known]
    board_needed = TOTAL_COMMUNITY_CARDS - len(community_cards)

    if num_opponents * HOLE_CARDS + board_needed > len(unseen):
        raise ValueError(
            f"Not enough cards for {num_opponents} opponents: {len(unseen)} remain"
        )

    wins = 0
    for _ in range(SIMULATION_TRIALS):
        deck = shuffle_deck(unseen)

        opponent_hands = [[deck.pop(), deck.pop()] for _ in range(num_opponents)]
        board = list(community_cards) + [deck.pop() for _ in range(board_needed)]

        player_value = best_hand_value(list(hole_cards) + board)
        if all(best_hand_value(hand + board) <= player_value for hand in opponent_hands):
            wins += 1

    probability = wins / SIMULATION_TRIALS * 100
    logger.debug(
        f"Equity for {' '.join(str(c) for c in hole_cards)} vs {num_opponents}: {probability:.1f}%"
    )
    return probability
