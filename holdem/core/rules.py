"""
Texas Hold'em Rules and Constants.

This module defines the phases, action kinds, table defaults and the seat
arithmetic shared by the betting engine and the agents.

1. Heads-up (2 players): Dealer posts small blind, non-dealer posts big blind.
   Preflop: Dealer acts first. Postflop: Non-dealer acts first.

2. Bets and raises name a target round total, not a delta. Targets are
   clamped to what the player can afford; there is no rejection path.

3. A single shared pot is tracked. All-in players stay eligible for the
   whole pot.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Sequence, Tuple


class GamePhase(Enum):
    """Phases of a Texas Hold'em hand."""
    PRE_DEAL = "PRE_DEAL"    # Before the first hand
    PRE_FLOP = "PRE_FLOP"    # After hole cards dealt, before flop
    FLOP = "FLOP"            # After 3 community cards
    TURN = "TURN"            # After 4th community card
    RIVER = "RIVER"          # After 5th community card
    SHOWDOWN = "SHOWDOWN"    # Pot awarded, hand complete


# Phases where a betting round is open
BETTING_PHASES = (GamePhase.PRE_FLOP, GamePhase.FLOP, GamePhase.TURN, GamePhase.RIVER)

NEXT_STREET = {
    GamePhase.PRE_FLOP: GamePhase.FLOP,
    GamePhase.FLOP: GamePhase.TURN,
    GamePhase.TURN: GamePhase.RIVER,
}


class ActionType(Enum):
    """Possible player actions."""
    FOLD = "FOLD"
    CHECK = "CHECK"
    CALL = "CALL"
    BET = "BET"
    RAISE = "RAISE"


# Default game settings
PLAYER_COUNT = 7
STARTING_STACK = 1000
SMALL_BLIND = 10
BIG_BLIND = 20
HUMAN_SEAT = 0
AI_THINK_SECONDS = 1.0
MIN_PLAYERS = 2
MAX_PLAYERS = 10

# Cards per phase
HOLE_CARDS = 2
FLOP_CARDS = 3
TURN_CARDS = 1
RIVER_CARDS = 1
TOTAL_COMMUNITY_CARDS = 5

STREET_CARDS = {
    GamePhase.FLOP: FLOP_CARDS,
    GamePhase.TURN: TURN_CARDS,
    GamePhase.RIVER: RIVER_CARDS,
}


@dataclass(frozen=True)
class TableConfig:
    """
    Table settings, fixed at process start.

    Attributes:
        player_count: Number of seats (2-10)
        starting_stack: Chips each seat starts with
        small_blind: Small blind amount
        big_blind: Big blind amount
        human_seat: Seat driven by the UI, or None for an all-AI table
        ai_delay: Seconds an AI seat "thinks" before acting
        equity_hints: Log the human seat's win probability on each street
    """
    player_count: int = PLAYER_COUNT
    starting_stack: int = STARTING_STACK
    small_blind: int = SMALL_BLIND
    big_blind: int = BIG_BLIND
    human_seat: Optional[int] = HUMAN_SEAT
    ai_delay: float = AI_THINK_SECONDS
    equity_hints: bool = True

    def __post_init__(self):
        if not MIN_PLAYERS <= self.player_count <= MAX_PLAYERS:
            raise ValueError(f"Number of players must be {MIN_PLAYERS}-{MAX_PLAYERS}")
        if self.small_blind <= 0 or self.big_blind < self.small_blind:
            raise ValueError("Blinds must be positive and big blind >= small blind")
        if self.starting_stack <= 0:
            raise ValueError("Starting stack must be positive")
        if self.human_seat is not None and not 0 <= self.human_seat < self.player_count:
            raise ValueError(f"Human seat {self.human_seat} is not at the table")
        if self.ai_delay < 0:
            raise ValueError("AI delay cannot be negative")


def next_seat(
    num_seats: int,
    start: int,
    eligible: Callable[[int], bool],
) -> Optional[int]:
    """
    First eligible seat strictly after `start`, wrapping around the table.

    Returns:
        Seat index, or None if no seat qualifies
    """
    for offset in range(1, num_seats + 1):
        seat = (start + offset) % num_seats
        if eligible(seat):
            return seat
    return None


def get_blind_positions(funded_seats: Sequence[int], dealer_seat: int) -> Tuple[int, int]:
    """
    Calculate small blind and big blind seats.

    Heads-up, the dealer posts the small blind. Otherwise the small blind is
    the next funded seat after the dealer and the big blind the one after it.

    Args:
        funded_seats: Seats taking part in the hand, in seat order
        dealer_seat: Seat holding the dealer button

    Returns:
        Tuple of (small_blind_seat, big_blind_seat)
    """
    if len(funded_seats) < 2:
        raise ValueError("Need at least 2 players")

    seats: List[int] = list(funded_seats)
    dealer_index = seats.index(dealer_seat)

    if len(seats) == 2:
        sb_index = dealer_index
    else:
        sb_index = (dealer_index + 1) % len(seats)
    bb_index = (sb_index + 1) % len(seats)

    return seats[sb_index], seats[bb_index]
