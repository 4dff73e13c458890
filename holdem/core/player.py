"""
Player (seat) model for Texas Hold'em.

Manages per-seat state including:
- Stack (chips not yet wagered)
- Hole cards
- Chips committed in the current betting round
- Folded / all-in / has-acted flags
"""

from __future__ import annotations
from typing import List, Optional, Dict, Any
from dataclasses import dataclass, field

from holdem.core.card import Card
from holdem.core.hand import HandResult


@dataclass
class Player:
    """
    A seat at the Texas Hold'em table.

    Attributes:
        id: Stable seat index (0..N-1)
        name: Display name
        stack: Chips not yet wagered
        hole_cards: The player's private cards (0 or 2)
        bet: Chips committed this round that have not been swept into the pot
        total_bet: Round total used for call/raise comparisons
        has_acted: Whether the player has acted since the last full raise
        is_folded: Folded (or unfunded) for this hand
        is_all_in: Stack exhausted; eligible to win but never acts again
        is_ai: Seat is driven by the decision engine
        position: Fixed seat position
        hand_result: Best hand, set once evaluated at showdown
    """
    id: int
    name: str
    stack: int
    is_ai: bool = True
    position: int = 0
    hole_cards: List[Card] = field(default_factory=list)
    bet: int = 0
    total_bet: int = 0
    has_acted: bool = False
    is_folded: bool = False
    is_all_in: bool = False
    hand_result: Optional[HandResult] = None

    def reset_for_new_hand(self) -> None:
        """Reset player state for a new hand; unfunded seats sit the hand out."""
        self.hole_cards = []
        self.bet = 0
        self.total_bet = 0
        self.has_acted = False
        self.is_all_in = False
        self.hand_result = None
        self.is_folded = self.stack <= 0

    def reset_for_new_round(self) -> None:
        """Reset round-scoped state for a new street."""
        self.total_bet = 0
        self.has_acted = False

    def commit(self, amount: int) -> int:
        """
        Move chips from the stack into the current round.

        Args:
            amount: Chips requested

        Returns:
            Chips actually committed (capped at the stack)
        """
        actual = max(0, min(amount, self.stack))

        self.stack -= actual
        self.bet += actual
        self.total_bet += actual

        if self.stack == 0:
            self.is_all_in = True

        return actual

    def post_blind(self, amount: int) -> int:
        """
        Post a forced blind straight into the pot.

        The blind counts toward the round total but is not held in `bet`,
        since the caller adds it to the pot immediately.

        Returns:
            Chips actually posted (capped at the stack)
        """
        actual = max(0, min(amount, self.stack))

        self.stack -= actual
        self.total_bet += actual

        if self.stack == 0:
            self.is_all_in = True

        return actual

    def sweep_bet(self) -> int:
        """Hand this round's uncollected chips over to the pot."""
        amount = self.bet
        self.bet = 0
        return amount

    @property
    def is_in_hand(self) -> bool:
        """Still contesting the pot (not folded)."""
        return not self.is_folded

    @property
    def can_act(self) -> bool:
        """Check if player can take a voluntary action."""
        return not self.is_folded and not self.is_all_in and self.stack > 0

    def to_dict(self, hide_cards: bool = True) -> Dict[str, Any]:
        """
        Convert to dictionary for JSON serialization.

        Args:
            hide_cards: If True, don't include hole cards
        """
        result: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "position": self.position,
            "stack": self.stack,
            "bet": self.bet,
            "total_bet": self.total_bet,
            "has_acted": self.has_acted,
            "is_folded": self.is_folded,
            "is_all_in": self.is_all_in,
            "is_ai": self.is_ai,
            "cards": None,
            "hand_result": self.hand_result.to_dict() if self.hand_result else None,
        }

        if not hide_cards and self.hole_cards:
            result["cards"] = [card.to_dict() for card in self.hole_cards]

        return result

    def __repr__(self) -> str:
        return (
            f"Player({self.id}, {self.name}, stack={self.stack}, "
            f"round={self.total_bet}, folded={self.is_folded}, all_in={self.is_all_in})"
        )

    def __str__(self) -> str:
        cards_str = " ".join(str(c) for c in self.hole_cards) if self.hole_cards else "??"
        return f"{self.name} [{cards_str}] ${self.stack}"
