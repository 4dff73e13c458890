"""
Heuristic decision engine for AI seats.

Pre-flop play scores the two hole cards on a 0-100 scale and compares the
score against position- and action-dependent thresholds. Post-flop play
evaluates the made hand, adds credit for flush and straight draws, and
weighs a rough equity against the pot odds.
"""

import logging
import random
from collections import Counter
from dataclasses import dataclass
from typing import List, Optional, Sequence

from holdem.agents.base import BaseAgent
from holdem.core.card import Card, Rank
from holdem.core.game import GameState, PlayerAction
from holdem.core.hand import HandRank, evaluate_hand
from holdem.core.player import Player
from holdem.core.rules import ActionType, GamePhase


logger = logging.getLogger(__name__)

LOW_STRAIGHT_RANKS = (Rank.ACE, Rank.TWO, Rank.THREE, Rank.FOUR, Rank.FIVE)


@dataclass(frozen=True)
class DrawInfo:
    """Drawing potential of a post-flop hand."""
    flush_draw: bool = False
    straight_draw: bool = False

    @property
    def any(self) -> bool:
        return self.flush_draw or self.straight_draw


def preflop_hand_strength(cards: Sequence[Card]) -> float:
    """
    Rate two hole cards on a scale of roughly 0-100.

    AA scores 79.5, AKs 49.5 and 72o 10.5.
    """
    card1, card2 = cards
    high = max(card1.rank, card2.rank)
    low = min(card1.rank, card2.rank)

    strength = float(high)

    if high == low:
        strength = high * 2 + 20

    if card1.suit == card2.suit:
        strength += 8

    # Connectors; a gap of 12 is A-2
    gap = high - low
    if gap in (1, 12):
        strength += 6
    elif gap == 2:
        strength += 4
    elif gap == 3:
        strength += 2

    if high == Rank.ACE:
        strength += 5

    return min(100.0, strength * 1.5)


def postflop_potential(hole_cards: Sequence[Card], community_cards: Sequence[Card]) -> DrawInfo:
    """Detect four-flush and four-to-a-straight draws."""
    cards = list(hole_cards) + list(community_cards)

    suit_counts = Counter(c.suit for c in cards)
    flush_draw = any(count == 4 for count in suit_counts.values())

    values = sorted({int(c.rank) for c in cards})
    straight_draw = False
    # Four distinct ranks inside a five-rank span: open-ended or gutshot
    for i in range(len(values) - 3):
        if values[i + 3] - values[i] <= 4:
            straight_draw = True
            break

    if not straight_draw:
        present = sum(1 for r in LOW_STRAIGHT_RANKS if r in values)
        straight_draw = present >= 4

    return DrawInfo(flush_draw=flush_draw, straight_draw=straight_draw)


def position_ratio(state: GameState, player: Player) -> float:
    """
    How late the player acts, from just above 0 (first after the button) to 1 (button).

    Counted from the dealer among seats still in the hand, rather than as a
    fixed seat index over the active-player count, which drifts above 1
    once players fold and ignores where the button is.
    """
    if state.dealer_index is None:
        return (player.position + 1) / state.num_players

    order: List[int] = []
    for offset in range(1, state.num_players + 1):
        seat = (state.dealer_index + offset) % state.num_players
        if not state.players[seat].is_folded:
            order.append(seat)

    if player.id not in order:
        return 1.0
    return (order.index(player.id) + 1) / len(order)


def choose_action(state: GameState, player: Player, rng=random) -> PlayerAction:
    """
    Pick an action for an AI seat.

    Pure function of the state; randomness comes only from `rng`.
    """
    if state.phase == GamePhase.PRE_FLOP:
        action = _preflop_action(state, player, rng)
    else:
        action = _postflop_action(state, player, rng)

    logger.debug(f"{player.name} chooses {action.type.value} {action.amount or ''}".rstrip())
    return action


def _aggressive_action(state: GameState, player: Player, target_total: int) -> PlayerAction:
    """BET when nobody has wagered this round, RAISE otherwise; target capped at the stack."""
    target_total = min(player.stack + player.total_bet, int(target_total))
    kind = ActionType.BET if state.highest_bet == 0 else ActionType.RAISE
    return PlayerAction(kind, player.id, target_total)


def _preflop_action(state: GameState, player: Player, rng) -> PlayerAction:
    strength = preflop_hand_strength(player.hole_cards)
    highest = state.highest_bet
    to_call = highest - player.total_bet

    # Looser in late position
    late = position_ratio(state, player)
    fold_threshold = 30 + (1 - late) * 20
    call_threshold = 50 + (1 - late) * 20

    # Tighter once players have raised
    raises = sum(1 for p in state.players if p.total_bet > state.big_blind)
    fold_threshold += 15 * raises
    call_threshold += 15 * raises

    if to_call <= 0:
        if strength > call_threshold + 10:
            target = max(state.big_blind * 3, highest + state.min_raise)
            return _aggressive_action(state, player, target)
        return PlayerAction(ActionType.CHECK, player.id)

    # Fold weak hands, but call 5% of the time
    if strength < fold_threshold and rng.random() < 0.95:
        return PlayerAction(ActionType.FOLD, player.id)

    if strength > call_threshold + 15 and player.stack > to_call * 3:
        raise_size = max(state.min_raise, to_call) * 2
        return _aggressive_action(state, player, highest + raise_size)

    return PlayerAction(ActionType.CALL, player.id)


def _postflop_action(state: GameState, player: Player, rng) -> PlayerAction:
    hand = evaluate_hand(player.hole_cards, state.community_cards)
    draws = postflop_potential(player.hole_cards, state.community_cards)

    effective_strength = hand.rank * 10
    if draws.flush_draw:
        effective_strength += 15
    if draws.straight_draw:
        effective_strength += 10
    # Pair of jacks or better
    if hand.rank == HandRank.ONE_PAIR and hand.cards[0].rank > Rank.TEN:
        effective_strength += 5

    highest = state.highest_bet
    to_call = highest - player.total_bet
    pot = state.total_pot

    if to_call <= 0:
        if hand.rank >= HandRank.TWO_PAIR:
            bet_chance = 0.95
        elif hand.rank >= HandRank.ONE_PAIR:
            bet_chance = 0.6
        elif draws.any:
            bet_chance = 0.4  # semi-bluff
        else:
            bet_chance = 0.1  # pure bluff

        if rng.random() < bet_chance:
            # 40% to ~100% of the pot
            bet_ratio = 0.4 + effective_strength / 150
            bet_amount = min(player.stack, round(pot * bet_ratio))
            bet_amount = max(bet_amount, min(player.stack, state.big_blind))
            if bet_amount > 0:
                return _aggressive_action(state, player, player.total_bet + bet_amount)

        return PlayerAction(ActionType.CHECK, player.id)

    pot_odds = to_call / (pot + to_call)

    equity = 0.0
    if draws.flush_draw:
        equity += 0.18
    if draws.straight_draw:
        equity += 0.16
    if hand.rank >= HandRank.TWO_PAIR:
        equity = max(equity, 0.85)
    elif hand.rank >= HandRank.ONE_PAIR:
        equity = max(equity, 0.6)

    # Fold without the odds, but call 10% of the time
    if equity < pot_odds and rng.random() < 0.9:
        return PlayerAction(ActionType.FOLD, player.id)

    if hand.rank >= HandRank.THREE_OF_A_KIND or (
        hand.rank >= HandRank.TWO_PAIR and rng.random() > 0.3
    ):
        raise_size = max(state.min_raise, pot, to_call) * 1.5
        return _aggressive_action(state, player, highest + raise_size)

    return PlayerAction(ActionType.CALL, player.id)


class HeuristicAgent(BaseAgent):
    """Rule-based agent backed by choose_action."""

    def __init__(self, player_id: int, name: Optional[str] = None, rng=None):
        super().__init__(player_id, name or f"Heuristic-{player_id}")
        self.rng = rng or random

    def act(self, state: GameState) -> PlayerAction:
        return choose_action(state, state.players[self.player_id], self.rng)
