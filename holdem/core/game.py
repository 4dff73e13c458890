"""
Texas Hold'em Game Engine - State Machine Implementation.

This module implements the core betting logic for No-Limit Texas Hold'em.
It handles:
- Hand setup: dealer button, shuffling, hole cards, blinds
- Player actions (fold, check, call, bet, raise)
- Round completion and street advancement (flop, turn, river)
- Running out the board when no more betting is possible
- Showdown and payout from a single shared pot

Every transform takes a GameState and returns a new one; the input snapshot
is never modified. Illegal inputs are clamped or ignored rather than raised.
"""

from __future__ import annotations
import copy
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from holdem.core.card import Card, build_deck, format_cards, shuffle_deck
from holdem.core.equity import estimate_win_probability
from holdem.core.hand import evaluate_hand
from holdem.core.player import Player
from holdem.core.rules import (
    ActionType, BETTING_PHASES, GamePhase, NEXT_STREET, STREET_CARDS,
    HOLE_CARDS, TOTAL_COMMUNITY_CARDS, TableConfig,
    get_blind_positions, next_seat,
)


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlayerAction:
    """
    An action submitted for a seat.

    For BET and RAISE, `amount` is the target round total, not the increment.
    """
    type: ActionType
    player_id: int
    amount: int = 0


@dataclass
class GameState:
    """
    Complete snapshot of a table.

    Callers only ever hold the latest snapshot; the engine replaces it
    wholesale on every transition.
    """
    players: List[Player]
    deck: List[Card] = field(default_factory=list)
    community_cards: List[Card] = field(default_factory=list)
    pot: int = 0
    phase: GamePhase = GamePhase.PRE_DEAL
    current_player_index: int = 0
    dealer_index: Optional[int] = None
    small_blind: int = 0
    big_blind: int = 0
    min_raise: int = 0
    last_raiser: Optional[int] = None  # seat id
    round_initial_player_index: int = 0
    messages: List[str] = field(default_factory=list)
    hand_number: int = 0
    version: int = 0
    equity_hints: bool = True

    def copy(self) -> GameState:
        return copy.deepcopy(self)

    @property
    def num_players(self) -> int:
        return len(self.players)

    @property
    def highest_bet(self) -> int:
        """Highest round total at the table."""
        return max((p.total_bet for p in self.players), default=0)

    @property
    def total_pot(self) -> int:
        """Pot plus chips committed this round and not yet swept."""
        return self.pot + sum(p.bet for p in self.players)

    @property
    def current_player(self) -> Optional[Player]:
        """The player whose turn it is, if a betting round is open."""
        if not self.is_hand_running():
            return None
        return self.players[self.current_player_index]

    @property
    def human_player(self) -> Optional[Player]:
        return next((p for p in self.players if not p.is_ai), None)

    def is_hand_running(self) -> bool:
        return self.phase in BETTING_PHASES

    def get_player(self, player_id: int) -> Optional[Player]:
        if 0 <= player_id < len(self.players):
            return self.players[player_id]
        return None

    def in_hand_players(self) -> List[Player]:
        return [p for p in self.players if p.is_in_hand]

    def to_dict(self, for_player_id: Optional[int] = None) -> Dict[str, Any]:
        """
        Read-only snapshot for rendering.

        Hole cards are shown only to their owner, and to everyone for
        players who reached showdown.
        """
        players = []
        for p in self.players:
            reveal = p.id == for_player_id or (
                self.phase == GamePhase.SHOWDOWN and p.hand_result is not None
            )
            players.append(p.to_dict(hide_cards=not reveal))

        current = self.current_player
        return {
            "phase": self.phase.value,
            "hand_number": self.hand_number,
            "version": self.version,
            "pot": self.pot,
            "total_pot": self.total_pot,
            "highest_bet": self.highest_bet,
            "min_raise": self.min_raise,
            "small_blind": self.small_blind,
            "big_blind": self.big_blind,
            "board": [c.to_dict() for c in self.community_cards],
            "dealer_index": self.dealer_index,
            "current_player": current.id if current else None,
            "last_raiser": self.last_raiser,
            "round_initial_player_index": self.round_initial_player_index,
            "players": players,
            "messages": list(self.messages),
            "legal_actions": (
                legal_actions(self, for_player_id) if for_player_id is not None else []
            ),
        }


def create_initial_state(config: Optional[TableConfig] = None) -> GameState:
    """Fresh table waiting for its first hand."""
    config = config or TableConfig()

    players = [
        Player(
            id=i,
            name="You" if i == config.human_seat else f"Player {i + 1}",
            stack=config.starting_stack,
            is_ai=i != config.human_seat,
            position=i,
        )
        for i in range(config.player_count)
    ]

    return GameState(
        players=players,
        small_blind=config.small_blind,
        big_blind=config.big_blind,
        min_raise=config.big_blind,
        messages=["Welcome to Texas Hold'em! Start a new hand to begin."],
        equity_hints=config.equity_hints,
    )


def start_new_hand(state: GameState) -> GameState:
    """
    Deal a new hand.

    Moves the button, shuffles a fresh deck, deals hole cards to every
    funded seat and posts the blinds. Returns the input unchanged when fewer
    than two seats have chips or a hand is still being played.
    """
    if state.is_hand_running():
        logger.warning(f"Cannot start hand: hand #{state.hand_number} is still running")
        return state

    funded = [p.id for p in state.players if p.stack > 0]
    if len(funded) < 2:
        logger.warning("Cannot start hand: not enough players with chips")
        return state

    new = state.copy()
    new.hand_number += 1

    for player in new.players:
        player.reset_for_new_hand()

    _move_dealer_button(new, funded)

    new.deck = shuffle_deck(build_deck())
    new.community_cards = []
    new.pot = 0
    new.min_raise = new.big_blind
    new.last_raiser = None

    _deal_hole_cards(new)
    sb_amount, bb_amount, bb_seat = _post_blinds(new, funded)

    new.phase = GamePhase.PRE_FLOP
    new.messages = [f"New hand starting. Blinds are {sb_amount} and {bb_amount}."]
    logger.info(
        f"Starting hand #{new.hand_number}: dealer={new.dealer_index} "
        f"blinds={sb_amount}/{bb_amount}"
    )

    first = next_seat(new.num_players, bb_seat, lambda s: new.players[s].can_act)
    if first is None or _is_round_complete(new):
        # Blinds left at most one seat with anything to decide
        _advance_street(new)
    else:
        new.current_player_index = first
        new.round_initial_player_index = first

    new.version += 1
    return new


def apply_action(state: GameState, action: PlayerAction) -> GameState:
    """
    Apply one player action and advance the hand as far as it goes.

    Actions outside a betting round, or from a seat whose turn it is not,
    leave the state unchanged.
    """
    if not state.is_hand_running():
        logger.warning(f"Ignoring {action.type.value} from seat {action.player_id}: no hand in progress")
        return state

    if action.player_id != state.current_player_index:
        logger.warning(
            f"Ignoring {action.type.value} from seat {action.player_id}: "
            f"seat {state.current_player_index} is to act"
        )
        return state

    if not state.players[action.player_id].can_act:
        logger.warning(f"Ignoring {action.type.value} from seat {action.player_id}: cannot act")
        return state

    new = state.copy()
    player = new.players[action.player_id]
    _execute_action(new, player, action)
    player.has_acted = True

    if len(new.in_hand_players()) <= 1:
        _end_hand_early(new)
    elif _is_round_complete(new):
        _advance_street(new)
    else:
        _advance_to_next_player(new)

    new.version += 1
    return new


def fold(state: GameState, player_id: int) -> GameState:
    return apply_action(state, PlayerAction(ActionType.FOLD, player_id))


def check(state: GameState, player_id: int) -> GameState:
    return apply_action(state, PlayerAction(ActionType.CHECK, player_id))


def call(state: GameState, player_id: int) -> GameState:
    return apply_action(state, PlayerAction(ActionType.CALL, player_id))


def bet(state: GameState, player_id: int, target_total: int) -> GameState:
    return apply_action(state, PlayerAction(ActionType.BET, player_id, target_total))


def raise_to(state: GameState, player_id: int, target_total: int) -> GameState:
    return apply_action(state, PlayerAction(ActionType.RAISE, player_id, target_total))


def legal_actions(state: GameState, player_id: int) -> List[Dict[str, Any]]:
    """
    Legal actions for a seat, for UIs and baseline agents.

    Returns:
        List of action dicts with type and constraints; empty when the seat
        is not the one to act
    """
    player = state.get_player(player_id)
    if player is None or state.current_player is not player or not player.can_act:
        return []

    highest = state.highest_bet
    chips_to_call = max(0, highest - player.total_bet)

    # Fold is always available
    actions: List[Dict[str, Any]] = [{"type": ActionType.FOLD.value}]

    if chips_to_call == 0:
        actions.append({"type": ActionType.CHECK.value})
    else:
        actions.append({
            "type": ActionType.CALL.value,
            "amount": min(chips_to_call, player.stack),
        })

    # Bet/Raise if player has chips left after calling
    if player.stack > chips_to_call:
        max_total = player.stack + player.total_bet
        actions.append({
            "type": (ActionType.BET if highest == 0 else ActionType.RAISE).value,
            "min": min(highest + state.min_raise, max_total),
            "max": max_total,
        })

    return actions


def _execute_action(state: GameState, player: Player, action: PlayerAction) -> None:
    """Move chips and flags for the acting player."""
    highest = state.highest_bet

    if action.type == ActionType.FOLD:
        player.is_folded = True
        state.messages.append(f"{player.name} folds.")

    elif action.type == ActionType.CHECK:
        if player.total_bet < highest:
            logger.warning(f"{player.name} checked facing {highest - player.total_bet}; no chips moved")
        state.messages.append(f"{player.name} checks.")

    elif action.type == ActionType.CALL:
        posted = player.commit(highest - player.total_bet)
        state.messages.append(f"{player.name} calls {posted}.")

    elif action.type in (ActionType.BET, ActionType.RAISE):
        player.commit(action.amount - player.total_bet)

        if player.total_bet > highest:
            state.min_raise = player.total_bet - highest
            state.last_raiser = player.id
            _reset_actions_except(state, player)

        if player.is_all_in:
            state.messages.append(f"{player.name} goes all-in with {player.total_bet}.")
        else:
            verb = "bets" if action.type == ActionType.BET else "raises"
            state.messages.append(f"{player.name} {verb} to {player.total_bet}.")

    logger.debug(f"{player!r} {action.type.value} {action.amount}")


def _reset_actions_except(state: GameState, raiser: Player) -> None:
    """Everyone still able to act must respond to the raise."""
    for player in state.players:
        if player is not raiser and player.can_act:
            player.has_acted = False


def _is_round_complete(state: GameState) -> bool:
    """
    Check if the current betting round is complete.

    Every player still in the hand must be all-in, or have acted and
    matched the highest round total. A lone player who can still act and
    owes nothing has nobody left to bet against, so the round is over.
    """
    highest = state.highest_bet
    actors = [p for p in state.players if p.can_act]
    if len(actors) <= 1 and all(p.total_bet >= highest for p in actors):
        return True
    return all(
        p.is_folded or p.is_all_in or (p.has_acted and p.total_bet == highest)
        for p in state.players
    )


def _advance_to_next_player(state: GameState) -> None:
    nxt = next_seat(state.num_players, state.current_player_index,
                    lambda s: state.players[s].can_act)
    if nxt is None:
        raise RuntimeError(
            f"No player can act after seat {state.current_player_index} "
            f"but the round is not complete"
        )
    state.current_player_index = nxt


def _move_dealer_button(state: GameState, funded: List[int]) -> None:
    """Move the dealer button to the next player with chips."""
    if state.dealer_index is None:
        state.dealer_index = funded[0]
    else:
        state.dealer_index = next_seat(
            state.num_players, state.dealer_index, lambda s: state.players[s].stack > 0
        )


def _deal_hole_cards(state: GameState) -> None:
    """Deal 2 hole cards to each funded player."""
    for player in state.players:
        if not player.is_folded:
            player.hole_cards = [state.deck.pop() for _ in range(HOLE_CARDS)]


def _post_blinds(state: GameState, funded: List[int]):
    """
    Post small and big blinds straight into the pot.

    Returns:
        Tuple of (small blind posted, big blind posted, big blind seat)
    """
    sb_seat, bb_seat = get_blind_positions(funded, state.dealer_index)

    sb_amount = state.players[sb_seat].post_blind(state.small_blind)
    bb_amount = state.players[bb_seat].post_blind(state.big_blind)
    state.pot = sb_amount + bb_amount

    logger.debug(f"Blinds posted: SB={sb_amount} (seat {sb_seat}) BB={bb_amount} (seat {bb_seat})")
    return sb_amount, bb_amount, bb_seat


def _collect_bets_to_pot(state: GameState) -> None:
    for player in state.players:
        state.pot += player.sweep_bet()


def _advance_street(state: GameState) -> None:
    """End the current betting round and move to the next street or showdown."""
    _collect_bets_to_pot(state)

    if len(state.in_hand_players()) <= 1:
        _end_hand_early(state)
        return

    # Nobody left to bet against: run the board out
    if sum(1 for p in state.players if p.can_act) < 2:
        _deal_remaining_cards(state)
        _go_to_showdown(state)
        return

    for player in state.players:
        player.reset_for_new_round()
    state.min_raise = state.big_blind
    state.last_raiser = None

    if state.phase == GamePhase.RIVER:
        _go_to_showdown(state)
        return

    state.phase = NEXT_STREET[state.phase]
    dealt = [state.deck.pop() for _ in range(STREET_CARDS[state.phase])]
    state.community_cards.extend(dealt)

    street = state.phase.value.capitalize()
    state.messages.append(f"{street}: {format_cards(dealt)}")
    logger.info(f"{street}: {format_cards(state.community_cards)} (pot {state.pot})")

    _add_equity_hint(state)

    first = next_seat(state.num_players, state.dealer_index, lambda s: state.players[s].can_act)
    state.current_player_index = first
    state.round_initial_player_index = first


def _deal_remaining_cards(state: GameState) -> None:
    """Deal the rest of the board when no more betting can happen."""
    needed = TOTAL_COMMUNITY_CARDS - len(state.community_cards)
    if needed <= 0:
        return

    dealt = [state.deck.pop() for _ in range(min(needed, len(state.deck)))]
    state.community_cards.extend(dealt)
    state.phase = GamePhase.RIVER
    state.messages.append(f"Running it out: {format_cards(state.community_cards)}")
    logger.info(f"Running out the board: {format_cards(state.community_cards)}")


def _add_equity_hint(state: GameState) -> None:
    """Log the human seat's win/tie probability against the live AI seats."""
    if not state.equity_hints:
        return

    human = state.human_player
    if human is None or human.is_folded:
        return

    opponents = sum(1 for p in state.players if p.is_ai and p.is_in_hand)
    if opponents == 0:
        return

    probability = estimate_win_probability(human.hole_cards, state.community_cards, opponents)
    state.messages.append(f"Your win/tie probability: {probability:.1f}%")


def _go_to_showdown(state: GameState) -> None:
    """Evaluate every remaining hand and pay the best one(s)."""
    state.phase = GamePhase.SHOWDOWN
    contenders = state.in_hand_players()

    for player in contenders:
        player.hand_result = evaluate_hand(player.hole_cards, state.community_cards)

    best_value = max(p.hand_result.value for p in contenders)
    winners = [p for p in contenders if p.hand_result.value == best_value]

    shares = _split_pot(state, winners)
    for winner in winners:
        winner.stack += shares[winner.id]
        if len(winners) == 1:
            state.messages.append(
                f"{winner.name} wins the pot of {shares[winner.id]} "
                f"with {winner.hand_result.description}."
            )
        else:
            state.messages.append(
                f"{winner.name} wins a share of the pot ({shares[winner.id]}) "
                f"with {winner.hand_result.description}."
            )

    logger.info(
        f"Showdown hand #{state.hand_number}: "
        + ", ".join(f"{w.name} +{shares[w.id]} ({w.hand_result.description})" for w in winners)
    )
    state.pot = 0


def _split_pot(state: GameState, winners: List[Player]) -> Dict[int, int]:
    """
    Divide the pot evenly among the winners.

    Odd chips go one at a time to winners in seat order starting left of
    the dealer button.
    """
    split_amount = state.pot // len(winners)
    remainder = state.pot % len(winners)
    shares = {w.id: split_amount for w in winners}

    winner_ids = set(shares)
    for offset in range(1, state.num_players + 1):
        if remainder == 0:
            break
        seat = (state.dealer_index + offset) % state.num_players
        if seat in winner_ids:
            shares[seat] += 1
            remainder -= 1

    return shares


def _end_hand_early(state: GameState) -> None:
    """End the hand when only one player remains."""
    _collect_bets_to_pot(state)

    remaining = state.in_hand_players()
    if len(remaining) != 1:
        raise RuntimeError(f"Expected a single player left in the hand, found {len(remaining)}")

    winner = remaining[0]
    winner.stack += state.pot
    state.messages.append(f"{winner.name} wins the pot of {state.pot}.")
    logger.info(f"{winner.name} wins {state.pot} uncontested (hand #{state.hand_number})")

    state.pot = 0
    state.phase = GamePhase.SHOWDOWN


class TexasHoldemGame:
    """
    Stateful facade over the pure transforms.

    Holds the latest GameState; every action replaces it and returns the
    new snapshot.

    Usage:
        game = TexasHoldemGame(TableConfig(player_count=6))
        state = game.start_hand()

        while state.is_hand_running():
            seat = state.current_player_index
            state = game.call(seat)
    """

    def __init__(self, config: Optional[TableConfig] = None):
        self.config = config or TableConfig()
        self.state = create_initial_state(self.config)

    @property
    def phase(self) -> GamePhase:
        return self.state.phase

    @property
    def players(self) -> List[Player]:
        return self.state.players

    @property
    def version(self) -> int:
        return self.state.version

    def is_hand_running(self) -> bool:
        return self.state.is_hand_running()

    def reset(self) -> GameState:
        """Replace the table with a fresh one, keeping the version counter moving."""
        version = self.state.version
        self.state = create_initial_state(self.config)
        self.state.version = version + 1
        return self.state

    def start_hand(self) -> GameState:
        self.state = start_new_hand(self.state)
        return self.state

    def take_action(self, action: PlayerAction) -> GameState:
        self.state = apply_action(self.state, action)
        return self.state

    def fold(self, player_id: int) -> GameState:
        return self.take_action(PlayerAction(ActionType.FOLD, player_id))

    def check(self, player_id: int) -> GameState:
        return self.take_action(PlayerAction(ActionType.CHECK, player_id))

    def call(self, player_id: int) -> GameState:
        return self.take_action(PlayerAction(ActionType.CALL, player_id))

    def bet(self, player_id: int, target_total: int) -> GameState:
        return self.take_action(PlayerAction(ActionType.BET, player_id, target_total))

    def raise_to(self, player_id: int, target_total: int) -> GameState:
        return self.take_action(PlayerAction(ActionType.RAISE, player_id, target_total))

    def get_legal_actions(self, player_id: Optional[int] = None) -> List[Dict[str, Any]]:
        if player_id is None:
            player_id = self.state.current_player_index
        return legal_actions(self.state, player_id)

    def get_state(self, for_player_id: Optional[int] = None) -> Dict[str, Any]:
        return self.state.to_dict(for_player_id=for_player_id)
