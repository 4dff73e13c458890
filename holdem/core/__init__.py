"""
Hold'em Core - Pure Python Texas Hold'em Game Logic

This module contains all game logic without any network dependencies.
"""

from holdem.core.card import Card, Rank, Suit, build_deck, shuffle_deck
from holdem.core.player import Player
from holdem.core.hand import HandRank, HandResult, evaluate_hand, compare_hands
from holdem.core.equity import estimate_win_probability
from holdem.core.rules import GamePhase, ActionType, TableConfig
from holdem.core.game import (
    GameState, PlayerAction, TexasHoldemGame,
    create_initial_state, start_new_hand, apply_action, legal_actions,
)

__all__ = [
    "Card",
    "Rank",
    "Suit",
    "build_deck",
    "shuffle_deck",
    "Player",
    "HandRank",
    "HandResult",
    "evaluate_hand",
    "compare_hands",
    "estimate_win_probability",
    "GamePhase",
    "ActionType",
    "TableConfig",
    "GameState",
    "PlayerAction",
    "TexasHoldemGame",
    "create_initial_state",
    "start_new_hand",
    "apply_action",
    "legal_actions",
]
