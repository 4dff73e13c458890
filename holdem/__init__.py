"""
Hold'em Engine - headless No-Limit Texas Hold'em

A single-table Texas Hold'em engine with:
- Pure Python game core logic (no external poker dependencies)
- Best-five-of-seven hand evaluation and Monte Carlo equity estimates
- Heuristic AI seats
- FastAPI + WebSocket control channel for a local UI

Usage:
    from holdem.core import Card, TexasHoldemGame, TableConfig
    from holdem.agents import HeuristicAgent
"""

__version__ = "0.1.0"

from holdem.core.card import Card
from holdem.core.player import Player
from holdem.core.game import GameState, PlayerAction, TexasHoldemGame
from holdem.core.hand import HandRank, evaluate_hand
from holdem.core.rules import TableConfig

__all__ = [
    "Card",
    "Player",
    "GameState",
    "PlayerAction",
    "TexasHoldemGame",
    "HandRank",
    "evaluate_hand",
    "TableConfig",
    "__version__",
]
