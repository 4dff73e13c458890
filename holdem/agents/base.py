"""
Base Agent Interface for computer-controlled seats.

An agent reads the latest GameState and proposes one PlayerAction. It never
mutates the state; the betting engine applies the proposal exactly as if a
human had submitted it.

Usage:
    class MyAgent(BaseAgent):
        def act(self, state):
            return PlayerAction(ActionType.CALL, self.player_id)
"""

from abc import ABC, abstractmethod
from typing import Optional

from holdem.core.game import GameState, PlayerAction, legal_actions
from holdem.core.rules import ActionType


class BaseAgent(ABC):
    """
    Abstract base class for seat agents.

    Attributes:
        player_id: Seat this agent plays
        name: Human-readable name
    """

    def __init__(self, player_id: int, name: Optional[str] = None):
        self.player_id = player_id
        self.name = name or f"Agent-{player_id}"

    @abstractmethod
    def act(self, state: GameState) -> PlayerAction:
        """
        Choose an action for this seat.

        Only called when it is this seat's turn and the seat can act.

        Args:
            state: The current game state

        Returns:
            The proposed action
        """

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.player_id}, {self.name})"


class CallAgent(BaseAgent):
    """
    An agent that always checks or calls.

    Useful for testing and as a simple baseline.
    """

    def __init__(self, player_id: int, name: Optional[str] = None):
        super().__init__(player_id, name or f"Caller-{player_id}")

    def act(self, state: GameState) -> PlayerAction:
        action_types = [a["type"] for a in legal_actions(state, self.player_id)]

        if ActionType.CHECK.value in action_types:
            return PlayerAction(ActionType.CHECK, self.player_id)

        if ActionType.CALL.value in action_types:
            return PlayerAction(ActionType.CALL, self.player_id)

        return PlayerAction(ActionType.FOLD, self.player_id)
