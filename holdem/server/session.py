"""
Table session: owns the live game, drives AI seats and pushes updates.

This module provides:
- TableSession: holds the single TexasHoldemGame, schedules AI turns as
  cancellable delayed tasks and fans state out to WebSocket clients
- websocket_endpoint: real-time control channel for the local UI
"""

from __future__ import annotations
from typing import Any, Dict, Optional
import asyncio
import logging

from fastapi import WebSocket, WebSocketDisconnect

from holdem.agents.base import BaseAgent
from holdem.agents.heuristic import HeuristicAgent
from holdem.core.game import GameState, PlayerAction, TexasHoldemGame
from holdem.core.rules import ActionType, TableConfig


logger = logging.getLogger(__name__)


def parse_action(player_id: int, action: str, amount: Optional[int] = 0) -> PlayerAction:
    """
    Build a PlayerAction from wire values.

    Raises:
        ValueError: If the action name is unknown
    """
    try:
        action_type = ActionType(action.upper())
    except ValueError:
        raise ValueError(f"Invalid action type: {action}")
    return PlayerAction(action_type, player_id, amount or 0)


class TableSession:
    """
    The one table served by this process.

    All transitions run on the event loop thread, one at a time. When the
    seat to act is an AI seat, a task sleeps for the configured delay and
    then acts only if the state version it was scheduled for is still live.

    Usage:
        session = TableSession(TableConfig())
        await session.new_hand()
        await session.act(PlayerAction(ActionType.CALL, 0))
    """

    def __init__(self, config: Optional[TableConfig] = None, rng=None):
        self.config = config or TableConfig()
        self.game = TexasHoldemGame(self.config)
        self.agents: Dict[int, BaseAgent] = {
            p.id: HeuristicAgent(p.id, p.name, rng=rng)
            for p in self.game.players if p.is_ai
        }
        self.connections: Dict[WebSocket, Optional[int]] = {}
        self._ai_task: Optional[asyncio.Task] = None
        self._ai_version: Optional[int] = None

    @property
    def state(self) -> GameState:
        return self.game.state

    def view(self, player_id: Optional[int] = None) -> Dict[str, Any]:
        """State as seen by a seat (the human seat by default)."""
        if player_id is None:
            player_id = self.config.human_seat
        return self.game.get_state(for_player_id=player_id)

    # ============= Transitions =============

    async def new_hand(self) -> GameState:
        self.cancel_pending()
        self.game.start_hand()
        await self._after_transition()
        return self.state

    async def act(self, action: PlayerAction) -> GameState:
        self.game.take_action(action)
        await self._after_transition()
        return self.state

    async def reset(self) -> GameState:
        self.cancel_pending()
        self.game.reset()
        logger.info("Table reset")
        await self._after_transition()
        return self.state

    # ============= AI scheduling =============

    def cancel_pending(self) -> None:
        """Cancel the scheduled AI turn, if any."""
        if self._ai_task is not None and not self._ai_task.done():
            self._ai_task.cancel()
            logger.debug(f"Cancelled AI turn for version {self._ai_version}")
        self._ai_task = None
        self._ai_version = None

    @property
    def ai_pending(self) -> bool:
        return self._ai_task is not None and not self._ai_task.done()

    def _schedule_ai(self) -> None:
        state = self.state
        player = state.current_player
        if player is None or not player.is_ai or not player.can_act:
            return

        # Already waiting on this exact state
        if self.ai_pending and self._ai_version == state.version:
            return

        self.cancel_pending()
        self._ai_version = state.version
        self._ai_task = asyncio.create_task(self._ai_turn(state.version))
        self._ai_task.add_done_callback(self._log_ai_failure)

    def _log_ai_failure(self, task: asyncio.Task) -> None:
        """Surface errors from a finished AI turn in the server log."""
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error(f"AI turn failed: {error!r}", exc_info=error)

    async def _ai_turn(self, version: int) -> None:
        await asyncio.sleep(self.config.ai_delay)

        if self.state.version != version:
            logger.debug(f"Dropping stale AI turn for version {version} (now {self.state.version})")
            return

        player = self.state.current_player
        if player is None or not player.is_ai:
            return

        action = self.agents[player.id].act(self.state)
        self._ai_task = None
        self._ai_version = None
        await self.act(action)

    async def _after_transition(self) -> None:
        self._schedule_ai()
        await self.broadcast()

    # ============= WebSocket fan-out =============

    async def connect(self, websocket: WebSocket, player_id: Optional[int]) -> None:
        await websocket.accept()
        self.connections[websocket] = player_id
        logger.info(f"Client connected as seat {player_id}")
        await websocket.send_json({"type": "state", **self.view(player_id)})

    def disconnect(self, websocket: WebSocket) -> None:
        if websocket in self.connections:
            player_id = self.connections.pop(websocket)
            logger.info(f"Client for seat {player_id} disconnected")

    async def broadcast(self) -> None:
        """Send each client the state as seen by its seat."""
        for websocket, player_id in list(self.connections.items()):
            try:
                await websocket.send_json({"type": "state", **self.view(player_id)})
            except Exception as e:
                logger.error(f"Error sending state to seat {player_id}: {e}")
                self.connections.pop(websocket, None)

    async def handle_message(
        self,
        player_id: Optional[int],
        message: Dict[str, Any],
    ) -> Optional[Dict[str, Any]]:
        """
        Handle a message from a client.

        State changes reach every client through broadcast, so only queries
        and errors produce a direct reply.
        """
        msg_type = message.get("type", "")

        if msg_type == "new_hand":
            await self.new_hand()
            return None

        if msg_type == "action":
            seat = message.get("player_id", player_id)
            if seat is None:
                return {"type": "error", "message": "player_id required"}
            try:
                action = parse_action(int(seat), str(message.get("action", "")), message.get("amount", 0))
            except ValueError as e:
                return {"type": "error", "message": str(e)}
            await self.act(action)
            return None

        if msg_type == "get_state":
            return {"type": "state", **self.view(player_id)}

        return {"type": "error", "message": f"Unknown message type: {msg_type}"}


async def websocket_endpoint(websocket: WebSocket):
    """
    WebSocket endpoint for the table.

    Protocol:
    1. Client connects to /ws?player_id=N (defaults to the human seat)
    2. Server sends the current state
    3. Client sends {"type": "new_hand"}, {"type": "action", "action": "CALL", "amount": 0}
       or {"type": "get_state"}
    4. Server pushes {"type": "state", ...} after every change
    """
    session: TableSession = websocket.app.state.session

    seat = websocket.query_params.get("player_id")
    player_id = int(seat) if seat is not None and seat.isdigit() else session.config.human_seat

    await session.connect(websocket, player_id)
    try:
        while True:
            message = await websocket.receive_json()
            response = await session.handle_message(player_id, message)
            if response is not None:
                await websocket.send_json(response)
    except WebSocketDisconnect:
        logger.info(f"WebSocket disconnected: seat {player_id}")
    finally:
        session.disconnect(websocket)
