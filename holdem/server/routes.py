"""
HTTP API Routes for the table.

These routes expose the action API to a local UI. The same operations are
available over the WebSocket channel, which also receives pushed updates.
"""

from typing import Any, Dict, Optional
from fastapi import APIRouter, HTTPException, Request

from holdem.server.schemas import ActionRequest, GameStateSchema, LegalActionsSchema
from holdem.server.session import TableSession, parse_action

router = APIRouter()


def get_session(request: Request) -> TableSession:
    """Get the table session attached to the application."""
    return request.app.state.session


@router.get("/state", response_model=GameStateSchema)
async def get_state(request: Request, player_id: Optional[int] = None) -> Dict[str, Any]:
    """
    Get the current game state.

    Hole cards are only shown for `player_id` (the human seat by default),
    and for everyone who reached showdown.
    """
    return get_session(request).view(player_id)


@router.post("/new_hand", response_model=GameStateSchema)
async def new_hand(request: Request) -> Dict[str, Any]:
    """
    Start a new hand.

    Deals cards and posts blinds. Does nothing if a hand is in progress or
    fewer than two players have chips.
    """
    session = get_session(request)
    await session.new_hand()
    return session.view()


@router.post("/action", response_model=GameStateSchema)
async def take_action(request: Request, req: ActionRequest) -> Dict[str, Any]:
    """
    Take a game action.

    Actions from a seat that is not to act are ignored; the unchanged
    state is returned.
    """
    session = get_session(request)

    try:
        action = parse_action(req.player_id, req.action, req.amount)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if session.state.get_player(req.player_id) is None:
        raise HTTPException(status_code=400, detail=f"Unknown player: {req.player_id}")

    await session.act(action)
    return session.view(req.player_id)


@router.get("/legal_actions", response_model=LegalActionsSchema)
async def get_legal_actions(request: Request, player_id: Optional[int] = None) -> Dict[str, Any]:
    """
    Get legal actions for a seat (the seat to act by default).
    """
    session = get_session(request)
    if player_id is None:
        player_id = session.state.current_player_index

    return {
        "player_id": player_id,
        "actions": session.game.get_legal_actions(player_id),
    }


@router.post("/reset", response_model=GameStateSchema)
async def reset(request: Request) -> Dict[str, Any]:
    """
    Replace the table with a fresh one.
    """
    session = get_session(request)
    await session.reset()
    return session.view()
