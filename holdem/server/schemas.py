"""
Pydantic schemas for API request/response validation.
"""

from typing import List, Optional
from pydantic import BaseModel, Field


# ============= Request Schemas =============

class ActionRequest(BaseModel):
    """Request to take a game action."""
    player_id: int = Field(..., ge=0, description="Seat submitting the action")
    action: str = Field(..., description="Action type: FOLD, CHECK, CALL, BET, RAISE")
    amount: Optional[int] = Field(default=0, ge=0, description="Target round total for BET/RAISE")


# ============= Response Schemas =============

class CardSchema(BaseModel):
    """Card representation."""
    rank: str
    suit: str
    text: str
    color: str


class HandResultSchema(BaseModel):
    """Evaluated best hand."""
    rank: str
    description: str
    cards: List[CardSchema]
    value: int


class PlayerSchema(BaseModel):
    """Seat information; cards are null unless visible to the viewer."""
    id: int
    name: str
    position: int
    stack: int
    bet: int
    total_bet: int
    has_acted: bool
    is_folded: bool
    is_all_in: bool
    is_ai: bool
    cards: Optional[List[CardSchema]] = None
    hand_result: Optional[HandResultSchema] = None


class ActionSchema(BaseModel):
    """Available action."""
    type: str
    amount: Optional[int] = None
    min: Optional[int] = None
    max: Optional[int] = None


class GameStateSchema(BaseModel):
    """Complete game state as seen by one seat."""
    phase: str
    hand_number: int
    version: int
    pot: int
    total_pot: int
    highest_bet: int
    min_raise: int
    small_blind: int
    big_blind: int
    board: List[CardSchema]
    dealer_index: Optional[int] = None
    current_player: Optional[int] = None
    last_raiser: Optional[int] = None
    round_initial_player_index: int
    players: List[PlayerSchema]
    messages: List[str]
    legal_actions: List[ActionSchema] = []


class LegalActionsSchema(BaseModel):
    """Legal actions for one seat."""
    player_id: int
    actions: List[ActionSchema]
