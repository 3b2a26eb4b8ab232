"""
Pydantic schemas for API request/response validation.
"""

from typing import List, Optional, Dict, Any, Union
from pydantic import BaseModel, Field


# ============= Request Schemas =============

class SeatedPlayerSchema(BaseModel):
    """A player dealt into the hand."""
    name: str = Field(..., min_length=1)
    seat: int


class StartHandRequest(BaseModel):
    """Request to start a hand on a table."""
    hand_id: str = Field(..., min_length=1)
    button_seat: int
    players: List[SeatedPlayerSchema] = Field(..., min_length=2)


class StreetRequest(BaseModel):
    """Request naming a street: preflop, flop, turn or river."""
    street: str = Field(..., description="Street: preflop, flop, turn, river")


class StatusRequest(BaseModel):
    """Request to change a player's status."""
    player: str
    status: str = Field(..., description="Status: active, folded, allin")


class RecordedActionSchema(BaseModel):
    """One action recorded on a street."""
    player: Optional[str] = None
    action: Optional[str] = None


class RoundCompleteRequest(BaseModel):
    """Request to check whether a street's betting round is finished."""
    street: str
    actions: Union[Dict[str, Any], List[RecordedActionSchema]] = Field(default_factory=list)


# ============= Response Schemas =============

class ActionSlotSchema(BaseModel):
    """One slot of an order table."""
    player: str
    seat: int
    position: str
    priority: int


class ActionOrderEntrySchema(ActionSlotSchema):
    """Order slot merged with live status."""
    status: Optional[str] = None
    can_act: bool


class CurrentPlayerSchema(BaseModel):
    """Whose turn it is on a street."""
    street: str
    player: Optional[ActionSlotSchema] = None


class ActionOrderSchema(BaseModel):
    """Order table for a street."""
    street: str
    order: List[ActionOrderEntrySchema]


class StatusResultSchema(BaseModel):
    """Result of a status change."""
    player: str
    status: str
    active_count: int


class RoundCompleteSchema(BaseModel):
    """Result of a round completion check."""
    street: str
    complete: bool


class TableStateSchema(BaseModel):
    """Snapshot of a table's hand."""
    table_id: str
    hand_id: Optional[str] = None
    button_seat: Optional[int] = None
    current_street: str
    current_player: Optional[ActionSlotSchema] = None
    cursors: Dict[str, int]
    statuses: Dict[str, str]
    action_order: List[ActionOrderEntrySchema]


class TableCreatedSchema(BaseModel):
    """Result of creating a table."""
    table_id: str


class ErrorSchema(BaseModel):
    """Error response."""
    error: str
    detail: Optional[str] = None


# ============= WebSocket Message Schemas =============

class WSMessage(BaseModel):
    """Incoming WebSocket message."""
    type: str
    street: Optional[str] = None
    player: Optional[str] = None
    status: Optional[str] = None


class WSErrorMessage(BaseModel):
    """WebSocket error message."""
    type: str = "error"
    message: str
