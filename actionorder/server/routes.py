"""
HTTP API Routes for ActionOrder.

These routes expose the turn-order operations of one engine per table.
Every mutating route pushes the new table snapshot to WebSocket clients.
"""

from typing import Dict, Any, List, Optional
from fastapi import APIRouter, HTTPException, Request
import logging

from actionorder.core.errors import TurnOrderError
from actionorder.core.rules import Street
from actionorder.server.schemas import (
    StartHandRequest, StreetRequest, StatusRequest, RoundCompleteRequest,
    CurrentPlayerSchema, ActionOrderSchema, StatusResultSchema,
    RoundCompleteSchema, TableStateSchema, TableCreatedSchema,
)
from actionorder.server.websocket import Table, TableManager


logger = logging.getLogger(__name__)

router = APIRouter()


def get_manager(request: Request) -> TableManager:
    return request.app.state.tables


def get_table(request: Request, table_id: str) -> Table:
    """Get a table or fail with 404."""
    table = get_manager(request).get_table(table_id)
    if table is None:
        raise HTTPException(status_code=404, detail=f"Table not found: {table_id}")
    return table


def bad_request(e: TurnOrderError) -> HTTPException:
    logger.warning(f"Rejected request: {e}")
    return HTTPException(status_code=400, detail=str(e))


def street_or_current(table: Table, street: Optional[str]) -> Street:
    if street is None:
        return table.engine.current_street
    try:
        return Street.parse(street)
    except TurnOrderError as e:
        raise bad_request(e)


# ============= Table Management =============

@router.post("/tables", response_model=TableCreatedSchema)
async def create_table(request: Request) -> Dict[str, Any]:
    """Create a new table."""
    table_id = get_manager(request).create_table()
    return {"table_id": table_id}


@router.get("/tables/{table_id}", response_model=TableStateSchema)
async def get_table_state(request: Request, table_id: str) -> Dict[str, Any]:
    """Get the table's hand snapshot."""
    return get_table(request, table_id).snapshot()


@router.delete("/tables/{table_id}")
async def remove_table(request: Request, table_id: str) -> Dict[str, Any]:
    """Remove a table."""
    if not get_manager(request).remove_table(table_id):
        raise HTTPException(status_code=404, detail=f"Table not found: {table_id}")
    return {"success": True, "message": f"Table {table_id} removed"}


# ============= Hand Lifecycle =============

@router.post("/tables/{table_id}/hands", response_model=TableStateSchema)
async def start_hand(request: Request, table_id: str, req: StartHandRequest) -> Dict[str, Any]:
    """
    Start a hand on the table.

    Builds the preflop and postflop order tables from the dealt players
    and the button seat.
    """
    table = get_table(request, table_id)
    try:
        table.engine.initialize_hand(
            [p.model_dump() for p in req.players],
            button_seat=req.button_seat,
            hand_id=req.hand_id,
        )
    except TurnOrderError as e:
        await table.broadcast_state()
        raise bad_request(e)

    await table.broadcast_state()
    return table.snapshot()


@router.delete("/tables/{table_id}/hand")
async def end_hand(request: Request, table_id: str) -> Dict[str, Any]:
    """End the table's current hand."""
    table = get_table(request, table_id)
    table.engine.end_hand()
    await table.broadcast_state()
    return {"success": True, "message": "Hand ended"}


# ============= Turn Queries =============

@router.get("/tables/{table_id}/current_player", response_model=CurrentPlayerSchema)
async def get_current_player(
    request: Request, table_id: str, street: Optional[str] = None
) -> Dict[str, Any]:
    """Get whose turn it is (on the current street by default)."""
    table = get_table(request, table_id)
    resolved = street_or_current(table, street)
    slot = table.engine.get_current_player(resolved)
    return {"street": resolved.value, "player": slot.to_dict() if slot else None}


@router.post("/tables/{table_id}/next_player", response_model=CurrentPlayerSchema)
async def move_to_next_player(request: Request, table_id: str, req: StreetRequest) -> Dict[str, Any]:
    """Advance the street's cursor to the next player."""
    table = get_table(request, table_id)
    try:
        street = Street.parse(req.street)
        slot = table.engine.move_to_next_player(street)
    except TurnOrderError as e:
        raise bad_request(e)

    await table.broadcast_state()
    return {"street": street.value, "player": slot.to_dict() if slot else None}


@router.post("/tables/{table_id}/street", response_model=CurrentPlayerSchema)
async def advance_to_street(request: Request, table_id: str, req: StreetRequest) -> Dict[str, Any]:
    """Move the hand to a new street."""
    table = get_table(request, table_id)
    try:
        street = Street.parse(req.street)
        slot = table.engine.advance_to_street(street)
    except TurnOrderError as e:
        raise bad_request(e)

    await table.broadcast_state()
    return {"street": street.value, "player": slot.to_dict() if slot else None}


@router.post("/tables/{table_id}/status", response_model=StatusResultSchema)
async def update_player_status(request: Request, table_id: str, req: StatusRequest) -> Dict[str, Any]:
    """Record a fold, all-in or return to active."""
    table = get_table(request, table_id)
    try:
        active_count = table.engine.update_player_status(req.player, req.status)
    except TurnOrderError as e:
        raise bad_request(e)

    await table.broadcast_state()
    return {
        "player": req.player,
        "status": table.engine.get_player_status(req.player).value,
        "active_count": active_count,
    }


@router.get("/tables/{table_id}/action_order", response_model=ActionOrderSchema)
async def get_action_order(
    request: Request, table_id: str, street: Optional[str] = None
) -> Dict[str, Any]:
    """Get the street's full order merged with live statuses."""
    table = get_table(request, table_id)
    resolved = street_or_current(table, street)
    order: List[Dict[str, Any]] = [e.to_dict() for e in table.engine.get_action_order(resolved)]
    return {"street": resolved.value, "order": order}


@router.post("/tables/{table_id}/round_complete", response_model=RoundCompleteSchema)
async def is_betting_round_complete(
    request: Request, table_id: str, req: RoundCompleteRequest
) -> Dict[str, Any]:
    """Check whether every active player has acted on the street."""
    table = get_table(request, table_id)
    actions = req.actions
    if isinstance(actions, list):
        actions = [a.model_dump() for a in actions]
    try:
        street = Street.parse(req.street)
        complete = table.engine.is_betting_round_complete(street, actions)
    except TurnOrderError as e:
        raise bad_request(e)
    return {"street": street.value, "complete": complete}
