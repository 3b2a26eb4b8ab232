"""
WebSocket handling for live action-indicator updates.

This module provides:
- TableManager: Owns one ActionOrderEngine per table
- WebSocket endpoint: Pushes table snapshots to UI renderers and accepts
  turn/status messages from the action-processing side
"""

from __future__ import annotations
from typing import Dict, Optional, Any
from dataclasses import dataclass, field
import logging

from fastapi import WebSocket, WebSocketDisconnect
from fastapi.websockets import WebSocketState
from pydantic import ValidationError

from actionorder.core.engine import ActionOrderEngine
from actionorder.core.errors import TurnOrderError
from actionorder.server.schemas import WSMessage, WSErrorMessage


logger = logging.getLogger(__name__)


@dataclass
class Table:
    """A table with its engine and connected UI clients."""
    table_id: str
    engine: ActionOrderEngine = field(default_factory=ActionOrderEngine)
    connections: Dict[str, WebSocket] = field(default_factory=dict)

    def snapshot(self) -> Dict[str, Any]:
        return {"table_id": self.table_id, **self.engine.to_dict()}

    async def broadcast(self, message: Dict[str, Any]) -> None:
        """Send a message to every connected client."""
        for client_id, ws in list(self.connections.items()):
            try:
                await ws.send_json(message)
            except Exception as e:
                logger.error(f"Error sending to {client_id}: {e}")
                self.connections.pop(client_id, None)

    async def broadcast_state(self) -> None:
        await self.broadcast({"type": "state", **self.snapshot()})


class TableManager:
    """
    Manages tables and their UI connections.

    Usage:
        manager = TableManager()
        table_id = manager.create_table()
        table = manager.get_table(table_id)
        table.engine.initialize_hand(players, button_seat=7, hand_id="1")
    """

    def __init__(self) -> None:
        self.tables: Dict[str, Table] = {}
        self._table_counter = 0
        self._client_counter = 0

    def create_table(self, table_id: Optional[str] = None) -> str:
        """Create a new table, returning its id."""
        if table_id is None:
            self._table_counter += 1
            table_id = f"table-{self._table_counter}"
        if table_id not in self.tables:
            self.tables[table_id] = Table(table_id=table_id)
            logger.info(f"Created table {table_id}")
        return table_id

    def get_table(self, table_id: str) -> Optional[Table]:
        return self.tables.get(table_id)

    def remove_table(self, table_id: str) -> bool:
        table = self.tables.pop(table_id, None)
        if table is None:
            return False
        table.engine.end_hand()
        logger.info(f"Removed table {table_id}")
        return True

    async def connect(self, table_id: str, websocket: WebSocket) -> Optional[str]:
        """
        Attach a UI client to a table.

        Returns:
            Client id, or None if the table does not exist
        """
        table = self.get_table(table_id)
        if table is None:
            logger.warning(f"Table {table_id} not found")
            return None

        await websocket.accept()
        self._client_counter += 1
        client_id = f"client-{self._client_counter}"
        table.connections[client_id] = websocket
        logger.info(f"{client_id} connected to {table_id}")

        await websocket.send_json({"type": "state", **table.snapshot()})
        return client_id

    def disconnect(self, table_id: str, client_id: str) -> None:
        table = self.get_table(table_id)
        if table is not None:
            table.connections.pop(client_id, None)
            logger.info(f"{client_id} disconnected from {table_id}")

    async def handle_message(self, table_id: str, client_id: str, raw: Dict[str, Any]) -> None:
        """
        Apply a client message to the table's engine.

        Message types:
            {"type": "next", "street": "flop"}
            {"type": "street", "street": "turn"}
            {"type": "status", "player": "alice", "status": "folded"}
            {"type": "state"}
        """
        table = self.get_table(table_id)
        if table is None:
            return
        ws = table.connections.get(client_id)

        try:
            message = WSMessage.model_validate(raw)
            engine = table.engine
            if message.type == "next":
                engine.move_to_next_player(message.street or engine.current_street)
            elif message.type == "street":
                engine.advance_to_street(message.street)
            elif message.type == "status":
                engine.update_player_status(message.player, message.status)
            elif message.type == "state":
                if ws is not None:
                    await ws.send_json({"type": "state", **table.snapshot()})
                return
            else:
                raise TurnOrderError(f"Unknown message type: {message.type}")
        except (TurnOrderError, ValidationError) as e:
            logger.warning(f"Rejected message from {client_id} on {table_id}: {e}")
            if ws is not None:
                await ws.send_json(WSErrorMessage(message=str(e)).model_dump())
            return

        await table.broadcast_state()


async def websocket_endpoint(websocket: WebSocket, table_id: str) -> None:
    """WebSocket endpoint for a table's UI clients."""
    manager: TableManager = websocket.app.state.tables
    client_id = await manager.connect(table_id, websocket)
    if client_id is None:
        await websocket.close(code=4404)
        return

    try:
        while True:
            data = await websocket.receive_json()
            await manager.handle_message(table_id, client_id, data)
    except WebSocketDisconnect:
        logger.info(f"WebSocket disconnected: {client_id}")
    except Exception as e:
        logger.error(f"WebSocket error from {client_id} on {table_id}: {e}")
        if websocket.client_state == WebSocketState.CONNECTED:
            await websocket.close(code=1011)
    finally:
        manager.disconnect(table_id, client_id)
