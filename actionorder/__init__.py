"""
ActionOrder - Turn-order Engine for Live Poker Hand Logging

A small sequencing core for a live hand logger with:
- Pure Python position resolution and per-street action order
- Live fold / all-in tracking and betting round completion
- FastAPI + WebSocket adapter for the table UI

Usage:
    from actionorder.core import ActionOrderEngine, Street, PlayerStatus
"""

__version__ = "0.2.0"

from actionorder.core.engine import ActionOrderEngine, ActionOrderEntry
from actionorder.core.order import ActionSlot
from actionorder.core.player import Player
from actionorder.core.rules import Street, PlayerStatus

__all__ = [
    "ActionOrderEngine",
    "ActionOrderEntry",
    "ActionSlot",
    "Player",
    "Street",
    "PlayerStatus",
    "__version__",
]
