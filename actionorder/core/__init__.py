"""
ActionOrder Core - Pure Python Turn-order Logic

This module contains all sequencing logic without any network dependencies.
"""

from actionorder.core.errors import (
    TurnOrderError,
    InvalidButtonSeatError,
    InvalidSeatingError,
    UnknownStreetError,
    InvalidStatusError,
    UnknownPlayerError,
    MissingHandIdError,
)
from actionorder.core.rules import Street, PlayerStatus, PositionName
from actionorder.core.player import Player, PlayerStatusRegistry
from actionorder.core.order import (
    ActionSlot,
    resolve_position,
    create_preflop_order,
    create_postflop_order,
)
from actionorder.core.hand_state import HandState, TurnCursor, BettingRoundEvaluator
from actionorder.core.engine import ActionOrderEngine, ActionOrderEntry

__all__ = [
    "TurnOrderError",
    "InvalidButtonSeatError",
    "InvalidSeatingError",
    "UnknownStreetError",
    "InvalidStatusError",
    "UnknownPlayerError",
    "MissingHandIdError",
    "Street",
    "PlayerStatus",
    "PositionName",
    "Player",
    "PlayerStatusRegistry",
    "ActionSlot",
    "resolve_position",
    "create_preflop_order",
    "create_postflop_order",
    "HandState",
    "TurnCursor",
    "BettingRoundEvaluator",
    "ActionOrderEngine",
    "ActionOrderEntry",
]
