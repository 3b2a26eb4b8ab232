"""
Turn-order Rules and Constants.

This module defines the shared vocabulary of the engine: betting streets,
player statuses, fixed position names, and table defaults.

Position naming follows a fixed precedence counted clockwise from the seat
immediately left of the button (relative index 0):

1. 0 -> SB, 1 -> BB, last seat -> BTN
2. 2 -> UTG, 3 -> UTG+1, 4 -> MP1, 5 -> MP2
3. second to last seat -> CO
4. anything else -> MP(i - 2)

Heads-up tables are not special-cased: with two players the seat left of the
button is SB and the button itself is labelled BB.
"""

from enum import Enum
from typing import Tuple, Union

from actionorder.core.errors import UnknownStreetError, InvalidStatusError


class Street(Enum):
    """Betting streets of a hand."""
    PREFLOP = "preflop"
    FLOP = "flop"
    TURN = "turn"
    RIVER = "river"

    @classmethod
    def parse(cls, value: Union["Street", str]) -> "Street":
        """
        Coerce a street name or member into a Street.

        Raises:
            UnknownStreetError: If the value is not one of the four streets
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise UnknownStreetError(f"Unknown street: {value!r}")

    @property
    def uses_preflop_order(self) -> bool:
        """Only preflop reads the preflop table; the rest share postflop."""
        return self is Street.PREFLOP


class PlayerStatus(Enum):
    """Player statuses within a hand."""
    ACTIVE = "active"   # Still in the hand, can act
    FOLDED = "folded"   # Has folded
    ALL_IN = "allin"    # All chips committed, no more actions

    @classmethod
    def parse(cls, value: Union["PlayerStatus", str]) -> "PlayerStatus":
        """
        Coerce a status name or member into a PlayerStatus.

        Accepts the wire values ("active", "folded", "allin") as well as the
        member names ("ALL_IN").
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip()
            try:
                return cls(key.lower())
            except ValueError:
                pass
            if key.upper() in cls.__members__:
                return cls[key.upper()]
        raise InvalidStatusError(f"Invalid player status: {value!r}")


class PositionName(Enum):
    """Fixed position labels at the poker table."""
    SMALL_BLIND = "SB"
    BIG_BLIND = "BB"
    UNDER_THE_GUN = "UTG"
    UNDER_THE_GUN_1 = "UTG+1"
    MIDDLE_1 = "MP1"
    MIDDLE_2 = "MP2"
    CUTOFF = "CO"
    DEALER = "BTN"


STREETS: Tuple[Street, ...] = (Street.PREFLOP, Street.FLOP, Street.TURN, Street.RIVER)

# Table settings
MIN_PLAYERS = 2

# Server defaults
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8000
DEFAULT_LOG_LEVEL = "INFO"
