"""
Exceptions raised by the turn-order engine.

Every failure derives from TurnOrderError so callers (the HTTP adapter in
particular) can catch the whole family in one place. Each class also derives
from the builtin that best matches it, so plain ``except ValueError`` keeps
working.
"""


class TurnOrderError(Exception):
    """Base class for turn-order engine failures."""


class InvalidButtonSeatError(TurnOrderError, ValueError):
    """The button seat is not one of the occupied seats."""

    def __init__(self, button_seat: int, occupied_seats=()):
        self.button_seat = button_seat
        self.occupied_seats = tuple(occupied_seats)
        super().__init__(
            f"Invalid button seat {button_seat}: occupied seats are "
            f"{list(self.occupied_seats)}"
        )


class InvalidSeatingError(TurnOrderError, ValueError):
    """The roster handed to the engine cannot form an action order."""


class UnknownStreetError(TurnOrderError, ValueError):
    """A street outside preflop/flop/turn/river was requested."""


class InvalidStatusError(TurnOrderError, ValueError):
    """A player status outside active/folded/allin was requested."""


class UnknownPlayerError(TurnOrderError, KeyError):
    """A status update named a player who is not dealt into the hand."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the message readable
        return str(self.args[0]) if self.args else ""


class MissingHandIdError(TurnOrderError, ValueError):
    """A hand was started without an identifier."""
