"""
Position resolution and action-order construction.

Both order tables are built once per hand from the occupied seats and the
button seat. Seats are sorted ascending and rotated so that relative index 0
is the seat immediately left of the button; positions are then resolved from
that index (see rules.py for the precedence).

Preflop action opens at UTG and closes with SB then BB. Postflop action opens
at SB and closes at the button.
"""

from __future__ import annotations
from typing import Any, Dict, Iterable, List, Sequence, Tuple
from dataclasses import dataclass, asdict
import logging

from actionorder.core.errors import InvalidButtonSeatError, InvalidSeatingError
from actionorder.core.player import Player, coerce_players
from actionorder.core.rules import PositionName, MIN_PLAYERS


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ActionSlot:
    """
    One entry of an order table.

    Attributes:
        player: Name of the player in this slot
        seat: Seat number
        position: Position label (SB, BB, UTG, ..., BTN)
        priority: Dense 0-based rank within the table
    """
    player: str
    seat: int
    position: str
    priority: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


OrderTable = Tuple[ActionSlot, ...]

EMPTY_ORDER: OrderTable = ()


def resolve_position(index: int, total: int) -> str:
    """
    Get the position label for a relative seat index.

    Args:
        index: Seats clockwise from the button, 0 being the seat left of it
        total: Number of occupied seats

    Returns:
        Position label
    """
    if index == 0:
        return PositionName.SMALL_BLIND.value
    if index == 1:
        return PositionName.BIG_BLIND.value
    if index == total - 1:
        return PositionName.DEALER.value
    if index == 2:
        return PositionName.UNDER_THE_GUN.value
    if index == 3:
        return PositionName.UNDER_THE_GUN_1.value
    if index == 4:
        return PositionName.MIDDLE_1.value
    if index == 5:
        return PositionName.MIDDLE_2.value
    if index == total - 2:
        return PositionName.CUTOFF.value
    return f"MP{index - 2}"


def rotate_seats(seats: Iterable[int], button_seat: int) -> List[int]:
    """
    Sort seats ascending and rotate them to start left of the button.

    Raises:
        InvalidButtonSeatError: If the button seat is not occupied
    """
    occupied = sorted(seats)
    if button_seat not in occupied:
        raise InvalidButtonSeatError(button_seat, occupied)
    start = occupied.index(button_seat) + 1
    return [occupied[(start + i) % len(occupied)] for i in range(len(occupied))]


def _seat_map(players: Sequence[Player]) -> Dict[int, Player]:
    """Index players by seat, rejecting rosters that cannot be ordered."""
    if len(players) < MIN_PLAYERS:
        raise InvalidSeatingError(
            f"Need at least {MIN_PLAYERS} players, got {len(players)}"
        )

    seat_map: Dict[int, Player] = {}
    names = set()
    for player in players:
        if player.seat in seat_map:
            raise InvalidSeatingError(
                f"Seat {player.seat} is taken by both "
                f"{seat_map[player.seat].name} and {player.name}"
            )
        if player.name in names:
            raise InvalidSeatingError(f"Duplicate player name: {player.name}")
        seat_map[player.seat] = player
        names.add(player.name)
    return seat_map


def _resolved_slots(players: Iterable[Any], button_seat: int) -> List[Tuple[Player, str]]:
    """Players in rotation order (left of button first) with their positions."""
    seat_map = _seat_map(coerce_players(players))
    try:
        rotation = rotate_seats(seat_map.keys(), button_seat)
    except InvalidButtonSeatError:
        logger.error(f"Button seat {button_seat} not found among {sorted(seat_map)}")
        raise

    total = len(rotation)
    return [
        (seat_map[seat], resolve_position(i, total))
        for i, seat in enumerate(rotation)
    ]


def _emit(entries: Iterable[Tuple[Player, str]]) -> OrderTable:
    return tuple(
        ActionSlot(player=player.name, seat=player.seat, position=position, priority=i)
        for i, (player, position) in enumerate(entries)
    )


def create_preflop_order(players: Iterable[Any], button_seat: int) -> OrderTable:
    """
    Build the preflop action order: UTG ... BTN, then SB, then BB.

    Args:
        players: Players dealt into the hand ({name, seat} records)
        button_seat: Seat holding the dealer button

    Returns:
        Order table with priorities 0..N-1

    Raises:
        InvalidButtonSeatError: If the button seat is not occupied
        InvalidSeatingError: If the roster is too small or has duplicates
    """
    resolved = _resolved_slots(players, button_seat)
    return _emit(resolved[2:] + resolved[:2])


def create_postflop_order(players: Iterable[Any], button_seat: int) -> OrderTable:
    """
    Build the postflop action order shared by flop, turn and river: SB ... BTN.

    Raises:
        InvalidButtonSeatError: If the button seat is not occupied
        InvalidSeatingError: If the roster is too small or has duplicates
    """
    return _emit(_resolved_slots(players, button_seat))


def format_order(order: Iterable[ActionSlot]) -> str:
    """Human readable order, e.g. 'UTG(carol) -> BTN(dave) -> SB(alice)'."""
    return " -> ".join(f"{slot.position}({slot.player})" for slot in order)
