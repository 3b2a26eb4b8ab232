"""
Hand State - order tables, per-street cursors and round completion.

This module holds the aggregate state of one hand:
- HandState: the order tables, status registry and cursors for a hand
- TurnCursor: per-street index resolved against the live (filtered) order
- BettingRoundEvaluator: decides whether a street's betting is finished

The order tables never change after a hand starts. Folding or going all-in
only changes which slots survive the active filter, so the same cursor index
can land on a different slot after a status change.
"""

from __future__ import annotations
from typing import Any, Dict, Iterable, List, Mapping, Optional, Set, Union
from dataclasses import dataclass, field
import logging

from actionorder.core.order import ActionSlot, OrderTable, EMPTY_ORDER
from actionorder.core.player import PlayerStatusRegistry
from actionorder.core.rules import Street, STREETS


logger = logging.getLogger(__name__)


StreetLike = Union[Street, str]


@dataclass
class HandState:
    """
    Everything the engine knows about the live hand.

    Attributes:
        hand_id: Identifier supplied by the caller (None when no hand is live)
        button_seat: Seat holding the dealer button
        current_street: Street currently being played
        registry: Live player statuses
        preflop_order: Fixed preflop order table
        postflop_order: Fixed order table shared by flop, turn and river
        cursors: Per-street action index
    """
    hand_id: Optional[str] = None
    button_seat: Optional[int] = None
    current_street: Street = Street.PREFLOP
    registry: PlayerStatusRegistry = field(default_factory=PlayerStatusRegistry)
    preflop_order: OrderTable = EMPTY_ORDER
    postflop_order: OrderTable = EMPTY_ORDER
    cursors: Dict[Street, int] = field(default_factory=lambda: {s: 0 for s in STREETS})

    @property
    def is_live(self) -> bool:
        return self.hand_id is not None

    def order_for(self, street: StreetLike) -> OrderTable:
        """Order table used by a street."""
        street = Street.parse(street)
        return self.preflop_order if street.uses_preflop_order else self.postflop_order

    def active_slots(self, street: StreetLike) -> List[ActionSlot]:
        """Slots of the street's table whose player is still active, in priority order."""
        return [
            slot for slot in self.order_for(street)
            if self.registry.is_active(slot.player)
        ]


class TurnCursor:
    """
    Resolves whose turn it is on each street.

    The cursor stores one integer per street and indexes it, modulo the
    number of active players, into the filtered order table.
    """

    def __init__(self, state: HandState):
        self.state = state

    def index(self, street: StreetLike) -> int:
        return self.state.cursors[Street.parse(street)]

    def reset(self) -> None:
        """Reset every street's index to 0."""
        self.state.cursors = {s: 0 for s in STREETS}

    def current_player(self, street: StreetLike) -> Optional[ActionSlot]:
        """
        Get the slot whose turn it is.

        Returns:
            The acting slot, or None if nobody on the street can act
        """
        street = Street.parse(street)
        active = self.state.active_slots(street)
        if not active:
            logger.debug(f"No actionable player on {street.value}")
            return None
        return active[self.state.cursors[street] % len(active)]

    def move_to_next(self, street: StreetLike) -> Optional[ActionSlot]:
        """Advance the street's index by one and return the new acting slot."""
        street = Street.parse(street)
        self.state.cursors[street] += 1

        next_slot = self.current_player(street)
        if next_slot is not None:
            logger.debug(f"Next to act on {street.value}: {next_slot.position}({next_slot.player})")
        return next_slot

    def advance_to_street(self, street: StreetLike) -> Optional[ActionSlot]:
        """
        Make a street current and rewind its index.

        Returns:
            First active slot of the street's order table
        """
        street = Street.parse(street)
        previous = self.state.current_street
        self.state.current_street = street
        self.state.cursors[street] = 0
        logger.info(f"Street change: {previous.value} -> {street.value}")

        first = self.current_player(street)
        if first is not None:
            logger.info(f"First to act on {street.value}: {first.position}({first.player})")
        return first


class BettingRoundEvaluator:
    """
    Decides whether a street's betting round is finished.

    A round is complete when at most one player can still act, or when every
    active player has at least one recorded action on the street. Amounts
    are not compared: a player who called before a later raise still counts
    as having acted. Callers that need contributions equalised must check
    that themselves.
    """

    def __init__(self, state: HandState):
        self.state = state

    @staticmethod
    def acted_players(actions: Union[Mapping[str, Any], Iterable[Any], None]) -> Set[str]:
        """
        Names of players with at least one recorded action.

        Accepts a mapping keyed by player name, or an iterable of records
        that are mappings with a "player" key or objects with a player
        attribute. Records without a player are ignored.
        """
        if not actions:
            return set()
        if isinstance(actions, Mapping):
            return {str(name) for name in actions}

        acted = set()
        for record in actions:
            if isinstance(record, Mapping):
                player = record.get("player")
            else:
                player = getattr(record, "player", None)
            if player:
                acted.add(str(player))
        return acted

    def is_complete(
        self,
        street: StreetLike,
        actions: Union[Mapping[str, Any], Iterable[Any], None],
    ) -> bool:
        active = self.state.active_slots(street)

        if len(active) <= 1:
            logger.info(f"Betting round complete on {Street.parse(street).value}: "
                        f"{len(active)} active player(s) left")
            return True

        acted = self.acted_players(actions)
        if all(slot.player in acted for slot in active):
            logger.info(f"Betting round complete on {Street.parse(street).value}: "
                        f"all active players acted")
            return True
        return False
