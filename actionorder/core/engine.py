"""
Turn-order Engine - Hand Lifecycle Controller.

This module is the entry point callers use to sequence a hand:
- Building the fixed preflop and postflop order tables at hand start
- Tracking player statuses as they fold or go all-in
- Resolving whose turn it is on each street
- Deciding when a betting round is finished
- Resetting everything at hand end

Each engine owns exactly one HandState. Engines are plain objects, so
several tables (or tests) can run side by side.
"""

from __future__ import annotations
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union
from dataclasses import dataclass, asdict
import logging

from actionorder.core.errors import TurnOrderError, MissingHandIdError
from actionorder.core.hand_state import (
    HandState, TurnCursor, BettingRoundEvaluator, StreetLike,
)
from actionorder.core.order import (
    ActionSlot, create_preflop_order, create_postflop_order, format_order,
)
from actionorder.core.player import coerce_players
from actionorder.core.rules import Street, PlayerStatus, STREETS


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ActionOrderEntry:
    """An order-table slot merged with the player's live status, for display."""
    player: str
    seat: int
    position: str
    priority: int
    status: Optional[str]
    can_act: bool

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class ActionOrderEngine:
    """
    Sequencing authority for one hand at a time.

    Usage:
        engine = ActionOrderEngine()
        engine.initialize_hand(
            [{"name": "alice", "seat": 1}, {"name": "bob", "seat": 3},
             {"name": "carol", "seat": 5}, {"name": "dave", "seat": 7}],
            button_seat=7,
            hand_id="42",
        )

        slot = engine.get_current_player("preflop")    # UTG (carol)
        engine.update_player_status(slot.player, "folded")
        slot = engine.get_current_player("preflop")    # BTN (dave)
        ...
        engine.advance_to_street("flop")               # SB (alice)
        ...
        engine.end_hand()
    """

    def __init__(self) -> None:
        self._state = HandState()

    # ----- state access -----

    @property
    def state(self) -> HandState:
        """The live hand state."""
        return self._state

    @property
    def hand_id(self) -> Optional[str]:
        return self._state.hand_id

    @property
    def button_seat(self) -> Optional[int]:
        return self._state.button_seat

    @property
    def current_street(self) -> Street:
        return self._state.current_street

    @property
    def has_active_hand(self) -> bool:
        return self._state.is_live

    @property
    def _cursor(self) -> TurnCursor:
        return TurnCursor(self._state)

    @property
    def _evaluator(self) -> BettingRoundEvaluator:
        return BettingRoundEvaluator(self._state)

    # ----- lifecycle -----

    def initialize_hand(
        self,
        players: Iterable[Any],
        button_seat: int,
        hand_id: Union[str, int],
    ) -> HandState:
        """
        Start a new hand, replacing any previous one.

        Args:
            players: Players dealt into the hand ({name, seat} records)
            button_seat: Seat holding the dealer button
            hand_id: Caller's identifier for the hand

        Returns:
            The new hand state

        Raises:
            InvalidButtonSeatError: If the button seat is not occupied
            InvalidSeatingError: If the roster cannot form an order
            MissingHandIdError: If no hand_id is given
        """
        if hand_id is None:
            self._state = HandState()
            raise MissingHandIdError("hand_id is required to start a hand")

        logger.info(f"=== Hand #{hand_id}: building action order (button seat {button_seat}) ===")

        try:
            roster = coerce_players(players)
            preflop = create_preflop_order(roster, button_seat)
            postflop = create_postflop_order(roster, button_seat)
        except TurnOrderError:
            # Don't leave the previous hand live behind a failed start
            self._state = HandState()
            raise

        state = HandState(
            hand_id=str(hand_id),
            button_seat=button_seat,
            current_street=Street.PREFLOP,
            preflop_order=preflop,
            postflop_order=postflop,
        )
        state.registry.initialize(roster)
        self._state = state

        logger.info(f"Preflop order: {format_order(preflop)}")
        logger.info(f"Postflop order: {format_order(postflop)}")
        return state

    def end_hand(self) -> None:
        """Clear the hand. Safe to call at any time, including repeatedly."""
        if self._state.is_live:
            logger.info(f"=== Hand #{self._state.hand_id} ended: action order cleared ===")
        self._state = HandState()

    # ----- turn queries -----

    def get_current_player(self, street: StreetLike) -> Optional[ActionSlot]:
        """
        Get the slot whose turn it is on a street.

        Returns:
            The acting slot, or None when no player can act (or no hand is live)
        """
        return self._cursor.current_player(street)

    def move_to_next_player(self, street: StreetLike) -> Optional[ActionSlot]:
        """Advance a street's cursor and return the next slot to act."""
        return self._cursor.move_to_next(street)

    def advance_to_street(self, street: StreetLike) -> Optional[ActionSlot]:
        """Make a street current, rewind its cursor and return its first actor."""
        return self._cursor.advance_to_street(street)

    def get_active_players(self, street: Optional[StreetLike] = None) -> List[ActionSlot]:
        """Slots still able to act on a street (the current street by default)."""
        return self._state.active_slots(street if street is not None else self.current_street)

    # ----- status -----

    def update_player_status(self, player: str, status: Union[PlayerStatus, str]) -> int:
        """
        Record that a player folded, went all-in or became active again.

        Returns:
            Number of players still active
        """
        return self._state.registry.set_status(player, status)

    def get_player_status(self, player: str) -> Optional[PlayerStatus]:
        return self._state.registry.get(player)

    # ----- display / round checks -----

    def get_action_order(self, street: StreetLike) -> List[ActionOrderEntry]:
        """Full order table for a street merged with live statuses."""
        registry = self._state.registry
        entries = []
        for slot in self._state.order_for(street):
            status = registry.get(slot.player)
            entries.append(ActionOrderEntry(
                player=slot.player,
                seat=slot.seat,
                position=slot.position,
                priority=slot.priority,
                status=status.value if status else None,
                can_act=status is PlayerStatus.ACTIVE,
            ))
        return entries

    def is_betting_round_complete(
        self,
        street: StreetLike,
        actions: Union[Mapping[str, Any], Iterable[Any], None],
    ) -> bool:
        """
        Check whether a street's betting is finished.

        Only checks that every active player has acted; contributions are
        not compared.
        """
        return self._evaluator.is_complete(street, actions)

    # ----- debug / serialization -----

    def debug_snapshot(self) -> str:
        """Multi-line dump of the hand, marking each table's cursor slot."""
        state = self._state
        statuses = state.registry.as_dict()
        lines = [
            f"ActionOrderEngine - hand #{state.hand_id}",
            f"  street: {state.current_street.value}",
            f"  button seat: {state.button_seat}",
            "  player status:",
        ]
        lines += [f"    {name}: {status}" for name, status in statuses.items()]

        postflop_street = (
            Street.FLOP if state.current_street.uses_preflop_order else state.current_street
        )
        for title, street in (("preflop", Street.PREFLOP), ("postflop", postflop_street)):
            current = self._cursor.current_player(street)
            lines.append(f"  {title} order:")
            for slot in state.order_for(street):
                marker = "->" if slot == current else "  "
                lines.append(
                    f"  {marker} {slot.priority}. {slot.position}({slot.player}) "
                    f"- {statuses.get(slot.player)}"
                )

        snapshot = "\n".join(lines)
        logger.debug(snapshot)
        return snapshot

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly snapshot of the hand for UI consumers."""
        state = self._state
        street = state.current_street
        current = self.get_current_player(street)
        return {
            "hand_id": state.hand_id,
            "button_seat": state.button_seat,
            "current_street": street.value,
            "current_player": current.to_dict() if current else None,
            "cursors": {s.value: state.cursors[s] for s in STREETS},
            "statuses": state.registry.as_dict(),
            "action_order": [e.to_dict() for e in self.get_action_order(street)],
        }

    def __repr__(self) -> str:
        return (
            f"ActionOrderEngine(hand={self._state.hand_id}, "
            f"street={self._state.current_street.value}, "
            f"active={self._state.registry.active_count()})"
        )
