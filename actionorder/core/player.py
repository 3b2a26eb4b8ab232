"""
Player records and live status tracking for a single hand.

Manages:
- Player: the read-only roster entry (name + seat) handed in at hand start
- PlayerStatusRegistry: the mutable map of player name -> status
"""

from __future__ import annotations
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union
from dataclasses import dataclass
import logging

from actionorder.core.errors import InvalidSeatingError, UnknownPlayerError
from actionorder.core.rules import PlayerStatus


logger = logging.getLogger(__name__)


def _parse_seat(value: Any) -> int:
    """Seat number from an int or an integer string like "3"."""
    if isinstance(value, bool):
        raise TypeError(f"seat must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        return int(value.strip())
    raise TypeError(f"seat must be an integer, got {value!r}")


@dataclass(frozen=True)
class Player:
    """
    A player dealt into the current hand.

    Attributes:
        name: Unique identifier for the player
        seat: Seat number at the table
    """
    name: str
    seat: int

    @classmethod
    def coerce(cls, value: Union["Player", Mapping[str, Any], tuple]) -> "Player":
        """
        Build a Player from a Player, a {name, seat} mapping or a (name, seat) pair.

        Raises:
            InvalidSeatingError: If the value has no usable name or seat
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, (str, bytes)):
            raise InvalidSeatingError(f"Cannot read player from {value!r}: expected a record")
        try:
            if isinstance(value, Mapping):
                name, seat = value["name"], value["seat"]
            else:
                name, seat = value
            return cls(name=str(name), seat=_parse_seat(seat))
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidSeatingError(f"Cannot read player from {value!r}: {e}") from e

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "seat": self.seat}


def coerce_players(players: Iterable[Any]) -> List[Player]:
    """Normalise a roster into Player records."""
    return [Player.coerce(p) for p in players]


class PlayerStatusRegistry:
    """
    Live status of every player dealt into the hand.

    The registry never changes a status on its own: callers decide when a
    player folds or goes all-in and report it through set_status().
    """

    def __init__(self) -> None:
        self._statuses: Dict[str, PlayerStatus] = {}

    def initialize(self, players: Iterable[Any]) -> None:
        """Reset the registry so that exactly these players are active."""
        self._statuses = {}
        for player in coerce_players(players):
            self._statuses[player.name] = PlayerStatus.ACTIVE

    def clear(self) -> None:
        self._statuses = {}

    def set_status(self, player: str, status: Union[PlayerStatus, str]) -> int:
        """
        Change a player's status.

        Args:
            player: Name of a player dealt into the hand
            status: New status ("active", "folded", "allin" or a PlayerStatus)

        Returns:
            Number of players still active after the change

        Raises:
            UnknownPlayerError: If the player is not in the hand
            InvalidStatusError: If the status is not recognised
        """
        new_status = PlayerStatus.parse(status)
        if player not in self._statuses:
            logger.warning(f"Status update for unknown player {player!r}")
            raise UnknownPlayerError(f"Player {player!r} is not dealt into this hand")

        old_status = self._statuses[player]
        self._statuses[player] = new_status
        remaining = self.active_count()
        logger.info(
            f"Player status changed: {player} {old_status.value} -> {new_status.value} "
            f"({remaining} active)"
        )
        return remaining

    def get(self, player: str) -> Optional[PlayerStatus]:
        """Status of a player, or None if they are not in the hand."""
        return self._statuses.get(player)

    def is_active(self, player: str) -> bool:
        return self._statuses.get(player) is PlayerStatus.ACTIVE

    def active_count(self) -> int:
        return sum(1 for s in self._statuses.values() if s is PlayerStatus.ACTIVE)

    def as_dict(self) -> Dict[str, str]:
        """Statuses keyed by player name, using wire values."""
        return {name: status.value for name, status in self._statuses.items()}

    def __contains__(self, player: object) -> bool:
        return player in self._statuses

    def __len__(self) -> int:
        return len(self._statuses)

    def __repr__(self) -> str:
        return f"PlayerStatusRegistry({self.as_dict()})"
