"""
Pytest configuration and shared fixtures for ActionOrder tests.
"""

import pytest
from actionorder.core.engine import ActionOrderEngine
from actionorder.core.player import Player


@pytest.fixture
def four_players():
    """Four players at seats 1, 3, 5, 7."""
    return [
        Player(name="alice", seat=1),
        Player(name="bob", seat=3),
        Player(name="carol", seat=5),
        Player(name="dave", seat=7),
    ]


@pytest.fixture
def engine():
    """A fresh engine with no hand."""
    return ActionOrderEngine()


@pytest.fixture
def four_player_engine(engine, four_players):
    """
    Engine with a 4-player hand, button on seat 7.

    Positions: alice SB, bob BB, carol UTG, dave BTN.
    """
    engine.initialize_hand(four_players, button_seat=7, hand_id="1")
    return engine


@pytest.fixture
def make_players():
    """Factory for players named p<seat> at the given seats."""
    def _make(seats):
        return [Player(name=f"p{seat}", seat=seat) for seat in seats]
    return _make
