"""
Tests for players and the status registry.
"""

import pytest
from actionorder.core.errors import InvalidStatusError, UnknownPlayerError, InvalidSeatingError
from actionorder.core.player import Player, PlayerStatusRegistry
from actionorder.core.rules import PlayerStatus


class TestPlayer:
    """Tests for roster records."""

    def test_coerce_mapping(self):
        assert Player.coerce({"name": "alice", "seat": "4"}) == Player("alice", 4)

    def test_coerce_pair(self):
        assert Player.coerce(("bob", 2)) == Player("bob", 2)

    @pytest.mark.parametrize("value", [
        {"seat": 1},
        "a1",
        b"a1",
        ("x", 3.9),
        ("x", 3.0),
        ("z", True),
        {"name": "y", "seat": False},
        ("w", "3.5"),
        ("v", None),
        ("u", 1, 2),
    ])
    def test_coerce_bad_value(self, value):
        with pytest.raises(InvalidSeatingError):
            Player.coerce(value)

    def test_coerce_integer_string_seat(self):
        assert Player.coerce(("bob", " 3 ")) == Player("bob", 3)

    def test_to_dict(self):
        assert Player("alice", 1).to_dict() == {"name": "alice", "seat": 1}


class TestPlayerStatusRegistry:
    """Tests for live status tracking."""

    @pytest.fixture
    def registry(self, four_players):
        registry = PlayerStatusRegistry()
        registry.initialize(four_players)
        return registry

    def test_initialize_sets_everyone_active(self, registry, four_players):
        assert len(registry) == 4
        for player in four_players:
            assert registry.get(player.name) is PlayerStatus.ACTIVE

    def test_initialize_replaces_previous_players(self, registry):
        registry.initialize([Player("erin", 9), Player("frank", 2)])
        assert registry.as_dict() == {"erin": "active", "frank": "active"}
        assert "alice" not in registry

    def test_set_status_returns_active_count(self, registry):
        assert registry.set_status("carol", "folded") == 3
        assert registry.set_status("dave", PlayerStatus.ALL_IN) == 2
        assert registry.set_status("carol", "active") == 3

    def test_all_in_is_not_active(self, registry):
        registry.set_status("alice", "allin")
        assert not registry.is_active("alice")
        assert registry.get("alice") is PlayerStatus.ALL_IN

    def test_unknown_player(self, registry):
        with pytest.raises(UnknownPlayerError):
            registry.set_status("mallory", "folded")
        assert "mallory" not in registry

    def test_invalid_status_leaves_state_unchanged(self, registry):
        with pytest.raises(InvalidStatusError):
            registry.set_status("alice", "sleeping")
        assert registry.get("alice") is PlayerStatus.ACTIVE

    def test_get_unknown_player(self, registry):
        assert registry.get("nobody") is None
        assert not registry.is_active("nobody")

    def test_clear(self, registry):
        registry.clear()
        assert len(registry) == 0
        assert registry.active_count() == 0
