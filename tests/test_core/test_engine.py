"""
Tests for the hand lifecycle controller.
"""

import logging

import pytest
from actionorder.core.engine import ActionOrderEngine
from actionorder.core.errors import (
    InvalidButtonSeatError, InvalidSeatingError, UnknownStreetError,
    UnknownPlayerError, TurnOrderError, MissingHandIdError,
)
from actionorder.core.rules import Street, PlayerStatus


class TestInitializeHand:
    """Tests for starting a hand."""

    def test_builds_both_orders(self, four_player_engine):
        state = four_player_engine.state
        assert [s.position for s in state.preflop_order] == ["UTG", "BTN", "SB", "BB"]
        assert [s.position for s in state.postflop_order] == ["SB", "BB", "UTG", "BTN"]

    def test_initial_state(self, four_player_engine):
        engine = four_player_engine
        assert engine.has_active_hand
        assert engine.hand_id == "1"
        assert engine.button_seat == 7
        assert engine.current_street is Street.PREFLOP
        assert all(i == 0 for i in engine.state.cursors.values())
        assert engine.state.registry.as_dict() == {
            "alice": "active", "bob": "active", "carol": "active", "dave": "active",
        }

    def test_hand_id_is_stored_as_string(self, engine, four_players):
        engine.initialize_hand(four_players, 7, 42)
        assert engine.hand_id == "42"

    def test_missing_hand_id(self, four_player_engine, four_players):
        """A start without an id fails typed and leaves no hand live."""
        engine = four_player_engine
        with pytest.raises(MissingHandIdError):
            engine.initialize_hand(four_players, 7, None)

        assert not engine.has_active_hand
        assert engine.get_current_player("preflop") is None

    def test_missing_hand_id_is_turn_order_error(self, engine, four_players):
        with pytest.raises(TurnOrderError):
            engine.initialize_hand(four_players, 7, None)

    def test_replaces_previous_hand(self, four_player_engine, make_players):
        engine = four_player_engine
        engine.update_player_status("carol", "folded")
        engine.move_to_next_player("preflop")
        engine.advance_to_street("flop")

        engine.initialize_hand(make_players([2, 4, 6]), button_seat=2, hand_id="2")

        assert engine.hand_id == "2"
        assert engine.current_street is Street.PREFLOP
        assert all(i == 0 for i in engine.state.cursors.values())
        assert engine.get_player_status("carol") is None
        assert [s.position for s in engine.state.preflop_order] == ["BTN", "SB", "BB"]

    def test_invalid_button_surfaces_typed_error(self, four_player_engine, four_players):
        """A bad button seat fails loudly and leaves no hand live."""
        engine = four_player_engine
        with pytest.raises(InvalidButtonSeatError):
            engine.initialize_hand(four_players, button_seat=2, hand_id="2")

        assert not engine.has_active_hand
        assert engine.get_action_order("preflop") == []
        assert engine.get_current_player("preflop") is None

    def test_invalid_roster(self, engine, make_players):
        with pytest.raises(InvalidSeatingError):
            engine.initialize_hand(make_players([3]), button_seat=3, hand_id="1")

    @pytest.mark.parametrize("players,button_seat", [
        (["a1", "b2", {"name": "c", "seat": 3}], 3),
        ([("x", 3.9), ("y", 2), ("z", True)], 2),
    ])
    def test_malformed_roster_entries(self, four_player_engine, players, button_seat):
        """Bare strings, float and bool seats are rejected, not coerced."""
        with pytest.raises(InvalidSeatingError):
            four_player_engine.initialize_hand(players, button_seat=button_seat, hand_id="h")
        assert not four_player_engine.has_active_hand

    def test_reinitialize_rebuilds_same_order(self, four_player_engine, four_players):
        first = four_player_engine.state.preflop_order
        four_player_engine.end_hand()
        four_player_engine.initialize_hand(four_players, 7, "1")
        assert four_player_engine.state.preflop_order == first

    def test_engines_are_independent(self, four_player_engine, four_players):
        other = ActionOrderEngine()
        other.initialize_hand(four_players, 1, "x")
        other.update_player_status("carol", "folded")

        assert four_player_engine.get_player_status("carol") is PlayerStatus.ACTIVE
        assert four_player_engine.button_seat == 7


class TestTurnFlow:
    """Tests for sequencing players through a hand."""

    def test_fold_utg_preflop(self, four_player_engine):
        engine = four_player_engine
        assert engine.get_current_player("preflop").player == "carol"

        remaining = engine.update_player_status("carol", "folded")

        assert remaining == 3
        current = engine.get_current_player("preflop")
        assert (current.position, current.seat, current.priority) == ("BTN", 7, 1)

    def test_full_preflop_then_flop(self, four_player_engine):
        engine = four_player_engine
        actions = {}

        slot = engine.get_current_player("preflop")
        actions[slot.player] = "fold"
        engine.update_player_status(slot.player, "folded")

        # carol folded, so index 0 now lands on dave
        slot = engine.get_current_player("preflop")
        assert slot.player == "dave"
        actions[slot.player] = "call"

        slot = engine.move_to_next_player("preflop")
        assert slot.player == "alice"
        actions[slot.player] = "call"
        assert not engine.is_betting_round_complete("preflop", actions)

        slot = engine.move_to_next_player("preflop")
        assert slot.player == "bob"
        actions[slot.player] = "check"
        assert engine.is_betting_round_complete("preflop", actions)

        first = engine.advance_to_street("flop")
        assert engine.current_street is Street.FLOP
        assert first.player == "alice"
        assert engine.move_to_next_player("flop").player == "bob"
        assert engine.move_to_next_player("flop").player == "dave"

    def test_advance_right_after_initialize(self, four_player_engine):
        first = four_player_engine.advance_to_street("river")
        assert first.position == "SB"
        assert four_player_engine.state.cursors[Street.RIVER] == 0

    def test_advance_after_small_blind_folds(self, four_player_engine):
        four_player_engine.update_player_status("alice", "folded")
        assert four_player_engine.advance_to_street("flop").position == "BB"

    def test_all_in_player_skipped(self, four_player_engine):
        engine = four_player_engine
        engine.update_player_status("dave", "allin")
        engine.advance_to_street("turn")
        seen = [engine.move_to_next_player("turn").player for _ in range(3)]
        assert seen == ["bob", "carol", "alice"]

    def test_get_active_players_defaults_to_current_street(self, four_player_engine):
        engine = four_player_engine
        engine.update_player_status("bob", "folded")
        assert [s.player for s in engine.get_active_players()] == ["carol", "dave", "alice"]
        engine.advance_to_street("flop")
        assert [s.player for s in engine.get_active_players()] == ["alice", "carol", "dave"]

    def test_heads_up_flow(self, engine, make_players):
        engine.initialize_hand(make_players([2, 6]), button_seat=6, hand_id="hu")
        assert engine.get_current_player("preflop").position == "SB"
        assert engine.move_to_next_player("preflop").position == "BB"
        assert engine.advance_to_street("flop").position == "SB"

    def test_unknown_street_rejected(self, four_player_engine):
        with pytest.raises(UnknownStreetError):
            four_player_engine.get_current_player("showdown")
        with pytest.raises(UnknownStreetError):
            four_player_engine.advance_to_street("fifth")

    def test_unknown_player_rejected(self, four_player_engine):
        with pytest.raises(UnknownPlayerError):
            four_player_engine.update_player_status("mallory", "folded")


class TestActionOrder:
    """Tests for the display projection."""

    def test_merges_status(self, four_player_engine):
        engine = four_player_engine
        engine.update_player_status("carol", "folded")
        engine.update_player_status("alice", "allin")

        order = engine.get_action_order("preflop")

        assert [(e.position, e.status, e.can_act) for e in order] == [
            ("UTG", "folded", False),
            ("BTN", "active", True),
            ("SB", "allin", False),
            ("BB", "active", True),
        ]
        assert [e.priority for e in order] == [0, 1, 2, 3]

    def test_does_not_move_cursor(self, four_player_engine):
        engine = four_player_engine
        engine.move_to_next_player("flop")
        engine.get_action_order("flop")
        assert engine.state.cursors[Street.FLOP] == 1

    def test_entry_to_dict(self, four_player_engine):
        entry = four_player_engine.get_action_order("flop")[0]
        assert entry.to_dict() == {
            "player": "alice", "seat": 1, "position": "SB", "priority": 0,
            "status": "active", "can_act": True,
        }


class TestEndHand:
    """Tests for clearing a hand."""

    def test_queries_after_end_hand(self, four_player_engine):
        engine = four_player_engine
        engine.end_hand()

        assert not engine.has_active_hand
        assert engine.hand_id is None
        assert engine.current_street is Street.PREFLOP
        assert engine.get_current_player("preflop") is None
        assert engine.move_to_next_player("flop") is None
        assert engine.get_action_order("river") == []
        assert engine.get_active_players() == []
        assert engine.is_betting_round_complete("turn", {})

    def test_end_hand_is_idempotent(self, engine):
        engine.end_hand()
        engine.end_hand()
        assert not engine.has_active_hand

    def test_status_update_after_end_hand(self, four_player_engine):
        four_player_engine.end_hand()
        with pytest.raises(UnknownPlayerError):
            four_player_engine.update_player_status("alice", "folded")


class TestDebugSurface:
    """Tests for snapshots."""

    def test_debug_snapshot(self, four_player_engine, caplog):
        engine = four_player_engine
        engine.update_player_status("carol", "folded")

        with caplog.at_level(logging.DEBUG, logger="actionorder.core.engine"):
            snapshot = engine.debug_snapshot()

        assert "hand #1" in snapshot
        assert "carol: folded" in snapshot
        assert "-> 1. BTN(dave) - active" in snapshot
        assert "-> 0. SB(alice) - active" in snapshot
        assert snapshot in caplog.text

    def test_to_dict(self, four_player_engine):
        engine = four_player_engine
        engine.advance_to_street("flop")
        data = engine.to_dict()

        assert data["hand_id"] == "1"
        assert data["current_street"] == "flop"
        assert data["current_player"]["player"] == "alice"
        assert data["cursors"] == {"preflop": 0, "flop": 0, "turn": 0, "river": 0}
        assert [e["position"] for e in data["action_order"]] == ["SB", "BB", "UTG", "BTN"]

    def test_to_dict_without_hand(self, engine):
        data = engine.to_dict()
        assert data["hand_id"] is None
        assert data["current_player"] is None
        assert data["action_order"] == []


class TestLogging:
    """Tests for lifecycle logging."""

    def test_logs_hand_start_and_end(self, engine, four_players, caplog):
        with caplog.at_level(logging.INFO):
            engine.initialize_hand(four_players, 7, "9")
            engine.end_hand()

        assert "Hand #9" in caplog.text
        assert "Preflop order: UTG(carol) -> BTN(dave) -> SB(alice) -> BB(bob)" in caplog.text
        assert "ended" in caplog.text

    def test_logs_invalid_button(self, engine, four_players, caplog):
        with caplog.at_level(logging.ERROR):
            with pytest.raises(InvalidButtonSeatError):
                engine.initialize_hand(four_players, 8, "9")
        assert "Button seat 8 not found" in caplog.text
