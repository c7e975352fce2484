"""
Tests for the Pydantic game views.

Validates that:
- Views carry the public state of every seat
- Face-down cards stay hidden from everyone but their owner
- Flipped cards are shown to everyone
- Events convert with their fields
"""

import json

import pytest

from ..engine_core import (
    Game, Hand, Card, Committing,
    InputType, InputRequired, ChallengerRevealedPenalty, PlayerEliminated,
    Response,
)
from ..schemas import PhaseName, EventInfo, build_game_state, event_info


SAFE, PENALTY = Card.SAFE, Card.PENALTY


class TestGameStateView:
    """Tests for build_game_state()."""

    def test_spectator_view_of_new_game(self, new_game: Game):
        view = build_game_state(new_game)

        assert view.player_count == 3
        assert view.remaining_player_count == 3
        assert view.cards_played == 0
        assert view.viewer is None
        assert view.winner is None
        assert view.pending_event is None
        assert view.phase.name == PhaseName.COMMITTING
        assert view.phase.acting_player == 0

        assert [p.player for p in view.players] == [0, 1, 2]
        assert view.players[0].is_current_turn
        assert not view.players[1].is_current_turn
        assert all(p.cards_in_hand == 4 for p in view.players)
        assert all(p.hand is None for p in view.players)

    def test_face_down_cards_hidden(self, new_game: Game):
        new_game.respond(Response.play_card(PENALTY))
        new_game.respond(Response.play_card(SAFE))

        view = build_game_state(new_game, viewer=0)

        assert view.players[0].pile == ["penalty"]
        assert view.players[1].pile == [None]
        assert view.players[1].cards_played == 1
        assert view.players[0].hand == ["penalty", "safe", "safe", "safe"]
        assert view.players[1].hand is None

    def test_flipped_cards_shown(self, one_safe_each: Game):
        one_safe_each.respond(Response.bid(3))
        one_safe_each.what_next()
        one_safe_each.respond(Response.flip(1, 0))

        view = build_game_state(one_safe_each)

        assert view.phase.name == PhaseName.RESOLVING
        assert view.phase.challenger == 0
        assert view.phase.target == 3
        assert view.phase.flipped_count == 2
        assert view.players[0].pile == ["safe"]
        assert view.players[1].pile == ["safe"]
        assert view.players[1].flipped == [0]
        assert view.players[2].pile == [None]

    def test_bidding_view(self, one_safe_each: Game):
        one_safe_each.respond(Response.bid(1))
        view = build_game_state(one_safe_each)

        assert view.pending_event.event_type == "bid_started"
        assert view.phase.name == PhaseName.BIDDING
        assert view.phase.highest_bid == 1
        assert view.phase.highest_bidder == 0
        assert view.phase.max_bid == 3

        one_safe_each.what_next()
        one_safe_each.respond(Response.pass_turn())
        view = build_game_state(one_safe_each)

        assert view.players[1].has_passed
        assert view.players[2].is_current_turn

    def test_eliminated_player(self, rng):
        game = Game.create_from(
            scores=[0, 0, 0, 1],
            hands=[Hand.full(), Hand.empty(), Hand.full(), Hand.full()],
            played_piles=[[], [], [], []],
            phase=Committing(current_player=0),
            rng=rng,
        )
        view = build_game_state(game)

        assert view.remaining_player_count == 3
        assert view.players[1].is_out
        assert view.players[1].cards_in_hand == 0
        assert view.players[3].score == 1

    @pytest.mark.parametrize("viewer", [-1, 3])
    def test_invalid_viewer(self, new_game: Game, viewer: int):
        with pytest.raises(ValueError):
            build_game_state(new_game, viewer=viewer)

    def test_serializes_to_json(self, new_game: Game):
        data = json.loads(build_game_state(new_game, viewer=1).model_dump_json())

        assert data["player_count"] == 3
        assert data["phase"]["name"] == "committing"
        assert data["players"][1]["hand"] == ["penalty", "safe", "safe", "safe"]
        assert data["players"][0]["hand"] is None


class TestEventInfo:
    """Tests for event conversion."""

    def test_input_required(self):
        info = event_info(InputRequired(2, InputType.BID_OR_PASS))

        assert info == EventInfo(event_type="input_required", player=2, input_type="bid_or_pass")

    def test_penalty_revealed(self):
        info = event_info(ChallengerRevealedPenalty(challenger=0, penalty_player=1))

        assert info.event_type == "challenger_revealed_penalty"
        assert info.challenger == 0
        assert info.penalty_player == 1
        assert info.player is None

    def test_player_eliminated(self):
        data = event_info(PlayerEliminated(3)).model_dump()

        assert data["event_type"] == "player_eliminated"
        assert data["player"] == 3
