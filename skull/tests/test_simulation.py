"""
Randomized full games.

Plays many seeded games with a random (but always legal) player and
checks after every step that:
- Every legal response is accepted
- The game stays valid after every response and every drained event
- Input requests are stable and go to a player who can act
- Cards on the table and flips only grow until the table is cleared
- Every game ends
"""

import random

import pytest

from ..engine_core import (
    Game, Bidding, Resolving,
    InputType, InputRequired, ChallengeAndGameWon, LastPlayerStanding,
    Response, validate_game,
)


MAX_STEPS = 5000


def choose_response(game: Game, event: InputRequired, rng: random.Random) -> Response:
    """Pick a random legal response to an input request."""
    player = event.player
    input_type = event.input_type

    if input_type == InputType.PLAY_CARD or (
        input_type == InputType.PLAY_CARD_OR_BID and rng.random() < 0.6
    ):
        available = game.hands[player] - game.played_piles[player]
        return Response.play_card(rng.choice(available.as_list()))

    if input_type in (InputType.PLAY_CARD_OR_BID, InputType.START_BID):
        return Response.bid(rng.randint(1, game.cards_played_count))

    phase = game.phase
    if input_type == InputType.BID_OR_PASS:
        if rng.random() < 0.5:
            return Response.pass_turn()
        return Response.bid(rng.randint(phase.highest_bid + 1, phase.max_bid))

    options = [
        (owner, index)
        for owner, pile in enumerate(game.played_piles)
        if owner != phase.challenger
        for index in range(len(pile))
        if index not in phase.flipped[owner]
    ]
    return Response.flip(*rng.choice(options))


def play_game(player_count: int, seed: int) -> Game:
    policy_rng = random.Random(seed)
    game = Game(player_count, rng=random.Random(seed * 7919 + player_count))
    cards_on_table = 0
    flips = 0

    for _ in range(MAX_STEPS):
        if game.winner is not None and game.pending_event is None:
            return game

        event = game.what_next()

        result = validate_game(game)
        assert result.valid, result.errors

        phase = game.phase
        if game.cards_played_count:
            assert game.cards_played_count >= cards_on_table
        cards_on_table = game.cards_played_count

        if isinstance(phase, Resolving):
            assert phase.flipped_count >= flips
            assert phase.target <= game.cards_played_count
            flips = phase.flipped_count
        else:
            flips = 0

        if not isinstance(event, InputRequired):
            continue

        assert game.what_next() == event
        assert not game.is_out(event.player)
        if isinstance(phase, Bidding):
            assert not phase.passed[event.player]

        response = choose_response(game, event, policy_rng)
        result = game.respond(response)
        assert result.success, (response, result.error)

        after_response = validate_game(game)
        assert after_response.valid, (response, after_response.errors)

    pytest.fail(f"Game with {player_count} players (seed {seed}) didn't finish")


class TestRandomGames:
    """Tests for complete games played at random."""

    @pytest.mark.parametrize("player_count", [3, 4, 5, 6])
    @pytest.mark.parametrize("seed", range(5))
    def test_game_plays_to_the_end(self, player_count: int, seed: int):
        game = play_game(player_count, seed)

        winner = game.winner
        assert winner is not None
        assert not game.is_out(winner)
        assert game.what_next() in (ChallengeAndGameWon(winner), LastPlayerStanding(winner))
