"""
Game - The aggregate that owns every player's cards and runs the rules.

Interaction is pull-based:
1. Call what_next() to get either a notification (something happened,
   state has changed) or a request for input from a player
2. Call respond() with that player's action
3. Repeat

Design principles:
- Single point of mutation: only what_next() and respond() change state
- Validates before applying: a rejected response changes nothing
- One pending event at a time, drained by what_next()
- Randomness is injected so discards can be made deterministic
"""

from __future__ import annotations
from copy import deepcopy
from dataclasses import replace
from typing import Optional, Sequence
import logging
import random

from .. import config
from .cards import Card, Hand
from .state import (
    Phase, PhaseKind, Committing, Bidding, Resolving,
    MIN_PLAYERS, MAX_PLAYERS, WINNING_SCORE,
    no_passes, no_flips,
)
from .events import (
    Event, EventType, InputType, InputRequired, BidStarted, ChallengeStarted,
    ChallengerRevealedPenalty, PlayerEliminated, ChallengeWon,
    ChallengeAndGameWon, LastPlayerStanding,
)
from .action import (
    Response, ResponseType, ResponseError, ResponseErrorCode, ResponseResult,
)
from .validation import GameStateError, assert_valid

logger = logging.getLogger(__name__)


class Game:
    """
    A game of Skull for 3-6 players.

    Usage:
        game = Game(4)

        event = game.what_next()
        # InputRequired(player=0, input_type=InputType.PLAY_CARD)

        result = game.respond(Response.play_card(Card.PENALTY))
        if not result.success:
            print(result.error.message)
    """

    def __init__(self, player_count: int, rng: Optional[random.Random] = None):
        if not MIN_PLAYERS <= player_count <= MAX_PLAYERS:
            raise ValueError(
                f"Skull supports {MIN_PLAYERS}-{MAX_PLAYERS} players, got {player_count}"
            )
        self._scores: list[int] = [0] * player_count
        self._hands: list[Hand] = [Hand.full()] * player_count
        self._piles: list[tuple[Card, ...]] = [()] * player_count
        self._phase: Phase = Committing(current_player=0)
        self._pending: Optional[Event] = None
        self._rng = rng if rng is not None else random.Random(config.default_seed())

    @classmethod
    def create_from(
        cls,
        scores: Sequence[int],
        hands: Sequence[Hand],
        played_piles: Sequence[Sequence[Card]],
        phase: Phase,
        pending_event: Optional[Event] = None,
        rng: Optional[random.Random] = None,
    ) -> Game:
        """
        Build a game from raw state, e.g. to start from a mid-game scenario.

        Raises GameValidationError if the parts are inconsistent.
        """
        game = cls.__new__(cls)
        game._scores = list(scores)
        game._hands = list(hands)
        game._piles = [tuple(pile) for pile in played_piles]
        game._phase = _normalize_phase(phase)
        game._pending = pending_event
        game._rng = rng if rng is not None else random.Random(config.default_seed())
        assert_valid(game)
        return game

    # -------------------------------------------------------------------------
    # Read accessors
    # -------------------------------------------------------------------------

    @property
    def scores(self) -> tuple[int, ...]:
        return tuple(self._scores)

    @property
    def hands(self) -> tuple[Hand, ...]:
        return tuple(self._hands)

    @property
    def played_piles(self) -> tuple[tuple[Card, ...], ...]:
        """Cards on the table per player, bottom to top."""
        return tuple(self._piles)

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def pending_event(self) -> Optional[Event]:
        return self._pending

    @property
    def player_count(self) -> int:
        return len(self._hands)

    @property
    def remaining_player_count(self) -> int:
        """Number of players who still have cards."""
        return sum(1 for hand in self._hands if not hand.is_empty)

    @property
    def cards_played_count(self) -> int:
        return sum(len(pile) for pile in self._piles)

    @property
    def winner(self) -> Optional[int]:
        """The player who has won the game, if anyone has."""
        for player, score in enumerate(self._scores):
            if score >= WINNING_SCORE:
                return player
        if self.remaining_player_count == 1:
            return next(p for p, hand in enumerate(self._hands) if not hand.is_empty)
        return None

    def is_out(self, player: int) -> bool:
        return self._hands[player].is_empty

    def clone(self) -> Game:
        """Deep copy the game, random source included."""
        return deepcopy(self)

    # -------------------------------------------------------------------------
    # Event/response protocol
    # -------------------------------------------------------------------------

    def what_next(self) -> Event:
        """
        Get the next event.

        If an event is pending, its state transition is carried out, the
        slot is cleared and the event returned; the transition may leave a
        follow-up event pending. Otherwise returns the input required
        from the acting player.
        """
        event = self._pending
        if event is None:
            return self._idle_event()

        self._pending = None
        handler = self._get_event_handler(event.event_type)
        if handler:
            handler(event)
        logger.debug("Drained event %s", event.to_dict())
        return event

    def respond(self, response: Response) -> ResponseResult:
        """
        Give the game a player's response.

        Returns ResponseResult; on failure the game is unchanged.
        """
        if self._pending is not None:
            result = ResponseResult.failure(ResponseError.pending_event())
        elif self.winner is not None:
            result = ResponseResult.failure(ResponseError(ResponseErrorCode.GAME_OVER))
        else:
            handler = self._get_handler(self._phase.kind, response.response_type)
            if handler is None:
                result = ResponseResult.failure(
                    ResponseError.incorrect_input_type(self._expected_input())
                )
            else:
                result = handler(response)

        if result.success:
            logger.debug("Applied %s, phase now %s", response.to_dict(), self._phase.to_dict())
        else:
            logger.debug("Rejected %s: %s", response.to_dict(), result.error.message)
        return result

    def _idle_event(self) -> Event:
        """The event to report when nothing is pending."""
        winner = self.winner
        if winner is not None:
            if self._scores[winner] >= WINNING_SCORE:
                return ChallengeAndGameWon(winner)
            return LastPlayerStanding(winner)
        return InputRequired(player=self._phase.acting_player, input_type=self._expected_input())

    def _expected_input(self) -> InputType:
        phase = self._phase
        if isinstance(phase, Committing):
            player = phase.current_player
            if len(self._piles[player]) >= self._hands[player].count:
                return InputType.START_BID
            if self.cards_played_count >= self.remaining_player_count:
                return InputType.PLAY_CARD_OR_BID
            return InputType.PLAY_CARD
        if isinstance(phase, Bidding):
            return InputType.BID_OR_PASS
        return InputType.FLIP_CARD

    def _get_handler(self, phase_kind: PhaseKind, response_type: ResponseType):
        """Get the handler for a response in the current phase."""
        handlers = {
            (PhaseKind.COMMITTING, ResponseType.PLAY_CARD): self._handle_play_card,
            (PhaseKind.COMMITTING, ResponseType.BID): self._handle_start_bid,
            (PhaseKind.BIDDING, ResponseType.BID): self._handle_raise_bid,
            (PhaseKind.BIDDING, ResponseType.PASS): self._handle_pass,
            (PhaseKind.RESOLVING, ResponseType.FLIP): self._handle_flip,
        }
        return handlers.get((phase_kind, response_type))

    def _get_event_handler(self, event_type: EventType):
        """Get the transition carried out when an event is drained."""
        handlers = {
            EventType.CHALLENGE_STARTED: self._reveal_own_cards,
            EventType.CHALLENGER_REVEALED_PENALTY: self._end_lost_challenge,
            EventType.CHALLENGE_WON: self._end_won_challenge,
        }
        return handlers.get(event_type)

    # -------------------------------------------------------------------------
    # Response handlers
    # -------------------------------------------------------------------------

    def _handle_play_card(self, response: Response) -> ResponseResult:
        """Put a card face-down on the current player's pile."""
        player = self._phase.current_player
        pile = self._piles[player]
        available = self._hands[player] - pile

        if not isinstance(response.card, Card) or not available.has(response.card):
            return ResponseResult.failure(ResponseError(ResponseErrorCode.CARD_NOT_IN_HAND))

        self._piles[player] = pile + (response.card,)
        self._phase = Committing(current_player=self._next_player(player))
        return ResponseResult.ok()

    def _handle_start_bid(self, response: Response) -> ResponseResult:
        """Open the bidding from the commit phase."""
        expected = self._expected_input()
        if expected == InputType.PLAY_CARD:
            return ResponseResult.failure(ResponseError.incorrect_input_type(expected))

        total = self.cards_played_count
        amount = response.amount
        if amount is None or amount < 1:
            return ResponseResult.failure(ResponseError.bid_too_low(1))
        if amount > total:
            return ResponseResult.failure(ResponseError.bid_too_high(total))

        player = self._phase.current_player
        if amount == total:
            # Nobody can outbid the maximum
            self._start_challenge(player, amount)
            return ResponseResult.ok()

        self._phase = Bidding(
            current_bidder=self._next_player(player, include_self=False),
            highest_bid=amount,
            highest_bidder=player,
            max_bid=total,
            passed=no_passes(self.player_count),
        )
        self._pending = BidStarted()
        logger.debug("Player %d opened bidding at %d of %d", player, amount, total)
        return ResponseResult.ok()

    def _handle_raise_bid(self, response: Response) -> ResponseResult:
        phase = self._phase
        amount = response.amount
        minimum = phase.highest_bid + 1
        if amount is None:
            return ResponseResult.failure(ResponseError.bid_too_low(minimum))
        if amount > phase.max_bid:
            return ResponseResult.failure(ResponseError.bid_too_high(phase.max_bid))
        if amount < minimum:
            return ResponseResult.failure(ResponseError.bid_too_low(minimum))

        bidder = phase.current_bidder
        if amount == phase.max_bid:
            self._start_challenge(bidder, amount)
            return ResponseResult.ok()

        self._phase = replace(
            phase,
            current_bidder=self._next_player(bidder, passed=phase.passed, include_self=False),
            highest_bid=amount,
            highest_bidder=bidder,
        )
        return ResponseResult.ok()

    def _handle_pass(self, response: Response) -> ResponseResult:
        phase = self._phase
        bidder = phase.current_bidder
        passed = list(phase.passed)
        passed[bidder] = True
        passed = tuple(passed)

        passed_remaining = sum(
            1 for player, has_passed in enumerate(passed)
            if has_passed and not self._hands[player].is_empty
        )
        if passed_remaining >= self.remaining_player_count - 1:
            # Everyone but the highest bidder has passed
            self._start_challenge(phase.highest_bidder, phase.highest_bid)
            return ResponseResult.ok()

        self._phase = replace(
            phase,
            current_bidder=self._next_player(bidder, passed=passed, include_self=False),
            passed=passed,
        )
        return ResponseResult.ok()

    def _handle_flip(self, response: Response) -> ResponseResult:
        """Flip one of another player's cards."""
        phase = self._phase
        player, index = response.player, response.index

        if (
            player is None
            or index is None
            or not 0 <= player < self.player_count
            or not 0 <= index < len(self._piles[player])
        ):
            return ResponseResult.failure(ResponseError(ResponseErrorCode.INVALID_INDEX))
        if player == phase.challenger:
            return ResponseResult.failure(
                ResponseError(ResponseErrorCode.MANUALLY_FLIPPING_OWN_CARDS)
            )
        if index in phase.flipped[player]:
            return ResponseResult.failure(ResponseError(ResponseErrorCode.CARD_ALREADY_FLIPPED))

        self._phase = phase.with_flip(player, index)
        if self._piles[player][index] == Card.PENALTY:
            self._lose_challenge(penalty_player=player)
        elif self._phase.flipped_count == phase.target:
            self._win_challenge()
        return ResponseResult.ok()

    # -------------------------------------------------------------------------
    # Challenges
    # -------------------------------------------------------------------------

    def _start_challenge(self, challenger: int, target: int) -> None:
        self._phase = Resolving(
            challenger=challenger,
            target=target,
            flipped=no_flips(self.player_count),
        )
        self._pending = ChallengeStarted()
        logger.info("Player %d challenges to reveal %d card(s)", challenger, target)

    def _reveal_own_cards(self, event: ChallengeStarted) -> None:
        """
        Flip the challenger's own cards, top of the pile first.

        Stops at a penalty card. If the target fits within the challenger's
        own pile and only safe cards turned up, the challenge is won.
        """
        phase = self._resolving_phase()
        challenger = phase.challenger
        pile = self._piles[challenger]
        start = max(0, len(pile) - phase.target)

        flipped = []
        for index in range(len(pile) - 1, start - 1, -1):
            flipped.append(index)
            if pile[index] == Card.PENALTY:
                break

        new_flipped = list(phase.flipped)
        new_flipped[challenger] = tuple(sorted(flipped))
        self._phase = replace(phase, flipped=tuple(new_flipped))

        if flipped and pile[flipped[-1]] == Card.PENALTY:
            self._lose_challenge(penalty_player=challenger)
        elif phase.target <= len(pile):
            self._win_challenge()

    def _lose_challenge(self, penalty_player: int) -> None:
        challenger = self._resolving_phase().challenger
        self._hands[challenger] = self._hands[challenger].discard_one(self._rng)
        self._pending = ChallengerRevealedPenalty(
            challenger=challenger,
            penalty_player=penalty_player,
        )
        logger.info(
            "Player %d revealed player %d's penalty card and lost a card",
            challenger, penalty_player,
        )

    def _win_challenge(self) -> None:
        challenger = self._resolving_phase().challenger
        self._scores[challenger] += 1
        if self._scores[challenger] >= WINNING_SCORE:
            self._pending = ChallengeAndGameWon(challenger)
            logger.info("Player %d won the game", challenger)
        else:
            self._pending = ChallengeWon(challenger)
            logger.info("Player %d won a challenge", challenger)

    def _end_lost_challenge(self, event: ChallengerRevealedPenalty) -> None:
        """Start a new round with the owner of the revealed penalty card."""
        challenger = event.challenger
        next_player = event.penalty_player
        self._clear_table()

        if self._hands[challenger].is_empty:
            self._pending = PlayerEliminated(challenger)
            logger.info("Player %d is out", challenger)
            if next_player == challenger:
                next_player = self._next_player(challenger)

        self._phase = Committing(current_player=next_player)

    def _end_won_challenge(self, event: ChallengeWon) -> None:
        self._clear_table()
        self._phase = Committing(current_player=event.player)

    def _clear_table(self) -> None:
        self._piles = [()] * self.player_count

    def _resolving_phase(self) -> Resolving:
        phase = self._phase
        if not isinstance(phase, Resolving):
            raise GameStateError(f"Expected a challenge in progress, phase is {phase.kind.value}")
        return phase

    # -------------------------------------------------------------------------
    # Turn order
    # -------------------------------------------------------------------------

    def _next_player(
        self,
        after: int,
        passed: Optional[Sequence[bool]] = None,
        include_self: bool = True,
    ) -> int:
        """
        Find the next player after `after` who is still in (and, when
        `passed` is given, hasn't passed). Wraps around the table.
        """
        n = self.player_count
        stop = n + 1 if include_self else n
        for step in range(1, stop):
            candidate = (after + step) % n
            if self._hands[candidate].is_empty:
                continue
            if passed is not None and passed[candidate]:
                continue
            return candidate
        raise GameStateError(f"No eligible player after player {after}")


def _normalize_phase(phase: Phase) -> Phase:
    """Store per-player phase data as tuples, whatever sequence was given."""
    if isinstance(phase, Bidding):
        return replace(phase, passed=tuple(phase.passed))
    if isinstance(phase, Resolving):
        return replace(phase, flipped=tuple(tuple(indexes) for indexes in phase.flipped))
    return phase
