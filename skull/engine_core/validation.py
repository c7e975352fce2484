"""
Game Validation - Consistency checks for an assembled game.

Normal play keeps every invariant by construction, so these checks are
only needed when a game is built from raw parts with Game.create_from()
(for example to set up a mid-game scenario). A failure there is a bug in
whoever assembled the parts.

Validates that:
1. Per-player data and indices fit the player count
2. Hands are valid and played cards came from them
3. Scores agree with the pending event
4. The pending event fits the phase
5. The phase data is consistent with the cards on the table
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .cards import Card, Hand, HandError, PILE_CAPACITY
from .state import (
    Committing, Bidding, Resolving,
    MIN_PLAYERS, MAX_PLAYERS, WINNING_SCORE,
)
from .events import (
    InputRequired, BidStarted, ChallengeStarted, ChallengerRevealedPenalty,
    PlayerEliminated, ChallengeWon, ChallengeAndGameWon, LastPlayerStanding,
)

if TYPE_CHECKING:
    from .game import Game


class GameStateError(Exception):
    """Raised when the game is asked to do something its state doesn't allow."""


class GameValidationError(GameStateError):
    """Raised when an assembled game fails validation."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(
            f"Game validation failed with {len(errors)} error(s): " + "; ".join(errors)
        )


@dataclass
class ValidationResult:
    """Result of validation."""
    valid: bool
    errors: list[str]


def validate_game(game: Game) -> ValidationResult:
    """
    Check every invariant of a game without changing it.

    Returns ValidationResult listing all problems found.
    """
    errors = _validate_shape(game)
    if errors:
        # The remaining checks index per-player data
        return ValidationResult(valid=False, errors=errors)

    errors.extend(_validate_hands_and_piles(game))
    errors.extend(_validate_scores(game))
    errors.extend(_validate_pending_event(game))

    phase = game.phase
    if isinstance(phase, Committing):
        errors.extend(_validate_committing(game, phase))
    elif isinstance(phase, Bidding):
        errors.extend(_validate_bidding(game, phase))
    else:
        errors.extend(_validate_resolving(game, phase))

    return ValidationResult(valid=len(errors) == 0, errors=errors)


def assert_valid(game: Game) -> None:
    """Raise GameValidationError if the game is inconsistent."""
    result = validate_game(game)
    if not result.valid:
        raise GameValidationError(result.errors)


def _validate_shape(game: Game) -> list[str]:
    """Validate sizes and that every stored index points at a real player."""
    errors = []
    n = game.player_count

    if not MIN_PLAYERS <= n <= MAX_PLAYERS:
        errors.append(f"Invalid number of players: {n}")
    if len(game.scores) != n:
        errors.append(f"Expected {n} scores, got {len(game.scores)}")
    if len(game.played_piles) != n:
        errors.append(f"Expected {n} played piles, got {len(game.played_piles)}")

    def check_index(value, label: str) -> None:
        if not isinstance(value, int) or not 0 <= value < n:
            errors.append(f"{label} index out of range: {value!r}")

    phase = game.phase
    if isinstance(phase, Committing):
        check_index(phase.current_player, "Current player")
    elif isinstance(phase, Bidding):
        check_index(phase.current_bidder, "Current bidder")
        check_index(phase.highest_bidder, "Highest bidder")
        if len(phase.passed) != n:
            errors.append(f"Expected {n} passed flags, got {len(phase.passed)}")
    elif isinstance(phase, Resolving):
        check_index(phase.challenger, "Challenger")
        if len(phase.flipped) != n:
            errors.append(f"Expected {n} flipped lists, got {len(phase.flipped)}")
    else:
        errors.append(f"Unknown phase: {phase!r}")

    pending = game.pending_event
    if isinstance(pending, ChallengerRevealedPenalty):
        check_index(pending.challenger, "Pending event challenger")
        check_index(pending.penalty_player, "Pending event penalty player")
    elif pending is not None and hasattr(pending, "player"):
        check_index(pending.player, "Pending event player")

    return errors


def _validate_hands_and_piles(game: Game) -> list[str]:
    """Validate hands, and that each pile could have come from its hand."""
    errors = []

    for player, (hand, pile) in enumerate(zip(game.hands, game.played_piles)):
        hand_errors = hand.validation_errors()
        errors.extend(f"Player {player}: {e}" for e in hand_errors)
        if hand_errors:
            continue

        if len(pile) > PILE_CAPACITY:
            errors.append(f"Player {player} has {len(pile)} cards played, at most {PILE_CAPACITY} allowed")
            continue
        try:
            played = Hand.from_cards(pile)
        except HandError as e:
            errors.append(f"Player {player}: played cards make an invalid hand ({e})")
            continue

        just_discarded = _just_discarded(game, player)
        if not _could_have_played(hand, played, just_discarded):
            errors.append(
                f"Player {player} has cards on the table that they shouldn't, "
                "based on the cards available to them"
            )
        if hand.is_empty and pile and not just_discarded:
            errors.append(f"Player {player} is out but has cards on the table")

    if game.remaining_player_count == 0:
        errors.append("Every player is out")

    # Players take turns, so nobody still in can be two cards ahead
    remaining_sizes = [
        len(pile)
        for hand, pile in zip(game.hands, game.played_piles)
        if not hand.is_empty
    ]
    if remaining_sizes and max(remaining_sizes) - min(remaining_sizes) > 1:
        errors.append("Some players have played 2+ more cards than others")

    if not isinstance(game.phase, Committing):
        if game.cards_played_count < game.remaining_player_count:
            errors.append("Less cards played than there are players")

    return errors


def _just_discarded(game: Game, player: int) -> bool:
    """The challenger discards before the round's piles are cleared."""
    pending = game.pending_event
    return isinstance(pending, ChallengerRevealedPenalty) and pending.challenger == player


def _could_have_played(hand: Hand, played: Hand, just_discarded: bool) -> bool:
    if hand.is_superset_of(played):
        return True
    if not just_discarded:
        return False
    # Put back whichever card might have been discarded
    restored = []
    if not hand.has_penalty:
        restored.append(Hand(has_penalty=True, safe_count=hand.safe_count))
    if hand.safe_count < 3:
        restored.append(Hand(has_penalty=hand.has_penalty, safe_count=hand.safe_count + 1))
    return any(h.is_superset_of(played) for h in restored)


def _validate_scores(game: Game) -> list[str]:
    errors = []
    for player, score in enumerate(game.scores):
        if not isinstance(score, int) or not 0 <= score <= WINNING_SCORE:
            errors.append(f"Player {player} has score {score!r}, expected 0-{WINNING_SCORE}")

    winners = [p for p, s in enumerate(game.scores) if s == WINNING_SCORE]
    pending = game.pending_event

    if isinstance(pending, ChallengeAndGameWon):
        if winners != [pending.player]:
            errors.append("One player was expected to have a winning score")
        elif game.hands[pending.player].is_empty:
            errors.append("Winning player has no cards, meaning they are out")
    elif winners and not _is_acknowledged_win(game, winners):
        errors.append("No players were expected to have a winning score")

    if isinstance(pending, ChallengeWon):
        if game.scores[pending.player] == 0:
            errors.append("Challenge declared won but the challenger's score wasn't raised")
        elif game.scores[pending.player] == WINNING_SCORE:
            errors.append("Challenger reached a winning score but the game wasn't declared won")

    return errors


def _is_acknowledged_win(game: Game, winners: list[int]) -> bool:
    """A game win that has already been drained leaves the challenge in place."""
    phase = game.phase
    return (
        game.pending_event is None
        and len(winners) == 1
        and isinstance(phase, Resolving)
        and phase.challenger == winners[0]
        and not game.hands[winners[0]].is_empty
        and _safe_flips(game, phase) == phase.target
    )


def _validate_pending_event(game: Game) -> list[str]:
    """Validate that the pending event could have come from the current phase."""
    errors = []
    pending = game.pending_event
    phase = game.phase

    if pending is None:
        return errors

    if isinstance(pending, InputRequired):
        errors.append("Input events should never be stored as a pending event")
    elif isinstance(pending, LastPlayerStanding):
        errors.append("Game over events are never stored as a pending event")
    elif isinstance(pending, BidStarted):
        if not isinstance(phase, Bidding):
            errors.append("BidStarted pending but the game isn't bidding")
    elif isinstance(pending, ChallengeStarted):
        if not isinstance(phase, Resolving):
            errors.append("ChallengeStarted pending but there's no challenge")
        elif phase.flipped_count != 0:
            errors.append("Cards flipped before the challenge was announced")
    elif isinstance(pending, PlayerEliminated):
        if not isinstance(phase, Committing):
            errors.append("PlayerEliminated pending but a new round hasn't started")
        if any(game.played_piles):
            errors.append("PlayerEliminated pending but the table wasn't cleared")
        if not game.hands[pending.player].is_empty:
            errors.append(f"Player {pending.player} reported out but still has cards")
    else:
        if not isinstance(phase, Resolving):
            errors.append(f"{type(pending).__name__} pending but there's no challenge")
        else:
            challenger = (
                pending.challenger
                if isinstance(pending, ChallengerRevealedPenalty)
                else pending.player
            )
            if challenger != phase.challenger:
                errors.append("Pending event reports a different challenger")

    return errors


def _validate_committing(game: Game, phase: Committing) -> list[str]:
    errors = []
    if game.hands[phase.current_player].is_empty:
        errors.append("Current player mustn't be out")
    return errors


def _validate_bidding(game: Game, phase: Bidding) -> list[str]:
    errors = []
    hands = game.hands

    if hands[phase.current_bidder].is_empty:
        errors.append("Current bidder mustn't be out")
    if hands[phase.highest_bidder].is_empty:
        errors.append("Highest bidder mustn't be out")
    if phase.current_bidder == phase.highest_bidder:
        errors.append("Current and highest bidder mustn't be same person")
    if phase.passed[phase.current_bidder]:
        errors.append("Current bidder has already passed")
    if phase.passed[phase.highest_bidder]:
        errors.append("Highest bidder has passed")
    if phase.highest_bid < 1:
        errors.append("Highest bid must be at least 1")
    if phase.highest_bid >= phase.max_bid:
        errors.append("Current bid must be strictly less than maximum (else a challenge should have started)")
    if phase.max_bid != game.cards_played_count:
        errors.append("Maximum bid must equal the number of cards played")
    if phase.pass_count > game.remaining_player_count - 2:
        errors.append("Too many players have passed")

    return errors


def _validate_resolving(game: Game, phase: Resolving) -> list[str]:
    errors = []
    piles = game.played_piles
    pending = game.pending_event
    lost = isinstance(pending, ChallengerRevealedPenalty)

    if game.hands[phase.challenger].is_empty and not lost:
        errors.append("Challenger mustn't be out")
    if not 1 <= phase.target <= game.cards_played_count:
        errors.append("Target must be between 1 and the number of cards played")

    for player, (indexes, pile) in enumerate(zip(phase.flipped, piles)):
        if any(not 0 <= i < len(pile) for i in indexes):
            errors.append(f"Out of range index in cards flipped for player {player}")
            return errors
        if len(set(indexes)) != len(indexes):
            errors.append(f"Duplicate indexes flipped for player {player}")
    if phase.flipped_count > phase.target:
        errors.append("More cards flipped than targeted")

    if isinstance(pending, ChallengeStarted):
        return errors

    errors.extend(_validate_own_flips(game, phase))

    penalties = [
        player
        for player, indexes in enumerate(phase.flipped)
        for i in indexes
        if piles[player][i] == Card.PENALTY
    ]
    if lost:
        if len(penalties) != 1:
            errors.append("Expected exactly one penalty card flipped as the challenger lost")
        elif penalties[0] != pending.penalty_player:
            errors.append("Revealed penalty card belongs to a different player than reported")
    elif penalties:
        errors.append("Penalty card flipped but the challenge wasn't declared lost")

    safe_flips = _safe_flips(game, phase)
    won = isinstance(pending, (ChallengeWon, ChallengeAndGameWon))
    if won and safe_flips != phase.target:
        errors.append("Challenge declared won before the target was reached")
    if not lost and not won and safe_flips == phase.target:
        if game.scores[phase.challenger] != WINNING_SCORE:
            errors.append("Target reached but the challenge wasn't declared won")

    return errors


def _validate_own_flips(game: Game, phase: Resolving) -> list[str]:
    """The challenger's own cards are flipped first, from the top down."""
    errors = []
    challenger = phase.challenger
    pile = game.played_piles[challenger]
    own = tuple(phase.flipped[challenger])
    start = max(0, len(pile) - phase.target)
    pending = game.pending_event

    if isinstance(pending, ChallengerRevealedPenalty) and pending.penalty_player == challenger:
        lowest = own[0] if own else None
        if (
            lowest is None
            or lowest < start
            or own != tuple(range(lowest, len(pile)))
            or pile[lowest] != Card.PENALTY
            or Card.PENALTY in pile[lowest + 1:]
        ):
            errors.append("Challenger's own flips should run from the top of their pile down to their penalty card")
        if any(indexes for p, indexes in enumerate(phase.flipped) if p != challenger):
            errors.append("Other players' cards flipped after the challenger revealed their own penalty card")
        return errors

    if own != tuple(range(start, len(pile))):
        errors.append("Challenger hasn't flipped their own cards that they are required to flip")
    return errors


def _safe_flips(game: Game, phase: Resolving) -> int:
    piles = game.played_piles
    return sum(
        1
        for player, indexes in enumerate(phase.flipped)
        for i in indexes
        if 0 <= i < len(piles[player]) and piles[player][i] == Card.SAFE
    )
