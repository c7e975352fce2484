"""
Engine Core - Game state, legality checking and state transitions.

The engine:
1. Tracks each player's hand and the cards they have committed
2. Runs the committing -> bidding -> resolving phase cycle
3. Reports what happened, or what input it needs, via what_next()
4. Validates and applies player responses via respond()
5. Checks assembled game states for consistency
"""

from .cards import Card, Hand, HandError, HandErrorCode, PILE_CAPACITY, MAX_SAFE_CARDS
from .state import (
    Phase,
    PhaseKind,
    Committing,
    Bidding,
    Resolving,
    MIN_PLAYERS,
    MAX_PLAYERS,
    WINNING_SCORE,
)
from .events import (
    Event,
    EventType,
    InputType,
    InputRequired,
    BidStarted,
    ChallengeStarted,
    ChallengerRevealedPenalty,
    PlayerEliminated,
    ChallengeWon,
    ChallengeAndGameWon,
    LastPlayerStanding,
)
from .action import (
    Response,
    ResponseType,
    ResponseError,
    ResponseErrorCode,
    ResponseResult,
    ResponseRejected,
)
from .validation import (
    GameStateError,
    GameValidationError,
    ValidationResult,
    validate_game,
    assert_valid,
)
from .game import Game

__all__ = [
    "Card",
    "Hand",
    "HandError",
    "HandErrorCode",
    "PILE_CAPACITY",
    "MAX_SAFE_CARDS",
    "Phase",
    "PhaseKind",
    "Committing",
    "Bidding",
    "Resolving",
    "MIN_PLAYERS",
    "MAX_PLAYERS",
    "WINNING_SCORE",
    "Event",
    "EventType",
    "InputType",
    "InputRequired",
    "BidStarted",
    "ChallengeStarted",
    "ChallengerRevealedPenalty",
    "PlayerEliminated",
    "ChallengeWon",
    "ChallengeAndGameWon",
    "LastPlayerStanding",
    "Response",
    "ResponseType",
    "ResponseError",
    "ResponseErrorCode",
    "ResponseResult",
    "ResponseRejected",
    "GameStateError",
    "GameValidationError",
    "ValidationResult",
    "validate_game",
    "assert_valid",
    "Game",
]
