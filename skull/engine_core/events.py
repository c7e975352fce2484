"""
Events - Notifications and input requests returned by Game.what_next().

An event is either:
- A request for input from a specific player (InputRequired)
- A notification that something happened and the state has changed

Notifications are buffered one at a time on the game and must be drained
with what_next() before the game accepts another response.

Event Types:
- InputRequired: A player must act; input_type says how
- BidStarted: Committing ended, bidding has begun
- ChallengeStarted: Bidding ended, the challenger starts revealing
- ChallengerRevealedPenalty: The challenger hit a penalty card and lost
- PlayerEliminated: A player has no cards left
- ChallengeWon: The challenger revealed enough safe cards
- ChallengeAndGameWon: As above, and it was their second win
- LastPlayerStanding: Everyone else is out
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union


class InputType(Enum):
    """The kind of input the game is waiting for."""
    PLAY_CARD = "play_card"  # Not everyone has committed a card yet
    PLAY_CARD_OR_BID = "play_card_or_bid"
    START_BID = "start_bid"  # No unplayed cards left
    BID_OR_PASS = "bid_or_pass"
    FLIP_CARD = "flip_card"

    @property
    def description(self) -> str:
        return _INPUT_DESCRIPTIONS[self]


_INPUT_DESCRIPTIONS = {
    InputType.PLAY_CARD: "PlayCard",
    InputType.PLAY_CARD_OR_BID: "PlayCard or Bid",
    InputType.START_BID: "Bid",
    InputType.BID_OR_PASS: "Bid or Pass",
    InputType.FLIP_CARD: "Flip",
}


class EventType(Enum):
    """Types of events."""
    INPUT_REQUIRED = "input_required"
    BID_STARTED = "bid_started"
    CHALLENGE_STARTED = "challenge_started"
    CHALLENGER_REVEALED_PENALTY = "challenger_revealed_penalty"
    PLAYER_ELIMINATED = "player_eliminated"
    CHALLENGE_WON = "challenge_won"
    CHALLENGE_AND_GAME_WON = "challenge_and_game_won"
    LAST_PLAYER_STANDING = "last_player_standing"


@dataclass(frozen=True)
class InputRequired:
    """
    A player must give the game an input.

    Examples:
        InputRequired(player=0, input_type=InputType.PLAY_CARD)
        InputRequired(player=2, input_type=InputType.BID_OR_PASS)
    """
    player: int
    input_type: InputType

    @property
    def event_type(self) -> EventType:
        return EventType.INPUT_REQUIRED

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.event_type.value,
            "player": self.player,
            "input_type": self.input_type.value,
        }


@dataclass(frozen=True)
class BidStarted:
    """The game has moved from committing to bidding."""

    @property
    def event_type(self) -> EventType:
        return EventType.BID_STARTED

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.event_type.value}


@dataclass(frozen=True)
class ChallengeStarted:
    """
    A challenge has begun.

    Draining this event flips the challenger's own cards.
    """

    @property
    def event_type(self) -> EventType:
        return EventType.CHALLENGE_STARTED

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.event_type.value}


@dataclass(frozen=True)
class ChallengerRevealedPenalty:
    """
    The challenger flipped a penalty card and lost the challenge.

    penalty_player owns the revealed card and may be the challenger.
    """
    challenger: int
    penalty_player: int

    @property
    def event_type(self) -> EventType:
        return EventType.CHALLENGER_REVEALED_PENALTY

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.event_type.value,
            "challenger": self.challenger,
            "penalty_player": self.penalty_player,
        }


@dataclass(frozen=True)
class PlayerEliminated:
    """A player has lost all their cards."""
    player: int

    @property
    def event_type(self) -> EventType:
        return EventType.PLAYER_ELIMINATED

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.event_type.value, "player": self.player}


@dataclass(frozen=True)
class ChallengeWon:
    """The challenger revealed their target number of safe cards."""
    player: int

    @property
    def event_type(self) -> EventType:
        return EventType.CHALLENGE_WON

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.event_type.value, "player": self.player}


@dataclass(frozen=True)
class ChallengeAndGameWon:
    """The challenger won their second challenge and with it the game."""
    player: int

    @property
    def event_type(self) -> EventType:
        return EventType.CHALLENGE_AND_GAME_WON

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.event_type.value, "player": self.player}


@dataclass(frozen=True)
class LastPlayerStanding:
    """Every other player is out, so this player wins the game."""
    player: int

    @property
    def event_type(self) -> EventType:
        return EventType.LAST_PLAYER_STANDING

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.event_type.value, "player": self.player}


Event = Union[
    InputRequired,
    BidStarted,
    ChallengeStarted,
    ChallengerRevealedPenalty,
    PlayerEliminated,
    ChallengeWon,
    ChallengeAndGameWon,
    LastPlayerStanding,
]
