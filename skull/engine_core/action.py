"""
Response System - Player responses, rejection reasons, and results.

Responses are what a presentation layer hands to Game.respond():
1. Play a card face-down
2. Bid a number of cards
3. Pass on the current bid
4. Flip another player's card during a challenge

A rejected response leaves the game untouched and comes back as a failed
ResponseResult describing why, so the caller can retry.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .cards import Card
from .events import InputType


class ResponseType(Enum):
    """Types of responses a player can give."""
    PLAY_CARD = "play_card"
    BID = "bid"
    PASS = "pass"
    FLIP = "flip"


@dataclass(frozen=True)
class Response:
    """
    A player's input to the game.

    Only the fields relevant to response_type are set; use the factories.
    """
    response_type: ResponseType
    card: Card | None = None
    amount: int | None = None
    player: int | None = None
    index: int | None = None

    @classmethod
    def play_card(cls, card: Card) -> Response:
        """Factory for playing a card face-down."""
        return cls(response_type=ResponseType.PLAY_CARD, card=card)

    @classmethod
    def bid(cls, amount: int) -> Response:
        """Factory for starting or raising a bid."""
        return cls(response_type=ResponseType.BID, amount=amount)

    @classmethod
    def pass_turn(cls) -> Response:
        """Factory for passing on the current bid."""
        return cls(response_type=ResponseType.PASS)

    @classmethod
    def flip(cls, player: int, index: int) -> Response:
        """Factory for flipping card `index` of `player`'s pile."""
        return cls(response_type=ResponseType.FLIP, player=player, index=index)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"type": self.response_type.value}
        if self.card is not None:
            data["card"] = self.card.value if isinstance(self.card, Card) else repr(self.card)
        if self.amount is not None:
            data["amount"] = self.amount
        if self.player is not None:
            data["player"] = self.player
        if self.index is not None:
            data["index"] = self.index
        return data


class ResponseErrorCode(Enum):
    """Why a response was rejected."""
    PENDING_EVENT = "pending_event"
    INCORRECT_INPUT_TYPE = "incorrect_input_type"
    CARD_NOT_IN_HAND = "card_not_in_hand"
    BID_TOO_LOW = "bid_too_low"
    BID_TOO_HIGH = "bid_too_high"
    INVALID_INDEX = "invalid_index"
    CARD_ALREADY_FLIPPED = "card_already_flipped"
    MANUALLY_FLIPPING_OWN_CARDS = "manually_flipping_own_cards"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class ResponseError:
    """
    A rejected response.

    expected is set for INCORRECT_INPUT_TYPE. limit is the minimum
    acceptable bid for BID_TOO_LOW and the maximum for BID_TOO_HIGH.
    """
    code: ResponseErrorCode
    expected: InputType | None = None
    limit: int | None = None

    @classmethod
    def pending_event(cls) -> ResponseError:
        return cls(ResponseErrorCode.PENDING_EVENT)

    @classmethod
    def incorrect_input_type(cls, expected: InputType) -> ResponseError:
        return cls(ResponseErrorCode.INCORRECT_INPUT_TYPE, expected=expected)

    @classmethod
    def bid_too_low(cls, minimum: int) -> ResponseError:
        return cls(ResponseErrorCode.BID_TOO_LOW, limit=minimum)

    @classmethod
    def bid_too_high(cls, maximum: int) -> ResponseError:
        return cls(ResponseErrorCode.BID_TOO_HIGH, limit=maximum)

    @property
    def message(self) -> str:
        code = self.code
        if code == ResponseErrorCode.PENDING_EVENT:
            return "There's a pending event that needs to be processed using Game.what_next()"
        if code == ResponseErrorCode.INCORRECT_INPUT_TYPE:
            return f"Incorrect input type, expected {self.expected.description}"
        if code == ResponseErrorCode.CARD_NOT_IN_HAND:
            return "The player doesn't have that card"
        if code == ResponseErrorCode.BID_TOO_LOW:
            return f"Bid too low, needs to be at least {self.limit}"
        if code == ResponseErrorCode.BID_TOO_HIGH:
            return f"Bid too high, needs to be at most {self.limit}"
        if code == ResponseErrorCode.INVALID_INDEX:
            return "Invalid index, outside of allowed range"
        if code == ResponseErrorCode.CARD_ALREADY_FLIPPED:
            return "That card has already been flipped"
        if code == ResponseErrorCode.MANUALLY_FLIPPING_OWN_CARDS:
            return "Challenger is trying to flip their own cards, which are flipped automatically"
        return "The game is over"

    def __str__(self) -> str:
        return self.message


class ResponseRejected(Exception):
    """Raised by ResponseResult.raise_for_error() for a rejected response."""

    def __init__(self, error: ResponseError):
        self.error = error
        super().__init__(error.message)


@dataclass(frozen=True)
class ResponseResult:
    """
    Result of Game.respond().

    On failure the game is unchanged and error says why.
    """
    success: bool
    error: ResponseError | None = None

    @classmethod
    def ok(cls) -> ResponseResult:
        return cls(success=True)

    @classmethod
    def failure(cls, error: ResponseError) -> ResponseResult:
        return cls(success=False, error=error)

    @property
    def error_code(self) -> ResponseErrorCode | None:
        return self.error.code if self.error else None

    def raise_for_error(self) -> None:
        if self.error is not None:
            raise ResponseRejected(self.error)
