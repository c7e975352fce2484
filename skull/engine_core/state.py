"""
Phase State - Which part of the round the game is in.

A round cycles through three phases:
1. Committing (players put cards face-down)
2. Bidding (players raise the number of cards to reveal, or pass)
3. Resolving (the challenger flips cards hunting for safe ones)

Each phase is its own frozen dataclass carrying only the data that phase
needs. Per-player data (passed flags, flipped indices) are tuples with
one entry per seat. Transitions build new phase values.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union


MIN_PLAYERS = 3
MAX_PLAYERS = 6
WINNING_SCORE = 2  # Two successful challenges win the game


class PhaseKind(Enum):
    """Tag for the active phase."""
    COMMITTING = "committing"
    BIDDING = "bidding"
    RESOLVING = "resolving"


@dataclass(frozen=True)
class Committing:
    """Players are placing cards face-down."""
    current_player: int

    @property
    def kind(self) -> PhaseKind:
        return PhaseKind.COMMITTING

    @property
    def acting_player(self) -> int:
        return self.current_player

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "current_player": self.current_player,
        }


@dataclass(frozen=True)
class Bidding:
    """
    Players are bidding on how many cards the challenger must reveal.

    max_bid is the total number of cards committed this round.
    passed has one flag per seat.
    """
    current_bidder: int
    highest_bid: int
    highest_bidder: int
    max_bid: int
    passed: tuple[bool, ...]

    @property
    def kind(self) -> PhaseKind:
        return PhaseKind.BIDDING

    @property
    def acting_player(self) -> int:
        return self.current_bidder

    @property
    def pass_count(self) -> int:
        return sum(1 for p in self.passed if p)

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "current_bidder": self.current_bidder,
            "highest_bid": self.highest_bid,
            "highest_bidder": self.highest_bidder,
            "max_bid": self.max_bid,
            "passed": list(self.passed),
        }


@dataclass(frozen=True)
class Resolving:
    """
    The challenger is revealing cards.

    flipped has one tuple of pile indices per seat. The challenger's own
    indices are always ascending since they are flipped automatically.
    """
    challenger: int
    target: int
    flipped: tuple[tuple[int, ...], ...]

    @property
    def kind(self) -> PhaseKind:
        return PhaseKind.RESOLVING

    @property
    def acting_player(self) -> int:
        return self.challenger

    @property
    def flipped_count(self) -> int:
        return sum(len(indexes) for indexes in self.flipped)

    def with_flip(self, player: int, index: int) -> Resolving:
        """Return new phase with one more flipped card for player."""
        new_flipped = list(self.flipped)
        new_flipped[player] = self.flipped[player] + (index,)
        return Resolving(
            challenger=self.challenger,
            target=self.target,
            flipped=tuple(new_flipped),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "challenger": self.challenger,
            "target": self.target,
            "flipped": [list(indexes) for indexes in self.flipped],
        }


Phase = Union[Committing, Bidding, Resolving]


def no_passes(player_count: int) -> tuple[bool, ...]:
    return (False,) * player_count


def no_flips(player_count: int) -> tuple[tuple[int, ...], ...]:
    return ((),) * player_count
