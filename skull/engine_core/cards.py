"""
Cards and Hands - The two card kinds and a player's card multiset.

A player owns at most one penalty card (the skull) and three safe cards
(flowers). Playing a card never removes it from the hand; the hand only
shrinks when a lost challenge discards a card at random.

Hands are immutable values: every operation returns a new Hand.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Union
import random


PILE_CAPACITY = 4
MAX_SAFE_CARDS = 3


class Card(Enum):
    """The two kinds of card."""
    SAFE = "safe"  # flower
    PENALTY = "penalty"  # skull

    def __str__(self) -> str:
        return self.value


class HandErrorCode(Enum):
    """Why a set of cards is not a valid hand."""
    MULTIPLE_PENALTIES = "multiple_penalties"
    TOO_MANY_SAFE = "too_many_safe"
    NOT_A_CARD = "not_a_card"
    RHS_NOT_SUBSET = "rhs_not_subset"


class HandError(Exception):
    """Raised when cards cannot form a hand, or a subtraction is impossible."""

    def __init__(self, code: HandErrorCode, message: str):
        self.code = code
        super().__init__(message)


@dataclass(frozen=True)
class Hand:
    """
    The cards a player still owns.

    Attributes:
        has_penalty: Whether the player still holds their penalty card
        safe_count: Number of safe cards held (0-3)
    """
    has_penalty: bool
    safe_count: int

    @classmethod
    def full(cls) -> Hand:
        """The starting hand: one penalty card and three safe cards."""
        return cls(has_penalty=True, safe_count=MAX_SAFE_CARDS)

    @classmethod
    def empty(cls) -> Hand:
        """A hand with no cards (the player is out)."""
        return cls(has_penalty=False, safe_count=0)

    @classmethod
    def from_cards(cls, cards: Iterable[Card]) -> Hand:
        """
        Build a hand from a sequence of cards.

        Raises HandError if an entry is not a Card, or if there is more
        than one penalty card or more than three safe cards.
        """
        has_penalty = False
        safe_count = 0
        for card in cards:
            if not isinstance(card, Card):
                raise HandError(HandErrorCode.NOT_A_CARD, f"Invalid hand, {card!r} is not a card")
            if card == Card.PENALTY:
                if has_penalty:
                    raise HandError(
                        HandErrorCode.MULTIPLE_PENALTIES,
                        "Invalid hand, multiple penalty cards",
                    )
                has_penalty = True
            else:
                if safe_count >= MAX_SAFE_CARDS:
                    raise HandError(
                        HandErrorCode.TOO_MANY_SAFE,
                        "Invalid hand, too many safe cards",
                    )
                safe_count += 1
        return cls(has_penalty=has_penalty, safe_count=safe_count)

    @property
    def count(self) -> int:
        return self.safe_count + int(self.has_penalty)

    @property
    def is_empty(self) -> bool:
        return self.count == 0

    def has(self, card: Card) -> bool:
        """Check if the hand contains at least one card of this kind."""
        if not isinstance(card, Card):
            return False
        if card == Card.PENALTY:
            return self.has_penalty
        return self.safe_count > 0

    def as_list(self) -> list[Card]:
        """Cards in the hand, penalty card first."""
        cards = [Card.SAFE] * self.safe_count
        if self.has_penalty:
            cards.insert(0, Card.PENALTY)
        return cards

    def is_superset_of(self, other: Hand) -> bool:
        penalty_ok = self.has_penalty or not other.has_penalty
        return penalty_ok and self.safe_count >= other.safe_count

    def __sub__(self, other: Union[Hand, Iterable[Card]]) -> Hand:
        if not isinstance(other, Hand):
            other = Hand.from_cards(other)
        if not self.is_superset_of(other):
            raise HandError(
                HandErrorCode.RHS_NOT_SUBSET,
                f"Right side has cards the left side doesn't. Left: {self}. Right: {other}",
            )
        # Subset already checked, so the penalty flags reduce to XOR
        return Hand(
            has_penalty=self.has_penalty ^ other.has_penalty,
            safe_count=self.safe_count - other.safe_count,
        )

    def discard_one(self, rng: random.Random) -> Hand:
        """
        Return a new hand with one card removed at random.

        Each card in the hand is equally likely to go, so the penalty
        card is picked with probability 1 / count.
        """
        if self.is_empty:
            raise ValueError("Tried to discard a card from an empty hand")

        choice = rng.randrange(self.count)
        if self.has_penalty and choice == 0:
            return Hand(has_penalty=False, safe_count=self.safe_count)
        return Hand(has_penalty=self.has_penalty, safe_count=self.safe_count - 1)

    def validation_errors(self) -> list[str]:
        """List problems with this hand (empty if valid)."""
        errors = []
        if not isinstance(self.has_penalty, bool):
            errors.append(f"Penalty flag must be a bool, got {self.has_penalty!r}")
        if not isinstance(self.safe_count, int) or isinstance(self.safe_count, bool):
            errors.append(f"Safe count must be an int, got {self.safe_count!r}")
        elif not 0 <= self.safe_count <= MAX_SAFE_CARDS:
            errors.append(f"Safe count {self.safe_count} outside 0-{MAX_SAFE_CARDS}")
        return errors

    def __str__(self) -> str:
        return "[" + ", ".join(str(c) for c in self.as_list()) + "]"
