"""
Pytest fixtures for Skull tests.
"""

import random

import pytest

from ..engine_core import Game, Hand, Card, Committing, Resolving
from .helpers import FixedRandom


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source."""
    return random.Random(1234)


@pytest.fixture
def penalty_first_rng() -> FixedRandom:
    """Discards the penalty card whenever the hand still has one."""
    return FixedRandom(0)


@pytest.fixture
def new_game(rng) -> Game:
    """A fresh 3-player game."""
    return Game(3, rng=rng)


@pytest.fixture
def one_safe_each(rng) -> Game:
    """3 players with full hands who have each committed one safe card."""
    return Game.create_from(
        scores=[0, 0, 0],
        hands=[Hand.full()] * 3,
        played_piles=[[Card.SAFE]] * 3,
        phase=Committing(current_player=0),
        rng=rng,
    )


@pytest.fixture
def challenge_against_penalty(penalty_first_rng) -> Game:
    """
    Player 0 challenges for 4 cards with two safe cards of their own
    already flipped. Player 1's top card is a penalty card.
    """
    return Game.create_from(
        scores=[0, 0, 0],
        hands=[Hand.full()] * 3,
        played_piles=[
            [Card.SAFE, Card.SAFE],
            [Card.SAFE, Card.PENALTY],
            [Card.SAFE, Card.SAFE],
        ],
        phase=Resolving(challenger=0, target=4, flipped=((0, 1), (), ())),
        rng=penalty_first_rng,
    )
