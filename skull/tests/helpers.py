"""
Shared test helpers.
"""

import random


class FixedRandom(random.Random):
    """Random source whose randrange always picks the same position (clamped)."""

    def __init__(self, value: int = 0):
        super().__init__(0)
        self.value = value

    def randrange(self, start, stop=None, step=1):
        if stop is None:
            start, stop = 0, start
        return min(start + self.value, stop - 1)


def snapshot(game):
    """Everything a response could change."""
    return (
        game.scores,
        game.hands,
        game.played_piles,
        game.phase,
        game.pending_event,
    )
