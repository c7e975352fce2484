"""
Skull - Rules engine for the bluffing card game.

Players secretly commit safe cards (flowers) and a single penalty card
(skull), bid on how many safe cards they can reveal, and the highest
bidder must reveal them. Two successful challenges win the game.

The engine provides:
- Hand and played-card bookkeeping
- The committing / bidding / resolving phase machine
- A pull-based event/response protocol for presentation layers
- Consistency validation for assembled game states
"""

__version__ = "0.1.0"
