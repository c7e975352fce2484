"""
Pydantic Schemas - Read-only views of a game for presentation layers.

A presenter (terminal, web client, bot harness) renders these instead of
reaching into the engine. Hidden information stays hidden: every
player's pile size is public, flipped cards are shown, and only the
viewer's own hand and face-down cards are listed.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from .engine_core import Game, Event, Bidding, Resolving


# =============================================================================
# Enums
# =============================================================================

class PhaseName(str, Enum):
    """Phase names."""
    COMMITTING = "committing"
    BIDDING = "bidding"
    RESOLVING = "resolving"


# =============================================================================
# Shared Models
# =============================================================================

class EventInfo(BaseModel):
    """An event from Game.what_next()."""
    event_type: str
    player: Optional[int] = None
    input_type: Optional[str] = Field(None, description="Set for input_required events")
    challenger: Optional[int] = None
    penalty_player: Optional[int] = None


class PlayerInfo(BaseModel):
    """One seat at the table."""
    player: int
    score: int = 0
    cards_in_hand: int = Field(description="Cards the player still owns, played or not")
    cards_played: int = 0
    is_out: bool = False
    is_current_turn: bool = False
    has_passed: bool = False
    pile: list[Optional[str]] = Field(
        default_factory=list,
        description="Played cards bottom to top; null where face-down to the viewer",
    )
    flipped: list[int] = Field(default_factory=list, description="Pile indexes flipped this challenge")
    hand: Optional[list[str]] = Field(None, description="Only listed for the viewer")


class PhaseInfo(BaseModel):
    """The active phase and its public data."""
    name: PhaseName
    acting_player: int
    highest_bid: Optional[int] = None
    highest_bidder: Optional[int] = None
    max_bid: Optional[int] = None
    challenger: Optional[int] = None
    target: Optional[int] = None
    flipped_count: Optional[int] = None


# =============================================================================
# Response Models
# =============================================================================

class GameStateResponse(BaseModel):
    """Complete view of a game from one seat (or a spectator)."""
    player_count: int
    remaining_player_count: int
    cards_played: int
    phase: PhaseInfo
    players: list[PlayerInfo] = Field(default_factory=list)
    pending_event: Optional[EventInfo] = None
    winner: Optional[int] = None
    viewer: Optional[int] = Field(None, description="Seat the view was built for; null for spectators")


def event_info(event: Event) -> EventInfo:
    """Convert an engine event."""
    data = event.to_dict()
    event_type = data.pop("type")
    return EventInfo(event_type=event_type, **data)


def build_game_state(game: Game, viewer: Optional[int] = None) -> GameStateResponse:
    """
    Build the view of `game` as seen by `viewer`.

    Pass viewer=None for a spectator who sees only public information.
    """
    if viewer is not None and not 0 <= viewer < game.player_count:
        raise ValueError(f"Viewer {viewer} is not a seat at this table")

    phase = game.phase
    flipped = phase.flipped if isinstance(phase, Resolving) else ((),) * game.player_count
    passed = phase.passed if isinstance(phase, Bidding) else (False,) * game.player_count

    players = []
    for player, (hand, pile) in enumerate(zip(game.hands, game.played_piles)):
        visible = [
            card.value if player == viewer or index in flipped[player] else None
            for index, card in enumerate(pile)
        ]
        players.append(
            PlayerInfo(
                player=player,
                score=game.scores[player],
                cards_in_hand=hand.count,
                cards_played=len(pile),
                is_out=hand.is_empty,
                is_current_turn=player == phase.acting_player,
                has_passed=passed[player],
                pile=visible,
                flipped=list(flipped[player]),
                hand=[card.value for card in hand.as_list()] if player == viewer else None,
            )
        )

    return GameStateResponse(
        player_count=game.player_count,
        remaining_player_count=game.remaining_player_count,
        cards_played=game.cards_played_count,
        phase=_phase_info(game),
        players=players,
        pending_event=event_info(game.pending_event) if game.pending_event else None,
        winner=game.winner,
        viewer=viewer,
    )


def _phase_info(game: Game) -> PhaseInfo:
    phase = game.phase
    info = PhaseInfo(name=PhaseName(phase.kind.value), acting_player=phase.acting_player)
    if isinstance(phase, Bidding):
        info.highest_bid = phase.highest_bid
        info.highest_bidder = phase.highest_bidder
        info.max_bid = phase.max_bid
    elif isinstance(phase, Resolving):
        info.challenger = phase.challenger
        info.target = phase.target
        info.flipped_count = phase.flipped_count
    return info
