"""
Game State - The canonical state container for a Cadena match.

Design principles:
- Single source of truth: the reducer is the only writer
- Serializable: plain dataclasses, no closures
- Copy-on-write: transitions operate on clone(), never on the input
- Deterministic: randomness travels with the state as a seeded generator
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, TYPE_CHECKING
from copy import deepcopy
from enum import Enum
import random

if TYPE_CHECKING:
    from ..objectives.catalog import Objective
    from .rules import RuleSet


class CardKind(Enum):
    """Role a card plays in a combo."""
    START = "START"
    EXTENSION = "EXTENSION"
    END = "END"

    # Opaque placeholder used only in projected views
    HIDDEN = "HIDDEN"


class GamePhase(Enum):
    """High-level match phases (derived, never stored)."""
    PLAYING = "playing"
    MUST_DISCARD = "must_discard"
    FINISHED = "finished"


@dataclass(frozen=True)
class Card:
    """
    A physical card instance.

    Identity is card_id, which is stable from creation until the card
    is discarded and reshuffled.
    """
    card_id: str
    kind: CardKind
    value: int

    def __str__(self) -> str:
        return f"{self.kind.value}({self.value})"


HIDDEN_CARD = Card(card_id="hidden", kind=CardKind.HIDDEN, value=0)


@dataclass(frozen=True)
class ScoreBreakdown:
    """Points awarded for closing a combo."""
    base_points: int
    bonus_points: int = 0
    objective_id: str | None = None
    objective_met: bool = False

    @property
    def total(self) -> int:
        return self.base_points + self.bonus_points


@dataclass
class ClosedCombo:
    """A combo closed by a player, kept in their append-only history."""
    cards: tuple[Card, ...]
    breakdown: ScoreBreakdown

    @property
    def points(self) -> int:
        return self.breakdown.total


@dataclass
class PlayerState:
    """
    State for a single seat.

    Hand order is draw order. Score only ever increases.
    """
    player_id: str
    name: str
    is_computer: bool = False

    hand: list[Card] = field(default_factory=list)
    objective: Objective | None = None
    score: int = 0
    closed_combos: list[ClosedCombo] = field(default_factory=list)

    def has_kind(self, kind: CardKind) -> bool:
        return any(c.kind == kind for c in self.hand)


@dataclass
class GameState:
    """
    Complete match state at a point in time.

    This is the canonical state that the engine operates on.
    All state changes go through the reducer.
    """
    game_id: str
    rules: RuleSet

    # Players, in fixed turn order
    players: list[PlayerState] = field(default_factory=list)
    current_player_idx: int = 0

    # Shared zones
    deck: list[Card] = field(default_factory=list)  # drawn from index 0
    discard_pile: list[Card] = field(default_factory=list)
    community_combo: list[Card] = field(default_factory=list)

    # Turn flags
    must_discard: bool = False
    winner_id: str | None = None

    # Last-call window: turns left before objectives rotate (0 = inactive)
    closing_turns_remaining: int = 0

    # Progress counters
    turn_number: int = 0
    round_number: int = 1
    revision: int = 0

    # History (for replay, logging, clients)
    event_log: list[str] = field(default_factory=list)
    action_history: list[Any] = field(default_factory=list)

    # Seeded generator for shuffles and objective draws
    random_state: random.Random | None = None

    @property
    def current_player(self) -> PlayerState:
        """Get the current player."""
        return self.players[self.current_player_idx]

    @property
    def num_players(self) -> int:
        return len(self.players)

    @property
    def phase(self) -> GamePhase:
        if self.winner_id is not None:
            return GamePhase.FINISHED
        if self.must_discard:
            return GamePhase.MUST_DISCARD
        return GamePhase.PLAYING

    @property
    def is_finished(self) -> bool:
        return self.winner_id is not None

    def get_player(self, player_id: str) -> PlayerState | None:
        """Get player by ID."""
        for p in self.players:
            if p.player_id == player_id:
                return p
        return None

    def total_cards(self) -> int:
        """Cards across deck, discard pile, combo and every hand."""
        return (
            len(self.deck)
            + len(self.discard_pile)
            + len(self.community_combo)
            + sum(len(p.hand) for p in self.players)
        )

    def log(self, message: str) -> None:
        self.event_log.append(message)

    def rng(self) -> random.Random:
        """The match generator, created lazily for hand-built states."""
        if self.random_state is None:
            self.random_state = random.Random()
        return self.random_state

    def clone(self) -> GameState:
        """Deep copy the state."""
        return deepcopy(self)
