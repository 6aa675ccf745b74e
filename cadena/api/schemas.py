"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the exact contract between clients and the engine.
Every state payload is a per-viewer projection: other players' hands,
their objectives and the deck order are never sent.

Error Codes:
- SESSION_NOT_FOUND: Session does not exist or has ended
- PLAYER_NOT_FOUND: player_id is not seated in the session
- NOT_YOUR_TURN: Intent from a player who is not the current seat
- INVALID_ACTION: The engine rejected the intent (illegal card, bad index...)
- MATCH_FINISHED: The match already has a winner
- VALIDATION_ERROR: Request parameters are invalid
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class SessionStatus(str, Enum):
    """Session status values."""
    ACTIVE = "active"
    YOUR_TURN = "your_turn"
    WAITING = "waiting"
    AUTOMA_THINKING = "automa_thinking"
    GAME_OVER = "game_over"


class ErrorCode(str, Enum):
    """Structured error codes."""
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    PLAYER_NOT_FOUND = "PLAYER_NOT_FOUND"
    NOT_YOUR_TURN = "NOT_YOUR_TURN"
    INVALID_ACTION = "INVALID_ACTION"
    MATCH_FINISHED = "MATCH_FINISHED"
    VALIDATION_ERROR = "VALIDATION_ERROR"


class IntentType(str, Enum):
    """What a player wants to do on their turn."""
    PLAY_CARD = "play_card"
    DISCARD = "discard"
    PASS = "pass"


# =============================================================================
# Shared Models
# =============================================================================

class CardInfo(BaseModel):
    """Card information for display. HIDDEN cards carry no information."""
    card_id: str
    kind: str = Field(description="START, EXTENSION, END or HIDDEN")
    value: int = 0

    model_config = {"from_attributes": True}


class ObjectiveInfo(BaseModel):
    """A secret objective, only ever sent to its holder."""
    objective_id: str
    description: str
    tier: str
    bonus_points: int

    model_config = {"from_attributes": True}


class ClosedComboInfo(BaseModel):
    """A combo closed by a player."""
    cards: list[CardInfo] = Field(default_factory=list)
    base_points: int = 0
    bonus_points: int = 0
    objective_id: Optional[str] = None
    objective_met: bool = False


class PlayerInfo(BaseModel):
    """Player information for display."""
    player_id: str
    name: str
    is_computer: bool
    is_current_turn: bool = False
    score: int = 0
    hand_count: int = 0
    hand: list[CardInfo] = Field(default_factory=list)
    objective: Optional[ObjectiveInfo] = None
    closed_combos: list[ClosedComboInfo] = Field(default_factory=list)

    model_config = {"from_attributes": True}


class SeatInfo(BaseModel):
    """Seat summary used in session listings."""
    player_id: str
    name: str
    is_computer: bool


class RuleSetInfo(BaseModel):
    """A named rule set."""
    name: str
    description: str
    hand_size: int
    win_score: int
    draw_on_play: int
    draw_on_close: int
    draw_on_pass: int
    final_turns_after_close: bool
    min_players: int
    max_players: int
    deck_size: int


# =============================================================================
# Request Models
# =============================================================================

class CreateSessionRequest(BaseModel):
    """Request to create a new match session."""
    player_names: list[str] = Field(
        default_factory=lambda: ["Player"],
        min_length=1,
        max_length=5,
        description="Display names for the human seats, in turn order",
    )
    computer_seats: int = Field(1, ge=0, le=4, description="Number of computer opponents")
    difficulty: Optional[str] = Field(
        None, description="Computer tier: easy, normal or expert (facil/experta accepted)"
    )
    ruleset: Optional[str] = Field(None, description="Named rule set, e.g. standard, last_call")
    random_seed: Optional[int] = Field(None, description="Seed for reproducible matches")


class IntentRequest(BaseModel):
    """A player intent for the current turn."""
    player_id: str = Field(..., description="The acting player")
    intent: IntentType
    hand_index: Optional[int] = Field(
        None, ge=0, description="Index into the player's hand (play_card / discard)"
    )


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class SessionResponse(BaseModel):
    """Response containing session information."""
    session_id: str
    status: SessionStatus
    difficulty: str
    ruleset: str
    players: list[SeatInfo] = Field(default_factory=list)
    human_player_ids: list[str] = Field(default_factory=list)
    current_turn_player_id: Optional[str] = None
    turn_number: int = 0
    winner_id: Optional[str] = None
    created_at: float = 0.0
    api_version: str = "v1"


class GameStateResponse(BaseModel):
    """A match projected for one viewer."""
    session_id: str
    viewer_id: Optional[str] = None
    status: SessionStatus
    phase: str
    revision: int = 0
    turn_number: int = 0
    round_number: int = 1
    players: list[PlayerInfo] = Field(default_factory=list)
    current_turn_player_id: Optional[str] = None
    community_combo: list[CardInfo] = Field(default_factory=list)
    playable_indices: list[int] = Field(
        default_factory=list, description="Viewer's playable hand indices on their turn"
    )
    deck_size: int = 0
    discard_pile_size: int = 0
    discard_top: Optional[CardInfo] = None
    must_discard: bool = False
    closing_turns_remaining: int = 0
    hand_size_limit: int = 5
    win_score: int = 100
    winner_id: Optional[str] = None
    event_log: list[str] = Field(default_factory=list)
    api_version: str = "v1"


class IntentResponse(BaseModel):
    """Result of applying an intent and the computer turns that followed."""
    success: bool
    session_id: str
    status: SessionStatus
    state_changes: list[str] = Field(default_factory=list)
    automa_actions: list[str] = Field(default_factory=list)
    winner_id: Optional[str] = None
    game_state: Optional[GameStateResponse] = None
    api_version: str = "v1"


class ObjectiveListResponse(BaseModel):
    """The objective catalog."""
    objectives: list[ObjectiveInfo]
    tier_weights: dict[str, int]


class RuleSetListResponse(BaseModel):
    """All named rule sets."""
    rulesets: list[RuleSetInfo]
    default: str


class SessionListResponse(BaseModel):
    """Response listing active sessions."""
    sessions: list[str]
    count: int


class EndSessionResponse(BaseModel):
    """Response after ending a session."""
    success: bool
    session_id: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
    active_sessions: int = 0
