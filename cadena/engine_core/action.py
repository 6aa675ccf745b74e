"""
Action System - Actions, payloads, and results.

Actions represent the three things a seat can do on its turn:
1. Play a card from hand onto the community combo
2. Discard a card while over the hand limit
3. Pass (draw a card and end the turn)

All state changes flow through actions.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ActionType(Enum):
    """Types of actions in the system."""
    PLAY_CARD = "play_card"
    DISCARD = "discard"
    PASS = "pass"


@dataclass
class ActionPayload:
    """
    Payload for an action - contains the action parameters.

    player_id is informational for the engine, which always acts for the
    current seat; the session layer checks the actor before dispatching.
    """
    player_id: str | None = None
    hand_index: int | None = None


@dataclass
class Action:
    """
    A complete action to be applied to the game state.

    Actions are:
    - Logged for replay
    - Validated before application
    - Applied atomically by the reducer
    """
    action_type: ActionType
    payload: ActionPayload = field(default_factory=ActionPayload)

    @classmethod
    def play_card(cls, hand_index: int, player_id: str | None = None) -> Action:
        """Factory for playing the card at hand_index."""
        return cls(
            action_type=ActionType.PLAY_CARD,
            payload=ActionPayload(player_id=player_id, hand_index=hand_index),
        )

    @classmethod
    def discard(cls, hand_index: int, player_id: str | None = None) -> Action:
        """Factory for discarding the card at hand_index."""
        return cls(
            action_type=ActionType.DISCARD,
            payload=ActionPayload(player_id=player_id, hand_index=hand_index),
        )

    @classmethod
    def pass_turn(cls, player_id: str | None = None) -> Action:
        """Factory for passing."""
        return cls(
            action_type=ActionType.PASS,
            payload=ActionPayload(player_id=player_id),
        )

    def describe(self) -> str:
        if self.action_type == ActionType.PASS:
            return "pass"
        return f"{self.action_type.value} #{self.payload.hand_index}"


@dataclass
class ActionResult:
    """
    Result of applying an action.

    Contains:
    - Whether action succeeded
    - New state (if succeeded)
    - Errors (if failed)
    - Human-readable changes (for UI updates)
    """
    success: bool
    new_state: Any | None = None  # GameState
    error: str | None = None
    error_code: str | None = None

    state_changes: list[str] = field(default_factory=list)

    @classmethod
    def failure(cls, error: str, error_code: str | None = None) -> ActionResult:
        """Create a failure result."""
        return cls(success=False, error=error, error_code=error_code)

    @classmethod
    def success_with_state(
        cls,
        state: Any,
        changes: list[str] | None = None,
    ) -> ActionResult:
        """Create a success result with new state."""
        return cls(
            success=True,
            new_state=state,
            state_changes=changes or [],
        )
