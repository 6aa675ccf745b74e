"""
API Module - Client interface.

Exposes the engine via REST and WebSocket. A client:
1. Creates a match session with human and computer seats
2. Fetches its own projected view of the match
3. Submits intents (play, discard, pass) on its turn
4. Receives pushed updates as computer seats act

All state is session-scoped. No persistent user accounts required.
"""

from .schemas import (
    # Requests
    CreateSessionRequest,
    IntentRequest,
    # Responses
    SessionResponse,
    GameStateResponse,
    IntentResponse,
    ErrorResponse,
    # Shared
    PlayerInfo,
    CardInfo,
    ObjectiveInfo,
    # Enums
    SessionStatus,
    ErrorCode,
    IntentType,
)
from .service import APIService

__all__ = [
    # Requests
    "CreateSessionRequest",
    "IntentRequest",
    # Responses
    "SessionResponse",
    "GameStateResponse",
    "IntentResponse",
    "ErrorResponse",
    # Shared
    "PlayerInfo",
    "CardInfo",
    "ObjectiveInfo",
    # Enums
    "SessionStatus",
    "ErrorCode",
    "IntentType",
    # Service
    "APIService",
]
