"""
Session Module - Manages ephemeral match sessions.

A session represents one match:
- Created when a host starts a game
- Holds the authoritative game state and the computer players
- Serializes intents and computer turns through its GameLoop
- Destroyed when the match ends

Sessions are EPHEMERAL: nothing is persisted.
"""

from .manager import SessionManager, Session, SessionState
from .game_loop import GameLoop, LoopState, TurnResult

__all__ = [
    "SessionManager",
    "Session",
    "SessionState",
    "GameLoop",
    "LoopState",
    "TurnResult",
]
