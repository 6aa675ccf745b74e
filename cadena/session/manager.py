"""
Session Manager - Creates and manages match sessions.

LIFECYCLE:
1. A host creates a session: human seats, computer seats, difficulty
2. The session owns the authoritative GameState and one bot per computer seat
3. During the match every mutation goes through the session's GameLoop,
   which holds the session lock for the whole intent + computer turns
4. Match ends (or host leaves) -> session removed, state dropped

PERSISTENCE RULES:
- In-memory only, nothing survives a process restart
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Sequence
import logging
import threading
import time
import uuid

from ..engine_core.state import GameState
from ..engine_core.rules import RuleSet, STANDARD
from ..engine_core.setup import create_match
from ..bots import BotPolicy, Difficulty, create_bots

logger = logging.getLogger(__name__)


class SessionState(Enum):
    """State of a match session."""
    ACTIVE = "active"  # Match in progress
    GAME_OVER = "game_over"  # A winner has been declared
    ABANDONED = "abandoned"  # Host ended it early


@dataclass
class Session:
    """
    An ephemeral match session.

    Contains:
    - Current canonical game state
    - Bots for computer seats
    - A lock serializing every mutation of the match
    """
    session_id: str
    created_at: float
    difficulty: Difficulty = Difficulty.NORMAL

    state: SessionState = SessionState.ACTIVE
    game_state: GameState | None = None

    bots: dict[str, BotPolicy] = field(default_factory=dict)
    human_player_ids: list[str] = field(default_factory=list)

    lock: threading.RLock = field(default_factory=threading.RLock, repr=False)
    last_activity: float = 0.0

    metadata: dict[str, Any] = field(default_factory=dict)

    def is_active(self) -> bool:
        """Check if session is still active."""
        return self.state == SessionState.ACTIVE

    def is_human_turn(self) -> bool:
        """Check if a human seat is to act."""
        if not self.game_state or self.game_state.is_finished:
            return False
        return self.game_state.current_player.player_id in self.human_player_ids

    def current_actor_id(self) -> str | None:
        if not self.game_state or self.game_state.is_finished:
            return None
        return self.game_state.current_player.player_id

    def touch(self) -> None:
        self.last_activity = time.time()


class SessionManager:
    """
    Manages match sessions.

    Responsibilities:
    - Create sessions with a fresh match
    - Track active sessions
    - Clean up finished and idle sessions

    No persistence - sessions are in-memory only.
    """

    def __init__(self):
        self._sessions: dict[str, Session] = {}
        self._lock = threading.Lock()

    def create_session(
        self,
        roster: Sequence[tuple[str, str]],
        computer_seat_count: int = 1,
        difficulty: str | Difficulty = Difficulty.NORMAL,
        rules: RuleSet = STANDARD,
        random_seed: int | None = None,
    ) -> Session:
        """
        Create a new match session.

        Args:
            roster: (player_id, name) for each human seat
            computer_seat_count: Number of computer seats
            difficulty: Tier shared by every computer seat
            rules: Rule set for the match
            random_seed: Seed for the match and its bots

        Returns:
            New Session; computer seats that act first have not moved yet
        """
        tier = Difficulty.parse(difficulty)
        session_id = str(uuid.uuid4())

        game_state = create_match(
            roster,
            computer_seat_count=computer_seat_count,
            rules=rules,
            random_seed=random_seed,
            game_id=session_id,
        )

        now = time.time()
        session = Session(
            session_id=session_id,
            created_at=now,
            difficulty=tier,
            game_state=game_state,
            bots=create_bots(game_state, tier, seed=random_seed),
            human_player_ids=[pid for pid, _ in roster],
            last_activity=now,
        )

        with self._lock:
            self._sessions[session_id] = session

        logger.info(
            "Session %s created: %d human(s), %d computer(s), %s, %s rules",
            session_id, len(roster), computer_seat_count, tier.value, rules.name,
        )
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def end_session(self, session_id: str, reason: str = "completed") -> Session | None:
        """
        End a session and clean up.

        The session is removed from memory.
        No persistence.
        """
        with self._lock:
            session = self._sessions.pop(session_id, None)
        if session:
            with session.lock:
                if reason == "completed":
                    session.state = SessionState.GAME_OVER
                else:
                    session.state = SessionState.ABANDONED
                session.game_state = None
                session.bots.clear()
            logger.info("Session %s ended (%s)", session_id, reason)
        return session

    def list_active_sessions(self) -> list[str]:
        """List IDs of active sessions."""
        return [
            sid for sid, session in list(self._sessions.items())
            if session.is_active()
        ]

    def cleanup_stale_sessions(self, max_age_seconds: int = 3600) -> int:
        """
        Remove sessions idle longer than max_age, finished ones included.

        A finished match stays readable for max_age after its last move so
        players can fetch the final scores. Returns how many were removed.
        """
        current_time = time.time()
        to_remove = [
            session_id
            for session_id, session in list(self._sessions.items())
            if current_time - session.last_activity > max_age_seconds
        ]

        for session_id in to_remove:
            self.end_session(session_id, reason="stale")
        return len(to_remove)
