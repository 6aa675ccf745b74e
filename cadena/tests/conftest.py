"""
Pytest fixtures for Cadena tests.
"""

import pytest

from ..engine_core.state import GameState
from ..engine_core.rules import STANDARD
from ..engine_core.setup import create_match
from ..session import SessionManager, GameLoop
from ..api.service import APIService
from .factories import build_state, start, ext, end, filler


@pytest.fixture
def opening_state() -> GameState:
    """Two players, empty combo, P0 to act with a mixed hand."""
    return build_state(
        hands=[
            [start(1), ext(2), end(3), ext(1), ext(3)],
            [start(2), ext(2), end(1), ext(3), start(3)],
        ],
        deck=filler(10),
    )


@pytest.fixture
def seeded_match() -> GameState:
    """A real four-seat match: one human, three computers."""
    return create_match(
        [("human", "Human")],
        computer_seat_count=3,
        rules=STANDARD,
        random_seed=42,
    )


@pytest.fixture
def session_manager() -> SessionManager:
    return SessionManager()


@pytest.fixture
def human_vs_cpu(session_manager):
    """A session with one human and one normal computer, computers caught up."""
    session = session_manager.create_session(
        [("player-1", "Ana")],
        computer_seat_count=1,
        difficulty="normal",
        random_seed=7,
    )
    loop = GameLoop(session)
    loop.run_automa_turns()
    return session, loop


@pytest.fixture
def api_service() -> APIService:
    return APIService()
