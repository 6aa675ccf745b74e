"""
Tests for sessions, the game loop and per-viewer projection.
"""

import time

from ..engine_core.state import CardKind
from ..engine_core.action import Action
from ..engine_core.view import project_view
from ..session import SessionState, GameLoop, LoopState


class TestGameLoop:
    """Tests for the intent-driven loop."""

    def test_computers_catch_up_to_human(self, human_vs_cpu):
        """Computer seats play until the human is up."""
        session, loop = human_vs_cpu
        assert session.game_state.current_player.player_id == "player-1"
        assert session.is_human_turn()
        assert loop.state == LoopState.WAITING_HUMAN_ACTION

    def test_out_of_turn_intent_rejected(self, human_vs_cpu):
        """Intents from other seats never reach the engine."""
        session, loop = human_vs_cpu
        revision = session.game_state.revision

        result = loop.apply_player_intent("cpu-0", Action.pass_turn())
        assert not result.success
        assert result.error_code == "NOT_YOUR_TURN"
        assert session.game_state.revision == revision

    def test_unknown_player_rejected(self, human_vs_cpu):
        """Unknown actors are rejected."""
        _, loop = human_vs_cpu
        result = loop.apply_player_intent("ghost", Action.pass_turn())
        assert result.error_code == "PLAYER_NOT_FOUND"

    def test_engine_rejection_passes_through(self, human_vs_cpu):
        """Engine error codes reach the caller."""
        _, loop = human_vs_cpu
        result = loop.apply_player_intent("player-1", Action.discard(0))
        assert not result.success
        assert result.error_code == "NO_DISCARD_PENDING"

    def test_pass_discard_then_computer_turn(self, human_vs_cpu):
        """The computer acts once the human's turn ends."""
        session, loop = human_vs_cpu

        result = loop.apply_player_intent("player-1", Action.pass_turn())
        assert result.success
        assert session.game_state.must_discard
        assert result.automa_actions == []

        result = loop.apply_player_intent("player-1", Action.discard(0))
        assert result.success
        assert result.state_changes[0].startswith("Ana discarded")
        if not session.game_state.is_finished:
            assert len(result.automa_actions) >= 1
            assert session.game_state.current_player.player_id == "player-1"

    def test_computer_only_match_finishes(self, session_manager):
        """A computer-only match runs to a winner."""
        session = session_manager.create_session(
            [], computer_seat_count=4, difficulty="expert", random_seed=3,
        )
        result = GameLoop(session).run_automa_turns()

        assert result.success
        assert result.loop_state == LoopState.GAME_OVER
        assert session.game_state.winner_id is not None
        assert session.state == SessionState.GAME_OVER

    def test_step_limit_reports_error(self, session_manager):
        """The step limit stops a runaway loop."""
        session = session_manager.create_session([], computer_seat_count=2, random_seed=1)
        result = GameLoop(session, max_automa_steps=3).run_automa_turns()

        assert not result.success
        assert "stopped after 3 steps" in result.errors[0]


class TestSessionManager:
    """Tests for session lifecycle."""

    def test_create_and_list(self, session_manager, human_vs_cpu):
        """New sessions are tracked and listed."""
        session, _ = human_vs_cpu
        assert session_manager.get_session(session.session_id) is session
        assert session_manager.list_active_sessions() == [session.session_id]
        assert session.human_player_ids == ["player-1"]
        assert list(session.bots) == ["cpu-0"]

    def test_end_session(self, session_manager, human_vs_cpu):
        """Ending a session drops its state."""
        session, loop = human_vs_cpu
        ended = session_manager.end_session(session.session_id, "user_ended")

        assert ended is session
        assert session.state == SessionState.ABANDONED
        assert session_manager.get_session(session.session_id) is None
        assert session_manager.end_session(session.session_id) is None

        result = loop.apply_player_intent("player-1", Action.pass_turn())
        assert result.error_code == "SESSION_ENDED"

    def test_cleanup_idle_sessions(self, session_manager, human_vs_cpu):
        """Idle sessions are removed after max_age."""
        session, _ = human_vs_cpu
        assert session_manager.cleanup_stale_sessions(3600) == 0

        session.last_activity = time.time() - 7200
        assert session_manager.cleanup_stale_sessions(3600) == 1
        assert session_manager.list_active_sessions() == []

    def test_finished_match_outlives_cleanup(self, session_manager):
        """A just-finished match stays readable until it ages out."""
        session = session_manager.create_session([], computer_seat_count=2, random_seed=8)
        GameLoop(session).run_automa_turns()
        assert session.state == SessionState.GAME_OVER

        assert session_manager.cleanup_stale_sessions(3600) == 0
        assert session_manager.get_session(session.session_id) is session
        assert session.game_state.winner_id is not None

        session.last_activity = time.time() - 7200
        assert session_manager.cleanup_stale_sessions(3600) == 1
        assert session_manager.get_session(session.session_id) is None


class TestProjectView:
    """Tests for per-viewer projection."""

    def test_hides_other_hands_and_objectives(self, seeded_match):
        """A player sees only their own hand and objective."""
        view = project_view(seeded_match, "human")
        me, *others = view.players

        assert me.hand == seeded_match.players[0].hand
        assert me.objective == seeded_match.players[0].objective
        for player, dealt in zip(others, seeded_match.players[1:]):
            assert len(player.hand) == len(dealt.hand)
            assert all(c.kind == CardKind.HIDDEN for c in player.hand)
            assert player.objective is None
        assert all(c.kind == CardKind.HIDDEN for c in view.deck)
        assert view.random_state is None

    def test_spectator_sees_no_hands(self, seeded_match):
        """Spectators see every hand hidden."""
        view = project_view(seeded_match, None)
        assert all(c.kind == CardKind.HIDDEN for p in view.players for c in p.hand)

    def test_projection_leaves_state_alone(self, seeded_match):
        """Projecting never touches the real state."""
        project_view(seeded_match, "human")
        assert all(c.kind != CardKind.HIDDEN for p in seeded_match.players for c in p.hand)
        assert seeded_match.random_state is not None
