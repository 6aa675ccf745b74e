"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to engine and session calls
2. Manages sessions and their game loops
3. Projects state per viewer before it leaves the process

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass, field

from .schemas import (
    # Requests
    CreateSessionRequest,
    IntentRequest,
    IntentType,
    # Responses
    SessionResponse,
    GameStateResponse,
    IntentResponse,
    ObjectiveListResponse,
    RuleSetListResponse,
    ErrorResponse,
    # Shared
    CardInfo,
    ObjectiveInfo,
    ClosedComboInfo,
    PlayerInfo,
    SeatInfo,
    RuleSetInfo,
    # Enums
    SessionStatus,
    ErrorCode,
)
from ..engine_core.state import Card, GameState, PlayerState
from ..engine_core.action import Action
from ..engine_core.action_generator import playable_indices
from ..engine_core.rules import RULESETS, RuleSet, get_ruleset
from ..engine_core.view import project_view
from ..objectives.catalog import OBJECTIVES, TIER_WEIGHT, Objective
from ..session import SessionManager, Session, SessionState, GameLoop

# Loop error codes that are not engine rejections
_LOOP_ERROR_CODES = {
    "SESSION_ENDED": ErrorCode.SESSION_NOT_FOUND,
    "PLAYER_NOT_FOUND": ErrorCode.PLAYER_NOT_FOUND,
    "NOT_YOUR_TURN": ErrorCode.NOT_YOUR_TURN,
    "MATCH_FINISHED": ErrorCode.MATCH_FINISHED,
}


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService()

        # Create session
        session_response = service.create_session(request)

        # Submit an intent
        result = service.submit_intent(session_id, IntentRequest(...))

        # Fetch a player's view
        state = service.get_game_state(session_id, viewer_id="player-1")
    """
    session_manager: SessionManager = field(default_factory=SessionManager)
    default_ruleset: str = "standard"
    default_difficulty: str = "normal"

    # Game loops per session
    _game_loops: dict[str, GameLoop] = field(default_factory=dict)

    def create_session(self, request: CreateSessionRequest) -> SessionResponse:
        """
        Create a new match session.

        Computer seats that act before the first human run immediately.
        Raises ValueError for unknown rule sets, difficulties or seat counts.
        """
        rules = get_ruleset(request.ruleset or self.default_ruleset)
        roster = [
            (f"player-{i + 1}", name.strip() or f"Player {i + 1}")
            for i, name in enumerate(request.player_names)
        ]

        session = self.session_manager.create_session(
            roster,
            computer_seat_count=request.computer_seats,
            difficulty=request.difficulty or self.default_difficulty,
            rules=rules,
            random_seed=request.random_seed,
        )

        game_loop = GameLoop(session)
        self._game_loops[session.session_id] = game_loop
        game_loop.run_automa_turns()

        return self._session_to_response(session)

    def get_session(self, session_id: str) -> SessionResponse | ErrorResponse:
        """
        Get session status.
        """
        session = self.session_manager.get_session(session_id)
        if not session:
            return _session_not_found(session_id)
        return self._session_to_response(session)

    def get_game_state(
        self,
        session_id: str,
        viewer_id: str | None = None,
    ) -> GameStateResponse | ErrorResponse:
        """
        Get the match as seen by viewer_id (None for a spectator).
        """
        session = self.session_manager.get_session(session_id)
        if not session or not session.game_state:
            return _session_not_found(session_id)

        if viewer_id is not None and session.game_state.get_player(viewer_id) is None:
            return ErrorResponse(
                error=f"Player {viewer_id} is not seated in this session",
                error_code=ErrorCode.PLAYER_NOT_FOUND,
            )

        return self._build_game_state(session, viewer_id)

    def submit_intent(
        self,
        session_id: str,
        request: IntentRequest,
    ) -> IntentResponse | ErrorResponse:
        """
        Apply a player's intent and run the computer turns that follow.
        """
        session = self.session_manager.get_session(session_id)
        game_loop = self._game_loops.get(session_id)
        if not session or not game_loop:
            return _session_not_found(session_id)

        if request.intent == IntentType.PASS:
            action = Action.pass_turn()
        elif request.hand_index is None:
            return ErrorResponse(
                error=f"hand_index is required for {request.intent.value}",
                error_code=ErrorCode.VALIDATION_ERROR,
            )
        elif request.intent == IntentType.PLAY_CARD:
            action = Action.play_card(request.hand_index)
        else:
            action = Action.discard(request.hand_index)

        result = game_loop.apply_player_intent(request.player_id, action)
        if not result.success:
            return ErrorResponse(
                error=result.errors[0] if result.errors else "Intent rejected",
                error_code=_LOOP_ERROR_CODES.get(result.error_code, ErrorCode.INVALID_ACTION),
                details={"reason": result.error_code, "revision": result.revision},
            )

        game_state = self._build_game_state(session, request.player_id)
        return IntentResponse(
            success=True,
            session_id=session_id,
            status=game_state.status,
            state_changes=result.state_changes,
            automa_actions=result.automa_actions,
            winner_id=result.winner,
            game_state=game_state,
        )

    def end_session(self, session_id: str, reason: str = "user_ended") -> bool:
        """
        End a match session. Returns False if it did not exist.
        """
        self._game_loops.pop(session_id, None)
        return self.session_manager.end_session(session_id, reason) is not None

    def list_sessions(self) -> list[str]:
        """
        List active session IDs.
        """
        return self.session_manager.list_active_sessions()

    def cleanup(self, max_age_seconds: int) -> int:
        """Drop sessions idle past max_age, finished or not, along with their loops."""
        removed = self.session_manager.cleanup_stale_sessions(max_age_seconds)
        for session_id in list(self._game_loops):
            if not self.session_manager.get_session(session_id):
                del self._game_loops[session_id]
        return removed

    def has_session(self, session_id: str) -> bool:
        return self.session_manager.get_session(session_id) is not None

    def list_objectives(self) -> ObjectiveListResponse:
        return ObjectiveListResponse(
            objectives=[_objective_info(o) for o in OBJECTIVES],
            tier_weights={tier.value: weight for tier, weight in TIER_WEIGHT.items()},
        )

    def list_rulesets(self) -> RuleSetListResponse:
        return RuleSetListResponse(
            rulesets=[_ruleset_info(r) for r in RULESETS.values()],
            default=self.default_ruleset,
        )

    # =========================================================================
    # Helper methods
    # =========================================================================

    def _session_to_response(self, session: Session) -> SessionResponse:
        """Convert Session to SessionResponse."""
        with session.lock:
            game_state = session.game_state
            seats = []
            if game_state:
                seats = [
                    SeatInfo(player_id=p.player_id, name=p.name, is_computer=p.is_computer)
                    for p in game_state.players
                ]

            return SessionResponse(
                session_id=session.session_id,
                status=(
                    SessionStatus.ACTIVE if session.state == SessionState.ACTIVE
                    else SessionStatus.GAME_OVER
                ),
                difficulty=session.difficulty.value,
                ruleset=game_state.rules.name if game_state else "",
                players=seats,
                human_player_ids=list(session.human_player_ids),
                current_turn_player_id=session.current_actor_id(),
                turn_number=game_state.turn_number if game_state else 0,
                winner_id=game_state.winner_id if game_state else None,
                created_at=session.created_at,
            )

    def _build_game_state(self, session: Session, viewer_id: str | None) -> GameStateResponse:
        """Project the authoritative state for one viewer."""
        with session.lock:
            state = session.game_state
            view = project_view(state, viewer_id)
            is_viewers_turn = (
                not state.is_finished and state.current_player.player_id == viewer_id
            )

        return GameStateResponse(
            session_id=session.session_id,
            viewer_id=viewer_id,
            status=_status_for(view, viewer_id),
            phase=view.phase.value,
            revision=view.revision,
            turn_number=view.turn_number,
            round_number=view.round_number,
            players=[_player_info(view, p) for p in view.players],
            current_turn_player_id=None if view.is_finished else view.current_player.player_id,
            community_combo=[_card_info(c) for c in view.community_combo],
            playable_indices=playable_indices(view) if is_viewers_turn else [],
            deck_size=len(view.deck),
            discard_pile_size=len(view.discard_pile),
            discard_top=_card_info(view.discard_pile[-1]) if view.discard_pile else None,
            must_discard=view.must_discard,
            closing_turns_remaining=view.closing_turns_remaining,
            hand_size_limit=view.rules.hand_size,
            win_score=view.rules.win_score,
            winner_id=view.winner_id,
            event_log=list(view.event_log),
        )


def _session_not_found(session_id: str) -> ErrorResponse:
    return ErrorResponse(
        error="Session not found",
        error_code=ErrorCode.SESSION_NOT_FOUND,
        details={"session_id": session_id},
    )


def _status_for(state: GameState, viewer_id: str | None) -> SessionStatus:
    if state.is_finished:
        return SessionStatus.GAME_OVER
    current = state.current_player
    if current.player_id == viewer_id:
        return SessionStatus.YOUR_TURN
    if current.is_computer:
        return SessionStatus.AUTOMA_THINKING
    return SessionStatus.WAITING


def _card_info(card: Card) -> CardInfo:
    return CardInfo(card_id=card.card_id, kind=card.kind.value, value=card.value)


def _objective_info(objective: Objective) -> ObjectiveInfo:
    return ObjectiveInfo(
        objective_id=objective.objective_id,
        description=objective.description,
        tier=objective.tier.value,
        bonus_points=objective.bonus_points,
    )


def _player_info(state: GameState, player: PlayerState) -> PlayerInfo:
    return PlayerInfo(
        player_id=player.player_id,
        name=player.name,
        is_computer=player.is_computer,
        is_current_turn=(
            not state.is_finished and state.current_player.player_id == player.player_id
        ),
        score=player.score,
        hand_count=len(player.hand),
        hand=[_card_info(c) for c in player.hand],
        objective=_objective_info(player.objective) if player.objective else None,
        closed_combos=[
            ClosedComboInfo(
                cards=[_card_info(c) for c in combo.cards],
                base_points=combo.breakdown.base_points,
                bonus_points=combo.breakdown.bonus_points,
                objective_id=combo.breakdown.objective_id,
                objective_met=combo.breakdown.objective_met,
            )
            for combo in player.closed_combos
        ],
    )


def _ruleset_info(rules: RuleSet) -> RuleSetInfo:
    return RuleSetInfo(
        name=rules.name,
        description=rules.description,
        hand_size=rules.hand_size,
        win_score=rules.win_score,
        draw_on_play=rules.draw_on_play,
        draw_on_close=rules.draw_on_close,
        draw_on_pass=rules.draw_on_pass,
        final_turns_after_close=rules.final_turns_after_close,
        min_players=rules.min_players,
        max_players=rules.max_players,
        deck_size=rules.deck.size,
    )
