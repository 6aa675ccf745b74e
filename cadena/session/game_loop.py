"""
Game Loop - The intent-driven gameplay loop.

The loop:
1. A human seat submits an intent (play, discard, pass)
2. The actor is checked against the current seat
3. The engine validates and applies it
4. Computer seats act until a human is up or the match is over
5. Clients receive the changes and re-fetch their projected view

The whole sequence runs under the session lock, so a match never sees
two writers.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING
import logging

from ..engine_core.action import Action
from ..engine_core.action_generator import legal_actions
from ..engine_core.reducer import apply_action

if TYPE_CHECKING:
    from .manager import Session

logger = logging.getLogger(__name__)

DEFAULT_MAX_AUTOMA_STEPS = 10_000


class LoopState(Enum):
    """State of the game loop."""
    WAITING_HUMAN_ACTION = "waiting_human_action"
    RUNNING_AUTOMA = "running_automa"
    GAME_OVER = "game_over"


@dataclass
class TurnResult:
    """
    Result of processing an intent.

    Contains the log lines produced and what the computer seats did.
    """
    success: bool
    loop_state: LoopState

    # Human-readable event lines, in order
    state_changes: list[str] = field(default_factory=list)

    # Computer actions taken
    automa_actions: list[str] = field(default_factory=list)

    # Errors
    errors: list[str] = field(default_factory=list)
    error_code: str | None = None

    # Game over info
    winner: str | None = None
    revision: int = 0


class GameLoop:
    """
    The main game loop driver.

    Usage:
        loop = GameLoop(session)
        loop.run_automa_turns()  # computer seats that open the match

        result = loop.apply_player_intent("player-1", Action.play_card(2))
        if not result.success:
            show_error(result.errors)
    """

    def __init__(self, session: Session, max_automa_steps: int = DEFAULT_MAX_AUTOMA_STEPS):
        self.session = session
        self.max_automa_steps = max_automa_steps
        self.state = LoopState.WAITING_HUMAN_ACTION

    def apply_player_intent(self, actor_id: str, action: Action) -> TurnResult:
        """
        Apply a human intent, then run computer turns.

        Intents from anyone but the current seat are rejected before the
        engine sees them.
        """
        with self.session.lock:
            game_state = self.session.game_state
            if game_state is None:
                return self._rejection("Session has ended", "SESSION_ENDED")
            if game_state.is_finished:
                return self._rejection("Match is finished", "MATCH_FINISHED")
            if game_state.get_player(actor_id) is None:
                return self._rejection(f"Unknown player {actor_id}", "PLAYER_NOT_FOUND")
            if game_state.current_player.player_id != actor_id:
                return self._rejection(
                    f"It is {game_state.current_player.name}'s turn",
                    "NOT_YOUR_TURN",
                )

            action.payload.player_id = actor_id
            result = apply_action(game_state, action)
            if not result.success:
                logger.info(
                    "Session %s: %s rejected for %s (%s)",
                    self.session.session_id, action.describe(), actor_id, result.error_code,
                )
                return self._rejection(result.error or "Action rejected", result.error_code)

            self.session.game_state = result.new_state
            self.session.touch()

            automa = self._run_automa_turns()
            # The intent itself was applied even if a computer seat failed
            automa.success = True
            automa.state_changes = result.state_changes + automa.state_changes
            return automa

    def run_automa_turns(self) -> TurnResult:
        """Run computer seats until a human is up or the match ends."""
        with self.session.lock:
            return self._run_automa_turns()

    def _run_automa_turns(self) -> TurnResult:
        if not self.session.game_state:
            return self._rejection("Session has ended", "SESSION_ENDED")

        self.state = LoopState.RUNNING_AUTOMA
        all_changes: list[str] = []
        all_actions: list[str] = []
        errors: list[str] = []

        steps = 0
        while steps < self.max_automa_steps:
            game_state = self.session.game_state
            if game_state.is_finished:
                break

            current_player = game_state.current_player
            if not current_player.is_computer:
                break

            bot = self.session.bots.get(current_player.player_id)
            if not bot:
                errors.append(f"No bot for computer seat {current_player.player_id}")
                break

            legal = legal_actions(game_state)
            decision = bot.select_action(game_state, legal)
            result = apply_action(game_state, decision.action)

            if not result.success or not result.new_state:
                # Bots only pick legal actions, so this is a bug
                logger.error(
                    "Session %s: bot %s produced a rejected action %s: %s",
                    self.session.session_id, current_player.player_id,
                    decision.action.describe(), result.error,
                )
                errors.append(result.error or "Bot action rejected")
                break

            self.session.game_state = result.new_state
            all_changes.extend(result.state_changes)
            all_actions.append(f"{current_player.name}: {decision.action.describe()}")
            logger.debug(
                "Session %s: %s -> %s (%s)",
                self.session.session_id, current_player.name,
                decision.action.describe(), decision.explanation,
            )
            steps += 1
        else:
            errors.append(f"Computer turns stopped after {self.max_automa_steps} steps")
            logger.warning(
                "Session %s: automa step limit %d reached",
                self.session.session_id, self.max_automa_steps,
            )

        return TurnResult(
            success=not errors,
            loop_state=self._settle(),
            state_changes=all_changes,
            automa_actions=all_actions,
            errors=errors,
            winner=self.session.game_state.winner_id,
            revision=self.session.game_state.revision,
        )

    def _settle(self) -> LoopState:
        from .manager import SessionState

        game_state = self.session.game_state
        if game_state.is_finished:
            if self.session.state == SessionState.ACTIVE:
                self.session.state = SessionState.GAME_OVER
                self.session.touch()
                winner = game_state.get_player(game_state.winner_id)
                logger.info(
                    "Session %s: %s won with %d points",
                    self.session.session_id, winner.name, winner.score,
                )
            self.state = LoopState.GAME_OVER
        else:
            self.state = LoopState.WAITING_HUMAN_ACTION
        return self.state

    def _rejection(self, error: str, error_code: str | None) -> TurnResult:
        game_state = self.session.game_state
        return TurnResult(
            success=False,
            loop_state=self.state,
            errors=[error],
            error_code=error_code,
            winner=game_state.winner_id if game_state else None,
            revision=game_state.revision if game_state else 0,
        )
