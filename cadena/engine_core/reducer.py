"""
Reducer - Applies actions to game state.

The reducer is the single point of state mutation.
All state changes must go through apply_action().

Design principles:
- Pure function: (state, action) -> new_state
- Validates before applying; rejected actions leave the state untouched
- Returns ActionResult with success/failure, never raises for bad input
- A finished match accepts no further actions
"""

from __future__ import annotations
from dataclasses import dataclass

from .state import GameState, PlayerState, CardKind, ClosedCombo
from .action import Action, ActionType, ActionResult
from .deck import draw_cards
from .validator import is_valid_move
from .scoring import score_combo
from ..objectives.catalog import draw_objective


@dataclass
class Reducer:
    """
    Reducer applies actions to game state.

    Stateless - all state, rules included, is in GameState.
    """

    def apply(self, state: GameState, action: Action) -> ActionResult:
        """
        Apply an action to the game state.

        Returns ActionResult with new state or error.
        """
        # Validate action is legal
        rejection = self._validate_action(state, action)
        if rejection:
            error, code = rejection
            return ActionResult.failure(error, error_code=code)

        # Dispatch to handler based on action type
        handler = self._get_handler(action.action_type)
        if not handler:
            return ActionResult.failure(
                f"No handler for action type: {action.action_type}",
                error_code="NO_HANDLER",
            )

        try:
            working = state.clone()
            log_start = len(working.event_log)
            result = handler(working, action)
            if result.success and result.new_state:
                result.new_state.revision += 1
                result.new_state.action_history.append(action)
                result.state_changes = result.new_state.event_log[log_start:]
            return result
        except Exception as e:
            return ActionResult.failure(str(e), error_code="HANDLER_ERROR")

    def _validate_action(self, state: GameState, action: Action) -> tuple[str, str] | None:
        """
        Validate that an action is legal in the current state.

        Returns (error message, error code) if invalid, None if valid.
        """
        if state.is_finished:
            return "Match is finished - no actions allowed", "MATCH_FINISHED"

        player = state.current_player
        hand_limit = state.rules.hand_size
        index = action.payload.hand_index

        if action.action_type == ActionType.PLAY_CARD:
            if state.must_discard:
                return f"{player.name} must discard down to {hand_limit} cards first", "DISCARD_PENDING"
            if not _index_in_hand(player, index):
                return f"No card at hand index {index}", "INVALID_INDEX"
            card = player.hand[index]
            if not is_valid_move(state.community_combo, card):
                return f"{card} cannot be played on the current combo", "ILLEGAL_MOVE"

        elif action.action_type == ActionType.DISCARD:
            if not state.must_discard or len(player.hand) <= hand_limit:
                return "No discard pending", "NO_DISCARD_PENDING"
            if not _index_in_hand(player, index):
                return f"No card at hand index {index}", "INVALID_INDEX"

        elif action.action_type == ActionType.PASS:
            if state.must_discard:
                return f"{player.name} must discard down to {hand_limit} cards first", "DISCARD_PENDING"

        return None

    def _get_handler(self, action_type: ActionType):
        """Get the handler function for an action type."""
        handlers = {
            ActionType.PLAY_CARD: self._handle_play_card,
            ActionType.DISCARD: self._handle_discard,
            ActionType.PASS: self._handle_pass,
        }
        return handlers.get(action_type)

    def _handle_play_card(self, state: GameState, action: Action) -> ActionResult:
        """Handle playing a card onto the community combo."""
        rules = state.rules
        player = state.current_player
        card = player.hand.pop(action.payload.hand_index)

        if card.kind == CardKind.END:
            combo = state.community_combo + [card]
            breakdown = score_combo(combo, player.objective)
            player.score += breakdown.total
            player.closed_combos.append(ClosedCombo(cards=tuple(combo), breakdown=breakdown))

            state.discard_pile.extend(combo)
            state.community_combo = []

            summary = f"{player.name} closed the combo {' '.join(str(c) for c in combo)} for {breakdown.total} points"
            if breakdown.objective_met:
                summary += f" (objective {breakdown.objective_id} +{breakdown.bonus_points})"
            state.log(summary)

            draw_cards(state, player, rules.draw_on_close)

            if player.score >= rules.win_score:
                state.winner_id = player.player_id
                state.log(f"{player.name} wins with {player.score} points")
                return ActionResult.success_with_state(state)

            if rules.final_turns_after_close and state.num_players > 1:
                # The countdown includes the closer's own turn ending
                state.closing_turns_remaining = state.num_players
                state.log("Last call: every other player gets one more turn")
            else:
                self._rotate_objectives(state)
        else:
            state.community_combo.append(card)
            state.log(f"{player.name} played {card}")
            draw_cards(state, player, rules.draw_on_play)

        self._finish_turn(state, player)
        return ActionResult.success_with_state(state)

    def _handle_discard(self, state: GameState, action: Action) -> ActionResult:
        """Handle discarding while over the hand limit."""
        player = state.current_player
        card = player.hand.pop(action.payload.hand_index)
        state.discard_pile.append(card)
        state.log(f"{player.name} discarded {card}")

        self._finish_turn(state, player)
        return ActionResult.success_with_state(state)

    def _handle_pass(self, state: GameState, action: Action) -> ActionResult:
        """Handle pass: draw, then end the turn unless a discard is pending."""
        player = state.current_player
        drawn = draw_cards(state, player, state.rules.draw_on_pass)
        state.log(f"{player.name} passed and drew {drawn} card(s)")

        state.must_discard = len(player.hand) > state.rules.hand_size
        if state.must_discard:
            return ActionResult.success_with_state(state)

        if self._is_stalemate(state):
            # max() keeps the first of equal scores, so the earliest seat wins ties
            winner = max(state.players, key=lambda p: p.score)
            state.winner_id = winner.player_id
            state.log(f"No moves left for anyone: {winner.name} wins with {winner.score} points")
            return ActionResult.success_with_state(state)

        self._advance_turn(state)
        return ActionResult.success_with_state(state)

    def _finish_turn(self, state: GameState, player: PlayerState) -> None:
        state.must_discard = len(player.hand) > state.rules.hand_size
        if not state.must_discard and state.winner_id is None:
            self._advance_turn(state)

    def _advance_turn(self, state: GameState) -> None:
        if state.closing_turns_remaining:
            state.closing_turns_remaining -= 1
            if state.closing_turns_remaining == 0:
                self._rotate_objectives(state)

        state.current_player_idx = (state.current_player_idx + 1) % state.num_players
        state.turn_number += 1

    def _rotate_objectives(self, state: GameState) -> None:
        rng = state.rng()
        for p in state.players:
            p.objective = draw_objective(rng)
        state.round_number += 1
        state.log(f"Round {state.round_number}: new objectives dealt")

    def _is_stalemate(self, state: GameState) -> bool:
        if state.deck or state.discard_pile:
            return False
        return not any(
            is_valid_move(state.community_combo, card)
            for p in state.players
            for card in p.hand
        )


def _index_in_hand(player: PlayerState, index: int | None) -> bool:
    return isinstance(index, int) and 0 <= index < len(player.hand)


def apply_action(state: GameState, action: Action) -> ActionResult:
    """
    Convenience function to apply an action.

    Creates a Reducer and applies the action.
    """
    reducer = Reducer()
    return reducer.apply(state, action)


def _apply_or_keep(state: GameState, action: Action) -> GameState:
    result = apply_action(state, action)
    return result.new_state if result.success else state


def play_card(state: GameState, hand_index: int) -> GameState:
    """Play a card; an illegal play returns the same state object."""
    return _apply_or_keep(state, Action.play_card(hand_index))


def discard_card(state: GameState, hand_index: int) -> GameState:
    """Discard while over the hand limit; otherwise a no-op."""
    return _apply_or_keep(state, Action.discard(hand_index))


def pass_turn(state: GameState) -> GameState:
    """Draw a card and end the turn; a no-op while a discard is pending."""
    return _apply_or_keep(state, Action.pass_turn())
