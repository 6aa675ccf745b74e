"""
Action Generator - Generates all legal actions from a game state.

The action generator is used by:
1. Bots to enumerate possible moves
2. Clients to highlight playable cards
3. Validation (is this action in legal_actions?)

Design: Generates Action objects, not just action types.
This ensures all generated actions are fully specified.
"""

from __future__ import annotations
from dataclasses import dataclass

from .state import GameState, GamePhase
from .action import Action, ActionType
from .validator import valid_hand_indices


@dataclass
class ActionGenerator:
    """
    Generates legal actions for the current seat.

    While a discard is pending only discards are legal; otherwise every
    playable card plus pass.
    """

    def generate(self, state: GameState) -> list[Action]:
        """
        Generate all legal actions for the current player.

        Returns a list of fully-specified Action objects.
        """
        if state.phase == GamePhase.FINISHED:
            return []

        player = state.current_player

        if state.phase == GamePhase.MUST_DISCARD:
            return [
                Action.discard(i, player_id=player.player_id)
                for i in range(len(player.hand))
            ]

        actions = [
            Action.play_card(i, player_id=player.player_id)
            for i in valid_hand_indices(state.community_combo, player.hand)
        ]

        # Pass action is always available
        actions.append(Action.pass_turn(player_id=player.player_id))
        return actions


def legal_actions(state: GameState) -> list[Action]:
    """
    Convenience function to get legal actions.

    Creates an ActionGenerator and generates actions.
    """
    generator = ActionGenerator()
    return generator.generate(state)


def playable_indices(state: GameState) -> list[int]:
    """Hand indices of the current player that can go on the combo."""
    if state.phase != GamePhase.PLAYING:
        return []
    return valid_hand_indices(state.community_combo, state.current_player.hand)


def is_legal(state: GameState, action: Action) -> bool:
    """Check if a specific action is legal."""
    for a in legal_actions(state):
        if (
            a.action_type == action.action_type
            and (action.action_type == ActionType.PASS
                 or a.payload.hand_index == action.payload.hand_index)
        ):
            return True
    return False
