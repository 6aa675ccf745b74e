"""
Engine Core - Deterministic match state management.

The engine is the runtime that:
1. Creates a match from a roster and a RuleSet
2. Manages GameState
3. Validates moves and generates legal actions
4. Applies actions via the reducer
5. Projects per-viewer views
"""

from .state import (
    GameState,
    PlayerState,
    GamePhase,
    Card,
    CardKind,
    ClosedCombo,
    ScoreBreakdown,
    HIDDEN_CARD,
)
from .rules import RuleSet, DeckComposition, RULESETS, STANDARD, LONG_HAND, LAST_CALL, get_ruleset
from .action import Action, ActionType, ActionPayload, ActionResult
from .validator import is_valid_move, valid_hand_indices
from .scoring import score_combo
from .reducer import Reducer, apply_action, play_card, discard_card, pass_turn
from .action_generator import ActionGenerator, legal_actions, playable_indices, is_legal
from .setup import create_match
from .view import project_view

__all__ = [
    "GameState",
    "PlayerState",
    "GamePhase",
    "Card",
    "CardKind",
    "ClosedCombo",
    "ScoreBreakdown",
    "HIDDEN_CARD",
    "RuleSet",
    "DeckComposition",
    "RULESETS",
    "STANDARD",
    "LONG_HAND",
    "LAST_CALL",
    "get_ruleset",
    "Action",
    "ActionType",
    "ActionPayload",
    "ActionResult",
    "is_valid_move",
    "valid_hand_indices",
    "score_combo",
    "Reducer",
    "apply_action",
    "play_card",
    "discard_card",
    "pass_turn",
    "ActionGenerator",
    "legal_actions",
    "playable_indices",
    "is_legal",
    "create_match",
    "project_view",
]
