"""
Heuristic Evaluator - Scores candidate cards for bot decision-making.

The evaluator assigns a numeric score to playing a card based on:
- Opening: low STARTs leave room to extend
- Closing: longer combos, met objectives and near-win closes
- Extending: early extensions, and whether the hand can close later

Weights can be adjusted to create different difficulty tiers.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..engine_core.state import Card, CardKind
from ..engine_core.scoring import score_combo

if TYPE_CHECKING:
    from ..engine_core.state import GameState, PlayerState

# A close that lands within this many points of the win score is urgent
NEAR_WIN_MARGIN = 5

# Card values are 1..3; (CEILING - value) rewards low cards
VALUE_CEILING = 4


@dataclass
class EvaluationWeights:
    """
    Weights for the heuristic evaluator.

    Higher values = more importance. Defaults are the normal tier.
    Combo lengths refer to the combo before the card is placed.
    """
    # Opening a combo with a START
    open_base: float = 100.0
    open_low_value: float = 3.0

    # Closing with an END, by combo length
    close_long: float = 50.0  # 4+ cards
    close_medium: float = 35.0  # 3 cards
    close_short: float = 20.0  # 2 cards
    close_minimal: float = 5.0  # 1 card
    close_objective: float = 25.0
    close_near_win: float = 30.0
    close_established: float = 0.0  # 3+ cards
    close_points: float = 1.0  # per point scored

    # Extending, by combo length
    extend_early: float = 20.0  # 1 card
    extend_mid: float = 15.0  # 2 cards
    extend_late: float = 8.0  # 3+ cards
    extend_low_value: float = 5.0  # flat, for values 1-2
    extend_value: float = 0.0  # per point below the ceiling
    extend_with_closer: float = 0.0  # an END is in hand
    extend_without_closer: float = 0.0


EXPERT_WEIGHTS = EvaluationWeights(
    open_low_value=10.0,
    close_long=80.0,
    close_medium=55.0,
    close_objective=40.0,
    close_near_win=60.0,
    close_established=15.0,
    close_points=2.0,
    extend_mid=12.0,
    extend_late=3.0,
    extend_low_value=0.0,
    extend_value=4.0,
    extend_with_closer=15.0,
    extend_without_closer=-10.0,
)


class HeuristicEvaluator:
    """
    Evaluates candidate plays using weighted heuristics.

    Used by bots for a greedy choice:
    1. Enumerate the playable cards
    2. Score each one against the current combo
    3. Select the highest score, first found on ties
    """

    def __init__(self, weights: EvaluationWeights | None = None):
        self.weights = weights or EvaluationWeights()

    def evaluate_card(self, state: GameState, player: PlayerState, card: Card) -> float:
        """Score placing card on the community combo for player."""
        if card.kind == CardKind.START:
            return self._score_open(card)
        if card.kind == CardKind.END:
            return self._score_close(state, player, card)
        if card.kind == CardKind.EXTENSION:
            return self._score_extend(state, player, card)
        return 0.0

    def _score_open(self, card: Card) -> float:
        w = self.weights
        return w.open_base + (VALUE_CEILING - card.value) * w.open_low_value

    def _score_close(self, state: GameState, player: PlayerState, card: Card) -> float:
        w = self.weights
        length = len(state.community_combo)
        breakdown = score_combo(state.community_combo + [card], player.objective)

        if length >= 4:
            score = w.close_long
        elif length >= 3:
            score = w.close_medium
        elif length >= 2:
            score = w.close_short
        else:
            score = w.close_minimal

        if breakdown.objective_met:
            score += w.close_objective
        if player.score + breakdown.total >= state.rules.win_score - NEAR_WIN_MARGIN:
            score += w.close_near_win
        if length >= 3:
            score += w.close_established

        score += breakdown.total * w.close_points
        return score

    def _score_extend(self, state: GameState, player: PlayerState, card: Card) -> float:
        w = self.weights
        length = len(state.community_combo)

        if length <= 1:
            score = w.extend_early
        elif length == 2:
            score = w.extend_mid
        else:
            score = w.extend_late

        if card.value <= 2:
            score += w.extend_low_value
        score += (VALUE_CEILING - card.value) * w.extend_value

        if player.has_kind(CardKind.END):
            score += w.extend_with_closer
        else:
            score += w.extend_without_closer
        return score
