"""
Scoring - Points for a closed combo.

A closed combo is worth the sum of its card values, plus the closing
player's objective bonus when the objective holds on the full combo.
"""

from __future__ import annotations
from typing import Sequence, TYPE_CHECKING

from .state import Card, ScoreBreakdown

if TYPE_CHECKING:
    from ..objectives.catalog import Objective


def base_points(cards: Sequence[Card]) -> int:
    return sum(c.value for c in cards)


def score_combo(cards: Sequence[Card], objective: Objective | None) -> ScoreBreakdown:
    """Score a combo from START to END for a player holding objective."""
    base = base_points(cards)
    if objective is None:
        return ScoreBreakdown(base_points=base)

    met = objective.is_met(cards)
    return ScoreBreakdown(
        base_points=base,
        bonus_points=objective.bonus_points if met else 0,
        objective_id=objective.objective_id,
        objective_met=met,
    )
