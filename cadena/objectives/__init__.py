"""
Objectives module - Secret per-round scoring bonuses.

Provides:
- Predicate: Serializable condition over a combo
- Objective: Catalog entry with tier and bonus
- draw_objective: Tier-weighted random draw
"""

from .predicates import Predicate, PredicateKind
from .catalog import (
    Objective,
    Tier,
    TIER_BONUS,
    TIER_WEIGHT,
    OBJECTIVES,
    get_objective,
    objectives_by_tier,
    draw_objective,
)

__all__ = [
    "Predicate",
    "PredicateKind",
    "Objective",
    "Tier",
    "TIER_BONUS",
    "TIER_WEIGHT",
    "OBJECTIVES",
    "get_objective",
    "objectives_by_tier",
    "draw_objective",
]
