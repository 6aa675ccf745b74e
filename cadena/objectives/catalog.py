"""
Objective Catalog - The fixed set of secret scoring objectives.

Each round every player holds one objective. Closing a combo that
satisfies it adds the objective's bonus on top of the card values.
Objectives are drawn with tier weights easy:normal:hard = 3:2:1.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Sequence, TYPE_CHECKING
import random

from .predicates import Predicate, PredicateKind

if TYPE_CHECKING:
    from ..engine_core.state import Card


class Tier(Enum):
    """Objective difficulty tier."""
    EASY = "easy"
    NORMAL = "normal"
    HARD = "hard"


TIER_BONUS: dict[Tier, int] = {
    Tier.EASY: 2,
    Tier.NORMAL: 4,
    Tier.HARD: 7,
}

TIER_WEIGHT: dict[Tier, int] = {
    Tier.EASY: 3,
    Tier.NORMAL: 2,
    Tier.HARD: 1,
}


@dataclass(frozen=True)
class Objective:
    """A secret bonus condition held by a player for one round."""
    objective_id: str
    description: str
    tier: Tier
    bonus_points: int
    predicate: Predicate

    def is_met(self, cards: Sequence[Card]) -> bool:
        return self.predicate.evaluate(cards)

    def to_dict(self) -> dict[str, Any]:
        return {
            "objective_id": self.objective_id,
            "description": self.description,
            "tier": self.tier.value,
            "bonus_points": self.bonus_points,
            "predicate": self.predicate.to_dict(),
        }


def _objective(objective_id: str, description: str, tier: Tier, predicate: Predicate) -> Objective:
    return Objective(
        objective_id=objective_id,
        description=description,
        tier=tier,
        bonus_points=TIER_BONUS[tier],
        predicate=predicate,
    )


OBJECTIVES: tuple[Objective, ...] = (
    # Easy
    _objective("e1", "Combo of 3+ cards", Tier.EASY,
               Predicate(PredicateKind.MIN_LENGTH, amount=3)),
    _objective("e2", "Start with a 1", Tier.EASY,
               Predicate(PredicateKind.STARTS_WITH_VALUE, value=1)),
    _objective("e3", "Finish with a 3", Tier.EASY,
               Predicate(PredicateKind.ENDS_WITH_VALUE, value=3)),
    _objective("e4", "At least 1 Extension", Tier.EASY,
               Predicate(PredicateKind.MIN_KIND_COUNT, amount=1, card_kind="EXTENSION")),
    # Normal
    _objective("n1", "Combo of 4+ cards", Tier.NORMAL,
               Predicate(PredicateKind.MIN_LENGTH, amount=4)),
    _objective("n2", "At least 2 Extensions", Tier.NORMAL,
               Predicate(PredicateKind.MIN_KIND_COUNT, amount=2, card_kind="EXTENSION")),
    _objective("n3", "Only low values (1-2), 2+ cards", Tier.NORMAL,
               Predicate(PredicateKind.ALL_VALUES_AT_MOST, amount=2, value=2)),
    _objective("n4", "Value sum of 8+", Tier.NORMAL,
               Predicate(PredicateKind.MIN_VALUE_SUM, amount=8)),
    _objective("n5", "Contains a 1, a 2 and a 3", Tier.NORMAL,
               Predicate(PredicateKind.CONTAINS_VALUES, values=(1, 2, 3))),
    # Hard
    _objective("h1", "All values equal, 3+ cards", Tier.HARD,
               Predicate(PredicateKind.ALL_SAME_VALUE, amount=3)),
    _objective("h2", "Combo of 5+ cards", Tier.HARD,
               Predicate(PredicateKind.MIN_LENGTH, amount=5)),
    _objective("h3", "Run 1-2-3 in a row", Tier.HARD,
               Predicate(PredicateKind.CONSECUTIVE_RUN, values=(1, 2, 3))),
    _objective("h4", "Value sum of 12+", Tier.HARD,
               Predicate(PredicateKind.MIN_VALUE_SUM, amount=12)),
    _objective("h5", "At least three 3s", Tier.HARD,
               Predicate(PredicateKind.MIN_VALUE_COUNT, amount=3, value=3)),
)

_BY_ID = {o.objective_id: o for o in OBJECTIVES}


def get_objective(objective_id: str) -> Objective | None:
    return _BY_ID.get(objective_id)


def objectives_by_tier(tier: Tier, catalog: Sequence[Objective] = OBJECTIVES) -> list[Objective]:
    return [o for o in catalog if o.tier == tier]


def draw_objective(rng: random.Random, catalog: Sequence[Objective] = OBJECTIVES) -> Objective:
    """Weighted draw: easy objectives are three times as likely as hard ones."""
    weights = [TIER_WEIGHT[o.tier] for o in catalog]
    return rng.choices(list(catalog), weights=weights, k=1)[0]
