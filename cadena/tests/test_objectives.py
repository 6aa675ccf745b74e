"""
Tests for the objective catalog and its predicates.
"""

import random
from collections import Counter

import pytest

from ..objectives import (
    OBJECTIVES,
    Tier,
    TIER_BONUS,
    Predicate,
    draw_objective,
    get_objective,
    objectives_by_tier,
)
from .factories import start, ext, end


class TestCatalog:
    """Shape of the catalog."""

    def test_fourteen_objectives(self):
        """The catalog holds 14 distinct objectives."""
        assert len(OBJECTIVES) == 14
        assert len({o.objective_id for o in OBJECTIVES}) == 14

    def test_tier_sizes_and_bonuses(self):
        """Tiers hold 4/5/5 objectives worth 2/4/7."""
        assert len(objectives_by_tier(Tier.EASY)) == 4
        assert len(objectives_by_tier(Tier.NORMAL)) == 5
        assert len(objectives_by_tier(Tier.HARD)) == 5
        for objective in OBJECTIVES:
            assert objective.bonus_points == TIER_BONUS[objective.tier]

    def test_unknown_id(self):
        """Unknown ids return None."""
        assert get_objective("x9") is None

    def test_predicates_serialize(self):
        """Predicates survive a dict round trip."""
        for objective in OBJECTIVES:
            data = objective.to_dict()
            assert Predicate.from_dict(data["predicate"]) == objective.predicate

    def test_draw_follows_tier_weights(self):
        """Draws follow the 3:2:1 tier weights."""
        rng = random.Random(7)
        draws = 6000
        tiers = Counter(draw_objective(rng).tier for _ in range(draws))

        # Expected shares are 12/27, 10/27 and 5/27
        assert 0.40 <= tiers[Tier.EASY] / draws <= 0.49
        assert 0.33 <= tiers[Tier.NORMAL] / draws <= 0.41
        assert 0.15 <= tiers[Tier.HARD] / draws <= 0.22


# (objective id, a combo that satisfies it, a combo that does not)
CASES = [
    ("e1", lambda: [start(1), ext(1), end(1)], lambda: [start(1), end(1)]),
    ("e2", lambda: [start(1), end(2)], lambda: [start(2), end(1)]),
    ("e3", lambda: [start(1), end(3)], lambda: [start(1), end(2)]),
    ("e4", lambda: [start(1), ext(1), end(1)], lambda: [start(1), end(1)]),
    ("n1", lambda: [start(1), ext(1), ext(1), end(1)], lambda: [start(1), ext(1), end(1)]),
    ("n2", lambda: [start(1), ext(1), ext(2), end(2)], lambda: [start(1), ext(1), end(1)]),
    ("n3", lambda: [start(1), ext(2), end(1)], lambda: [start(1), ext(3), end(1)]),
    ("n4", lambda: [start(3), ext(3), end(2)], lambda: [start(3), ext(3), end(1)]),
    ("n5", lambda: [start(1), ext(2), end(3)], lambda: [start(1), ext(2), end(2)]),
    ("h1", lambda: [start(2), ext(2), end(2)], lambda: [start(2), ext(2), end(3)]),
    ("h2", lambda: [start(1), ext(1), ext(1), ext(1), end(1)], lambda: [start(1), ext(1), ext(1), end(1)]),
    ("h3", lambda: [start(1), ext(1), ext(2), end(3)], lambda: [start(1), ext(2), ext(2), end(3)]),
    ("h4", lambda: [start(3), ext(3), ext(3), end(3)], lambda: [start(3), ext(3), ext(3), end(2)]),
    ("h5", lambda: [start(3), ext(3), end(3)], lambda: [start(3), ext(3), end(2)]),
]


class TestPredicates:
    """Each objective against a combo that meets it and one that misses."""

    @pytest.mark.parametrize("objective_id,hit,miss", CASES)
    def test_objective(self, objective_id, hit, miss):
        """Each objective accepts its hit and rejects its miss."""
        objective = get_objective(objective_id)
        assert objective.is_met(hit())
        assert not objective.is_met(miss())

    def test_all_same_value_needs_three_cards(self):
        """Two equal cards are not enough for h1."""
        assert not get_objective("h1").is_met([start(2), end(2)])

    def test_low_values_need_two_cards(self):
        """A single card never satisfies n3."""
        assert not get_objective("n3").is_met([start(1)])
