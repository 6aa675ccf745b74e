"""
Rule Sets - Named, immutable configurations of the game's tunables.

Variants of the game differ only in these numbers and switches, so a
match carries its RuleSet and every engine module reads limits from it.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from .state import CardKind


@dataclass(frozen=True)
class DeckComposition:
    """
    How many copies of each card kind exist for every value tier.

    The standard deck is 4 START, 10 EXTENSION and 4 END per value 1..3.
    """
    values: tuple[int, ...] = (1, 2, 3)
    copies: tuple[tuple[CardKind, int], ...] = (
        (CardKind.START, 4),
        (CardKind.EXTENSION, 10),
        (CardKind.END, 4),
    )

    @property
    def size(self) -> int:
        return len(self.values) * sum(n for _, n in self.copies)


@dataclass(frozen=True)
class RuleSet:
    """Tunables for one variant of the game."""
    name: str
    description: str = ""

    hand_size: int = 5
    win_score: int = 100

    draw_on_play: int = 1
    draw_on_close: int = 2
    draw_on_pass: int = 1

    # Give every other player one more turn before objectives rotate
    final_turns_after_close: bool = False

    min_players: int = 2
    max_players: int = 5

    deck: DeckComposition = field(default_factory=DeckComposition)


STANDARD = RuleSet(
    name="standard",
    description="Hand of 5, first to 100 points, objectives rotate on every close.",
)

LONG_HAND = RuleSet(
    name="long_hand",
    description="Standard rules with a hand of 7 cards.",
    hand_size=7,
)

LAST_CALL = RuleSet(
    name="last_call",
    description="After a close, every other player gets one more turn before objectives rotate.",
    final_turns_after_close=True,
)

RULESETS: dict[str, RuleSet] = {
    r.name: r for r in (STANDARD, LONG_HAND, LAST_CALL)
}


def get_ruleset(name: str) -> RuleSet:
    """Look up a named rule set."""
    try:
        return RULESETS[name]
    except KeyError:
        raise ValueError(
            f"Unknown rule set '{name}'. Available: {', '.join(sorted(RULESETS))}"
        ) from None
