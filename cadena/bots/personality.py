"""
Bot Personalities - The three difficulty tiers.

Personalities adjust:
- Evaluation weights (what the bot values)
- Randomness (how often it plays a random card)
- Close preference (casual play only)
- Mistake rate (how often it discards its best move)
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum

from .evaluator import EvaluationWeights, EXPERT_WEIGHTS


class Difficulty(Enum):
    EASY = "easy"
    NORMAL = "normal"
    EXPERT = "expert"

    @classmethod
    def parse(cls, name: str | Difficulty) -> Difficulty:
        """Accept enum members, canonical names and the Spanish aliases."""
        if isinstance(name, Difficulty):
            return name
        key = name.strip().lower()
        key = _ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            raise ValueError(
                f"Unknown difficulty '{name}'. Use one of: easy, normal, expert"
            ) from None


_ALIASES = {
    "facil": "easy",
    "fácil": "easy",
    "experta": "expert",
    "experto": "expert",
}


@dataclass
class Personality:
    """
    A bot personality that defines play style.

    Casual personalities skip the evaluator and play from simple rules;
    the others pick the best-scoring card.
    """
    name: str
    difficulty: Difficulty
    description: str = ""

    # Evaluation weights
    weights: EvaluationWeights = field(default_factory=EvaluationWeights)
    uses_heuristic: bool = True

    # Behavioral parameters
    random_play_rate: float = 0.0  # Probability of a random playable card
    close_rate: float = 0.0  # Probability of closing a 2+ combo when able
    mistake_rate: float = 0.0  # Probability of replacing the best move


# ============================================================================
# Predefined Personalities
# ============================================================================

EASY = Personality(
    name="Easy",
    difficulty=Difficulty.EASY,
    description="Plays loosely: often random, closes on a coin flip",
    uses_heuristic=False,
    random_play_rate=0.4,
    close_rate=0.5,
)

NORMAL = Personality(
    name="Normal",
    difficulty=Difficulty.NORMAL,
    description="Greedy heuristic play with the occasional mistake",
    weights=EvaluationWeights(),
    mistake_rate=0.15,
)

EXPERT = Personality(
    name="Expert",
    difficulty=Difficulty.EXPERT,
    description="Sharper weights: long combos, low openers, keeps a closer in hand",
    weights=EXPERT_WEIGHTS,
)


PERSONALITIES: dict[Difficulty, Personality] = {
    Difficulty.EASY: EASY,
    Difficulty.NORMAL: NORMAL,
    Difficulty.EXPERT: EXPERT,
}


def get_personality(difficulty: str | Difficulty) -> Personality:
    return PERSONALITIES[Difficulty.parse(difficulty)]
