"""
Bot Policy - How a computer seat turns a state into an action.

Every policy receives the legal actions for the current seat (plays,
discards or pass, from legal_actions) and answers with a BotDecision.
The explanation ends up in the session log, so keep it short.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any
import random

from ..engine_core.action import ActionType

if TYPE_CHECKING:
    from ..engine_core.state import GameState
    from ..engine_core.action import Action


@dataclass
class BotDecision:
    """
    What a computer seat does this turn, and why.

    best_score is the evaluator score of the chosen card (0 for
    passes, discards and the baselines).
    """
    action: Action
    explanation: str = ""
    confidence: float = 1.0

    evaluated_actions: int = 0
    best_score: float = 0.0
    evaluation_details: dict[str, Any] = field(default_factory=dict)


class BotPolicy(ABC):
    """
    Decision-making for one computer seat.

    Implementations: the tiered ChainBot and two baselines used by
    `cadena simulate --policy`.
    """

    @abstractmethod
    def select_action(
        self,
        state: GameState,
        legal_actions: list[Action],
    ) -> BotDecision:
        """
        Choose one of legal_actions for state.current_player.

        Raises ValueError when legal_actions is empty (finished match).
        """

    def get_name(self) -> str:
        return self.__class__.__name__


class RandomPolicy(BotPolicy):
    """
    Baseline: a random playable card, passing only when nothing fits.

    While a discard is pending every legal action is a discard, so the
    discarded card is random too.
    """

    def __init__(self, seed: int | None = None):
        self.rng = random.Random(seed)

    def select_action(
        self,
        state: GameState,
        legal_actions: list[Action],
    ) -> BotDecision:
        if not legal_actions:
            raise ValueError("No legal actions available")

        plays = [a for a in legal_actions if a.action_type != ActionType.PASS]
        action = self.rng.choice(plays or legal_actions)
        return BotDecision(
            action=action,
            explanation=f"Random {action.describe()}",
            confidence=1.0 / len(plays or legal_actions),
            evaluated_actions=len(legal_actions),
        )


class FirstLegalPolicy(BotPolicy):
    """
    Baseline: the lowest hand index that can be played, else pass.

    Fully deterministic, which makes it handy in tests.
    """

    def select_action(
        self,
        state: GameState,
        legal_actions: list[Action],
    ) -> BotDecision:
        if not legal_actions:
            raise ValueError("No legal actions available")

        return BotDecision(
            action=legal_actions[0],
            explanation=f"First legal: {legal_actions[0].describe()}",
            evaluated_actions=len(legal_actions),
        )
