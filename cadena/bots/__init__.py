"""
Bots module - Computer player implementations.

Provides:
- BotPolicy: Interface for bot decision-making
- HeuristicEvaluator: Scores candidate cards
- ChainBot: Tiered Cadena bot
- Personality: Easy, Normal and Expert play styles
"""

from .policy import BotPolicy, BotDecision, RandomPolicy, FirstLegalPolicy
from .evaluator import HeuristicEvaluator, EvaluationWeights, EXPERT_WEIGHTS
from .personality import Personality, Difficulty, PERSONALITIES, get_personality
from .chain_bot import ChainBot, choose_move, create_bots

__all__ = [
    "BotPolicy",
    "BotDecision",
    "RandomPolicy",
    "FirstLegalPolicy",
    "HeuristicEvaluator",
    "EvaluationWeights",
    "EXPERT_WEIGHTS",
    "Personality",
    "Difficulty",
    "PERSONALITIES",
    "get_personality",
    "ChainBot",
    "choose_move",
    "create_bots",
]
