"""
Chain Bot - Computer player for Cadena.

Decision order for a move:
1. Only cards the validator accepts are considered; none means pass
2. A close that reaches the win score is always taken
3. Easy plays loosely; Normal and Expert pick the best-scoring card
4. Normal sometimes swaps its best move for a random one

While over the hand limit the bot discards its lowest-value card.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING
import random

from .policy import BotPolicy, BotDecision
from .evaluator import HeuristicEvaluator
from .personality import Personality, Difficulty, NORMAL, get_personality
from ..engine_core.state import CardKind, GamePhase
from ..engine_core.action import Action
from ..engine_core.validator import valid_hand_indices
from ..engine_core.scoring import score_combo

if TYPE_CHECKING:
    from ..engine_core.state import GameState, PlayerState


@dataclass
class ChainBot(BotPolicy):
    """
    Tiered automa with a greedy one-card evaluation.

    Usage:
        bot = ChainBot(player_id="cpu-0", personality=EXPERT)
        decision = bot.select_action(state, legal_actions(state))
    """
    player_id: str
    personality: Personality = None  # type: ignore
    evaluator: HeuristicEvaluator = None  # type: ignore
    rng: random.Random = None  # type: ignore

    def __post_init__(self):
        if self.personality is None:
            self.personality = NORMAL
        if self.evaluator is None:
            self.evaluator = HeuristicEvaluator(weights=self.personality.weights)
        if self.rng is None:
            self.rng = random.Random()

    def select_action(
        self,
        state: GameState,
        legal_actions: list[Action],
    ) -> BotDecision:
        """Pick a discard, a play or a pass for the current seat."""
        if not legal_actions:
            raise ValueError("No legal actions available")

        player = state.current_player

        if state.phase == GamePhase.MUST_DISCARD:
            index = self.choose_discard(state)
            return BotDecision(
                action=Action.discard(index, player_id=player.player_id),
                explanation=f"Discard lowest card {player.hand[index]}",
                evaluated_actions=len(legal_actions),
            )

        index, score, reason = self._decide(state, player)
        if index is None:
            return BotDecision(
                action=Action.pass_turn(player_id=player.player_id),
                explanation="No playable card, passing",
                evaluated_actions=len(legal_actions),
            )

        return BotDecision(
            action=Action.play_card(index, player_id=player.player_id),
            explanation=f"Play {player.hand[index]}: {reason}",
            confidence=self._calculate_confidence(score, len(legal_actions)),
            evaluated_actions=len(legal_actions),
            best_score=score,
            evaluation_details={"difficulty": self.personality.difficulty.value},
        )

    def choose_move(self, state: GameState) -> int | None:
        """Hand index to play for the current seat, or None to pass."""
        index, _, _ = self._decide(state, state.current_player)
        return index

    def choose_discard(self, state: GameState) -> int:
        """Index of the first lowest-value card in the current hand."""
        hand = state.current_player.hand
        return min(range(len(hand)), key=lambda i: hand[i].value)

    def _decide(self, state: GameState, player: PlayerState) -> tuple[int | None, float, str]:
        combo = state.community_combo
        valid = valid_hand_indices(combo, player.hand)
        if not valid:
            return None, 0.0, "no playable card"

        winning = self._winning_close(state, player, valid)
        if winning is not None:
            return winning, 0.0, "closes for the win"

        if not self.personality.uses_heuristic:
            return self._decide_casually(state, player, valid)
        return self._decide_greedily(state, player, valid)

    def _winning_close(self, state: GameState, player: PlayerState, valid: list[int]) -> int | None:
        for i in valid:
            card = player.hand[i]
            if card.kind != CardKind.END:
                continue
            points = score_combo(state.community_combo + [card], player.objective).total
            if player.score + points >= state.rules.win_score:
                return i
        return None

    def _decide_casually(
        self,
        state: GameState,
        player: PlayerState,
        valid: list[int],
    ) -> tuple[int, float, str]:
        if self.rng.random() < self.personality.random_play_rate:
            return self.rng.choice(valid), 0.0, "random pick"

        if len(state.community_combo) >= 2:
            closer = next((i for i in valid if player.hand[i].kind == CardKind.END), None)
            if closer is not None and self.rng.random() < self.personality.close_rate:
                return closer, 0.0, "closes the combo"

        return valid[0], 0.0, "first playable card"

    def _decide_greedily(
        self,
        state: GameState,
        player: PlayerState,
        valid: list[int],
    ) -> tuple[int, float, str]:
        best_index = valid[0]
        best_score = float("-inf")
        for i in valid:
            score = self.evaluator.evaluate_card(state, player, player.hand[i])
            if score > best_score:
                best_index, best_score = i, score

        if (
            self.personality.mistake_rate
            and self.rng.random() < self.personality.mistake_rate
            and len(valid) > 1
        ):
            return self.rng.choice(valid), best_score, "misjudged"

        return best_index, best_score, f"score {best_score:.1f}"

    def _calculate_confidence(self, score: float, num_evaluated: int) -> float:
        """Calculate confidence in the decision."""
        if num_evaluated <= 1:
            return 1.0
        base_confidence = min(1.0, num_evaluated / 10)
        score_boost = min(0.3, score / 200) if score > 0 else 0
        return min(1.0, base_confidence + score_boost)

    def get_name(self) -> str:
        return f"ChainBot({self.player_id}, {self.personality.name})"


def choose_move(
    state: GameState,
    difficulty: str | Difficulty = Difficulty.NORMAL,
    rng: random.Random | None = None,
) -> int | None:
    """
    Hand index the current seat should play, or None to pass.

    Convenience function: builds a one-off ChainBot for the tier.
    """
    bot = ChainBot(
        player_id=state.current_player.player_id,
        personality=get_personality(difficulty),
        rng=rng,
    )
    return bot.choose_move(state)


def create_bots(
    state: GameState,
    difficulty: str | Difficulty = Difficulty.NORMAL,
    seed: int | None = None,
) -> dict[str, ChainBot]:
    """
    One bot per computer seat, all at the same difficulty.

    Bots do NOT coordinate - they play independently.
    """
    personality = get_personality(difficulty)
    bots = {}
    for i, player in enumerate(p for p in state.players if p.is_computer):
        bots[player.player_id] = ChainBot(
            player_id=player.player_id,
            personality=personality,
            rng=random.Random(None if seed is None else seed + i),
        )
    return bots
