"""
Tests for computer players.

Tests:
- Only validator-approved cards are chosen
- Win-seeking closes
- Tier behavior for easy, normal and expert
- Discard and pass decisions
"""

import random

import pytest

from ..engine_core.action import ActionType
from ..engine_core.action_generator import legal_actions
from ..engine_core.reducer import play_card
from ..bots import (
    ChainBot,
    Difficulty,
    FirstLegalPolicy,
    RandomPolicy,
    choose_move,
    create_bots,
    get_personality,
)
from .factories import build_state, start, ext, end, filler, ScriptedRandom


def bot_for(difficulty, rng=None):
    return ChainBot(player_id="p0", personality=get_personality(difficulty), rng=rng)


class TestChooseMove:
    """Move selection shared by every tier."""

    def test_forced_close_after_opening(self):
        """P0 opens with START(1); the computer holds only END(1) and closes."""
        state = build_state(
            hands=[[start(1), ext(2), ext(3)], [end(1)]],
            deck=filler(10),
            objectives=["e1", "h5"],
            computer=[False, True],
        )
        state = play_card(state, 0)
        assert state.current_player.player_id == "p1"

        index = choose_move(state, "normal")
        assert index == 0

        state = play_card(state, index)
        cpu = state.players[1]
        assert cpu.score == 2
        assert not cpu.closed_combos[0].breakdown.objective_met
        assert state.round_number == 2
        assert state.winner_id is None

    @pytest.mark.parametrize("seed", range(25))
    def test_easy_with_single_move(self, seed):
        """Easy always plays the only valid card."""
        state = build_state(hands=[[ext(1), end(2), start(3)], [ext(1)]])
        assert choose_move(state, "facil", rng=random.Random(seed)) == 2

    @pytest.mark.parametrize("difficulty", ["easy", "normal", "expert"])
    def test_no_valid_move_passes(self, difficulty):
        """Every tier passes when nothing is playable."""
        state = build_state(hands=[[ext(1), end(1)], [ext(1)]])
        bot = bot_for(difficulty, rng=random.Random(0))

        assert bot.choose_move(state) is None
        decision = bot.select_action(state, legal_actions(state))
        assert decision.action.action_type == ActionType.PASS

    @pytest.mark.parametrize("difficulty", ["easy", "normal", "expert"])
    def test_always_picks_a_valid_card(self, difficulty):
        """Every tier picks only validator-approved cards."""
        state = build_state(
            hands=[[ext(1), ext(3), start(2), end(1), ext(2)], [ext(1)]],
            combo=[start(1), ext(2)],
        )
        bot = bot_for(difficulty, rng=random.Random(3))
        for _ in range(30):
            assert bot.choose_move(state) in (1, 3, 4)

    def test_winning_close_overrides_casual_play(self):
        """A winning close beats any other choice."""
        state = build_state(
            hands=[[ext(3), end(1), ext(2)], [ext(1)]],
            combo=[start(2), ext(2)],
            scores=[95, 0],
        )
        # Without the override this generator would pick the last card
        bot = bot_for("easy", rng=ScriptedRandom([0.0]))
        assert bot.choose_move(state) == 1


class TestEasy:
    """Casual play."""

    def test_closes_on_coin_flip(self):
        """Easy closes a 2+ combo when the coin says so."""
        state = build_state(hands=[[ext(2), end(1)], [ext(1)]], combo=[start(1), ext(1)])
        assert bot_for("easy", rng=ScriptedRandom([0.9, 0.1])).choose_move(state) == 1

    def test_otherwise_first_playable(self):
        """Easy otherwise plays its first playable card."""
        state = build_state(hands=[[ext(2), end(1)], [ext(1)]], combo=[start(1), ext(1)])
        assert bot_for("easy", rng=ScriptedRandom([0.9])).choose_move(state) == 0

    def test_random_pick(self):
        """Easy sometimes plays a random valid card."""
        state = build_state(hands=[[ext(2), end(1)], [ext(1)]], combo=[start(1), ext(1)])
        assert bot_for("easy", rng=ScriptedRandom([0.1], choice_index=-1)).choose_move(state) == 1


class TestGreedy:
    """Normal and expert evaluation."""

    @pytest.mark.parametrize("difficulty", ["normal", "expert"])
    def test_opens_with_lowest_start(self, difficulty):
        """Greedy tiers open with the lowest START."""
        state = build_state(hands=[[start(3), start(1), start(2)], [ext(1)]])
        bot = bot_for(difficulty, rng=ScriptedRandom([0.99]))
        assert bot.choose_move(state) == 1

    def test_expert_closes_established_combo(self):
        """Expert closes a combo of three or more."""
        state = build_state(
            hands=[[ext(2), end(1)], [ext(1)]],
            combo=[start(1), ext(1), ext(2)],
        )
        assert bot_for("expert").choose_move(state) == 1

    def test_expert_extends_short_combo(self):
        """Expert extends a one-card combo instead of closing."""
        state = build_state(hands=[[ext(1), end(3)], [ext(1)]], combo=[start(1)])
        assert bot_for("expert").choose_move(state) == 0

    def test_expert_prefers_low_extension(self):
        """Expert keeps room to extend."""
        state = build_state(hands=[[ext(3), ext(1)], [ext(1)]], combo=[start(1)])
        assert bot_for("expert").choose_move(state) == 1

    def test_expert_never_misjudges(self):
        """Expert ignores the mistake roll."""
        state = build_state(hands=[[ext(1), end(3)], [ext(1)]], combo=[start(1)])
        assert bot_for("expert", rng=ScriptedRandom([0.0])).choose_move(state) == 0

    def test_normal_can_misjudge(self):
        """Normal swaps its best move on a low roll."""
        state = build_state(hands=[[ext(1), end(3)], [ext(1)]], combo=[start(1)])
        assert bot_for("normal", rng=ScriptedRandom([0.99])).choose_move(state) == 0
        assert bot_for("normal", rng=ScriptedRandom([0.0])).choose_move(state) == 1


class TestDiscardAndPolicies:
    """Discards and the baseline policies."""

    def test_discards_first_lowest_card(self):
        """Over the limit, the first lowest card goes."""
        state = build_state(hands=[[ext(3), start(2), end(1), ext(1), ext(2), ext(3)], [ext(1)]])
        state.must_discard = True
        bot = bot_for("normal")

        assert bot.choose_discard(state) == 2
        decision = bot.select_action(state, legal_actions(state))
        assert decision.action.action_type == ActionType.DISCARD
        assert decision.action.payload.hand_index == 2

    def test_create_bots_for_computer_seats(self, seeded_match):
        """One bot per computer seat at the chosen tier."""
        bots = create_bots(seeded_match, "experta", seed=1)
        assert sorted(bots) == ["cpu-0", "cpu-1", "cpu-2"]
        assert all(b.personality.difficulty == Difficulty.EXPERT for b in bots.values())

    def test_baseline_policies(self, opening_state):
        """Baselines pick from the legal actions."""
        actions = legal_actions(opening_state)
        assert FirstLegalPolicy().select_action(opening_state, actions).action is actions[0]
        assert RandomPolicy(seed=1).select_action(opening_state, actions).action in actions
        with pytest.raises(ValueError):
            FirstLegalPolicy().select_action(opening_state, [])

    def test_difficulty_aliases(self):
        """Spanish tier names are accepted."""
        assert Difficulty.parse("Fácil") == Difficulty.EASY
        assert Difficulty.parse("experto") == Difficulty.EXPERT
        with pytest.raises(ValueError):
            Difficulty.parse("impossible")
