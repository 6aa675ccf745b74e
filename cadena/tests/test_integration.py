"""
Integration tests - whole matches played by computer seats.

Checks properties that must hold after every action.
"""

import pytest

from ..engine_core.action_generator import legal_actions
from ..engine_core.reducer import apply_action
from ..engine_core.rules import STANDARD, LONG_HAND, LAST_CALL
from ..engine_core.setup import create_match
from ..bots import create_bots


def play_out(rules, difficulty, seed, max_steps=5000):
    """Yield (before, after) for every action of a computer-only match."""
    state = create_match([], computer_seat_count=3, rules=rules, random_seed=seed)
    bots = create_bots(state, difficulty, seed=seed)
    for _ in range(max_steps):
        if state.is_finished:
            return
        decision = bots[state.current_player.player_id].select_action(state, legal_actions(state))
        result = apply_action(state, decision.action)
        assert result.success, result.error
        yield state, result.new_state
        state = result.new_state


@pytest.mark.parametrize("rules", [STANDARD, LONG_HAND, LAST_CALL], ids=lambda r: r.name)
@pytest.mark.parametrize("difficulty", ["easy", "normal", "expert"])
class TestMatchProperties:
    """Invariants across full matches."""

    def test_card_count_is_conserved(self, rules, difficulty):
        """No card is ever created or lost."""
        for _, after in play_out(rules, difficulty, seed=11):
            assert after.total_cards() == rules.deck.size

    def test_scores_never_drop(self, rules, difficulty):
        """Scores only go up."""
        for before, after in play_out(rules, difficulty, seed=12):
            for old, new in zip(before.players, after.players):
                assert new.score >= old.score

    def test_hands_settle_at_limit(self, rules, difficulty):
        """Hands are back at the limit once a turn settles."""
        for _, after in play_out(rules, difficulty, seed=13):
            if not after.must_discard and not after.is_finished:
                assert all(len(p.hand) <= rules.hand_size for p in after.players)

    def test_match_ends_with_winner(self, rules, difficulty):
        """Every match ends with a seated winner."""
        last = None
        for _, after in play_out(rules, difficulty, seed=14):
            last = after
        assert last is not None and last.is_finished
        assert last.get_player(last.winner_id) is not None
        assert legal_actions(last) == []
