"""
Tests for deck construction, drawing and match setup.
"""

import random
from collections import Counter

import pytest

from ..engine_core.state import CardKind
from ..engine_core.rules import STANDARD, LONG_HAND, get_ruleset
from ..engine_core.deck import create_deck, draw_cards, reshuffle_discard
from ..engine_core.setup import create_match
from .factories import build_state, ext, filler


class TestDeck:
    """Tests for the deck multiset."""

    def test_standard_composition(self):
        """The standard deck has 54 cards in the right mix."""
        deck = create_deck(STANDARD.deck, random.Random(1))

        assert len(deck) == 54 == STANDARD.deck.size
        kinds = Counter(c.kind for c in deck)
        assert kinds[CardKind.START] == 12
        assert kinds[CardKind.EXTENSION] == 30
        assert kinds[CardKind.END] == 12
        assert Counter((c.kind, c.value) for c in deck)[(CardKind.END, 3)] == 4
        assert len({c.card_id for c in deck}) == 54

    def test_same_seed_same_order(self):
        """A seed fixes the shuffle."""
        a = create_deck(STANDARD.deck, random.Random(5))
        b = create_deck(STANDARD.deck, random.Random(5))
        assert [c.card_id for c in a] == [c.card_id for c in b]

    def test_draw_takes_from_top(self):
        """Cards come off the top of the deck."""
        deck = filler(3)
        state = build_state(hands=[[], []], deck=deck)
        drawn = draw_cards(state, state.players[0], 2)

        assert drawn == 2
        assert state.players[0].hand == deck[:2]
        assert state.deck == deck[2:]

    def test_draw_reshuffles_discard(self):
        """An empty deck is refilled from the discard pile."""
        state = build_state(hands=[[], []], discard=[ext(1), ext(2)])
        drawn = draw_cards(state, state.players[0], 1)

        assert drawn == 1
        assert len(state.deck) == 1
        assert state.discard_pile == []
        assert any("reshuffled" in line for line in state.event_log)

    def test_draw_stops_when_exhausted(self):
        """Drawing stops quietly when no cards are left."""
        state = build_state(hands=[[], []], deck=filler(1))
        assert draw_cards(state, state.players[0], 3) == 1
        assert draw_cards(state, state.players[0], 1) == 0

    def test_no_reshuffle_while_deck_has_cards(self):
        """The discard pile stays put while the deck has cards."""
        state = build_state(hands=[[], []], deck=filler(1), discard=filler(2))
        assert not reshuffle_discard(state)
        assert len(state.discard_pile) == 2


class TestCreateMatch:
    """Tests for match setup."""

    def test_deals_hands_and_objectives(self, seeded_match):
        """Every seat gets a full hand and an objective."""
        state = seeded_match

        assert state.num_players == 4
        assert [p.player_id for p in state.players] == ["human", "cpu-0", "cpu-1", "cpu-2"]
        assert [p.is_computer for p in state.players] == [False, True, True, True]
        for player in state.players:
            assert len(player.hand) == 5
            assert player.objective is not None
        assert len(state.deck) == 54 - 20
        assert state.total_cards() == 54
        assert state.round_number == 1
        assert state.winner_id is None

    def test_seed_is_deterministic(self):
        """Same seed, same deck, starting seat and objectives."""
        a = create_match([("a", "A")], computer_seat_count=2, random_seed=9)
        b = create_match([("a", "A")], computer_seat_count=2, random_seed=9)

        assert a.current_player_idx == b.current_player_idx
        assert [c.card_id for c in a.deck] == [c.card_id for c in b.deck]
        assert [p.objective.objective_id for p in a.players] == [
            p.objective.objective_id for p in b.players
        ]

    def test_long_hand_deals_seven(self):
        """The long_hand rule set deals seven cards."""
        state = create_match([], computer_seat_count=2, rules=LONG_HAND, random_seed=1)
        assert all(len(p.hand) == 7 for p in state.players)

    @pytest.mark.parametrize("humans,computers", [(1, 0), (3, 3), (0, 6)])
    def test_rejects_bad_seat_counts(self, humans, computers):
        """Seat counts outside 2-5 are refused."""
        roster = [(f"h{i}", f"H{i}") for i in range(humans)]
        with pytest.raises(ValueError):
            create_match(roster, computer_seat_count=computers)

    def test_rejects_duplicate_ids(self):
        """Player ids must be unique."""
        with pytest.raises(ValueError):
            create_match([("a", "A"), ("a", "B")])

    def test_unknown_ruleset(self):
        """Unknown rule set names raise ValueError."""
        with pytest.raises(ValueError):
            get_ruleset("speed")
