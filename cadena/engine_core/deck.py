"""
Deck & Draw - Deck construction, shuffling and drawing with reshuffle.

The discard pile is the only way cards come back into the deck: a draw
that finds the deck empty shuffles the discard pile in first.
"""

from __future__ import annotations
import random
from typing import Sequence

from .state import Card, GameState, PlayerState
from .rules import DeckComposition


def shuffle(cards: Sequence[Card], rng: random.Random) -> list[Card]:
    """Return a uniformly shuffled copy of cards."""
    shuffled = list(cards)
    rng.shuffle(shuffled)
    return shuffled


def create_deck(composition: DeckComposition, rng: random.Random) -> list[Card]:
    """Build the full multiset of cards and shuffle it."""
    cards = []
    n = 0
    for kind, copies in composition.copies:
        for value in composition.values:
            for _ in range(copies):
                cards.append(Card(card_id=f"card-{n}", kind=kind, value=value))
                n += 1
    return shuffle(cards, rng)


def reshuffle_discard(state: GameState) -> bool:
    """Move the discard pile into an empty deck. Returns True if it did."""
    if state.deck or not state.discard_pile:
        return False
    state.deck = shuffle(state.discard_pile, state.rng())
    state.discard_pile = []
    state.log(f"Discard pile reshuffled into the deck ({len(state.deck)} cards)")
    return True


def draw_cards(state: GameState, player: PlayerState, count: int) -> int:
    """
    Draw up to count cards into player's hand.

    Stops silently when both the deck and the discard pile are empty.
    Returns the number of cards actually drawn.
    """
    drawn = 0
    for _ in range(count):
        if not state.deck:
            reshuffle_discard(state)
        if not state.deck:
            break
        player.hand.append(state.deck.pop(0))
        drawn += 1
    return drawn
