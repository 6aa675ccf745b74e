"""
Move Validator - The single legality rule for placing a card on the combo.
"""

from __future__ import annotations
from typing import Sequence

from .state import Card, CardKind


def is_valid_move(combo: Sequence[Card], card: Card) -> bool:
    """
    Whether card may be placed on the community combo.

    - An empty combo only accepts a START.
    - A START is never legal on a non-empty combo.
    - An END may close any non-empty combo, whatever its value.
    - An EXTENSION must not lower the value of the last card.
    """
    if not combo:
        return card.kind == CardKind.START

    if card.kind == CardKind.START:
        return False
    if card.kind == CardKind.END:
        return True
    if card.kind == CardKind.EXTENSION:
        return card.value >= combo[-1].value
    return False


def valid_hand_indices(combo: Sequence[Card], hand: Sequence[Card]) -> list[int]:
    """Indices of the cards in hand that can be played on combo."""
    return [i for i, card in enumerate(hand) if is_valid_move(combo, card)]
