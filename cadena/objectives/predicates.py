"""
Combo Predicates - Serializable conditions evaluated on a closed combo.

A predicate is a tagged variant: a kind plus a few parameters. This keeps
objectives inspectable and round-trippable through JSON, unlike closures.

Parameter meaning per kind:
- MIN_LENGTH: at least `amount` cards
- STARTS_WITH_VALUE / ENDS_WITH_VALUE: first / last card has `value`
- MIN_KIND_COUNT: at least `amount` cards of `card_kind`
- ALL_VALUES_AT_MOST: at least `amount` cards, every value <= `value`
- MIN_VALUE_SUM: values add up to at least `amount`
- CONTAINS_VALUES: every value in `values` appears somewhere
- ALL_SAME_VALUE: at least `amount` cards, all of one value
- CONSECUTIVE_RUN: `values` appear as adjacent cards, in order
- MIN_VALUE_COUNT: at least `amount` cards with `value`
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Sequence, TYPE_CHECKING

if TYPE_CHECKING:
    from ..engine_core.state import Card


class PredicateKind(Enum):
    MIN_LENGTH = "min_length"
    STARTS_WITH_VALUE = "starts_with_value"
    ENDS_WITH_VALUE = "ends_with_value"
    MIN_KIND_COUNT = "min_kind_count"
    ALL_VALUES_AT_MOST = "all_values_at_most"
    MIN_VALUE_SUM = "min_value_sum"
    CONTAINS_VALUES = "contains_values"
    ALL_SAME_VALUE = "all_same_value"
    CONSECUTIVE_RUN = "consecutive_run"
    MIN_VALUE_COUNT = "min_value_count"


@dataclass(frozen=True)
class Predicate:
    """A condition over the cards of a combo."""
    kind: PredicateKind
    amount: int = 0
    value: int | None = None
    card_kind: str | None = None  # a CardKind value, e.g. "EXTENSION"
    values: tuple[int, ...] = ()

    def evaluate(self, cards: Sequence[Card]) -> bool:
        """Check the predicate against a combo, START to END."""
        return _EVALUATORS[self.kind](self, list(cards))

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"kind": self.kind.value}
        if self.amount:
            data["amount"] = self.amount
        if self.value is not None:
            data["value"] = self.value
        if self.card_kind is not None:
            data["card_kind"] = self.card_kind
        if self.values:
            data["values"] = list(self.values)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Predicate:
        return cls(
            kind=PredicateKind(data["kind"]),
            amount=data.get("amount", 0),
            value=data.get("value"),
            card_kind=data.get("card_kind"),
            values=tuple(data.get("values", ())),
        )


def _min_length(p: Predicate, cards: list[Card]) -> bool:
    return len(cards) >= p.amount


def _starts_with_value(p: Predicate, cards: list[Card]) -> bool:
    return bool(cards) and cards[0].value == p.value


def _ends_with_value(p: Predicate, cards: list[Card]) -> bool:
    return bool(cards) and cards[-1].value == p.value


def _min_kind_count(p: Predicate, cards: list[Card]) -> bool:
    return sum(1 for c in cards if c.kind.value == p.card_kind) >= p.amount


def _all_values_at_most(p: Predicate, cards: list[Card]) -> bool:
    return len(cards) >= p.amount and all(c.value <= p.value for c in cards)


def _min_value_sum(p: Predicate, cards: list[Card]) -> bool:
    return sum(c.value for c in cards) >= p.amount


def _contains_values(p: Predicate, cards: list[Card]) -> bool:
    present = {c.value for c in cards}
    return all(v in present for v in p.values)


def _all_same_value(p: Predicate, cards: list[Card]) -> bool:
    return len(cards) >= p.amount and len({c.value for c in cards}) == 1


def _consecutive_run(p: Predicate, cards: list[Card]) -> bool:
    run = list(p.values)
    values = [c.value for c in cards]
    if not run:
        return True
    for i in range(len(values) - len(run) + 1):
        if values[i:i + len(run)] == run:
            return True
    return False


def _min_value_count(p: Predicate, cards: list[Card]) -> bool:
    return sum(1 for c in cards if c.value == p.value) >= p.amount


_EVALUATORS: dict[PredicateKind, Callable[[Predicate, list[Card]], bool]] = {
    PredicateKind.MIN_LENGTH: _min_length,
    PredicateKind.STARTS_WITH_VALUE: _starts_with_value,
    PredicateKind.ENDS_WITH_VALUE: _ends_with_value,
    PredicateKind.MIN_KIND_COUNT: _min_kind_count,
    PredicateKind.ALL_VALUES_AT_MOST: _all_values_at_most,
    PredicateKind.MIN_VALUE_SUM: _min_value_sum,
    PredicateKind.CONTAINS_VALUES: _contains_values,
    PredicateKind.ALL_SAME_VALUE: _all_same_value,
    PredicateKind.CONSECUTIVE_RUN: _consecutive_run,
    PredicateKind.MIN_VALUE_COUNT: _min_value_count,
}
