"""
Match Setup - Creates the initial game state.

This module handles:
- Seating human and computer players
- Building and shuffling the deck with a seed for determinism
- Dealing starting hands and first-round objectives
- Picking the starting seat
"""

from __future__ import annotations
import random
import uuid
from typing import Sequence

from .state import GameState, PlayerState
from .rules import RuleSet, STANDARD
from .deck import create_deck, draw_cards
from ..objectives.catalog import draw_objective

COMPUTER_NAMES = ["CPU Red", "CPU Blue", "CPU Green", "CPU Purple", "CPU Orange"]


def create_match(
    roster: Sequence[tuple[str, str]],
    computer_seat_count: int = 0,
    rules: RuleSet = STANDARD,
    random_seed: int | None = None,
    game_id: str | None = None,
) -> GameState:
    """
    Set up a new match.

    Args:
        roster: (player_id, name) for each human seat, in turn order
        computer_seat_count: Computer seats appended after the humans
        rules: Rule set for the match
        random_seed: Seed for deterministic shuffling and draws
        game_id: Identifier (random if not provided)

    Returns:
        Initial GameState ready for play
    """
    seats = len(roster) + computer_seat_count
    if computer_seat_count < 0:
        raise ValueError("Computer seat count cannot be negative")
    if seats < rules.min_players or seats > rules.max_players:
        raise ValueError(
            f"'{rules.name}' supports {rules.min_players}-{rules.max_players} players, got {seats}"
        )

    ids = [pid for pid, _ in roster]
    if len(set(ids)) != len(ids):
        raise ValueError("Player ids must be unique")

    # Set up random with seed for determinism
    rng = random.Random(random_seed)

    players = _create_players(roster, computer_seat_count)

    state = GameState(
        game_id=game_id or f"cadena_{uuid.UUID(int=rng.getrandbits(128)).hex[:12]}",
        rules=rules,
        players=players,
        deck=create_deck(rules.deck, rng),
        random_state=rng,
    )

    for player in state.players:
        draw_cards(state, player, rules.hand_size)
        player.objective = draw_objective(rng)

    state.current_player_idx = rng.randrange(state.num_players)
    state.log(
        f"Match started with {state.num_players} players ({rules.name} rules). "
        f"{state.current_player.name} goes first"
    )
    return state


def _create_players(roster: Sequence[tuple[str, str]], computer_seat_count: int) -> list[PlayerState]:
    """Create player states: humans first, then computer seats."""
    players = [
        PlayerState(player_id=pid, name=name, is_computer=False)
        for pid, name in roster
    ]
    for i in range(computer_seat_count):
        players.append(PlayerState(
            player_id=f"cpu-{i}",
            name=COMPUTER_NAMES[i] if i < len(COMPUTER_NAMES) else f"CPU {i + 1}",
            is_computer=True,
        ))
    return players
