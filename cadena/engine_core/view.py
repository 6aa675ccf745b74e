"""
Player Views - Per-viewer projections of the authoritative state.

A projection is a read-only copy safe to send to one client: every
other seat's hand (computer seats included) becomes opaque placeholders,
other seats' objectives are withheld and the deck order is hidden.
"""

from __future__ import annotations

from .state import GameState, HIDDEN_CARD


def project_view(state: GameState, viewer_id: str | None) -> GameState:
    """
    Project state for viewer_id.

    Pass None for a spectator view with every hand hidden. The community
    combo, discard pile, scores, closed combos and event log stay visible.
    """
    view = state.clone()
    for player in view.players:
        if player.player_id == viewer_id:
            continue
        player.hand = [HIDDEN_CARD] * len(player.hand)
        player.objective = None

    view.deck = [HIDDEN_CARD] * len(view.deck)
    view.random_state = None
    view.action_history = []
    return view
