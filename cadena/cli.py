"""
Cadena CLI - Command-line interface for the engine.

Usage:
    cadena serve                 Run the HTTP/WebSocket API
    cadena simulate              Play a computer-only match and print the log
    cadena play                  Play in the terminal against computer seats
    cadena objectives            List the objective catalog
    cadena rulesets              List the named rule sets
"""

import argparse
import logging
import os
import sys


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Cadena - Chain Combo Card Game Engine",
        prog="cadena",
    )
    parser.add_argument(
        "--log-level",
        default=os.getenv("CADENA_LOG_LEVEL", "WARNING"),
        help="Logging level (default: $CADENA_LOG_LEVEL or WARNING)",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the API server")
    serve_parser.add_argument("--host", default=os.getenv("CADENA_HOST", "127.0.0.1"))
    serve_parser.add_argument("--port", type=int, default=int(os.getenv("CADENA_PORT", "8000")))
    serve_parser.add_argument("--reload", action="store_true", help="Auto-reload on code changes")

    # Simulate command
    sim_parser = subparsers.add_parser("simulate", help="Play a computer-only match")
    sim_parser.add_argument("--players", type=int, default=4, help="Number of computer seats")
    sim_parser.add_argument("--difficulty", default="normal", help="easy, normal or expert")
    sim_parser.add_argument(
        "--policy", choices=["chain", "random", "first"], default="chain",
        help="Bot policy (random/first are baselines)",
    )
    sim_parser.add_argument("--ruleset", default="standard", help="Named rule set")
    sim_parser.add_argument("--seed", type=int, default=None, help="Random seed")
    sim_parser.add_argument("--quiet", action="store_true", help="Only print the result")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play in the terminal")
    play_parser.add_argument("--name", default="Player", help="Your display name")
    play_parser.add_argument("--bots", type=int, default=1, help="Number of computer seats")
    play_parser.add_argument("--difficulty", default="normal", help="easy, normal or expert")
    play_parser.add_argument("--ruleset", default="standard", help="Named rule set")
    play_parser.add_argument("--seed", type=int, default=None, help="Random seed")

    subparsers.add_parser("objectives", help="List the objective catalog")
    subparsers.add_parser("rulesets", help="List the named rule sets")

    args = parser.parse_args(argv)

    try:
        configure_logging(args.log_level)
        if args.command == "serve":
            cmd_serve(args)
        elif args.command == "simulate":
            cmd_simulate(args)
        elif args.command == "play":
            cmd_play(args)
        elif args.command == "objectives":
            cmd_objectives(args)
        elif args.command == "rulesets":
            cmd_rulesets(args)
        else:
            parser.print_help()
            sys.exit(1)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)


def configure_logging(level_name: str):
    """Set up the root logger; raises ValueError for unknown level names."""
    level = logging.getLevelName(level_name.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level '{level_name}'")
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def cmd_serve(args):
    """Run the API with uvicorn."""
    import uvicorn

    uvicorn.run(
        "cadena.api.app:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=args.log_level.lower(),
    )


def cmd_simulate(args):
    """Play a computer-only match."""
    from .bots import RandomPolicy, FirstLegalPolicy
    from .engine_core import get_ruleset
    from .session import SessionManager, GameLoop

    manager = SessionManager()
    session = manager.create_session(
        [],
        computer_seat_count=args.players,
        difficulty=args.difficulty,
        rules=get_ruleset(args.ruleset),
        random_seed=args.seed,
    )

    if args.policy != "chain":
        for i, player_id in enumerate(session.bots):
            seed = None if args.seed is None else args.seed + i
            session.bots[player_id] = RandomPolicy(seed) if args.policy == "random" else FirstLegalPolicy()

    result = GameLoop(session).run_automa_turns()
    state = session.game_state

    if not args.quiet:
        for line in state.event_log:
            print(line)
        print()

    for error in result.errors:
        print(f"Warning: {error}")

    print(f"Turns: {state.turn_number}  Rounds: {state.round_number}")
    for player in sorted(state.players, key=lambda p: -p.score):
        marker = " (winner)" if player.player_id == state.winner_id else ""
        print(f"  {player.name:<12} {player.score:>4} pts  {len(player.closed_combos)} combos{marker}")


def cmd_play(args):
    """Play in the terminal against computer seats."""
    from .engine_core import Action, GamePhase, get_ruleset, playable_indices
    from .session import SessionManager, GameLoop

    manager = SessionManager()
    session = manager.create_session(
        [("you", args.name)],
        computer_seat_count=args.bots,
        difficulty=args.difficulty,
        rules=get_ruleset(args.ruleset),
        random_seed=args.seed,
    )
    loop = GameLoop(session)
    shown = 0

    def show_new_events():
        nonlocal shown
        log = session.game_state.event_log
        for line in log[shown:]:
            print(f"  * {line}")
        shown = len(log)

    loop.run_automa_turns()
    while not session.game_state.is_finished:
        show_new_events()
        state = session.game_state
        me = state.get_player("you")

        print()
        print("Scores: " + ", ".join(f"{p.name} {p.score}" for p in state.players))
        print(f"Combo: {' '.join(str(c) for c in state.community_combo) or '(empty)'}")
        if me.objective:
            print(f"Objective: {me.objective.description} (+{me.objective.bonus_points})")
        playable = playable_indices(state)
        for i, card in enumerate(me.hand):
            flag = "*" if i in playable else " "
            print(f"  {flag}{i}: {card}")

        if state.phase == GamePhase.MUST_DISCARD:
            answer = input(f"Too many cards, discard down to {state.rules.hand_size} (index): ")
            action = Action.discard(_parse_index(answer)) if answer.strip() else None
        else:
            answer = input("Play an index, or 'p' to pass: ").strip().lower()
            if answer in ("p", "pass"):
                action = Action.pass_turn()
            elif answer in ("q", "quit"):
                print("Bye.")
                return
            else:
                action = Action.play_card(_parse_index(answer))

        if action is None:
            continue
        result = loop.apply_player_intent("you", action)
        if not result.success:
            print(f"  ! {result.errors[0]}")

    show_new_events()
    winner = session.game_state.get_player(session.game_state.winner_id)
    print(f"\n{winner.name} wins with {winner.score} points.")


def _parse_index(text: str) -> int:
    try:
        return int(text)
    except ValueError:
        return -1


def cmd_objectives(args):
    """List the objective catalog."""
    from .objectives import OBJECTIVES, TIER_WEIGHT

    for objective in OBJECTIVES:
        weight = TIER_WEIGHT[objective.tier]
        print(
            f"{objective.objective_id:<4} {objective.tier.value:<7} +{objective.bonus_points}  "
            f"(weight {weight})  {objective.description}"
        )


def cmd_rulesets(args):
    """List the named rule sets."""
    from .engine_core import RULESETS

    for rules in RULESETS.values():
        print(f"{rules.name}: {rules.description}")
        print(
            f"    hand {rules.hand_size}, win at {rules.win_score}, "
            f"draw {rules.draw_on_play}/{rules.draw_on_close}/{rules.draw_on_pass} "
            f"(play/close/pass), {rules.min_players}-{rules.max_players} players, "
            f"{rules.deck.size} cards"
        )


if __name__ == "__main__":
    main()
