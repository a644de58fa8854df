"""
CLI entry point for the elevator dispatch game.
"""

import argparse
import logging
import sys

from elevator_dispatch.config import DEFAULT_CONFIG, GameConfig, load_game_config
from elevator_dispatch.errors import ConfigError

CONTROLLERS = ["idle", "random", "greedy"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Elevator dispatch - move passengers before the clock runs out"
    )
    parser.add_argument("--config", help="YAML file with game settings")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for arrivals")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Diagnostic log level (default: WARNING)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("play", help="Play interactively (empty line waits one tick)")

    run_parser = subparsers.add_parser("run", help="Play a script or a controller headless")
    source = run_parser.add_mutually_exclusive_group()
    source.add_argument("--script", help="File of commands; blank lines advance time")
    source.add_argument(
        "--controller",
        choices=CONTROLLERS,
        default="greedy",
        help="Built-in controller (default: greedy)",
    )
    run_parser.add_argument(
        "--ticks",
        type=int,
        default=None,
        help="Stop after this many ticks (default: until out of time)",
    )
    run_parser.add_argument(
        "--show",
        action="store_true",
        help="Render the building after every tick",
    )

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="[%(levelname)s] %(name)s - %(message)s",
    )

    try:
        config = load_game_config(args.config) if args.config else DEFAULT_CONFIG
    except (ConfigError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if args.command == "play":
        return play(config, args.seed)
    elif args.command == "run":
        return run(config, args)
    else:
        parser.print_help()
        return 0


def play(config: GameConfig, seed=None, stdin=None, stdout=None) -> int:
    """Interactive read loop: one command per line, empty line ticks."""
    from elevator_dispatch.engine.commands import TickCommand, parse_command
    from elevator_dispatch.engine.game import Game
    from elevator_dispatch.errors import CommandError
    from elevator_dispatch.render import render_state

    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout

    game = Game(config, seed=seed)
    print(render_state(game.state), file=stdout)
    print("Commands: go <elevator> <floor>, dump <elevator>, close <elevator>, "
          "empty line to wait, quit to stop.", file=stdout)

    for line in stdin:
        if line.strip().lower() in ("quit", "exit"):
            break

        try:
            is_tick = isinstance(parse_command(line), TickCommand)
        except CommandError:
            is_tick = False

        if is_tick:
            game.tick()
            print(render_state(game.state), file=stdout)
            game.clear_events()
            if game.is_over:
                break
        else:
            # rejected lines are recorded by submit like any other event
            before = len(game.state.events)
            game.submit(line)
            for event in game.state.events[before:]:
                print(f"  * {event}", file=stdout)

    return 0


def run(config: GameConfig, args) -> int:
    """Headless run of a script file or a built-in controller."""
    from elevator_dispatch.controllers.base import IdleController, RandomController, ScriptedController
    from elevator_dispatch.controllers.rule_based import GreedyController
    from elevator_dispatch.engine.simulator import Simulator
    from elevator_dispatch.render import render_state

    if args.script:
        with open(args.script, "r", encoding="utf-8") as f:
            controller = ScriptedController(f.readlines())
    else:
        controllers = {
            "idle": IdleController,
            "random": lambda: RandomController(seed=args.seed),
            "greedy": GreedyController,
        }
        controller = controllers[args.controller]()

    on_turn = (lambda state: print(render_state(state) + "\n")) if args.show else None

    simulator = Simulator(config, max_ticks=args.ticks, on_turn=on_turn)
    result = simulator.run(controller, seed=args.seed)

    print(result.describe())
    return 0


if __name__ == "__main__":
    sys.exit(main())
