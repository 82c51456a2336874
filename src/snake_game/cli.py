"""Command-line tools for the snake game."""

from __future__ import annotations

import argparse
import json
import logging
import sys

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="snake-game",
        description="Snake game configuration and headless simulation tools.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- config ---
    config_p = sub.add_parser(
        "config", help="Print the effective game configuration.",
    )
    config_p.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON config file (environment overrides still apply).",
    )

    # --- simulate ---
    sim_p = sub.add_parser("simulate", help="Run a headless game.")
    sim_p.add_argument("--config", type=str, default=None)
    sim_p.add_argument("--ticks", type=int, default=100)
    sim_p.add_argument("--seed", type=int, default=None)
    sim_p.add_argument("--grid-size", type=int, default=None)
    sim_p.add_argument(
        "--wall-mode", type=str, default=None, choices=["wrap", "death"],
    )
    sim_p.add_argument(
        "--keys", type=str, default="",
        help="Comma-separated keys, one pressed before each tick, cycling.",
    )

    return parser


def _load_config(args: argparse.Namespace):
    from snake_game.config import GameConfig

    base = GameConfig.load(args.config) if args.config else None
    config = GameConfig.from_env(base=base)

    overrides: dict = {}
    flag_map = {
        "seed": "seed",
        "grid_size": "grid_size",
        "wall_mode": "wall_mode",
    }
    for cli_name, cfg_name in flag_map.items():
        val = getattr(args, cli_name, None)
        if val is not None:
            overrides[cfg_name] = val

    if overrides:
        d = config.to_dict()
        d.update(overrides)
        config = GameConfig(**d)
    return config


def _run_config(args: argparse.Namespace) -> int:
    config = _load_config(args)
    print(json.dumps(config.to_dict(), indent=2))  # noqa: T201
    return 0


def _run_simulate(args: argparse.Namespace) -> int:
    from snake_game.engine import GameEngine

    if args.ticks < 0:
        logger.error("--ticks must be >= 0.")
        return 2

    engine = GameEngine(_load_config(args))
    keys = [k.strip() for k in args.keys.split(",") if k.strip()]

    engine.start()
    for i in range(args.ticks):
        if keys:
            engine.press(keys[i % len(keys)])
        engine.step()
        if engine.game_over:
            break

    print(json.dumps(engine.get_state(), indent=2))  # noqa: T201
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``snake-game`` CLI."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    handlers = {
        "config": _run_config,
        "simulate": _run_simulate,
    }
    return handlers[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
