"""Entry point for running the console game via ``python -m tictactoe``."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Optional, Sequence

from pydantic import ValidationError

from .ui import LOG_LEVELS, GameSession, GameSettings

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="tictactoe", description="Tic-tac-toe in the terminal")
    p.add_argument(
        "--ai",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="let the computer play O (default: $TICTACTOE_AI or off)",
    )
    p.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=None,
        help="logging level (default: $TICTACTOE_LOG_LEVEL or WARNING)",
    )
    return p.parse_args(argv)


def load_settings(args: argparse.Namespace, environ=os.environ) -> GameSettings:
    """Environment supplies defaults; command-line flags win."""
    settings = GameSettings.from_env(environ)
    overrides = {}
    if args.ai is not None:
        overrides["ai_opponent"] = args.ai
    if args.log_level is not None:
        overrides["log_level"] = args.log_level
    return GameSettings.model_validate({**settings.model_dump(), **overrides})


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Play one game on stdin/stdout and return the process exit status."""

    args = parse_args(argv)
    try:
        settings = load_settings(args)
    except ValidationError as exc:
        print(f"Invalid settings: {exc}", file=sys.stderr)
        return 2

    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s %(levelname)s: %(message)s",
    )
    logger.info("Starting game (computer plays O: %s)", settings.ai_opponent)

    session = GameSession.from_settings(settings)
    try:
        session.run()
    except (EOFError, KeyboardInterrupt):
        logger.warning("Input closed before the game finished")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
