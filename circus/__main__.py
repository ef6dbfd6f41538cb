from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from .config import EngineConfig
from .errors import CircusError, RulesInvariantError
from .protocol import run_game

LOG_FORMAT = "%(relativeCreated)dms\t%(levelname)s\t%(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="circus-agent", description="Play one circus game over stdin/stdout.")
    parser.add_argument("--log-level", default="WARNING", help="logging level (default: WARNING)")
    parser.add_argument("--log-file", help="write diagnostics to this file instead of stderr")
    parser.add_argument("--max-steps", type=int, help="stop after this many half-moves")
    parser.add_argument("--prune-margin", type=int, help="score window kept between plies")
    parser.add_argument("--search-budget", type=int, help="approximate states explored per move")
    parser.add_argument("--max-depth", type=int, help="upper bound on search depth")
    return parser


def configure_logging(level: str, log_file: Optional[str]) -> None:
    handler: logging.Handler
    if log_file:
        handler = logging.FileHandler(log_file, mode="w")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root = logging.getLogger()
    root.addHandler(handler)
    root.setLevel(level.upper())


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level, args.log_file)
    log = logging.getLogger("circus")

    try:
        config = EngineConfig.from_env().with_overrides(
            max_steps=args.max_steps,
            prune_margin=args.prune_margin,
            search_budget=args.search_budget,
            max_depth=args.max_depth,
        )
        log.info("starting")
        run_game(sys.stdin, sys.stdout, config=config, logger=log)
    except RulesInvariantError:
        raise
    except CircusError as exc:
        log.error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
