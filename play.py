"""Console entry point: play tic-tac-toe against the engine, with replays."""
from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from config import get_config, load_config_from_file, reset_rng, setup_logging
from tictactoe.console import play_session
from tictactoe.types import Difficulty, Mark


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Play tic-tac-toe against the engine")
    ap.add_argument("--difficulty", type=Difficulty.parse, default=None,
                    help="1/easy, 2/medium or 3/hard (defaults to TTT_DIFFICULTY, else prompted)")
    ap.add_argument("--human", default=None, help="Mark played by the human (X moves first)")
    ap.add_argument("--seed", type=int, default=None, help="Seed for the engine's random moves")
    ap.add_argument("--config", default=None, help="JSON configuration file")
    ap.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING or ERROR")
    return ap.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    cfg = load_config_from_file(args.config) if args.config else get_config()
    setup_logging(args.log_level)
    reset_rng(args.seed if args.seed is not None else cfg.engine.seed)

    human = Mark.parse(args.human or cfg.ui.human_mark)
    difficulty = args.difficulty if args.difficulty is not None else cfg.difficulty
    try:
        play_session(input, print, difficulty=difficulty, human_mark=human,
                     show_scores=cfg.ui.show_scores)
    except (EOFError, KeyboardInterrupt):
        print()
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
