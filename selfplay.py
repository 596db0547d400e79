"""Engine-vs-engine self-play: runs a match and prints a win/draw summary."""
from __future__ import annotations

import argparse
import sys
import time
from typing import List, Optional

from config import get_config, load_config_from_file, reset_rng, setup_logging
from tictactoe.game import MatchStats, run_match
from tictactoe.types import Difficulty


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Run engine-vs-engine self-play games")
    ap.add_argument("--games", type=int, default=100, help="Number of games to play")
    ap.add_argument("--x-difficulty", type=Difficulty.parse, default=None,
                    help="Tier for X (defaults to TTT_DIFFICULTY, else hard)")
    ap.add_argument("--o-difficulty", type=Difficulty.parse, default=None,
                    help="Tier for O (defaults to TTT_DIFFICULTY, else hard)")
    ap.add_argument("--seed", type=int, default=None, help="Seed for random moves")
    ap.add_argument("--config", default=None, help="JSON configuration file")
    ap.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING or ERROR")
    return ap.parse_args(argv)


def format_summary(stats: MatchStats, x_tier: Difficulty, o_tier: Difficulty, elapsed: float) -> str:
    lines = [
        f"=== SELF-PLAY: X={x_tier.name} vs O={o_tier.name} ===",
        f"Games played: {stats.games}",
        f"X wins: {stats.x_wins}",
        f"O wins: {stats.o_wins}",
        f"Draws: {stats.draws}",
        f"Average moves per game: {stats.avg_game_length:.1f}",
        f"Total time: {elapsed:.2f}s",
    ]
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    cfg = load_config_from_file(args.config) if args.config else get_config()
    setup_logging(args.log_level)
    rng = reset_rng(args.seed if args.seed is not None else cfg.engine.seed)

    default = cfg.difficulty or Difficulty.HARD
    x_tier = args.x_difficulty or default
    o_tier = args.o_difficulty or default

    start = time.time()
    stats = run_match(args.games, x_tier, o_tier, rng)
    print(format_summary(stats, x_tier, o_tier, time.time() - start))
    return 0


if __name__ == "__main__":
    sys.exit(main())
