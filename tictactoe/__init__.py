"""Tic-tac-toe package: thin re-exports.

Usage examples:
    from tictactoe import BoardState, Mark, Difficulty
    from tictactoe import SearchEngine, choose_move
    from tictactoe import Game, run_match
"""
from __future__ import annotations

from .errors import CellOccupied, GameOver, InvalidDifficulty, OutOfBounds
from .types import BOARD_SIZE, Cell, Difficulty, GameOutcome, GameStatus, Mark, Role

# Board
from .board import LINES, BoardState

# Search
from .search import (
    AlphaBetaStrategy,
    MoveStrategy,
    SearchEngine,
    choose_move,
    get_engine,
    get_strategy,
)

# Game flow
from .game import Game, MatchStats, check_outcome, play_self_game, run_match

__version__ = "1.0.0"
