"""
Game flow for a single match: turn order, outcome detection and
engine-vs-engine self-play.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np

from .board import BoardState
from .errors import GameOver
from .search import SearchEngine, get_engine
from .types import (
    DRAW,
    IN_PROGRESS,
    Cell,
    Difficulty,
    DifficultyLike,
    GameOutcome,
    GameStatus,
    Mark,
    MoveRecord,
)

logger = logging.getLogger(__name__)

FIRST_MARK = Mark.X


def check_outcome(board: BoardState, last_mark: Mark) -> GameOutcome:
    """Outcome after ``last_mark`` moved: its line first, then a full board."""
    if board.has_line(last_mark):
        return GameOutcome(GameStatus.WIN, last_mark)
    if board.is_full():
        return DRAW
    return IN_PROGRESS


class Game:
    """One human-vs-engine game. X always moves first."""

    def __init__(self, human_mark: Mark = Mark.X,
                 difficulty: DifficultyLike = Difficulty.HARD,
                 engine: Optional[SearchEngine] = None) -> None:
        self.human_mark = Mark.parse(human_mark)
        self.difficulty = Difficulty.parse(difficulty)
        self.engine = engine or get_engine(self.human_mark.opponent)
        if self.engine.mark is self.human_mark:
            raise ValueError("Engine and human cannot play the same mark")
        self.board = BoardState()
        self.current = FIRST_MARK
        self.outcome: GameOutcome = IN_PROGRESS
        self.moves: List[MoveRecord] = []

    @property
    def engine_mark(self) -> Mark:
        return self.engine.mark

    @property
    def is_over(self) -> bool:
        return self.outcome.is_terminal

    @property
    def is_human_turn(self) -> bool:
        return not self.is_over and self.current is self.human_mark

    def _apply(self, row: int, col: int) -> GameOutcome:
        if self.is_over:
            raise GameOver("The game has already finished")
        mark = self.current
        self.board.place(row, col, mark)
        self.moves.append((mark, row, col))
        self.outcome = check_outcome(self.board, mark)
        if self.is_over:
            logger.info("Game finished: %s winner=%s after %d moves",
                        self.outcome.status.value,
                        self.outcome.winner.symbol if self.outcome.winner else None,
                        len(self.moves))
        else:
            self.current = mark.opponent
        return self.outcome

    def play_human(self, row: int, col: int) -> GameOutcome:
        """Apply the human's 0-based move. The board is untouched on error."""
        if not self.is_over and self.current is not self.human_mark:
            raise RuntimeError("It is not the human player's turn")
        return self._apply(row, col)

    def play_engine(self) -> Cell:
        """Let the engine choose and apply its move."""
        if self.is_over:
            raise GameOver("The game has already finished")
        if self.current is not self.engine_mark:
            raise RuntimeError("It is not the engine's turn")
        row, col = self.engine.choose_move(self.board, self.difficulty)
        self._apply(row, col)
        return row, col


def play_self_game(x_engine: SearchEngine, o_engine: SearchEngine,
                   x_difficulty: DifficultyLike = Difficulty.HARD,
                   o_difficulty: DifficultyLike = Difficulty.HARD,
                   board: Optional[BoardState] = None) -> Tuple[GameOutcome, List[MoveRecord]]:
    """Play two engines against each other until the game ends."""
    if x_engine.mark is not Mark.X or o_engine.mark is not Mark.O:
        raise ValueError("x_engine must play X and o_engine must play O")
    board = board if board is not None else BoardState()
    sides = {
        Mark.X: (x_engine, Difficulty.parse(x_difficulty)),
        Mark.O: (o_engine, Difficulty.parse(o_difficulty)),
    }
    # Side to move follows from the mark counts: X moves first.
    current = Mark.X if board.count(Mark.X) == board.count(Mark.O) else Mark.O
    moves: List[MoveRecord] = []
    outcome = check_outcome(board, current.opponent)
    while not outcome.is_terminal:
        engine, tier = sides[current]
        row, col = engine.choose_move(board, tier)
        board.place(row, col, current)
        moves.append((current, row, col))
        outcome = check_outcome(board, current)
        current = current.opponent
    return outcome, moves


@dataclass
class MatchStats:
    """Aggregate results of a series of self-play games."""

    games: int = 0
    x_wins: int = 0
    o_wins: int = 0
    draws: int = 0
    total_moves: int = 0
    game_lengths: List[int] = field(default_factory=list)

    @property
    def avg_game_length(self) -> float:
        return self.total_moves / self.games if self.games else 0.0

    def record(self, outcome: GameOutcome, moves: List[MoveRecord]) -> None:
        self.games += 1
        self.total_moves += len(moves)
        self.game_lengths.append(len(moves))
        if outcome.status is GameStatus.DRAW:
            self.draws += 1
        elif outcome.winner is Mark.X:
            self.x_wins += 1
        else:
            self.o_wins += 1


def run_match(games: int,
              x_difficulty: DifficultyLike = Difficulty.HARD,
              o_difficulty: DifficultyLike = Difficulty.HARD,
              rng: Optional[np.random.Generator] = None) -> MatchStats:
    """Play ``games`` self-play games with both engines sharing one generator."""
    if games < 0:
        raise ValueError("games must be non-negative")
    x_engine = get_engine(Mark.X, rng)
    o_engine = get_engine(Mark.O, x_engine.rng)
    stats = MatchStats()
    for n in range(games):
        outcome, moves = play_self_game(x_engine, o_engine, x_difficulty, o_difficulty)
        stats.record(outcome, moves)
        logger.debug("Game %d: %s winner=%s moves=%d", n + 1, outcome.status.value,
                     outcome.winner.symbol if outcome.winner else None, len(moves))
    return stats


__all__ = [
    "FIRST_MARK",
    "check_outcome",
    "Game",
    "play_self_game",
    "MatchStats",
    "run_match",
]
