"""
Minimax search with alpha-beta pruning, move selection by difficulty,
and the strategy interface the game flow talks to.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

import numpy as np

import config
from .board import BoardState
from .types import Cell, Difficulty, DifficultyLike, Mark, Role, Score, WIN_SCORE

logger = logging.getLogger(__name__)

INF = float("inf")


class SearchEngine:
    """Depth-bounded alpha-beta minimax for one side of the board.

    The engine's own mark is the maximizer; the opposing mark is the
    minimizer. Boards passed in are borrowed and returned unchanged.
    """

    def __init__(self, mark: Mark = Mark.O, rng: Optional[np.random.Generator] = None) -> None:
        self.mark = Mark.parse(mark)
        self.rng = rng if rng is not None else config.get_rng()
        self.nodes = 0
        self.last_scores: Dict[Cell, Score] = {}

    @property
    def opponent(self) -> Mark:
        return self.mark.opponent

    def mark_for(self, role: Role) -> Mark:
        return self.mark if role is Role.MAXIMIZER else self.opponent

    def evaluate(self, board: BoardState, depth: int, role: Role,
                 alpha: float = -INF, beta: float = INF,
                 depth_cap: Optional[int] = None) -> Score:
        """Score ``board`` from the engine's point of view.

        ``role`` is the side to move at this node. Wins score ``10 - depth``
        and losses ``depth - 10`` so quicker wins and slower losses rank
        higher. Once ``depth`` reaches ``depth_cap`` the node scores 0.
        """
        self.nodes += 1

        # Own mark is checked first: one move cannot complete lines for both sides.
        if board.has_line(self.mark):
            return WIN_SCORE - depth
        if board.has_line(self.opponent):
            return depth - WIN_SCORE
        if board.is_full():
            return 0

        if depth_cap is not None and depth >= depth_cap:
            return 0

        mark = self.mark_for(role)
        if role is Role.MAXIMIZER:
            best = -INF
            for row, col in board.empty_cells():
                with board.speculate(row, col, mark):
                    value = self.evaluate(board, depth + 1, role.other, alpha, beta, depth_cap)
                best = max(best, value)
                alpha = max(alpha, best)
                if beta <= alpha:
                    break
        else:
            best = INF
            for row, col in board.empty_cells():
                with board.speculate(row, col, mark):
                    value = self.evaluate(board, depth + 1, role.other, alpha, beta, depth_cap)
                best = min(best, value)
                beta = min(beta, best)
                if beta <= alpha:
                    break
        return int(best)

    def score_moves(self, board: BoardState, difficulty: DifficultyLike = Difficulty.HARD) -> Dict[Cell, Score]:
        """Root score of every empty cell, in row-major order."""
        tier = Difficulty.parse(difficulty)
        scores: Dict[Cell, Score] = {}
        for row, col in board.empty_cells():
            with board.speculate(row, col, self.mark):
                scores[(row, col)] = self.evaluate(board, 0, Role.MINIMIZER, -INF, INF, tier.depth_cap)
        return scores

    def choose_move(self, board: BoardState, difficulty: DifficultyLike = Difficulty.HARD) -> Cell:
        """Pick the engine's move.

        Easy picks uniformly at random among empty cells without searching.
        Medium and Hard take the highest root score, first cell on ties.
        """
        tier = Difficulty.parse(difficulty)
        empty: List[Cell] = board.empty_cells()
        if not empty:
            raise ValueError("choose_move called on a full board")

        self.nodes = 0
        self.last_scores = {}
        if not tier.uses_search:
            move = empty[int(self.rng.integers(len(empty)))]
            logger.debug("%s (%s) random move %s", self.mark.symbol, tier.name, move)
            return move

        best_score = -INF
        best_move = empty[0]
        self.last_scores = self.score_moves(board, tier)
        for move, score in self.last_scores.items():
            if score > best_score:
                best_score = score
                best_move = move
        logger.debug("%s (%s) chose %s score=%s nodes=%d",
                     self.mark.symbol, tier.name, best_move, best_score, self.nodes)
        return best_move


class MoveStrategy(ABC):
    """Abstract interface for move selection strategies."""

    mark: Mark

    @abstractmethod
    def select(self, board: BoardState, difficulty: DifficultyLike) -> Cell:  # pragma: no cover
        raise NotImplementedError


class AlphaBetaStrategy(MoveStrategy):
    """Adapter around SearchEngine implementing the strategy interface."""

    def __init__(self, mark: Mark = Mark.O, rng: Optional[np.random.Generator] = None) -> None:
        self._engine = SearchEngine(mark, rng)
        self.mark = self._engine.mark

    @property
    def engine(self) -> SearchEngine:
        return self._engine

    def select(self, board: BoardState, difficulty: DifficultyLike) -> Cell:
        return self._engine.choose_move(board, difficulty)


def get_engine(mark: Mark = Mark.O, rng: Optional[np.random.Generator] = None) -> SearchEngine:
    """Get a new search engine instance."""
    return SearchEngine(mark, rng)


def get_strategy(mark: Mark = Mark.O, rng: Optional[np.random.Generator] = None) -> MoveStrategy:
    """Factory for the default strategy (alpha-beta)."""
    return AlphaBetaStrategy(mark, rng)


def choose_move(board: BoardState, difficulty: DifficultyLike,
                mark: Mark = Mark.O, rng: Optional[np.random.Generator] = None) -> Cell:
    """Convenience wrapper: one-off engine for ``mark``."""
    return get_engine(mark, rng).choose_move(board, difficulty)


__all__ = [
    "INF",
    "SearchEngine",
    "MoveStrategy",
    "AlphaBetaStrategy",
    "get_engine",
    "get_strategy",
    "choose_move",
]
