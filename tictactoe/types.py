"""
Type definitions for the tic-tac-toe engine.

This module provides:
- Enumerations for marks, search roles, difficulty tiers and game status
- Type aliases for board coordinates and scores
- A helper for validating coordinates
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any, Optional, Tuple, Union

from .errors import InvalidDifficulty

# Basic type aliases
Cell = Tuple[int, int]  # (row, col), 0-based
Score = int
MoveRecord = Tuple["Mark", int, int]  # (mark, row, col)
DifficultyLike = Union["Difficulty", int, str]

# Constants
BOARD_SIZE: int = 3
WIN_SCORE: int = 10


class Mark(Enum):
    """Content of a single cell."""

    EMPTY = "-"
    X = "X"
    O = "O"

    @property
    def opponent(self) -> "Mark":
        if self is Mark.X:
            return Mark.O
        if self is Mark.O:
            return Mark.X
        raise ValueError("EMPTY has no opponent")

    @property
    def symbol(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: Any) -> "Mark":
        """Parse 'X' / 'O' (any case) into a player mark."""
        if isinstance(value, Mark):
            mark = value
        else:
            try:
                mark = cls(str(value).strip().upper())
            except ValueError:
                raise ValueError(f"Unknown mark: {value!r}") from None
        if mark is Mark.EMPTY:
            raise ValueError("A player mark must be X or O")
        return mark


class Role(Enum):
    """Side to move at a search node."""

    MAXIMIZER = "max"  # the automated player
    MINIMIZER = "min"  # its opponent

    @property
    def other(self) -> "Role":
        return Role.MINIMIZER if self is Role.MAXIMIZER else Role.MAXIMIZER


class Difficulty(IntEnum):
    """Engine strength. Values match the tier numbers offered to players."""

    EASY = 1
    MEDIUM = 2
    HARD = 3

    @property
    def depth_cap(self) -> Optional[int]:
        """Ply count at which search stops and scores the node as neutral."""
        return _DEPTH_CAPS[self]

    @property
    def uses_search(self) -> bool:
        return self is not Difficulty.EASY

    @classmethod
    def parse(cls, value: DifficultyLike) -> "Difficulty":
        """Accept a tier number (int or digit string) or a tier name."""
        if isinstance(value, Difficulty):
            return value
        if isinstance(value, bool):
            raise InvalidDifficulty(value)
        if isinstance(value, int):
            try:
                return cls(value)
            except ValueError:
                raise InvalidDifficulty(value) from None
        if isinstance(value, str):
            text = value.strip()
            if text.isdigit():
                return cls.parse(int(text))
            try:
                return cls[text.upper()]
            except KeyError:
                raise InvalidDifficulty(value) from None
        raise InvalidDifficulty(value)


_DEPTH_CAPS = {
    Difficulty.EASY: 1,
    Difficulty.MEDIUM: 2,
    Difficulty.HARD: None,
}


class GameStatus(Enum):
    IN_PROGRESS = "in_progress"
    WIN = "win"
    DRAW = "draw"


@dataclass(frozen=True)
class GameOutcome:
    """Result of checking a board after a move."""

    status: GameStatus
    winner: Optional[Mark] = None

    def __post_init__(self) -> None:
        if (self.status is GameStatus.WIN) != (self.winner is not None):
            raise ValueError("winner must be set exactly when status is WIN")

    @property
    def is_terminal(self) -> bool:
        return self.status is not GameStatus.IN_PROGRESS


IN_PROGRESS = GameOutcome(GameStatus.IN_PROGRESS)
DRAW = GameOutcome(GameStatus.DRAW)


def is_valid_cell(row: Any, col: Any) -> bool:
    """Check that (row, col) addresses a cell of the grid."""
    return (isinstance(row, int) and isinstance(col, int)
            and 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE)
