"""
Exceptions raised by the board, the engine and the game flow.
"""
from __future__ import annotations

from typing import Any


class CellOccupied(ValueError):
    """A mark was placed on a cell that already holds one."""

    def __init__(self, row: int, col: int) -> None:
        super().__init__(f"Cell ({row}, {col}) is already taken")
        self.row = row
        self.col = col


class OutOfBounds(ValueError):
    """Coordinates outside the grid."""

    def __init__(self, row: Any, col: Any) -> None:
        super().__init__(f"Position ({row}, {col}) is off the board")
        self.row = row
        self.col = col


class InvalidDifficulty(ValueError):
    """A difficulty value outside the recognised tiers."""

    def __init__(self, value: Any) -> None:
        super().__init__(f"Invalid difficulty {value!r}; choose 1 (easy), 2 (medium) or 3 (hard)")
        self.value = value


class GameOver(RuntimeError):
    """A move was attempted after the game finished."""
