"""Board state: cell storage, placement, line detection and scoped speculative moves."""
from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, List, Optional, Sequence, Tuple

from .errors import CellOccupied, OutOfBounds
from .types import BOARD_SIZE, Cell, Mark, is_valid_cell

# -----------------------------
# Winning lines
# -----------------------------
LINES: List[Tuple[Cell, ...]] = []


def _build_lines() -> None:
    n = BOARD_SIZE
    for i in range(n):
        LINES.append(tuple((i, c) for c in range(n)))
        LINES.append(tuple((r, i) for r in range(n)))
    LINES.append(tuple((i, i) for i in range(n)))
    LINES.append(tuple((i, n - 1 - i) for i in range(n)))


_build_lines()


class BoardState:
    """Mutable 3x3 grid.

    ``place`` is the only checked mutator. Search uses ``speculate`` for its
    try/undo cycles, which always restores the cell on exit.
    """

    def __init__(self) -> None:
        self._cells: List[List[Mark]] = [[Mark.EMPTY] * BOARD_SIZE for _ in range(BOARD_SIZE)]

    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> "BoardState":
        """Build a board from row strings such as ``["X--", "-X-", "--O"]``.

        ``-``, ``_``, ``.`` and space all mean empty.
        """
        if len(rows) != BOARD_SIZE or any(len(r) != BOARD_SIZE for r in rows):
            raise ValueError(f"Expected {BOARD_SIZE} rows of {BOARD_SIZE} cells")
        board = cls()
        for r, text in enumerate(rows):
            for c, ch in enumerate(text):
                if ch in "-_. ":
                    continue
                board.place(r, c, Mark.parse(ch))
        return board

    # ----------------------------
    # Queries
    # ----------------------------
    def cell(self, row: int, col: int) -> Mark:
        self._check_bounds(row, col)
        return self._cells[row][col]

    def is_empty(self, row: int, col: int) -> bool:
        return self.cell(row, col) is Mark.EMPTY

    def has_line(self, mark: Mark) -> bool:
        """True iff any row, column or diagonal is entirely ``mark``."""
        cells = self._cells
        for line in LINES:
            if all(cells[r][c] is mark for r, c in line):
                return True
        return False

    def is_full(self) -> bool:
        return all(v is not Mark.EMPTY for row in self._cells for v in row)

    def empty_cells(self) -> List[Cell]:
        """Empty cells in row-major order."""
        return [(r, c)
                for r in range(BOARD_SIZE)
                for c in range(BOARD_SIZE)
                if self._cells[r][c] is Mark.EMPTY]

    def winner(self) -> Optional[Mark]:
        for mark in (Mark.X, Mark.O):
            if self.has_line(mark):
                return mark
        return None

    def count(self, mark: Mark) -> int:
        return sum(1 for row in self._cells for v in row if v is mark)

    def rows(self) -> List[List[Mark]]:
        return [row[:] for row in self._cells]

    def snapshot(self) -> Tuple[Mark, ...]:
        """Hashable copy of the cells in row-major order."""
        return tuple(v for row in self._cells for v in row)

    def copy(self) -> "BoardState":
        other = BoardState()
        other._cells = self.rows()
        return other

    # ----------------------------
    # Mutation
    # ----------------------------
    def place(self, row: int, col: int, mark: Mark) -> None:
        """Put ``mark`` on an empty cell; raises CellOccupied otherwise."""
        if mark is Mark.EMPTY:
            raise ValueError("Cannot place an empty mark")
        self._check_bounds(row, col)
        if self._cells[row][col] is not Mark.EMPTY:
            raise CellOccupied(row, col)
        self._cells[row][col] = mark

    @contextmanager
    def speculate(self, row: int, col: int, mark: Mark) -> Iterator["BoardState"]:
        """Temporarily set a cell the caller already knows is empty."""
        self._cells[row][col] = mark
        try:
            yield self
        finally:
            self._cells[row][col] = Mark.EMPTY

    # ----------------------------
    # Helpers
    # ----------------------------
    @staticmethod
    def _check_bounds(row: int, col: int) -> None:
        if not is_valid_cell(row, col):
            raise OutOfBounds(row, col)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BoardState):
            return NotImplemented
        return self._cells == other._cells

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return "\n".join("".join(v.symbol for v in row) for row in self._cells)

    def __repr__(self) -> str:
        rows = ["".join(v.symbol for v in row) for row in self._cells]
        return f"BoardState.from_rows({rows!r})"
