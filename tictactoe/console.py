"""
Console front end: board rendering, 1-based move parsing and the
interactive play / replay loop.

All terminal access goes through injected ``read`` / ``write`` callables
so the loop can be driven by scripted input.
"""
from __future__ import annotations

import re
from typing import Callable, Dict, List, Optional

import numpy as np

from .board import BoardState
from .errors import CellOccupied, InvalidDifficulty, OutOfBounds
from .game import Game
from .search import get_engine
from .types import BOARD_SIZE, Cell, Difficulty, DifficultyLike, GameOutcome, GameStatus, Mark, Score

Reader = Callable[[str], str]
Writer = Callable[[str], None]

ROW_SEPARATOR = "-" * (BOARD_SIZE * 4 - 3)
_MOVE_RE = re.compile(r"^\s*([+-]?\d+)\s*[,\s]\s*([+-]?\d+)\s*$")


def render_board(board: BoardState) -> str:
    lines = []
    for i, row in enumerate(board.rows()):
        lines.append(" | ".join(v.symbol for v in row))
        if i < BOARD_SIZE - 1:
            lines.append(ROW_SEPARATOR)
    return "\n".join(lines)


def parse_move(text: str) -> Cell:
    """Parse ``"row col"`` (1-based, space or comma separated) into a 0-based cell."""
    m = _MOVE_RE.match(text)
    if not m:
        raise ValueError(f"Expected two numbers like '1 2', got {text!r}")
    row, col = int(m.group(1)), int(m.group(2))
    if not (1 <= row <= BOARD_SIZE and 1 <= col <= BOARD_SIZE):
        raise OutOfBounds(row, col)
    return row - 1, col - 1


def format_scores(scores: Dict[Cell, Score]) -> str:
    """One line of 1-based ``row,col=score`` pairs in row-major order."""
    return "Root scores: " + " ".join(f"{r + 1},{c + 1}={s}" for (r, c), s in scores.items())


def prompt_difficulty(read: Reader = input, write: Writer = print) -> Difficulty:
    text = read("Select difficulty level (1: Easy, 2: Medium, 3: Hard): ")
    while True:
        try:
            return Difficulty.parse(text)
        except InvalidDifficulty:
            write("Invalid choice.")
            text = read("Please select difficulty (1, 2, or 3): ")


def _announce(game: Game, outcome: GameOutcome, write: Writer) -> None:
    if outcome.status is GameStatus.DRAW:
        write("It's a draw!")
        return
    who = "Player" if outcome.winner is game.human_mark else "AI"
    write(f"{who} ({outcome.winner.symbol}) wins!")


def run_game(game: Game, read: Reader = input, write: Writer = print,
             show_scores: bool = False) -> GameOutcome:
    """Drive one game to completion and report the result."""
    write(render_board(game.board))
    while not game.is_over:
        if game.is_human_turn:
            text = read(f"Player {game.human_mark.symbol}, enter your move (row and column: 1 2): ")
            try:
                row, col = parse_move(text)
                game.play_human(row, col)
            except CellOccupied:
                write("Position already taken. Try again.")
                continue
            except ValueError:
                write("Invalid position. Try again.")
                continue
        else:
            write("AI's move:")
            game.play_engine()
            if show_scores and game.engine.last_scores:
                write(format_scores(game.engine.last_scores))
        write(render_board(game.board))

    _announce(game, game.outcome, write)
    return game.outcome


def play_session(read: Reader = input, write: Writer = print,
                 difficulty: Optional[DifficultyLike] = None,
                 human_mark: Mark = Mark.X,
                 rng: Optional[np.random.Generator] = None,
                 show_scores: bool = False) -> List[GameOutcome]:
    """Play games until the player declines a rematch."""
    human_mark = Mark.parse(human_mark)
    fixed = Difficulty.parse(difficulty) if difficulty is not None else None
    engine = get_engine(human_mark.opponent, rng)
    outcomes: List[GameOutcome] = []
    while True:
        write(f"Welcome to Tic Tac Toe! Player is {human_mark.symbol} "
              f"and AI is {human_mark.opponent.symbol}.")
        tier = fixed or prompt_difficulty(read, write)
        game = Game(human_mark, tier, engine=engine)
        outcomes.append(run_game(game, read, write, show_scores))
        answer = read("Do you want to play again? (y/n): ")
        if answer.strip().lower() != "y":
            break
    write("Thanks for playing!")
    return outcomes


__all__ = [
    "render_board",
    "parse_move",
    "format_scores",
    "prompt_difficulty",
    "run_game",
    "play_session",
]
