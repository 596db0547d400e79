import itertools

import numpy as np
import pytest

from tictactoe.board import BoardState
from tictactoe.console import (
    format_scores,
    parse_move,
    play_session,
    prompt_difficulty,
    render_board,
    run_game,
)
from tictactoe.errors import OutOfBounds
from tictactoe.game import Game
from tictactoe.search import SearchEngine
from tictactoe.types import Difficulty, GameStatus, Mark


def cycling_reader(replies=None):
    """Answer move prompts by walking every cell in turn; other prompts from ``replies``."""
    cells = itertools.cycle(f"{r} {c}" for r in range(1, 4) for c in range(1, 4))
    replies = dict(replies or {})

    def read(prompt):
        for key, answers in replies.items():
            if prompt.startswith(key):
                return answers.pop(0)
        return next(cells)

    return read


def test_render_empty_board():
    assert render_board(BoardState()) == (
        "- | - | -\n"
        "---------\n"
        "- | - | -\n"
        "---------\n"
        "- | - | -"
    )


def test_render_marks():
    text = render_board(BoardState.from_rows(["X--", "-O-", "--X"]))
    assert text.splitlines()[0] == "X | - | -"
    assert text.splitlines()[2] == "- | O | -"


def test_parse_move_converts_to_zero_based():
    assert parse_move("1 2") == (0, 1)
    assert parse_move("  3   3 ") == (2, 2)
    assert parse_move("2,1") == (1, 0)


def test_parse_move_out_of_range():
    with pytest.raises(OutOfBounds):
        parse_move("0 1")
    with pytest.raises(OutOfBounds):
        parse_move("4 2")


@pytest.mark.parametrize("text", ["", "a b", "1", "1 2 3", "1.5 2"])
def test_parse_move_malformed(text):
    with pytest.raises(ValueError):
        parse_move(text)


def test_prompt_difficulty_reprompts():
    answers = iter(["7", "expert", "2"])
    out = []
    tier = prompt_difficulty(lambda prompt: next(answers), out.append)
    assert tier is Difficulty.MEDIUM
    assert out.count("Invalid choice.") == 2


def test_run_game_handles_bad_input():
    engine = SearchEngine(Mark.O, rng=np.random.default_rng(0))
    game = Game(Mark.X, Difficulty.HARD, engine=engine)
    scripted = ["9 9", "abc"]
    sent_occupied = []

    def read(prompt):
        if scripted:
            return scripted.pop(0)
        if game.moves and not sent_occupied:
            sent_occupied.append(True)
            _, r, c = game.moves[0]
            return f"{r + 1} {c + 1}"
        r, c = game.board.empty_cells()[0]
        return f"{r + 1} {c + 1}"

    out = []
    outcome = run_game(game, read, out.append)

    assert outcome.is_terminal
    assert outcome.winner is not Mark.X
    assert out.count("Invalid position. Try again.") == 2
    assert "Position already taken. Try again." in out
    assert "AI's move:" in out
    assert out[-1] in ("AI (O) wins!", "It's a draw!")


def test_run_game_reports_human_win():
    # X to move with two in a row on top
    engine = SearchEngine(Mark.O, rng=np.random.default_rng(0))
    game = Game(Mark.X, Difficulty.EASY, engine=engine)
    game.board = BoardState.from_rows(["XX-", "OO-", "---"])
    game.moves = [(Mark.X, 0, 0), (Mark.O, 1, 0), (Mark.X, 0, 1), (Mark.O, 1, 1)]
    out = []
    outcome = run_game(game, lambda prompt: "1 3", out.append)
    assert outcome.winner is Mark.X
    assert out[-1] == "Player (X) wins!"


def test_play_session_replays_until_declined():
    read = cycling_reader({
        "Select difficulty": ["1", "2"],
        "Do you want to play again": ["y", "n"],
    })
    out = []
    outcomes = play_session(read, out.append, rng=np.random.default_rng(4))
    assert len(outcomes) == 2
    assert all(o.status in (GameStatus.WIN, GameStatus.DRAW) for o in outcomes)
    assert out[-1] == "Thanks for playing!"
    assert out[0] == "Welcome to Tic Tac Toe! Player is X and AI is O."


def test_play_session_fixed_difficulty_human_o():
    read = cycling_reader({"Do you want to play again": ["n"]})
    out = []
    outcomes = play_session(read, out.append, difficulty="hard", human_mark=Mark.O,
                            rng=np.random.default_rng(0))
    assert len(outcomes) == 1
    assert outcomes[0].winner is not Mark.O


def test_format_scores_is_one_based():
    assert format_scores({(0, 2): 9, (2, 0): -8}) == "Root scores: 1,3=9 3,1=-8"


def test_run_game_shows_root_scores():
    engine = SearchEngine(Mark.O, rng=np.random.default_rng(0))
    game = Game(Mark.X, Difficulty.HARD, engine=engine)
    game.board = BoardState.from_rows(["XX-", "-O-", "---"])
    game.moves = [(Mark.X, 0, 0), (Mark.O, 1, 1), (Mark.X, 0, 1)]
    game.current = Mark.O
    out = []
    run_game(game, cycling_reader(), out.append, show_scores=True)

    shown = [line for line in out if line.startswith("Root scores:")]
    assert shown
    # blocking at (1,3) is the only move that does not lose
    assert shown[0].startswith("Root scores: 1,3=0 ")
    assert "2,1=-9" in shown[0]
    assert out.index(shown[0]) == out.index("AI's move:") + 1


def test_run_game_hides_scores_by_default_and_for_easy():
    engine = SearchEngine(Mark.O, rng=np.random.default_rng(0))
    out = []
    run_game(Game(Mark.X, Difficulty.HARD, engine=engine), cycling_reader(), out.append)
    run_game(Game(Mark.X, Difficulty.EASY, engine=engine), cycling_reader(), out.append,
             show_scores=True)
    assert not any(line.startswith("Root scores:") for line in out)
