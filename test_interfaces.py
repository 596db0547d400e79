import itertools

import numpy as np

import play
import selfplay
from config import reset_config
from tictactoe import (
    AlphaBetaStrategy,
    BoardState,
    Difficulty,
    Mark,
    SearchEngine,
    choose_move,
    get_engine,
    get_strategy,
)


def test_strategy_adapter_matches_engine():
    board = BoardState.from_rows(["X--", "-O-", "--X"])
    strategy = AlphaBetaStrategy(Mark.O, rng=np.random.default_rng(0))
    engine = SearchEngine(Mark.O, rng=np.random.default_rng(0))
    assert strategy.select(board, Difficulty.HARD) == engine.choose_move(board, Difficulty.HARD)
    assert strategy.engine.mark is Mark.O


def test_factories_work():
    strategy = get_strategy(Mark.X, rng=np.random.default_rng(0))
    assert isinstance(strategy, AlphaBetaStrategy)
    assert strategy.mark is Mark.X
    engine = get_engine(Mark.X, rng=np.random.default_rng(0))
    assert engine.mark is Mark.X and engine.opponent is Mark.O


def test_module_level_choose_move():
    board = BoardState.from_rows(["XX-", "-O-", "---"])
    assert choose_move(board, 3) == (0, 2)
    assert choose_move(board, "medium", rng=np.random.default_rng(0)) == (0, 2)


def test_selfplay_script(capsys):
    code = selfplay.main(["--games", "3", "--x-difficulty", "easy", "--o-difficulty", "1", "--seed", "3"])
    out = capsys.readouterr().out
    assert code == 0
    assert "=== SELF-PLAY: X=EASY vs O=EASY ===" in out
    assert "Games played: 3" in out


def test_play_script(monkeypatch, capsys):
    cells = itertools.cycle(f"{r} {c}" for r in range(1, 4) for c in range(1, 4))

    def fake_input(prompt=""):
        if prompt.startswith("Do you want to play again"):
            return "n"
        return next(cells)

    monkeypatch.setattr("builtins.input", fake_input)
    assert play.main(["--difficulty", "2", "--seed", "1"]) == 0
    assert "Thanks for playing!" in capsys.readouterr().out


def test_play_script_stops_on_eof(monkeypatch):
    def closed_input(prompt=""):
        raise EOFError

    monkeypatch.setattr("builtins.input", closed_input)
    assert play.main(["--seed", "1"]) == 1


def test_selfplay_tiers_default_to_configured_difficulty(monkeypatch, capsys):
    monkeypatch.setenv("TTT_DIFFICULTY", "easy")
    reset_config()
    try:
        assert selfplay.main(["--games", "2", "--o-difficulty", "medium", "--seed", "3"]) == 0
    finally:
        reset_config()
    assert "=== SELF-PLAY: X=EASY vs O=MEDIUM ===" in capsys.readouterr().out


def test_play_script_uses_configured_difficulty(monkeypatch, capsys):
    monkeypatch.setenv("TTT_DIFFICULTY", "easy")
    monkeypatch.setenv("TTT_SHOW_SCORES", "true")
    reset_config()
    cells = itertools.cycle(f"{r} {c}" for r in range(1, 4) for c in range(1, 4))
    prompts = []

    def fake_input(prompt=""):
        prompts.append(prompt)
        if prompt.startswith("Do you want to play again"):
            return "n"
        return next(cells)

    monkeypatch.setattr("builtins.input", fake_input)
    try:
        assert play.main(["--seed", "1"]) == 0
    finally:
        reset_config()
    assert not any(p.startswith("Select difficulty") for p in prompts)
    # easy moves are random, so there are no root scores to show
    assert "Root scores:" not in capsys.readouterr().out


def test_play_script_shows_scores_when_enabled(monkeypatch, capsys):
    monkeypatch.setenv("TTT_SHOW_SCORES", "true")
    reset_config()
    cells = itertools.cycle(f"{r} {c}" for r in range(1, 4) for c in range(1, 4))

    def fake_input(prompt=""):
        if prompt.startswith("Do you want to play again"):
            return "n"
        return next(cells)

    monkeypatch.setattr("builtins.input", fake_input)
    try:
        assert play.main(["--difficulty", "3", "--seed", "1"]) == 0
    finally:
        reset_config()
    assert "Root scores:" in capsys.readouterr().out
