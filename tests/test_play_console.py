import json
from pathlib import Path

import numpy as np

from tafl import TaflGame
from tafl.core import Position

from scripts.play_console import format_board, parse_command, replay_logged_game
from scripts.soak_random_games import play_random_game


def create_sample_log(path: Path) -> None:
    moves = [
        {"move_index": 0, "side": "ATTACKER", "from": [3, 0], "to": [3, 2]},
        {"move_index": 1, "side": "DEFENDER", "from": [5, 3], "to": [2, 3]},
    ]
    log = {"metadata": {}, "moves": moves}
    path.write_text(json.dumps(log))


def test_replay_logged_game(tmp_path):
    log_path = tmp_path / "game.json"
    create_sample_log(log_path)
    summary = replay_logged_game(log_path, verbose=False)
    assert summary["moves"] == 2
    assert summary["winner"] is None
    board = summary["board"]
    assert board[2][3] == "A1"
    assert board[3][2] == "D1"
    assert board[0][3] is None


def test_parse_command():
    assert parse_command("3 0 3 2") == (Position(3, 0), Position(3, 2))
    assert parse_command("3,0, 3,2") == (Position(3, 0), Position(3, 2))
    assert parse_command("3 0 3") is None
    assert parse_command("a b c d") is None


def test_format_board_marks_corners_and_king():
    lines = format_board(TaflGame()).splitlines()
    assert len(lines) == 12
    assert lines[1].split()[1] == "+"
    assert lines[6].split()[6] == "K"


def test_random_game_soak_keeps_undo_exact():
    result = play_random_game(np.random.default_rng(0), max_ply=30)
    assert 0 < result["plies"] <= 30
