#!/usr/bin/env python3
"""Play Tafl hot-seat in the console, with optional move logging & replay."""

import argparse
import json
import sys
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from tafl import GameConfig, TaflGame
from tafl.core import Position


HELP = "Enter 'x1 y1 x2 y2' to move, 'u' to undo, 'r' to reset, 'q' to quit."


def format_board(game: TaflGame) -> str:
    size = game.get_board_size()
    header = "   " + " ".join(f"{x:>2}" for x in range(size))
    rows = [header]
    for y in range(size):
        cells = []
        for x in range(size):
            piece = game.get_piece_at_position(Position(x, y))
            if piece is None:
                cells.append(" +" if Position(x, y).is_corner() else " .")
            elif piece.is_king:
                cells.append(" K")
            else:
                cells.append(f" {piece.owner.symbol}")
        rows.append(f"{y:>2} " + "".join(cells))
    return "\n".join(rows)


def parse_command(raw: str) -> Optional[Tuple[Position, Position]]:
    parts = raw.replace(",", " ").split()
    if len(parts) != 4 or not all(part.lstrip("-").isdigit() for part in parts):
        return None
    x1, y1, x2, y2 = (int(part) for part in parts)
    return Position(x1, y1), Position(x2, y2)


def save_log(log: Dict, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(log, indent=2))
    print(f"Saved move log to {path}.")


def replay_logged_game(log_path: Path, *, verbose: bool = True) -> Dict[str, object]:
    data = json.loads(log_path.read_text())
    metadata = data.get("metadata", {})
    moves = data.get("moves", [])
    game = TaflGame(layout_path=metadata.get("layout_path"))
    if verbose:
        print("Replaying logged game.")
        print(format_board(game))
    for entry in moves:
        source = Position(*entry["from"])
        destination = Position(*entry["to"])
        if not game.move(source, destination):
            raise ValueError(f"Logged move {entry['move_index']} is illegal: {source} -> {destination}")
        if verbose:
            print(f"{entry.get('side', '?')}: {source} -> {destination}")
            print(format_board(game))
    winner = game.winner()
    size = game.get_board_size()
    board: List[List[Optional[str]]] = []
    for y in range(size):
        row = []
        for x in range(size):
            piece = game.get_piece_at_position(Position(x, y))
            row.append(piece.name if piece is not None else None)
        board.append(row)
    summary = {
        "winner": winner.side.name if winner else None,
        "moves": len(moves),
        "board": board,
    }
    if verbose:
        print(f"Replay finished. Winner: {summary['winner']}")
    return summary


def play_interactive(config: GameConfig, log_file: Optional[str]) -> None:
    game = TaflGame.from_config(config)
    log_records: List[Dict] = []
    print(HELP)

    while True:
        print()
        print(format_board(game))
        if game.is_game_finished():
            winner = game.winner()
            print(f"{winner.side.name} wins! (wins so far: {winner.wins})")
            raw = input("'u' to undo, 'r' to play again, 'q' to quit: ").strip().lower()
        elif len(game.history) >= config.max_ply:
            print(f"Reached {config.max_ply} moves without a winner.")
            raw = input("'u' to undo, 'r' to play again, 'q' to quit: ").strip().lower()
        else:
            side = "ATTACKER" if game.is_second_player_turn() else "DEFENDER"
            raw = input(f"{side} to move: ").strip().lower()

        if raw in {"q", "quit", "exit"}:
            break
        if raw in {"u", "undo"}:
            game.undo_last_move()
            if log_records:
                log_records.pop()
            continue
        if raw in {"r", "reset"}:
            game.reset()
            log_records.clear()
            continue
        if game.is_game_finished() or len(game.history) >= config.max_ply:
            continue

        command = parse_command(raw)
        if command is None:
            print(HELP)
            continue
        source, destination = command
        side = "ATTACKER" if game.is_second_player_turn() else "DEFENDER"
        if not game.move(source, destination):
            print("Illegal move.")
            continue
        log_records.append(
            {
                "move_index": len(log_records),
                "side": side,
                "from": [source.x, source.y],
                "to": [destination.x, destination.y],
            }
        )

    if log_file:
        winner = game.winner()
        metadata = {
            "layout_path": config.layout_path,
            "winner": winner.side.name if winner else None,
        }
        save_log({"metadata": metadata, "moves": log_records}, Path(log_file))


def main() -> None:
    parser = argparse.ArgumentParser(description="Play Tafl in the console.")
    parser.add_argument("--config", type=str, default="configs/default.yaml")
    parser.add_argument("--layout", type=str, help="Path to an initial board layout")
    parser.add_argument("--report-path", type=str, help="Append end-of-game statistics here")
    parser.add_argument("--report-format", choices=["text", "json"])
    parser.add_argument("--max-ply", type=int)
    parser.add_argument("--log-file", type=str)
    parser.add_argument("--replay-log", type=str, help="Replay a logged game and exit")
    parser.add_argument("--replay-quiet", action="store_true")
    args = parser.parse_args()

    if args.replay_log:
        replay_logged_game(Path(args.replay_log), verbose=not args.replay_quiet)
        return

    config = GameConfig()
    cfg_path = Path(args.config)
    if cfg_path.exists():
        config = GameConfig.from_yaml(cfg_path)
    config = config.merged(
        layout_path=args.layout,
        report_path=args.report_path,
        report_format=args.report_format,
        max_ply=args.max_ply,
    )

    try:
        play_interactive(config, args.log_file)
    except (EOFError, KeyboardInterrupt):
        print()
        sys.exit(0)


if __name__ == "__main__":
    main()
