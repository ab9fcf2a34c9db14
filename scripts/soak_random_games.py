#!/usr/bin/env python3
"""Play random legal games and check that every move undoes to the exact prior state."""

import argparse
import json
from typing import Dict, List, Tuple

import numpy as np
from tqdm.auto import trange

from tafl.core import (
    GameState,
    apply_move,
    enumerate_legal_moves,
    initialize_game_state,
    undo_last_move,
)


def snapshot(state: GameState) -> Tuple:
    board = tuple(sorted((pos.as_tuple(), id(piece)) for pos, piece in state.board.items()))
    pieces = tuple(
        sorted((id(piece), len(piece.moves), piece.captures) for piece in state.known_pieces)
    )
    wins = tuple(player.wins for player in state.players.values())
    return board, pieces, wins, state.current_player, len(state.history)


def play_random_game(rng: np.random.Generator, max_ply: int, layout_path=None) -> Dict[str, object]:
    state = initialize_game_state(layout_path)
    captures = 0
    winner = None
    for _ in range(max_ply):
        legal = enumerate_legal_moves(state)
        if not legal:
            break
        move = legal[int(rng.integers(len(legal)))]
        before = snapshot(state)
        record = apply_move(state, move.source, move.destination)
        if record is None:
            raise AssertionError(f"Enumerated move rejected: {move}")
        undo_last_move(state)
        if snapshot(state) != before:
            raise AssertionError(f"Undo did not restore state after {move}")
        record = apply_move(state, move.source, move.destination)
        captures += len(record.captures)
        if record.winner is not None:
            winner = record.winner
            break
    return {
        "plies": len(state.history),
        "captures": captures,
        "winner": winner.name if winner is not None else None,
    }


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--games", type=int, default=20)
    parser.add_argument("--max-ply", type=int, default=400)
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument("--layout", type=str)
    args = parser.parse_args()

    rng = np.random.default_rng(args.seed)
    results: List[Dict[str, object]] = []
    for _ in trange(args.games, desc="Games"):
        results.append(play_random_game(rng, args.max_ply, args.layout))

    summary = {
        "games": len(results),
        "attacker_wins": sum(1 for r in results if r["winner"] == "ATTACKER"),
        "defender_wins": sum(1 for r in results if r["winner"] == "DEFENDER"),
        "unfinished": sum(1 for r in results if r["winner"] is None),
        "average_plies": float(np.mean([r["plies"] for r in results])) if results else 0.0,
        "average_captures": float(np.mean([r["captures"] for r in results])) if results else 0.0,
    }
    print(json.dumps(summary, indent=2))


if __name__ == "__main__":
    main()
