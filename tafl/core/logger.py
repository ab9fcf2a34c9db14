from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, TextIO, Union

from .state import Piece, Player, Position

SEPARATOR = "*" * 75


class GameLogger:
    """Writes the end-of-game statistics report for a finished game.

    The report has four sections, each closed by a separator line:

    1. move history of every piece that moved, winner's pieces first
    2. pawns that captured, most captures first
    3. distance travelled per piece, longest first
    4. positions visited by at least two distinct pieces
    """

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self.stream = stream if stream is not None else sys.stdout

    def log_game(
        self,
        winner: Player,
        positions: Mapping[Position, Sequence[Piece]],
        pieces: Iterable[Piece],
    ) -> None:
        summary = self.summary(winner, positions, pieces)
        lines: List[str] = []
        for entry in summary["moves"]:
            path = ", ".join(f"({x}, {y})" for x, y in entry["moves"])
            lines.append(f"{entry['name']}: [{path}]")
        lines.append(SEPARATOR)
        for entry in summary["captures"]:
            lines.append(f"{entry['name']}: {entry['captures']} kills")
        lines.append(SEPARATOR)
        for entry in summary["distances"]:
            lines.append(f"{entry['name']}: {entry['squares']} squares")
        lines.append(SEPARATOR)
        for entry in summary["positions"]:
            x, y = entry["position"]
            lines.append(f"({x}, {y}){entry['pieces']} pieces")
        lines.append(SEPARATOR)
        self.stream.write("\n".join(lines) + "\n")
        self.stream.flush()

    def summary(
        self,
        winner: Player,
        positions: Mapping[Position, Sequence[Piece]],
        pieces: Iterable[Piece],
    ) -> Dict[str, object]:
        pieces = list(pieces)

        def loser_last(piece: Piece) -> int:
            return 0 if piece.owner == winner.side else 1

        moved = sorted(
            (piece for piece in pieces if len(piece.moves) > 1),
            key=lambda piece: (loser_last(piece), len(piece.moves), piece.number),
        )
        capturers = sorted(
            (piece for piece in pieces if piece.is_pawn and piece.captures > 0),
            key=lambda piece: (-piece.captures, piece.number, loser_last(piece)),
        )
        travellers = sorted(
            (piece for piece in pieces if piece.distance_travelled() > 0),
            key=lambda piece: (-piece.distance_travelled(), piece.number, loser_last(piece)),
        )
        visited = []
        for position, stepped in positions.items():
            distinct = len({id(piece) for piece in stepped})
            if distinct > 1:
                visited.append((position, distinct))
        visited.sort(key=lambda item: (-item[1], item[0].x, item[0].y))

        return {
            "winner": winner.side.name,
            "wins": winner.wins,
            "moves": [
                {"name": piece.name, "moves": [position.as_tuple() for position in piece.moves]}
                for piece in moved
            ],
            "captures": [{"name": piece.name, "captures": piece.captures} for piece in capturers],
            "distances": [{"name": piece.name, "squares": piece.distance_travelled()} for piece in travellers],
            "positions": [{"position": position.as_tuple(), "pieces": count} for position, count in visited],
        }


class ReportFileLogger(GameLogger):
    """Appends each finished game's report to ``path``, as text or as one JSON line."""

    def __init__(self, path: Union[str, Path], report_format: str = "text") -> None:
        super().__init__()
        self.path = Path(path)
        self.report_format = report_format

    def log_game(
        self,
        winner: Player,
        positions: Mapping[Position, Sequence[Piece]],
        pieces: Iterable[Piece],
    ) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("a") as handle:
            if self.report_format == "json":
                handle.write(json.dumps(self.summary(winner, positions, pieces)) + "\n")
            else:
                GameLogger(handle).log_game(winner, positions, pieces)
