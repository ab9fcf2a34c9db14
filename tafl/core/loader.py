"""Initial board layouts.

A layout is ``BOARD_SIZE`` rows of ``BOARD_SIZE`` cells, optionally space
separated. Row ``y`` of the text is row ``y`` of the board::

    .  empty
    A  attacker pawn
    D  defender pawn
    K  the King (defender)

Lines starting with ``#`` and blank lines are ignored.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional, Union

from loguru import logger

from .state import BOARD_SIZE, Piece, PieceKind, Position, Side

DEFAULT_LAYOUT = """\
. . . A A A A A . . .
. . . . . A . . . . .
. . . . . . . . . . .
A . . . . D . . . . A
A . . . D D D . . . A
A A . D D K D D . A A
A . . . D D D . . . A
A . . . . D . . . . A
. . . . . . . . . . .
. . . . . A . . . . .
. . . A A A A A . . .
"""

_SYMBOLS = {
    "A": (Side.ATTACKER, PieceKind.PAWN),
    "D": (Side.DEFENDER, PieceKind.PAWN),
    "K": (Side.DEFENDER, PieceKind.KING),
}


class LayoutError(ValueError):
    pass


def parse_layout(text: str) -> Dict[Position, Piece]:
    rows = _split_rows(text)
    if len(rows) != BOARD_SIZE:
        raise LayoutError(f"Layout must have {BOARD_SIZE} rows, got {len(rows)}.")

    layout: Dict[Position, Piece] = {}
    counters = {Side.ATTACKER: 0, Side.DEFENDER: 0}
    kings = 0
    for y, row in enumerate(rows):
        if len(row) != BOARD_SIZE:
            raise LayoutError(f"Row {y} must have {BOARD_SIZE} cells, got {len(row)}.")
        for x, symbol in enumerate(row):
            if symbol == ".":
                continue
            if symbol not in _SYMBOLS:
                raise LayoutError(f"Unknown cell symbol {symbol!r} at ({x}, {y}).")
            side, kind = _SYMBOLS[symbol]
            position = Position(x, y)
            if kind is PieceKind.PAWN and position.is_corner():
                raise LayoutError(f"Pawn placed on corner {position}.")
            counters[side] += 1
            prefix = "K" if kind is PieceKind.KING else side.symbol
            layout[position] = Piece(kind=kind, owner=side, name=f"{prefix}{counters[side]}")
            if kind is PieceKind.KING:
                kings += 1

    if kings != 1:
        raise LayoutError(f"Layout must contain exactly one King, got {kings}.")
    return layout


def load_layout(path: Union[str, Path]) -> Dict[Position, Piece]:
    path = Path(path)
    layout = parse_layout(path.read_text())
    logger.info("Loaded {} pieces from {}", len(layout), path)
    return layout


def load_board(source: Optional[Union[str, Path]] = None) -> Dict[Position, Piece]:
    """Return a fresh layout from ``source`` (a file path), or the standard opening."""
    if source is None:
        return parse_layout(DEFAULT_LAYOUT)
    return load_layout(source)


def _split_rows(text: str) -> List[List[str]]:
    rows: List[List[str]] = []
    for line in text.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        cells = stripped.split() if any(c.isspace() for c in stripped) else list(stripped)
        rows.append(cells)
    return rows
