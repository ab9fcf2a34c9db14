from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Dict, Iterable, List, Optional, Set, Tuple

BOARD_SIZE = 11


class Side(IntEnum):
    DEFENDER = 1
    ATTACKER = 2

    @property
    def opponent(self) -> "Side":
        return Side.ATTACKER if self == Side.DEFENDER else Side.DEFENDER

    @property
    def symbol(self) -> str:
        return "D" if self == Side.DEFENDER else "A"


class PieceKind(Enum):
    KING = "king"
    PAWN = "pawn"


class BoardInvariantError(RuntimeError):
    """Raised when the board is in a state no legal sequence of moves can produce."""


def is_inside_board(x: int, y: int) -> bool:
    return 0 <= x < BOARD_SIZE and 0 <= y < BOARD_SIZE


@dataclass(frozen=True)
class Position:
    x: int
    y: int

    def is_corner(self) -> bool:
        return self.x in (0, BOARD_SIZE - 1) and self.y in (0, BOARD_SIZE - 1)

    def is_inside_board(self) -> bool:
        return is_inside_board(self.x, self.y)

    def offset(self, dx: int, dy: int) -> "Position":
        return Position(self.x + dx, self.y + dy)

    def as_tuple(self) -> Tuple[int, int]:
        return (self.x, self.y)

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"


@dataclass(eq=False)
class Piece:
    """A piece on the board; identity-hashed so it can be tracked across captures and undo.

    ``captures`` is only meaningful for pawns, the King never captures.
    """

    kind: PieceKind
    owner: Side
    name: str
    moves: List[Position] = field(default_factory=list)
    captures: int = 0

    @property
    def is_king(self) -> bool:
        return self.kind is PieceKind.KING

    @property
    def is_pawn(self) -> bool:
        return self.kind is PieceKind.PAWN

    @property
    def number(self) -> int:
        return int(self.name[1:])

    def distance_travelled(self) -> int:
        total = 0
        for previous, current in zip(self.moves, self.moves[1:]):
            total += abs(current.x - previous.x) + abs(current.y - previous.y)
        return total

    def __repr__(self) -> str:
        return f"Piece({self.name}, {self.kind.value}, moves={len(self.moves)}, captures={self.captures})"


@dataclass
class Player:
    side: Side
    wins: int = 0


@dataclass(frozen=True)
class Move:
    source: Position
    destination: Position

    def as_tuple(self) -> Tuple[int, int, int, int]:
        return (self.source.x, self.source.y, self.destination.x, self.destination.y)


@dataclass(frozen=True)
class MoveRecord:
    piece: Piece
    source: Position
    destination: Position
    captures: Dict[Position, Piece] = field(default_factory=dict)
    winner: Optional[Side] = None


@dataclass
class GameState:
    board: Dict[Position, Piece]
    players: Dict[Side, Player] = field(
        default_factory=lambda: {Side.DEFENDER: Player(Side.DEFENDER), Side.ATTACKER: Player(Side.ATTACKER)}
    )
    current_player: Side = Side.ATTACKER
    history: List[MoveRecord] = field(default_factory=list)
    known_positions: Set[Position] = field(default_factory=set)
    known_pieces: Set[Piece] = field(default_factory=set)
    steps: Dict[Position, List[Piece]] = field(default_factory=dict)

    def track_loaded(self, layout: Dict[Position, Piece]) -> None:
        """Register freshly loaded pieces with the statistics trackers."""
        for position, piece in layout.items():
            if not piece.moves:
                piece.moves.append(position)
            self.known_positions.add(position)
            self.known_pieces.add(piece)
            self.record_step(position, piece)

    def record_step(self, position: Position, piece: Piece) -> None:
        self.steps.setdefault(position, []).append(piece)

    def forget_step(self, position: Position, piece: Piece) -> None:
        stepped = self.steps.get(position)
        if not stepped:
            return
        for index in range(len(stepped) - 1, -1, -1):
            if stepped[index] is piece:
                del stepped[index]
                break
        if not stepped:
            del self.steps[position]

    def piece_at(self, position: Position) -> Optional[Piece]:
        return self.board.get(position)

    def player(self, side: Side) -> Player:
        return self.players[side]

    def find_king(self) -> Position:
        for position, piece in self.board.items():
            if piece.is_king:
                return position
        raise BoardInvariantError("King not found on board.")

    def pieces_of(self, side: Side) -> Iterable[Tuple[Position, Piece]]:
        for position, piece in self.board.items():
            if piece.owner == side:
                yield position, piece

    def count(self, side: Side, kind: PieceKind) -> int:
        return sum(1 for _, piece in self.pieces_of(side) if piece.kind is kind)

    def __repr__(self) -> str:
        rows = []
        for y in range(BOARD_SIZE):
            cells = []
            for x in range(BOARD_SIZE):
                piece = self.board.get(Position(x, y))
                if piece is None:
                    cells.append(".")
                elif piece.is_king:
                    cells.append("K")
                else:
                    cells.append(piece.owner.symbol)
            rows.append(" ".join(cells))
        board_str = "\n".join(rows)
        return f"GameState(current={self.current_player.name}, ply={len(self.history)})\n{board_str}"
