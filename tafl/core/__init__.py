"""Core game logic for the Tafl rule engine."""

from .state import (
    BOARD_SIZE,
    BoardInvariantError,
    GameState,
    Move,
    MoveRecord,
    Piece,
    PieceKind,
    Player,
    Position,
    Side,
    is_inside_board,
)
from .loader import DEFAULT_LAYOUT, LayoutError, load_board, load_layout, parse_layout
from .logger import GameLogger, ReportFileLogger
from .rules import (
    DIRECTIONS,
    apply_move,
    attempt_capture,
    check_winner,
    enumerate_legal_moves,
    initialize_game_state,
    is_legal_move,
    undo_last_move,
)

__all__ = [
    "BOARD_SIZE",
    "BoardInvariantError",
    "GameState",
    "Move",
    "MoveRecord",
    "Piece",
    "PieceKind",
    "Player",
    "Position",
    "Side",
    "is_inside_board",
    "DEFAULT_LAYOUT",
    "LayoutError",
    "load_board",
    "load_layout",
    "parse_layout",
    "GameLogger",
    "ReportFileLogger",
    "DIRECTIONS",
    "apply_move",
    "attempt_capture",
    "check_winner",
    "enumerate_legal_moves",
    "initialize_game_state",
    "is_legal_move",
    "undo_last_move",
]
