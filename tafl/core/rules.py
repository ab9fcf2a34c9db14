from __future__ import annotations

from dataclasses import replace
from typing import Dict, List, Optional, Tuple, Union

from loguru import logger

from .loader import load_board
from .state import (
    BoardInvariantError,
    GameState,
    Move,
    MoveRecord,
    Piece,
    Position,
    Side,
    is_inside_board,
)

# Capture resolution order: -x, +x, -y, +y.
DIRECTIONS: Tuple[Tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))


def initialize_game_state(source: Union[str, None] = None) -> GameState:
    layout = load_board(source)
    state = GameState(board=dict(layout))
    state.track_loaded(layout)
    return state


def is_legal_move(state: GameState, source: Position, destination: Position) -> bool:
    """Check the move predicates in order, without touching the state.

    1. strictly horizontal or vertical, never stationary
    2. a piece stands on ``source``
    3. it belongs to the side to move
    4. pawns may not end on a corner
    5. every cell after ``source`` up to and including ``destination`` is empty
    """
    if source == destination or (source.x != destination.x and source.y != destination.y):
        return False
    piece = state.piece_at(source)
    if piece is None:
        return False
    if piece.owner != state.current_player:
        return False
    if piece.is_pawn and destination.is_corner():
        return False
    return _validate_path_clear(state, source, destination)


def enumerate_legal_moves(state: GameState, side: Optional[Side] = None) -> List[Move]:
    if side is None:
        side = state.current_player

    legal: List[Move] = []
    for origin, piece in sorted(state.pieces_of(side), key=lambda item: (item[0].y, item[0].x)):
        for dx, dy in DIRECTIONS:
            x, y = origin.x + dx, origin.y + dy
            while is_inside_board(x, y) and Position(x, y) not in state.board:
                target = Position(x, y)
                if not (piece.is_pawn and target.is_corner()):
                    legal.append(Move(origin, target))
                x += dx
                y += dy
    return legal


def apply_move(state: GameState, source: Position, destination: Position) -> Optional[MoveRecord]:
    """Play ``source -> destination`` in place.

    Returns the pushed record, or ``None`` when the move is illegal, in which
    case the state is left untouched.
    """
    if not is_legal_move(state, source, destination):
        return None

    piece = state.board.pop(source)
    state.board[destination] = piece
    piece.moves.append(destination)
    state.known_positions.add(destination)
    state.record_step(destination, piece)

    captures: Dict[Position, Piece] = {}
    for dx, dy in DIRECTIONS:
        capture = attempt_capture(state, destination, destination.x + dx, destination.y + dy)
        if capture is not None:
            captured_position, captured_piece = capture
            captures[captured_position] = captured_piece

    record = MoveRecord(piece=piece, source=source, destination=destination, captures=captures)
    state.history.append(record)
    state.current_player = state.current_player.opponent

    winner = check_winner(state)
    if winner is not None:
        state.player(winner).wins += 1
        record = replace(record, winner=winner)
        state.history[-1] = record
    logger.debug(
        "{} moved {} -> {} capturing {}",
        piece.name,
        source,
        destination,
        [captured.name for captured in captures.values()],
    )
    return record


def attempt_capture(
    state: GameState, capturer_position: Position, target_x: int, target_y: int
) -> Optional[Tuple[Position, Piece]]:
    """Try a custody capture of the cell next to ``capturer_position``.

    The assist cell on the far side of the target may be off the board, a
    corner, or a non-King piece of the capturer's side.
    """
    capturer = state.piece_at(capturer_position)
    if capturer is None:
        raise BoardInvariantError(f"Tried to capture from empty square {capturer_position}.")
    if not is_inside_board(target_x, target_y):
        return None
    target_position = Position(target_x, target_y)
    if target_position.is_corner():
        return None
    if not capturer.is_pawn:
        return None
    target = state.piece_at(target_position)
    if target is None or target.owner == capturer.owner or target.is_king:
        return None

    dx = target_position.x - capturer_position.x
    dy = target_position.y - capturer_position.y
    assist_position = target_position.offset(dx, dy)
    if assist_position.is_inside_board() and not assist_position.is_corner():
        assist = state.piece_at(assist_position)
        if assist is None or assist.owner != capturer.owner or assist.is_king:
            return None

    del state.board[target_position]
    capturer.captures += 1
    return target_position, target


def check_winner(state: GameState) -> Optional[Side]:
    king_position = state.find_king()
    if king_position.is_corner():
        return Side.DEFENDER

    boxed_sides = 0
    for dx, dy in DIRECTIONS:
        side = king_position.offset(dx, dy)
        if not side.is_inside_board():
            boxed_sides += 1
            continue
        neighbour = state.piece_at(side)
        if neighbour is not None and neighbour.owner == Side.ATTACKER:
            boxed_sides += 1
    if boxed_sides == len(DIRECTIONS):
        return Side.ATTACKER
    return None


def undo_last_move(state: GameState) -> Optional[MoveRecord]:
    if not state.history:
        return None

    record = state.history.pop()
    piece = record.piece

    piece.moves.pop()
    state.forget_step(record.destination, piece)

    del state.board[record.destination]
    state.board[record.source] = piece

    if piece.is_pawn:
        piece.captures -= len(record.captures)
    state.board.update(record.captures)

    state.current_player = state.current_player.opponent

    if record.winner is not None:
        state.player(record.winner).wins -= 1

    logger.debug("Undid {} {} -> {}", piece.name, record.source, record.destination)
    return record


def _validate_path_clear(state: GameState, source: Position, destination: Position) -> bool:
    dx = (destination.x > source.x) - (destination.x < source.x)
    dy = (destination.y > source.y) - (destination.y < source.y)
    x, y = source.x + dx, source.y + dy
    while True:
        if not is_inside_board(x, y):
            return False
        if Position(x, y) in state.board:
            return False
        if (x, y) == (destination.x, destination.y):
            return True
        x += dx
        y += dy
