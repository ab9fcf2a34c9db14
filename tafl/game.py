from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional, Union

from loguru import logger

from tafl.config import GameConfig
from tafl.core import (
    BOARD_SIZE,
    GameLogger,
    GameState,
    MoveRecord,
    Piece,
    Player,
    Position,
    ReportFileLogger,
    Side,
    apply_move,
    check_winner,
    initialize_game_state,
    undo_last_move,
)


class TaflGame:
    """Caller-owned game: one board, one history, one turn flag and two players.

    ``game_logger`` receives the statistics of every game-ending move. It
    defaults to a :class:`GameLogger` printing to stdout.
    """

    def __init__(
        self,
        *,
        layout_path: Optional[Union[str, Path]] = None,
        game_logger: Optional[GameLogger] = None,
    ) -> None:
        self._layout_path = layout_path
        self._game_logger = game_logger if game_logger is not None else GameLogger()
        self._state = initialize_game_state(layout_path)
        self._players = self._state.players

    @classmethod
    def from_config(cls, config: GameConfig) -> "TaflGame":
        game_logger = None
        if config.report_path:
            game_logger = ReportFileLogger(config.report_path, config.report_format)
        return cls(layout_path=config.layout_path, game_logger=game_logger)

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def history(self) -> List[MoveRecord]:
        return self._state.history

    def move(self, source: Position, destination: Position) -> bool:
        if self.is_game_finished():
            return False
        record = apply_move(self._state, source, destination)
        if record is None:
            return False
        if record.winner is not None:
            winner = self._state.player(record.winner)
            logger.info("{} wins after {} moves", winner.side.name, len(self._state.history))
            self._game_logger.log_game(winner, self.position_steps(), self._state.known_pieces)
        return True

    def undo_last_move(self) -> None:
        undo_last_move(self._state)

    def reset(self) -> None:
        self._state = initialize_game_state(self._layout_path)
        self._state.players = self._players
        logger.info("Game reset")

    def position_steps(self) -> Dict[Position, List[Piece]]:
        return {position: list(self._state.steps.get(position, [])) for position in self._state.known_positions}

    def get_piece_at_position(self, position: Position) -> Optional[Piece]:
        return self._state.piece_at(position)

    def get_first_player(self) -> Player:
        return self._players[Side.DEFENDER]

    def get_second_player(self) -> Player:
        return self._players[Side.ATTACKER]

    def get_board_size(self) -> int:
        return BOARD_SIZE

    def winner(self) -> Optional[Player]:
        side = check_winner(self._state)
        return self._players[side] if side is not None else None

    def is_game_finished(self) -> bool:
        return check_winner(self._state) is not None

    def is_second_player_turn(self) -> bool:
        return self._state.current_player == Side.ATTACKER

    def __repr__(self) -> str:
        return repr(self._state)
