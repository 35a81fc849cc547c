"""Game state machine and sole owner of the live board."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from rookery.core import rules
from rookery.core.board import Board, initial_board
from rookery.core.enums import Color
from rookery.core.status import GameStatus
from rookery.game.interfaces import GamePhase

if TYPE_CHECKING:
    from rookery.core.enums import PieceType
    from rookery.core.move import Move
    from rookery.core.types import Square

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """A single entry in the move history."""

    move: Move
    board_before: Board
    board_after: Board
    was_check: bool = False
    was_capture: bool = False

    @property
    def uci(self) -> str:
        return str(self.move)


class GameState:
    """Owns the current board and replaces it only through :meth:`apply_move`.

    Consumers read the board (an immutable value), the legal moves and the
    derived status; there is no other way to change the position.
    Pure data and logic; no threading or UI.
    """

    __slots__ = ("_board", "_start_board", "_history", "phase")

    def __init__(self, board: Board | None = None) -> None:
        self._start_board = board if board is not None else initial_board()
        self._board = self._start_board
        self._history: list[MoveRecord] = []
        self.phase = GamePhase.NOT_STARTED

    # ── Initialisation ───────────────────────────────────────────────────

    def setup(self, board: Board | None = None) -> None:
        """Initialise (or reset) the game, from the start position by default."""
        self._start_board = board if board is not None else initial_board()
        self._board = self._start_board
        self._history.clear()
        self.phase = GamePhase.AWAITING_MOVE
        if self.status.is_terminal:
            self.phase = GamePhase.GAME_OVER

    # ── Move application ─────────────────────────────────────────────────

    def apply_move(self, move: Move) -> MoveRecord:
        """Apply *move* and return its history record.

        Raises:
            IllegalMove: if *move* is not legal here (including after the
                game has ended). Nothing changes in that case.
        """
        before = self._board
        after = rules.apply_move(before, move)

        mover = before.side_to_move
        opponent = mover.opposite
        record = MoveRecord(
            move=move,
            board_before=before,
            board_after=after,
            was_check=rules.in_check(after, after.side_to_move),
            was_capture=after.piece_count(opponent) < before.piece_count(opponent),
        )
        self._board = after
        self._history.append(record)
        _LOGGER.debug("%s played %s", mover, move)

        status = self.status
        if status.is_terminal:
            self.phase = GamePhase.GAME_OVER
            _LOGGER.info("Game over after %d plies: %s", self.ply_count, status)
        return record

    def resolve(
        self,
        from_sq: Square,
        to_sq: Square,
        promotion: PieceType | None = None,
    ) -> Move:
        """Match a UI selection against the current legal moves."""
        return rules.resolve_move(self._board, from_sq, to_sq, promotion)

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def board(self) -> Board:
        return self._board

    @property
    def start_board(self) -> Board:
        return self._start_board

    @property
    def side_to_move(self) -> Color:
        return self._board.side_to_move

    @property
    def status(self) -> GameStatus:
        """Status derived from the current board."""
        return rules.status(self._board)

    @property
    def is_game_over(self) -> bool:
        return self.status.is_terminal

    @property
    def move_history(self) -> tuple[MoveRecord, ...]:
        return tuple(self._history)

    @property
    def last_move(self) -> Move | None:
        return self._history[-1].move if self._history else None

    @property
    def ply_count(self) -> int:
        """Number of half-moves played."""
        return len(self._history)

    def legal_moves(self) -> frozenset[Move]:
        """Legal moves in the current position."""
        return rules.legal_moves(self._board)

    def legal_moves_from(self, sq: Square) -> frozenset[Move]:
        """Legal moves of the piece on *sq*, for highlighting destinations."""
        return rules.legal_moves_from(self._board, sq)
