"""GameController: the central orchestrator of a chess game.

Coordinates: Players, GameState.
Emits events via simple callbacks so the UI / tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from rookery.core.enums import Color
from rookery.core.errors import IllegalMove
from rookery.core.move import Move
from rookery.core.status import GameStatus
from rookery.game.interfaces import GamePhase, IGameController, IPlayer
from rookery.game.state import GameState, MoveRecord

if TYPE_CHECKING:
    from rookery.core.board import Board
    from rookery.core.enums import PieceType
    from rookery.core.types import Square

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[MoveRecord, GameState], None]
GameOverCallback = Callable[[GameStatus], None]
PhaseCallback = Callable[[GamePhase], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_phase_changed: list[PhaseCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController(IGameController):
    """Orchestrates a full chess game: validates moves, switches turns,
    prompts engines and notifies listeners.

    Engine moves are never played implicitly: after each move the
    controller only flips the phase to ``THINKING`` and the caller decides
    when to run :meth:`play_engine_move` (or hands the board to a
    background worker and later calls :meth:`submit_move`). Two engines
    therefore cannot spin forever inside one call.

    Thread-safety: methods are designed to be called from a single thread.
    """

    __slots__ = ("_state", "_players", "events")

    def __init__(self) -> None:
        self._state = GameState()
        self._players: dict[Color, IPlayer] = {}
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def current_player(self) -> IPlayer | None:
        return self._players.get(self._state.side_to_move)

    def player(self, color: Color) -> IPlayer | None:
        return self._players.get(color)

    # ── IGameController impl ─────────────────────────────────────────────

    def new_game(
        self,
        white: IPlayer,
        black: IPlayer,
        board: Board | None = None,
    ) -> None:
        if white.color != Color.WHITE or black.color != Color.BLACK:
            raise ValueError("Players must be given in (white, black) order")
        self._players = {Color.WHITE: white, Color.BLACK: black}

        self._state = GameState()
        self._state.setup(board)
        _LOGGER.debug("New game: %s vs %s", white.name, black.name)

        if self._state.is_game_over:
            self._emit_game_over(self._state.status)
            return
        self._prompt_current_player()

    def submit_move(self, move: Move) -> bool:
        if self._state.phase not in (GamePhase.AWAITING_MOVE, GamePhase.THINKING):
            return False
        try:
            record = self._state.apply_move(move)
        except IllegalMove as exc:
            _LOGGER.warning("Rejected move from %s: %s", self._state.side_to_move, exc)
            return False
        self._after_move(record)
        return True

    def submit(
        self,
        from_sq: Square,
        to_sq: Square,
        promotion: PieceType | None = None,
    ) -> bool:
        if self._state.phase not in (GamePhase.AWAITING_MOVE, GamePhase.THINKING):
            return False
        try:
            move = self._state.resolve(from_sq, to_sq, promotion)
        except IllegalMove as exc:
            _LOGGER.warning("Rejected selection: %s", exc)
            return False
        return self.submit_move(move)

    def play_engine_move(self) -> Move | None:
        """Ask the engine on move for a move and apply it.

        Returns ``None`` when a human is to move or the game is over.

        Raises:
            IllegalMove: if the engine broke its contract and returned a
                move outside the legal set.
        """
        cp = self.current_player
        if cp is None or cp.is_human or self._state.phase != GamePhase.THINKING:
            return None
        move = cp.request_move(self._state.board, self._state.legal_moves())
        if move is None:
            return None
        record = self._state.apply_move(move)
        self._after_move(record)
        return move

    # ── Internal helpers ─────────────────────────────────────────────────

    def _after_move(self, record: MoveRecord) -> None:
        self._emit_move(record)
        if self._state.is_game_over:
            self._emit_game_over(self._state.status)
            return
        self._prompt_current_player()

    def _prompt_current_player(self) -> None:
        """Put the phase in line with who is to move."""
        cp = self.current_player
        if cp is None:
            return
        phase = GamePhase.AWAITING_MOVE if cp.is_human else GamePhase.THINKING
        self._state.phase = phase
        self._emit_phase(phase)

    def _emit_move(self, record: MoveRecord) -> None:
        for cb in self.events.on_move:
            cb(record, self._state)

    def _emit_game_over(self, status: GameStatus) -> None:
        self._state.phase = GamePhase.GAME_OVER
        self._emit_phase(GamePhase.GAME_OVER)
        for cb in self.events.on_game_over:
            cb(status)

    def _emit_phase(self, phase: GamePhase) -> None:
        for cb in self.events.on_phase_changed:
            cb(phase)
