"""Abstract interfaces for the game layer.

Follows Dependency Inversion: the high-level GameController depends on
these ABCs, not on concrete player implementations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Collection
from enum import IntEnum, auto
from typing import TYPE_CHECKING

from rookery.core.enums import Color

if TYPE_CHECKING:
    from rookery.core.board import Board
    from rookery.core.enums import PieceType
    from rookery.core.move import Move
    from rookery.core.types import Square


# ── Game phase FSM states ────────────────────────────────────────────────────


class GamePhase(IntEnum):
    """Finite-state-machine states for a chess game."""

    NOT_STARTED = auto()
    AWAITING_MOVE = auto()  # a human is to move
    THINKING = auto()  # an engine is to move
    GAME_OVER = auto()


# ── Abstract interfaces ─────────────────────────────────────────────────────


class IPlayer(ABC):
    """Interface for a game participant (human or engine)."""

    @property
    @abstractmethod
    def color(self) -> Color: ...

    @property
    @abstractmethod
    def name(self) -> str: ...

    @property
    @abstractmethod
    def is_human(self) -> bool: ...

    @abstractmethod
    def request_move(self, board: Board, legal_moves: Collection[Move]) -> Move | None:
        """Ask for a move.

        Engines return their choice. Humans return ``None``: their moves
        arrive through the controller once the UI confirms them.
        """

    @abstractmethod
    def cancel(self) -> None:
        """Abandon an outstanding request (no-op for humans)."""


class IGameController(ABC):
    """Interface for the game orchestrator."""

    @abstractmethod
    def new_game(
        self,
        white: IPlayer,
        black: IPlayer,
        board: Board | None = None,
    ) -> None:
        """Set up a new game."""

    @abstractmethod
    def submit_move(self, move: Move) -> bool:
        """Submit a move. Returns True if legal and applied."""

    @abstractmethod
    def submit(
        self,
        from_sq: Square,
        to_sq: Square,
        promotion: PieceType | None = None,
    ) -> bool:
        """Submit a UI selection. Returns True if it resolved and applied."""

    @abstractmethod
    def play_engine_move(self) -> Move | None:
        """Let the engine on move play once. Returns the applied move."""
