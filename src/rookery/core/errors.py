"""Error taxonomy of the rules engine."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rookery.core.board import Board
    from rookery.core.move import Move


class ChessError(Exception):
    """Base class for all rules-engine errors."""


class IllegalMove(ChessError, ValueError):
    """A move was rejected because it is not in the current legal set.

    The board the move was tried against is attached unchanged so callers
    can report or retry.
    """

    def __init__(
        self,
        move: Move | None,
        board: Board | None = None,
        reason: str = "not a legal move",
    ) -> None:
        self.move = move
        self.board = board
        self.reason = reason
        super().__init__(f"Illegal move {move}: {reason}")


class NoLegalMoves(ChessError, RuntimeError):
    """A move policy was asked to choose from an empty set.

    Callers must check the game status before prompting a policy, so this
    is a sequencing bug rather than a game condition.
    """


class InvalidPosition(ChessError, ValueError):
    """A position violates a structural invariant (e.g. a missing king)."""
