"""Shared move-policy models and protocol."""

from __future__ import annotations

from collections.abc import Collection
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from rookery.core.errors import NoLegalMoves

if TYPE_CHECKING:
    from rookery.core.board import Board
    from rookery.core.move import Move


@dataclass(slots=True, frozen=True)
class PolicyLimits:
    """Construction options shared by the built-in policies."""

    seed: int | None = None


class MovePolicy(Protocol):
    """Protocol for anything that picks a move from a legal set.

    Implementations must return a member of *legal_moves* and raise
    :class:`NoLegalMoves` when it is empty.
    """

    name: str

    def choose_move(self, board: Board, legal_moves: Collection[Move]) -> Move: ...


def ordered_moves(legal_moves: Collection[Move]) -> list[Move]:
    """*legal_moves* in a stable order, so seeded choices are reproducible."""
    if not legal_moves:
        raise NoLegalMoves("Move policy invoked with no legal moves")
    return sorted(legal_moves, key=lambda m: m.sort_key())
