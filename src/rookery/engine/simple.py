"""Built-in move policies that choose without searching."""

from __future__ import annotations

import logging
import random
from collections.abc import Collection
from typing import TYPE_CHECKING

from rookery.engine.policy import ordered_moves

if TYPE_CHECKING:
    from rookery.core.board import Board
    from rookery.core.move import Move

_LOGGER = logging.getLogger(__name__)


class FirstMovePolicy:
    """Always plays the first move in square order. Useful for reproducible tests."""

    name = "first"

    def choose_move(self, board: Board, legal_moves: Collection[Move]) -> Move:
        move = ordered_moves(legal_moves)[0]
        _LOGGER.debug("%s policy chose %s", self.name, move)
        return move


class RandomPolicy:
    """Chooses uniformly among the legal moves.

    Args:
        seed: Seed for a private :class:`random.Random`; ``None`` seeds from
            the OS.
    """

    __slots__ = ("_rng",)

    name = "random"

    def __init__(self, seed: int | None = None) -> None:
        self._rng = random.Random(seed)

    def choose_move(self, board: Board, legal_moves: Collection[Move]) -> Move:
        move = self._rng.choice(ordered_moves(legal_moves))
        _LOGGER.debug("%s policy chose %s", self.name, move)
        return move


class CapturePreferringPolicy:
    """Chooses uniformly among captures, or among all moves if there are none."""

    __slots__ = ("_rng",)

    name = "capture"

    def __init__(self, seed: int | None = None) -> None:
        self._rng = random.Random(seed)

    def choose_move(self, board: Board, legal_moves: Collection[Move]) -> Move:
        moves = ordered_moves(legal_moves)
        captures = [m for m in moves if m.is_capture]
        move = self._rng.choice(captures or moves)
        _LOGGER.debug(
            "%s policy chose %s (%d captures available)",
            self.name,
            move,
            len(captures),
        )
        return move
