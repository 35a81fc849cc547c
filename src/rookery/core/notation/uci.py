"""UCI long-algebraic move input."""

from __future__ import annotations

from rookery.core.board import Board
from rookery.core.enums import PieceType
from rookery.core.move import Move
from rookery.core.rules import resolve_move
from rookery.core.types import parse_square

_PROMO_TYPES: dict[str, PieceType] = {
    "n": PieceType.KNIGHT,
    "b": PieceType.BISHOP,
    "r": PieceType.ROOK,
    "q": PieceType.QUEEN,
}


def parse_uci(board: Board, text: str) -> Move:
    """Resolve a UCI string such as ``e2e4`` or ``e7e8q`` to a legal move.

    Raises:
        ValueError: if *text* is not UCI syntax.
        IllegalMove: if it is well-formed but not legal on *board*.
    """
    text = text.strip().lower()
    if len(text) not in (4, 5):
        raise ValueError(f"Invalid UCI move: {text!r}")
    from_sq = parse_square(text[0:2])
    to_sq = parse_square(text[2:4])
    promotion: PieceType | None = None
    if len(text) == 5:
        promotion = _PROMO_TYPES.get(text[4])
        if promotion is None:
            raise ValueError(f"Invalid UCI promotion piece: {text!r}")
    return resolve_move(board, from_sq, to_sq, promotion)
