"""Move value object (UCI-style representation)."""

from __future__ import annotations

from dataclasses import dataclass

from rookery.core.enums import MoveFlag, PieceType
from rookery.core.types import Square, square_name

_PROMO_CHARS: dict[PieceType, str] = {
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
}


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable value object representing a single chess move.

    ``flag`` classifies the move for board updates; ``promotion`` is set on
    every move that reaches the last rank with a pawn, captures included.
    """

    from_sq: Square
    to_sq: Square
    flag: MoveFlag = MoveFlag.NORMAL
    promotion: PieceType | None = None

    def __str__(self) -> str:
        base = f"{square_name(self.from_sq)}{square_name(self.to_sq)}"
        if self.promotion is not None:
            base += _PROMO_CHARS.get(self.promotion, self.promotion.name[0].lower())
        return base

    @property
    def uci(self) -> str:
        """UCI long-algebraic notation."""
        return str(self)

    @property
    def is_capture(self) -> bool:
        return self.flag.is_capture

    @property
    def is_castle(self) -> bool:
        return self.flag.is_castle

    def sort_key(self) -> tuple[int, int, int, int]:
        """Stable ordering key (origin, destination, flag, promotion)."""
        promo = int(self.promotion) if self.promotion is not None else 0
        return (self.from_sq, self.to_sq, int(self.flag), promo)
