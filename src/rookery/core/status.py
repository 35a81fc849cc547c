"""Derived game status."""

from __future__ import annotations

from dataclasses import dataclass

from rookery.core.enums import Color, StatusKind


@dataclass(frozen=True, slots=True)
class GameStatus:
    """Outcome of a position, recomputed from the board on every query.

    ``winner`` is only set for :attr:`StatusKind.CHECKMATE`.
    """

    kind: StatusKind
    winner: Color | None = None

    @classmethod
    def in_progress(cls) -> GameStatus:
        return cls(StatusKind.IN_PROGRESS)

    @classmethod
    def checkmate(cls, winner: Color) -> GameStatus:
        return cls(StatusKind.CHECKMATE, winner)

    @classmethod
    def stalemate(cls) -> GameStatus:
        return cls(StatusKind.STALEMATE)

    @classmethod
    def draw_by_rule(cls) -> GameStatus:
        return cls(StatusKind.DRAW_BY_RULE)

    @property
    def is_terminal(self) -> bool:
        return self.kind != StatusKind.IN_PROGRESS

    def __str__(self) -> str:
        if self.kind == StatusKind.CHECKMATE:
            return f"checkmate, {self.winner} wins"
        return self.kind.name.lower().replace("_", " ")
