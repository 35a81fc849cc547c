"""Notation package: FEN setup and UCI move input."""

from rookery.core.notation.fen import STARTING_FEN, position_from_fen, position_to_fen
from rookery.core.notation.uci import parse_uci

__all__ = [
    "STARTING_FEN",
    "parse_uci",
    "position_from_fen",
    "position_to_fen",
]
