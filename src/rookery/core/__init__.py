"""Core rules engine: pure chess logic with no external dependencies.

Quick start::

    from rookery.core import apply_move, initial_board, legal_moves, status

    board = initial_board()
    for _ in range(40):
        if status(board).is_terminal:
            break
        move = min(legal_moves(board), key=lambda m: m.sort_key())
        board = apply_move(board, move)
"""

from rookery.core.board import Board, initial_board
from rookery.core.enums import CastlingRights, Color, MoveFlag, PieceType, StatusKind
from rookery.core.errors import ChessError, IllegalMove, InvalidPosition, NoLegalMoves
from rookery.core.move import Move
from rookery.core.move_generator import generate_pseudo_legal, is_square_attacked
from rookery.core.notation import (
    STARTING_FEN,
    parse_uci,
    position_from_fen,
    position_to_fen,
)
from rookery.core.piece import Piece
from rookery.core.rules import (
    apply_move,
    in_check,
    is_checkmate,
    is_stalemate,
    legal_moves,
    legal_moves_from,
    resolve_move,
    status,
)
from rookery.core.status import GameStatus
from rookery.core.types import (
    Square,
    file_of,
    make_square,
    parse_square,
    rank_of,
    square_name,
)

__all__ = [
    # Enums / flags
    "CastlingRights",
    "Color",
    "MoveFlag",
    "PieceType",
    "StatusKind",
    # Types / helpers
    "Square",
    "file_of",
    "make_square",
    "parse_square",
    "rank_of",
    "square_name",
    # Domain objects
    "Board",
    "GameStatus",
    "Move",
    "Piece",
    # Errors
    "ChessError",
    "IllegalMove",
    "InvalidPosition",
    "NoLegalMoves",
    # Rules
    "apply_move",
    "generate_pseudo_legal",
    "in_check",
    "initial_board",
    "is_checkmate",
    "is_square_attacked",
    "is_stalemate",
    "legal_moves",
    "legal_moves_from",
    "resolve_move",
    "status",
    # Notation
    "STARTING_FEN",
    "parse_uci",
    "position_from_fen",
    "position_to_fen",
]
