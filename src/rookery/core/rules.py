"""Legality filter and the move-application transition.

Every function here is pure: boards go in, new boards or move sets come
out, and nothing is mutated. Probing a candidate move builds a new
:class:`Board` instead of making and unmaking it in place.
"""

from __future__ import annotations

from rookery.core.board import Board
from rookery.core.enums import PROMOTION_TYPES, CastlingRights, Color, MoveFlag, PieceType
from rookery.core.errors import IllegalMove
from rookery.core.move import Move
from rookery.core.move_generator import (
    KING_FILE,
    generate_pseudo_legal,
    is_square_attacked,
    pseudo_legal_moves_from,
)
from rookery.core.piece import Piece
from rookery.core.status import GameStatus
from rookery.core.types import A1, A8, H1, H8, Square, file_of, make_square, rank_of

_ROOK_CORNERS: dict[Square, CastlingRights] = {
    A1: CastlingRights.WHITE_QUEENSIDE,
    H1: CastlingRights.WHITE_KINGSIDE,
    A8: CastlingRights.BLACK_QUEENSIDE,
    H8: CastlingRights.BLACK_KINGSIDE,
}

# file the rook leaves -> file it lands on
_CASTLE_ROOK_FILES: dict[MoveFlag, tuple[int, int]] = {
    MoveFlag.CASTLE_KINGSIDE: (7, 5),
    MoveFlag.CASTLE_QUEENSIDE: (0, 3),
}

# files the king occupies while castling, start and landing included
_CASTLE_KING_PATH: dict[MoveFlag, tuple[int, ...]] = {
    MoveFlag.CASTLE_KINGSIDE: (KING_FILE, 5, 6),
    MoveFlag.CASTLE_QUEENSIDE: (KING_FILE, 3, 2),
}


# ── Checks ──────────────────────────────────────────────────────────────────


def in_check(board: Board, color: Color) -> bool:
    """Is *color*'s king attacked by the opponent?"""
    return is_square_attacked(board, board.king_square(color), color.opposite)


# ── Legality filter ─────────────────────────────────────────────────────────


def _castle_path_safe(board: Board, move: Move) -> bool:
    rank = rank_of(move.from_sq)
    opponent = board.side_to_move.opposite
    return not any(
        is_square_attacked(board, make_square(f, rank), opponent)
        for f in _CASTLE_KING_PATH[move.flag]
    )


def _is_legal(board: Board, move: Move) -> bool:
    if move.flag.is_castle and not _castle_path_safe(board, move):
        return False
    return not in_check(_play(board, move), board.side_to_move)


def legal_moves(board: Board) -> frozenset[Move]:
    """All strictly legal moves for the side to move."""
    return frozenset(m for m in generate_pseudo_legal(board) if _is_legal(board, m))


def legal_moves_from(board: Board, sq: Square) -> frozenset[Move]:
    """Legal moves whose origin is *sq* (empty for an enemy or empty square)."""
    return frozenset(m for m in pseudo_legal_moves_from(board, sq) if _is_legal(board, m))


def is_checkmate(board: Board) -> bool:
    return in_check(board, board.side_to_move) and not legal_moves(board)


def is_stalemate(board: Board) -> bool:
    return not in_check(board, board.side_to_move) and not legal_moves(board)


def status(board: Board) -> GameStatus:
    """Derive the game status of *board*.

    Draws by repetition, the fifty-move rule or insufficient material are
    not detected; :meth:`GameStatus.draw_by_rule` is reserved for them.
    """
    if legal_moves(board):
        return GameStatus.in_progress()
    mover = board.side_to_move
    if in_check(board, mover):
        return GameStatus.checkmate(mover.opposite)
    return GameStatus.stalemate()


# ── Transition ──────────────────────────────────────────────────────────────


def apply_move(board: Board, move: Move) -> Board:
    """Return the position after *move*.

    Raises:
        IllegalMove: if *move* is not in ``legal_moves(board)``. *board*
            itself is immutable and therefore untouched.
    """
    if move not in legal_moves(board):
        raise IllegalMove(move, board)
    return _play(board, move)


def _play(board: Board, move: Move) -> Board:
    """Apply a pseudo-legal *move* without checking king safety."""
    pieces = board.placement()
    piece = pieces.pop(move.from_sq)
    color = piece.color

    captured = pieces.pop(move.to_sq, None)
    if move.flag == MoveFlag.EN_PASSANT:
        captured = pieces.pop(make_square(file_of(move.to_sq), rank_of(move.from_sq)))

    if move.promotion is not None:
        pieces[move.to_sq] = Piece(color, move.promotion)
    else:
        pieces[move.to_sq] = piece

    if move.flag.is_castle:
        rank = rank_of(move.from_sq)
        rook_from, rook_to = _CASTLE_ROOK_FILES[move.flag]
        pieces[make_square(rook_to, rank)] = pieces.pop(make_square(rook_from, rank))

    en_passant: Square | None = None
    if move.flag == MoveFlag.DOUBLE_PAWN:
        en_passant = make_square(
            file_of(move.from_sq),
            (rank_of(move.from_sq) + rank_of(move.to_sq)) // 2,
        )

    castling = board.castling
    if piece.piece_type == PieceType.KING:
        castling &= ~CastlingRights.both(color)
    for sq in (move.from_sq, move.to_sq):
        if sq in _ROOK_CORNERS:
            castling &= ~_ROOK_CORNERS[sq]

    if piece.piece_type == PieceType.PAWN or captured is not None:
        halfmove_clock = 0
    else:
        halfmove_clock = board.halfmove_clock + 1

    fullmove_number = board.fullmove_number
    if color == Color.BLACK:
        fullmove_number += 1

    return Board(
        pieces,
        color.opposite,
        castling,
        en_passant,
        halfmove_clock,
        fullmove_number,
    )


# ── Move resolution ─────────────────────────────────────────────────────────


def resolve_move(
    board: Board,
    from_sq: Square,
    to_sq: Square,
    promotion: PieceType | None = None,
) -> Move:
    """Match a UI-selected (origin, destination, promotion) to a legal move.

    Raises:
        IllegalMove: if nothing matches, the move promotes and no
            promotion kind was chosen, or the kind is not Q, R, B or N.
    """
    requested = Move(from_sq, to_sq, promotion=promotion)
    if promotion is not None and promotion not in PROMOTION_TYPES:
        raise IllegalMove(requested, board, "invalid promotion piece")
    candidates = [m for m in legal_moves_from(board, from_sq) if m.to_sq == to_sq]
    if not candidates:
        raise IllegalMove(requested, board)
    for move in candidates:
        if move.promotion == promotion:
            return move
    if promotion is None:
        raise IllegalMove(requested, board, "promotion piece required")
    raise IllegalMove(requested, board, "invalid promotion piece")
