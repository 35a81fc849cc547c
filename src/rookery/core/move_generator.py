"""Pseudo-legal move generation + attack detection."""

from __future__ import annotations

from collections.abc import Callable, Iterator

from rookery.core.board import Board
from rookery.core.enums import PROMOTION_TYPES, CastlingRights, Color, MoveFlag, PieceType
from rookery.core.move import Move
from rookery.core.piece import Piece
from rookery.core.types import Square, file_of, make_square, offset_square, rank_of

KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS

KING_FILE = 4

MoveRule = Callable[[Board, Square, Color], Iterator[Move]]


# -- Precomputed lookup tables ---------------------------------------------


def _build_targets(
    offsets: tuple[tuple[int, int], ...],
) -> tuple[tuple[Square, ...], ...]:
    targets: list[tuple[Square, ...]] = []
    for sq in range(64):
        moves = (offset_square(sq, df, dr) for df, dr in offsets)
        targets.append(tuple(to_sq for to_sq in moves if to_sq is not None))
    return tuple(targets)


def _build_rays(
    directions: tuple[tuple[int, int], ...],
) -> tuple[tuple[tuple[Square, ...], ...], ...]:
    rays_per_square: list[tuple[tuple[Square, ...], ...]] = []
    for sq in range(64):
        square_rays: list[tuple[Square, ...]] = []
        for df, dr in directions:
            ray: list[Square] = []
            to_sq = offset_square(sq, df, dr)
            while to_sq is not None:
                ray.append(to_sq)
                to_sq = offset_square(to_sq, df, dr)
            square_rays.append(tuple(ray))
        rays_per_square.append(tuple(square_rays))
    return tuple(rays_per_square)


_KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
_KING_TARGETS = _build_targets(KING_OFFSETS)

_BISHOP_RAYS = _build_rays(BISHOP_DIRS)
_ROOK_RAYS = _build_rays(ROOK_DIRS)
_QUEEN_RAYS = _build_rays(QUEEN_DIRS)


# -- Per-kind movement rules -----------------------------------------------


def _pawn_moves(board: Board, sq: Square, color: Color) -> Iterator[Move]:
    forward = color.pawn_direction
    start_rank = 1 if color == Color.WHITE else 6
    last_rank = 7 if color == Color.WHITE else 0

    one_step = offset_square(sq, 0, forward)
    if one_step is not None and board.is_empty(one_step):
        if rank_of(one_step) == last_rank:
            for pt in PROMOTION_TYPES:
                yield Move(sq, one_step, MoveFlag.NORMAL, pt)
        else:
            yield Move(sq, one_step)
            if rank_of(sq) == start_rank:
                two_step = one_step + 8 * forward
                if board.is_empty(two_step):
                    yield Move(sq, two_step, MoveFlag.DOUBLE_PAWN)

    for d_file in (-1, 1):
        cap_sq = offset_square(sq, d_file, forward)
        if cap_sq is None:
            continue
        target = board[cap_sq]
        if target is not None:
            if target.color == color:
                continue
            if rank_of(cap_sq) == last_rank:
                for pt in PROMOTION_TYPES:
                    yield Move(sq, cap_sq, MoveFlag.CAPTURE, pt)
            else:
                yield Move(sq, cap_sq, MoveFlag.CAPTURE)
        elif cap_sq == board.en_passant:
            # The victim sits beside the capturing pawn, not on the target.
            victim = board[make_square(file_of(cap_sq), rank_of(sq))]
            if victim == Piece(color.opposite, PieceType.PAWN):
                yield Move(sq, cap_sq, MoveFlag.EN_PASSANT)


def _step_moves(
    board: Board,
    sq: Square,
    color: Color,
    targets: tuple[tuple[Square, ...], ...],
) -> Iterator[Move]:
    for to_sq in targets[sq]:
        target = board[to_sq]
        if target is None:
            yield Move(sq, to_sq)
        elif target.color != color:
            yield Move(sq, to_sq, MoveFlag.CAPTURE)


def _sliding_moves(
    board: Board,
    sq: Square,
    color: Color,
    rays: tuple[tuple[tuple[Square, ...], ...], ...],
) -> Iterator[Move]:
    for ray in rays[sq]:
        for to_sq in ray:
            target = board[to_sq]
            if target is None:
                yield Move(sq, to_sq)
                continue
            if target.color != color:
                yield Move(sq, to_sq, MoveFlag.CAPTURE)
            break


def _knight_moves(board: Board, sq: Square, color: Color) -> Iterator[Move]:
    return _step_moves(board, sq, color, _KNIGHT_TARGETS)


def _bishop_moves(board: Board, sq: Square, color: Color) -> Iterator[Move]:
    return _sliding_moves(board, sq, color, _BISHOP_RAYS)


def _rook_moves(board: Board, sq: Square, color: Color) -> Iterator[Move]:
    return _sliding_moves(board, sq, color, _ROOK_RAYS)


def _queen_moves(board: Board, sq: Square, color: Color) -> Iterator[Move]:
    return _sliding_moves(board, sq, color, _QUEEN_RAYS)


def _king_moves(board: Board, sq: Square, color: Color) -> Iterator[Move]:
    yield from _step_moves(board, sq, color, _KING_TARGETS)
    yield from _castling_candidates(board, sq, color)


def _castling_candidates(board: Board, king_sq: Square, color: Color) -> Iterator[Move]:
    """Castles allowed by rights and an empty path.

    Attacks on the transit squares are checked by the legality filter;
    only the king's current square is checked here.
    """
    home = color.home_rank
    if king_sq != make_square(KING_FILE, home):
        return
    rights = board.castling
    if not rights & CastlingRights.both(color):
        return
    if is_square_attacked(board, king_sq, color.opposite):
        return

    rook = Piece(color, PieceType.ROOK)
    if rights & CastlingRights.kingside(color) and board[make_square(7, home)] == rook:
        if all(board.is_empty(make_square(f, home)) for f in (5, 6)):
            yield Move(king_sq, make_square(6, home), MoveFlag.CASTLE_KINGSIDE)

    if rights & CastlingRights.queenside(color) and board[make_square(0, home)] == rook:
        if all(board.is_empty(make_square(f, home)) for f in (1, 2, 3)):
            yield Move(king_sq, make_square(2, home), MoveFlag.CASTLE_QUEENSIDE)


_MOVE_RULES: dict[PieceType, MoveRule] = {
    PieceType.PAWN: _pawn_moves,
    PieceType.KNIGHT: _knight_moves,
    PieceType.BISHOP: _bishop_moves,
    PieceType.ROOK: _rook_moves,
    PieceType.QUEEN: _queen_moves,
    PieceType.KING: _king_moves,
}


# -- Public API -------------------------------------------------------------


def pseudo_legal_moves_from(board: Board, sq: Square) -> Iterator[Move]:
    """Pseudo-legal moves of the piece on *sq*, if it belongs to the side to move."""
    piece = board[sq]
    if piece is None or piece.color != board.side_to_move:
        return iter(())
    return _MOVE_RULES[piece.piece_type](board, sq, piece.color)


def generate_pseudo_legal(board: Board) -> frozenset[Move]:
    """All pseudo-legal moves for the side to move (may leave own king in check)."""
    color = board.side_to_move
    moves: set[Move] = set()
    for sq, piece in board.items():
        if piece.color == color:
            moves.update(_MOVE_RULES[piece.piece_type](board, sq, color))
    return frozenset(moves)


def is_square_attacked(board: Board, sq: Square, by_color: Color) -> bool:
    """Is *sq* attacked by any piece of *by_color*?

    Pawn pushes and castling never attack; everything else attacks exactly
    the squares it could capture on.
    """
    pawn = Piece(by_color, PieceType.PAWN)
    for d_file in (-1, 1):
        from_sq = offset_square(sq, d_file, -by_color.pawn_direction)
        if from_sq is not None and board[from_sq] == pawn:
            return True

    knight = Piece(by_color, PieceType.KNIGHT)
    if any(board[from_sq] == knight for from_sq in _KNIGHT_TARGETS[sq]):
        return True

    king = Piece(by_color, PieceType.KING)
    if any(board[from_sq] == king for from_sq in _KING_TARGETS[sq]):
        return True

    if _ray_hits(board, _BISHOP_RAYS[sq], by_color, PieceType.BISHOP):
        return True
    return _ray_hits(board, _ROOK_RAYS[sq], by_color, PieceType.ROOK)


def _ray_hits(
    board: Board,
    rays: tuple[tuple[Square, ...], ...],
    by_color: Color,
    slider: PieceType,
) -> bool:
    for ray in rays:
        for to_sq in ray:
            piece = board[to_sq]
            if piece is None:
                continue
            if piece.color == by_color and piece.piece_type in (slider, PieceType.QUEEN):
                return True
            break
    return False
