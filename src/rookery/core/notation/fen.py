"""FEN reading and writing for :class:`Board` values."""

from __future__ import annotations

from rookery.core.board import Board
from rookery.core.enums import CastlingRights, Color
from rookery.core.errors import InvalidPosition
from rookery.core.move_generator import is_square_attacked
from rookery.core.piece import Piece
from rookery.core.types import Square, make_square, parse_square, rank_of, square_name

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_SIDES: dict[str, Color] = {"w": Color.WHITE, "b": Color.BLACK}

_CASTLING_CHARS: tuple[tuple[str, CastlingRights], ...] = (
    ("K", CastlingRights.WHITE_KINGSIDE),
    ("Q", CastlingRights.WHITE_QUEENSIDE),
    ("k", CastlingRights.BLACK_KINGSIDE),
    ("q", CastlingRights.BLACK_QUEENSIDE),
)

# rank a target square must sit on, keyed by the side that may capture
_EP_TARGET_RANK: dict[Color, int] = {Color.WHITE: 5, Color.BLACK: 2}


def position_from_fen(fen: str) -> Board:
    """Parse a FEN string into a :class:`Board`.

    The two counters may be omitted; they default to ``0`` and ``1``.

    Raises:
        ValueError: if the text is not well-formed FEN.
        InvalidPosition: if the FEN is well-formed but the position cannot
            occur in play (wrong king count, side not to move in check).
    """
    fields = fen.split()
    if len(fields) not in (4, 5, 6):
        raise ValueError(f"Invalid FEN (need 4-6 fields): {fen!r}")

    pieces = _read_placement(fields[0], fen)
    side = _SIDES.get(fields[1])
    if side is None:
        raise ValueError(f"Invalid FEN side-to-move field: {fields[1]!r}")
    castling = _read_castling(fields[2])
    en_passant = _read_en_passant(fields[3], side)
    halfmove = _read_counter(fields, 4, default=0, minimum=0, label="halfmove clock")
    fullmove = _read_counter(fields, 5, default=1, minimum=1, label="fullmove number")

    board = Board(pieces, side, castling, en_passant, halfmove, fullmove)
    if is_square_attacked(board, board.king_square(side.opposite), side):
        raise InvalidPosition(f"Side not to move ({side.opposite}) is in check: {fen!r}")
    return board


def _read_placement(text: str, fen: str) -> dict[Square, Piece]:
    rows = text.split("/")
    if len(rows) != 8:
        raise ValueError(f"Invalid FEN board (must contain 8 ranks): {fen!r}")

    pieces: dict[Square, Piece] = {}
    for rank, row in zip(range(7, -1, -1), rows):
        cells = "".join("." * int(ch) if ch in "12345678" else ch for ch in row)
        if len(cells) != 8 or "." in row:
            raise ValueError(f"Invalid FEN rank width in {row!r}: {fen!r}")
        for file, ch in enumerate(cells):
            if ch != ".":
                pieces[make_square(file, rank)] = Piece.from_char(ch)
    return pieces


def _read_castling(text: str) -> CastlingRights:
    if text == "-":
        return CastlingRights.NONE
    letters = dict(_CASTLING_CHARS)
    if len(set(text)) != len(text) or not set(text) <= letters.keys():
        raise ValueError(f"Invalid FEN castling field: {text!r}")
    rights = CastlingRights.NONE
    for ch in text:
        rights |= letters[ch]
    return rights


def _read_en_passant(text: str, side: Color) -> Square | None:
    if text == "-":
        return None
    target = parse_square(text)
    if rank_of(target) != _EP_TARGET_RANK[side]:
        raise ValueError(f"Invalid FEN en-passant square for side-to-move: {text!r}")
    return target


def _read_counter(
    fields: list[str], index: int, *, default: int, minimum: int, label: str
) -> int:
    if index >= len(fields):
        return default
    text = fields[index]
    if not text.isdigit() or int(text) < minimum:
        raise ValueError(f"Invalid FEN {label}: {text!r}")
    return int(text)


def position_to_fen(board: Board) -> str:
    """Serialise *board* to a full six-field FEN string."""
    rows = []
    for rank in range(7, -1, -1):
        row = ""
        gap = 0
        for file in range(8):
            piece = board[make_square(file, rank)]
            if piece is None:
                gap += 1
                continue
            row += (str(gap) if gap else "") + str(piece)
            gap = 0
        rows.append(row + (str(gap) if gap else ""))

    side = "w" if board.side_to_move == Color.WHITE else "b"
    castling = "".join(ch for ch, right in _CASTLING_CHARS if board.castling & right) or "-"
    en_passant = "-" if board.en_passant is None else square_name(board.en_passant)
    return " ".join(
        (
            "/".join(rows),
            side,
            castling,
            en_passant,
            str(board.halfmove_clock),
            str(board.fullmove_number),
        )
    )
