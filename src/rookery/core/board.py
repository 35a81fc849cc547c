"""Board - an immutable chess position value."""

from __future__ import annotations

from collections.abc import Iterator, Mapping

from rookery.core.enums import CastlingRights, Color, PieceType
from rookery.core.errors import InvalidPosition
from rookery.core.piece import Piece
from rookery.core.types import Square, is_valid_square, make_square, rank_of, square_name

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


class Board:
    """Piece placement plus side to move, castling rights, en passant and clocks.

    A board is a value: it is never changed after construction. New
    positions are produced by :func:`rookery.core.rules.apply_move`, which
    returns a fresh instance.

    Raises:
        InvalidPosition: if a colour does not have exactly one king or a
            pawn stands on a back rank.
    """

    __slots__ = (
        "_pieces",
        "_kings",
        "_side_to_move",
        "_castling",
        "_en_passant",
        "_halfmove_clock",
        "_fullmove_number",
        "_hash",
    )

    def __init__(
        self,
        pieces: Mapping[Square, Piece] | None = None,
        side_to_move: Color = Color.WHITE,
        castling: CastlingRights = CastlingRights.NONE,
        en_passant: Square | None = None,
        halfmove_clock: int = 0,
        fullmove_number: int = 1,
    ) -> None:
        self._pieces: dict[Square, Piece] = dict(pieces or {})
        self._side_to_move = Color(side_to_move)
        self._castling = CastlingRights(castling)
        self._en_passant = en_passant
        self._halfmove_clock = halfmove_clock
        self._fullmove_number = fullmove_number
        self._kings = self._validate()
        self._hash: int | None = None

    def _validate(self) -> tuple[Square, Square]:
        kings: list[list[Square]] = [[], []]
        for sq, piece in self._pieces.items():
            if not is_valid_square(sq):
                raise InvalidPosition(f"Square index out of range: {sq}")
            if piece.piece_type == PieceType.KING:
                kings[int(piece.color)].append(sq)
            elif piece.piece_type == PieceType.PAWN and rank_of(sq) in (0, 7):
                raise InvalidPosition(f"Pawn on back rank at {square_name(sq)}")
        for color in Color:
            count = len(kings[int(color)])
            if count != 1:
                raise InvalidPosition(f"Expected one {color} king, found {count}")
        if self._en_passant is not None and not is_valid_square(self._en_passant):
            raise InvalidPosition(f"En-passant square out of range: {self._en_passant}")
        if self._halfmove_clock < 0 or self._fullmove_number < 1:
            raise InvalidPosition("Move counters out of range")
        return (kings[0][0], kings[1][0])

    # -- State --------------------------------------------------------------

    @property
    def side_to_move(self) -> Color:
        return self._side_to_move

    @property
    def castling(self) -> CastlingRights:
        return self._castling

    @property
    def en_passant(self) -> Square | None:
        return self._en_passant

    @property
    def halfmove_clock(self) -> int:
        return self._halfmove_clock

    @property
    def fullmove_number(self) -> int:
        return self._fullmove_number

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._pieces.get(sq)

    def is_empty(self, sq: Square) -> bool:
        return sq not in self._pieces

    def items(self) -> Iterator[tuple[Square, Piece]]:
        """Occupied squares with their pieces, in square order."""
        for sq in sorted(self._pieces):
            yield sq, self._pieces[sq]

    # -- Query helpers ------------------------------------------------------

    def pieces(self, color: Color, piece_type: PieceType) -> list[Square]:
        """Squares occupied by *color*'s *piece_type*."""
        return sorted(
            sq
            for sq, p in self._pieces.items()
            if p.color == color and p.piece_type == piece_type
        )

    def all_pieces(self, color: Color) -> list[Square]:
        """All squares occupied by *color*."""
        return sorted(sq for sq, p in self._pieces.items() if p.color == color)

    def piece_count(self, color: Color) -> int:
        return sum(1 for p in self._pieces.values() if p.color == color)

    def king_square(self, color: Color) -> Square:
        """Return the single king square for *color*."""
        return self._kings[int(color)]

    # -- Derivation ---------------------------------------------------------

    def placement(self) -> dict[Square, Piece]:
        """A fresh, caller-owned copy of the piece placement."""
        return dict(self._pieces)

    def with_side_to_move(self, color: Color) -> Board:
        """Same placement with *color* to move (used for attack probing)."""
        if color == self._side_to_move:
            return self
        return Board(
            self._pieces,
            color,
            self._castling,
            None,
            self._halfmove_clock,
            self._fullmove_number,
        )

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        pieces: dict[Square, Piece] = {}
        for f, pt in enumerate(_BACK_RANK):
            pieces[make_square(f, 0)] = Piece(Color.WHITE, pt)
            pieces[make_square(f, 1)] = Piece(Color.WHITE, PieceType.PAWN)
            pieces[make_square(f, 6)] = Piece(Color.BLACK, PieceType.PAWN)
            pieces[make_square(f, 7)] = Piece(Color.BLACK, pt)
        return cls(pieces, Color.WHITE, CastlingRights.ALL, None, 0, 1)

    # -- Dunder helpers -----------------------------------------------------

    def _key(self) -> tuple[object, ...]:
        return (
            frozenset(self._pieces.items()),
            self._side_to_move,
            self._castling,
            self._en_passant,
            self._halfmove_clock,
            self._fullmove_number,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        if self._hash is None:
            self._hash = hash(self._key())
        return self._hash

    def __repr__(self) -> str:
        rows: list[str] = []
        for rank in range(7, -1, -1):
            row = []
            for file in range(8):
                p = self[make_square(file, rank)]
                row.append(str(p) if p else ".")
            rows.append(f"{rank + 1} {' '.join(row)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)


def initial_board() -> Board:
    """Standard starting position: white to move, all rights, counters 0/1."""
    return Board.initial()
