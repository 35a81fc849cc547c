"""Move generation: perft counts plus per-piece movement rules.

Perft reference values: https://www.chessprogramming.org/Perft_Results
"""

import pytest

from rookery.core.board import Board
from rookery.core.enums import Color, MoveFlag, PieceType
from rookery.core.move import Move
from rookery.core.move_generator import (
    generate_pseudo_legal,
    is_square_attacked,
    pseudo_legal_moves_from,
)
from rookery.core.notation import STARTING_FEN, position_from_fen
from rookery.core.rules import apply_move, in_check, legal_moves
from rookery.core.types import parse_square


def perft(board: Board, depth: int) -> int:
    """Count leaf nodes at *depth*, building a new board for every move."""
    moves = legal_moves(board)
    if depth == 1:
        return len(moves)
    return sum(perft(apply_move(board, move), depth - 1) for move in moves)


def _moves_from(fen: str, square: str) -> set[Move]:
    return set(pseudo_legal_moves_from(position_from_fen(fen), parse_square(square)))


def _targets(fen: str, square: str) -> set[str]:
    return {str(m)[2:4] for m in _moves_from(fen, square)}


# ── Starting position ────────────────────────────────────────────────────────


class TestPerftStarting:
    def test_depth_1(self) -> None:
        assert perft(position_from_fen(STARTING_FEN), 1) == 20

    def test_depth_2(self) -> None:
        assert perft(position_from_fen(STARTING_FEN), 2) == 400

    def test_depth_3(self) -> None:
        assert perft(position_from_fen(STARTING_FEN), 3) == 8_902

    @pytest.mark.slow
    def test_depth_4(self) -> None:
        assert perft(position_from_fen(STARTING_FEN), 4) == 197_281


# ── Kiwipete (rich in tactics: castling, ep, promotions) ─────────────────────

KIWIPETE = "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1"


class TestPerftKiwipete:
    def test_depth_1(self) -> None:
        assert perft(position_from_fen(KIWIPETE), 1) == 48

    def test_depth_2(self) -> None:
        assert perft(position_from_fen(KIWIPETE), 2) == 2_039

    @pytest.mark.slow
    def test_depth_3(self) -> None:
        assert perft(position_from_fen(KIWIPETE), 3) == 97_862


# ── Position 3: en-passant + promotion edge cases ───────────────────────────

POS3 = "8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8 w - - 0 1"


class TestPerftPos3:
    def test_depth_1(self) -> None:
        assert perft(position_from_fen(POS3), 1) == 14

    def test_depth_2(self) -> None:
        assert perft(position_from_fen(POS3), 2) == 191

    def test_depth_3(self) -> None:
        assert perft(position_from_fen(POS3), 3) == 2_812


# ── Position 4: mirrored, many promotions ────────────────────────────────────

POS4 = "r3k2r/Pppp1ppp/1b3nbN/nP6/BBP1P3/q4N2/Pp1P2PP/R2Q1RK1 w kq - 0 1"


class TestPerftPos4:
    def test_depth_1(self) -> None:
        assert perft(position_from_fen(POS4), 1) == 6

    def test_depth_2(self) -> None:
        assert perft(position_from_fen(POS4), 2) == 264

    @pytest.mark.slow
    def test_depth_3(self) -> None:
        assert perft(position_from_fen(POS4), 3) == 9_467


# ── Position 5 ───────────────────────────────────────────────────────────────

POS5 = "rnbq1k1r/pp1Pbppp/2p5/8/2B5/8/PPP1NnPP/RNBQK2R w KQ - 1 8"


class TestPerftPos5:
    def test_depth_1(self) -> None:
        assert perft(position_from_fen(POS5), 1) == 44

    def test_depth_2(self) -> None:
        assert perft(position_from_fen(POS5), 2) == 1_486

    @pytest.mark.slow
    def test_depth_3(self) -> None:
        assert perft(position_from_fen(POS5), 3) == 62_379


# ── Pawns ────────────────────────────────────────────────────────────────────


class TestPawnMoves:
    def test_home_rank_single_and_double(self) -> None:
        moves = _moves_from("4k3/8/8/8/8/8/4P3/4K3 w - - 0 1", "e2")
        assert moves == {
            Move(parse_square("e2"), parse_square("e3")),
            Move(parse_square("e2"), parse_square("e4"), MoveFlag.DOUBLE_PAWN),
        }

    def test_off_home_rank_single_only(self) -> None:
        assert _targets("4k3/8/8/8/8/4P3/8/4K3 w - - 0 1", "e3") == {"e4"}

    def test_blocked(self) -> None:
        assert _moves_from("4k3/8/8/8/4p3/4P3/8/4K3 w - - 0 1", "e3") == set()

    def test_double_push_second_square_blocked(self) -> None:
        assert _targets("4k3/8/8/8/4p3/8/4P3/4K3 w - - 0 1", "e2") == {"e3"}

    def test_double_push_first_square_blocked(self) -> None:
        assert _moves_from("4k3/8/8/8/8/4p3/4P3/4K3 w - - 0 1", "e2") == set()

    def test_capture_diagonally(self) -> None:
        moves = _moves_from("4k3/8/8/8/5p2/4P3/8/4K3 w - - 0 1", "e3")
        assert Move(parse_square("e3"), parse_square("f4"), MoveFlag.CAPTURE) in moves
        assert len(moves) == 2

    def test_no_capture_of_own_piece(self) -> None:
        assert _targets("4k3/8/8/8/5P2/4P3/8/4K3 w - - 0 1", "e3") == {"e4"}

    def test_edge_file_captures_one_side(self) -> None:
        # h-file pawn cannot wrap around to the a-file
        assert _targets("4k3/8/8/8/p5pp/7P/8/4K3 w - - 0 1", "h3") == {"g4"}

    def test_black_pawn_moves_down(self) -> None:
        assert _targets("4k3/4p3/8/8/8/8/8/4K3 b - - 0 1", "e7") == {"e6", "e5"}

    def test_en_passant_candidate(self) -> None:
        moves = _moves_from("4k3/8/8/3pP3/8/8/8/4K3 w - d6 0 1", "e5")
        assert Move(parse_square("e5"), parse_square("d6"), MoveFlag.EN_PASSANT) in moves

    def test_no_en_passant_from_across_the_board(self) -> None:
        moves = _moves_from("4k3/8/8/3p3P/8/8/8/4K3 w - d6 0 1", "h5")
        assert all(m.flag != MoveFlag.EN_PASSANT for m in moves)


class TestPromotion:
    def test_push_emits_every_promotion_kind(self) -> None:
        moves = _moves_from("8/P7/8/8/8/8/8/k6K w - - 0 1", "a7")
        assert {m.promotion for m in moves} == {
            PieceType.QUEEN,
            PieceType.ROOK,
            PieceType.BISHOP,
            PieceType.KNIGHT,
        }
        assert all(m.to_sq == parse_square("a8") for m in moves)
        assert all(m.flag == MoveFlag.NORMAL for m in moves)

    def test_capture_promotions(self) -> None:
        moves = _moves_from("1n6/P7/8/8/8/8/8/k6K w - - 0 1", "a7")
        captures = [m for m in moves if m.flag == MoveFlag.CAPTURE]
        assert len(moves) == 8
        assert len(captures) == 4
        assert all(m.promotion is not None for m in moves)

    def test_promotion_square_attacked(self) -> None:
        # A pawn on the seventh rank attacks the promotion squares diagonally.
        board = position_from_fen("8/1P6/8/8/8/8/8/k6K w - - 0 1")
        assert is_square_attacked(board, parse_square("a8"), Color.WHITE)
        assert is_square_attacked(board, parse_square("c8"), Color.WHITE)
        assert not is_square_attacked(board, parse_square("b8"), Color.WHITE)


# ── Pieces ───────────────────────────────────────────────────────────────────


class TestPieceMoves:
    def test_rook_open_board(self) -> None:
        targets = _targets("7k/8/8/8/3R4/8/8/K7 w - - 0 1", "d4")
        assert len(targets) == 14

    def test_rook_boxed_in_by_enemies(self) -> None:
        moves = _moves_from("7k/8/8/3p4/2pRp3/3p4/8/K7 w - - 0 1", "d4")
        assert len(moves) == 4
        assert all(m.flag == MoveFlag.CAPTURE for m in moves)

    def test_rook_boxed_in_by_own_pieces(self) -> None:
        assert _moves_from("7k/8/8/3P4/2PRP3/3P4/8/K7 w - - 0 1", "d4") == set()

    def test_bishop_center(self) -> None:
        assert len(_targets("k7/8/8/8/3B4/8/8/7K w - - 0 1", "d4")) == 13

    def test_queen_center(self) -> None:
        assert len(_targets("k7/8/8/8/3Q4/8/8/7K w - - 0 1", "d4")) == 27

    def test_knight_center(self) -> None:
        targets = _targets("7k/8/8/8/3N4/8/8/K7 w - - 0 1", "d4")
        assert targets == {"b3", "b5", "c2", "c6", "e2", "e6", "f3", "f5"}

    def test_knight_corner(self) -> None:
        assert _targets("7k/8/8/8/8/8/8/N6K w - - 0 1", "a1") == {"b3", "c2"}

    def test_knight_corner_blocked_by_own(self) -> None:
        assert _targets("7k/8/8/8/8/1P6/8/N6K w - - 0 1", "a1") == {"c2"}

    def test_king_center(self) -> None:
        assert len(_targets("7k/8/8/8/3K4/8/8/8 w - - 0 1", "d4")) == 8

    def test_enemy_piece_has_no_moves(self) -> None:
        assert _moves_from(STARTING_FEN, "e7") == set()

    def test_empty_square_has_no_moves(self) -> None:
        assert _moves_from(STARTING_FEN, "e4") == set()


class TestCastlingCandidates:
    def test_both_sides_generated(self) -> None:
        moves = _moves_from("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1", "e1")
        flags = {m.flag for m in moves}
        assert MoveFlag.CASTLE_KINGSIDE in flags
        assert MoveFlag.CASTLE_QUEENSIDE in flags

    def test_no_rights_no_candidates(self) -> None:
        moves = _moves_from("r3k2r/8/8/8/8/8/8/R3K2R w kq - 0 1", "e1")
        assert not any(m.is_castle for m in moves)

    def test_path_occupied(self) -> None:
        moves = _moves_from("r3k2r/8/8/8/8/8/8/RN2K1NR w KQkq - 0 1", "e1")
        assert not any(m.is_castle for m in moves)

    def test_king_in_check_no_candidates(self) -> None:
        moves = _moves_from("4r1k1/8/8/8/8/8/8/R3K2R w KQ - 0 1", "e1")
        assert not any(m.is_castle for m in moves)

    def test_rook_missing_from_corner(self) -> None:
        # Rights flag set but no rook on h1.
        moves = _moves_from("4k3/8/8/8/8/8/8/R3K3 w KQ - 0 1", "e1")
        assert {m.flag for m in moves if m.is_castle} == {MoveFlag.CASTLE_QUEENSIDE}

    def test_transit_attack_is_not_checked_here(self) -> None:
        # The f1 attack is the legality filter's job.
        moves = _moves_from("4kr2/8/8/8/8/8/8/4K2R w K - 0 1", "e1")
        assert Move(parse_square("e1"), parse_square("g1"), MoveFlag.CASTLE_KINGSIDE) in moves


# ── Attack detection ─────────────────────────────────────────────────────────


def _attacked_by_pseudo_moves(board: Board, color: Color) -> bool:
    """Reference definition: some pseudo-legal enemy move lands on the king."""
    king = board.king_square(color)
    probe = board.with_side_to_move(color.opposite)
    return any(m.to_sq == king for m in generate_pseudo_legal(probe))


class TestAttackDetection:
    @pytest.mark.parametrize(
        "fen",
        [
            STARTING_FEN,
            KIWIPETE,
            POS3,
            POS4,
            POS5,
            "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3",
            "4k3/8/8/8/8/8/3p4/4K3 w - - 0 1",
            "4k3/8/8/8/8/5n2/8/4K3 w - - 0 1",
        ],
    )
    def test_in_check_matches_pseudo_legal_definition(self, fen: str) -> None:
        board = position_from_fen(fen)
        for color in Color:
            assert in_check(board, color) == _attacked_by_pseudo_moves(board, color)

    def test_pawn_push_does_not_attack(self) -> None:
        board = position_from_fen("4k3/8/8/8/8/8/4p3/K7 w - - 0 1")
        assert not is_square_attacked(board, parse_square("e1"), Color.BLACK)
        assert is_square_attacked(board, parse_square("d1"), Color.BLACK)

    def test_slider_blocked(self) -> None:
        board = position_from_fen("4k3/8/8/8/8/8/R3P2K/8 w - - 0 1")
        assert is_square_attacked(board, parse_square("d2"), Color.WHITE)
        assert not is_square_attacked(board, parse_square("f2"), Color.WHITE)
