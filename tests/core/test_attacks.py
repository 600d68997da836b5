"""Tests for path and attack queries."""

from rookery.core.attacks import (
    en_passant_target,
    is_aligned,
    is_path_clear,
    is_square_attacked,
)
from rookery.core.board import Board
from rookery.core.enums import Color
from rookery.core.move import Move
from rookery.core.notation import board_from_placement
from rookery.core.types import (
    A1, A8, D1, D5, D6, D7, E1, E4, E8, F1, H1, H8,
    parse_square,
)


class TestAlignment:
    def test_rank_file_diagonal(self) -> None:
        assert is_aligned(A1, H1)
        assert is_aligned(A1, A8)
        assert is_aligned(A1, H8)

    def test_knight_distance_not_aligned(self) -> None:
        assert not is_aligned(parse_square("b1"), parse_square("c3"))

    def test_same_square_not_aligned(self) -> None:
        assert not is_aligned(E4, E4)


class TestPathClear:
    def test_open_file(self) -> None:
        board = board_from_placement("4k3/8/8/8/8/8/8/R3K3")
        assert is_path_clear(board, A1, A8)

    def test_blocked_rank(self) -> None:
        board = Board.initial()
        assert not is_path_clear(board, A1, E1)

    def test_endpoints_ignored(self) -> None:
        # Both ends are occupied, nothing in between.
        board = board_from_placement("4k3/8/8/8/8/8/8/R2QK3")
        assert is_path_clear(board, A1, D1)
        assert not is_path_clear(board, A1, E1)

    def test_diagonal(self) -> None:
        board = board_from_placement("4k3/8/8/8/3p4/8/8/B3K3")
        assert is_path_clear(board, A1, parse_square("d4"))
        assert not is_path_clear(board, A1, H8)

    def test_adjacent_always_clear(self) -> None:
        assert is_path_clear(Board.initial(), E1, F1)


class TestSquareAttacked:
    def test_rook_attacks_along_file(self) -> None:
        board = board_from_placement("4k3/8/8/8/8/8/8/5r1K")
        assert is_square_attacked(board, parse_square("f4"), Color.BLACK)
        assert is_square_attacked(board, parse_square("g1"), Color.BLACK)
        assert not is_square_attacked(board, parse_square("g4"), Color.BLACK)

    def test_slider_blocked(self) -> None:
        board = board_from_placement("4k3/8/8/8/8/8/5P2/5r1K")
        assert not is_square_attacked(board, parse_square("f4"), Color.BLACK)

    def test_bishop_and_queen_diagonals(self) -> None:
        board = board_from_placement("4k3/8/8/8/8/8/8/b3K2q")
        assert is_square_attacked(board, parse_square("d4"), Color.BLACK)
        assert is_square_attacked(board, parse_square("e4"), Color.BLACK)
        assert not is_square_attacked(board, parse_square("c4"), Color.BLACK)

    def test_knight(self) -> None:
        board = board_from_placement("4k3/8/8/8/8/5n2/8/4K3")
        assert is_square_attacked(board, E1, Color.BLACK)
        assert is_square_attacked(board, parse_square("g1"), Color.BLACK)
        assert not is_square_attacked(board, parse_square("f1"), Color.BLACK)

    def test_pawn_push_reaches_empty_square(self) -> None:
        # Black pawn on e2 can step to e1 but has nothing to take on d1 or f1.
        board = board_from_placement("4k3/8/8/8/8/8/4p3/7K")
        assert is_square_attacked(board, E1, Color.BLACK)
        assert not is_square_attacked(board, D1, Color.BLACK)
        assert not is_square_attacked(board, F1, Color.BLACK)

    def test_pawn_never_captures_straight_ahead(self) -> None:
        board = board_from_placement("4k3/8/8/8/8/8/4p3/4K3")
        assert not is_square_attacked(board, E1, Color.BLACK)

    def test_white_pawn_single_and_double_push(self) -> None:
        board = board_from_placement("4k3/8/8/8/8/8/4P3/4K3")
        assert is_square_attacked(board, parse_square("e3"), Color.WHITE)
        assert is_square_attacked(board, parse_square("e4"), Color.WHITE)
        assert not is_square_attacked(board, parse_square("e5"), Color.WHITE)
        assert not is_square_attacked(board, parse_square("d3"), Color.WHITE)

    def test_double_push_needs_home_row(self) -> None:
        board = board_from_placement("4k3/8/8/8/8/4P3/8/4K3")
        assert is_square_attacked(board, E4, Color.WHITE)
        assert not is_square_attacked(board, parse_square("e5"), Color.WHITE)

    def test_double_push_blocked(self) -> None:
        board = board_from_placement("4k3/8/8/8/8/4n3/4P3/4K3")
        assert not is_square_attacked(board, E4, Color.WHITE)

    def test_pawn_diagonal_onto_enemy_piece(self) -> None:
        board = board_from_placement("4k3/8/8/8/8/3n1B2/4P3/4K3")
        assert is_square_attacked(board, parse_square("d3"), Color.WHITE)
        assert not is_square_attacked(board, parse_square("f3"), Color.WHITE)

    def test_en_passant_square(self) -> None:
        board = board_from_placement("4k3/8/8/3pP3/8/8/8/4K3")
        assert is_square_attacked(board, D6, Color.WHITE, Move(D7, D5))
        assert not is_square_attacked(board, D6, Color.WHITE)

    def test_en_passant_needs_double_advance(self) -> None:
        board = board_from_placement("4k3/8/8/3pP3/8/8/8/4K3")
        assert not is_square_attacked(board, D6, Color.WHITE, Move(D6, D5))

    def test_king_adjacency_only(self) -> None:
        board = board_from_placement("8/8/8/8/8/8/8/4k3")
        assert is_square_attacked(board, parse_square("d2"), Color.BLACK)
        assert not is_square_attacked(board, parse_square("g1"), Color.BLACK)

    def test_own_piece_not_attacked_by_own_color(self) -> None:
        board = Board.initial()
        assert not is_square_attacked(board, E1, Color.WHITE)

    def test_occupied_enemy_square_attacked(self) -> None:
        board = board_from_placement("4k3/8/8/8/8/8/8/r3K3")
        assert is_square_attacked(board, E1, Color.BLACK)
        assert not is_square_attacked(board, E8, Color.WHITE)

    def test_turn_is_irrelevant(self) -> None:
        board = Board.initial()
        assert is_square_attacked(board, parse_square("f6"), Color.BLACK)
        assert is_square_attacked(board, parse_square("f3"), Color.WHITE)


class TestEnPassantTarget:
    def test_square_skipped_by_double_advance(self) -> None:
        board = board_from_placement("4k3/8/8/3p4/8/8/8/4K3")
        assert en_passant_target(board, Move(D7, D5)) == D6

    def test_no_last_move(self) -> None:
        assert en_passant_target(Board.initial(), None) is None

    def test_non_pawn_move(self) -> None:
        board = board_from_placement("4k3/8/8/3r4/8/8/8/4K3")
        assert en_passant_target(board, Move(D7, D5)) is None
