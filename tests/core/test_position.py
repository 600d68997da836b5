"""Tests for Position move application and turn bookkeeping."""

import pytest

from rookery.core.enums import CastlingRights, Color, MoveFlag, PieceType
from rookery.core.move import Move
from rookery.core.move_generator import MoveGenerator
from rookery.core.notation import STARTING_FEN, position_from_fen, position_to_fen
from rookery.core.piece import Piece
from rookery.core.types import (
    A1, A8, C1, C8, D1, D5, D6, E1, E2, E4, E5, E7, E8, F1, F8, G1, G8, H1, H8,
    F3, F6,
)

WHITE_PAWN = Piece(Color.WHITE, PieceType.PAWN)
BLACK_PAWN = Piece(Color.BLACK, PieceType.PAWN)
WHITE_ROOK = Piece(Color.WHITE, PieceType.ROOK)


class TestApplyMove:
    def test_plain_move_relocates_piece(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        effects = pos.apply_move(Move(E2, E4, MoveFlag.DOUBLE_PAWN))
        assert pos.board[E4] == WHITE_PAWN
        assert pos.board[E2] is None
        assert effects.moved == WHITE_PAWN
        assert not effects.is_capture

    def test_turn_not_passed_until_finish(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        move = Move(E2, E4, MoveFlag.DOUBLE_PAWN)
        pos.apply_move(move)
        assert pos.side_to_move == Color.WHITE
        pos.finish_move(move)
        assert pos.side_to_move == Color.BLACK
        assert pos.last_move == move

    def test_empty_origin_raises(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        with pytest.raises(ValueError, match="No piece"):
            pos.apply_move(Move(E4, E5))

    def test_capture_reports_victim(self) -> None:
        pos = position_from_fen("4k3/8/8/3p4/8/8/8/3RK3 w - - 7 1")
        effects = pos.apply_move(Move(D1, D5))
        assert effects.captured == BLACK_PAWN
        assert effects.captured_sq == D5
        assert pos.board[D5] == WHITE_ROOK
        assert pos.board.piece_count(Color.BLACK) == 1


class TestHalfmoveClock:
    def test_pawn_move_resets(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/4P3/4K3 w - - 12 30")
        pos.apply_move(Move(E2, E4, MoveFlag.DOUBLE_PAWN))
        assert pos.halfmove_clock == 0

    def test_capture_resets(self) -> None:
        pos = position_from_fen("4k3/8/8/3p4/8/8/8/3RK3 w - - 7 1")
        pos.apply_move(Move(D1, D5))
        assert pos.halfmove_clock == 0

    def test_quiet_piece_move_increments(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        pos.apply_move(Move(G1, F3))
        assert pos.halfmove_clock == 1


class TestEnPassant:
    def test_captured_pawn_removed_from_its_square(self) -> None:
        pos = position_from_fen("4k3/8/8/3pP3/8/8/8/4K3 w - d6 0 1")
        effects = pos.apply_move(Move(E5, D6, MoveFlag.EN_PASSANT))
        assert pos.board[D6] == WHITE_PAWN
        assert pos.board[D5] is None
        assert pos.board[E5] is None
        assert effects.captured == BLACK_PAWN
        assert effects.captured_sq == D5
        assert pos.halfmove_clock == 0


class TestCastling:
    FEN = "r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1"

    def test_kingside_moves_rook(self) -> None:
        pos = position_from_fen(self.FEN)
        effects = pos.apply_move(Move(E1, G1, MoveFlag.CASTLE_KINGSIDE))
        assert pos.board[G1] == Piece(Color.WHITE, PieceType.KING)
        assert pos.board[F1] == WHITE_ROOK
        assert pos.board[H1] is None
        assert (effects.rook_from, effects.rook_to) == (H1, F1)

    def test_queenside_moves_rook(self) -> None:
        pos = position_from_fen(self.FEN)
        effects = pos.apply_move(Move(E1, C1, MoveFlag.CASTLE_QUEENSIDE))
        assert pos.board[C1] == Piece(Color.WHITE, PieceType.KING)
        assert pos.board[D1] == WHITE_ROOK
        assert pos.board[A1] is None
        assert (effects.rook_from, effects.rook_to) == (A1, D1)

    def test_black_kingside(self) -> None:
        pos = position_from_fen(self.FEN)
        pos.apply_move(Move(E8, G8, MoveFlag.CASTLE_KINGSIDE))
        assert pos.board[F8] == Piece(Color.BLACK, PieceType.ROOK)
        assert pos.board[H8] is None
        assert pos.castling == CastlingRights.WHITE_BOTH

    def test_king_move_clears_both_rights(self) -> None:
        pos = position_from_fen(self.FEN)
        pos.apply_move(Move(E1, D1))
        assert pos.castling == CastlingRights.BLACK_BOTH

    def test_rook_move_clears_one_right(self) -> None:
        pos = position_from_fen(self.FEN)
        pos.apply_move(Move(H1, G1))
        assert not pos.castling & CastlingRights.WHITE_KINGSIDE
        assert pos.castling & CastlingRights.WHITE_QUEENSIDE

    def test_captured_rook_keeps_right_but_cannot_castle(self) -> None:
        pos = position_from_fen(self.FEN)
        pos.apply_move(Move(A1, A8))
        pos.finish_move(Move(A1, A8))
        assert pos.castling & CastlingRights.BLACK_QUEENSIDE
        assert not MoveGenerator(pos).can_castle(E8, C8)


class TestPromotion:
    FEN = "8/4P3/8/8/8/8/8/k3K3 w - - 3 1"

    def test_pending_without_choice(self) -> None:
        pos = position_from_fen(self.FEN)
        effects = pos.apply_move(Move(E7, E8, MoveFlag.PROMOTION))
        assert effects.promotion_pending
        assert effects.promoted_to is None
        assert pos.board[E8] == WHITE_PAWN
        assert pos.halfmove_clock == 0

    def test_promote_replaces_pawn(self) -> None:
        pos = position_from_fen(self.FEN)
        pos.apply_move(Move(E7, E8, MoveFlag.PROMOTION))
        promoted = pos.promote(E8, PieceType.QUEEN)
        assert promoted == Piece(Color.WHITE, PieceType.QUEEN)
        assert pos.board[E8] == promoted

    def test_choice_supplied_up_front(self) -> None:
        pos = position_from_fen(self.FEN)
        effects = pos.apply_move(Move(E7, E8, MoveFlag.PROMOTION, PieceType.KNIGHT))
        assert not effects.promotion_pending
        assert effects.promoted_to == PieceType.KNIGHT
        assert pos.board[E8] == Piece(Color.WHITE, PieceType.KNIGHT)

    @pytest.mark.parametrize("kind", [PieceType.PAWN, PieceType.KING])
    def test_invalid_kind(self, kind: PieceType) -> None:
        pos = position_from_fen(self.FEN)
        pos.apply_move(Move(E7, E8, MoveFlag.PROMOTION))
        with pytest.raises(ValueError, match="Cannot promote"):
            pos.promote(E8, kind)

    def test_promote_needs_pawn(self) -> None:
        pos = position_from_fen(self.FEN)
        with pytest.raises(ValueError, match="No pawn"):
            pos.promote(E8, PieceType.QUEEN)


class TestTurnBookkeeping:
    def test_fullmove_increments_after_black(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        for move in (Move(G1, F3), Move(G8, F6)):
            pos.apply_move(move)
            pos.finish_move(move)
        assert pos.fullmove_number == 2
        assert pos.side_to_move == Color.WHITE

    def test_history_records_each_finished_move(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        assert len(pos.history) == 0
        move = Move(G1, F3)
        pos.apply_move(move)
        pos.finish_move(move)
        assert len(pos.history) == 1
        assert pos.history.last == pos.key()
        assert pos.key().endswith(" b")
        assert pos.repetition_count() == 1

    def test_pass_turn(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        pos.pass_turn()
        assert pos.side_to_move == Color.BLACK
        assert len(pos.history) == 0
        assert pos.last_move is None

    def test_copy_is_independent(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        clone = pos.copy()
        move = Move(E2, E4, MoveFlag.DOUBLE_PAWN)
        clone.apply_move(move)
        clone.finish_move(move)
        assert position_to_fen(pos) == STARTING_FEN
        assert len(pos.history) == 0
        assert len(clone.history) == 1
