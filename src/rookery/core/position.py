"""Position: complete game state (board + metadata) and move application."""

from __future__ import annotations

from rookery.core.board import Board
from rookery.core.enums import CastlingRights, Color, PieceType
from rookery.core.history import PositionHistory
from rookery.core.move import Move, MoveEffects
from rookery.core.move_generator import rook_corner
from rookery.core.piece import Piece
from rookery.core.types import Square, col_of, make_square, row_of, square_name


class Position:
    """Full chess position: board, side to move, castling rights, last move,
    clocks and the history of positions reached so far.

    Moves are applied in two steps: :meth:`apply_move` changes the board and
    :meth:`finish_move` hands the turn over. A promotion without a chosen
    piece stops between the two until :meth:`promote` is called.
    """

    __slots__ = (
        "board",
        "side_to_move",
        "castling",
        "last_move",
        "halfmove_clock",
        "fullmove_number",
        "history",
    )

    def __init__(
        self,
        board: Board | None = None,
        side_to_move: Color = Color.WHITE,
        castling: CastlingRights = CastlingRights.ALL,
        last_move: Move | None = None,
        halfmove_clock: int = 0,
        fullmove_number: int = 1,
        history: PositionHistory | None = None,
    ) -> None:
        self.board = board if board is not None else Board.initial()
        self.side_to_move = side_to_move
        self.castling = castling
        self.last_move = last_move
        self.halfmove_clock = halfmove_clock
        self.fullmove_number = fullmove_number
        self.history = history if history is not None else PositionHistory()

    # ── Core move operations ─────────────────────────────────────────────

    def apply_move(self, move: Move) -> MoveEffects:
        """Change the board for an already validated *move*.

        Does not pass the turn; see :meth:`finish_move`.
        """
        piece = self.board[move.from_sq]
        if piece is None:
            raise ValueError(f"No piece on {square_name(move.from_sq)}")

        dc = col_of(move.to_sq) - col_of(move.from_sq)
        is_pawn = piece.piece_type == PieceType.PAWN
        en_passant = is_pawn and dc != 0 and self.board.is_empty(move.to_sq)

        capture_sq: Square = move.to_sq
        if en_passant:
            capture_sq = make_square(row_of(move.from_sq), col_of(move.to_sq))
        captured = self.board[capture_sq]

        # Halfmove clock
        if is_pawn or captured is not None:
            self.halfmove_clock = 0
        else:
            self.halfmove_clock += 1

        # En passant: the captured pawn is not on the destination square
        if en_passant:
            self.board[capture_sq] = None

        # Slide the rook for castling
        rook_from: Square | None = None
        rook_to: Square | None = None
        if piece.piece_type == PieceType.KING and abs(dc) == 2:
            kingside = dc > 0
            rook_from = rook_corner(piece.color, kingside)
            rook_to = move.to_sq - 1 if kingside else move.to_sq + 1
            self.board[rook_to] = self.board[rook_from]
            self.board[rook_from] = None

        self._update_castling(move, piece)

        self.board[move.from_sq] = None
        self.board[move.to_sq] = piece

        promoted_to: PieceType | None = None
        pending = False
        if is_pawn and row_of(move.to_sq) == piece.color.promotion_row:
            if move.promotion is None:
                pending = True
            else:
                self.promote(move.to_sq, move.promotion)
                promoted_to = move.promotion

        return MoveEffects(
            moved=piece,
            captured=captured,
            captured_sq=capture_sq if captured is not None else None,
            rook_from=rook_from,
            rook_to=rook_to,
            promoted_to=promoted_to,
            promotion_pending=pending,
        )

    def promote(self, sq: Square, piece_type: PieceType) -> Piece:
        """Replace the pawn on *sq* with a *piece_type* of the same color."""
        pawn = self.board[sq]
        if pawn is None or pawn.piece_type != PieceType.PAWN:
            raise ValueError(f"No pawn to promote on {square_name(sq)}")
        if piece_type in (PieceType.PAWN, PieceType.KING):
            raise ValueError(f"Cannot promote to {piece_type.name}")
        promoted = Piece(pawn.color, piece_type)
        self.board[sq] = promoted
        return promoted

    def finish_move(self, move: Move) -> None:
        """Record *move* as the last move, pass the turn and log the position."""
        self.last_move = move
        self._advance_turn()
        self.history.append(self.key())

    def pass_turn(self) -> None:
        """Give the move back to the other side without a board change."""
        self._advance_turn()

    def _advance_turn(self) -> None:
        if self.side_to_move == Color.BLACK:
            self.fullmove_number += 1
        self.side_to_move = self.side_to_move.opposite

    # ── Castling bookkeeping ─────────────────────────────────────────────

    def _update_castling(self, move: Move, piece: Piece) -> None:
        color = piece.color
        if piece.piece_type == PieceType.KING:
            self.castling &= ~CastlingRights.both(color)
        elif piece.piece_type == PieceType.ROOK:
            if move.from_sq == rook_corner(color, kingside=True):
                self.castling &= ~CastlingRights.kingside(color)
            elif move.from_sq == rook_corner(color, kingside=False):
                self.castling &= ~CastlingRights.queenside(color)

    # ── Utilities ────────────────────────────────────────────────────────

    def key(self) -> str:
        """Canonical repetition key: board placement plus side to move."""
        side = "w" if self.side_to_move == Color.WHITE else "b"
        return f"{self.board.placement()} {side}"

    def repetition_count(self) -> int:
        """How many times the current position was reached after a move."""
        return self.history.count(self.key())

    def copy(self) -> Position:
        return Position(
            board=self.board.copy(),
            side_to_move=self.side_to_move,
            castling=self.castling,
            last_move=self.last_move,
            halfmove_clock=self.halfmove_clock,
            fullmove_number=self.fullmove_number,
            history=self.history.copy(),
        )
