"""Move legality: per-piece rules, en passant, castling and move listing.

Legality here is pseudo-legality: a move that leaves the mover's own king
attacked is still legal. Kings can be captured like any other piece and the
game is won by eliminating every enemy piece.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rookery.core.attacks import (
    BISHOP_RAYS,
    KING_TARGETS,
    KNIGHT_TARGETS,
    QUEEN_RAYS,
    ROOK_RAYS,
    is_path_clear,
    is_square_attacked,
)
from rookery.core.enums import CastlingRights, Color, MoveFlag, PieceType
from rookery.core.move import Move
from rookery.core.piece import Piece
from rookery.core.types import Square, col_of, make_square, on_board, row_of

if TYPE_CHECKING:
    from rookery.core.position import Position

_KINGSIDE_ROOK_COL = 7
_QUEENSIDE_ROOK_COL = 0
_KING_HOME_COL = 4


def rook_corner(color: Color, kingside: bool) -> Square:
    """Original square of *color*'s kingside or queenside rook."""
    col = _KINGSIDE_ROOK_COL if kingside else _QUEENSIDE_ROOK_COL
    return make_square(color.home_row, col)


def king_home(color: Color) -> Square:
    return make_square(color.home_row, _KING_HOME_COL)


class MoveGenerator:
    """Answers legality questions about a :class:`Position`.

    The generator never mutates the position.
    """

    __slots__ = ("_pos", "_board")

    def __init__(self, position: Position) -> None:
        self._pos = position
        self._board = position.board

    # -- Single-move legality ----------------------------------------------

    def is_legal(self, from_sq: Square, to_sq: Square) -> bool:
        """Can the piece on *from_sq* move to *to_sq*?

        Whose turn it is does not matter; the piece's own color decides
        what counts as friendly.
        """
        if from_sq == to_sq:
            return False
        piece = self._board[from_sq]
        if piece is None:
            return False
        if piece.is_friend_of(self._board[to_sq]):
            return False

        dr = row_of(to_sq) - row_of(from_sq)
        dc = col_of(to_sq) - col_of(from_sq)
        ptype = piece.piece_type

        if ptype == PieceType.PAWN:
            return self._is_legal_pawn(piece, from_sq, to_sq, dr, dc)
        if ptype == PieceType.KNIGHT:
            return (abs(dr), abs(dc)) in ((1, 2), (2, 1))
        if ptype == PieceType.BISHOP:
            return abs(dr) == abs(dc) and is_path_clear(self._board, from_sq, to_sq)
        if ptype == PieceType.ROOK:
            return (dr == 0 or dc == 0) and is_path_clear(self._board, from_sq, to_sq)
        if ptype == PieceType.QUEEN:
            return (dr == 0 or dc == 0 or abs(dr) == abs(dc)) and is_path_clear(
                self._board, from_sq, to_sq
            )
        # King
        if abs(dr) <= 1 and abs(dc) <= 1:
            return True
        if dr == 0 and abs(dc) == 2:
            return self.can_castle(from_sq, to_sq)
        return False

    def _is_legal_pawn(
        self, pawn: Piece, from_sq: Square, to_sq: Square, dr: int, dc: int
    ) -> bool:
        forward = pawn.color.forward
        target = self._board[to_sq]

        if dc == 0:
            # Pawns never capture straight ahead.
            if target is not None:
                return False
            if dr == forward:
                return True
            return (
                dr == 2 * forward
                and row_of(from_sq) == pawn.color.pawn_row
                and self._board.is_empty(from_sq + 8 * forward)
            )

        if abs(dc) == 1 and dr == forward:
            return target is not None or self.is_en_passant(from_sq, to_sq)
        return False

    def is_en_passant(self, from_sq: Square, to_sq: Square) -> bool:
        """Is *from_sq* → *to_sq* an en passant capture right now?

        The last move must be an enemy pawn's two-row advance ending beside
        the capturing pawn; the capture lands on the square it skipped.
        """
        last = self._pos.last_move
        pawn = self._board[from_sq]
        if last is None or pawn is None or pawn.piece_type != PieceType.PAWN:
            return False

        victim = self._board[last.to_sq]
        if (
            victim is None
            or victim.piece_type != PieceType.PAWN
            or victim.color == pawn.color
        ):
            return False
        if abs(row_of(last.to_sq) - row_of(last.from_sq)) != 2:
            return False
        if col_of(last.to_sq) != col_of(last.from_sq):
            return False

        return (
            row_of(from_sq) == row_of(last.to_sq)
            and abs(col_of(from_sq) - col_of(last.to_sq)) == 1
            and col_of(to_sq) == col_of(last.to_sq)
            and row_of(to_sq) == row_of(from_sq) + pawn.color.forward
            and self._board.is_empty(to_sq)
        )

    def can_castle(self, from_sq: Square, to_sq: Square) -> bool:
        """Castling legality for a king two-column move.

        Requires the side's right, the king on its home square, the rook on
        its original corner, an empty corridor between them, and no square
        from the king's square to its destination (inclusive) attacked.
        """
        king = self._board[from_sq]
        if king is None or king.piece_type != PieceType.KING:
            return False
        color = king.color
        if from_sq != king_home(color) or row_of(to_sq) != row_of(from_sq):
            return False

        kingside = col_of(to_sq) > col_of(from_sq)
        if abs(col_of(to_sq) - col_of(from_sq)) != 2:
            return False
        right = (
            CastlingRights.kingside(color)
            if kingside
            else CastlingRights.queenside(color)
        )
        if not self._pos.castling & right:
            return False

        rook_sq = rook_corner(color, kingside)
        if self._board[rook_sq] != Piece(color, PieceType.ROOK):
            return False
        if not is_path_clear(self._board, from_sq, rook_sq):
            return False

        opponent = color.opposite
        step = 1 if kingside else -1
        for sq in range(from_sq, to_sq + step, step):
            if is_square_attacked(self._board, sq, opponent, self._pos.last_move):
                return False
        return True

    # -- Classification -----------------------------------------------------

    def build_move(self, from_sq: Square, to_sq: Square) -> Move | None:
        """Classified :class:`Move` for a legal pair, ``None`` if illegal."""
        if not self.is_legal(from_sq, to_sq):
            return None
        piece = self._board[from_sq]
        assert piece is not None

        if piece.piece_type == PieceType.KING:
            dc = col_of(to_sq) - col_of(from_sq)
            if dc == 2:
                return Move(from_sq, to_sq, MoveFlag.CASTLE_KINGSIDE)
            if dc == -2:
                return Move(from_sq, to_sq, MoveFlag.CASTLE_QUEENSIDE)
        elif piece.piece_type == PieceType.PAWN:
            if row_of(to_sq) == piece.color.promotion_row:
                return Move(from_sq, to_sq, MoveFlag.PROMOTION)
            if abs(row_of(to_sq) - row_of(from_sq)) == 2:
                return Move(from_sq, to_sq, MoveFlag.DOUBLE_PAWN)
            if self.is_en_passant(from_sq, to_sq):
                return Move(from_sq, to_sq, MoveFlag.EN_PASSANT)
        return Move(from_sq, to_sq)

    # -- Move listing -------------------------------------------------------

    def legal_destinations(self, from_sq: Square) -> set[Square]:
        """Every square the piece on *from_sq* may legally move to."""
        return {
            to_sq
            for to_sq in self._candidate_targets(from_sq)
            if self.is_legal(from_sq, to_sq)
        }

    def generate_moves(self, color: Color) -> list[Move]:
        """All legal moves for *color*, ignoring whose turn it is."""
        moves: list[Move] = []
        for from_sq in sorted(self._board.all_occupied_by(color)):
            for to_sq in sorted(self.legal_destinations(from_sq)):
                move = self.build_move(from_sq, to_sq)
                if move is not None:
                    moves.append(move)
        return moves

    def has_legal_move(self, color: Color) -> bool:
        """Does *color* have at least one legal move?"""
        for from_sq in self._board.all_occupied_by(color):
            for to_sq in self._candidate_targets(from_sq):
                if self.is_legal(from_sq, to_sq):
                    return True
        return False

    def capture_targets(self, color: Color) -> set[Square]:
        """Enemy-occupied squares *color* can capture on its next move.

        An en passant victim is reported on the square it stands on.
        """
        targets: set[Square] = set()
        for from_sq in self._board.all_occupied_by(color):
            for to_sq in self.legal_destinations(from_sq):
                if self._board[to_sq] is not None:
                    targets.add(to_sq)
                elif self.is_en_passant(from_sq, to_sq):
                    targets.add(make_square(row_of(from_sq), col_of(to_sq)))
        return targets

    def _candidate_targets(self, from_sq: Square) -> tuple[Square, ...]:
        """Squares a piece could reach by pattern alone (superset of legal)."""
        piece = self._board[from_sq]
        if piece is None:
            return ()
        ptype = piece.piece_type
        if ptype == PieceType.KNIGHT:
            return KNIGHT_TARGETS[from_sq]
        if ptype == PieceType.BISHOP:
            rays = BISHOP_RAYS[from_sq]
        elif ptype == PieceType.ROOK:
            rays = ROOK_RAYS[from_sq]
        elif ptype == PieceType.QUEEN:
            rays = QUEEN_RAYS[from_sq]
        elif ptype == PieceType.KING:
            row, col = row_of(from_sq), col_of(from_sq)
            castles = tuple(
                make_square(row, col + dc) for dc in (-2, 2) if on_board(row, col + dc)
            )
            return KING_TARGETS[from_sq] + castles
        else:
            row, col = row_of(from_sq), col_of(from_sq)
            forward = piece.color.forward
            return tuple(
                make_square(row + dr, col + dc)
                for dr, dc in (
                    (forward, 0),
                    (2 * forward, 0),
                    (forward, -1),
                    (forward, 1),
                )
                if on_board(row + dr, col + dc)
            )
        return tuple(sq for ray in rays for sq in ray)
