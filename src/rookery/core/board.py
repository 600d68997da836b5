"""Board - piece placement on an 8x8 board."""

from __future__ import annotations

from rookery.core.enums import Color, PieceType
from rookery.core.piece import Piece
from rookery.core.types import Square, make_square

_PIECE_TYPE_COUNT = 6
_COLOR_COUNT = 2

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
    """Mutable 64-square board with incremental occupancy indexes.

    The board holds pieces only; it knows nothing about legality.
    """

    __slots__ = ("_squares", "_piece_bitboards", "_color_bitboards")

    def __init__(self) -> None:
        self._squares: list[Piece | None] = [None] * 64
        # [color][piece_type-1] -> bitboard of occupied squares.
        self._piece_bitboards: list[list[int]] = [
            [0] * _PIECE_TYPE_COUNT for _ in range(_COLOR_COUNT)
        ]
        # [color] -> bitboard of all occupied squares for that color.
        self._color_bitboards: list[int] = [0] * _COLOR_COUNT

    @staticmethod
    def _squares_from_bitboard(bitboard: int) -> list[Square]:
        squares: list[Square] = []
        while bitboard:
            lsb = bitboard & -bitboard
            squares.append(lsb.bit_length() - 1)
            bitboard ^= lsb
        return squares

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._squares[sq]

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        old_piece = self._squares[sq]
        if old_piece == piece:
            return

        mask = 1 << sq
        if old_piece is not None:
            color_idx = int(old_piece.color)
            self._piece_bitboards[color_idx][int(old_piece.piece_type) - 1] &= ~mask
            self._color_bitboards[color_idx] &= ~mask

        self._squares[sq] = piece

        if piece is not None:
            color_idx = int(piece.color)
            self._piece_bitboards[color_idx][int(piece.piece_type) - 1] |= mask
            self._color_bitboards[color_idx] |= mask

    def get(self, sq: Square) -> Piece | None:
        return self._squares[sq]

    def set(self, sq: Square, piece: Piece | None) -> None:
        self[sq] = piece

    def is_empty(self, sq: Square) -> bool:
        return self._squares[sq] is None

    # -- Query helpers ------------------------------------------------------

    def pieces(self, color: Color, piece_type: PieceType) -> list[Square]:
        """Squares occupied by *color*'s *piece_type*."""
        return self._squares_from_bitboard(
            self._piece_bitboards[int(color)][int(piece_type) - 1]
        )

    def all_occupied_by(self, color: Color) -> set[Square]:
        """All squares occupied by *color*."""
        return set(self._squares_from_bitboard(self._color_bitboards[int(color)]))

    def piece_count(self, color: Color) -> int:
        return self._color_bitboards[int(color)].bit_count()

    def placement(self) -> str:
        """FEN piece-placement field, row 0 (rank 8) first."""
        rows: list[str] = []
        for row in range(8):
            empty = 0
            text = ""
            for col in range(8):
                piece = self._squares[make_square(row, col)]
                if piece is None:
                    empty += 1
                    continue
                if empty:
                    text += str(empty)
                    empty = 0
                text += str(piece)
            if empty:
                text += str(empty)
            rows.append(text)
        return "/".join(rows)

    # -- Mutation / copying -------------------------------------------------

    def copy(self) -> Board:
        b = Board()
        b._squares = self._squares.copy()
        b._piece_bitboards = [row.copy() for row in self._piece_bitboards]
        b._color_bitboards = self._color_bitboards.copy()
        return b

    def clear(self) -> None:
        self._squares = [None] * 64
        self._piece_bitboards = [[0] * _PIECE_TYPE_COUNT for _ in range(_COLOR_COUNT)]
        self._color_bitboards = [0] * _COLOR_COUNT

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position (black on rows 0-1, white on rows 6-7)."""
        b = cls()
        for col, pt in enumerate(_BACK_RANK):
            b[make_square(Color.BLACK.home_row, col)] = Piece(Color.BLACK, pt)
            b[make_square(Color.BLACK.pawn_row, col)] = Piece(
                Color.BLACK, PieceType.PAWN
            )
            b[make_square(Color.WHITE.pawn_row, col)] = Piece(
                Color.WHITE, PieceType.PAWN
            )
            b[make_square(Color.WHITE.home_row, col)] = Piece(Color.WHITE, pt)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._squares == other._squares

    def __repr__(self) -> str:
        rows: list[str] = []
        for row in range(8):
            cells = []
            for col in range(8):
                p = self[make_square(row, col)]
                cells.append(str(p) if p else ".")
            rows.append(f"{8 - row} {' '.join(cells)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
