"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass

from rookery.core.enums import Color, PieceType

# Letters used in FEN placement; uppercase for white.
_LETTERS: dict[PieceType, str] = {
    PieceType.PAWN: "p",
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
    PieceType.KING: "k",
}

# Glyphs indexed by piece type, white set first (♔ U+2654 ... ♟ U+265F).
_GLYPHS: dict[Color, dict[PieceType, str]] = {
    Color.WHITE: {
        PieceType.KING: "♔",
        PieceType.QUEEN: "♕",
        PieceType.ROOK: "♖",
        PieceType.BISHOP: "♗",
        PieceType.KNIGHT: "♘",
        PieceType.PAWN: "♙",
    },
    Color.BLACK: {
        PieceType.KING: "♚",
        PieceType.QUEEN: "♛",
        PieceType.ROOK: "♜",
        PieceType.BISHOP: "♝",
        PieceType.KNIGHT: "♞",
        PieceType.PAWN: "♟",
    },
}

_FROM_LETTER: dict[str, tuple[Color, PieceType]] = {}
for _ptype, _letter in _LETTERS.items():
    _FROM_LETTER[_letter.upper()] = (Color.WHITE, _ptype)
    _FROM_LETTER[_letter] = (Color.BLACK, _ptype)


@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable (color, kind) pair. Pieces have no identity beyond that."""

    color: Color
    piece_type: PieceType

    def is_friend_of(self, other: Piece | None) -> bool:
        return other is not None and other.color == self.color

    def is_enemy_of(self, other: Piece | None) -> bool:
        return other is not None and other.color != self.color

    # ── Serialisation ────────────────────────────────────────────────────

    def __str__(self) -> str:
        """FEN letter (uppercase = white, lowercase = black)."""
        letter = _LETTERS[self.piece_type]
        return letter.upper() if self.color == Color.WHITE else letter

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Create piece from FEN letter, e.g. 'N' → white knight."""
        try:
            color, ptype = _FROM_LETTER[char]
        except KeyError:
            raise ValueError(f"Invalid piece character: {char!r}") from None
        return cls(color, ptype)

    @property
    def symbol(self) -> str:
        """Unicode chess symbol, e.g. ♞."""
        return _GLYPHS[self.color][self.piece_type]
