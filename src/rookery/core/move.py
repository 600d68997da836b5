"""Move value object and the side effects of applying one."""

from __future__ import annotations

from dataclasses import dataclass

from rookery.core.enums import MoveFlag, PieceType
from rookery.core.piece import Piece
from rookery.core.types import Square, square_name

_PROMO_CHARS: dict[PieceType, str] = {
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
}


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable value object representing a single chess move.

    ``promotion`` stays ``None`` on a promotion move until the player has
    picked the new piece.
    """

    from_sq: Square
    to_sq: Square
    flag: MoveFlag = MoveFlag.NORMAL
    promotion: PieceType | None = None

    def with_promotion(self, piece_type: PieceType) -> Move:
        return Move(self.from_sq, self.to_sq, self.flag, piece_type)

    @property
    def is_castling(self) -> bool:
        return self.flag in (MoveFlag.CASTLE_KINGSIDE, MoveFlag.CASTLE_QUEENSIDE)

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        base = f"{square_name(self.from_sq)}{square_name(self.to_sq)}"
        if self.promotion is not None:
            base += _PROMO_CHARS.get(self.promotion, "")
        return base

    @property
    def uci(self) -> str:
        """Coordinate notation, e.g. ``e2e4`` or ``a7a8q``."""
        return str(self)


@dataclass(frozen=True, slots=True)
class MoveEffects:
    """What applying a move did to the board, for whoever draws it."""

    moved: Piece
    captured: Piece | None = None
    captured_sq: Square | None = None
    rook_from: Square | None = None
    rook_to: Square | None = None
    promoted_to: PieceType | None = None
    promotion_pending: bool = False

    @property
    def is_capture(self) -> bool:
        return self.captured is not None
