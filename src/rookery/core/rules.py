"""High-level rules: elimination, stalemate, turn skips and draw detection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rookery.core.enums import Color
from rookery.core.move_generator import MoveGenerator

if TYPE_CHECKING:
    from rookery.core.position import Position

FIFTY_MOVE_HALFMOVES = 100
THREEFOLD_COUNT = 3


class Rules:
    """Static rule-checker that operates on a :class:`Position`.

    There is no check or checkmate: a game is won by capturing every enemy
    piece, and a side that cannot move simply loses its turn.
    """

    @staticmethod
    def eliminated_color(position: Position) -> Color | None:
        """The color with no pieces left, if any."""
        for color in (Color.WHITE, Color.BLACK):
            if position.board.piece_count(color) == 0:
                return color
        return None

    @staticmethod
    def has_legal_move(position: Position, color: Color) -> bool:
        return MoveGenerator(position).has_legal_move(color)

    @staticmethod
    def is_stalemate(position: Position) -> bool:
        """Neither side has a legal move."""
        gen = MoveGenerator(position)
        return not gen.has_legal_move(Color.WHITE) and not gen.has_legal_move(
            Color.BLACK
        )

    @staticmethod
    def must_skip_turn(position: Position) -> bool:
        """The side to move is stuck while its opponent can still move."""
        gen = MoveGenerator(position)
        side = position.side_to_move
        return not gen.has_legal_move(side) and gen.has_legal_move(side.opposite)

    @staticmethod
    def is_threefold_repetition(
        position: Position, limit: int = THREEFOLD_COUNT
    ) -> bool:
        return position.repetition_count() >= limit

    @staticmethod
    def is_fifty_move_rule(position: Position, limit: int = FIFTY_MOVE_HALFMOVES) -> bool:
        return position.halfmove_clock >= limit  # 100 half-moves = 50 full moves
