"""Core domain layer: pure chess rules with zero external dependencies.

Quick start::

    from rookery.core import MoveGenerator, position_from_fen, STARTING_FEN

    pos = position_from_fen(STARTING_FEN)
    gen = MoveGenerator(pos)
    for move in gen.generate_moves(pos.side_to_move):
        print(move)
"""

from rookery.core.attacks import (
    en_passant_target,
    is_aligned,
    is_path_clear,
    is_square_attacked,
)
from rookery.core.board import Board
from rookery.core.enums import (
    PROMOTION_TYPES,
    CastlingRights,
    Color,
    GameResult,
    MoveFlag,
    PieceType,
)
from rookery.core.history import PositionHistory
from rookery.core.move import Move, MoveEffects
from rookery.core.move_generator import MoveGenerator
from rookery.core.notation import (
    STARTING_FEN,
    en_passant_square,
    position_from_fen,
    position_to_fen,
)
from rookery.core.piece import Piece
from rookery.core.position import Position
from rookery.core.rules import Rules
from rookery.core.types import (
    Square,
    col_of,
    make_square,
    parse_square,
    row_of,
    square_name,
)

__all__ = [
    # Enums / flags
    "CastlingRights",
    "Color",
    "GameResult",
    "MoveFlag",
    "PieceType",
    "PROMOTION_TYPES",
    # Types / helpers
    "Square",
    "col_of",
    "make_square",
    "parse_square",
    "row_of",
    "square_name",
    # Domain objects
    "Board",
    "Move",
    "MoveEffects",
    "MoveGenerator",
    "Piece",
    "Position",
    "PositionHistory",
    "Rules",
    # Path / attack queries
    "en_passant_target",
    "is_aligned",
    "is_path_clear",
    "is_square_attacked",
    # Notation
    "STARTING_FEN",
    "en_passant_square",
    "position_from_fen",
    "position_to_fen",
]
