"""Path and attack queries shared by move legality and castling checks."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rookery.core.enums import Color, PieceType
from rookery.core.types import Square, col_of, make_square, on_board, row_of

if TYPE_CHECKING:
    from rookery.core.board import Board
    from rookery.core.move import Move

# Offsets are (row delta, column delta).
KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS


# -- Precomputed lookup tables ---------------------------------------------


def _build_targets(
    offsets: tuple[tuple[int, int], ...],
) -> tuple[tuple[Square, ...], ...]:
    targets: list[tuple[Square, ...]] = []
    for sq in range(64):
        row, col = row_of(sq), col_of(sq)
        targets.append(
            tuple(
                make_square(row + dr, col + dc)
                for dr, dc in offsets
                if on_board(row + dr, col + dc)
            )
        )
    return tuple(targets)


def _build_rays(
    directions: tuple[tuple[int, int], ...],
) -> tuple[tuple[tuple[Square, ...], ...], ...]:
    rays_per_square: list[tuple[tuple[Square, ...], ...]] = []
    for sq in range(64):
        square_rays: list[tuple[Square, ...]] = []
        for dr, dc in directions:
            row, col = row_of(sq) + dr, col_of(sq) + dc
            ray: list[Square] = []
            while on_board(row, col):
                ray.append(make_square(row, col))
                row += dr
                col += dc
            square_rays.append(tuple(ray))
        rays_per_square.append(tuple(square_rays))
    return tuple(rays_per_square)


KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
KING_TARGETS = _build_targets(KING_OFFSETS)
BISHOP_RAYS = _build_rays(BISHOP_DIRS)
ROOK_RAYS = _build_rays(ROOK_DIRS)
QUEEN_RAYS = _build_rays(QUEEN_DIRS)

_DIAGONAL_SLIDERS = (PieceType.BISHOP, PieceType.QUEEN)
_STRAIGHT_SLIDERS = (PieceType.ROOK, PieceType.QUEEN)


# -- Path queries -----------------------------------------------------------


def is_aligned(from_sq: Square, to_sq: Square) -> bool:
    """Whether two distinct squares share a rank, file or diagonal."""
    if from_sq == to_sq:
        return False
    dr = row_of(to_sq) - row_of(from_sq)
    dc = col_of(to_sq) - col_of(from_sq)
    return dr == 0 or dc == 0 or abs(dr) == abs(dc)


def is_path_clear(board: Board, from_sq: Square, to_sq: Square) -> bool:
    """Are all squares strictly between *from_sq* and *to_sq* empty?

    Only meaningful for aligned squares; callers check alignment first.
    """
    dr = row_of(to_sq) - row_of(from_sq)
    dc = col_of(to_sq) - col_of(from_sq)
    step = (dr > 0) - (dr < 0), (dc > 0) - (dc < 0)
    row, col = row_of(from_sq) + step[0], col_of(from_sq) + step[1]
    while (row, col) != (row_of(to_sq), col_of(to_sq)):
        if board[make_square(row, col)] is not None:
            return False
        row += step[0]
        col += step[1]
    return True


# -- Attack detection -------------------------------------------------------


def is_square_attacked(
    board: Board,
    sq: Square,
    by_color: Color,
    last_move: Move | None = None,
) -> bool:
    """Could any piece of *by_color* legally move onto *sq*?

    Turn order is ignored. Kings attack adjacent squares only, never via
    castling. Pawns follow their move rules: a push reaches an empty square
    ahead, a diagonal step reaches an occupied square or the en passant
    square left by *last_move*. A square holding a *by_color* piece is never
    attacked by that color.
    """
    occupant = board[sq]
    if occupant is not None and occupant.color == by_color:
        return False

    if _pawn_reaches(board, sq, by_color, last_move):
        return True

    for from_sq in KNIGHT_TARGETS[sq]:
        piece = board[from_sq]
        if (
            piece is not None
            and piece.color == by_color
            and piece.piece_type == PieceType.KNIGHT
        ):
            return True

    for from_sq in KING_TARGETS[sq]:
        piece = board[from_sq]
        if (
            piece is not None
            and piece.color == by_color
            and piece.piece_type == PieceType.KING
        ):
            return True

    return _ray_attack(board, BISHOP_RAYS[sq], by_color, _DIAGONAL_SLIDERS) or (
        _ray_attack(board, ROOK_RAYS[sq], by_color, _STRAIGHT_SLIDERS)
    )


def _is_pawn_of(board: Board, row: int, col: int, color: Color) -> bool:
    if not on_board(row, col):
        return False
    piece = board[make_square(row, col)]
    return (
        piece is not None
        and piece.color == color
        and piece.piece_type == PieceType.PAWN
    )


def en_passant_target(board: Board, last_move: Move | None) -> Square | None:
    """Square skipped by the pawn whose two-row advance was *last_move*."""
    if last_move is None:
        return None
    piece = board[last_move.to_sq]
    if piece is None or piece.piece_type != PieceType.PAWN:
        return None
    if col_of(last_move.from_sq) != col_of(last_move.to_sq):
        return None
    if abs(row_of(last_move.to_sq) - row_of(last_move.from_sq)) != 2:
        return None
    skipped_row = (row_of(last_move.from_sq) + row_of(last_move.to_sq)) // 2
    return make_square(skipped_row, col_of(last_move.to_sq))


def _pawn_reaches(
    board: Board, sq: Square, by_color: Color, last_move: Move | None
) -> bool:
    forward = by_color.forward
    row, col = row_of(sq), col_of(sq)
    behind = row - forward

    if board[sq] is None:
        # Single push, or double push from the home row over an empty square.
        if _is_pawn_of(board, behind, col, by_color):
            return True
        if (
            behind - forward == by_color.pawn_row
            and on_board(behind, col)
            and board[make_square(behind, col)] is None
            and _is_pawn_of(board, behind - forward, col, by_color)
        ):
            return True
        if sq != en_passant_target(board, last_move):
            return False
        victim = board[make_square(behind, col)]
        if victim is None or victim.color == by_color:
            return False

    return _is_pawn_of(board, behind, col - 1, by_color) or _is_pawn_of(
        board, behind, col + 1, by_color
    )


def _ray_attack(
    board: Board,
    rays: tuple[tuple[Square, ...], ...],
    by_color: Color,
    sliders: tuple[PieceType, ...],
) -> bool:
    for ray in rays:
        for from_sq in ray:
            piece = board[from_sq]
            if piece is None:
                continue
            if piece.color == by_color and piece.piece_type in sliders:
                return True
            break
    return False
