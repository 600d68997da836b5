"""FEN parsing and serialization.

Positions keep the last move rather than an en passant target square. On
output the target square is derived from a last two-row pawn advance; on
input an en passant field is turned back into that advance.
"""

from __future__ import annotations

from rookery.core.attacks import en_passant_target
from rookery.core.board import Board
from rookery.core.enums import CastlingRights, Color, MoveFlag
from rookery.core.move import Move
from rookery.core.piece import Piece
from rookery.core.position import Position
from rookery.core.types import (
    Square,
    make_square,
    parse_square,
    row_of,
    square_name,
)

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_CASTLING_CHARS: tuple[tuple[str, CastlingRights], ...] = (
    ("K", CastlingRights.WHITE_KINGSIDE),
    ("Q", CastlingRights.WHITE_QUEENSIDE),
    ("k", CastlingRights.BLACK_KINGSIDE),
    ("q", CastlingRights.BLACK_QUEENSIDE),
)


def board_from_placement(placement: str) -> Board:
    """Parse the FEN piece-placement field into a :class:`Board`."""
    rows = placement.split("/")
    if len(rows) != 8:
        raise ValueError(f"Invalid FEN board (must contain 8 ranks): {placement!r}")
    board = Board()
    for row, row_text in enumerate(rows):
        col = 0
        for ch in row_text:
            if ch.isdigit():
                step = int(ch)
                if not (1 <= step <= 8):
                    raise ValueError(f"Invalid FEN digit {ch!r}: {placement!r}")
                col += step
            else:
                if col >= 8:
                    raise ValueError(f"Invalid FEN rank width: {placement!r}")
                board[make_square(row, col)] = Piece.from_char(ch)
                col += 1
            if col > 8:
                raise ValueError(f"Invalid FEN rank width: {placement!r}")
        if col != 8:
            raise ValueError(f"Invalid FEN rank width: {placement!r}")
    return board


def position_from_fen(fen: str) -> Position:
    """Parse a FEN string into a :class:`Position` with an empty history."""
    parts = fen.split()
    if not (4 <= len(parts) <= 6):
        raise ValueError(f"Invalid FEN (need 4-6 fields): {fen!r}")

    placement, side_part, castling_part, ep_part = parts[:4]
    board = board_from_placement(placement)

    if side_part == "w":
        side = Color.WHITE
    elif side_part == "b":
        side = Color.BLACK
    else:
        raise ValueError(f"Invalid FEN side-to-move field: {side_part!r}")

    castling = CastlingRights.NONE
    if castling_part != "-":
        rights = dict(_CASTLING_CHARS)
        for ch in castling_part:
            right = rights.pop(ch, None)
            if right is None:
                raise ValueError(f"Invalid FEN castling field: {castling_part!r}")
            castling |= right

    last_move: Move | None = None
    if ep_part != "-":
        last_move = _last_move_from_en_passant(parse_square(ep_part), side)

    halfmove = _parse_counter(parts, 4, default=0, minimum=0, label="halfmove clock")
    fullmove = _parse_counter(parts, 5, default=1, minimum=1, label="fullmove number")

    return Position(board, side, castling, last_move, halfmove, fullmove)


def position_to_fen(pos: Position) -> str:
    """Serialise a :class:`Position` to FEN."""
    side_str = "w" if pos.side_to_move == Color.WHITE else "b"

    castling_str = "".join(ch for ch, right in _CASTLING_CHARS if pos.castling & right)
    if not castling_str:
        castling_str = "-"

    ep = en_passant_square(pos)
    ep_str = square_name(ep) if ep is not None else "-"

    return (
        f"{pos.board.placement()} {side_str} {castling_str} {ep_str} "
        f"{pos.halfmove_clock} {pos.fullmove_number}"
    )


def en_passant_square(pos: Position) -> Square | None:
    """Square skipped by a pawn whose two-row advance was the last move."""
    return en_passant_target(pos.board, pos.last_move)


# ── Internal ─────────────────────────────────────────────────────────────────


def _last_move_from_en_passant(ep: Square, side: Color) -> Move:
    # The pawn that skipped ep belongs to the side that just moved.
    mover = side.opposite
    if row_of(ep) != mover.pawn_row + mover.forward:
        raise ValueError(
            f"Invalid FEN en-passant square for side-to-move: {square_name(ep)!r}"
        )
    from_sq = ep - 8 * mover.forward
    to_sq = ep + 8 * mover.forward
    return Move(from_sq, to_sq, MoveFlag.DOUBLE_PAWN)


def _parse_counter(
    parts: list[str], index: int, *, default: int, minimum: int, label: str
) -> int:
    if len(parts) <= index:
        return default
    try:
        value = int(parts[index])
    except ValueError:
        raise ValueError(f"Invalid FEN {label}: {parts[index]!r}") from None
    if value < minimum:
        raise ValueError(f"Invalid FEN {label}: {parts[index]!r}")
    return value
