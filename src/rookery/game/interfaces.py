"""Value types and abstract interfaces for the game layer.

The UI talks to a :class:`IGameController`; everything it gets back is one of
the immutable values defined here.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import IntEnum, auto
from typing import TYPE_CHECKING

from rookery.core.enums import Color, GameResult, PieceType
from rookery.core.rules import FIFTY_MOVE_HALFMOVES, THREEFOLD_COUNT

if TYPE_CHECKING:
    from rookery.core.move import Move, MoveEffects
    from rookery.core.types import Square
    from rookery.game.state import GameState


# ── Game phase FSM states ────────────────────────────────────────────────────


class GamePhase(IntEnum):
    """Finite-state-machine states for a game."""

    AWAITING_MOVE = auto()
    AWAITING_PROMOTION = auto()
    GAME_OVER = auto()


class GameEndReason(IntEnum):
    """Why a finished game ended."""

    ELIMINATION = auto()
    STALEMATE = auto()
    THREEFOLD_REPETITION = auto()
    FIFTY_MOVE_RULE = auto()


@dataclass(frozen=True, slots=True)
class GameStatus:
    """Result plus, once the game is over, the reason it ended."""

    result: GameResult = GameResult.IN_PROGRESS
    reason: GameEndReason | None = None

    @classmethod
    def in_progress(cls) -> GameStatus:
        return cls()

    @classmethod
    def win(cls, color: Color) -> GameStatus:
        return cls(GameResult.win_for(color), GameEndReason.ELIMINATION)

    @classmethod
    def draw(cls, reason: GameEndReason) -> GameStatus:
        return cls(GameResult.DRAW, reason)

    @property
    def is_terminal(self) -> bool:
        return self.result != GameResult.IN_PROGRESS

    @property
    def winner(self) -> Color | None:
        if self.result == GameResult.WHITE_WINS:
            return Color.WHITE
        if self.result == GameResult.BLACK_WINS:
            return Color.BLACK
        return None

    def __str__(self) -> str:
        if self.reason is None:
            return self.result.name.lower()
        return f"{self.result.name.lower()} ({self.reason.name.lower()})"


# ── Move outcomes ────────────────────────────────────────────────────────────


class OutcomeKind(IntEnum):
    REJECTED = auto()
    AWAITING_PROMOTION = auto()
    APPLIED = auto()


class RejectReason(IntEnum):
    """Why a move or promotion request was refused."""

    INVALID_MOVE = auto()
    GAME_ALREADY_ENDED = auto()
    PROMOTION_PENDING = auto()
    NO_PENDING_PROMOTION = auto()
    INVALID_PROMOTION_KIND = auto()


@dataclass(frozen=True, slots=True)
class MoveOutcome:
    """Result of :meth:`IGameController.attempt_move` / ``choose_promotion``.

    A rejected outcome carries a reason and a message and nothing else; the
    game state is untouched in that case.
    """

    kind: OutcomeKind
    status: GameStatus
    move: Move | None = None
    effects: MoveEffects | None = None
    turn_passed: bool = False
    turn_skipped: bool = False
    reason: RejectReason | None = None
    message: str = ""

    @classmethod
    def rejected(
        cls, reason: RejectReason, status: GameStatus, message: str = ""
    ) -> MoveOutcome:
        return cls(OutcomeKind.REJECTED, status, reason=reason, message=message)

    @property
    def accepted(self) -> bool:
        return self.kind != OutcomeKind.REJECTED

    @property
    def game_ended(self) -> bool:
        return self.kind == OutcomeKind.APPLIED and self.status.is_terminal

    @property
    def verdict(self) -> GameStatus | None:
        return self.status if self.game_ended else None


# ── Rule configuration ───────────────────────────────────────────────────────


class RuleSet:
    """Immutable draw-rule thresholds.

    Args:
        halfmove_limit: Quiet half-moves (no capture, no pawn move) that
            force a draw.
        repetition_limit: Occurrences of one position that force a draw.
    """

    __slots__ = ("halfmove_limit", "repetition_limit")

    def __init__(
        self,
        halfmove_limit: int = FIFTY_MOVE_HALFMOVES,
        repetition_limit: int = THREEFOLD_COUNT,
    ) -> None:
        if halfmove_limit < 1:
            raise ValueError(f"halfmove_limit must be positive: {halfmove_limit}")
        if repetition_limit < 1:
            raise ValueError(
                f"repetition_limit must be positive: {repetition_limit}"
            )
        self.halfmove_limit = halfmove_limit
        self.repetition_limit = repetition_limit

    @classmethod
    def standard(cls) -> RuleSet:
        """Fifty-move rule and threefold repetition."""
        return cls(FIFTY_MOVE_HALFMOVES, THREEFOLD_COUNT)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RuleSet):
            return NotImplemented
        return (self.halfmove_limit, self.repetition_limit) == (
            other.halfmove_limit,
            other.repetition_limit,
        )

    def __hash__(self) -> int:
        return hash((self.halfmove_limit, self.repetition_limit))

    def __repr__(self) -> str:
        return (
            f"RuleSet(halfmove_limit={self.halfmove_limit}, "
            f"repetition_limit={self.repetition_limit})"
        )


# ── Abstract interfaces ─────────────────────────────────────────────────────


class IGameController(ABC):
    """Interface the UI layer drives."""

    @abstractmethod
    def new_game(self, fen: str | None = None) -> GameState:
        """Start (or restart) a game."""

    @abstractmethod
    def legal_destinations(self, from_sq: Square | str) -> set[Square]:
        """Destinations for the active player's piece on *from_sq*."""

    @abstractmethod
    def attempt_move(
        self,
        from_sq: Square | str,
        to_sq: Square | str,
        promotion: PieceType | None = None,
    ) -> MoveOutcome:
        """Validate and apply a move."""

    @abstractmethod
    def choose_promotion(self, square: Square | str, kind: PieceType) -> MoveOutcome:
        """Complete a pending promotion."""

    @abstractmethod
    def status(self) -> GameStatus:
        """Current game status."""
