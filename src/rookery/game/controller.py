"""GameController, the single entry point a UI drives.

Validates every request before touching the game, applies moves through
:class:`GameState`, and reports back with :class:`MoveOutcome` values plus
simple callbacks so the UI / tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from rookery.core.enums import PROMOTION_TYPES, Color, MoveFlag, PieceType
from rookery.core.move_generator import MoveGenerator
from rookery.core.types import Square, is_valid_square, parse_square, square_name
from rookery.game.interfaces import (
    GameStatus,
    IGameController,
    MoveOutcome,
    OutcomeKind,
    RejectReason,
    RuleSet,
)
from rookery.game.state import GameSnapshot, GameState, MoveRecord

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

OutcomeCallback = Callable[[MoveOutcome], None]
PromotionCallback = Callable[[Square], None]  # square awaiting a piece choice
TurnSkipCallback = Callable[[Color], None]  # color that lost its turn
GameOverCallback = Callable[[GameStatus], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[OutcomeCallback] = field(default_factory=list)
    on_promotion_required: list[PromotionCallback] = field(default_factory=list)
    on_rejected: list[OutcomeCallback] = field(default_factory=list)
    on_turn_skipped: list[TurnSkipCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)


def _coerce_square(value: Square | str) -> Square:
    if isinstance(value, str):
        return parse_square(value)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"Invalid square: {value!r}")
    if not is_valid_square(value):
        raise ValueError(f"Square out of range: {value}")
    return value


# ── Controller ───────────────────────────────────────────────────────────────


class GameController(IGameController):
    """Orchestrates one game: validates moves, applies them, evaluates the
    end of the game and notifies listeners.

    Every operation runs to completion before returning and must not be
    re-entered from a callback. A rejected request never changes state.
    """

    __slots__ = ("_state", "_rules", "events")

    def __init__(self, rules: RuleSet | None = None, fen: str | None = None) -> None:
        self._rules = rules if rules is not None else RuleSet.standard()
        self._state = GameState(self._rules, fen)
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def rules(self) -> RuleSet:
        return self._rules

    @property
    def side_to_move(self) -> Color:
        return self._state.side_to_move

    # ── IGameController impl ─────────────────────────────────────────────

    def new_game(self, fen: str | None = None) -> GameState:
        """Discard the current game and start a fresh one."""
        self._state = GameState(self._rules, fen)
        _LOGGER.debug("New game from %s", self._state.start_fen)
        return self._state

    def status(self) -> GameStatus:
        return self._state.status

    def legal_destinations(self, from_sq: Square | str) -> set[Square]:
        if self._state.is_game_over or self._state.awaiting_promotion:
            return set()
        try:
            sq = _coerce_square(from_sq)
        except ValueError:
            return set()
        piece = self._state.position.board[sq]
        if piece is None or piece.color != self._state.side_to_move:
            return set()
        return MoveGenerator(self._state.position).legal_destinations(sq)

    def attempt_move(
        self,
        from_sq: Square | str,
        to_sq: Square | str,
        promotion: PieceType | None = None,
    ) -> MoveOutcome:
        if self._state.is_game_over:
            return self._reject(RejectReason.GAME_ALREADY_ENDED, "Game is over")
        if self._state.awaiting_promotion:
            return self._reject(
                RejectReason.PROMOTION_PENDING, "A promotion choice is pending"
            )

        try:
            src = _coerce_square(from_sq)
            dst = _coerce_square(to_sq)
        except ValueError as exc:
            return self._reject(RejectReason.INVALID_MOVE, str(exc))

        position = self._state.position
        mover = position.side_to_move
        piece = position.board[src]
        if piece is None:
            return self._reject(
                RejectReason.INVALID_MOVE, f"No piece on {square_name(src)}"
            )
        if piece.color != mover:
            return self._reject(
                RejectReason.INVALID_MOVE, f"It is {mover}'s turn to move"
            )

        move = MoveGenerator(position).build_move(src, dst)
        if move is None:
            return self._reject(
                RejectReason.INVALID_MOVE,
                f"Illegal move {square_name(src)}{square_name(dst)}",
            )

        if promotion is not None and move.flag == MoveFlag.PROMOTION:
            if promotion not in PROMOTION_TYPES:
                return self._reject(
                    RejectReason.INVALID_PROMOTION_KIND,
                    f"Cannot promote to {promotion!r}",
                )
            move = move.with_promotion(PieceType(promotion))

        record = self._state.apply_move(move)
        if record is None:
            _LOGGER.debug("%s awaits a promotion choice", move.uci)
            outcome = MoveOutcome(
                OutcomeKind.AWAITING_PROMOTION,
                self._state.status,
                move=move,
                effects=self._state.pending_effects,
            )
            for cb in self.events.on_promotion_required:
                cb(move.to_sq)
            return outcome

        return self._applied(record, mover)

    def choose_promotion(self, square: Square | str, kind: PieceType) -> MoveOutcome:
        if self._state.is_game_over:
            return self._reject(RejectReason.GAME_ALREADY_ENDED, "Game is over")
        pending = self._state.pending_move
        if pending is None:
            return self._reject(
                RejectReason.NO_PENDING_PROMOTION, "No promotion is pending"
            )
        try:
            sq = _coerce_square(square)
        except ValueError as exc:
            return self._reject(RejectReason.NO_PENDING_PROMOTION, str(exc))
        if sq != pending.to_sq:
            return self._reject(
                RejectReason.NO_PENDING_PROMOTION,
                f"No promotion pending on {square_name(sq)}",
            )
        if kind not in PROMOTION_TYPES:
            return self._reject(
                RejectReason.INVALID_PROMOTION_KIND, f"Cannot promote to {kind!r}"
            )

        mover = self._state.side_to_move
        record = self._state.complete_promotion(PieceType(kind))
        return self._applied(record, mover)

    # ── UI helpers ───────────────────────────────────────────────────────

    def capture_targets(self) -> set[Square]:
        """Enemy pieces the active player could capture right now."""
        if self._state.is_game_over or self._state.awaiting_promotion:
            return set()
        return MoveGenerator(self._state.position).capture_targets(
            self._state.side_to_move
        )

    def classify(self, from_sq: Square | str, to_sq: Square | str) -> MoveFlag | None:
        """Move flag for an active-player move, ``None`` if it is not legal."""
        try:
            src = _coerce_square(from_sq)
            dst = _coerce_square(to_sq)
        except ValueError:
            return None
        if dst not in self.legal_destinations(src):
            return None
        move = MoveGenerator(self._state.position).build_move(src, dst)
        return move.flag if move is not None else None

    def snapshot(self) -> GameSnapshot:
        return self._state.snapshot()

    def restore(self, snapshot: GameSnapshot) -> None:
        """Replace the current game with *snapshot* (raises ``ValueError``)."""
        state = GameState(self._rules)
        state.restore(snapshot)
        self._state = state

    # ── Internal helpers ─────────────────────────────────────────────────

    def _reject(self, reason: RejectReason, message: str) -> MoveOutcome:
        _LOGGER.debug("Rejected (%s): %s", reason.name, message)
        outcome = MoveOutcome.rejected(reason, self._state.status, message)
        for cb in self.events.on_rejected:
            cb(outcome)
        return outcome

    def _applied(self, record: MoveRecord, mover: Color) -> MoveOutcome:
        status = self._state.status
        outcome = MoveOutcome(
            OutcomeKind.APPLIED,
            status,
            move=record.move,
            effects=record.effects,
            turn_passed=self._state.side_to_move != mover,
            turn_skipped=record.turn_skipped,
        )
        _LOGGER.debug("Applied %s", record.move.uci)

        for cb in self.events.on_move:
            cb(outcome)
        if record.turn_skipped:
            for skip_cb in self.events.on_turn_skipped:
                skip_cb(mover.opposite)
        if status.is_terminal:
            for over_cb in self.events.on_game_over:
                over_cb(status)
        return outcome
