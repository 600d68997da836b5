"""Qt bridge exposing a :class:`GameController` through signals and slots."""

from __future__ import annotations

import logging

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from rookery.core.enums import Color, PieceType
from rookery.core.types import Square
from rookery.game.controller import GameController
from rookery.game.interfaces import GameStatus, MoveOutcome

_LOGGER = logging.getLogger(__name__)


class GameBridge(QObject):
    """Forwards UI requests to a controller and re-emits its events.

    Lives on the UI thread; every slot runs the controller call to completion
    before returning.
    """

    move_applied = pyqtSignal(object)  # MoveOutcome
    move_rejected = pyqtSignal(object)  # MoveOutcome
    promotion_required = pyqtSignal(int)  # square awaiting a piece choice
    turn_skipped = pyqtSignal(object)  # Color that lost its turn
    game_over = pyqtSignal(object)  # GameStatus
    game_reset = pyqtSignal()

    def __init__(
        self,
        controller: GameController | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._controller = controller if controller is not None else GameController()
        events = self._controller.events
        events.on_move.append(self._forward_move)
        events.on_rejected.append(self._forward_rejected)
        events.on_promotion_required.append(self._forward_promotion)
        events.on_turn_skipped.append(self._forward_skip)
        events.on_game_over.append(self._forward_game_over)

    @property
    def controller(self) -> GameController:
        return self._controller

    # ── Slots ────────────────────────────────────────────────────────────

    @pyqtSlot(int, int)
    def attempt_move(self, from_sq: Square, to_sq: Square) -> None:
        self._controller.attempt_move(from_sq, to_sq)

    @pyqtSlot(int, int)
    def choose_promotion(self, square: Square, kind: int) -> None:
        try:
            piece_type = PieceType(kind)
        except ValueError:
            _LOGGER.warning("Unknown piece type id %d for promotion", kind)
            return
        self._controller.choose_promotion(square, piece_type)

    @pyqtSlot()
    def new_game(self) -> None:
        self._controller.new_game()
        self.game_reset.emit()

    # ── Event forwarding ─────────────────────────────────────────────────

    def _forward_move(self, outcome: MoveOutcome) -> None:
        self.move_applied.emit(outcome)

    def _forward_rejected(self, outcome: MoveOutcome) -> None:
        self.move_rejected.emit(outcome)

    def _forward_promotion(self, square: Square) -> None:
        self.promotion_required.emit(square)

    def _forward_skip(self, color: Color) -> None:
        self.turn_skipped.emit(color)

    def _forward_game_over(self, status: GameStatus) -> None:
        self.game_over.emit(status)
