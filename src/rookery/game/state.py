"""Game state machine: phase transitions, end conditions and move history."""

from __future__ import annotations

import logging
from dataclasses import InitVar, dataclass, field, replace

from rookery.core.enums import Color, PieceType
from rookery.core.history import PositionHistory
from rookery.core.move import Move, MoveEffects
from rookery.core.move_generator import MoveGenerator
from rookery.core.notation import STARTING_FEN, position_from_fen, position_to_fen
from rookery.core.position import Position
from rookery.core.rules import Rules
from rookery.game.interfaces import GameEndReason, GamePhase, GameStatus, RuleSet

_LOGGER = logging.getLogger(__name__)


@dataclass
class MoveRecord:
    """A single entry in the move history."""

    move: Move
    effects: MoveEffects
    fen_after: str
    turn_skipped: bool = False


@dataclass(frozen=True, slots=True)
class GameSnapshot:
    """Opaque save/restore payload for :class:`GameState`."""

    fen: str
    history: tuple[str, ...]
    last_move: Move | None
    status: GameStatus
    pending_move: Move | None = None
    pending_effects: MoveEffects | None = None


@dataclass
class GameState:
    """Owns one game: position, phase, status, pending promotion, history.

    This is a pure data/logic class with no threading and no UI. Callers check
    legality before :meth:`apply_move`; rejection handling lives in the
    controller.
    """

    rules: RuleSet = field(default_factory=RuleSet.standard)
    position: Position = field(init=False)
    phase: GamePhase = field(default=GamePhase.AWAITING_MOVE, init=False)
    status: GameStatus = field(default_factory=GameStatus, init=False)
    pending_move: Move | None = field(default=None, init=False)
    pending_effects: MoveEffects | None = field(default=None, init=False)
    move_history: list[MoveRecord] = field(default_factory=list, init=False)
    start_fen: str = field(default=STARTING_FEN, init=False)
    fen: InitVar[str | None] = None

    def __post_init__(self, fen: str | None) -> None:
        self.setup(fen)

    # ── Initialisation ───────────────────────────────────────────────────

    def setup(self, fen: str | None = None) -> None:
        """Initialise (or reset) the game."""
        self.start_fen = fen or STARTING_FEN
        self.position = position_from_fen(self.start_fen)
        self.phase = GamePhase.AWAITING_MOVE
        self.status = GameStatus.in_progress()
        self.pending_move = None
        self.pending_effects = None
        self.move_history = []

    # ── Move application ─────────────────────────────────────────────────

    def apply_move(self, move: Move) -> MoveRecord | None:
        """Apply a validated move.

        Returns the history record, or ``None`` when the move is a promotion
        still waiting for :meth:`complete_promotion`.
        """
        effects = self.position.apply_move(move)
        if effects.promotion_pending:
            self.pending_move = move
            self.pending_effects = effects
            self.phase = GamePhase.AWAITING_PROMOTION
            return None
        return self._complete(move, effects)

    def complete_promotion(self, piece_type: PieceType) -> MoveRecord:
        """Finish the pending promotion with *piece_type*."""
        if self.pending_move is None or self.pending_effects is None:
            raise ValueError("No promotion pending")
        move = self.pending_move.with_promotion(piece_type)
        self.position.promote(move.to_sq, piece_type)
        effects = replace(
            self.pending_effects, promoted_to=piece_type, promotion_pending=False
        )
        self.pending_move = None
        self.pending_effects = None
        self.phase = GamePhase.AWAITING_MOVE
        return self._complete(move, effects)

    def _complete(self, move: Move, effects: MoveEffects) -> MoveRecord:
        self.position.finish_move(move)
        skipped = self._check_game_over()
        record = MoveRecord(
            move=move,
            effects=effects,
            fen_after=position_to_fen(self.position),
            turn_skipped=skipped,
        )
        self.move_history.append(record)
        return record

    # ── Save / restore ───────────────────────────────────────────────────

    def snapshot(self) -> GameSnapshot:
        return GameSnapshot(
            fen=position_to_fen(self.position),
            history=tuple(self.position.history),
            last_move=self.position.last_move,
            status=self.status,
            pending_move=self.pending_move,
            pending_effects=self.pending_effects,
        )

    def restore(self, snapshot: GameSnapshot) -> None:
        """Replace the whole game with *snapshot*. Move records are not kept."""
        if (snapshot.pending_move is None) != (snapshot.pending_effects is None):
            raise ValueError("Snapshot has an incomplete pending promotion")
        position = position_from_fen(snapshot.fen)
        position.last_move = snapshot.last_move
        position.history = PositionHistory(snapshot.history)

        self.start_fen = snapshot.fen
        self.position = position
        self.status = snapshot.status
        self.pending_move = snapshot.pending_move
        self.pending_effects = snapshot.pending_effects
        self.move_history = []
        if snapshot.status.is_terminal:
            self.phase = GamePhase.GAME_OVER
        elif snapshot.pending_move is not None:
            self.phase = GamePhase.AWAITING_PROMOTION
        else:
            self.phase = GamePhase.AWAITING_MOVE

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def side_to_move(self) -> Color:
        return self.position.side_to_move

    @property
    def is_game_over(self) -> bool:
        return self.phase == GamePhase.GAME_OVER

    @property
    def awaiting_promotion(self) -> bool:
        return self.phase == GamePhase.AWAITING_PROMOTION

    @property
    def ply_count(self) -> int:
        """Number of completed half-moves."""
        return len(self.move_history)

    @property
    def halfmove_clock(self) -> int:
        return self.position.halfmove_clock

    def legal_moves(self) -> list[Move]:
        """Legal moves for the side to move."""
        return MoveGenerator(self.position).generate_moves(self.side_to_move)

    # ── Internal ─────────────────────────────────────────────────────────

    def _check_game_over(self) -> bool:
        """Evaluate end conditions after a completed move.

        Returns whether the new side to move had to be skipped.
        """
        pos = self.position

        eliminated = Rules.eliminated_color(pos)
        if eliminated is not None:
            self._end(GameStatus.win(eliminated.opposite))
            return False

        if Rules.is_stalemate(pos):
            self._end(GameStatus.draw(GameEndReason.STALEMATE))
            return False

        skipped = Rules.must_skip_turn(pos)
        if skipped:
            _LOGGER.info("%s has no legal moves, turn skipped", pos.side_to_move)
            pos.pass_turn()

        if Rules.is_threefold_repetition(pos, self.rules.repetition_limit):
            self._end(GameStatus.draw(GameEndReason.THREEFOLD_REPETITION))
        elif Rules.is_fifty_move_rule(pos, self.rules.halfmove_limit):
            self._end(GameStatus.draw(GameEndReason.FIFTY_MOVE_RULE))
        return skipped

    def _end(self, status: GameStatus) -> None:
        self.status = status
        self.phase = GamePhase.GAME_OVER
        _LOGGER.info("Game over: %s", status)
