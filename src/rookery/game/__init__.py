"""Game management layer: controller, state machine and Qt bridge.

Quick start::

    from rookery.game import GameController

    ctrl = GameController()
    outcome = ctrl.attempt_move("e2", "e4")
    assert outcome.turn_passed
"""

from rookery.game.controller import GameController, GameEvents
from rookery.game.interfaces import (
    GameEndReason,
    GamePhase,
    GameStatus,
    IGameController,
    MoveOutcome,
    OutcomeKind,
    RejectReason,
    RuleSet,
)
from rookery.game.state import GameSnapshot, GameState, MoveRecord

__all__ = [
    # Interfaces / values
    "GameEndReason",
    "GamePhase",
    "GameStatus",
    "IGameController",
    "MoveOutcome",
    "OutcomeKind",
    "RejectReason",
    "RuleSet",
    # Concrete
    "GameController",
    "GameEvents",
    "GameSnapshot",
    "GameState",
    "MoveRecord",
]
