"""Rookery: a chess rules engine.

``rookery.core`` holds the board, move legality and move application;
``rookery.game`` wraps them in a turn-based state machine for a UI to drive.
"""

__version__ = "0.1.0"
