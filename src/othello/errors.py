"""
Exceptions raised by the Othello engine.
"""


class OthelloError(Exception):
    """Base exception for the engine."""


class IllegalMoveError(OthelloError):
    """Move not legal under the current board state."""
