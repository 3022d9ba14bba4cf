"""
Othello game module.
This package contains the board rules, the text codec and the game flow.
"""

from .board import Board, EMPTY, DARK, LIGHT
from .codec import encode, decode
from .history import History
from .game import ReversiGame

__all__ = ['Board', 'EMPTY', 'DARK', 'LIGHT', 'encode', 'decode', 'History', 'ReversiGame']
