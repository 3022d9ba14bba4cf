"""
Othello: rules engine and alpha-beta move search.
"""

from .errors import OthelloError, IllegalMoveError
from .game import Board, ReversiGame, EMPTY, DARK, LIGHT
from .search import MinimaxSearch

__version__ = '0.1'

__all__ = [
    'Board', 'ReversiGame', 'MinimaxSearch',
    'EMPTY', 'DARK', 'LIGHT',
    'OthelloError', 'IllegalMoveError',
]
