"""
Move search for Othello.
"""
from .minimax import MinimaxSearch

__all__ = ['MinimaxSearch']
