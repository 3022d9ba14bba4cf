"""
Arena module for engine matches between search depths.
"""
from .arena import Arena

__all__ = ['Arena']
