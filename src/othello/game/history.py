"""
Undo/redo history of a game.
"""
from typing import List

from .board import Board, DARK


class History:
    """
    Sequence of boards with a cursor on the current one.

    New boards go right after the cursor, discarding any boards that were
    undone, and the cursor moves onto them. Only boards with dark (the human
    side) to move are recorded.
    """

    def __init__(self, board: Board):
        self._boards: List[Board] = [board]
        self.pos = 0

    def add_board(self, board: Board):
        """Record `board` after the current board and make it current."""
        if board.turn != DARK:
            return

        if not self.at_end():
            del self._boards[self.pos + 1:]

        self._boards.append(board)
        self.pos = len(self._boards) - 1

    def at_start(self) -> bool:
        return self.pos == 0

    def at_end(self) -> bool:
        return self.pos == len(self._boards) - 1

    def backward(self):
        if not self.at_start():
            self.pos -= 1

    def forward(self):
        if not self.at_end():
            self.pos += 1

    @property
    def current(self) -> Board:
        return self._boards[self.pos]

    def __len__(self) -> int:
        return len(self._boards)
