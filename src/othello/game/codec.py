"""
Text encoding of a board, used to save and load positions.

The first line holds the side to move ('*' dark, '0' light). The next eight
lines are the rows, top to bottom: '*' dark, 'O' light, '-' or '_' empty.
'_' marks an empty cell that is a legal move for the side to move; both
characters read back as empty.
"""
from typing import Optional

from .board import Board, DARK, LIGHT

TURN_SYMBOLS = {DARK: '*', LIGHT: '0'}
TURN_FROM_SYMBOL = {symbol: colour for colour, symbol in TURN_SYMBOLS.items()}


def encode(board: Board) -> str:
    """Return the text form of `board`."""
    return TURN_SYMBOLS[board.turn] + "\n" + board.printable()


def decode(text: str) -> Optional[Board]:
    """
    Parse the text form of a board.

    Args:
        text: Encoded board, as written by `encode`

    Returns:
        The decoded Board, or None if `text` is malformed
    """
    lines = text.split()
    if len(lines) != Board.SIZE + 1:
        return None

    turn = TURN_FROM_SYMBOL.get(lines[0])
    if turn is None:
        return None

    dark = light = 0
    for y, line in enumerate(lines[1:]):
        if len(line) != Board.SIZE:
            return None
        for x, symbol in enumerate(line):
            bit = 1 << (y * 8 + x)
            if symbol == '*':
                dark |= bit
            elif symbol == 'O':
                light |= bit
            elif symbol not in '-_':
                return None

    return Board(dark, light, turn)
