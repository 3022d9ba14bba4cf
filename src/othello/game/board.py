"""
Board module for Othello.
Handles the board state, move generation, piece flipping and position evaluation.
Uses bitboard representation for optimal performance.
"""
from typing import Dict, List, Optional, Tuple
import numpy as np

from ..errors import IllegalMoveError

Move = Tuple[int, int]

EMPTY = 0
DARK = 1
LIGHT = 2

FULL_MASK = 0xFFFFFFFFFFFFFFFF
NOT_FIRST_COLUMN = 0xFEFEFEFEFEFEFEFE  # Cells with x != 0
NOT_LAST_COLUMN = 0x7F7F7F7F7F7F7F7F   # Cells with x != 7

CORNER_MASK = 0x8100000000000081
EDGE_MASK = 0x7E8181818181817E  # Non-corner edge cells

# Initial layout: light on (3,3) and (4,4), dark on (4,3) and (3,4)
START_DARK = 0x0000000810000000
START_LIGHT = 0x0000001008000000


def _direction(dx: int, dy: int) -> Tuple[int, int]:
    """Return the (shift, mask) pair that moves every bit one step along (dx, dy)."""
    mask = FULL_MASK
    if dx == 1:
        mask &= NOT_FIRST_COLUMN  # no wrap from x=7 to x=0
    elif dx == -1:
        mask &= NOT_LAST_COLUMN   # no wrap from x=0 to x=7
    return dx + dy * 8, mask


DIRECTIONS = tuple(
    _direction(dx, dy)
    for dy in (-1, 0, 1)
    for dx in (-1, 0, 1)
    if dx or dy
)


def _shift(bits: int, shift: int, mask: int) -> int:
    if shift > 0:
        return (bits << shift) & mask
    return (bits >> -shift) & mask


def bit_count(x: int) -> int:
    """Count the number of set bits in a 64-bit integer."""
    # This is a fast implementation of bit counting (Hamming weight)
    x = x - ((x >> 1) & 0x5555555555555555)
    x = (x & 0x3333333333333333) + ((x >> 2) & 0x3333333333333333)
    x = (x + (x >> 4)) & 0x0f0f0f0f0f0f0f0f
    return ((x * 0x0101010101010101) & 0xffffffffffffffff) >> 56


def legal_move_mask(own: int, opponent: int) -> int:
    """
    Get all legal moves for the owner of `own` as a bitboard.

    Args:
        own: Bitboard of the pieces of the side to move
        opponent: Bitboard of the opponent's pieces

    Returns:
        Bitboard with one bit set per empty cell that flips at least one piece
    """
    empty = ~(own | opponent) & FULL_MASK
    moves = 0

    for shift, mask in DIRECTIONS:
        # Opponent pieces directly next to one of ours in this direction
        candidates = _shift(own, shift, mask) & opponent

        # A run of opponent pieces is at most 6 long on an 8x8 board
        for _ in range(5):
            candidates |= _shift(candidates, shift, mask) & opponent

        # The empty squares just past the end of a run are the moves
        moves |= _shift(candidates, shift, mask) & empty

    return moves


def flip_mask(own: int, opponent: int, move_bit: int) -> int:
    """Return the bitboard of opponent pieces flipped by placing a piece at `move_bit`."""
    flips = 0

    for shift, mask in DIRECTIONS:
        line = 0
        curr = _shift(move_bit, shift, mask)
        while curr & opponent:
            line |= curr
            curr = _shift(curr, shift, mask)

        # The run only counts if it ends on one of our pieces
        if curr & own:
            flips |= line

    return flips


def _bits_to_moves(bits: int) -> List[Move]:
    """Convert a bitboard to (x, y) tuples in row-major order."""
    moves = []
    while bits:
        lowest = bits & -bits
        y, x = divmod(lowest.bit_length() - 1, 8)
        moves.append((x, y))
        bits ^= lowest
    return moves


class Board:
    """
    Immutable Othello position: the pieces on the board plus whose turn it is.

    Each colour's pieces are stored in a 64-bit integer, bit ``y * 8 + x``
    for cell (x, y). Legal moves, piece counts and the evaluation are derived
    once in the constructor; every transition (`apply_move`, `pass_turn`)
    returns a new Board.
    """

    # Board dimensions
    SIZE = 8
    BOARD_SIZE = SIZE * SIZE

    # Cell states
    EMPTY = EMPTY
    DARK = DARK
    LIGHT = LIGHT

    # Evaluation weights
    CORNER_WEIGHT = 60
    EDGE_WEIGHT = 10
    PIECE_WEIGHT = 1

    __slots__ = (
        '_dark', '_light', '_turn',
        '_legal', '_opponent_legal', '_legal_moves',
        '_dark_count', '_light_count', '_evaluation',
    )

    def __init__(self, dark: int = START_DARK, light: int = START_LIGHT, turn: int = DARK):
        """
        Initialize a board. With no arguments this is the starting position.

        Args:
            dark: Bitboard of dark pieces
            light: Bitboard of light pieces
            turn: Colour to move (DARK or LIGHT)
        """
        if turn not in (DARK, LIGHT):
            raise ValueError(f"Invalid colour to move: {turn!r}")
        if dark & ~FULL_MASK or light & ~FULL_MASK or dark < 0 or light < 0:
            raise ValueError("Bitboards must fit in 64 bits")
        if dark & light:
            raise ValueError("A cell cannot hold both colours")

        self._dark = dark
        self._light = light
        self._turn = turn

        own, opponent = self._sides()
        self._legal = legal_move_mask(own, opponent)
        self._opponent_legal = legal_move_mask(opponent, own)
        self._legal_moves = tuple(_bits_to_moves(self._legal))
        self._dark_count = bit_count(dark)
        self._light_count = bit_count(light)
        self._evaluation = self._compute_evaluation()

    @classmethod
    def start(cls) -> 'Board':
        """Return the starting position, dark to move."""
        return cls()

    @classmethod
    def from_array(cls, array, turn: int = DARK) -> 'Board':
        """
        Create a board from an 8x8 array of cell states indexed [y, x].

        Raises:
            ValueError: If the shape is not 8x8 or a value is not a cell state
        """
        array = np.asarray(array)
        if array.shape != (cls.SIZE, cls.SIZE):
            raise ValueError(f"Expected an 8x8 array, got shape {array.shape}")
        if not np.isin(array, (EMPTY, DARK, LIGHT)).all():
            raise ValueError("Array contains values other than EMPTY, DARK and LIGHT")

        dark = light = 0
        for i, value in enumerate(array.ravel()):
            if value == DARK:
                dark |= 1 << i
            elif value == LIGHT:
                light |= 1 << i
        return cls(dark, light, turn)

    @classmethod
    def from_serialized(cls, text: str) -> Optional['Board']:
        """Decode the persisted text form; returns None if it is malformed."""
        from .codec import decode
        return decode(text)

    def serialized(self) -> str:
        """Return the persisted text form of this board."""
        from .codec import encode
        return encode(self)

    # ------------------------------------------------------------------
    # Accessors

    @property
    def turn(self) -> int:
        """Colour whose moves this board describes."""
        return self._turn

    @property
    def opponent(self) -> int:
        return 3 - self._turn

    @property
    def dark(self) -> int:
        return self._dark

    @property
    def light(self) -> int:
        return self._light

    def _sides(self) -> Tuple[int, int]:
        """Return (own, opponent) bitboards relative to the side to move."""
        if self._turn == DARK:
            return self._dark, self._light
        return self._light, self._dark

    @staticmethod
    def _check_range(x: int, y: int) -> None:
        if not (0 <= x < Board.SIZE and 0 <= y < Board.SIZE):
            raise IndexError(f"Cell ({x}, {y}) is off the board")

    def cell_at(self, x: int, y: int) -> int:
        """Return the state of cell (x, y): EMPTY, DARK or LIGHT."""
        self._check_range(x, y)
        bit = 1 << (y * 8 + x)
        if self._dark & bit:
            return DARK
        if self._light & bit:
            return LIGHT
        return EMPTY

    def cells(self) -> Dict[Move, int]:
        """Return a mapping of every (x, y) to its state, in row-major order."""
        return {(x, y): self.cell_at(x, y) for y in range(self.SIZE) for x in range(self.SIZE)}

    def to_array(self) -> np.ndarray:
        """
        Get the board as a numpy array.

        Returns:
            8x8 int8 array indexed [y, x] holding EMPTY, DARK or LIGHT
        """
        board = np.zeros(self.BOARD_SIZE, dtype=np.int8)
        for i in range(self.BOARD_SIZE):
            bit = 1 << i
            if self._dark & bit:
                board[i] = DARK
            elif self._light & bit:
                board[i] = LIGHT
        return board.reshape(self.SIZE, self.SIZE)

    # ------------------------------------------------------------------
    # Rules

    def is_legal_move(self, x: int, y: int) -> bool:
        """Check if (x, y) is a legal move for the side to move."""
        if not (0 <= x < self.SIZE and 0 <= y < self.SIZE):
            return False
        return bool(self._legal & (1 << (y * 8 + x)))

    def legal_moves(self) -> List[Move]:
        """
        Get all legal moves for the side to move.

        Returns:
            List of (x, y) tuples in row-major order
        """
        return list(self._legal_moves)

    def can_move(self) -> bool:
        """Check if the side to move has any legal move."""
        return self._legal != 0

    def flips(self, x: int, y: int) -> List[Move]:
        """Return the cells a move at (x, y) would flip, or [] if it is not legal."""
        if not self.is_legal_move(x, y):
            return []
        own, opponent = self._sides()
        return _bits_to_moves(flip_mask(own, opponent, 1 << (y * 8 + x)))

    def apply_move(self, x: int, y: int) -> 'Board':
        """
        Return the board after the side to move plays at (x, y).

        Raises:
            IllegalMoveError: If (x, y) is not a legal move
        """
        if not self.is_legal_move(x, y):
            raise IllegalMoveError(f"({x}, {y}) is not a legal move")

        move_bit = 1 << (y * 8 + x)
        own, opponent = self._sides()
        flipped = flip_mask(own, opponent, move_bit)
        if not flipped:
            raise IllegalMoveError(f"({x}, {y}) flips nothing")

        own ^= move_bit | flipped
        opponent ^= flipped
        if self._turn == DARK:
            return Board(own, opponent, LIGHT)
        return Board(opponent, own, DARK)

    def pass_turn(self) -> 'Board':
        """Return the identical position with the other side to move."""
        return Board(self._dark, self._light, self.opponent)

    def is_end_of_game(self) -> bool:
        """Check if neither side can move from this position."""
        return self._legal == 0 and self._opponent_legal == 0

    def winner(self) -> Optional[int]:
        """
        Get the winner of the game.

        Returns:
            DARK, LIGHT, or EMPTY for a draw; None if the game is not over
        """
        if not self.is_end_of_game():
            return None
        if self._dark_count > self._light_count:
            return DARK
        if self._light_count > self._dark_count:
            return LIGHT
        return EMPTY

    # ------------------------------------------------------------------
    # Counts and evaluation

    def dark_count(self) -> int:
        return self._dark_count

    def light_count(self) -> int:
        return self._light_count

    def empty_count(self) -> int:
        return self.BOARD_SIZE - self._dark_count - self._light_count

    def friendly_count(self) -> int:
        """Number of pieces of the side to move."""
        return self._dark_count if self._turn == DARK else self._light_count

    def opponent_count(self) -> int:
        """Number of pieces of the side not to move."""
        return self._light_count if self._turn == DARK else self._dark_count

    def evaluate(self) -> float:
        """Return the evaluation of this position. Higher is better for the side to move."""
        return self._evaluation

    def _spot_balance(self, mask: int) -> float:
        """Friendly minus opponent pieces on `mask`, normalized to [-1, 1]."""
        own, opponent = self._sides()
        return (bit_count(own & mask) - bit_count(opponent & mask)) / bit_count(mask)

    def _compute_evaluation(self) -> float:
        friendly = self.friendly_count()
        opponent = self.opponent_count()

        if self.is_end_of_game():
            # Only win, loss or draw matters once the game is over
            if friendly > opponent:
                return float('inf')
            if friendly < opponent:
                return float('-inf')
            return 0.0

        corners = self._spot_balance(CORNER_MASK)
        edges = self._spot_balance(EDGE_MASK)
        pieces = (friendly - opponent) / float(self.BOARD_SIZE)
        return self.CORNER_WEIGHT * corners + self.EDGE_WEIGHT * edges + self.PIECE_WEIGHT * pieces

    # ------------------------------------------------------------------
    # Value semantics and display

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (self._dark, self._light, self._turn) == (other._dark, other._light, other._turn)

    def __hash__(self) -> int:
        return hash((self._dark, self._light, self._turn))

    def __repr__(self) -> str:
        return f"Board(dark={self._dark:#018x}, light={self._light:#018x}, turn={self._turn})"

    def printable(self) -> str:
        """
        Return the 8 board rows of the text form.

        '*' is dark, 'O' is light, '_' an empty legal move and '-' any other
        empty cell.
        """
        rows = []
        for y in range(self.SIZE):
            row = []
            for x in range(self.SIZE):
                cell = self.cell_at(x, y)
                if cell == DARK:
                    row.append('*')
                elif cell == LIGHT:
                    row.append('O')
                else:
                    row.append('_' if self.is_legal_move(x, y) else '-')
            rows.append(''.join(row))
        return '\n'.join(rows) + '\n'

    def __str__(self) -> str:
        """Return a string representation of the board."""
        status = [self.printable().rstrip('\n')]
        status.append(f"To move: {'Dark' if self._turn == DARK else 'Light'}")
        status.append(f"Score - Dark: {self._dark_count}, Light: {self._light_count}")

        winner = self.winner()
        if winner is not None:
            if winner == EMPTY:
                status.append("Game over! It's a draw!")
            else:
                status.append(f"Game over! {'Dark' if winner == DARK else 'Light'} wins!")

        return "\n".join(status)
