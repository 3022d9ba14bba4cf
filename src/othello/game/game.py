"""
Othello game module.
Handles game flow: the human plays dark, the engine answers as light.
"""
import logging
from typing import Callable, List, Optional

from ..config import Config, get_default_config
from ..search import MinimaxSearch
from .board import Board, LIGHT
from .codec import encode, decode
from .history import History

logger = logging.getLogger(__name__)


class ReversiGame:
    """
    Main game class that manages the board history and the turn sequence.
    """

    def __init__(self, config: Optional[Config] = None,
                 progress: Optional[Callable[[], None]] = None):
        """
        Initialize a new game.

        Args:
            config: Configuration object (default: get_default_config())
            progress: Callback passed to the search, called periodically while thinking
        """
        self.config = config or get_default_config()
        self.ply = self.config.search.depth
        self.progress = progress
        self.history = History(Board())
        self.last_search: Optional[MinimaxSearch] = None

    @property
    def board(self) -> Board:
        """The current board."""
        return self.history.current

    def reset(self) -> None:
        """Start a new game."""
        self.history = History(Board())

    def compute_next_move(self, board: Board):
        """Return the engine's move on `board`, or None if it has to pass."""
        search = MinimaxSearch.from_config(self.config.search, progress=self.progress)
        move = search.find_move(board, self.ply)
        self.last_search = search
        return move

    def is_over(self) -> bool:
        return self.board.is_end_of_game()

    def dark_count(self) -> int:
        return self.board.dark_count()

    def light_count(self) -> int:
        return self.board.light_count()

    def play_turn(self, x: int, y: int) -> List[Board]:
        """
        Play dark's move at (x, y) and let the engine answer.

        Args:
            x: Column of the move (0-based)
            y: Row of the move (0-based)

        Returns:
            The boards produced, in order, ending on a board with dark to move.
            Several boards are produced when a side has to pass. Empty if the
            move is not legal.
        """
        logger.debug("dark: %d,%d", x, y)
        if not self.board.is_legal_move(x, y):
            logger.debug("Invalid move: %d,%d", x, y)
            return []

        light_board = self.board.apply_move(x, y)
        logger.debug("dark's move:\n%s", self.board.printable())

        result = [light_board] + self._respond(light_board)
        self.history.add_board(result[-1])
        logger.debug("Board value (dark): %s", self.board.evaluate())
        return result

    def _respond(self, light_board: Board) -> List[Board]:
        """Let the engine play from `light_board` until dark can move or the game ends."""
        result = []
        while True:
            light_move = self.compute_next_move(light_board)
            if light_move is None:
                logger.debug("light passes.")
                dark_board = light_board.pass_turn()
            else:
                logger.debug("light's move: %d, %d", *light_move)
                dark_board = light_board.apply_move(*light_move)

            result.append(dark_board)

            if dark_board.can_move() or dark_board.is_end_of_game():
                return result

            logger.debug("dark passes.")
            light_board = dark_board.pass_turn()

    def move_count(self) -> int:
        """Number of boards played this game, counting the starting board."""
        return self.history.pos + 1

    def is_first_move(self) -> bool:
        return self.history.at_start()

    def is_latest_move(self) -> bool:
        """True unless there are undone boards that can be redone."""
        return self.history.at_end()

    def undo(self) -> None:
        self.history.backward()

    def redo(self) -> None:
        self.history.forward()

    def save(self, filename: str) -> bool:
        """
        Save the current board (not the whole game) to `filename`.

        Returns:
            bool: True on success, False on failure
        """
        text = encode(self.board)
        try:
            with open(filename, 'w') as f:
                written = f.write(text)
        except OSError as e:
            logger.warning("Could not save board to %s: %s", filename, e)
            return False
        return written == len(text)

    def load(self, filename: str) -> bool:
        """
        Replace the current game with the board saved at `filename`.

        A board saved with light to move is answered by the engine first.

        Returns:
            bool: True on success, False on error (the current game is kept)
        """
        try:
            with open(filename, 'r') as f:
                text = f.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Could not load board from %s: %s", filename, e)
            return False

        board = decode(text)
        if board is None:
            logger.warning("Malformed board file: %s", filename)
            return False

        if board.turn == LIGHT:
            board = self._respond(board)[-1]
        self.history = History(board)
        return True

    def __str__(self) -> str:
        """String representation of the game state."""
        return f"Move {self.move_count()}\n{self.board}"
