"""
Minimax search with alpha-beta pruning.

The search is CPU bound and runs to completion once started. To keep a host
responsive it calls an optional progress callback every `update_every`
visited boards.
"""
import logging
from typing import TYPE_CHECKING, Callable, Optional, Tuple

from ..config import SearchConfig

if TYPE_CHECKING:
    from ..game.board import Board

logger = logging.getLogger(__name__)

Move = Tuple[int, int]

POS_INF = float('inf')
NEG_INF = float('-inf')

UPDATE_PER = 300


class MinimaxSearch:
    """Finds the best move for the side to move with a depth-bounded alpha-beta search."""

    def __init__(self, progress: Optional[Callable[[], None]] = None, update_every: int = UPDATE_PER):
        """
        Initialize the search.

        Args:
            progress: Zero-argument callable invoked every `update_every` boards, or None
            update_every: Number of visited boards between progress calls
        """
        if update_every < 1:
            raise ValueError("update_every must be at least 1")
        self.progress = progress
        self.update_every = update_every
        self.nodes = 0
        self.best_score: Optional[float] = None

    @classmethod
    def from_config(cls, config: SearchConfig,
                    progress: Optional[Callable[[], None]] = None) -> 'MinimaxSearch':
        return cls(progress=progress, update_every=config.update_every)

    def find_move(self, board: 'Board', depth: int) -> Optional[Move]:
        """
        Return the best move on `board` for `board.turn`.

        Args:
            board: Position to search
            depth: Plies searched below each root move

        Returns:
            The chosen (x, y), or None if the side to move must pass
        """
        if depth < 0:
            raise ValueError("depth must be non-negative")
        if not board.can_move():
            return None

        # The root only maximizes, so beta stays open here. Ties go to the
        # later move in enumeration order.
        best = None
        alpha = NEG_INF
        self.nodes = 1
        for move in board.legal_moves():
            child = board.apply_move(*move)
            score = self.score(child, depth, board.turn, alpha, POS_INF)
            if score >= alpha:
                alpha = score
                best = move

        self.best_score = alpha
        logger.debug("Searched %d boards (%d ply). Move: %s. Score: %s",
                     self.nodes, depth + 1, best, alpha)
        return best

    def score(self, board: 'Board', depth: int, maximizing_colour: int,
              alpha: float, beta: float) -> float:
        """
        Compute the minimax value of `board` relative to `maximizing_colour`.

        Args:
            board: Position to score
            depth: Remaining plies
            maximizing_colour: Colour whose evaluation is maximized
            alpha: Best value the maximizer is already assured of
            beta: Best value the minimizer is already assured of

        Returns:
            The alpha-beta bounded score of `board`
        """
        maximize = board.turn == maximizing_colour

        self._visit()

        moves = board.legal_moves()
        if depth == 0 or not moves:
            if maximize:
                return board.evaluate()
            return -board.evaluate()

        for move in moves:
            child = board.apply_move(*move)
            child_score = self.score(child, depth - 1, maximizing_colour, alpha, beta)

            if maximize:
                alpha = max(alpha, child_score)
            else:
                beta = min(beta, child_score)

            if beta <= alpha:
                break

        return alpha if maximize else beta

    def _visit(self):
        self.nodes += 1
        if self.progress is not None and self.nodes % self.update_every == 0:
            self.progress()
