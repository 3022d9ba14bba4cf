"""
Arena for running matches between engines searching at different depths.
"""
import os
import json
import time
import logging
from datetime import datetime
from itertools import permutations
from typing import Dict, List, Optional

from tqdm import tqdm

from ..config import Config, get_default_config
from ..game import Board, DARK, LIGHT
from ..logger import Logger
from ..search import MinimaxSearch

logger = logging.getLogger(__name__)


class Arena:
    """Plays engine vs. engine games and tallies the results."""

    def __init__(self, config: Optional[Config] = None, logger: Optional[Logger] = None):
        """
        Initialize the arena.

        Args:
            config: Configuration object (default: get_default_config())
            logger: Optional Logger receiving per-game metrics
        """
        self.config = config or get_default_config()
        self.logger = logger
        self.games_played = 0

    def _player(self) -> MinimaxSearch:
        return MinimaxSearch.from_config(self.config.search)

    def play_game(self, dark_depth: int, light_depth: int, verbose: bool = False) -> float:
        """
        Play a single game between two search depths.

        Args:
            dark_depth: Search depth of the dark player (moves first)
            light_depth: Search depth of the light player
            verbose: Whether to print game progress

        Returns:
            1.0 if dark wins, 0.5 for a draw, 0.0 if light wins
        """
        depths = {DARK: dark_depth, LIGHT: light_depth}
        search = self._player()
        board = Board()
        moves = 0

        if verbose:
            print(f"Starting game: depth {dark_depth} (Dark) vs depth {light_depth} (Light)")
            print(board)

        while not board.is_end_of_game():
            move = search.find_move(board, depths[board.turn])
            if move is None:
                board = board.pass_turn()
                if verbose:
                    print("Pass")
                continue

            colour = 'Dark' if board.turn == DARK else 'Light'
            board = board.apply_move(*move)
            moves += 1
            if verbose:
                print(f"{colour} plays at {move}")
                print(board)

        dark_count, light_count = board.dark_count(), board.light_count()
        self.games_played += 1
        if self.logger is not None:
            self.logger.log_metrics({
                'dark_depth': dark_depth,
                'light_depth': light_depth,
                'moves': moves,
                'dark': dark_count,
                'light': light_count,
            }, step=self.games_played, prefix='arena/')

        if dark_count > light_count:
            return 1.0
        elif light_count > dark_count:
            return 0.0
        else:
            return 0.5

    def run_match(self, depths: Optional[List[int]] = None, verbose: bool = False) -> Dict:
        """
        Play every ordered pair of distinct depths once.

        The search is deterministic, so each pairing is played once with
        each colour assignment.

        Args:
            depths: Search depths to compare (default: config.arena.depths)
            verbose: Whether to print game progress

        Returns:
            Dictionary with the points per depth and the game records
        """
        depths = list(depths if depths is not None else self.config.arena.depths)
        if len(set(depths)) < 2:
            raise ValueError("Need at least 2 distinct depths for a match")
        depths = sorted(set(depths))

        results = {
            'games_played': 0,
            'points': {str(d): 0.0 for d in depths},
            'games': [],
            'start_time': time.time(),
            'end_time': None,
        }

        pairings = list(permutations(depths, 2))
        for dark_depth, light_depth in tqdm(pairings, desc="Arena", unit="game"):
            result = self.play_game(dark_depth, light_depth, verbose=verbose)

            results['games_played'] += 1
            results['points'][str(dark_depth)] += result
            results['points'][str(light_depth)] += 1.0 - result
            results['games'].append({
                'dark_depth': dark_depth,
                'light_depth': light_depth,
                'result': result,
            })

        results['end_time'] = time.time()
        results['duration'] = results['end_time'] - results['start_time']
        logger.info("Arena finished: %s", results['points'])

        if self.config.arena.save_results:
            self.save_results(results)

        return results

    def save_results(self, results: Dict) -> str:
        """Save match results to a timestamped JSON file in the output directory."""
        output_dir = self.config.arena.output_dir
        os.makedirs(output_dir, exist_ok=True)
        filepath = os.path.join(output_dir, f"arena_{datetime.now().strftime('%Y%m%d_%H%M%S')}.json")
        with open(filepath, 'w') as f:
            json.dump(results, f, indent=2)
        return filepath

    @staticmethod
    def print_standings(results: Dict):
        """Print the points per depth, best first."""
        standings = sorted(results['points'].items(), key=lambda item: item[1], reverse=True)
        print("\nStandings:")
        print("Rank  Depth  Points")
        print("----  -----  ------")
        for i, (depth, points) in enumerate(standings, 1):
            print(f"{i:4d}  {depth:>5s}  {points:6.1f}")
