"""
Console front end: play Othello as dark against the engine.
"""
import os
import sys
import argparse
from typing import Callable, Optional, TextIO, Tuple

from tqdm import tqdm

from .config import Config, get_default_config
from .game import ReversiGame
from .logger import setup_logger
from .search import MinimaxSearch

COLUMNS = "abcdefgh"

HELP = """Commands:
  x y | d3     play a move (column, row)
  hint         show the engine's choice for you
  undo / redo  step through the game history
  new          start a new game
  save [FILE]  save the current board
  load [FILE]  load a saved board
  quit         leave the game"""


def parse_move(text: str) -> Optional[Tuple[int, int]]:
    """
    Accepts 'x y' with 0-based integers or algebraic 'd3' (column a-h, row 1-8).
    Returns (x, y) or None if invalid.
    """
    parts = text.split()
    if len(parts) == 2 and all(p.isdigit() for p in parts):
        x, y = int(parts[0]), int(parts[1])
    elif len(parts) == 1 and len(parts[0]) == 2:
        col, row = parts[0][0].lower(), parts[0][1]
        if col not in COLUMNS or not row.isdigit():
            return None
        x, y = COLUMNS.index(col), int(row) - 1
    else:
        return None

    if 0 <= x < 8 and 0 <= y < 8:
        return (x, y)
    return None


def format_move(move: Tuple[int, int]) -> str:
    x, y = move
    return f"{COLUMNS[x]}{y + 1}"


class ConsoleGame:
    """Reads commands line by line and drives a ReversiGame."""

    def __init__(self, config: Config, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None,
                 show_progress: bool = True):
        self.config = config
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self.show_progress = show_progress
        self._bar = None
        self.game = ReversiGame(config, progress=self._tick)

    def _tick(self):
        if self._bar is not None:
            self._bar.update(self.config.search.update_every)

    def _think(self, action: Callable):
        """Run `action` with a node counter shown while the engine searches."""
        with tqdm(desc="Thinking", unit=" boards", leave=False,
                  disable=not self.show_progress) as bar:
            self._bar = bar
            try:
                return action()
            finally:
                self._bar = None

    def write(self, text: str = ""):
        self.stdout.write(text + "\n")

    def show(self):
        board = self.game.board
        self.write()
        self.write("  " + COLUMNS)
        for y, row in enumerate(board.printable().splitlines()):
            self.write(f"{y + 1} {row}")
        self.write(f"Move {self.game.move_count()}  Dark: {board.dark_count()}  Light: {board.light_count()}")
        if self.game.is_over():
            winner = board.winner()
            if winner == board.DARK:
                self.write("Game over! You win!")
            elif winner == board.LIGHT:
                self.write("Game over! The engine wins!")
            else:
                self.write("Game over! It's a draw!")
        else:
            self.write("Your move (dark, '*'). Legal moves are marked '_'.")

    def handle(self, line: str) -> bool:
        """
        Execute one command line.

        Returns:
            False when the user asked to quit, True otherwise
        """
        words = line.split()
        if not words:
            return True
        command, args = words[0].lower(), words[1:]

        if command in ('quit', 'exit', 'q'):
            return False
        elif command in ('help', '?'):
            self.write(HELP)
        elif command == 'undo':
            if self.game.is_first_move():
                self.write("Nothing to undo.")
            else:
                self.game.undo()
                self.show()
        elif command == 'redo':
            if self.game.is_latest_move():
                self.write("Nothing to redo.")
            else:
                self.game.redo()
                self.show()
        elif command == 'new':
            self.game.reset()
            self.show()
        elif command == 'save':
            filename = args[0] if args else self.config.game.save_file
            if self.game.save(filename):
                self.write(f"Saved board to {filename}.")
            else:
                self.write(f"Could not save to {filename}.")
        elif command == 'load':
            filename = args[0] if args else self.config.game.save_file
            if self._think(lambda: self.game.load(filename)):
                self.show()
            else:
                self.write(f"Could not load {filename}.")
        elif command == 'hint':
            search = MinimaxSearch.from_config(self.config.search, progress=self._tick)
            move = self._think(lambda: search.find_move(self.game.board, self.game.ply))
            if move is None:
                self.write("No legal move.")
            else:
                self.write(f"Hint: {format_move(move)} ({move[0]} {move[1]})")
        else:
            self.play(line)
        return True

    def play(self, line: str):
        move = parse_move(line)
        if move is None:
            self.write(f"Unknown command: {line.strip()} (type 'help')")
            return
        if self.game.is_over():
            self.write("The game is over. Type 'new' to start again.")
            return

        boards = self._think(lambda: self.game.play_turn(*move))
        if not boards:
            self.write(f"Illegal move: {format_move(move)}")
            return
        if len(boards) > 2:
            self.write("You had no legal move, so the engine played again.")
        if any(after == before.pass_turn() for before, after in zip(boards, boards[1:])):
            self.write("The engine passes.")
        self.show()

    def run(self):
        self.show()
        while True:
            self.stdout.write("> ")
            self.stdout.flush()
            line = self.stdin.readline()
            if line == "" or not self.handle(line):
                break


def main(argv=None):
    """Run the console game."""
    parser = argparse.ArgumentParser(description='Play Othello against the engine')
    parser.add_argument('--config', type=str, default='configs/default_config.json',
                        help='Path to config file')
    parser.add_argument('--depth', type=int, default=None,
                        help='Search depth (overrides the config)')
    parser.add_argument('--debug', action='store_true',
                        help='Enable diagnostic messages')
    parser.add_argument('--load', type=str, default=None,
                        help='Start from a saved board')
    args = parser.parse_args(argv)

    if os.path.exists(args.config):
        config = Config.load(args.config)
    else:
        config = get_default_config()
    if args.depth is not None:
        config.search.depth = args.depth
    if args.debug:
        config.logging.debug = True

    logger = setup_logger(config)
    try:
        console = ConsoleGame(config)
        if args.load and not console.game.load(args.load):
            console.write(f"Could not load {args.load}, starting a new game.")
        console.run()
    finally:
        logger.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
