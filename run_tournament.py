"""
Script for running matches between engines searching at different depths.
"""
import os
import sys
import argparse
from pathlib import Path

# Add src directory to path
sys.path.append(str(Path(__file__).parent.absolute() / "src"))

from othello.arena import Arena
from othello.config import Config, get_default_config
from othello.logger import setup_logger


def main():
    parser = argparse.ArgumentParser(description='Run a match between Othello search depths')

    parser.add_argument('--config', type=str, default='configs/default_config.json',
                        help='Path to config file')
    parser.add_argument('--depths', type=int, nargs='+', default=None,
                        help='Search depths to compare (default: from config)')
    parser.add_argument('--output-dir', type=str, default=None,
                        help='Save results as JSON in this directory')
    parser.add_argument('--verbose', action='store_true',
                        help='Print every move')
    parser.add_argument('--debug', action='store_true',
                        help='Enable diagnostic messages')
    args = parser.parse_args()

    if os.path.exists(args.config):
        config = Config.load(args.config)
    else:
        config = get_default_config()
    if args.output_dir:
        config.arena.output_dir = args.output_dir
        config.arena.save_results = True
    if args.debug:
        config.logging.debug = True

    logger = setup_logger(config)
    try:
        arena = Arena(config, logger=logger)
        results = arena.run_match(args.depths, verbose=args.verbose)
        arena.print_standings(results)
    finally:
        logger.close()


if __name__ == "__main__":
    main()
