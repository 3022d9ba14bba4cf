"""
Logging utilities for the Othello engine.
"""
import os
import json
import logging
from datetime import datetime
from typing import Dict, Any, Optional

from .config import Config

LOGGER_NAME = 'othello'


class Logger:
    """Logger for game and search diagnostics."""

    def __init__(self, config: Config, log_dir: Optional[str] = None):
        """
        Initialize the logger.

        Args:
            config: Configuration object
            log_dir: Directory to save logs (default: config.logging.log_dir)
        """
        self.config = config
        self.log_dir = log_dir or config.logging.log_dir
        self.run_name = f"{config.project_name}_{datetime.now().strftime('%Y%m%d_%H%M%S')}"
        self.run_dir = os.path.join(self.log_dir, self.run_name)

        if config.logging.debug:
            level = logging.DEBUG
        else:
            level = getattr(logging, config.logging.log_level.upper(), logging.INFO)
        formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        self.handlers = []

        # Set up console logging
        self.console = logging.StreamHandler()
        self.console.setLevel(level)
        self.console.setFormatter(formatter)
        self.handlers.append(self.console)

        # Set up file logging
        if config.logging.log_to_file:
            os.makedirs(self.run_dir, exist_ok=True)
            file_handler = logging.FileHandler(os.path.join(self.run_dir, 'othello.log'))
            file_handler.setLevel(level)
            file_handler.setFormatter(formatter)
            self.handlers.append(file_handler)
            self.save_config()

        # Configure the package logger; module loggers propagate to it
        self.logger = logging.getLogger(LOGGER_NAME)
        self.logger.setLevel(level)
        for handler in self.handlers:
            self.logger.addHandler(handler)

        if config.logging.debug:
            self.logger.debug("Diagnostic messages enabled.")

    def save_config(self):
        """Save the configuration to a JSON file in the run directory."""
        config_path = os.path.join(self.run_dir, 'config.json')
        with open(config_path, 'w') as f:
            json.dump(self.config.to_dict(), f, indent=2)

    def debug(self, msg: str, *args):
        self.logger.debug(msg, *args)

    def info(self, msg: str, *args):
        self.logger.info(msg, *args)

    def warning(self, msg: str, *args):
        self.logger.warning(msg, *args)

    def log_metrics(self, metrics: Dict[str, Any], step: int, prefix: str = ''):
        """
        Log a set of metrics on one line.

        Args:
            metrics: Dictionary of metrics to log
            step: Current step (move number, game number)
            prefix: Prefix for metric names (e.g., 'search/', 'arena/')
        """
        log_str = f"Step {step}:"
        for name, value in metrics.items():
            if isinstance(value, float):
                log_str += f" {prefix}{name}={value:.4f}"
            else:
                log_str += f" {prefix}{name}={value}"
        self.logger.info(log_str)

    def close(self):
        """Flush and detach the handlers added by this logger."""
        for handler in self.handlers:
            handler.flush()
            self.logger.removeHandler(handler)
            handler.close()
        self.handlers = []


def setup_logger(config: Config) -> Logger:
    """
    Set up and return a logger instance.

    Args:
        config: Configuration object

    Returns:
        Logger instance
    """
    return Logger(config)
