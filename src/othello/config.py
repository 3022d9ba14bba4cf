"""
Configuration parameters for the Othello engine.
"""
import os
from dataclasses import dataclass, asdict, field
from typing import Dict, Any, List
import json


@dataclass
class SearchConfig:
    """Configuration for the minimax search."""
    depth: int = 3  # Search depth below the root move (plies searched = depth + 1)
    update_every: int = 300  # Call the progress callback every N visited boards


@dataclass
class GameConfig:
    """Configuration for human vs. engine games."""
    save_file: str = "othello_board.txt"


@dataclass
class ArenaConfig:
    """Configuration for engine vs. engine matches."""
    depths: List[int] = field(default_factory=lambda: [1, 2, 3])
    output_dir: str = "arena_results"
    save_results: bool = False


@dataclass
class LoggingConfig:
    """Configuration for logging."""
    log_dir: str = "logs"
    log_level: str = "INFO"
    debug: bool = False  # Diagnostic messages; overrides log_level with DEBUG
    log_to_file: bool = False


@dataclass
class Config:
    """Main configuration class."""
    project_name: str = "Othello"
    search: SearchConfig = field(default_factory=SearchConfig)
    game: GameConfig = field(default_factory=GameConfig)
    arena: ArenaConfig = field(default_factory=ArenaConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return asdict(self)

    def save(self, filepath: str):
        """Save config to JSON file."""
        os.makedirs(os.path.dirname(os.path.abspath(filepath)), exist_ok=True)
        with open(filepath, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'Config':
        """Create config from dictionary."""
        return cls(
            project_name=config_dict.get('project_name', 'Othello'),
            search=SearchConfig(**config_dict.get('search', {})),
            game=GameConfig(**config_dict.get('game', {})),
            arena=ArenaConfig(**config_dict.get('arena', {})),
            logging=LoggingConfig(**config_dict.get('logging', {}))
        )

    @classmethod
    def load(cls, filepath: str) -> 'Config':
        """Load config from JSON file."""
        with open(filepath, 'r') as f:
            config_dict = json.load(f)
        return cls.from_dict(config_dict)


def get_default_config() -> Config:
    """Get default configuration."""
    return Config()
