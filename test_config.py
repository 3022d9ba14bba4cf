"""
Test script for the configuration and logging setup.
"""
import json
import logging
from pathlib import Path

import pytest

from othello.config import Config, LoggingConfig, get_default_config
from othello.logger import Logger, setup_logger, LOGGER_NAME


def test_default_config():
    config = get_default_config()
    assert config.project_name == "Othello"
    assert config.search.depth == 3
    assert config.search.update_every == 300
    assert config.arena.depths == [1, 2, 3]
    assert config.logging.debug is False


def test_config_save_and_load(tmp_path):
    """Test creating, saving and loading a config."""
    config = get_default_config()
    config.search.depth = 5
    config.arena.depths = [0, 2]

    path = tmp_path / "nested" / "config.json"
    config.save(str(path))
    loaded = Config.load(str(path))

    assert loaded.to_dict() == config.to_dict()
    assert loaded.search.depth == 5


def test_config_from_partial_dict():
    config = Config.from_dict({'search': {'depth': 1}})
    assert config.search.depth == 1
    assert config.search.update_every == 300
    assert config.game.save_file == "othello_board.txt"


def test_config_rejects_unknown_keys():
    with pytest.raises(TypeError):
        Config.from_dict({'search': {'plies': 4}})


def test_shipped_config_file():
    with open(Path(__file__).parent / "configs" / "default_config.json") as f:
        data = json.load(f)
    assert Config.from_dict(data).to_dict() == get_default_config().to_dict()


def test_logger_levels():
    logger = setup_logger(get_default_config())
    try:
        assert logger.logger.name == LOGGER_NAME
        assert logger.logger.level == logging.INFO
        assert logger.console in logger.logger.handlers
    finally:
        logger.close()
    assert logger.console not in logging.getLogger(LOGGER_NAME).handlers

    logger = Logger(Config(logging=LoggingConfig(debug=True, log_level="WARNING")))
    try:
        assert logger.logger.level == logging.DEBUG
    finally:
        logger.close()


def test_logger_writes_file(tmp_path):
    config = Config(logging=LoggingConfig(log_dir=str(tmp_path), log_to_file=True))
    logger = Logger(config)
    try:
        logger.log_metrics({'nodes': 120, 'score': 0.25}, step=3, prefix='search/')
    finally:
        logger.close()

    log_file = tmp_path / logger.run_name / "othello.log"
    text = log_file.read_text()
    assert "Step 3: search/nodes=120 search/score=0.2500" in text
    assert (tmp_path / logger.run_name / "config.json").exists()


def test_module_loggers_reach_package_logger(caplog):
    config = Config(logging=LoggingConfig(debug=True))
    logger = Logger(config)
    try:
        with caplog.at_level(logging.DEBUG, logger=LOGGER_NAME):
            logging.getLogger("othello.search.minimax").debug("searched")
        assert "searched" in caplog.text
    finally:
        logger.close()
