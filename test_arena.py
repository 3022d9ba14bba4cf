"""
Tests for engine vs. engine matches.
"""
import json

import pytest

from othello.arena import Arena
from othello.config import ArenaConfig, Config


def test_play_game():
    arena = Arena()
    result = arena.play_game(0, 1)
    assert result in (0.0, 0.5, 1.0)
    assert arena.games_played == 1

    # Searches are deterministic
    assert Arena().play_game(0, 1) == result


def test_run_match(tmp_path):
    config = Config(arena=ArenaConfig(depths=[1, 0], output_dir=str(tmp_path), save_results=True))
    arena = Arena(config)
    results = arena.run_match()

    assert results['games_played'] == 2
    assert sum(results['points'].values()) == 2.0
    assert [(g['dark_depth'], g['light_depth']) for g in results['games']] == [(0, 1), (1, 0)]

    saved = list(tmp_path.glob("arena_*.json"))
    assert len(saved) == 1
    with open(saved[0]) as f:
        assert json.load(f)['points'] == results['points']


def test_run_match_needs_two_depths():
    with pytest.raises(ValueError):
        Arena().run_match([2, 2])


def test_print_standings(capsys):
    Arena.print_standings({'points': {'0': 0.5, '1': 1.5}})
    lines = capsys.readouterr().out.splitlines()
    assert lines[-2].split() == ["1", "1", "1.5"]
    assert lines[-1].split() == ["2", "0", "0.5"]
