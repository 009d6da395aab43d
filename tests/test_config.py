"""
Tests for configuration loading and validation.
"""

import pytest
import yaml

from klotskigraph.core.config import (
    Config, PuzzleConfig, SearchConfig,
    create_default_config, load_config, validate_config,
)


def test_defaults():
    config = Config()
    assert config.search.max_states == 100000
    assert config.search.compound_moves
    assert not config.search.identity_preserving
    assert config.search.validate_placement
    assert config.runner.export_graph


def test_from_dict_fills_missing_sections():
    config = Config.from_dict({"puzzle": {"preset": "line"}, "search": {"max_states": 10}})
    assert config.puzzle.preset == "line"
    assert config.search.max_states == 10
    assert config.runner.log_dir == "logs"


def test_to_dict_round_trip():
    config = Config.from_dict({"puzzle": {"preset": "combs", "goal": "piece_at",
                                          "goal_params": {"piece_id": 0, "cell": [1, 0]}}})
    assert Config.from_dict(config.to_dict()) == config


@pytest.mark.parametrize("kwargs", [{"max_states": 0}, {"max_states": -5}, {"progress_every": 0}])
def test_search_rejects_bad_numbers(kwargs):
    with pytest.raises(ValueError):
        SearchConfig(**kwargs)


def test_preset_and_file_are_exclusive():
    with pytest.raises(ValueError):
        PuzzleConfig(preset="line", file="puzzles/combs.yaml")


def test_create_and_load_default(tmp_path):
    path = tmp_path / "config.yaml"
    created = create_default_config(str(path), preset="klotski", max_states=5000)
    loaded = load_config(str(path))
    assert loaded == created
    assert loaded.puzzle.goal == "klotski_exit"
    assert loaded.runner.experiment_name == "klotski_enumeration"
    assert validate_config(loaded) == []


def test_load_errors(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "absent.yaml"))

    empty = tmp_path / "empty.yaml"
    empty.write_text("")
    with pytest.raises(ValueError):
        load_config(str(empty))

    unknown = tmp_path / "unknown.yaml"
    unknown.write_text(yaml.dump({"search": {"max_depth": 3}}))
    with pytest.raises(ValueError):
        load_config(str(unknown))


def test_validate_reports_errors(tmp_path):
    issues = validate_config(Config())
    assert any(i.startswith("ERROR") and "puzzle.preset" in i for i in issues)

    config = Config.from_dict({"puzzle": {"preset": "nope", "goal": "nowhere"}})
    issues = validate_config(config)
    assert "ERROR: Unknown puzzle preset: nope" in issues
    assert "ERROR: Unknown goal: nowhere" in issues

    missing = Config.from_dict({"puzzle": {"file": str(tmp_path / "gone.yaml")}})
    assert any("does not exist" in i for i in validate_config(missing))


def test_validate_reports_warnings():
    config = Config.from_dict({
        "puzzle": {"preset": "line"},
        "search": {"max_states": 1, "progress_every": 5, "validate_placement": False},
    })
    issues = validate_config(config)
    assert all(i.startswith("WARNING") for i in issues)
    assert len(issues) == 3
