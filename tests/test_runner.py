"""
Tests for the enumeration runner and its outputs.
"""

import json
import os

import pandas as pd
import pytest

from klotskigraph.core.config import Config
from klotskigraph.core.errors import InvalidPlacementError
from klotskigraph.puzzle.loader import save_puzzle
from klotskigraph.puzzle.model import Piece, Placement
from klotskigraph.runner import EnumerationRunner
from klotskigraph.search.serialization import load_graph


def make_config(tmp_path, **puzzle):
    return Config.from_dict({
        "runner": {"experiment_name": "test", "log_dir": str(tmp_path / "logs"), "verbose": False},
        "puzzle": puzzle,
        "search": {"max_states": 1000, "progress_every": 1},
    })


def test_run_requires_setup(tmp_path):
    runner = EnumerationRunner(make_config(tmp_path, preset="line"))
    with pytest.raises(RuntimeError):
        runner.run()


def test_run_preset_writes_outputs(tmp_path):
    runner = EnumerationRunner(make_config(tmp_path, preset="combs", goal="piece_at",
                                           goal_params={"piece_id": 0, "cell": [1, 0]}))
    runner.setup()
    result = runner.run()

    assert result.graph.state_count == 2
    assert result.graph.complete and not result.truncated
    assert result.goal_states == [1]
    assert result.max_depth == 1

    run_dir = runner.logger.run_dir
    assert os.path.exists(os.path.join(run_dir, "run_log.json"))
    assert os.path.exists(os.path.join(run_dir, "summary.txt"))
    assert load_graph(result.graph_path).edges == [(0, 1), (1, 0)]

    with open(os.path.join(run_dir, "run_log.json")) as f:
        events = [e["event"] for e in json.load(f)]
    assert events[0] == "setup"
    assert "progress" in events
    assert events[-1] == "result"


def test_results_csv_accumulates(tmp_path):
    for _ in range(2):
        runner = EnumerationRunner(make_config(tmp_path, preset="line"))
        runner.setup()
        runner.run()
    table = pd.read_csv(tmp_path / "logs" / "enumeration_results.csv")
    assert len(table) == 2
    assert list(table["states"]) == [3, 3]
    assert bool(table["complete"].all())


def test_puzzle_file_goal_is_used(tmp_path):
    path = tmp_path / "square.yaml"
    placement = Placement(width=2, height=2, pieces=(
        Piece(0, (0, 0), size=(1, 1)), Piece(1, (1, 0), size=(1, 1)),
    ))
    save_puzzle(placement, str(path), goal="shape_at", goal_params={"cell": [1, 1], "size": [1, 1]})

    runner = EnumerationRunner(make_config(tmp_path, file=str(path)))
    runner.setup()
    result = runner.run()
    assert result.graph.state_count == 6
    # 3 of the 6 two-token placements cover the bottom-right cell
    assert len(result.goal_states) == 3


def test_invalid_placement_is_rejected(tmp_path):
    path = tmp_path / "overlap.json"
    placement = Placement(width=3, height=1, pieces=(
        Piece(0, (0, 0), size=(2, 1)), Piece(1, (1, 0), size=(1, 1)),
    ))
    save_puzzle(placement, str(path))

    runner = EnumerationRunner(make_config(tmp_path, file=str(path)))
    runner.setup()
    with pytest.raises(InvalidPlacementError) as excinfo:
        runner.run()
    assert any(issue.startswith("Collision") for issue in excinfo.value.issues)


def test_truncated_run(tmp_path):
    config = make_config(tmp_path, preset="cube")
    config.search.max_states = 5
    config.runner.export_graph = False
    runner = EnumerationRunner(config)
    runner.setup()
    result = runner.run()
    assert result.truncated
    assert result.graph.state_count == 5
    assert result.graph_path is None
    assert result.to_dict()["complete"] is False
