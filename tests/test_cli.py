"""
Tests for the command-line interface.
"""

import json

import pytest

from klotskigraph.cli import create_parser, main


def test_no_arguments_prints_help(capsys):
    assert main([]) == 1
    assert "usage" in capsys.readouterr().out


def test_list_components_json(capsys):
    assert main(["list-components", "--format", "json"]) == 0
    components = json.loads(capsys.readouterr().out)
    assert "klotski" in components["puzzles"]
    assert "klotski_exit" in components["goals"]


def test_show_component(capsys):
    assert main(["show-component", "--type", "puzzle", "--name", "combs"]) == 0
    assert main(["show-component", "--type", "goal", "--name", "missing"]) == 1


def test_inspect_reports_compound_move(capsys):
    assert main(["inspect", "--preset", "combs"]) == 0
    out = capsys.readouterr().out
    assert "Compound Moves (1)" in out
    assert "pieces [0, 1] right" in out


def test_inspect_rejects_invalid_puzzle(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({
        "width": 1, "height": 1,
        "pieces": [{"id": 0, "anchor": [0, 0], "size": [2, 1]}],
    }))
    assert main(["inspect", "--puzzle", str(path)]) == 1


def test_enumerate_preset(tmp_path, capsys):
    code = main(["enumerate", "--preset", "line", "--output-dir", str(tmp_path), "--max-states", "50"])
    assert code == 0
    assert (tmp_path / "enumeration_results.csv").exists()
    assert "Enumeration Results" in capsys.readouterr().out


def test_create_validate_and_run_config(tmp_path):
    config_path = tmp_path / "config.yaml"
    assert main(["create-config", "--output", str(config_path), "--preset", "square",
                 "--max-states", "100"]) == 0
    # refuses to overwrite without --force
    assert main(["create-config", "--output", str(config_path)]) == 1
    assert main(["validate-config", str(config_path)]) == 0
    assert main(["run", "--config", str(config_path), "--output-dir", str(tmp_path / "out")]) == 0
    assert (tmp_path / "out" / "enumeration_results.csv").exists()


def test_validate_config_strict(tmp_path):
    config_path = tmp_path / "config.yaml"
    main(["create-config", "--output", str(config_path), "--preset", "line", "--max-states", "100"])
    # progress_every (1000) above max_states is only a warning
    assert main(["validate-config", str(config_path)]) == 0
    assert main(["validate-config", str(config_path), "--strict"]) == 1


def test_run_missing_config(tmp_path):
    assert main(["run", "--config", str(tmp_path / "absent.yaml")]) == 1


def test_parser_rejects_unknown_preset():
    with pytest.raises(SystemExit):
        create_parser().parse_args(["enumerate", "--preset", "nope"])
