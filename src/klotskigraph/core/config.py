"""
Configuration management for klotskigraph.

This module handles loading and validation of YAML configuration files and
provides typed configuration objects for the runner, the puzzle source and
the search.
"""

import os
import yaml
from typing import Any, Dict, Optional, List
from dataclasses import dataclass, field
from pathlib import Path

from klotskigraph.core.registry import GOAL_REGISTRY, PUZZLE_REGISTRY


@dataclass
class RunnerConfig:
    """Configuration for the enumeration runner."""
    experiment_name: str = "enumeration"
    log_dir: str = "logs"
    results_path: str = "enumeration_results.csv"
    export_graph: bool = True
    verbose: bool = True

    def __post_init__(self):
        # Directory creation is deferred to runner.setup() to avoid side effects on import
        if not isinstance(self.experiment_name, str) or not self.experiment_name:
            raise ValueError("experiment_name must be a non-empty string")


@dataclass
class PuzzleConfig:
    """Where the initial placement comes from and which goal to test."""
    preset: Optional[str] = None
    file: Optional[str] = None
    goal: Optional[str] = None
    goal_params: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if self.preset and self.file:
            raise ValueError("puzzle.preset and puzzle.file are mutually exclusive")
        if self.goal_params is None:
            self.goal_params = {}
        if not isinstance(self.goal_params, dict):
            raise ValueError("goal_params must be a mapping")


@dataclass
class SearchConfig:
    """Configuration for the state-space search."""
    max_states: int = 100000
    identity_preserving: bool = False
    compound_moves: bool = True
    progress_every: int = 1000
    validate_placement: bool = True

    def __post_init__(self):
        if not isinstance(self.max_states, int) or self.max_states <= 0:
            raise ValueError("max_states must be a positive integer")
        if not isinstance(self.progress_every, int) or self.progress_every <= 0:
            raise ValueError("progress_every must be a positive integer")
        if self.max_states > 5_000_000:
            import warnings
            warnings.warn(
                f"max_states={self.max_states} is very large. "
                f"Enumeration keeps every state in memory."
            )


@dataclass
class Config:
    """Main configuration object."""
    runner: RunnerConfig = field(default_factory=RunnerConfig)
    puzzle: PuzzleConfig = field(default_factory=PuzzleConfig)
    search: SearchConfig = field(default_factory=SearchConfig)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        """Create Config from dictionary."""
        runner = RunnerConfig(**(data.get("runner") or {}))
        puzzle = PuzzleConfig(**(data.get("puzzle") or {}))
        search = SearchConfig(**(data.get("search") or {}))
        return cls(runner=runner, puzzle=puzzle, search=search)

    def to_dict(self) -> Dict[str, Any]:
        """Convert Config to dictionary."""
        return {
            "runner": {k: v for k, v in self.runner.__dict__.items()},
            "puzzle": {k: v for k, v in self.puzzle.__dict__.items()},
            "search": {k: v for k, v in self.search.__dict__.items()},
        }


def load_config(config_path: str) -> Config:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Config object

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If config file is malformed
        ValueError: If fields are missing or invalid
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise yaml.YAMLError(f"Error parsing YAML config: {e}")

    if not data:
        raise ValueError("Configuration file is empty")

    try:
        return Config.from_dict(data)
    except Exception as e:
        raise ValueError(f"Error creating config from data: {e}")


def create_default_config(output_path: str = "config.yaml", preset: str = "klotski",
                          max_states: int = 100000) -> Config:
    """
    Create a default configuration file.

    Args:
        output_path: Path where to save the default config
        preset: Puzzle preset to enumerate
        max_states: State cap

    Returns:
        Default Config object
    """
    config = Config(
        runner=RunnerConfig(experiment_name=f"{preset}_enumeration"),
        puzzle=PuzzleConfig(preset=preset, goal="klotski_exit" if preset == "klotski" else None),
        search=SearchConfig(max_states=max_states),
    )

    with open(output_path, 'w', encoding='utf-8') as f:
        yaml.dump(config.to_dict(), f, default_flow_style=False, indent=2)

    return config


def validate_config(config: Config) -> List[str]:
    """
    Validate configuration and return list of warnings/errors.

    Args:
        config: Configuration to validate

    Returns:
        List of validation messages prefixed with ERROR or WARNING
    """
    issues = []

    if not config.puzzle.preset and not config.puzzle.file:
        issues.append("ERROR: puzzle.preset or puzzle.file is required")

    if config.puzzle.preset and config.puzzle.preset not in PUZZLE_REGISTRY:
        issues.append(f"ERROR: Unknown puzzle preset: {config.puzzle.preset}")

    if config.puzzle.file and not os.path.exists(config.puzzle.file):
        issues.append(f"ERROR: Puzzle file does not exist: {config.puzzle.file}")

    if config.puzzle.goal and config.puzzle.goal not in GOAL_REGISTRY:
        issues.append(f"ERROR: Unknown goal: {config.puzzle.goal}")

    if config.search.max_states < 2:
        issues.append("WARNING: max_states below 2 only records the initial state")

    if config.search.progress_every > config.search.max_states:
        issues.append("WARNING: progress_every exceeds max_states; only the final progress is reported")

    if not config.search.validate_placement:
        issues.append("WARNING: Placement validation is disabled; malformed puzzles give undefined results")

    return issues
