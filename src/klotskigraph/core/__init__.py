"""
Core modules for klotskigraph.

This package contains:
- Configuration management
- Registries for puzzle presets and goal predicates
- Error types
"""

from klotskigraph.core.config import Config, load_config, create_default_config, validate_config, RunnerConfig, PuzzleConfig, SearchConfig

from klotskigraph.core.errors import ErrorCode, KlotskiGraphError, InvalidPlacementError, PuzzleFormatError, UnknownComponentError

from klotskigraph.core.registry import register_puzzle, register_goal, PUZZLE_REGISTRY, GOAL_REGISTRY

__all__ = [
    "Config",
    "load_config",
    "create_default_config",
    "validate_config",
    "RunnerConfig",
    "PuzzleConfig",
    "SearchConfig",
    "ErrorCode",
    "KlotskiGraphError",
    "InvalidPlacementError",
    "PuzzleFormatError",
    "UnknownComponentError",
    "register_puzzle",
    "register_goal",
    "PUZZLE_REGISTRY",
    "GOAL_REGISTRY",
]
