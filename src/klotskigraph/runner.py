"""
Main runner for klotskigraph.

This module coordinates one enumeration run: resolving the puzzle and its
goal, validating the initial placement, running the breadth-first builder
with progress reporting, and writing logs, the exported graph and a results
row.
"""

import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from klotskigraph.core.config import Config
from klotskigraph.core.errors import InvalidPlacementError
from klotskigraph.puzzle.goals import GoalPredicate, resolve_goal
from klotskigraph.puzzle.hashing import canonical_key, key_to_string
from klotskigraph.puzzle.loader import PuzzleSpec, load_puzzle
from klotskigraph.puzzle.model import validate_placement
from klotskigraph.puzzle.presets import resolve_puzzle
from klotskigraph.search.builder import BuildProgress, StateSpaceBuilder
from klotskigraph.search.graph import StateSpaceGraph
from klotskigraph.search.serialization import save_graph
from klotskigraph.utils.display import LiveLogger, ProgressDisplay, StatusDisplay
from klotskigraph.utils.logger import RunLogger


@dataclass
class EnumerationResult:
    """Outcome of one enumeration run."""
    puzzle: str
    graph: StateSpaceGraph
    goal_states: List[int] = field(default_factory=list)
    max_depth: int = 0
    graph_path: Optional[str] = None

    @property
    def truncated(self) -> bool:
        return self.graph.truncated

    def to_dict(self) -> Dict[str, Any]:
        graph = self.graph
        return {
            "puzzle": self.puzzle,
            "states": graph.state_count,
            "edges": graph.edge_count,
            "max_states": graph.max_states,
            "complete": graph.complete,
            "cancelled": graph.cancelled,
            "identity_preserving": graph.identity_preserving,
            "single_edges": graph.stats.single_edges,
            "compound_edges": graph.stats.compound_edges,
            "duplicates": graph.stats.duplicates,
            "goal_states": len(self.goal_states),
            "max_depth": self.max_depth,
            "elapsed": round(graph.stats.elapsed, 3),
        }


class EnumerationRunner:
    """Runs one configured enumeration."""

    def __init__(self, config: Config):
        self.config = config
        self.live_logger = LiveLogger(verbose=config.runner.verbose)
        self.logger: Optional[RunLogger] = None
        self.puzzle: Optional[PuzzleSpec] = None
        self.goal: Optional[GoalPredicate] = None
        self.progress_display: Optional[ProgressDisplay] = None

    def setup(self) -> None:
        """Resolve the puzzle and goal and create the run directory."""
        os.makedirs(self.config.runner.log_dir, exist_ok=True)
        self.logger = RunLogger(
            log_dir=self.config.runner.log_dir,
            experiment_name=self.config.runner.experiment_name,
        )

        self.puzzle = self._load_puzzle()
        goal_name = self.config.puzzle.goal or self.puzzle.goal
        if goal_name:
            params = self.config.puzzle.goal_params if self.config.puzzle.goal else self.puzzle.goal_params
            self.goal = resolve_goal(goal_name, params)

        self.logger.log_event("setup", {
            "puzzle": self.puzzle.name,
            "board": self.puzzle.placement.describe(),
            "goal": goal_name,
            "config": self.config.to_dict(),
        })
        self.live_logger.log_info(f"Loaded puzzle '{self.puzzle.name}': {self.puzzle.placement.describe()}")

    def _load_puzzle(self) -> PuzzleSpec:
        if self.config.puzzle.file:
            return load_puzzle(self.config.puzzle.file)
        if self.config.puzzle.preset:
            return resolve_puzzle(self.config.puzzle.preset)
        raise RuntimeError("No puzzle configured: set puzzle.preset or puzzle.file")

    def run(self) -> EnumerationResult:
        """Enumerate the configured puzzle."""
        if self.puzzle is None or self.logger is None:
            raise RuntimeError("Runner not set up. Call setup() first.")

        search = self.config.search
        placement = self.puzzle.placement

        if search.validate_placement:
            issues = validate_placement(placement)
            if issues:
                self.logger.log_event("error", {"error": "invalid placement", "issues": issues})
                self.logger.save_logs()
                raise InvalidPlacementError(issues)

        key = key_to_string(canonical_key(placement, search.identity_preserving))
        self.live_logger.log_info(f"Initial key: {key[:60]}{'...' if len(key) > 60 else ''}")

        builder = StateSpaceBuilder(
            max_states=search.max_states,
            identity_preserving=search.identity_preserving,
            compound_moves=search.compound_moves,
            progress_every=search.progress_every,
        )
        self.progress_display = ProgressDisplay(search.max_states) if self.config.runner.verbose else None

        try:
            graph = builder.build(placement, on_progress=self._on_progress)
        except KeyboardInterrupt:
            self.live_logger.log_warning("Enumeration interrupted by user")
            self.logger.log_event("error", {"error": "interrupted"})
            self.logger.save_logs()
            raise

        if self.progress_display:
            self.progress_display.finish(graph.complete)

        result = self._create_result(graph)
        self._save_outputs(result)
        return result

    def _on_progress(self, progress: BuildProgress) -> None:
        self.logger.log_event("progress", {
            "processed": progress.processed,
            "states": progress.states,
            "edges": progress.edges,
            "frontier": progress.frontier,
            "elapsed": round(progress.elapsed, 3),
        })
        if self.progress_display:
            self.progress_display.update(progress)

    def _create_result(self, graph: StateSpaceGraph) -> EnumerationResult:
        levels = graph.levels()
        goal_states = graph.find_states(self.goal) if self.goal else []
        return EnumerationResult(
            puzzle=self.puzzle.name,
            graph=graph,
            goal_states=goal_states,
            max_depth=max(levels) if levels else 0,
        )

    def _save_outputs(self, result: EnumerationResult) -> None:
        if self.config.runner.export_graph:
            result.graph_path = self.logger.path("graph.json")
            save_graph(result.graph, result.graph_path)

        row = result.to_dict()
        self.logger.log_event("result", row)
        self.logger.save_logs()

        results_path = os.path.join(self.config.runner.log_dir, self.config.runner.results_path)
        self.logger.save_results_to_csv(
            {"experiment": self.logger.experiment_name, **row},
            results_path,
        )

        if result.truncated:
            self.live_logger.log_warning(
                f"Graph truncated at {result.graph.state_count} states (cap {result.graph.max_states})"
            )
        self.live_logger.log_result(f"Run directory: {self.logger.run_dir}")
