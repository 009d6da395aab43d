"""
Breadth-first enumeration of the reachable state space.
"""

import time
from collections import deque
from dataclasses import dataclass
from typing import Callable, Iterator, Optional

from klotskigraph.puzzle.model import Placement
from klotskigraph.puzzle.moves import apply_move, legal_moves
from klotskigraph.puzzle.occupancy import OccupancyIndex
from klotskigraph.search.graph import StateSpaceGraph


@dataclass
class BuildProgress:
    """Snapshot handed to progress hooks between frontier batches."""
    processed: int
    states: int
    edges: int
    frontier: int
    max_states: int
    elapsed: float
    done: bool = False

    @property
    def fraction(self) -> float:
        return min(self.states / self.max_states, 1.0)


class StateSpaceBuilder:
    """
    FIFO breadth-first traversal keyed by canonical state keys.

    Move enumeration order is fixed and the frontier is FIFO, so state ids
    and edge order are deterministic for a given initial placement, cap and
    hashing mode.
    """

    def __init__(self, max_states: int = 100000, identity_preserving: bool = False,
                 compound_moves: bool = True, progress_every: int = 1000):
        if not isinstance(max_states, int) or max_states <= 0:
            raise ValueError("max_states must be a positive integer")
        if not isinstance(progress_every, int) or progress_every <= 0:
            raise ValueError("progress_every must be a positive integer")
        self.max_states = max_states
        self.identity_preserving = identity_preserving
        self.compound_moves = compound_moves
        self.progress_every = progress_every
        self.graph: Optional[StateSpaceGraph] = None

    def iter_build(self, initial: Placement) -> Iterator[BuildProgress]:
        """
        Run the traversal, yielding a progress snapshot every
        ``progress_every`` expanded placements and once at the end.

        The graph under construction is available as ``self.graph``; closing
        the generator early leaves a valid partial graph.
        """
        graph = StateSpaceGraph(
            identity_preserving=self.identity_preserving,
            max_states=self.max_states,
        )
        self.graph = graph
        stats = graph.stats
        start = time.time()

        graph.add_state(initial)
        frontier = deque([(graph.initial_id, initial)])
        dropped = False

        try:
            while frontier and graph.state_count < self.max_states:
                current_id, current = frontier.popleft()
                index = OccupancyIndex(current)

                for move in legal_moves(current, self.identity_preserving,
                                        include_compound=self.compound_moves, index=index):
                    result = apply_move(current, move)
                    key = graph.key_of(result)
                    target_id = graph.index.get(key)
                    if target_id is None:
                        if graph.state_count >= self.max_states:
                            dropped = True
                            continue
                        target_id = graph.add_state(result, key)
                        frontier.append((target_id, result))
                    else:
                        stats.duplicates += 1

                    if graph.add_edge(current_id, target_id, move):
                        if move.compound:
                            stats.compound_edges += 1
                        else:
                            stats.single_edges += 1

                stats.processed += 1
                if stats.processed % self.progress_every == 0:
                    yield self._progress(graph, len(frontier), start)

            graph.complete = not frontier and not dropped
            yield self._progress(graph, len(frontier), start, done=True)
        finally:
            stats.elapsed = time.time() - start

    def build(self, initial: Placement,
              on_progress: Optional[Callable[[BuildProgress], Optional[bool]]] = None) -> StateSpaceGraph:
        """
        Enumerate from ``initial``.

        ``on_progress`` is called with every snapshot; returning False from it
        cancels the run and the partial graph is returned with ``cancelled``
        set.
        """
        runner = self.iter_build(initial)
        try:
            for progress in runner:
                if on_progress is None:
                    continue
                if on_progress(progress) is False and not progress.done:
                    self.graph.cancelled = True
                    break
        finally:
            runner.close()
        return self.graph

    def _progress(self, graph: StateSpaceGraph, frontier: int, start: float,
                  done: bool = False) -> BuildProgress:
        return BuildProgress(
            processed=graph.stats.processed,
            states=graph.state_count,
            edges=graph.edge_count,
            frontier=frontier,
            max_states=self.max_states,
            elapsed=time.time() - start,
            done=done,
        )


def build_state_space(initial: Placement, max_states: int = 100000,
                      identity_preserving: bool = False,
                      compound_moves: bool = True) -> StateSpaceGraph:
    """Enumerate every placement reachable from ``initial`` up to ``max_states``."""
    builder = StateSpaceBuilder(
        max_states=max_states,
        identity_preserving=identity_preserving,
        compound_moves=compound_moves,
    )
    return builder.build(initial)
