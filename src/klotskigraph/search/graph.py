"""
State-space graph produced by the builder.
"""

from collections import deque
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from klotskigraph.puzzle.hashing import CanonicalKey, canonical_key
from klotskigraph.puzzle.model import Placement
from klotskigraph.puzzle.moves import Move


@dataclass
class BuildStats:
    """Counters collected while enumerating."""
    processed: int = 0
    duplicates: int = 0
    single_edges: int = 0
    compound_edges: int = 0
    elapsed: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "processed": self.processed,
            "duplicates": self.duplicates,
            "single_edges": self.single_edges,
            "compound_edges": self.compound_edges,
            "elapsed": self.elapsed,
        }


@dataclass
class StateSpaceGraph:
    """
    Discovered placements (index = state id), their canonical keys, directed
    edges and per-state neighbour lists.

    ``complete`` is True when the frontier was exhausted; otherwise the graph
    is a prefix of the reachable space cut off at ``max_states`` (or by
    cancellation).
    """
    identity_preserving: bool = False
    max_states: Optional[int] = None
    states: List[Placement] = field(default_factory=list)
    index: Dict[CanonicalKey, int] = field(default_factory=dict)
    edges: List[Tuple[int, int]] = field(default_factory=list)
    edge_moves: List[Move] = field(default_factory=list)
    neighbors: List[List[int]] = field(default_factory=list)
    initial_id: int = 0
    complete: bool = False
    cancelled: bool = False
    stats: BuildStats = field(default_factory=BuildStats)

    @property
    def state_count(self) -> int:
        return len(self.states)

    @property
    def edge_count(self) -> int:
        return len(self.edges)

    @property
    def truncated(self) -> bool:
        return not self.complete

    def key_of(self, placement: Placement) -> CanonicalKey:
        return canonical_key(placement, self.identity_preserving)

    def add_state(self, placement: Placement, key: Optional[CanonicalKey] = None) -> int:
        """Register ``placement`` if its key is new; return its state id."""
        key = key if key is not None else self.key_of(placement)
        state_id = self.index.get(key)
        if state_id is None:
            state_id = len(self.states)
            self.index[key] = state_id
            self.states.append(placement)
            self.neighbors.append([])
        return state_id

    def add_edge(self, source: int, target: int, move: Move) -> bool:
        """Record source -> target once; returns False for a parallel edge."""
        if target in self.neighbors[source]:
            return False
        self.neighbors[source].append(target)
        self.edges.append((source, target))
        self.edge_moves.append(move)
        return True

    def state(self, state_id: int) -> Placement:
        return self.states[state_id]

    def state_id(self, placement: Placement) -> Optional[int]:
        """Locate a placement (e.g. after a user drag) by recomputing its key."""
        return self.index.get(self.key_of(placement))

    def find_states(self, predicate: Callable[[Placement], bool]) -> List[int]:
        return [i for i, placement in enumerate(self.states) if predicate(placement)]

    def terminal_states(self) -> List[int]:
        """States with no outgoing edge (only meaningful on a complete graph)."""
        return [i for i, nbrs in enumerate(self.neighbors) if not nbrs]

    def levels(self) -> List[int]:
        """BFS depth of every state from the initial state; -1 if unreached."""
        levels = [-1] * len(self.states)
        if not self.states:
            return levels
        levels[self.initial_id] = 0
        queue = deque([self.initial_id])
        while queue:
            current = queue.popleft()
            for nxt in self.neighbors[current]:
                if levels[nxt] == -1:
                    levels[nxt] = levels[current] + 1
                    queue.append(nxt)
        return levels
