"""
klotskigraph: state-space enumeration for sliding-block puzzles

Given a board, forbidden cells and a set of pieces (boxes or arbitrary
cell-sets) on a 2D or 3D grid, klotskigraph discovers every placement
reachable by legal unit slides, including compound slides of mutually
interlocked pieces, and builds the graph of states and transitions.

Example Usage:
```python
from klotskigraph import build_state_space, resolve_puzzle

spec = resolve_puzzle("klotski")
graph = build_state_space(spec.placement, max_states=50000)
print(graph.state_count, graph.edge_count, graph.complete)
```

Command-line Usage:
```bash
klotskigraph enumerate --preset klotski --max-states 30000
klotskigraph run --config configs/klotski.yaml
klotskigraph inspect --preset combs
```
"""

# Normal imports instead of lazy loading to ensure proper registry initialization
from klotskigraph.puzzle import (
    Piece, Placement, Move, cells_of, shape_signature, validate_placement,
    OccupancyIndex, classify_empty_space, single_moves, compound_moves,
    legal_moves, apply_move, canonical_key, resolve_puzzle, resolve_goal,
    load_puzzle, save_puzzle,
)
from klotskigraph.search import (
    StateSpaceBuilder, StateSpaceGraph, build_state_space,
    export_graph, import_graph, save_graph, load_graph,
)
from klotskigraph.core.config import Config, load_config, validate_config

__version__ = "0.1.0"

__all__ = [
    "Piece",
    "Placement",
    "Move",
    "cells_of",
    "shape_signature",
    "validate_placement",
    "OccupancyIndex",
    "classify_empty_space",
    "single_moves",
    "compound_moves",
    "legal_moves",
    "apply_move",
    "canonical_key",
    "resolve_puzzle",
    "resolve_goal",
    "load_puzzle",
    "save_puzzle",
    "StateSpaceBuilder",
    "StateSpaceGraph",
    "build_state_space",
    "export_graph",
    "import_graph",
    "save_graph",
    "load_graph",
    "Config",
    "load_config",
    "validate_config",
]
