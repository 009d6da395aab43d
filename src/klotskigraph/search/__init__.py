"""
Breadth-first state-space enumeration and graph interchange.
"""

from klotskigraph.search.graph import BuildStats, StateSpaceGraph
from klotskigraph.search.builder import BuildProgress, StateSpaceBuilder, build_state_space
from klotskigraph.search.serialization import export_graph, import_graph, save_graph, load_graph

__all__ = [
    "BuildStats",
    "StateSpaceGraph",
    "BuildProgress",
    "StateSpaceBuilder",
    "build_state_space",
    "export_graph",
    "import_graph",
    "save_graph",
    "load_graph",
]
