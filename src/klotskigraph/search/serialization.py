"""
Graph interchange: export a StateSpaceGraph to a plain record (JSON-ready)
and rebuild it without re-running the search.
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, List

from klotskigraph.core.errors import PuzzleFormatError
from klotskigraph.puzzle.loader import placement_from_dict, placement_to_dict
from klotskigraph.puzzle.moves import Move
from klotskigraph.search.graph import BuildStats, StateSpaceGraph

FORMAT_VERSION = 1


def export_graph(graph: StateSpaceGraph) -> Dict[str, Any]:
    return {
        "format_version": FORMAT_VERSION,
        "state_count": graph.state_count,
        "initial_id": graph.initial_id,
        "identity_preserving": graph.identity_preserving,
        "max_states": graph.max_states,
        "complete": graph.complete,
        "states": [
            {
                "id": i,
                "placement": placement_to_dict(placement),
                "neighbors": list(graph.neighbors[i]),
            }
            for i, placement in enumerate(graph.states)
        ],
        "edges": [[source, target] for source, target in graph.edges],
        "edge_moves": [move.to_dict() for move in graph.edge_moves],
        "stats": graph.stats.to_dict(),
    }


def import_graph(record: Dict[str, Any]) -> StateSpaceGraph:
    """
    Rebuild a graph from ``export_graph`` output. State ids, neighbour lists
    and edge order are reproduced exactly; keys are recomputed with the
    recorded hashing mode.

    Raises:
        PuzzleFormatError: If the record is inconsistent
    """
    if not isinstance(record, dict):
        raise PuzzleFormatError("graph record must be a mapping")

    try:
        graph = StateSpaceGraph(
            identity_preserving=bool(record.get("identity_preserving", False)),
            max_states=record.get("max_states"),
            initial_id=int(record.get("initial_id", 0)),
            complete=bool(record.get("complete", False)),
        )
        entries = sorted(record["states"], key=lambda s: s["id"])
        for expected_id, entry in enumerate(entries):
            if entry["id"] != expected_id:
                raise PuzzleFormatError(f"state ids are not contiguous at {entry['id']}")
            placement = placement_from_dict(entry["placement"])
            key = graph.key_of(placement)
            if key in graph.index:
                raise PuzzleFormatError(f"state {expected_id} duplicates state {graph.index[key]}")
            graph.index[key] = expected_id
            graph.states.append(placement)
            graph.neighbors.append([int(n) for n in entry.get("neighbors", [])])

        graph.edges = [(int(s), int(t)) for s, t in record.get("edges", [])]
        graph.edge_moves = [Move.from_dict(m) for m in record.get("edge_moves", [])]

        stats = record.get("stats") or {}
        graph.stats = BuildStats(**{k: v for k, v in stats.items() if k in BuildStats.__dataclass_fields__})
    except PuzzleFormatError:
        raise
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise PuzzleFormatError(f"Malformed graph record: {e}") from e

    count = record.get("state_count", graph.state_count)
    if count != graph.state_count:
        raise PuzzleFormatError(f"state_count {count} does not match {graph.state_count} states")
    _check_links(graph)
    return graph


def _check_links(graph: StateSpaceGraph) -> None:
    """Edges, moves and neighbour lists must agree and stay inside the state list."""
    count = graph.state_count
    if count and not 0 <= graph.initial_id < count:
        raise PuzzleFormatError(f"initial_id {graph.initial_id} is not a state id")

    for state_id, neighbors in enumerate(graph.neighbors):
        for target in neighbors:
            if not 0 <= target < count:
                raise PuzzleFormatError(f"state {state_id} lists unknown neighbour {target}")
        if len(set(neighbors)) != len(neighbors):
            raise PuzzleFormatError(f"state {state_id} lists a neighbour twice")

    if len(graph.edge_moves) != len(graph.edges):
        raise PuzzleFormatError(
            f"{len(graph.edge_moves)} edge moves recorded for {len(graph.edges)} edges"
        )

    targets_by_source: List[List[int]] = [[] for _ in range(count)]
    for source, target in graph.edges:
        if not (0 <= source < count and 0 <= target < count):
            raise PuzzleFormatError(f"edge ({source}, {target}) refers to an unknown state")
        targets_by_source[source].append(target)
    if targets_by_source != graph.neighbors:
        raise PuzzleFormatError("edge list does not match the neighbour lists")


def save_graph(graph: StateSpaceGraph, path: str) -> None:
    path = Path(path)
    if path.parent and not path.parent.exists():
        os.makedirs(path.parent, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(export_graph(graph), f)


def load_graph(path: str) -> StateSpaceGraph:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Graph file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        try:
            record = json.load(f)
        except json.JSONDecodeError as e:
            raise PuzzleFormatError(f"Error parsing graph file {path}: {e}") from e
    return import_graph(record)
