"""
Compound move detection for mutually interlocked pieces.

A compound move translates a rigid group of pieces by one cell when none of
them can slide alone. Per direction the generator:

1. builds a dependency graph: P -> Q when P's shifted cells hit Q *and* Q's
   shifted cells hit P (mutual collision); pieces whose shifted cells leave the
   board or hit a forbidden cell are anchored,
2. finds its strongly connected components (iterative Tarjan),
3. closes reachability over the components to get candidate groups,
4. keeps groups that can translate as a unit,
5. keeps groups whose members are all individually stuck,
6. drops groups whose result is already one single move away.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

from klotskigraph.puzzle.hashing import canonical_key
from klotskigraph.puzzle.model import Direction, Placement
from klotskigraph.puzzle.moves import Move, apply_move, single_moves
from klotskigraph.puzzle.occupancy import EMPTY, FORBIDDEN, OccupancyIndex


@dataclass
class DependencyGraph:
    """Per-direction blocking relation between pieces."""
    direction: Direction
    nodes: List[int]
    edges: Dict[int, List[int]] = field(default_factory=dict)
    anchored: Set[int] = field(default_factory=set)


def dependency_graph(placement: Placement, direction: Direction,
                     index: Optional[OccupancyIndex] = None) -> DependencyGraph:
    index = index or OccupancyIndex(placement)
    nodes = [p.id for p in placement.pieces_by_id()]
    graph = DependencyGraph(direction=direction, nodes=nodes)

    for piece_id in nodes:
        occupants = index.targets(index.shifted(piece_id, direction))
        if occupants is None or (occupants == FORBIDDEN).any():
            graph.anchored.add(piece_id)
            graph.edges[piece_id] = []
            continue

        blockers = []
        for other in occupants.tolist():
            if other == EMPTY or other == piece_id or other in blockers:
                continue
            # Only a mutual collision is a dependency.
            back = index.targets(index.shifted(other, direction))
            if back is not None and (back == piece_id).any():
                blockers.append(other)
        graph.edges[piece_id] = blockers

    return graph


def strongly_connected_components(nodes: Iterable[int],
                                  edges: Dict[int, Sequence[int]]) -> List[List[int]]:
    """
    Tarjan's algorithm with an explicit work stack.

    Components come out in reverse topological order, each sorted by id.
    """
    index_of: Dict[int, int] = {}
    lowlink: Dict[int, int] = {}
    stack: List[int] = []
    on_stack: Set[int] = set()
    components: List[List[int]] = []
    counter = 0

    for root in nodes:
        if root in index_of:
            continue
        index_of[root] = lowlink[root] = counter
        counter += 1
        stack.append(root)
        on_stack.add(root)
        work = [(root, iter(edges.get(root, ())))]

        while work:
            node, successors = work[-1]
            descended = False
            for succ in successors:
                if succ not in index_of:
                    index_of[succ] = lowlink[succ] = counter
                    counter += 1
                    stack.append(succ)
                    on_stack.add(succ)
                    work.append((succ, iter(edges.get(succ, ()))))
                    descended = True
                    break
                if succ in on_stack:
                    lowlink[node] = min(lowlink[node], index_of[succ])
            if descended:
                continue

            work.pop()
            if work:
                parent = work[-1][0]
                lowlink[parent] = min(lowlink[parent], lowlink[node])

            if lowlink[node] == index_of[node]:
                component = []
                while True:
                    member = stack.pop()
                    on_stack.discard(member)
                    component.append(member)
                    if member == node:
                        break
                components.append(sorted(component))

    return components


def transitive_closure(successors: Dict[int, Set[int]]) -> Dict[int, Set[int]]:
    """Reflexive transitive closure of a small successor relation."""
    closure: Dict[int, Set[int]] = {}
    for start in successors:
        reached = {start}
        pending = [start]
        while pending:
            node = pending.pop()
            for nxt in successors.get(node, ()):
                if nxt not in reached:
                    reached.add(nxt)
                    pending.append(nxt)
        closure[start] = reached
    return closure


def candidate_groups(graph: DependencyGraph) -> List[Tuple[int, ...]]:
    """Rigid groups implied by the SCC condensation, anchored ones removed."""
    components = strongly_connected_components(graph.nodes, graph.edges)
    component_of = {piece_id: i for i, comp in enumerate(components) for piece_id in comp}
    anchored = {
        i for i, comp in enumerate(components)
        if any(piece_id in graph.anchored for piece_id in comp)
    }

    successors: Dict[int, Set[int]] = {}
    for i, comp in enumerate(components):
        successors[i] = {i} | {component_of[q] for p in comp for q in graph.edges.get(p, ())}
    closure = transitive_closure(successors)

    groups = set()
    for i in range(len(components)):
        if closure[i] & anchored:
            continue
        members = sorted(p for j in closure[i] for p in components[j])
        groups.add(tuple(members))
    return sorted(groups)


def interlocked_groups(placement: Placement, direction: Direction,
                       index: Optional[OccupancyIndex] = None) -> List[Tuple[int, ...]]:
    """Groups that can slide together in ``direction`` while every member is stuck alone."""
    index = index or OccupancyIndex(placement)
    graph = dependency_graph(placement, direction, index)
    result = []
    for group in candidate_groups(graph):
        if not index.can_translate(group, direction):
            continue
        if any(index.can_move(piece_id, direction) for piece_id in group):
            continue
        result.append(group)
    return result


def compound_moves(placement: Placement, identity_preserving: bool = False,
                   index: Optional[OccupancyIndex] = None,
                   singles: Optional[List[Move]] = None) -> List[Move]:
    """
    All non-redundant compound moves of ``placement``.

    A candidate is dropped when its resulting key equals the key of a
    placement reachable by one single move.
    """
    index = index or OccupancyIndex(placement)
    single_keys = None
    moves = []

    for direction in placement.directions:
        for group in interlocked_groups(placement, direction, index):
            if single_keys is None:
                if singles is None:
                    singles = single_moves(placement, index)
                single_keys = {
                    canonical_key(apply_move(placement, m), identity_preserving)
                    for m in singles
                }
            move = Move(group, direction, compound=True)
            if canonical_key(apply_move(placement, move), identity_preserving) in single_keys:
                continue
            moves.append(move)

    return moves
