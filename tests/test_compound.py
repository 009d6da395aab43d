"""
Tests for compound move detection: dependency graph, SCCs, interlock filter.
"""

from klotskigraph.puzzle.compound import (
    candidate_groups, compound_moves, dependency_graph,
    interlocked_groups, strongly_connected_components, transitive_closure,
)
from klotskigraph.puzzle.model import Piece, Placement
from klotskigraph.puzzle.moves import Move, apply_move, legal_moves, single_moves

from conftest import unit

LEFT, RIGHT = (-1, 0, 0), (1, 0, 0)


# ========== Graph algorithms ==========

def test_scc_finds_cycles_and_singletons():
    edges = {1: [2], 2: [3], 3: [1], 4: [3], 5: []}
    components = strongly_connected_components([1, 2, 3, 4, 5], edges)
    assert sorted(components) == [[1, 2, 3], [4], [5]]


def test_scc_reverse_topological_order():
    edges = {1: [2], 2: [1, 3], 3: []}
    components = strongly_connected_components([1, 2, 3], edges)
    assert components.index([3]) < components.index([1, 2])


def test_scc_handles_long_chains_without_recursion():
    n = 5000
    edges = {i: [i + 1] for i in range(n)}
    edges[n] = [0]
    components = strongly_connected_components(range(n + 1), edges)
    assert len(components) == 1
    assert len(components[0]) == n + 1


def test_transitive_closure_is_reflexive():
    closure = transitive_closure({0: {1}, 1: {2}, 2: set()})
    assert closure[0] == {0, 1, 2}
    assert closure[2] == {2}


# ========== Dependency graph ==========

def test_mutual_collision_makes_edges(combs_placement):
    graph = dependency_graph(combs_placement, RIGHT)
    assert graph.edges[0] == [1]
    assert graph.edges[1] == [0]
    assert graph.anchored == set()


def test_one_way_blocking_is_not_a_dependency(line_placement):
    graph = dependency_graph(line_placement, RIGHT)
    assert graph.edges[0] == []


def test_leaving_the_board_anchors(combs_placement):
    graph = dependency_graph(combs_placement, LEFT)
    assert 0 in graph.anchored
    assert all(0 not in group for group in candidate_groups(graph))
    assert interlocked_groups(combs_placement, LEFT) == []


# ========== Compound moves ==========

def test_interlocked_combs_move_together(combs_placement):
    assert single_moves(combs_placement) == []
    assert interlocked_groups(combs_placement, RIGHT) == [(0, 1)]
    assert compound_moves(combs_placement) == [Move((0, 1), RIGHT, compound=True)]


def test_compound_move_result(combs_placement):
    after = apply_move(combs_placement, Move((0, 1), RIGHT, compound=True))
    assert after.piece(0).anchor == (1, 0, 0)
    assert after.piece(1).anchor == (2, 0, 0)
    assert compound_moves(after) == [Move((0, 1), LEFT, compound=True)]


def test_no_compound_when_a_single_move_exists(flanked_placement):
    # Piece 2 can step right, so nothing here is truly interlocked.
    assert Move((2,), RIGHT) in single_moves(flanked_placement)
    assert compound_moves(flanked_placement) == []
    assert compound_moves(flanked_placement, identity_preserving=True) == []


def test_no_interlock_without_mutual_collision(walled_placement, square_placement):
    for placement in (walled_placement, square_placement):
        for direction in placement.directions:
            assert interlocked_groups(placement, direction) == []


def test_group_next_to_forbidden_cell_cannot_move():
    teeth = ((0, 0), (2, 0))
    placement = Placement(
        width=5, height=1,
        forbidden=frozenset({(4, 0)}),
        pieces=(Piece(0, (0, 0), offsets=teeth), Piece(1, (1, 0), offsets=teeth)),
    )
    assert compound_moves(placement) == []


def test_third_piece_outside_the_group_blocks_it():
    teeth = ((0, 0), (2, 0))
    placement = Placement(width=5, height=1, pieces=(
        Piece(0, (0, 0), offsets=teeth),
        Piece(1, (1, 0), offsets=teeth),
        unit(2, 4, 0),
    ))
    assert compound_moves(placement) == []


def test_chain_of_mutual_collisions_moves_as_one_group():
    # A and C both interlock with B, so all three form one component.
    placement = Placement(width=7, height=1, pieces=(
        Piece(0, (0, 0), offsets=((0, 0), (2, 0))),
        Piece(1, (1, 0), offsets=((0, 0), (3, 0))),
        Piece(2, (3, 0), offsets=((0, 0), (2, 0))),
    ))
    assert single_moves(placement) == []
    assert compound_moves(placement) == [Move((0, 1, 2), RIGHT, compound=True)]


def test_one_way_cycle_is_not_interlocked():
    # A hits B, B hits C, C hits A, but no pair collides both ways.
    teeth = ((0, 0), (3, 0))
    placement = Placement(width=7, height=1, pieces=(
        Piece(0, (0, 0), offsets=teeth),
        Piece(1, (1, 0), offsets=teeth),
        Piece(2, (2, 0), offsets=teeth),
    ))
    graph = dependency_graph(placement, RIGHT)
    assert all(not blockers for blockers in graph.edges.values())
    assert compound_moves(placement) == []


def test_legal_moves_lists_singles_first(combs_placement, line_placement):
    assert legal_moves(combs_placement) == [Move((0, 1), RIGHT, compound=True)]
    assert legal_moves(combs_placement, include_compound=False) == []
    assert legal_moves(line_placement) == single_moves(line_placement)
