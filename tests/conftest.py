"""
Shared fixtures for the klotskigraph test suite.
"""

import pytest

from klotskigraph.puzzle.model import Piece, Placement
from klotskigraph.puzzle.presets import resolve_puzzle


def unit(piece_id, x, y, z=0):
    """1x1(x1) box at (x, y, z)"""
    return Piece(piece_id, (x, y, z), size=(1, 1, 1))


# ========== Placements ==========

@pytest.fixture
def line_placement():
    """3x1 corridor, unit blocks at x=0 and x=1"""
    return resolve_puzzle("line").placement


@pytest.fixture
def square_placement():
    """2x2 board, unit blocks at (0,0) and (1,0)"""
    return resolve_puzzle("square").placement


@pytest.fixture
def packed_placement():
    """2x2 board filled by one 2x2 block"""
    return resolve_puzzle("packed").placement


@pytest.fixture
def combs_placement():
    """Two interleaved combs in a 5x1 slot"""
    return resolve_puzzle("combs").placement


@pytest.fixture
def flanked_placement():
    """5x1: unit at 0, 2x1 bar at 1-2, unit at 3, hole at 4"""
    return Placement(width=5, height=1, pieces=(
        unit(0, 0, 0),
        Piece(1, (1, 0), size=(2, 1)),
        unit(2, 3, 0),
    ))


@pytest.fixture
def ring_placement():
    """5x5 board with a hollow 3x3 ring around (2,2)"""
    ring = [(x, y) for y in range(3) for x in range(3) if (x, y) != (1, 1)]
    return Placement(width=5, height=5, pieces=(Piece(0, (1, 1), offsets=tuple(ring)),))


@pytest.fixture
def walled_placement():
    """4x3 board with a forbidden pillar, an L piece and two unit blocks"""
    return Placement(
        width=4,
        height=3,
        forbidden=frozenset({(2, 1)}),
        pieces=(
            Piece(0, (0, 0), offsets=((0, 0), (0, 1), (1, 1))),
            unit(1, 3, 0),
            unit(2, 3, 2),
        ),
    )
