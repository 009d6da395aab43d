"""
Built-in puzzle presets.
"""

from klotskigraph.core.errors import UnknownComponentError
from klotskigraph.core.registry import PUZZLE_REGISTRY, register_puzzle
from klotskigraph.puzzle.loader import PuzzleSpec
from klotskigraph.puzzle.model import Piece, Placement


@register_puzzle("klotski")
def klotski() -> PuzzleSpec:
    """Standard 4x5 Klotski (Huarong Dao) opening."""
    pieces = (
        Piece(0, (1, 0), size=(2, 2), name="big"),
        Piece(1, (0, 0), size=(1, 2), name="v1"),
        Piece(2, (3, 0), size=(1, 2), name="v2"),
        Piece(3, (0, 2), size=(1, 2), name="v3"),
        Piece(4, (3, 2), size=(1, 2), name="v4"),
        Piece(5, (1, 2), size=(2, 1), name="h1"),
        Piece(6, (1, 3), size=(1, 1), name="s1"),
        Piece(7, (2, 3), size=(1, 1), name="s2"),
        Piece(8, (1, 4), size=(1, 1), name="s3"),
        Piece(9, (2, 4), size=(1, 1), name="s4"),
    )
    return PuzzleSpec(
        name="klotski",
        placement=Placement(width=4, height=5, pieces=pieces),
        goal="klotski_exit",
    )


@register_puzzle("line")
def line() -> PuzzleSpec:
    """Two unit blocks in a 3x1 corridor."""
    pieces = (Piece(0, (0, 0), size=(1, 1)), Piece(1, (1, 0), size=(1, 1)))
    return PuzzleSpec(name="line", placement=Placement(width=3, height=1, pieces=pieces))


@register_puzzle("square")
def square() -> PuzzleSpec:
    """Two unit blocks on a 2x2 board; labelled blocks can trade places."""
    pieces = (Piece(0, (0, 0), size=(1, 1)), Piece(1, (1, 0), size=(1, 1)))
    return PuzzleSpec(name="square", placement=Placement(width=2, height=2, pieces=pieces))


@register_puzzle("packed")
def packed() -> PuzzleSpec:
    """A 2x2 board filled by a single 2x2 block."""
    pieces = (Piece(0, (0, 0), size=(2, 2)),)
    return PuzzleSpec(name="packed", placement=Placement(width=2, height=2, pieces=pieces))


@register_puzzle("combs")
def combs() -> PuzzleSpec:
    """Two interleaved combs in a 5x1 slot; they only move together."""
    teeth = ((0, 0), (2, 0))
    pieces = (
        Piece(0, (0, 0), offsets=teeth, name="comb_a"),
        Piece(1, (1, 0), offsets=teeth, name="comb_b"),
    )
    return PuzzleSpec(name="combs", placement=Placement(width=5, height=1, pieces=pieces))


@register_puzzle("cube")
def cube() -> PuzzleSpec:
    """Six unit cubes in a 2x2x2 box with two holes."""
    cells = [(0, 0, 0), (1, 0, 0), (0, 1, 0), (1, 1, 0), (0, 0, 1), (1, 0, 1)]
    pieces = tuple(Piece(i, cell, size=(1, 1, 1)) for i, cell in enumerate(cells))
    return PuzzleSpec(name="cube", placement=Placement(width=2, height=2, depth=2, pieces=pieces))


def resolve_puzzle(name: str) -> PuzzleSpec:
    factory = PUZZLE_REGISTRY.get(name)
    if factory is None:
        raise UnknownComponentError(
            f"Unknown puzzle preset '{name}'. Available: {', '.join(sorted(PUZZLE_REGISTRY))}"
        )
    return factory()
