"""
Board / piece model for sliding-block puzzles.

Cells are integer ``(x, y, z)`` tuples. Two-element tuples are accepted at
every public boundary and padded with ``z = 0``; a board of depth 1 is 2D.
"""

from dataclasses import dataclass, field, replace
from typing import Dict, FrozenSet, Iterable, Iterator, List, Optional, Sequence, Tuple

from klotskigraph.core.errors import ErrorCode

Cell = Tuple[int, int, int]
Direction = Tuple[int, int, int]
ShapeSignature = Tuple

# Fixed enumeration order: up, down, left, right, then back / front in 3D.
DIRECTIONS_2D: Tuple[Direction, ...] = ((0, -1, 0), (0, 1, 0), (-1, 0, 0), (1, 0, 0))
DIRECTIONS_3D: Tuple[Direction, ...] = DIRECTIONS_2D + ((0, 0, -1), (0, 0, 1))

DIRECTION_NAMES: Dict[Direction, str] = {
    (0, -1, 0): "up",
    (0, 1, 0): "down",
    (-1, 0, 0): "left",
    (1, 0, 0): "right",
    (0, 0, -1): "back",
    (0, 0, 1): "front",
}


def to_cell(coords: Sequence[int]) -> Cell:
    """Convert a 2- or 3-element coordinate sequence to a 3D cell."""
    if len(coords) == 2:
        return (int(coords[0]), int(coords[1]), 0)
    if len(coords) == 3:
        return (int(coords[0]), int(coords[1]), int(coords[2]))
    raise ValueError(f"cell must have 2 or 3 coordinates, got {list(coords)}")


def zyx_order(cell: Cell) -> Tuple[int, int, int]:
    """Sort key ordering cells by z, then y, then x."""
    return (cell[2], cell[1], cell[0])


def shift(cells: Iterable[Cell], direction: Direction) -> List[Cell]:
    dx, dy, dz = direction
    return [(x + dx, y + dy, z + dz) for x, y, z in cells]


def negate(direction: Direction) -> Direction:
    return (-direction[0], -direction[1], -direction[2])


@dataclass(frozen=True)
class Piece:
    """A rigid piece: either a box (``size``) or an explicit cell-set (``offsets``)."""
    id: int
    anchor: Cell
    size: Optional[Tuple[int, int, int]] = None
    offsets: Optional[Tuple[Cell, ...]] = None
    name: Optional[str] = field(default=None, compare=False)

    def __post_init__(self):
        if self.id < 0:
            raise ValueError(f"piece id must be non-negative, got {self.id}")
        if (self.size is None) == (self.offsets is None):
            raise ValueError(f"piece {self.id} needs exactly one of size or offsets")
        object.__setattr__(self, "anchor", to_cell(self.anchor))
        if self.size is not None:
            size = tuple(int(v) for v in self.size)
            if len(size) == 2:
                size = size + (1,)
            if len(size) != 3:
                raise ValueError(f"piece {self.id} size must have 2 or 3 extents")
            object.__setattr__(self, "size", size)
        else:
            offsets = tuple(sorted({to_cell(o) for o in self.offsets}, key=zyx_order))
            object.__setattr__(self, "offsets", offsets)

    @property
    def is_box(self) -> bool:
        return self.size is not None

    def moved(self, direction: Direction) -> "Piece":
        """Return a copy of this piece translated by ``direction``."""
        x, y, z = self.anchor
        return replace(self, anchor=(x + direction[0], y + direction[1], z + direction[2]))


def cells_of(piece: Piece) -> Tuple[Cell, ...]:
    """Absolute cells covered by ``piece`` at its current anchor, in z/y/x order."""
    ax, ay, az = piece.anchor
    if piece.size is not None:
        w, h, d = piece.size
        return tuple(
            (ax + dx, ay + dy, az + dz)
            for dz in range(d)
            for dy in range(h)
            for dx in range(w)
        )
    return tuple((ax + ox, ay + oy, az + oz) for ox, oy, oz in piece.offsets)


def _normalized_offsets(offsets: Tuple[Cell, ...]) -> Tuple[Cell, ...]:
    min_x = min(o[0] for o in offsets)
    min_y = min(o[1] for o in offsets)
    min_z = min(o[2] for o in offsets)
    normalized = [(x - min_x, y - min_y, z - min_z) for x, y, z in offsets]
    return tuple(sorted(normalized, key=zyx_order))


def shape_signature(piece: Piece) -> ShapeSignature:
    """
    Translation-invariant shape signature.

    Boxes map to ``("box", (w, h, d))``; cell-sets map to their offsets
    normalised to a minimum-corner origin and sorted by z, y, x. A cell-set
    that exactly fills its bounding box maps to the box signature so both
    encodings of the same shape compare equal.
    """
    if piece.size is not None:
        return ("box", piece.size)
    if not piece.offsets:
        return ("cells", ())
    normalized = _normalized_offsets(piece.offsets)
    extent = tuple(max(o[axis] for o in normalized) + 1 for axis in range(3))
    if len(normalized) == extent[0] * extent[1] * extent[2]:
        return ("box", extent)
    return ("cells", normalized)


def origin_of(piece: Piece) -> Cell:
    """Minimum corner of the piece's cells."""
    if piece.size is not None or not piece.offsets:
        return piece.anchor
    ax, ay, az = piece.anchor
    return (
        ax + min(o[0] for o in piece.offsets),
        ay + min(o[1] for o in piece.offsets),
        az + min(o[2] for o in piece.offsets),
    )


def signature_label(signature: ShapeSignature) -> str:
    """Short human-readable label for a shape signature."""
    kind, body = signature
    if kind == "box":
        return "box" + "x".join(str(v) for v in body)
    return "cells[" + ";".join(f"{x},{y},{z}" for x, y, z in body) + "]"


@dataclass(frozen=True)
class Placement:
    """One concrete arrangement of all pieces on a board."""
    width: int
    height: int
    depth: int = 1
    pieces: Tuple[Piece, ...] = ()
    forbidden: FrozenSet[Cell] = frozenset()

    def __post_init__(self):
        object.__setattr__(self, "pieces", tuple(self.pieces))
        object.__setattr__(self, "forbidden", frozenset(to_cell(c) for c in self.forbidden))
        if self.depth is None:
            object.__setattr__(self, "depth", 1)

    @property
    def is_3d(self) -> bool:
        return self.depth > 1

    @property
    def dims(self) -> Tuple[int, int, int]:
        return (self.width, self.height, self.depth)

    @property
    def directions(self) -> Tuple[Direction, ...]:
        return DIRECTIONS_3D if self.is_3d else DIRECTIONS_2D

    def in_bounds(self, cell: Cell) -> bool:
        x, y, z = cell
        return 0 <= x < self.width and 0 <= y < self.height and 0 <= z < self.depth

    def piece(self, piece_id: int) -> Optional[Piece]:
        for p in self.pieces:
            if p.id == piece_id:
                return p
        return None

    def pieces_by_id(self) -> List[Piece]:
        return sorted(self.pieces, key=lambda p: p.id)

    def with_pieces(self, pieces: Iterable[Piece]) -> "Placement":
        return replace(self, pieces=tuple(pieces))

    def board_cells(self) -> Iterator[Cell]:
        """All board cells in z, y, x order."""
        for z in range(self.depth):
            for y in range(self.height):
                for x in range(self.width):
                    yield (x, y, z)

    def describe(self) -> str:
        dims = f"{self.width}x{self.height}" + (f"x{self.depth}" if self.is_3d else "")
        return f"{dims} board, {len(self.pieces)} pieces, {len(self.forbidden)} forbidden cells"


def validate_placement(placement: Placement) -> List[str]:
    """
    Check the placement well-formedness invariants.

    The enumeration engine never calls this itself; callers that accept
    untrusted input should run it first.

    Returns:
        List of issue messages, each prefixed with its ErrorCode value.
        An empty list means the placement is well formed.
    """
    issues = []
    owner: Dict[Cell, int] = {}
    seen_ids = set()

    for piece in placement.pieces:
        if piece.id in seen_ids:
            issues.append(f"{ErrorCode.DUPLICATE_ID.value}: piece id {piece.id} is used more than once")
        seen_ids.add(piece.id)

        cells = cells_of(piece)
        if not cells:
            issues.append(f"{ErrorCode.EMPTY_SHAPE.value}: piece {piece.id} covers no cells")
            continue

        for cell in cells:
            if not placement.in_bounds(cell):
                issues.append(f"{ErrorCode.OUT_OF_BOUNDS.value}: piece {piece.id} leaves the board at {cell}")
            elif cell in placement.forbidden:
                issues.append(f"{ErrorCode.FORBIDDEN.value}: piece {piece.id} covers forbidden cell {cell}")
            elif cell in owner:
                issues.append(
                    f"{ErrorCode.COLLISION.value}: pieces {owner[cell]} and {piece.id} overlap at {cell}"
                )
            else:
                owner[cell] = piece.id

    return issues


class PieceIdAllocator:
    """Hands out sequential piece ids for one editing or loading session."""

    def __init__(self, start: int = 0):
        self._next = start

    def reserve(self, piece_id: int) -> None:
        """Make sure ids handed out later never collide with ``piece_id``."""
        if piece_id >= self._next:
            self._next = piece_id + 1

    def next_id(self) -> int:
        piece_id = self._next
        self._next += 1
        return piece_id
