"""
Occupancy index and empty-space classification.

The index is derived data: it is rebuilt from scratch for every placement and
never mutated afterwards.
"""

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, List, Optional, Tuple

import numpy as np
from scipy import ndimage

from klotskigraph.puzzle.model import Cell, Direction, Placement, cells_of

EMPTY = -1
FORBIDDEN = -2
OUTSIDE = -3

# Label values used by classify_empty_space
NOT_EMPTY = -1
OPEN = 0


class OccupancyIndex:
    """Cell -> occupant lookup for one placement, backed by a numpy grid."""

    def __init__(self, placement: Placement):
        self.placement = placement
        self.dims = np.array(placement.dims, dtype=np.int64)
        self.grid = np.full(placement.dims, EMPTY, dtype=np.int64)

        for cell in placement.forbidden:
            if placement.in_bounds(cell):
                self.grid[cell] = FORBIDDEN

        self.cells: Dict[int, Tuple[Cell, ...]] = {}
        self.arrays: Dict[int, np.ndarray] = {}
        for piece in placement.pieces:
            cells = cells_of(piece)
            self.cells[piece.id] = cells
            self.arrays[piece.id] = np.array(cells, dtype=np.int64).reshape(-1, 3)
            for cell in cells:
                if placement.in_bounds(cell):
                    self.grid[cell] = piece.id

    def occupant(self, cell: Cell) -> int:
        """Piece id at ``cell``, or EMPTY / FORBIDDEN / OUTSIDE."""
        if not self.placement.in_bounds(cell):
            return OUTSIDE
        return int(self.grid[cell])

    def shifted(self, piece_id: int, direction: Direction) -> np.ndarray:
        return self.arrays[piece_id] + np.asarray(direction, dtype=np.int64)

    def targets(self, cells: np.ndarray) -> Optional[np.ndarray]:
        """
        Occupants of ``cells`` (an ``(n, 3)`` array).

        Returns None if any cell lies outside the board.
        """
        if cells.size == 0:
            return np.empty(0, dtype=np.int64)
        if (cells < 0).any() or (cells >= self.dims).any():
            return None
        return self.grid[cells[:, 0], cells[:, 1], cells[:, 2]]

    def can_translate(self, piece_ids: Iterable[int], direction: Direction) -> bool:
        """
        True if every listed piece, shifted by ``direction``, lands on cells
        that are in bounds, not forbidden, and empty or held by a listed piece.
        """
        movers = set(piece_ids)
        for piece_id in movers:
            occupants = self.targets(self.shifted(piece_id, direction))
            if occupants is None:
                return False
            for occupant in occupants.tolist():
                if occupant != EMPTY and occupant not in movers:
                    return False
        return True

    def can_move(self, piece_id: int, direction: Direction) -> bool:
        return self.can_translate((piece_id,), direction)


@dataclass
class EmptySpace:
    """Classification of the empty cells of a placement."""
    labels: np.ndarray
    open_cells: FrozenSet[Cell] = frozenset()
    cavities: List[FrozenSet[Cell]] = field(default_factory=list)

    @property
    def cavity_count(self) -> int:
        return len(self.cavities)

    @property
    def has_cavities(self) -> bool:
        return bool(self.cavities)

    def cavity_of(self, cell: Cell) -> Optional[int]:
        """Cavity number (1-based) holding ``cell``, or None."""
        label = int(self.labels[cell])
        return label if label > OPEN else None


def _cell_set(zyx_coords: np.ndarray) -> FrozenSet[Cell]:
    return frozenset((int(x), int(y), int(z)) for z, y, x in zyx_coords)


def classify_empty_space(placement: Placement,
                         index: Optional[OccupancyIndex] = None) -> EmptySpace:
    """
    Split the empty cells into "open" and numbered cavities.

    Empty cells are labelled into 4- (2D) or 6- (3D) connected regions with
    ``scipy.ndimage.label``. A region touching the board boundary is open;
    the z faces only count as boundary on a 3D board. Remaining regions are
    cavities, numbered from 1 in the order their first cell appears in a
    z, y, x scan.
    """
    index = index or OccupancyIndex(placement)
    # z, y, x view: raster order of this array is the z, y, x scan order
    empty = (index.grid == EMPTY).transpose(2, 1, 0)
    structure = ndimage.generate_binary_structure(3, 1)
    regions, _ = ndimage.label(empty, structure=structure)

    boundary = np.zeros(empty.shape, dtype=bool)
    boundary[:, 0, :] = boundary[:, -1, :] = True
    boundary[:, :, 0] = boundary[:, :, -1] = True
    if placement.is_3d:
        boundary[0, :, :] = boundary[-1, :, :] = True
    open_regions = set(np.unique(regions[boundary & empty]).tolist())

    labels = np.full(empty.shape, NOT_EMPTY, dtype=np.int64)
    labels[empty] = OPEN

    region_ids, first_seen = np.unique(regions.ravel(), return_index=True)
    enclosed = [
        int(region) for _, region in sorted(zip(first_seen.tolist(), region_ids.tolist()))
        if region != 0 and region not in open_regions
    ]

    cavities: List[FrozenSet[Cell]] = []
    for number, region in enumerate(enclosed, start=1):
        mask = regions == region
        labels[mask] = number
        cavities.append(_cell_set(np.argwhere(mask)))

    return EmptySpace(
        labels=np.ascontiguousarray(labels.transpose(2, 1, 0)),
        open_cells=_cell_set(np.argwhere(labels == OPEN)),
        cavities=cavities,
    )
