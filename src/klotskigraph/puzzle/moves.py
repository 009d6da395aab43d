"""
Single-piece move generation and move application.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from klotskigraph.puzzle.model import DIRECTION_NAMES, Direction, Placement, negate
from klotskigraph.puzzle.occupancy import OccupancyIndex


@dataclass(frozen=True)
class Move:
    """A unit translation of one piece, or of an interlocked group (compound)."""
    pieces: Tuple[int, ...]
    direction: Direction
    compound: bool = False

    def __post_init__(self):
        object.__setattr__(self, "pieces", tuple(sorted(self.pieces)))
        object.__setattr__(self, "direction", tuple(self.direction))

    @property
    def piece_id(self) -> int:
        return self.pieces[0]

    def reversed(self) -> "Move":
        return Move(self.pieces, negate(self.direction), self.compound)

    def to_dict(self) -> Dict:
        return {
            "pieces": list(self.pieces),
            "direction": list(self.direction),
            "compound": self.compound,
        }

    @staticmethod
    def from_dict(data: Dict) -> "Move":
        return Move(
            pieces=tuple(data["pieces"]),
            direction=tuple(data["direction"]),
            compound=bool(data.get("compound", False)),
        )

    def describe(self) -> str:
        name = DIRECTION_NAMES.get(self.direction, str(self.direction))
        if self.compound:
            return f"pieces {list(self.pieces)} {name}"
        return f"piece {self.piece_id} {name}"


def single_moves(placement: Placement, index: Optional[OccupancyIndex] = None) -> List[Move]:
    """
    All legal single-piece unit moves.

    Pieces are visited in id order and directions in the fixed board order,
    so the result is identical for repeated calls on the same placement.
    """
    index = index or OccupancyIndex(placement)
    moves = []
    for piece in placement.pieces_by_id():
        for direction in placement.directions:
            if index.can_move(piece.id, direction):
                moves.append(Move((piece.id,), direction))
    return moves


def apply_move(placement: Placement, move: Move) -> Placement:
    """Return the placement obtained by translating the move's pieces."""
    movers = set(move.pieces)
    return placement.with_pieces(
        p.moved(move.direction) if p.id in movers else p
        for p in placement.pieces
    )


def legal_moves(placement: Placement, identity_preserving: bool = False,
                include_compound: bool = True,
                index: Optional[OccupancyIndex] = None) -> List[Move]:
    """Single moves followed by compound moves."""
    from klotskigraph.puzzle.compound import compound_moves

    index = index or OccupancyIndex(placement)
    singles = single_moves(placement, index)
    if not include_compound:
        return singles
    return singles + compound_moves(placement, identity_preserving, index=index, singles=singles)
