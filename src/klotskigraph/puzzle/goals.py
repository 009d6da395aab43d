"""
Win predicates.

The engine never decides what winning means; these are ready-made predicate
factories a caller can inject. Each factory is registered under a name so a
config file or puzzle file can refer to it.
"""

from typing import Any, Callable, Dict, Optional, Sequence

from klotskigraph.core.errors import UnknownComponentError
from klotskigraph.core.registry import GOAL_REGISTRY, register_goal
from klotskigraph.puzzle.model import Piece, Placement, origin_of, shape_signature, to_cell

GoalPredicate = Callable[[Placement], bool]


@register_goal("piece_at")
def piece_at(piece_id: int, cell: Sequence[int]) -> GoalPredicate:
    """Piece ``piece_id`` has its minimum corner on ``cell``."""
    target = to_cell(cell)

    def predicate(placement: Placement) -> bool:
        piece = placement.piece(piece_id)
        return piece is not None and origin_of(piece) == target

    return predicate


@register_goal("shape_at")
def shape_at(cell: Sequence[int], size: Optional[Sequence[int]] = None,
             cells: Optional[Sequence[Sequence[int]]] = None) -> GoalPredicate:
    """Some piece of the given shape has its minimum corner on ``cell``."""
    probe = Piece(id=0, anchor=(0, 0, 0),
                  size=tuple(size) if size is not None else None,
                  offsets=tuple(tuple(c) for c in cells) if cells is not None else None)
    signature = shape_signature(probe)
    target = to_cell(cell)

    def predicate(placement: Placement) -> bool:
        return any(
            shape_signature(p) == signature and origin_of(p) == target
            for p in placement.pieces
        )

    return predicate


@register_goal("klotski_exit")
def klotski_exit() -> GoalPredicate:
    """The 2x2 block sits above the exit of the standard 4x5 board."""
    return shape_at(cell=(1, 3), size=(2, 2))


def resolve_goal(name: str, params: Optional[Dict[str, Any]] = None) -> GoalPredicate:
    factory = GOAL_REGISTRY.get(name)
    if factory is None:
        raise UnknownComponentError(
            f"Unknown goal '{name}'. Available: {', '.join(sorted(GOAL_REGISTRY))}"
        )
    return factory(**(params or {}))
