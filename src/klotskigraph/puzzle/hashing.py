"""
Canonical state keys.

In the default mode pieces of identical shape are interchangeable: the key
only records, per shape, the sorted multiset of piece origins. Geometric
symmetry (mirror / rotation) is never folded in.
"""

from typing import Dict, List, Tuple

from klotskigraph.puzzle.model import Cell, Placement, origin_of, shape_signature, signature_label, zyx_order

CanonicalKey = Tuple


def canonical_key(placement: Placement, identity_preserving: bool = False) -> CanonicalKey:
    """
    Key identifying ``placement`` for deduplication.

    identity_preserving=True keeps piece ids: the key is the id-sorted tuple
    of ``(id, signature, origin)``. Otherwise pieces are grouped by shape
    signature, origins sorted by z, y, x inside each group and groups ordered
    by signature.
    """
    if identity_preserving:
        return (
            "id",
            tuple(
                (p.id, shape_signature(p), origin_of(p))
                for p in sorted(placement.pieces, key=lambda p: p.id)
            ),
        )

    groups: Dict[Tuple, List[Cell]] = {}
    for piece in placement.pieces:
        groups.setdefault(shape_signature(piece), []).append(origin_of(piece))

    return (
        "shape",
        tuple(
            (signature, tuple(sorted(groups[signature], key=zyx_order)))
            for signature in sorted(groups)
        ),
    )


def _cells_label(cells) -> str:
    return ";".join(f"{x},{y},{z}" for x, y, z in cells)


def key_to_string(key: CanonicalKey) -> str:
    """Deterministic string rendering of a canonical key."""
    mode, body = key
    if mode == "id":
        return "|".join(
            f"#{piece_id}:{signature_label(signature)}@{_cells_label([origin])}"
            for piece_id, signature, origin in body
        )
    return "|".join(
        f"{signature_label(signature)}:{_cells_label(origins)}"
        for signature, origins in body
    )
