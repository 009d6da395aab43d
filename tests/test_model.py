"""
Tests for the board / piece model: cells, shape signatures, validation.
"""

import pytest

from klotskigraph.core.errors import ErrorCode
from klotskigraph.puzzle.model import (
    Piece, PieceIdAllocator, Placement,
    cells_of, origin_of, shape_signature, to_cell, validate_placement,
)

from conftest import unit


# ========== Pieces ==========

def test_two_element_coordinates_are_padded():
    piece = Piece(3, (2, 1), size=(2, 1))
    assert piece.anchor == (2, 1, 0)
    assert piece.size == (2, 1, 1)
    assert to_cell([4, 5]) == (4, 5, 0)


def test_piece_needs_exactly_one_shape():
    with pytest.raises(ValueError):
        Piece(0, (0, 0))
    with pytest.raises(ValueError):
        Piece(0, (0, 0), size=(1, 1), offsets=((0, 0),))


def test_negative_id_rejected():
    with pytest.raises(ValueError):
        Piece(-1, (0, 0), size=(1, 1))


def test_box_cells_in_zyx_order():
    piece = Piece(0, (1, 2, 0), size=(2, 1, 2))
    assert cells_of(piece) == ((1, 2, 0), (2, 2, 0), (1, 2, 1), (2, 2, 1))


def test_offset_cells_follow_anchor():
    piece = Piece(0, (2, 1), offsets=((0, 0), (0, 1), (1, 1)))
    assert set(cells_of(piece)) == {(2, 1, 0), (2, 2, 0), (3, 2, 0)}


def test_moved_keeps_shape_and_id():
    piece = Piece(4, (1, 1), size=(1, 2), name="v")
    moved = piece.moved((0, 1, 0))
    assert moved.anchor == (1, 2, 0)
    assert moved.id == 4 and moved.size == piece.size and moved.name == "v"


# ========== Shape signatures ==========

def test_signature_is_translation_invariant():
    a = Piece(0, (0, 0), offsets=((0, 0), (1, 0), (1, 1)))
    b = Piece(1, (5, 3), offsets=((2, 2), (3, 2), (3, 3)))
    assert shape_signature(a) == shape_signature(b)


def test_full_cell_set_matches_box_signature():
    box = Piece(0, (0, 0), size=(2, 1))
    cells = Piece(1, (3, 3), offsets=((0, 0), (1, 0)))
    assert shape_signature(box) == shape_signature(cells) == ("box", (2, 1, 1))


def test_mirror_images_are_different_shapes():
    ell = Piece(0, (0, 0), offsets=((0, 0), (0, 1), (1, 1)))
    mirrored = Piece(1, (0, 0), offsets=((1, 0), (1, 1), (0, 1)))
    assert shape_signature(ell) != shape_signature(mirrored)


def test_origin_is_minimum_corner():
    piece = Piece(0, (2, 2), offsets=((1, 0), (1, 1), (0, 1)))
    assert origin_of(piece) == (2, 2, 0)
    shifted = Piece(0, (2, 2), offsets=((1, 1), (2, 1)))
    assert origin_of(shifted) == (3, 3, 0)


# ========== Placement validation ==========

def test_valid_placement_has_no_issues(walled_placement):
    assert validate_placement(walled_placement) == []


@pytest.mark.parametrize("pieces,forbidden,code", [
    ((unit(0, 3, 0),), frozenset(), ErrorCode.OUT_OF_BOUNDS),
    ((unit(0, 1, 1),), frozenset({(1, 1)}), ErrorCode.FORBIDDEN),
    ((unit(0, 0, 0), Piece(1, (0, 0), size=(2, 1))), frozenset(), ErrorCode.COLLISION),
    ((unit(0, 0, 0), unit(0, 1, 0)), frozenset(), ErrorCode.DUPLICATE_ID),
    ((Piece(0, (0, 0), offsets=()),), frozenset(), ErrorCode.EMPTY_SHAPE),
])
def test_validation_reports_error_code(pieces, forbidden, code):
    placement = Placement(width=3, height=2, pieces=pieces, forbidden=forbidden)
    issues = validate_placement(placement)
    assert issues
    assert any(issue.startswith(code.value) for issue in issues)


def test_directions_depend_on_depth():
    flat = Placement(width=2, height=2)
    deep = Placement(width=2, height=2, depth=2)
    assert len(flat.directions) == 4 and not flat.is_3d
    assert len(deep.directions) == 6 and deep.is_3d


# ========== Id allocation ==========

def test_allocator_skips_reserved_ids():
    allocator = PieceIdAllocator()
    allocator.reserve(0)
    allocator.reserve(4)
    assert allocator.next_id() == 5
    assert allocator.next_id() == 6


def test_allocators_are_independent():
    first, second = PieceIdAllocator(), PieceIdAllocator()
    first.next_id()
    first.next_id()
    assert second.next_id() == 0
