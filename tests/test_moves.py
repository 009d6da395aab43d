"""
Tests for single-move generation and move application.
"""

from klotskigraph.puzzle.model import Piece, Placement, cells_of, validate_placement
from klotskigraph.puzzle.moves import Move, apply_move, legal_moves, single_moves

from conftest import unit

UP, DOWN, LEFT, RIGHT = (0, -1, 0), (0, 1, 0), (-1, 0, 0), (1, 0, 0)


def test_single_moves_in_fixed_order(square_placement):
    moves = single_moves(square_placement)
    assert moves == [Move((0,), DOWN), Move((1,), DOWN)]


def test_line_only_right_piece_moves(line_placement):
    assert single_moves(line_placement) == [Move((1,), RIGHT)]


def test_packed_board_has_no_moves(packed_placement):
    assert single_moves(packed_placement) == []
    assert legal_moves(packed_placement) == []


def test_forbidden_cell_blocks_moves(walled_placement):
    moves = single_moves(walled_placement)
    assert Move((0,), RIGHT) not in moves
    assert Move((0,), UP) not in moves
    assert Move((1,), LEFT) in moves
    assert Move((2,), UP) in moves


def test_moves_are_repeatable(walled_placement):
    assert single_moves(walled_placement) == single_moves(walled_placement)


def test_apply_move_translates_only_movers(walled_placement):
    after = apply_move(walled_placement, Move((1,), LEFT))
    assert after.piece(1).anchor == (2, 0, 0)
    assert after.piece(0) == walled_placement.piece(0)
    assert after.piece(2) == walled_placement.piece(2)
    # the original placement is untouched
    assert walled_placement.piece(1).anchor == (3, 0, 0)


def test_every_generated_move_keeps_placement_valid(walled_placement):
    for move in single_moves(walled_placement):
        assert validate_placement(apply_move(walled_placement, move)) == []


def test_3d_moves_use_depth_axis():
    placement = Placement(width=1, height=1, depth=2, pieces=(unit(0, 0, 0, 0),))
    assert single_moves(placement) == [Move((0,), (0, 0, 1))]


def test_cell_set_piece_slides_into_its_own_cells():
    # A U-shape moving right overlaps its own old cells.
    u = Piece(0, (0, 0), offsets=((0, 0), (1, 0), (0, 1), (0, 2), (1, 2)))
    placement = Placement(width=3, height=3, pieces=(u,))
    moves = single_moves(placement)
    assert Move((0,), RIGHT) in moves
    moved = apply_move(placement, Move((0,), RIGHT))
    assert (2, 2, 0) in cells_of(moved.piece(0))


def test_move_reversal_and_dict_form():
    move = Move((3, 1), RIGHT, compound=True)
    assert move.pieces == (1, 3)
    assert move.reversed() == Move((1, 3), LEFT, compound=True)
    assert Move.from_dict(move.to_dict()) == move
    assert move.describe() == "pieces [1, 3] right"
    assert Move((2,), UP).describe() == "piece 2 up"
