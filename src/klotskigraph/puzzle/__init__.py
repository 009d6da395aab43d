"""
Sliding-block puzzle model, occupancy analysis, move generation and hashing.
"""

from klotskigraph.puzzle.model import (
    Cell, Direction, Piece, Placement, PieceIdAllocator,
    DIRECTIONS_2D, DIRECTIONS_3D,
    cells_of, shape_signature, origin_of, validate_placement,
)
from klotskigraph.puzzle.occupancy import OccupancyIndex, EmptySpace, classify_empty_space
from klotskigraph.puzzle.moves import Move, single_moves, apply_move, legal_moves
from klotskigraph.puzzle.compound import compound_moves, interlocked_groups, strongly_connected_components
from klotskigraph.puzzle.hashing import canonical_key, key_to_string
from klotskigraph.puzzle.loader import PuzzleSpec, load_puzzle, save_puzzle, placement_from_dict, placement_to_dict
from klotskigraph.puzzle.goals import resolve_goal, piece_at, shape_at
from klotskigraph.puzzle.presets import resolve_puzzle

__all__ = [
    'Cell', 'Direction', 'Piece', 'Placement', 'PieceIdAllocator',
    'DIRECTIONS_2D', 'DIRECTIONS_3D',
    'cells_of', 'shape_signature', 'origin_of', 'validate_placement',
    'OccupancyIndex', 'EmptySpace', 'classify_empty_space',
    'Move', 'single_moves', 'apply_move', 'legal_moves',
    'compound_moves', 'interlocked_groups', 'strongly_connected_components',
    'canonical_key', 'key_to_string',
    'PuzzleSpec', 'load_puzzle', 'save_puzzle', 'placement_from_dict', 'placement_to_dict',
    'resolve_goal', 'piece_at', 'shape_at',
    'resolve_puzzle',
]
