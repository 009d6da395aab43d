"""
Exception types and error codes for klotskigraph.

Move generation and hashing never raise for well-formed placements; these
exceptions cover the outer surfaces (puzzle files, graph records, presets)
and the explicit placement validation step.
"""

from enum import Enum


class ErrorCode(Enum):
    """Placement validation error codes."""
    OUT_OF_BOUNDS = "OutOfBounds"
    FORBIDDEN = "Forbidden"
    COLLISION = "Collision"
    DUPLICATE_ID = "DuplicateId"
    EMPTY_SHAPE = "EmptyShape"


class KlotskiGraphError(Exception):
    """Base class for klotskigraph errors."""


class InvalidPlacementError(KlotskiGraphError):
    """Raised when a placement fails validation before enumeration."""

    def __init__(self, issues):
        self.issues = list(issues)
        super().__init__("Invalid placement: " + "; ".join(self.issues))


class PuzzleFormatError(KlotskiGraphError):
    """Raised when a puzzle file or graph record is malformed."""


class UnknownComponentError(KlotskiGraphError):
    """Raised when a preset or goal name is not registered."""
