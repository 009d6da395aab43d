"""
Puzzle loader - read and write placements as JSON or YAML puzzle files.

Puzzle file layout::

    name: klotski
    goal: klotski_exit          # optional, a registered goal name
    goal_params: {}             # optional
    width: 4
    height: 5
    depth: 1                    # optional, 1 means 2D
    forbidden: [[0, 4]]         # optional
    pieces:
      - {id: 0, anchor: [1, 0], size: [2, 2], name: big}
      - {anchor: [0, 0], cells: [[0, 0], [0, 1], [1, 1]]}

Pieces in the block style ``{id, x, y, z, width, height, depth}`` are
accepted too. Pieces without an id get the next free one.
"""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from klotskigraph.core.errors import PuzzleFormatError
from klotskigraph.puzzle.model import Piece, PieceIdAllocator, Placement


@dataclass
class PuzzleSpec:
    """A loaded puzzle: the initial placement plus optional goal reference."""
    name: str
    placement: Placement
    goal: Optional[str] = None
    goal_params: Dict[str, Any] = field(default_factory=dict)


def piece_to_dict(piece: Piece) -> Dict[str, Any]:
    data: Dict[str, Any] = {"id": piece.id, "anchor": list(piece.anchor)}
    if piece.size is not None:
        data["size"] = list(piece.size)
    else:
        data["cells"] = [list(o) for o in piece.offsets]
    if piece.name:
        data["name"] = piece.name
    return data


def placement_to_dict(placement: Placement) -> Dict[str, Any]:
    return {
        "width": placement.width,
        "height": placement.height,
        "depth": placement.depth,
        "forbidden": [list(c) for c in sorted(placement.forbidden)],
        "pieces": [piece_to_dict(p) for p in placement.pieces],
    }


def _piece_from_dict(data: Dict[str, Any], piece_id: int) -> Piece:
    if "anchor" in data:
        anchor = data["anchor"]
    else:
        anchor = [data.get("x", 0), data.get("y", 0), data.get("z", 0)]

    if "cells" in data and data["cells"] is not None:
        return Piece(id=piece_id, anchor=anchor, offsets=tuple(tuple(c) for c in data["cells"]),
                     name=data.get("name"))
    if "size" in data:
        size = data["size"]
    elif "width" in data and "height" in data:
        size = [data["width"], data["height"], data.get("depth", 1)]
    else:
        raise PuzzleFormatError(f"piece {piece_id} has neither size nor cells")
    return Piece(id=piece_id, anchor=anchor, size=tuple(size), name=data.get("name"))


def placement_from_dict(data: Dict[str, Any],
                        allocator: Optional[PieceIdAllocator] = None) -> Placement:
    """
    Build a Placement from its dictionary form.

    Raises:
        PuzzleFormatError: If required fields are missing or malformed
    """
    if not isinstance(data, dict):
        raise PuzzleFormatError("placement must be a mapping")
    allocator = allocator or PieceIdAllocator()

    try:
        width = int(data["width"])
        height = int(data["height"])
        depth = int(data.get("depth") or 1)
        raw_pieces: List[Dict[str, Any]] = list(data.get("pieces", []))
        forbidden = [tuple(c) for c in data.get("forbidden", data.get("forbiddenCells", [])) or []]

        for raw in raw_pieces:
            if raw.get("id") is not None:
                allocator.reserve(int(raw["id"]))

        pieces = []
        for raw in raw_pieces:
            piece_id = int(raw["id"]) if raw.get("id") is not None else allocator.next_id()
            pieces.append(_piece_from_dict(raw, piece_id))

        return Placement(width=width, height=height, depth=depth,
                         pieces=tuple(pieces), forbidden=frozenset(forbidden))
    except PuzzleFormatError:
        raise
    except (KeyError, TypeError, ValueError) as e:
        raise PuzzleFormatError(f"Malformed placement: {e}") from e


def _read_document(path: Path) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        if path.suffix.lower() in (".yaml", ".yml"):
            try:
                return yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise PuzzleFormatError(f"Error parsing YAML puzzle {path}: {e}") from e
        try:
            return json.load(f)
        except json.JSONDecodeError as e:
            raise PuzzleFormatError(f"Error parsing JSON puzzle {path}: {e}") from e


def load_puzzle(path: str) -> PuzzleSpec:
    """
    Load a puzzle file (.json, .yaml or .yml).

    Raises:
        FileNotFoundError: If the file doesn't exist
        PuzzleFormatError: If the file is malformed
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Puzzle file not found: {path}")

    data = _read_document(path)
    if not data:
        raise PuzzleFormatError(f"Puzzle file is empty: {path}")

    placement = placement_from_dict(data)
    return PuzzleSpec(
        name=data.get("name") or path.stem,
        placement=placement,
        goal=data.get("goal"),
        goal_params=dict(data.get("goal_params") or {}),
    )


def save_puzzle(placement: Placement, path: str, name: Optional[str] = None,
                goal: Optional[str] = None, goal_params: Optional[Dict[str, Any]] = None) -> None:
    """Write a placement as a puzzle file; the format follows the file suffix."""
    path = Path(path)
    data: Dict[str, Any] = {"name": name or path.stem}
    if goal:
        data["goal"] = goal
        data["goal_params"] = goal_params or {}
    data.update(placement_to_dict(placement))

    if path.parent and not path.parent.exists():
        os.makedirs(path.parent, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        if path.suffix.lower() in (".yaml", ".yml"):
            yaml.dump(data, f, default_flow_style=None, sort_keys=False, indent=2)
        else:
            json.dump(data, f, indent=2)


def find_all_puzzles(base_dir: str) -> List[Path]:
    """All puzzle files under ``base_dir``, sorted."""
    base = Path(base_dir)
    if not base.is_dir():
        return []
    found = [p for p in base.rglob("*") if p.suffix.lower() in (".json", ".yaml", ".yml")]
    return sorted(found)
