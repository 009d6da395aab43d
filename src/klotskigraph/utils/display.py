"""
User-friendly display utilities for klotskigraph.
"""

import time
from typing import Any, Dict, List
from datetime import datetime

from klotskigraph.puzzle.model import Placement, cells_of

_PIECE_GLYPHS = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789"


class ProgressDisplay:
    """Progress bar for a running enumeration (states discovered vs cap)."""

    def __init__(self, max_states: int):
        self.max_states = max_states
        self.start_time = time.time()

    def update(self, progress) -> None:
        """Redraw the bar from a BuildProgress snapshot."""
        fraction = progress.fraction
        bar_length = 30
        filled_length = int(bar_length * fraction)
        bar = "█" * filled_length + "░" * (bar_length - filled_length)

        elapsed_str = self._format_time(progress.elapsed)
        rate = progress.processed / progress.elapsed if progress.elapsed > 0 else 0.0

        print(
            f"\r⏳ States: [{bar}] {progress.states}/{self.max_states} "
            f"| expanded {progress.processed} | frontier {progress.frontier} "
            f"| {rate:.0f}/s | {elapsed_str}",
            end="",
            flush=True,
        )

    def finish(self, complete: bool = True):
        total_time_str = self._format_time(time.time() - self.start_time)
        if complete:
            print(f"\n✅ State space fully enumerated in {total_time_str}")
        else:
            print(f"\n⚠️  Stopped before the frontier emptied ({total_time_str})")

    def _format_time(self, seconds: float) -> str:
        """Format time in human-readable format."""
        if seconds < 60:
            return f"{seconds:.1f}s"
        elif seconds < 3600:
            minutes = int(seconds // 60)
            secs = int(seconds % 60)
            return f"{minutes}m {secs}s"
        else:
            hours = int(seconds // 3600)
            minutes = int((seconds % 3600) // 60)
            return f"{hours}h {minutes}m"


_STATUS_ICONS = {
    "info": "ℹ️",
    "success": "✅",
    "warning": "⚠️",
    "error": "❌",
    "processing": "🔄",
}


class StatusDisplay:
    """Headers, sections, timestamped status lines and key/value tables."""

    @staticmethod
    def print_header(title: str, width: int = 80):
        print("\n" + "=" * width)
        print(f"{title:^{width}}")
        print("=" * width)

    @staticmethod
    def print_section(title: str, width: int = 60):
        print(f"\n📋 {title}")
        print("-" * width)

    @staticmethod
    def print_status(message: str, status: str = "info"):
        icon = _STATUS_ICONS.get(status, _STATUS_ICONS["info"])
        print(f"{icon} [{datetime.now().strftime('%H:%M:%S')}] {message}")

    @staticmethod
    def print_results(results: Dict[str, Any], title: str = "Results"):
        """Key/value table; booleans get a tick or cross, floats three decimals."""
        StatusDisplay.print_section(title)
        for key, value in results.items():
            if isinstance(value, bool):
                value = f"{'✅' if value else '❌'} {value}"
            elif isinstance(value, float):
                value = f"{value:.3f}"
            print(f"  {key:<20} : {value}")

    @staticmethod
    def print_board(placement: Placement):
        """Print the placement layer by layer; '#' is forbidden, '.' empty."""
        for line in render_placement(placement):
            print(f"  {line}")


def render_placement(placement: Placement) -> List[str]:
    """ASCII rows of a placement, one block of rows per z layer."""
    glyphs = {}
    for i, piece in enumerate(placement.pieces_by_id()):
        glyph = _PIECE_GLYPHS[i % len(_PIECE_GLYPHS)]
        for cell in cells_of(piece):
            glyphs[cell] = glyph

    lines = []
    for z in range(placement.depth):
        if placement.is_3d:
            lines.append(f"z={z}")
        for y in range(placement.height):
            row = []
            for x in range(placement.width):
                cell = (x, y, z)
                if cell in placement.forbidden:
                    row.append("#")
                else:
                    row.append(glyphs.get(cell, "."))
            lines.append("".join(row))
    return lines


class LiveLogger:
    """Status lines for CLI commands and runs; errors print even when quiet."""

    def __init__(self, verbose: bool = True):
        self.verbose = verbose

    def _emit(self, message: str, status: str):
        if self.verbose or status == "error":
            StatusDisplay.print_status(message, status)

    def log_action(self, action_name: str, details: str = ""):
        self._emit(f"{action_name} - {details}" if details else action_name, "processing")

    def log_result(self, message: str):
        self._emit(message, "success")

    def log_info(self, message: str):
        self._emit(message, "info")

    def log_warning(self, message: str):
        self._emit(message, "warning")

    def log_error(self, message: str):
        self._emit(message, "error")
