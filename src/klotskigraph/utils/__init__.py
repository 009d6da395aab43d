"""Utility modules for klotskigraph."""

from klotskigraph.utils.logger import RunLogger
from klotskigraph.utils.display import ProgressDisplay, StatusDisplay, LiveLogger, render_placement

__all__ = [
    "RunLogger",
    "ProgressDisplay",
    "StatusDisplay",
    "LiveLogger",
    "render_placement",
]
