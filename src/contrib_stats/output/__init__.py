"""Output handlers for contrib-stats."""

from contrib_stats.output.console import Console

__all__ = [
    "Console",
]
