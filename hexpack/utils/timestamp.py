"""Timestamp formatting utilities."""

from datetime import datetime
from typing import Optional

# Format written into the VERSION.TXT manifest
BUILD_STAMP_FORMAT = "%Y/%m/%d %H:%M:%S"


def now() -> str:
    """Compact local timestamp for directory names (e.g., "20261019_142501")."""
    return datetime.now().strftime("%Y%m%d_%H%M%S")


def build_stamp(moment: Optional[datetime] = None) -> str:
    """
    Format a build time for the archive manifest.

    Args:
        moment: Time to format (default: current local time)

    Returns:
        Timestamp like "2026/10/19 14:25:01"
    """
    if moment is None:
        moment = datetime.now()
    return moment.strftime(BUILD_STAMP_FORMAT)


def format_elapsed(seconds: float) -> str:
    """
    Format a duration in the compact style used for run summaries.

    Examples:
        format_elapsed(0.42)   # "0.42s"
        format_elapsed(75.0)   # "1m 15s"
    """
    if seconds < 60:
        return f"{seconds:.2f}s"
    minutes = int(seconds // 60)
    return f"{minutes}m {int(seconds - minutes * 60)}s"
