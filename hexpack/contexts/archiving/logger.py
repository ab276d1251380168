"""
Archiving context logger.

Entry lines go out unprefixed so the console reads like a file listing;
diagnostics carry the [archive] prefix.
"""

from loguru import logger

CONTEXT_PREFIX = "[archive]"


def _log_debug(message: str) -> None:
    """Log debug message with [archive] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_entry_added(dest_path: str) -> None:
    """Log one archive member as it is written."""
    logger.info(f"Adding:    {dest_path}")


def log_entry_skipped(dest_path: str, reason: str) -> None:
    """Log a candidate file that was filtered out."""
    _log_debug(f"Skipping {dest_path} ({reason})")
