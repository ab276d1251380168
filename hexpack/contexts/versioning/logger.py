"""
Versioning context logger.

Provides logging interface for versioning context with automatic [version] prefix.
All versioning modules should import from this module, not from loguru directly.
"""

from loguru import logger

CONTEXT_PREFIX = "[version]"


def _log_info(message: str) -> None:
    """Log info message with [version] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [version] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [version] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")
