"""
Packaging context logger.

Provides logging interface for the build driver with automatic [package] prefix.
All packaging modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from hexpack.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[package]"


def setup_packaging_logger(log_dir: Path, platform: str, product: str) -> Path:
    """
    Setup logger for a packaging run.

    Args:
        log_dir: Directory for this packaging session
        platform: Platform selector being packaged
        product: Product name from the layout

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="package",
        log_dir=log_dir,
        extra_provenance={"Platform": platform, "Product": product},
    )


# Wrapper functions with automatic [package] prefix


def _log_error(message: str) -> None:
    """Log error message with [package] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [package] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [package] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level packaging-specific logging helpers


def log_packaging_start(executable: Path, version: str, archive_path: Path) -> None:
    """Log the separator and the packaging banner."""
    logger.info("-" * 80)
    logger.info(f"Packaging: {executable} - version {version}")
    _log_debug(f"Archive: {archive_path}")


def log_packaging_result(result) -> None:
    """
    Log the outcome of a packaging run.

    Args:
        result: PackagingResult from build_release()
    """
    logger.info("")
    logger.info(f"Done:      {result.archive_path}")
    logger.info(f"           {result.size_bytes} bytes")
    logger.info("")
    _log_debug(f"{len(result.entries)} entries in {result.elapsed_s:.2f}s")


def log_packaging_failure(platform: str, error: Exception, elapsed_time: float) -> None:
    """Log an aborted packaging run."""
    _log_error(f"Packaging {platform} failed ({elapsed_time:.2f}s)")
    _log_error(f"  Error: {error}")
