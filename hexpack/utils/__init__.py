"""
Shared utilities for hexpack.

Common functionality used across contexts:
- Logger setup with provenance
- Timestamps
- Exception types
"""

from hexpack.utils.exceptions import (
    PackagingError,
    PackagingIOError,
    SourceNotFoundError,
    UnknownPlatformError,
    VersionDecodeError,
)
from hexpack.utils.timestamp import build_stamp, now

__all__ = [
    "PackagingError",
    "PackagingIOError",
    "SourceNotFoundError",
    "UnknownPlatformError",
    "VersionDecodeError",
    "build_stamp",
    "now",
]
