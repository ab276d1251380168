"""
Packaging Context

Responsibilities:
- Maps platform selectors to packaging layouts
- Drives version resolution and archive assembly for one platform
- Reports the finished artifact

Owns: Release layout conventions, archive naming, the version manifest
Never: Builds, signs or publishes the application
"""

from hexpack.contexts.packaging.config import (
    PackageItem,
    PackagingLayout,
    Platform,
    load_layout,
    parse_platform,
    platform_choices,
)
from hexpack.contexts.packaging.driver import PackagingResult, build_release

__all__ = [
    # Orchestration
    "build_release",
    "PackagingResult",
    # Layout
    "Platform",
    "PackageItem",
    "PackagingLayout",
    "load_layout",
    "parse_platform",
    "platform_choices",
]
