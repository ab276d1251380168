"""
Release Build Driver

Packages one platform build end to end: read the executable's version, write
out/<prefix>-<platform>-<version>.zip with the release items and a generated
VERSION.TXT manifest, and report the result.
"""

import os
import time
from dataclasses import dataclass, field
from datetime import datetime
from functools import partial
from pathlib import Path
from typing import List, Optional, TextIO

from dotenv import load_dotenv

from hexpack.contexts.archiving import ReleaseArchive
from hexpack.contexts.packaging.config import Platform, PackagingLayout, load_layout
from hexpack.contexts.packaging.logger import (
    _log_debug,
    _log_warning,
    log_packaging_failure,
    log_packaging_result,
    log_packaging_start,
    setup_packaging_logger,
)
from hexpack.contexts.versioning import VersionInfo, resolve_version
from hexpack.contexts.versioning.readers import VersionReader
from hexpack.utils.timestamp import build_stamp, now

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "logs"))

# Manifest labels are padded so values line up
MANIFEST_LABEL_WIDTH = 10


@dataclass
class PackagingResult:
    """
    Result of packaging one platform.

    Attributes:
        platform: Platform that was packaged
        archive_path: Finished archive
        version: Version read from the executable
        entries: Archive member names in write order
        size_bytes: Size of the finished archive
        elapsed_s: Wall time of the run
        log_file: Detailed log for the run
    """

    platform: Platform
    archive_path: Path
    version: VersionInfo
    entries: List[str] = field(default_factory=list)
    size_bytes: int = 0
    elapsed_s: float = 0.0
    log_file: Optional[Path] = None


def manifest_lines(product: str, version: str, platform: Platform, built: str) -> List[str]:
    """
    Lines of the generated version manifest, without terminators.

    Example:
        manifest_lines("HexEdit", "2.5.1.0", Platform.X86, "2026/10/19 14:25:01")
        # ["HexEdit:  2.5.1.0", "Platform: x86", "Built:    2026/10/19 14:25:01"]
    """
    fields = [(product, version), ("Platform", platform.value), ("Built", built)]
    return [f"{label}: ".ljust(MANIFEST_LABEL_WIDTH) + value for label, value in fields]


def write_manifest(sink: TextIO, lines: List[str]) -> None:
    """Write manifest lines with CRLF terminators."""
    for line in lines:
        sink.write(f"{line}\r\n")


def build_release(
    platform: Platform,
    layout: Optional[PackagingLayout] = None,
    log_dir: Optional[Path] = None,
    reader: Optional[VersionReader] = None,
    built_at: Optional[datetime] = None,
) -> PackagingResult:
    """
    Package a platform build into a versioned zip archive.

    Steps, in order: resolve the executable's version, open a fresh archive in
    the output directory, add every layout item through the ignore set, add the
    generated manifest, close the archive. Any failure aborts the whole run and
    leaves no archive at the destination.

    Args:
        platform: Target platform
        layout: Packaging layout (default: load_layout(platform))
        log_dir: Directory for this run's log (default: LOGS_PATH/package_<timestamp>)
        reader: Version-resource reader (default: platform default)
        built_at: Build time written to the manifest (default: now)

    Returns:
        PackagingResult describing the finished archive

    Raises:
        SourceNotFoundError: If the executable or an item is missing
        VersionDecodeError: If the version resource cannot be decoded
        PackagingIOError: If the archive cannot be written
    """
    if layout is None:
        layout = load_layout(platform)
    if log_dir is None:
        log_dir = LOGS_PATH / f"package_{now()}"

    log_file = setup_packaging_logger(log_dir, platform.value, layout.product)
    start_time = time.time()
    _log_debug(f"Root: {layout.root.resolve()}")
    _log_debug(f"Output directory: {layout.out_dir.resolve()}")

    try:
        info = resolve_version(layout.executable, reader)
        if info.file_version is None:
            _log_warning(f"No FileVersion in {layout.executable}; archive name has no version")
        version = info.file_version or ""

        archive_path = layout.archive_path(version)
        log_packaging_start(layout.executable, version, archive_path)

        layout.out_dir.mkdir(parents=True, exist_ok=True)

        with ReleaseArchive.open(archive_path) as archive:
            for item in layout.items:
                archive.add_path(item.source, layout.archive_dest(item.dest), layout.ignore)

            lines = manifest_lines(layout.product, version, platform, build_stamp(built_at))
            archive.add_generated(
                layout.archive_dest(layout.manifest), partial(write_manifest, lines=lines)
            )
    except Exception as e:
        log_packaging_failure(platform.value, e, time.time() - start_time)
        raise

    result = PackagingResult(
        platform=platform,
        archive_path=archive_path,
        version=info,
        entries=list(archive.entries),
        size_bytes=archive_path.stat().st_size,
        elapsed_s=time.time() - start_time,
        log_file=log_file,
    )
    log_packaging_result(result)
    _log_debug(f"Log file: {log_file}")

    return result
