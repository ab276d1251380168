"""
Packaging Layout Resolution

Maps a Platform to the PackagingLayout that describes where its inputs live and
how the archive is named. Built-in defaults (defaults.py) can be overlaid with
a YAML file; OmegaConf merges the overlay and resolves interpolations.

Examples:
    >>> layout = load_layout(Platform.X86)
    >>> layout.archive_path("2.5.1.0")
    PosixPath('out/hexedit-x86-2.5.1.0.zip')

    # Package a checkout somewhere else
    >>> layout = load_layout(Platform.AMD64, root=Path("/src/hexedit"))
"""

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Tuple

from dotenv import load_dotenv
from omegaconf import OmegaConf

from hexpack.contexts.archiving import IgnoreSet
from hexpack.contexts.packaging.defaults import get_default_layout
from hexpack.utils.exceptions import SourceNotFoundError, UnknownPlatformError

load_dotenv()
HEXPACK_CONFIG = os.getenv("HEXPACK_CONFIG")
HEXPACK_ROOT = os.getenv("HEXPACK_ROOT")
HEXPACK_OUT_DIR = os.getenv("HEXPACK_OUT_DIR")


class Platform(str, Enum):
    """Supported build targets."""

    X86 = "x86"
    AMD64 = "amd64"


@dataclass(frozen=True)
class PackageItem:
    """
    One filesystem item of a release.

    Attributes:
        source: File or directory on disk
        dest: Destination inside the archive (file path, or root for a directory)
    """

    source: Path
    dest: str


@dataclass(frozen=True)
class PackagingLayout:
    """
    Everything the driver needs to package one platform.

    Attributes:
        platform: Target platform
        product: Product name, also the top-level folder inside the archive
        archive_prefix: Leading part of the archive file name
        root: Project root the item sources are relative to
        out_dir: Directory receiving the archive
        executable: Executable whose version names the release
        items: Filesystem items in archive order
        manifest: Name of the generated version manifest inside the product folder
        ignore: Patterns excluding files from the archive
    """

    platform: Platform
    product: str
    archive_prefix: str
    root: Path
    out_dir: Path
    executable: Path
    items: Tuple[PackageItem, ...]
    manifest: str
    ignore: IgnoreSet

    def archive_path(self, version: str) -> Path:
        """Output path for a given version (may be empty)."""
        return self.out_dir / f"{self.archive_prefix}-{self.platform.value}-{version}.zip"

    def archive_dest(self, dest: str) -> str:
        """Destination path under the product folder."""
        return f"{self.product}/{dest}"


def platform_choices() -> Tuple[str, ...]:
    return tuple(p.value for p in Platform)


def parse_platform(selector: Optional[str]) -> Platform:
    """
    Turn a command-line selector into a Platform.

    Raises:
        UnknownPlatformError: If selector is missing or not a supported platform
    """
    try:
        return Platform(selector)
    except ValueError:
        raise UnknownPlatformError(selector, platform_choices()) from None


def load_layout(
    platform: Platform,
    config_path: Optional[Path] = None,
    root: Optional[Path] = None,
    out_dir: Optional[Path] = None,
) -> PackagingLayout:
    """
    Build the packaging layout for a platform.

    Precedence for root and out_dir: explicit argument, then the HEXPACK_ROOT /
    HEXPACK_OUT_DIR environment variables, then the config.

    Args:
        platform: Target platform
        config_path: YAML overlay (defaults to HEXPACK_CONFIG env variable, if set)
        root: Project root override
        out_dir: Output directory override

    Returns:
        PackagingLayout with all paths resolved against root

    Raises:
        SourceNotFoundError: If the config overlay does not exist
        UnknownPlatformError: If the config has no entry for the platform
    """
    conf = OmegaConf.create(get_default_layout())

    if config_path is None and HEXPACK_CONFIG:
        config_path = Path(HEXPACK_CONFIG)
    if config_path is not None:
        config_path = Path(config_path)
        if not config_path.is_file():
            raise SourceNotFoundError("Layout config not found", config_path)
        conf = OmegaConf.merge(conf, OmegaConf.load(config_path))

    if platform.value not in conf.platforms:
        raise UnknownPlatformError(platform.value, list(conf.platforms.keys()))

    conf.platform = platform.value
    data = OmegaConf.to_container(conf, resolve=True)

    if root is None:
        root = Path(HEXPACK_ROOT) if HEXPACK_ROOT else Path(data["root"])
    if out_dir is None:
        out_dir = Path(HEXPACK_OUT_DIR) if HEXPACK_OUT_DIR else Path(data["out_dir"])
    root = Path(root)

    return PackagingLayout(
        platform=platform,
        product=data["product"],
        archive_prefix=data["archive_prefix"],
        root=root,
        out_dir=Path(out_dir),
        executable=root / data["bin_dir"] / data["executable"],
        items=tuple(PackageItem(root / item["source"], item["dest"]) for item in data["items"]),
        manifest=data["manifest"],
        ignore=IgnoreSet(data["ignore"]),
    )
