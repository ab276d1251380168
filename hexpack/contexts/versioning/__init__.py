"""
Versioning Context

Responsibilities:
- Locates the version-resource block of an executable
- Decodes its string table and extracts FileVersion / ProductVersion

Owns: Version resource reading and decoding
Never: Decides how the version is used in names or manifests
"""

from hexpack.contexts.versioning.readers import (
    PortableVersionReader,
    Win32VersionReader,
    default_reader,
)
from hexpack.contexts.versioning.resolver import VersionInfo, resolve_version

__all__ = [
    "resolve_version",
    "VersionInfo",
    # Readers
    "default_reader",
    "PortableVersionReader",
    "Win32VersionReader",
]
