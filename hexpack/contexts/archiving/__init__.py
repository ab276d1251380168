"""
Archiving Context

Responsibilities:
- Creates the release zip and finalizes it atomically
- Walks package items and remaps them to archive paths
- Applies ignore patterns and keeps the archive out of itself
- Writes generated text entries

Owns: Archive layout on disk and inside the zip
Never: Decides which items make up a release
"""

from hexpack.contexts.archiving.archive import ReleaseArchive
from hexpack.contexts.archiving.ignore import IgnoreSet

__all__ = ["ReleaseArchive", "IgnoreSet"]
