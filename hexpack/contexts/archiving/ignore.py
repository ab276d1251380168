"""Glob-style ignore patterns applied to archive paths."""

from fnmatch import fnmatchcase
from typing import Iterable, Optional, Tuple


class IgnoreSet:
    """
    Ordered set of fnmatch patterns that exclude files from an archive.

    A pattern excludes an entry when it matches the entry's archive path
    (POSIX separators, "*" may cross "/") or any single segment of it, so
    ".git" or "*.git" also drop everything inside a ".git" directory.
    Matching is case-sensitive on every platform.
    """

    def __init__(self, patterns: Optional[Iterable[str]] = None):
        unique = []
        for pattern in patterns or []:
            if pattern and pattern not in unique:
                unique.append(pattern)
        self._patterns: Tuple[str, ...] = tuple(unique)

    @property
    def patterns(self) -> Tuple[str, ...]:
        return self._patterns

    def matching_pattern(self, archive_path: str) -> Optional[str]:
        """Return the first pattern that excludes archive_path, or None."""
        candidates = [archive_path] + archive_path.split("/")
        for pattern in self._patterns:
            if any(fnmatchcase(candidate, pattern) for candidate in candidates):
                return pattern
        return None

    def matches(self, archive_path: str) -> bool:
        return self.matching_pattern(archive_path) is not None

    def __iter__(self):
        return iter(self._patterns)

    def __len__(self) -> int:
        return len(self._patterns)

    def __repr__(self) -> str:
        return f"IgnoreSet({list(self._patterns)!r})"
