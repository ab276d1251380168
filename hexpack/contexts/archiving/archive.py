"""
Release Archive Assembly

Builds one zip archive from filesystem items and generated text entries.

Items are written in the order they are added. Directory sources are walked
recursively and remapped under a destination root; directories themselves
never become members. The archive is written to a temporary sibling file and
moved onto its final name only when close() succeeds, so an aborted run never
leaves a half-written archive at the destination.
"""

import io
import os
import shutil
import tempfile
import zipfile
from pathlib import Path
from typing import Callable, Iterator, List, Optional, TextIO, Tuple

from hexpack.contexts.archiving.ignore import IgnoreSet
from hexpack.contexts.archiving.logger import (
    _log_debug,
    log_entry_added,
    log_entry_skipped,
)
from hexpack.utils.exceptions import PackagingIOError, SourceNotFoundError


def _join_archive_path(*parts: str) -> str:
    """Join archive path parts with "/" regardless of host separator."""
    cleaned = [part.replace("\\", "/").strip("/") for part in parts]
    return "/".join(part for part in cleaned if part)


def _walk_files(source: Path, dest_root: str) -> Iterator[Tuple[Path, str]]:
    """
    Yield (file, archive path) for every file below source, at any depth.

    Names are visited in sorted order so repeated runs produce the same
    entry order.
    """
    for dirpath, dirnames, filenames in os.walk(source):
        dirnames.sort()
        rel_dir = Path(dirpath).relative_to(source).as_posix()
        for name in sorted(filenames):
            rel = name if rel_dir == "." else f"{rel_dir}/{name}"
            yield Path(dirpath) / name, _join_archive_path(dest_root, rel)


class ReleaseArchive:
    """
    A zip archive being assembled for one release.

    Use ReleaseArchive.open() to create one, preferably as a context manager:

        with ReleaseArchive.open(Path("out/hexedit-x86-2.5.1.0.zip")) as archive:
            archive.add_path(Path("../README.md"), "HexEdit/README.TXT", ignore)
            archive.add_generated("HexEdit/VERSION.TXT", write_manifest)

    Leaving the block normally closes (finalizes) the archive; leaving it with
    an exception aborts it and removes the temporary file.

    Attributes:
        path: Final destination of the archive
        entries: Archive member names in write order
    """

    def __init__(self, path: Path, partial_path: Path, zip_file: zipfile.ZipFile):
        self.path = path
        self.entries: List[str] = []
        self._partial_path = partial_path
        self._zip = zip_file
        self._closed = False
        # Never archive the archive itself
        self._own_paths = {path.resolve(), partial_path.resolve()}

    @classmethod
    def open(cls, path: Path) -> "ReleaseArchive":
        """
        Start a fresh archive at path.

        Any existing file at path is deleted first; assembly never merges into
        a previous archive.

        Args:
            path: Destination .zip path (its directory must exist)

        Returns:
            ReleaseArchive ready for entries

        Raises:
            PackagingIOError: If the old file cannot be removed or the new one created
        """
        path = Path(path)
        try:
            path.unlink(missing_ok=True)
            fd, partial_name = tempfile.mkstemp(
                dir=path.parent, prefix=f".{path.stem}-", suffix=".partial"
            )
            os.close(fd)
            os.chmod(partial_name, 0o644)
        except OSError as e:
            raise PackagingIOError("Cannot create archive", path, e) from e

        partial_path = Path(partial_name)
        try:
            # Files older than 1980 are stored with the earliest zip timestamp
            zip_file = zipfile.ZipFile(
                partial_path, "w", zipfile.ZIP_DEFLATED, strict_timestamps=False
            )
        except OSError as e:
            partial_path.unlink(missing_ok=True)
            raise PackagingIOError("Cannot create archive", path, e) from e

        _log_debug(f"Writing {path} via {partial_path.name}")
        return cls(path, partial_path, zip_file)

    @property
    def closed(self) -> bool:
        return self._closed

    def _ensure_open(self) -> None:
        if self._closed:
            raise ValueError(f"Archive already closed: {self.path}")

    def _is_own_file(self, file_path: Path) -> bool:
        return file_path.resolve() in self._own_paths

    def add_path(
        self, source: Path, dest_root: str, ignore: Optional[IgnoreSet] = None
    ) -> List[str]:
        """
        Add a file, or every file below a directory, to the archive.

        A single file is stored at dest_root exactly. For a directory, each file
        is stored at dest_root joined with its path relative to source.

        Args:
            source: File or directory to add
            dest_root: Destination path inside the archive
            ignore: Patterns excluding files by archive path

        Returns:
            Archive names added by this call, in write order

        Raises:
            SourceNotFoundError: If source does not exist
            PackagingIOError: If a file cannot be read into the archive
        """
        self._ensure_open()
        source = Path(source)
        if ignore is None:
            ignore = IgnoreSet()

        if source.is_dir():
            candidates = _walk_files(source, dest_root)
        elif source.exists():
            candidates = iter([(source, _join_archive_path(dest_root))])
        else:
            raise SourceNotFoundError("Package item not found", source)

        added = []
        for file_path, arcname in candidates:
            if self._is_own_file(file_path):
                log_entry_skipped(arcname, "the archive itself")
                continue
            pattern = ignore.matching_pattern(arcname)
            if pattern is not None:
                log_entry_skipped(arcname, f"ignored by '{pattern}'")
                continue

            log_entry_added(arcname)
            try:
                self._zip.write(file_path, arcname)
            except OSError as e:
                raise PackagingIOError("Cannot add file to archive", file_path, e) from e
            self.entries.append(arcname)
            added.append(arcname)

        return added

    def add_generated(self, dest_path: str, writer: Callable[[TextIO], None]) -> str:
        """
        Write generated text straight into the archive.

        The writer receives a UTF-8 text sink with no newline translation, so
        line endings are stored exactly as written.

        Args:
            dest_path: Destination path inside the archive
            writer: Callable that writes the entry content to the sink

        Returns:
            The archive name written
        """
        self._ensure_open()
        arcname = _join_archive_path(dest_path)

        log_entry_added(arcname)
        with io.TextIOWrapper(self._zip.open(arcname, "w"), encoding="utf-8", newline="") as sink:
            writer(sink)
        self.entries.append(arcname)
        return arcname

    def close(self) -> Path:
        """
        Finalize the archive and move it to its destination.

        Returns:
            Path of the finished archive

        Raises:
            PackagingIOError: If finalizing or moving fails (no file is left behind)
        """
        self._ensure_open()
        self._closed = True
        try:
            self._zip.close()
            shutil.move(str(self._partial_path), str(self.path))
        except OSError as e:
            self._partial_path.unlink(missing_ok=True)
            raise PackagingIOError("Failed to finalize archive", self.path, e) from e

        _log_debug(f"Finalized {self.path} ({len(self.entries)} entries)")
        return self.path

    def abort(self) -> None:
        """Discard the archive being written. No-op once closed."""
        if self._closed:
            return
        self._closed = True
        try:
            self._zip.close()
        finally:
            self._partial_path.unlink(missing_ok=True)
        _log_debug(f"Aborted {self.path}")

    def __enter__(self) -> "ReleaseArchive":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> bool:
        if exc_type is None:
            if not self._closed:
                self.close()
        else:
            self.abort()
        return False
