"""Unit tests for ReleaseArchive assembly."""

import os
import zipfile

import pytest

from hexpack.contexts.archiving import IgnoreSet, ReleaseArchive
from hexpack.utils.exceptions import PackagingIOError, SourceNotFoundError


@pytest.fixture
def source_dir(tmp_path):
    """Small directory tree with a nested folder and some noise."""
    src = tmp_path / "typelib"
    (src / "nested" / "deeper").mkdir(parents=True)
    (src / "top.tlb").write_bytes(b"top")
    (src / "nested" / "mid.idl").write_bytes(b"mid")
    (src / "nested" / "deeper" / "leaf.h").write_bytes(b"leaf")
    (src / "nested" / "skip.git").write_bytes(b"noise")
    return src


def _names(path):
    with zipfile.ZipFile(path) as zf:
        return zf.namelist()


@pytest.mark.unit
def test_single_file_goes_to_dest_root_verbatim(tmp_path):
    readme = tmp_path / "README.md"
    readme.write_text("hello", encoding="utf-8")
    out = tmp_path / "out.zip"

    with ReleaseArchive.open(out) as archive:
        added = archive.add_path(readme, "HexEdit/README.TXT")

    assert added == ["HexEdit/README.TXT"]
    with zipfile.ZipFile(out) as zf:
        assert zf.namelist() == ["HexEdit/README.TXT"]
        assert zf.read("HexEdit/README.TXT") == b"hello"


@pytest.mark.unit
def test_directory_is_walked_recursively(tmp_path, source_dir):
    out = tmp_path / "out.zip"

    with ReleaseArchive.open(out) as archive:
        archive.add_path(source_dir, "HexEdit/typelib")

    names = _names(out)
    assert set(names) == {
        "HexEdit/typelib/top.tlb",
        "HexEdit/typelib/nested/mid.idl",
        "HexEdit/typelib/nested/skip.git",
        "HexEdit/typelib/nested/deeper/leaf.h",
    }
    # Leaf files only, never directory members
    assert not any(name.endswith("/") for name in names)
    with zipfile.ZipFile(out) as zf:
        assert zf.read("HexEdit/typelib/nested/deeper/leaf.h") == b"leaf"


@pytest.mark.unit
def test_ignored_file_is_excluded_and_siblings_kept(tmp_path, source_dir):
    out = tmp_path / "out.zip"

    with ReleaseArchive.open(out) as archive:
        archive.add_path(source_dir, "HexEdit/typelib", IgnoreSet(["*.git"]))

    names = set(_names(out))
    assert "HexEdit/typelib/nested/skip.git" not in names
    assert "HexEdit/typelib/nested/mid.idl" in names
    assert "HexEdit/typelib/nested/deeper/leaf.h" in names


@pytest.mark.unit
def test_archive_never_contains_itself(tmp_path, source_dir):
    out = source_dir / "nested" / "release.zip"
    out.write_bytes(b"previous run")

    with ReleaseArchive.open(out) as archive:
        archive.add_path(source_dir, "HexEdit/typelib")

    names = _names(out)
    assert not any(name.endswith((".zip", ".partial")) for name in names)
    assert len(names) == 4


@pytest.mark.unit
def test_open_replaces_existing_archive(tmp_path):
    out = tmp_path / "out.zip"
    with zipfile.ZipFile(out, "w") as zf:
        zf.writestr("HexEdit/STALE.TXT", "old")

    item = tmp_path / "LICENCE.TXT"
    item.write_text("licence", encoding="utf-8")
    with ReleaseArchive.open(out) as archive:
        archive.add_path(item, "HexEdit/LICENCE.TXT")

    assert _names(out) == ["HexEdit/LICENCE.TXT"]


@pytest.mark.unit
def test_generated_entry_keeps_line_endings(tmp_path):
    out = tmp_path / "out.zip"

    with ReleaseArchive.open(out) as archive:
        archive.add_generated("HexEdit/VERSION.TXT", lambda sink: sink.write("a\r\nb\r\n"))

    with zipfile.ZipFile(out) as zf:
        assert zf.read("HexEdit/VERSION.TXT") == b"a\r\nb\r\n"


@pytest.mark.unit
def test_entries_recorded_in_write_order(tmp_path, source_dir):
    readme = tmp_path / "README.md"
    readme.write_text("x", encoding="utf-8")
    out = tmp_path / "out.zip"

    with ReleaseArchive.open(out) as archive:
        archive.add_path(readme, "HexEdit/README.TXT")
        archive.add_path(source_dir, "HexEdit/typelib", IgnoreSet(["*.git"]))
        archive.add_generated("HexEdit/VERSION.TXT", lambda sink: sink.write("v"))

    assert archive.entries == [
        "HexEdit/README.TXT",
        "HexEdit/typelib/top.tlb",
        "HexEdit/typelib/nested/mid.idl",
        "HexEdit/typelib/nested/deeper/leaf.h",
        "HexEdit/VERSION.TXT",
    ]
    assert _names(out) == archive.entries


@pytest.mark.unit
def test_missing_source_raises(tmp_path):
    out = tmp_path / "out.zip"
    with pytest.raises(SourceNotFoundError):
        with ReleaseArchive.open(out) as archive:
            archive.add_path(tmp_path / "missing", "HexEdit/missing")


@pytest.mark.unit
def test_abort_leaves_no_file(tmp_path):
    out_dir = tmp_path / "out"
    out_dir.mkdir()
    out = out_dir / "out.zip"
    out.write_bytes(b"previous run")

    with pytest.raises(RuntimeError):
        with ReleaseArchive.open(out) as archive:
            archive.add_generated("HexEdit/VERSION.TXT", lambda sink: sink.write("v"))
            raise RuntimeError("boom")

    assert archive.closed
    assert list(out_dir.iterdir()) == []


@pytest.mark.unit
def test_add_after_close_raises(tmp_path):
    archive = ReleaseArchive.open(tmp_path / "out.zip")
    archive.close()

    with pytest.raises(ValueError):
        archive.add_generated("HexEdit/VERSION.TXT", lambda sink: sink.write("v"))
    with pytest.raises(ValueError):
        archive.close()


@pytest.mark.unit
def test_close_returns_valid_archive(tmp_path):
    out = tmp_path / "out.zip"
    archive = ReleaseArchive.open(out)
    archive.add_generated("HexEdit/VERSION.TXT", lambda sink: sink.write("v"))

    assert archive.close() == out
    with zipfile.ZipFile(out) as zf:
        assert zf.testzip() is None


@pytest.mark.unit
def test_open_in_missing_directory_raises(tmp_path):
    with pytest.raises(PackagingIOError):
        ReleaseArchive.open(tmp_path / "no" / "such" / "dir" / "out.zip")


@pytest.mark.unit
def test_file_dated_before_1980_is_added(tmp_path):
    item = tmp_path / "README.md"
    item.write_text("epoch", encoding="utf-8")
    os.utime(item, (0, 0))
    out = tmp_path / "out.zip"

    with ReleaseArchive.open(out) as archive:
        archive.add_path(item, "HexEdit/README.TXT")

    with zipfile.ZipFile(out) as zf:
        info = zf.getinfo("HexEdit/README.TXT")
        assert info.date_time[0] == 1980
        assert zf.read("HexEdit/README.TXT") == b"epoch"
