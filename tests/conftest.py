"""Shared fixtures: synthetic executables and release trees."""

from pathlib import Path
from typing import Dict, Optional

import pytest
from loguru import logger

from version_blocks import HEXEDIT_STRINGS, write_executable


@pytest.fixture(autouse=True)
def _reset_logger():
    """Drop sinks added by a test so they never outlive its captured streams."""
    yield
    logger.remove()


@pytest.fixture
def make_executable(tmp_path):
    """Factory writing fake executables under tmp_path."""

    def _make(name: str = "HexEdit.exe", strings: Optional[Dict[str, str]] = HEXEDIT_STRINGS) -> Path:
        return write_executable(tmp_path / name, strings)

    return _make


@pytest.fixture
def release_tree(tmp_path):
    """
    Project checkout with both platform builds, run from build/.

    Layout:
        README.md, LICENCE.TXT
        bin/x86/Release/HexEdit.exe      (FileVersion 2.5.1.0)
        bin/amd64/Release/HexEdit.exe    (FileVersion 2.5.1.0)
        bin/typelib/...                  (includes .git noise)
        build/
    """
    root = tmp_path / "hexedit"
    (root / "build").mkdir(parents=True)
    (root / "README.md").write_text("# HexEdit\n", encoding="utf-8")
    (root / "LICENCE.TXT").write_text("MIT licence\n", encoding="utf-8")

    for platform in ("x86", "amd64"):
        write_executable(root / "bin" / platform / "Release" / "HexEdit.exe", HEXEDIT_STRINGS)

    typelib = root / "bin" / "typelib"
    (typelib / "plugins").mkdir(parents=True)
    (typelib / ".git").mkdir()
    (typelib / "HexEdit.tlb").write_bytes(b"MSFT\x02\x00\x01\x00")
    (typelib / "HexEdit.idl").write_text("library HexEditLib {};\n", encoding="utf-8")
    (typelib / "plugins" / "plugin.idl").write_text("interface IPlugin;\n", encoding="utf-8")
    (typelib / "notes.git").write_text("scratch\n", encoding="utf-8")
    (typelib / ".git" / "config").write_text("[core]\n", encoding="utf-8")

    return root
