"""
Integration tests for the buildzip command line.
"""

import zipfile

import pytest
from typer.testing import CliRunner

from hexpack.cli import app
from hexpack.contexts.versioning import PortableVersionReader

runner = CliRunner()


@pytest.fixture
def in_build_dir(release_tree, monkeypatch):
    """Run from <checkout>/build with default conventions and no env overrides."""
    build_dir = release_tree / "build"
    monkeypatch.chdir(build_dir)
    monkeypatch.setattr("hexpack.contexts.packaging.config.HEXPACK_CONFIG", None)
    monkeypatch.setattr("hexpack.contexts.packaging.config.HEXPACK_ROOT", None)
    monkeypatch.setattr("hexpack.contexts.packaging.config.HEXPACK_OUT_DIR", None)
    monkeypatch.setattr(
        "hexpack.contexts.versioning.resolver.default_reader", PortableVersionReader
    )
    return build_dir


@pytest.mark.integration
def test_no_platform_prints_usage(in_build_dir):
    result = runner.invoke(app, [])

    assert result.exit_code == 0
    assert "Usage: buildzip <x86|amd64>" in result.output
    assert list(in_build_dir.iterdir()) == []


@pytest.mark.integration
def test_unknown_platform_prints_usage(in_build_dir):
    result = runner.invoke(app, ["arm64"])

    assert result.exit_code == 1
    assert "Usage: buildzip <x86|amd64>" in result.output
    assert not (in_build_dir / "out").exists()
    assert list(in_build_dir.iterdir()) == []


@pytest.mark.integration
def test_x86_build(in_build_dir):
    result = runner.invoke(app, ["x86"])

    assert result.exit_code == 0, result.output
    archive = in_build_dir / "out" / "hexedit-x86-2.5.1.0.zip"
    assert archive.exists()
    assert "Packaged x86" in result.output
    assert f"{archive.stat().st_size} bytes" in result.output
    with zipfile.ZipFile(archive) as zf:
        assert "HexEdit/VERSION.TXT" in zf.namelist()


@pytest.mark.integration
def test_missing_build_reports_error(in_build_dir, release_tree):
    (release_tree / "bin" / "amd64" / "Release" / "HexEdit.exe").unlink()

    result = runner.invoke(app, ["amd64"])

    assert result.exit_code == 1
    assert not (in_build_dir / "out").exists()
