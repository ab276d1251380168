#!/usr/bin/env python3
"""
Release Packaging CLI

Packages a HexEdit platform build into out/hexedit-<platform>-<version>.zip.
Run from the repository's build/ directory.

Examples:\n

    buildzip x86      # Package bin/x86/Release/HexEdit.exe

    buildzip amd64    # Package bin/amd64/Release/HexEdit.exe
"""

from typing import Optional

import typer
from typing_extensions import Annotated

from hexpack.contexts.packaging import build_release, parse_platform, platform_choices
from hexpack.utils.exceptions import PackagingError, UnknownPlatformError
from hexpack.utils.timestamp import format_elapsed


def usage_line() -> str:
    return f"Usage: buildzip <{'|'.join(platform_choices())}>"


app = typer.Typer(
    help="Package a HexEdit build into a versioned zip archive",
    add_completion=False,
)


@app.command()
def main(
    platform: Annotated[
        Optional[str],
        typer.Argument(
            help=f"Platform to package ({', '.join(platform_choices())})",
            show_default=False,
        ),
    ] = None,
):
    """
    Package one platform build.

    Reads the version from the platform's HexEdit.exe, then writes README,
    licence, executable, typelib directory and a VERSION.TXT manifest into
    out/hexedit-<platform>-<version>.zip.

    Examples:\n

        $ buildzip x86

        $ buildzip amd64
    """
    try:
        selected = parse_platform(platform)
    except UnknownPlatformError as e:
        if platform is not None:
            typer.secho(f"Error: {e.message}", fg=typer.colors.RED, err=True)
        typer.echo(usage_line())
        raise typer.Exit(code=0 if platform is None else 1)

    try:
        result = build_release(selected)
    except (PackagingError, OSError) as e:
        typer.secho(f"\nError: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.secho(f"✓ Packaged {selected.value}", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  Archive: {result.archive_path}")
    typer.echo(f"  Size:    {result.size_bytes} bytes")
    typer.echo(f"  Entries: {len(result.entries)}")
    typer.echo(f"  Time:    {format_elapsed(result.elapsed_s)}")
    if result.log_file:
        typer.echo(f"  Log:     {result.log_file}")
    typer.echo("")


if __name__ == "__main__":
    app()
