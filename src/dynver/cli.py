"""CLI app definition and command registration."""

from datetime import datetime
from typing import Annotated

import typer
from rich.table import Table

from dynver.checks import DynVerCheckError, assert_tag_version, assert_version
from dynver.config import (
    DEFAULT_SEPARATOR,
    DEFAULT_SONATYPE_SNAPSHOTS,
    SEPARATOR_ENV_VAR,
    SONATYPE_ENV_VAR,
    DynVerConfig,
)
from dynver.engine import DynVer
from dynver.git_helpers import run_git
from dynver.utils import console, err_console, set_verbose
from dynver.version import get_version

DirOption = Annotated[
    str, typer.Option("--dir", "-C", help="Directory to run git in (default: current directory)")
]
SeparatorOption = Annotated[
    str,
    typer.Option(
        envvar=SEPARATOR_ENV_VAR,
        help="Separator between tag and distance, and before a dirty timestamp",
    ),
]
SonatypeOption = Annotated[
    bool,
    typer.Option(
        "--sonatype/--no-sonatype",
        envvar=SONATYPE_ENV_VAR,
        help="Append -SNAPSHOT to snapshot versions",
    ),
]


def _make_engine(directory: str, separator: str, sonatype: bool) -> DynVer:
    config = DynVerConfig(wd=directory or None, separator=separator, sonatype_snapshots=sonatype)
    return DynVer.from_config(config, runner=run_git)


def _print_value(value: str) -> None:
    console.print(value, highlight=False, soft_wrap=True, markup=False)


def _version_callback(value: bool):
    if value:
        _print_value(get_version())
        raise typer.Exit()


app = typer.Typer(
    help="Derive a version string for a source tree from its git history.",
    no_args_is_help=True,
)


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-V", help="Show version and exit.", callback=_version_callback, is_eager=True),
    ] = False,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Log git failures and parse problems to stderr.")
    ] = False,
) -> None:
    """Derive a version string from git describe."""
    set_verbose(verbose)


# ============================================
# Commands
# ============================================


@app.command("version")
def show_version(
    directory: DirOption = "",
    separator: SeparatorOption = DEFAULT_SEPARATOR,
    sonatype: SonatypeOption = DEFAULT_SONATYPE_SNAPSHOTS,
) -> None:
    """Print the version derived from the current checkout."""
    engine = _make_engine(directory, separator, sonatype)
    _print_value(engine.resolved_version(datetime.now()))


@app.command()
def info(
    directory: DirOption = "",
    separator: SeparatorOption = DEFAULT_SEPARATOR,
) -> None:
    """Show the version and every classification for the current checkout."""
    engine = _make_engine(directory, separator, False)
    now = datetime.now()

    table = Table(show_header=False, box=None)
    table.add_column(style="bold cyan")
    table.add_column()
    table.add_row("version", engine.version(now))
    table.add_row("sonatype version", engine.sonatype_version(now))
    table.add_row("snapshot", str(engine.is_snapshot(now)).lower())
    table.add_row("stable", str(engine.is_version_stable(now)).lower())
    table.add_row("dirty", str(engine.is_dirty(now)).lower())
    table.add_row("no tags", str(engine.has_no_tags(now)).lower())
    table.add_row("previous version", engine.previous_version() or "-")
    distance = engine.distance_to_root_commit()
    table.add_row("distance to root", "-" if distance is None else str(distance))
    console.print(table)


@app.command()
def previous(directory: DirOption = "") -> None:
    """Print the last stable version visible from the parent of HEAD."""
    engine = _make_engine(directory, DEFAULT_SEPARATOR, False)
    prev = engine.previous_version()
    if prev is None:
        err_console.print("No previous stable version found.", style="yellow")
        raise typer.Exit(code=1)
    _print_value(prev)


@app.command()
def distance(directory: DirOption = "") -> None:
    """Print the number of commits from HEAD down to the root commit."""
    engine = _make_engine(directory, DEFAULT_SEPARATOR, False)
    count = engine.distance_to_root_commit()
    if count is None:
        err_console.print("Could not count commits (not a git repository?).", style="yellow")
        raise typer.Exit(code=1)
    _print_value(str(count))


@app.command()
def check(
    expected: Annotated[str, typer.Argument(help="The version recorded by the build")],
    directory: DirOption = "",
    separator: SeparatorOption = DEFAULT_SEPARATOR,
    sonatype: SonatypeOption = DEFAULT_SONATYPE_SNAPSHOTS,
) -> None:
    """Exit non-zero unless EXPECTED equals the derived version."""
    engine = _make_engine(directory, separator, sonatype)
    try:
        assert_version(expected, engine.resolved_version(datetime.now()))
    except DynVerCheckError as exc:
        err_console.print(f"ERROR: {exc}", style="bold red", markup=False, soft_wrap=True)
        raise typer.Exit(code=1)


@app.command("assert-tag")
def assert_tag(
    directory: DirOption = "",
    separator: SeparatorOption = DEFAULT_SEPARATOR,
    sonatype: SonatypeOption = DEFAULT_SONATYPE_SNAPSHOTS,
) -> None:
    """Exit non-zero when the version is not derived from a git tag."""
    engine = _make_engine(directory, separator, sonatype)
    now = datetime.now()
    output = engine.git_describe_output(now)
    try:
        assert_tag_version(output, engine.resolved_version(now))
    except DynVerCheckError as exc:
        err_console.print(f"ERROR: {exc}", style="bold red", markup=False, soft_wrap=True)
        raise typer.Exit(code=1)
