"""Click CLI: project parsing, cycle detection, line counting and tf pass-through."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from swetc import __version__
from swetc.analysis import ProjectIndex
from swetc.config import load_config
from swetc.discovery import count_lines_of_files, find_files
from swetc.models import MatchRule, ProjectFormat
from swetc.pipeline import run_analysis, run_index
from swetc.tools import ToolResult
from swetc import vcs

_FORMAT_CHOICES = [fmt.value for fmt in ProjectFormat]

_KIND_COLORS = {
    "exe": "green",
    "library": "magenta",
    "staticlibrary": "yellow",
}


def _property_pairs(values: tuple[str, ...]) -> dict[str, str]:
    if len(values) % 2:
        raise click.UsageError("Properties must be given as PROPERTY VALUE pairs")
    return dict(zip(values[0::2], values[1::2]))


def _match_rule(pattern: str) -> MatchRule:
    if pattern.startswith("re:"):
        return MatchRule.regex(pattern[3:])
    return MatchRule.wildcard(pattern)


def _echo_index(index: ProjectIndex) -> None:
    for file_path, info in index.projects.items():
        click.echo(click.style(file_path, fg="cyan"))
        click.echo(f"TargetName: {info.name}")
        kind = info.kind.value
        click.echo(f"TargetType: {click.style(kind, fg=_KIND_COLORS.get(kind, 'white'))}")
        click.echo("Dependencies:")
        for dep in sorted(info.dependencies):
            click.echo(f"    {dep}")
    if index.failures:
        click.echo(click.style(f"\n{len(index.failures)} file(s) could not be parsed:", fg="red"), err=True)
        for failure in index.failures:
            click.echo(f"  {failure.path}: {failure.reason}", err=True)


def _parse_in_dir(source_dir: Path, project_format: ProjectFormat, properties: tuple[str, ...], workers: int | None):
    config = load_config(
        source_dir=source_dir,
        project_format=project_format,
        properties=_property_pairs(properties),
        workers=workers,
    )
    try:
        index = run_index(config)
    except ValueError as e:
        raise click.ClickException(str(e))
    _echo_index(index)


def _echo_tool_result(result: ToolResult) -> None:
    if result.error is not None:
        raise click.ClickException(f"No {result.error.tool} found!")
    if result.stdout:
        click.echo(result.stdout, nl=False)
    if result.stderr:
        click.echo(result.stderr, nl=False, err=True)
    if result.returncode != 0:
        raise SystemExit(result.returncode)


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Log debug output")
def cli(verbose: bool):
    """swetc: software engineering tool collection."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command("line-count")
@click.option("-r", "recursive", is_flag=True, help="Recurse into subdirectories")
@click.argument("dir_path", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.argument("patterns", nargs=-1, required=True)
def line_count(recursive: bool, dir_path: Path, patterns: tuple[str, ...]):
    """Line count of files in DIR_PATH matching wildcard PATTERNS ('re:' for regex)."""
    rules = [_match_rule(p) for p in patterns]
    files = find_files(dir_path, rules, recursive=recursive)
    click.echo(count_lines_of_files(files))


_PROPERTY_HELP = "PROPERTY VALUE pairs are passed to msbuild, e.g. Platform x64."


@cli.command("parse-csproj", epilog=_PROPERTY_HELP)
@click.argument("dir_path", type=click.Path(exists=True, path_type=Path))
@click.argument("properties", nargs=-1)
@click.option("--workers", "-j", type=int, help="Parallel msbuild invocations")
def parse_csproj(dir_path: Path, properties: tuple[str, ...], workers: int | None):
    """Parse C# project files (*.csproj) in a directory or solution."""
    _parse_in_dir(dir_path, ProjectFormat.CSPROJ, properties, workers)


@cli.command("parse-vcxproj", epilog=_PROPERTY_HELP)
@click.argument("dir_path", type=click.Path(exists=True, path_type=Path))
@click.argument("properties", nargs=-1)
@click.option("--workers", "-j", type=int, help="Parallel msbuild invocations")
def parse_vcxproj(dir_path: Path, properties: tuple[str, ...], workers: int | None):
    """Parse C++ project files (*.vcxproj) in a directory or solution."""
    _parse_in_dir(dir_path, ProjectFormat.VCXPROJ, properties, workers)


@cli.command("parse-cmake")
@click.argument("dir_path", type=click.Path(exists=True, file_okay=False, path_type=Path))
def parse_cmake(dir_path: Path):
    """Parse CMakeLists.txt files in a directory."""
    _parse_in_dir(dir_path, ProjectFormat.CMAKE, (), None)


@cli.command()
@click.argument("dir_path", type=click.Path(exists=True, path_type=Path))
@click.argument("properties", nargs=-1)
@click.option("--format", "-f", "project_format", type=click.Choice(_FORMAT_CHOICES), default="cmake",
              show_default=True, help="Project file format")
@click.option("--workers", "-j", type=int, help="Parallel parser invocations")
def cycles(dir_path: Path, properties: tuple[str, ...], project_format: str, workers: int | None):
    """Report cyclic dependencies between projects.

    Exits with status 1 when any cycle is found.
    """
    config = load_config(
        source_dir=dir_path,
        project_format=ProjectFormat(project_format),
        properties=_property_pairs(properties),
        workers=workers,
    )
    try:
        result = run_analysis(config)
    except ValueError as e:
        raise click.ClickException(str(e))

    names = {path: info.name for path, info in result.index.projects.items()}
    click.echo(
        f"Analyzed {len(result.index.projects)} project(s), "
        f"{sum(len(deps) for deps in result.graph.values())} dependency edge(s)"
    )
    if result.index.failures:
        click.echo(click.style(f"{len(result.index.failures)} file(s) could not be parsed", fg="red"), err=True)

    if not result.cycles:
        click.echo("No cyclic dependencies found.")
        return

    click.echo(f"\nFound {len(result.cycles)} cyclic dependenc{'y' if len(result.cycles) == 1 else 'ies'}:\n")
    for cycle in result.cycles:
        chain = " -> ".join(names[p] for p in cycle + cycle[:1])
        click.echo(click.style(chain, fg="yellow"))
        for path in cycle:
            click.echo(f"    {path}")
        click.echo()
    raise SystemExit(1)


# ── Team Foundation pass-through ──────────────────────────────


@cli.group()
@click.option("--tf", "tf_path", help="tf executable")
@click.pass_context
def tf(ctx: click.Context, tf_path: str | None):
    """Team Foundation version control pass-through."""
    ctx.obj = load_config(tf=tf_path).tf


@tf.command()
@click.argument("file_path")
@click.pass_obj
def add(tf_exe: str, file_path: str):
    """tf add FILE_PATH"""
    _echo_tool_result(vcs.tf_add(file_path, tf=tf_exe))


@tf.command()
@click.argument("file_path")
@click.pass_obj
def checkout(tf_exe: str, file_path: str):
    """tf checkout FILE_PATH"""
    _echo_tool_result(vcs.tf_checkout(file_path, tf=tf_exe))


@tf.command()
@click.argument("source")
@click.argument("destination")
@click.pass_obj
def rename(tf_exe: str, source: str, destination: str):
    """tf rename SOURCE DESTINATION"""
    _echo_tool_result(vcs.tf_rename(source, destination, tf=tf_exe))


@tf.command()
@click.argument("file_path")
@click.pass_obj
def undo(tf_exe: str, file_path: str):
    """tf undo /noprompt FILE_PATH"""
    _echo_tool_result(vcs.tf_undo(file_path, tf=tf_exe))


def main():
    cli()


if __name__ == "__main__":
    main()
