"""Command line interface for lsearch."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console

from lsearch import __version__
from lsearch.config import OutputConfig, TraversalConfig
from lsearch.errors import ConfigurationError
from lsearch.pipeline.executor import Pipeline
from lsearch.pipeline.parser import parse_stages
from lsearch.pipeline.stats import RunStatistics
from lsearch.render import print_entries, summarize_stages
from lsearch.utils.files import iter_entries

console = Console()
app = typer.Typer(help="lsearch - list files ranked by a chain of content checks")

STAGE_HELP = (
    "Stage options: -T/--content-title, -P/--content-path, -E/--content-ext, "
    "-t/--content-text, -C/--content-exec CMD, -i/--insensitive, -e/--is X, "
    "-n/--not X, -h/--has X, -H/--hasnt X, -m/--more X, -x/--exec CMD. "
    "Values starting with '-' must be attached with '=', e.g. --hasnt=-l."
)


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"lsearch {__version__}")
        raise typer.Exit()


def _split_pattern(pattern: str, stage_args: List[str]) -> tuple[str, List[str]]:
    """A leading stage option means no pattern was given."""
    if pattern.startswith("-") and len(pattern) > 1:
        return ".", [pattern, *stage_args]
    return pattern, stage_args


@app.command(
    context_settings={"ignore_unknown_options": True, "allow_extra_args": True},
    epilog=STAGE_HELP,
)
def search(
    pattern: str = typer.Argument(".", help="Directory or glob to list."),
    stage_args: Optional[List[str]] = typer.Argument(
        None, metavar="[STAGES]...", help="Content stages to narrow and rank by."
    ),
    recursive: bool = typer.Option(False, "--recursive", "-r", help="Descend into subdirectories"),
    hidden: bool = typer.Option(False, "--hidden", "-a", help="Include entries starting with '.'"),
    absolute: bool = typer.Option(False, "--absolute", "-A", help="Print absolute paths"),
    long: bool = typer.Option(False, "--long", "-l", help="Long listing with permissions"),
    score: bool = typer.Option(False, "--score", help="Print each entry's score"),
    stats: bool = typer.Option(False, "--stats", help="Print operational statistics"),
    strats: bool = typer.Option(False, "--strats", help="Print the stages before running"),
    echo: bool = typer.Option(False, "--echo", help="Print the pattern being listed"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback, is_eager=True, help="Show version"
    ),
) -> None:
    """List entries matching PATTERN, filtered and ranked by content stages."""
    _setup_logging(verbose)
    pattern, stage_args = _split_pattern(pattern, list(stage_args or []))

    try:
        stages = parse_stages(stage_args)
    except ConfigurationError as exc:
        raise typer.BadParameter(str(exc)) from exc

    traversal = TraversalConfig(recursive=recursive, hidden=hidden)
    output = OutputConfig(
        absolute=absolute, score=score, long=long, stats=stats, strats=strats, echo=echo
    )
    pipeline = Pipeline(stages)

    if output.echo:
        console.print(f"\tls {pattern!r}", markup=False, highlight=False)
    if output.strats:
        summarize_stages(console, pipeline.stages)

    base_dir = Path.cwd()
    run_stats = RunStatistics() if output.stats else None
    results = pipeline.run(iter_entries(pattern, traversal, base_dir), stats=run_stats)

    print_entries(console, results, traversal.resolve_parent(pattern, base_dir), output)

    if run_stats is not None:
        console.print(run_stats.report(), markup=False, highlight=False)
