"""Printing ranked entries, stage summaries and statistics."""

from __future__ import annotations

import stat
from datetime import datetime
from pathlib import Path
from typing import Sequence

from rich.columns import Columns
from rich.console import Console
from rich.text import Text

from lsearch.config import OutputConfig
from lsearch.models import Entry, ScoredEntry
from lsearch.pipeline.stage import Stage

try:
    import grp
    import pwd
except ImportError:
    # Windows doesn't have pwd/grp modules
    pwd = None
    grp = None

DIRECTORY_STYLE = "green"


def display_path(entry: Entry, parent: Path, absolute: bool) -> str:
    if absolute:
        return str(entry.path)
    if entry.path == parent:
        return "."
    try:
        return str(entry.path.relative_to(parent))
    except ValueError:
        return str(entry.path)


def owner_name(uid: int) -> str:
    if pwd is None:
        return str(uid)
    try:
        return pwd.getpwuid(uid).pw_name
    except KeyError:
        return str(uid)


def group_name(gid: int) -> str:
    if grp is None:
        return str(gid)
    try:
        return grp.getgrgid(gid).gr_name
    except KeyError:
        return str(gid)


def format_long(entry: Entry, path_text: str) -> str:
    """``ls -l`` style line: mode, owner, group, modification time, path."""
    meta = entry.metadata()
    modified = datetime.fromtimestamp(meta.st_mtime).strftime("%b %d %H:%M")
    return (
        f"{stat.filemode(meta.st_mode)} {owner_name(meta.st_uid)} "
        f"{group_name(meta.st_gid)} {modified} {path_text}"
    )


def format_number(score: float) -> str:
    """Whole scores print without a fractional part: ``3`` rather than ``3.0``."""
    return str(int(score)) if score.is_integer() else str(score)


def format_score(score: float, path_text: str) -> str:
    return f"[{format_number(score)}] {path_text}"


def print_entries(
    console: Console,
    results: Sequence[ScoredEntry],
    parent: Path,
    output: OutputConfig,
) -> None:
    if output.long or output.score:
        _linear_print(console, results, parent, output)
    else:
        _grid_print(console, results, parent, output)


def _linear_print(
    console: Console,
    results: Sequence[ScoredEntry],
    parent: Path,
    output: OutputConfig,
) -> None:
    for result in results:
        path_text = display_path(result.entry, parent, output.absolute)
        if output.score:
            line = format_score(result.score, path_text)
        else:
            try:
                line = format_long(result.entry, path_text)
            except FileNotFoundError:
                # Removed between the pipeline run and printing
                continue
        console.print(line, markup=False, soft_wrap=True, highlight=False)


def _grid_print(
    console: Console,
    results: Sequence[ScoredEntry],
    parent: Path,
    output: OutputConfig,
) -> None:
    if not results:
        return
    cells = []
    for result in results:
        path_text = display_path(result.entry, parent, output.absolute)
        style = DIRECTORY_STYLE if result.entry.is_dir else ""
        cells.append(Text(path_text, style=style))
    console.print(Columns(cells, padding=(0, 5)))


def summarize_stages(console: Console, stages: Sequence[Stage]) -> None:
    """Describe the stages that are about to run."""
    console.print("Summarizing Operational Runs:", markup=False, highlight=False)
    for stage in stages:
        console.print(
            f"{stage.name} [insensitive={str(stage.case_insensitive).lower()}]",
            markup=False,
            highlight=False,
        )
        for spec in stage.scorers:
            console.print(f"\t{spec.key}", markup=False, highlight=False)
    if not stages:
        console.print("\tNo operational runs", markup=False, highlight=False)
