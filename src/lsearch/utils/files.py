"""Utility helpers for finding the entries to inspect."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Iterator

from lsearch.config import TraversalConfig
from lsearch.models import Entry

LOGGER = logging.getLogger(__name__)


def is_hidden(path: Path) -> bool:
    return path.name.startswith(".")


def _candidate_paths(pattern: str, config: TraversalConfig, base_dir: Path) -> Iterable[Path]:
    root = Path(pattern)
    if not root.is_absolute():
        root = base_dir / root

    if root.is_dir():
        return root.rglob("*") if config.recursive else root.iterdir()

    # pathlib globbing matches dot-files; hiding them is left to the caller
    relative = Path(pattern)
    if relative.is_absolute():
        anchor = Path(relative.anchor)
        relative = relative.relative_to(anchor)
    else:
        anchor = base_dir
    if config.recursive:
        relative = relative.parent / "**" / relative.name
    matches = list(anchor.glob(relative.as_posix()))
    if not matches and root.exists():
        return [root]
    return matches


def iter_entries(
    pattern: str, config: TraversalConfig, base_dir: Path | None = None
) -> Iterator[Entry]:
    """Yield entries matching ``pattern`` in sorted path order.

    A directory pattern lists its children (all descendants when recursive);
    anything else is treated as a glob. Names starting with ``.`` are skipped
    unless ``config.hidden`` is set.
    """
    base = base_dir if base_dir is not None else Path.cwd()
    paths = sorted(
        {
            path.resolve()
            for path in _candidate_paths(pattern, config, base)
            if config.hidden or not is_hidden(path)
        }
    )
    if not paths:
        LOGGER.warning("No matches found: %s", pattern)
    for path in paths:
        yield Entry(path)
