"""Traversal and output configuration."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(slots=True)
class TraversalConfig:
    recursive: bool = False
    hidden: bool = False

    def resolve_parent(self, pattern: str, base_dir: Path | None = None) -> Path:
        """Directory that relative output paths are computed from.

        An existing directory pattern is its own parent; anything else (a glob,
        a missing path) falls back to ``base_dir`` or the working directory.
        """
        base = base_dir if base_dir is not None else Path.cwd()
        candidate = Path(pattern)
        if not candidate.is_absolute():
            candidate = base / candidate
        if candidate.is_dir():
            return candidate.resolve()
        return base.resolve()


@dataclass(slots=True)
class OutputConfig:
    absolute: bool = False
    score: bool = False
    long: bool = False
    stats: bool = False
    strats: bool = False
    echo: bool = False
