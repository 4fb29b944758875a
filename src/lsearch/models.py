"""Core lsearch data models."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class Entry:
    """One filesystem object seen by the pipeline."""

    path: Path

    @property
    def name(self) -> str:
        # The filesystem root has no final component
        return self.path.name or str(self.path)

    @property
    def is_dir(self) -> bool:
        return self.path.is_dir()

    def metadata(self) -> os.stat_result:
        """Stat the entry on demand; nothing is cached."""
        return self.path.stat()


@dataclass(frozen=True, slots=True)
class ScoredEntry:
    """Entry paired with the score it earned in the latest stage."""

    score: float
    entry: Entry
