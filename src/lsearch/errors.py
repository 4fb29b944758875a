"""Exception types raised by lsearch."""

from __future__ import annotations

from pathlib import Path


class LsearchError(Exception):
    """Base class for all lsearch failures."""


class ConfigurationError(LsearchError):
    """The requested stages cannot be built from the given arguments."""


class LoadError(LsearchError):
    """Content for a single entry could not be extracted or inspected."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class ScorerError(LsearchError):
    """A scorer could not inspect the content it was given."""
